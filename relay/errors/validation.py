"""Input validation exceptions with structured error codes.

The message is the client-visible text and is sent verbatim in an error
frame, so it never contains user input or internal details.
"""


class ValidationError(Exception):
    """Structured validation failure with error code metadata.

    Attributes:
        error_code: Machine-parseable error identifier.
        message: Client-visible error description.
    """

    def __init__(self, error_code: str, message: str) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message


__all__ = ["ValidationError"]
