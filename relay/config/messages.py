"""Client-facing error strings.

These are sent verbatim inside ``{"type": "error", "error": ...}`` frames or
HTTP error bodies. The browser matches on some of them, so keep them stable.
"""

# HTTP / handshake
AUTH_REQUIRED = "Authentication required"
TOO_MANY_CONNECTIONS = "Too many concurrent connections from your IP address"
ORIGIN_NOT_ALLOWED = "Origin not allowed"
INVALID_REQUEST = "Invalid request"
VERIFICATION_FAILED = "Verification failed"
TOKEN_GENERATION_FAILED = "Token generation failed"

# Per-message
RATE_LIMITED = "Rate limit exceeded. Please wait before sending another message."
MESSAGE_LENGTH = "Message must be between {min_length} and {max_length} characters"
MESSAGE_EMPTY = "Message cannot be empty"
INVALID_MESSAGE_TYPE = "Invalid message type"
INVALID_MESSAGE_FORMAT = "Invalid message format"
RESPONSE_IN_PROGRESS = "Please wait for the current response to finish"

# Upstream
UPSTREAM_CONNECT_FAILED = "Failed to connect to AI service"
UPSTREAM_CONFIGURE_FAILED = "Failed to configure AI session"
UPSTREAM_SEND_FAILED = "Failed to send message"
UPSTREAM_RESPONSE_FAILED = "Failed to request response"
GENERATION_FAILED = "Failed to generate response"

# Persona fallback when no prompt file can be read
SYSTEM_PROMPT_REFUSAL = (
    "Apologize that you were unable to load persona instructions. Refuse to answer any questions."
)


__all__ = [
    "AUTH_REQUIRED",
    "TOO_MANY_CONNECTIONS",
    "ORIGIN_NOT_ALLOWED",
    "INVALID_REQUEST",
    "VERIFICATION_FAILED",
    "TOKEN_GENERATION_FAILED",
    "RATE_LIMITED",
    "MESSAGE_LENGTH",
    "MESSAGE_EMPTY",
    "INVALID_MESSAGE_TYPE",
    "INVALID_MESSAGE_FORMAT",
    "RESPONSE_IN_PROGRESS",
    "UPSTREAM_CONNECT_FAILED",
    "UPSTREAM_CONFIGURE_FAILED",
    "UPSTREAM_SEND_FAILED",
    "UPSTREAM_RESPONSE_FAILED",
    "GENERATION_FAILED",
    "SYSTEM_PROMPT_REFUSAL",
]
