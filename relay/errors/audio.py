"""Audio container exceptions."""


class MalformedContainerError(ValueError):
    """Raised when bytes are not a usable RIFF/WAVE container."""


class UnsupportedAudioFormatError(MalformedContainerError):
    """Raised when a WAV container is well formed but not 16-bit PCM.

    Attributes:
        bits_per_sample: Bit depth declared by the ``fmt `` chunk.
    """

    def __init__(self, bits_per_sample: int) -> None:
        super().__init__(f"unsupported bit depth: {bits_per_sample} (need 16)")
        self.bits_per_sample = bits_per_sample


__all__ = ["MalformedContainerError", "UnsupportedAudioFormatError"]
