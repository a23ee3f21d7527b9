"""
audioex.exceptions - Custom exception classes.

All audioex-specific exceptions inherit from AudioexError.
"""


class AudioexError(Exception):
    """Base exception for all audioex errors."""

    pass


class ConfigError(AudioexError):
    """Configuration loading or validation error."""

    pass


class ValidationError(AudioexError):
    """Input or argument validation error."""

    pass


class InputNotFoundError(ValidationError):
    """Input container does not exist or is not a regular file."""

    pass


class InvalidStreamSelectorError(ValidationError):
    """Stream number given on the command line is not a non-negative integer."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Stream number must be a non-negative integer, got '{value}'")


class StreamOutOfRangeError(ValidationError):
    """Requested stream ordinal is beyond the probed stream count."""

    def __init__(self, ordinal: int, stream_count: int):
        self.ordinal = ordinal
        self.stream_count = stream_count
        super().__init__(
            f"Stream {ordinal} does not exist. Available streams: 0-{stream_count - 1}"
        )


class ProbeError(AudioexError):
    """ffprobe could not be run or returned unusable output."""

    pass


class NoStreamsError(ProbeError):
    """Container has no audio streams."""

    pass


class ExtractionError(AudioexError):
    """Audio extraction error."""

    pass


class DependencyError(AudioexError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
