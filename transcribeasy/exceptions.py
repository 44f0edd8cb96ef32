"""Custom Exceptions for the Transcribeasy application."""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of failure categories callers can branch on."""
    INVALID_FORMAT = "invalid_format"
    IO_FAILURE = "io_failure"
    UPSTREAM_FAILURE = "upstream_failure"


class TranscribeasyError(Exception):
    """Base class for exceptions in this module."""
    kind: Optional[ErrorKind] = None

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ConfigurationError(TranscribeasyError):
    """Exception raised for errors in configuration loading or invalid parameter values."""
    kind = ErrorKind.INVALID_FORMAT


class InvalidFormatError(ConfigurationError):
    """Exception raised when the requested output format is not recognized."""

    def __init__(self, value, accepted):
        self.value = value
        self.accepted = tuple(accepted)
        quoted = ", ".join(f'"{a}"' for a in self.accepted)
        super().__init__(f"Invalid output format: {value!r}. Use one of {quoted}.")


class FileSystemError(TranscribeasyError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    kind = ErrorKind.IO_FAILURE


class OutputFileError(FileSystemError):
    """Exception raised when an output file cannot be created or written."""

    def __init__(self, path, operation: str, reason):
        self.path = str(path)
        self.operation = operation
        super().__init__(f"Failed to {operation} output file {self.path}: {reason}")


class UpstreamError(TranscribeasyError):
    """Base class for failures in the stages that feed segments to the core."""
    kind = ErrorKind.UPSTREAM_FAILURE


class AudioExtractionError(UpstreamError):
    """Exception raised for errors during audio extraction."""
    pass


class ModelLoadError(UpstreamError):
    """Exception raised when the recognition model cannot be loaded."""
    pass


class TranscriptionError(UpstreamError):
    """Exception raised for errors during transcription."""
    pass
