"""Custom exceptions for fit archiver."""

from enum import Enum
from typing import Optional


class FitArchiverError(Exception):
    """Base exception for fit archiver errors."""
    pass


class FileAccessError(FitArchiverError):
    """Raised when an activity file cannot be opened or read."""
    pass


class ParseErrorKind(Enum):
    """Reasons a FIT file could not be turned into activity data."""
    MALFORMED = "malformed"
    UNEXPECTED_FIELD_TYPE = "unexpected_field_type"


class ParseError(FitArchiverError):
    """Raised when the decoder rejects a file or a fatal field has the wrong type."""

    def __init__(self, message: str, kind: ParseErrorKind = ParseErrorKind.MALFORMED):
        super().__init__(message)
        self.kind = kind


class FieldTypeError(FitArchiverError):
    """A record field carried a value of an unexpected type."""

    def __init__(self, field_name: str, value, source: Optional[str] = None):
        self.field_name = field_name
        self.value = value
        self.source = source
        location = f" in '{source}'" if source else ""
        super().__init__(
            f"Unexpected value '{value}' ({type(value).__name__}) "
            f"for field '{field_name}'{location}"
        )


class ArchiveErrorKind(Enum):
    """Failure points of the archive operation."""
    NOT_A_DIRECTORY = "not_a_directory"
    DIRECTORY_CREATE_FAILED = "directory_create_failed"
    COPY_FAILED = "copy_failed"
    REMOVE_FAILED = "remove_failed"


class ArchiveError(FitArchiverError):
    """Raised when file operations on the archive fail."""

    def __init__(self, message: str, kind: ArchiveErrorKind):
        super().__init__(message)
        self.kind = kind


class ConfigurationError(FitArchiverError):
    """Raised when there's an error in configuration."""
    pass
