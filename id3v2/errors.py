"""
File-level error types.

All errors inherit from FileReadError and carry the path that failed.
Errors are explicit and provide displayable messages.
"""


class FileReadError(Exception):
    """Base exception for failures reading a tag from a file."""

    def __init__(self, filepath: str, message: str):
        self.filepath = filepath
        super().__init__(message)


class TagFileNotFoundError(FileReadError):
    """Raised when the file does not exist."""

    def __init__(self, filepath: str):
        super().__init__(filepath, f"File {filepath} not found")


class MissingReadPermissionsError(FileReadError):
    """Raised when the file cannot be opened for reading."""

    def __init__(self, filepath: str):
        super().__init__(filepath, f"Missing read permission on file {filepath}")


class FileSystemError(FileReadError):
    """Raised for any other filesystem failure."""

    def __init__(self, filepath: str, reason: str):
        self.reason = reason
        super().__init__(filepath, f"Could not open file {filepath}: {reason}")


class TagReadingError(FileReadError):
    """Raised when the file opened but its tag could not be decoded."""

    def __init__(self, filepath: str, cause: Exception):
        self.cause = cause
        super().__init__(
            filepath,
            f"While reading file {filepath}, error parsing its ID3v2 tag: {cause}",
        )
