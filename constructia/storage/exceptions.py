class StorageError(Exception):
    """Raised when a file storage operation fails."""


class StorageNotFoundError(StorageError):
    """Raised when the requested object does not exist."""
