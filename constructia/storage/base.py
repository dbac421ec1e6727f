from abc import ABC, abstractmethod


class BaseFileStorage(ABC):
    """Contract for document file storage adapters."""

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Return the stored bytes at path.

        Raises:
            StorageNotFoundError: if nothing is stored at path.
            StorageError: on any other failure.
        """

    @abstractmethod
    def remove(self, path: str) -> None:
        """Delete the object at path. Removing a missing object is not an error.

        Raises:
            StorageError: if the delete could not be performed.
        """

    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Store data at path, replacing any existing object.

        Raises:
            StorageError: if the upload could not be performed.
        """
