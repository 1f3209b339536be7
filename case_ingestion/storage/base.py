from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised when an upload cannot be written to storage."""


class BaseStorage(ABC):
    """Contract for document storage backends."""

    @abstractmethod
    def store(self, path: str, data: bytes, content_type: str) -> str:
        """Write *data* under the relative *path* and return the stored path.

        Raises:
            StorageError: on any write failure or an invalid path.
        """
