"""
Ghost Cache - Storage Adapter Interface

Defines the abstract contract that all persistent storage adapters must implement.
The cache core only needs four asynchronous operations on string-valued records.
"""

from abc import ABC, abstractmethod


class StorageAdapter(ABC):
    """
    Abstract base class for persistent storage adapters.

    Values are opaque strings; the cache core owns their encoding. Adapters
    raise StorageError when the backend fails so callers can decide whether
    the failure is fatal for their call path.
    """

    #: Short backend name used in logs and error details
    name: str = "storage"

    @abstractmethod
    async def read(self, key: str) -> str | None:
        """
        Read a stored record.

        Args:
            key: Record key

        Returns:
            Stored string, or None if the key is absent
        """

    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        """
        Store a record, replacing any existing value.

        Args:
            key: Record key
            value: Serialized record
        """

    @abstractmethod
    async def remove(self, key: str) -> None:
        """
        Remove a record. Removing an absent key is not an error.

        Args:
            key: Record key
        """

    @abstractmethod
    async def clear(self) -> None:
        """Remove every record owned by this adapter."""

    async def close(self) -> None:
        """
        Release backend resources.

        Default implementation does nothing. Adapters holding connections
        or file handles should override.
        """
        return None
