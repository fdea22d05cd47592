"""
Abstract base class for disk backends.

Every configured disk (local directory, S3 bucket, ...) is served by one
adapter addressing files by a relative, slash-separated path.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, BinaryIO, Dict, Optional


class StorageError(Exception):
    """Exception raised for storage-related errors."""
    pass


class BlobWriteError(StorageError):
    """Raised when bytes could not be written to a disk."""
    pass


class StorageAdapter(ABC):
    """
    Abstract base class for disk backends.

    All disk implementations (filesystem, S3, etc.) must implement
    these methods to provide a consistent interface.
    """

    @abstractmethod
    def put(self, path: str, stream: BinaryIO) -> bool:
        """
        Write a stream to the disk, replacing any existing file.

        Args:
            path: Relative path on the disk (e.g., 'media/12/avatar.png')
            stream: Binary file-like object to read from

        Returns:
            True when the write succeeded

        Raises:
            BlobWriteError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """
        Delete a file. Deleting a missing file is not an error.

        Args:
            path: Relative path on the disk

        Returns:
            True once the file is gone

        Raises:
            StorageError: If deletion fails
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """
        Check if a file exists.

        Args:
            path: Relative path on the disk

        Returns:
            True if file exists, False otherwise
        """
        pass

    @abstractmethod
    def retrieve(self, path: str) -> BinaryIO:
        """
        Retrieve a file.

        Args:
            path: Relative path on the disk

        Returns:
            File-like object

        Raises:
            StorageError: If file not found or retrieval fails
        """
        pass

    @abstractmethod
    def url(self, path: str) -> str:
        """
        Public URL of a file.

        Raises:
            StorageError: If the disk cannot produce URLs
        """
        pass

    @abstractmethod
    def temporary_url(
        self,
        path: str,
        expiration: datetime,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Time-limited URL of a file.

        Args:
            path: Relative path on the disk
            expiration: Moment the URL stops working
            options: Driver-specific options, passed through uninterpreted

        Raises:
            StorageError: If the disk does not support temporary URLs
        """
        pass
