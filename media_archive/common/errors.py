"""
Exceptions raised while adding media to the archive.

Storage backends raise ``StorageError`` (see ``media_archive.storage.adapter``);
everything here concerns validating a file before it reaches a backend.
"""

from typing import Optional


class ArchiveError(Exception):
    """Base exception for archive operations."""
    pass


class FileDoesNotExist(ArchiveError):
    """The source path does not point at an existing regular file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File does not exist at path: {path}")


class FileTooLarge(ArchiveError, ValueError):
    """The source file is bigger than the configured maximum size."""

    def __init__(self, path: str, size: int, max_size: int):
        self.path = path
        self.size = size
        self.max_size = max_size
        size_mb = round(size / 1024 / 1024, 2)
        max_mb = round(max_size / 1024 / 1024, 2)
        super().__init__(
            f'File at path "{path}" exceeds maximum size. '
            f"File size: {size_mb}MB, Maximum: {max_mb}MB"
        )


class UnsafeFileName(ArchiveError, ValueError):
    """The sanitized file name ends with an executable script extension."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"PHP files are not allowed: {file_name}")


class DiskNotConfigured(ArchiveError, ValueError):
    """A disk name is missing from the disks configuration."""

    def __init__(self, disk: str):
        self.disk = disk
        super().__init__(f"Disk '{disk}' does not exist in filesystem configuration.")


class CuratorNotAllowed(ArchiveError, ValueError):
    """The collection is restricted to another curator type."""

    def __init__(self, collection: str, expected: str, actual: Optional[str]):
        self.collection = collection
        self.expected = expected
        self.actual = actual
        owner = actual if actual is not None else "an anonymous record"
        super().__init__(
            f"Collection '{collection}' is curated by {expected}, got {owner}."
        )
