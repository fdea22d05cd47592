"""
Normalizes the inputs ``MediaAdder.set_file`` accepts into a local file.

Accepted inputs:
- a filesystem path (``str`` or ``os.PathLike``)
- an uploaded file (``fastapi.UploadFile``), spooled to a temporary file
- an open file object whose ``name`` is a path on disk
"""

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import UploadFile


@dataclass(frozen=True)
class SourceFile:
    """Local file to ingest plus the name the client knows it by."""
    path: Path
    original_name: str
    temporary: bool = False

    @property
    def file_name(self) -> str:
        return Path(self.original_name).name

    @property
    def media_name(self) -> str:
        return Path(self.original_name).stem

    def discard(self) -> None:
        """Remove the spooled copy of an upload."""
        if self.temporary:
            self.path.unlink(missing_ok=True)


def _spool_upload(upload: UploadFile) -> SourceFile:
    original_name = upload.filename or "upload"
    suffix = Path(original_name).suffix
    upload.file.seek(0)
    with tempfile.NamedTemporaryFile(
        prefix="archive-", suffix=suffix, delete=False
    ) as tmp:
        shutil.copyfileobj(upload.file, tmp)
    return SourceFile(Path(tmp.name), original_name, temporary=True)


def resolve_source(file: Any) -> SourceFile:
    """
    Collapse a supported input into a ``SourceFile``.

    Raises:
        TypeError: If the input type is not supported
    """
    if isinstance(file, (str, os.PathLike)):
        path = Path(file)
        return SourceFile(path, path.name)

    if isinstance(file, UploadFile):
        return _spool_upload(file)

    name = getattr(file, "name", None)
    if isinstance(name, (str, os.PathLike)):
        path = Path(name)
        return SourceFile(path, path.name)

    raise TypeError(
        f"Unsupported file type {type(file).__name__}; expected a path, "
        "an UploadFile or an open file with a name"
    )
