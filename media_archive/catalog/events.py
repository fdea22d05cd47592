"""
Blob cleanup tied to the session lifecycle.

Deleting a ``Media`` row must delete its blob, but only once the deletion is
committed. Locations are captured at flush time, while the row's id and
file name are still loaded, and the blobs are removed after commit.
"""

import logging
from typing import Any, List, Tuple

from sqlalchemy import event
from sqlalchemy.orm import Session

from media_archive.catalog.models import Media
from media_archive.storage.adapter import StorageError
from media_archive.storage.media_files import MediaFilesystem

logger = logging.getLogger(__name__)

PENDING_KEY = "media_archive.pending_blob_deletes"
WRITTEN_KEY = "media_archive.written_blobs"


def _pending(session: Session) -> List[Tuple[str, str]]:
    return session.info.setdefault(PENDING_KEY, [])


def record_written(session: Session, location: Tuple[str, str]) -> None:
    """
    Mark a (disk, path) as written in this session.

    A blob written in the same transaction is never removed on commit, even
    when a row deleted earlier in the transaction resolved to the same path.
    """
    session.info.setdefault(WRITTEN_KEY, set()).add(location)


def register_blob_cleanup(target: Any, files: MediaFilesystem) -> None:
    """
    Attach blob cleanup to a ``Session`` instance or a ``sessionmaker``.

    Args:
        target: Session or session factory to listen on
        files: Media filesystem used to compute and remove locations
    """

    def after_flush(session: Session, flush_context) -> None:
        for obj in session.deleted:
            if isinstance(obj, Media):
                _pending(session).append(files.locate(obj))

    def after_commit(session: Session) -> None:
        locations = session.info.pop(PENDING_KEY, [])
        written = session.info.pop(WRITTEN_KEY, set())
        for disk, path in locations:
            if (disk, path) in written:
                logger.debug(f"Keeping blob {disk}:{path} rewritten in this transaction")
                continue
            try:
                files.remove(disk, path)
                logger.info(f"Removed blob {disk}:{path}")
            except StorageError as e:
                # The row is gone already; keep removing the rest
                logger.error(f"Failed to remove blob {disk}:{path}: {e}")

    def after_rollback(session: Session) -> None:
        session.info.pop(PENDING_KEY, None)
        session.info.pop(WRITTEN_KEY, None)

    event.listen(target, "after_flush", after_flush)
    event.listen(target, "after_commit", after_commit)
    event.listen(target, "after_rollback", after_rollback)
