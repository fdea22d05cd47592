"""
Chainable media queries.

Wraps a ``Query[Media]`` with the filters applications use most: by
collection, curator, disk, MIME family and explicit ordering.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Query, Session

from media_archive.catalog.models import Media
from media_archive.curator import Curator

logger = logging.getLogger(__name__)


class MediaQuery:
    """
    Immutable query builder; every filter returns a new ``MediaQuery``.

    Usage:
        avatars = MediaQuery(db).curated_by(user).in_collection("avatar").all()
    """

    def __init__(self, db: Session, query: Optional[Query] = None):
        self.db = db
        self.query = query if query is not None else db.query(Media)

    def _filter(self, *criteria) -> "MediaQuery":
        return MediaQuery(self.db, self.query.filter(*criteria))

    def in_collection(self, collection: str) -> "MediaQuery":
        return self._filter(Media.collection == collection)

    def curated_by(self, curator: Curator) -> "MediaQuery":
        return self._filter(
            Media.curator_type == curator.get_curator_type(),
            Media.curator_id == curator.get_curator_id(),
        )

    def anonymous(self) -> "MediaQuery":
        return self._filter(Media.curator_id.is_(None), Media.curator_type.is_(None))

    def on_disk(self, disk: str) -> "MediaQuery":
        return self._filter(Media.disk == disk)

    def of_type(self, mime_type: str) -> "MediaQuery":
        """Match a MIME prefix, e.g. ``image/`` or ``image/png``; ``%`` and ``_`` match literally."""
        return self._filter(Media.mime_type.startswith(mime_type, autoescape=True))

    def ordered(self) -> "MediaQuery":
        """Only explicitly ordered media, ascending by ``order_column``."""
        return MediaQuery(
            self.db,
            self.query.filter(Media.order_column.isnot(None)).order_by(Media.order_column),
        )

    def all(self) -> List[Media]:
        return self.query.all()

    def first(self) -> Optional[Media]:
        return self.query.first()

    def count(self) -> int:
        return self.query.count()

    def delete(self) -> int:
        """
        Delete every matching row.

        Rows are deleted through the session one by one (not with a bulk
        DELETE) so blob cleanup sees each of them. Commit is up to the caller.
        """
        rows = self.query.all()
        for media in rows:
            self.db.delete(media)
        self.db.flush()
        logger.info(f"Deleted {len(rows)} media rows")
        return len(rows)
