"""
Database models for the media archive.

A single ``media`` table holds every stored file; ownership is a
polymorphic (curator_type, curator_id) pair so any model can curate media.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import (  # type: ignore
    BigInteger, CheckConstraint, DateTime, Index, Integer, JSON, String
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column  # type: ignore

from media_archive.curator import Curator

_MISSING = object()


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class Media(Base):
    """
    One stored file.

    ``file_name`` is the sanitized name on disk, ``name`` the human-readable
    label. A row is either curated (both curator columns set) or anonymous
    (both null).
    """
    __tablename__ = "media"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    collection: Mapped[str] = mapped_column(
        String(255), nullable=False, default="default")
    disk: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)
    custom_properties: Mapped[Dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict)
    order_column: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    curator_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    curator_type: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "(curator_id IS NULL AND curator_type IS NULL) OR "
            "(curator_id IS NOT NULL AND curator_type IS NOT NULL)",
            name="media_curator_pair_check",
        ),
        CheckConstraint("size_bytes >= 0", name="media_size_check"),
        Index("idx_media_collection_curator", "collection", "curator_type", "curator_id"),
        Index("idx_media_disk", "disk"),
        # Never reuse ids of deleted rows: paths derive from the id
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Media id={self.id} collection={self.collection!r} file_name={self.file_name!r}>"

    # ==================== Location ====================

    def _archive(self, archive: Any = None):
        """The given archive, else the default one from settings."""
        if archive is not None:
            return archive
        from media_archive.archive import get_archive

        return get_archive()

    def get_path(self, archive: Any = None) -> str:
        return self._archive(archive).get_path(self)

    def get_url(self, archive: Any = None) -> str:
        return self._archive(archive).get_url(self)

    def get_temporary_url(
        self,
        expiration: datetime,
        options: Optional[Dict[str, Any]] = None,
        archive: Any = None,
    ) -> str:
        return self._archive(archive).get_temporary_url(self, expiration, options or {})

    # ==================== Curator ====================

    @property
    def is_anonymous(self) -> bool:
        return self.curator_id is None and self.curator_type is None

    def attach_to_curator(self, curator: Curator) -> None:
        """Move this media to ``curator``; the caller's session persists it."""
        self.curator_id = curator.get_curator_id()
        self.curator_type = curator.get_curator_type()

    def detach_from_curator(self) -> None:
        self.curator_id = None
        self.curator_type = None

    def is_curated_by(self, curator: Curator) -> bool:
        return (
            self.curator_id == curator.get_curator_id()
            and self.curator_type == curator.get_curator_type()
        )

    # ==================== Custom properties ====================

    def has_custom_property(self, name: str) -> bool:
        return name in (self.custom_properties or {})

    def get_custom_property(self, name: str, default: Any = None) -> Any:
        return (self.custom_properties or {}).get(name, default)

    def set_custom_property(self, name: str, value: Any) -> "Media":
        # Reassign so the JSON column is flagged as modified
        properties = dict(self.custom_properties or {})
        properties[name] = value
        self.custom_properties = properties
        return self

    def forget_custom_property(self, name: str) -> "Media":
        properties = dict(self.custom_properties or {})
        if properties.pop(name, _MISSING) is not _MISSING:
            self.custom_properties = properties
        return self
