"""
Curators: entities that own media.

Any object exposing ``get_curator_id()`` and ``get_curator_type()`` can own
media. SQLAlchemy models get both (plus convenience helpers) from ``HasArchive``.
"""

from typing import TYPE_CHECKING, Any, ClassVar, Optional, Protocol, runtime_checkable

from sqlalchemy import inspect
from sqlalchemy.orm import Session

if TYPE_CHECKING:
    from media_archive.catalog.queries import MediaQuery
    from media_archive.ingest.adder import MediaAdder


@runtime_checkable
class Curator(Protocol):
    def get_curator_id(self) -> str: ...

    def get_curator_type(self) -> str: ...


def curator_type_of(model: Any) -> str:
    """
    Type string stored in ``media.curator_type`` for a model class or name.

    Classes may set ``__curator_type__`` to decouple stored rows from the
    Python class name.
    """
    if isinstance(model, str):
        return model
    cls = model if isinstance(model, type) else type(model)
    return getattr(cls, "__curator_type__", None) or cls.__name__


class HasArchive:
    """Mixin for declarative models that own media."""

    __curator_type__: ClassVar[Optional[str]] = None

    def get_curator_id(self) -> str:
        identity = inspect(self).identity
        if identity is None:
            raise ValueError(f"{type(self).__name__} must be persisted before it can curate media")
        return "-".join(str(part) for part in identity)

    def get_curator_type(self) -> str:
        return curator_type_of(self)

    def media_query(self, db: Session) -> "MediaQuery":
        """Query over the media curated by this model."""
        from media_archive.catalog.queries import MediaQuery

        return MediaQuery(db).curated_by(self)

    def add_media(self, file: Any, archive: Any = None) -> "MediaAdder":
        """Start adding ``file`` with this model as curator."""
        if archive is None:
            from media_archive.archive import get_archive

            archive = get_archive()
        return archive.add(file).to_curator(self)
