"""Media catalog: ORM model, sessions, queries and lifecycle hooks."""

from media_archive.catalog.models import Base, Media
from media_archive.catalog.queries import MediaQuery
from media_archive.catalog.events import register_blob_cleanup
from media_archive.catalog.database import (
    get_db_session,
    get_engine,
    get_session_factory,
    init_db,
    unit_of_work,
)

__all__ = [
    "Base",
    "Media",
    "MediaQuery",
    "register_blob_cleanup",
    "get_db_session",
    "get_engine",
    "get_session_factory",
    "init_db",
    "unit_of_work",
]
