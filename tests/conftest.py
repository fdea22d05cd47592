# Test configuration

import os
import sys

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Allow running the suite without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from media_archive.archive import Archive  # noqa: E402
from media_archive.catalog.models import Base  # noqa: E402
from media_archive.config.settings import Settings  # noqa: E402
from media_archive.registry.registry import MediaCollectionRegistry  # noqa: E402
from media_archive.storage.manager import DiskManager  # noqa: E402


@pytest.fixture
def test_settings(tmp_path):
    """Settings with two local disks below tmp_path."""
    return Settings(
        database_url="sqlite://",
        default_disk="local",
        disks={
            "local": {"driver": "local", "root": str(tmp_path / "disks" / "local"), "url": "/storage"},
            "public": {"driver": "local", "root": str(tmp_path / "disks" / "public"), "url": "https://cdn.example.com"},
        },
        prefix="media",
        max_file_size=1024 * 1024,
    )


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def registry():
    return MediaCollectionRegistry()


@pytest.fixture
def disks(test_settings):
    return DiskManager(test_settings.disks)


@pytest.fixture
def archive(test_settings, registry, disks, session_factory):
    return Archive(
        settings=test_settings,
        registry=registry,
        disks=disks,
        session_factory=session_factory,
    )


@pytest.fixture
def make_file(tmp_path):
    """Create a source file with the given name and size (or content)."""
    uploads = tmp_path / "uploads"
    uploads.mkdir()

    def _make(name: str = "doc.txt", size: int = 10, content: bytes = None):
        path = uploads / name
        path.write_bytes(content if content is not None else b"x" * size)
        return path

    return _make


class FakeCurator:
    """Minimal object satisfying the Curator protocol."""

    def __init__(self, curator_id: str, curator_type: str = "user"):
        self.curator_id = curator_id
        self.curator_type = curator_type

    def get_curator_id(self) -> str:
        return self.curator_id

    def get_curator_type(self) -> str:
        return self.curator_type


@pytest.fixture
def curator():
    return FakeCurator("42", "user")


@pytest.fixture
def make_curator():
    return FakeCurator
