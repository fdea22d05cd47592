"""
Unit tests for curator helpers and the HasArchive mixin.
"""

import pytest
from sqlalchemy import Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from media_archive.curator import Curator, HasArchive, curator_type_of


class ModelBase(DeclarativeBase):
    pass


class Author(HasArchive, ModelBase):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50))


class Team(HasArchive, ModelBase):
    __tablename__ = "teams"
    __curator_type__ = "team"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


@pytest.fixture
def model_session():
    engine = create_engine("sqlite://")
    ModelBase.metadata.create_all(engine)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    yield session
    session.close()
    engine.dispose()


class TestCuratorTypeOf:

    def test_string_passthrough(self):
        assert curator_type_of("users") == "users"

    def test_class_name(self):
        assert curator_type_of(Author) == "Author"

    def test_declared_type(self):
        assert curator_type_of(Team) == "team"
        assert curator_type_of(Team()) == "team"


class TestHasArchive:
    """Tests for the HasArchive mixin."""

    def test_is_curator(self):
        assert isinstance(Author(name="a"), Curator)

    def test_curator_id_from_primary_key(self, model_session):
        author = Author(name="Ada")
        model_session.add(author)
        model_session.commit()

        assert author.get_curator_id() == str(author.id)
        assert author.get_curator_type() == "Author"

    def test_unsaved_model_has_no_curator_id(self):
        with pytest.raises(ValueError, match="persisted"):
            Author(name="Ada").get_curator_id()

    def test_add_media_uses_given_archive(self, model_session, archive, make_file):
        author = Author(name="Ada")
        model_session.add(author)
        model_session.commit()

        media = author.add_media(make_file("cv.txt"), archive=archive).store()

        assert media.is_curated_by(author)
        assert media.curator_type == "Author"

    def test_media_query(self, model_session, archive, make_file, db_session):
        author = Author(name="Ada")
        model_session.add(author)
        model_session.commit()
        author.add_media(make_file("a.txt"), archive=archive).store()
        archive.add(make_file("b.txt")).store()

        assert author.media_query(db_session).count() == 1
