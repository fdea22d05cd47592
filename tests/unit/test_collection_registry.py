"""
Unit tests for collection definitions and the registry.
"""

from media_archive.registry import MediaCollection, MediaCollectionRegistry
from media_archive.registry.registry import get_collection_registry


class User:
    pass


class Team:
    __curator_type__ = "teams"


class TestMediaCollection:

    def test_defaults(self):
        collection = MediaCollection("gallery")

        assert collection.name == "gallery"
        assert collection.is_single_file is False
        assert collection.disk is None
        assert collection.curator_type is None
        assert collection.allows_anonymous is False

    def test_fluent_configuration(self):
        collection = MediaCollection("avatar")

        result = collection.single_file().curated_by(User).to_disk("s3").curated_by_anonymous()

        assert result is collection
        assert collection.is_single_file
        assert collection.disk == "s3"
        assert collection.curator_type == "User"
        assert collection.allows_anonymous

    def test_curated_by_uses_declared_type(self):
        assert MediaCollection("logo").curated_by(Team).curator_type == "teams"
        assert MediaCollection("logo").curated_by("orgs").curator_type == "orgs"


class TestMediaCollectionRegistry:
    """Tests for MediaCollectionRegistry."""

    def test_define_and_get(self):
        registry = MediaCollectionRegistry()

        collection = registry.define("avatar")

        assert registry.get("avatar") is collection
        assert registry.has("avatar")
        assert registry.get("missing") is None

    def test_redefine_replaces(self):
        """Redefining a name starts from a fresh definition."""
        registry = MediaCollectionRegistry()
        registry.define("avatar").single_file().to_disk("s3")

        redefined = registry.define("avatar")

        assert registry.get("avatar") is redefined
        assert redefined.is_single_file is False
        assert redefined.disk is None

    def test_all_is_snapshot(self):
        registry = MediaCollectionRegistry()
        registry.define("a")

        snapshot = registry.all()
        registry.define("b")

        assert list(snapshot) == ["a"]
        assert sorted(registry.all()) == ["a", "b"]

    def test_clear(self):
        registry = MediaCollectionRegistry()
        registry.define("a")

        registry.clear()

        assert registry.all() == {}

    def test_default_registry_is_shared(self):
        assert get_collection_registry() is get_collection_registry()
