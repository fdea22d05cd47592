"""Declared configuration of one media collection."""

from typing import Any, Optional

from media_archive.curator import curator_type_of


class MediaCollection:
    """
    Named group of media sharing configuration.

    Configured fluently and in place:

        archive.collection("avatar").single_file().curated_by(User).to_disk("s3")
    """

    def __init__(self, name: str):
        self._name = name
        self._single_file = False
        self._disk: Optional[str] = None
        self._curator_type: Optional[str] = None
        self._allow_anonymous = False

    def __repr__(self) -> str:
        return (
            f"<MediaCollection {self._name!r} single_file={self._single_file} "
            f"disk={self._disk!r} curator_type={self._curator_type!r}>"
        )

    def single_file(self) -> "MediaCollection":
        """Keep at most one media per curator; adding replaces the previous one."""
        self._single_file = True
        return self

    def curated_by(self, model: Any) -> "MediaCollection":
        """Restrict curators to one model class (or stored type name)."""
        self._curator_type = curator_type_of(model)
        return self

    def curated_by_anonymous(self) -> "MediaCollection":
        self._allow_anonymous = True
        return self

    def to_disk(self, disk: str) -> "MediaCollection":
        self._disk = disk
        return self

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_single_file(self) -> bool:
        return self._single_file

    @property
    def disk(self) -> Optional[str]:
        return self._disk

    @property
    def curator_type(self) -> Optional[str]:
        return self._curator_type

    @property
    def allows_anonymous(self) -> bool:
        return self._allow_anonymous
