# Configuration management

from pydantic_settings import BaseSettings  # type: ignore
from functools import lru_cache
from typing import Any, Dict, Optional


def _default_disks() -> Dict[str, Dict[str, Any]]:
    return {
        "local": {"driver": "local", "root": "./storage/app", "url": "/storage"},
        "public": {"driver": "local", "root": "./storage/public", "url": "/storage/public"},
    }


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./media_archive.db"
    db_pool_size: int = 10
    db_max_overflow: int = 20

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Disks
    default_disk: str = "local"
    disk: Optional[str] = None  # archive-specific disk, falls back to default_disk
    disks: Dict[str, Dict[str, Any]] = _default_disks()

    # Media storage
    prefix: str = "media"
    max_file_size: int = 1024 * 1024 * 10  # 10MB, 0 or negative disables the check
    path_generator: str = "media_archive.storage.paths.DefaultPathGenerator"
    url_generator: str = "media_archive.storage.urls.DefaultUrlGenerator"

    class Config:
        env_file = ".env"
        env_prefix = "ARCHIVE_"
        case_sensitive = False

    @property
    def archive_disk(self) -> str:
        """Disk used when neither the call nor the collection picks one."""
        return self.disk or self.default_disk


@lru_cache()
def get_settings() -> Settings:
    return Settings()
