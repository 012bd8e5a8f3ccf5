"""Runtime configuration for the Central publisher."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration values mapped from ``CENTRAL_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CENTRAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field("Central Publisher API")
    log_level: str = Field("INFO")

    # Publication coordinate
    group_id: str = Field("")
    artifact_id: str = Field("")
    version: str = Field("")
    component_type: str = Field("library")
    publishing_type: str = Field("AUTOMATIC")

    # Portal credentials (user token)
    username: Optional[str] = Field(None)
    password: Optional[str] = Field(None)

    # Portal endpoints
    base_url: str = Field("https://central.sonatype.com/api/v1/publisher")
    http_timeout: float = Field(60.0)
    http_log_headers: bool = Field(True)

    # Build layout and packaging
    build_dir: str = Field("build")
    libs_exclude: List[str] = Field(default_factory=lambda: ["*-plain.jar"])
    digest_algorithms: List[str] = Field(default_factory=lambda: ["md5", "sha1", "sha256", "sha512"])
    hash_workers: int = Field(4)
    build_command: Optional[str] = Field(None)

    # Signing
    gpg_executable: str = Field("gpg")
    signing_key_id: Optional[str] = Field(None)
    signing_passphrase: Optional[str] = Field(None)

    @property
    def upload_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/upload"

    @property
    def status_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/status"

    @property
    def deployment_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/deployment"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
