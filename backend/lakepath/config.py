"""LakePath configuration: Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "LakePath"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Mode: dev = local directory tree, prod = Azure Data Lake
    mode: str = "dev"

    # Local provider root; each container is a sub-directory
    local_root: str = "./data/lake"

    # Azure Data Lake
    default_account: str = ""
    default_container: str = ""
    azure_connection_string: str = ""  # Falls back to DefaultAzureCredential when empty

    uvicorn_workers: int = 1

    @property
    def is_dev_mode(self) -> bool:
        return self.mode == "dev"

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="LAKEPATH_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:5173"]

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure the local lake root is absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        if not Path(self.local_root).is_absolute():
            self.local_root = str(base / self.local_root)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
