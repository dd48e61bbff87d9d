from __future__ import annotations

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import IMAGE_FIELD_PATH

ROOT_DIR = Path(__file__).resolve().parents[2]
ENV_PATH = ROOT_DIR / ".env"
load_dotenv(ENV_PATH, override=False)


class StorageSettings(BaseModel):
    """Where documents are persisted."""

    driver: Literal["mongo", "in_memory"] = "mongo"
    mongo_url: str | None = Field(default=None, repr=False)
    db_name: str | None = None
    server_selection_timeout_ms: int = 5000


class RepositorioSettings(BaseModel):
    """External repository service that stores uploaded files."""

    base_url: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, repr=False)
    folder: str = "espolios/imagens"
    timeout_seconds: float = 30.0


class IngestionSettings(BaseModel):
    """Rules for turning form submissions into documents."""

    # Leaf field names that collect every submitted value into a list
    array_fields: list[str] = Field(default_factory=lambda: ["materiais", "categoria", "lugares"])
    image_field: str = IMAGE_FIELD_PATH


class Settings(BaseSettings):
    """Global application configuration."""

    app_name: str = "Espólios API"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    port: int = 3000
    storage: StorageSettings = StorageSettings()
    repositorio: RepositorioSettings = RepositorioSettings()
    ingestion: IngestionSettings = IngestionSettings()

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="allow",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().upper()
            return "WARNING" if value == "WARN" else value
        return value


settings = Settings()
