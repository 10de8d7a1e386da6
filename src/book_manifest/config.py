"""Runtime settings, read from the environment or a .env file."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PlaceholderPolicy = Literal["ignore", "warn", "error"]

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class Settings(BaseSettings):
    """Settings for discovery, validation and logging.

    Every field can be set through ``BOOK_MANIFEST_<FIELD>``; list fields take
    JSON (``BOOK_MANIFEST_EXCLUDE='["README.md", "drafts/*"]'``).
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOK_MANIFEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Same cut-off the book build uses to drop stub files
    min_lines: int = Field(default=20, ge=0)
    max_workers: int = Field(default=8, ge=1)
    exclude: list[str] = Field(default_factory=lambda: ["README.md"])
    placeholder_values: list[str] = Field(default_factory=lambda: ["TBD"])
    placeholder_policy: PlaceholderPolicy = "warn"
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process settings, loaded once."""
    return Settings()
