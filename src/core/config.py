"""
Configuration management with pydantic-settings.

Values come from environment variables / .env file and may be overridden
by keyword arguments (the CLI passes its flags that way). Settings are
built once at process start and handed to each component explicitly.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

BOULDERADO_BASE_URL = (
    "https://www.boulderado.de/boulderadoweb/gym-clientcounter/index.php?mode=get&token="
)

_DEFAULT_PORTS = {"sql": 5432, "influx": 8086}


class SinkBackend(StrEnum):
    """Persistence shapes an observation sink can take."""

    SQL = "sql"          # batch-append, one INSERT per tick
    INFLUX = "influx"    # point-write, one line-protocol POST per observation


class ExtractionStrategy(StrEnum):
    """Selector strategies for locating the counters in the status page."""

    NESTED = "nested"
    ATTRIBUTE = "attribute"


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Source ────────────────────────────────────────────────────────
    base_url: str = Field(
        default=BOULDERADO_BASE_URL,
        description="URL prefix; the location token is appended verbatim.",
    )
    token_path: Path = Field(
        default=Path("tokens.json"),
        description="JSON file with [{location, token}] pairs.",
    )
    request_timeout: float = Field(default=30.0, gt=0)

    # ── Database ──────────────────────────────────────────────────────
    db_backend: SinkBackend = Field(default=SinkBackend.SQL)
    db_host: str = Field(default="localhost")
    db_port: int | None = Field(
        default=None,
        description="Defaults to 5432 for sql and 8086 for influx.",
    )
    db_name: str = Field(default="climbing")
    db_user: str = Field(default="")
    db_password: str = Field(default="")
    db_token: str = Field(default="", description="InfluxDB auth token.")
    database_url: str = Field(
        default="",
        description="Full SQLAlchemy async URL; overrides host/port/name.",
    )
    collection: str = Field(
        default="visitors",
        description="Table (sql) or measurement (influx) name.",
    )
    db_create_schema: bool = Field(default=True)
    write_timeout: float = Field(default=10.0, gt=0)

    # ── Scheduling / extraction ───────────────────────────────────────
    interval_seconds: float = Field(default=60.0, ge=0)
    run_once: bool = Field(default=False)
    extraction_strategy: ExtractionStrategy = Field(default=ExtractionStrategy.NESTED)
    strict_extraction: bool = Field(default=False)
    halt_on_error: bool = Field(default=False)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def resolved_port(self) -> int:
        return self.db_port or _DEFAULT_PORTS[self.db_backend.value]

    @property
    def sql_url(self) -> str:
        """Async SQLAlchemy URL for the batch-append backend."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host,
            port=self.resolved_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def influx_url(self) -> str:
        return f"http://{self.db_host}:{self.resolved_port}"
