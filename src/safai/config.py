"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SAFAI_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Safai Sathi Reporting API"
    api_prefix: str = "/api"
    host: str = Field(default="0.0.0.0", description="Interface the API server binds to.")
    port: int = Field(
        default=8000,
        validation_alias=AliasChoices("SAFAI_PORT", "PORT"),
        description="Listening port; container platforms set PORT.",
    )
    data_root: Path = Field(default=Path("data"), description="Root directory for persisted data and outputs.")
    report_store_file: Path = Field(
        default=Path("data/safai_reports.json"),
        description="JSON blob holding every submitted report.",
    )
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="API key for the Gemini image analysis model.",
    )
    gemini_model: str = Field(default="gemini-2.5-flash")
    route_max_stops: int = Field(
        default=50,
        ge=2,
        description="Upper bound on reports accepted by a single route optimization.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "report_store_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
