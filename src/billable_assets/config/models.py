"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_DATA_API_URL = "https://data-api.ammp.io/v1"


class DataApiConfig(BaseModel):
    """Connection settings for the AMMP data API."""

    base_url: str = Field(default=DEFAULT_DATA_API_URL)
    api_key: Optional[str] = Field(default=None, repr=False)
    timeout_seconds: float = Field(default=30.0, gt=0)
    token_refresh_buffer_seconds: int = Field(default=300, ge=0)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class LoggingConfig(BaseModel):
    """Logging and audit trail settings."""

    level: str = Field(default="INFO")
    json_output: bool = True
    service_name: str = Field(default="billable_assets")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


class BillableAssetsConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    data_api: DataApiConfig = Field(default_factory=DataApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
