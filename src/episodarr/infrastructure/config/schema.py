"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
CatalogBackend = Literal["memory", "diskcache", "http"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (logging/catalog).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="episodarr", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Catalog store (YAML section: catalog.*)
    catalog_backend: CatalogBackend = Field(
        default="diskcache",
        validation_alias=AliasChoices(
            "catalog_backend",
            AliasPath("catalog", "backend"),
        ),
        description="Catalog store: 'memory', 'diskcache' (SQLite) or 'http' (remote API).",
    )
    catalog_dir: Path = Field(
        default=Path("./data/catalog"),
        validation_alias=AliasChoices(
            "catalog_dir",
            AliasPath("catalog", "dir"),
        ),
        description="Diskcache directory (only when backend=diskcache).",
    )
    catalog_api_url: str = Field(
        default="http://localhost:8001/api",
        validation_alias=AliasChoices(
            "catalog_api_url",
            AliasPath("catalog", "api_url"),
        ),
        description="Base URL of the remote catalog API (only when backend=http).",
    )
    catalog_api_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "catalog_api_token",
            AliasPath("catalog", "api_token"),
        ),
        description="Bearer token sent with catalog API calls. Never inspected.",
    )
    catalog_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "catalog_timeout_seconds",
            AliasPath("catalog", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for catalog API calls.",
    )

    @field_validator("catalog_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("catalog_timeout_seconds")
    @classmethod
    def _validate_catalog_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("catalog_timeout_seconds must be > 0")
        return v

    @field_validator("catalog_api_url")
    @classmethod
    def _validate_api_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("catalog_api_url must start with http:// or https://")
        return v.rstrip("/")

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        The API token is masked.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "logging": {"level": self.log_level, "format": self.log_format},
            "catalog": {
                "backend": self.catalog_backend,
                "dir": str(self.catalog_dir),
                "api_url": self.catalog_api_url,
                "api_token": "***" if self.catalog_api_token else None,
                "timeout_seconds": self.catalog_timeout_seconds,
            },
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read EPISODARR_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - EPISODARR_LOG_LEVEL
    - EPISODARR_CATALOG_BACKEND
    - EPISODARR_CATALOG_API_URL
    - EPISODARR_CATALOG_API_TOKEN
    """

    model_config = SettingsConfigDict(
        env_prefix="EPISODARR_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    catalog_backend: Optional[CatalogBackend] = None
    catalog_dir: Optional[Path] = None
    catalog_api_url: Optional[str] = None
    catalog_api_token: Optional[str] = None
    catalog_timeout_seconds: Optional[float] = None

    @field_validator("catalog_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
