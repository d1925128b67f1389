"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "episodarr",
    "environment": "dev",
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "catalog": {
        "backend": "diskcache",
        "dir": "./data/catalog",
        "api_url": "http://localhost:8001/api",
        "api_token": None,
        "timeout_seconds": 15.0,
    },
}
