"""Catalog store factory - builds the repository selected in config."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import httpx
import structlog

from episodarr.domain.ports.catalog_repository import CatalogRepository
from episodarr.infrastructure.persistence.diskcache_catalog import (
    DiskcacheCatalogRepository,
)
from episodarr.infrastructure.persistence.http_catalog import HttpCatalogRepository
from episodarr.infrastructure.persistence.memory_catalog import (
    InMemoryCatalogRepository,
)

log = structlog.get_logger(__name__)

CatalogBackend = Literal["memory", "diskcache", "http"]


def create_catalog_repository(
    backend: CatalogBackend = "diskcache",
    *,
    # Diskcache config
    directory: str | Path = "./data/catalog",
    # HTTP config
    http_client: httpx.Client | None = None,
    api_url: str = "http://localhost:8001/api",
    api_token: str | None = None,
) -> CatalogRepository:
    """Create the catalog store for ``backend``.

    Args:
        backend: "memory", "diskcache" (SQLite) or "http" (remote API).
        directory: Diskcache directory.
        http_client: Shared httpx client (required for "http").
        api_url: Base URL of the remote catalog API.
        api_token: Bearer token forwarded to the remote API.

    Returns:
        CatalogRepository implementation. The diskcache store still has
        to be opened (``with repo:``) by the caller.

    Raises:
        ValueError: If ``backend`` is unknown or its requirements are missing.
    """
    if backend == "memory":
        log.info("catalog_factory_create", backend=backend)
        return InMemoryCatalogRepository()
    elif backend == "diskcache":
        log.info("catalog_factory_create", backend=backend, directory=str(directory))
        return DiskcacheCatalogRepository(directory=directory)
    elif backend == "http":
        if http_client is None:
            raise ValueError("backend 'http' requires an http_client")
        log.info(
            "catalog_factory_create",
            backend=backend,
            url=api_url,
            authenticated=bool(api_token),
        )
        return HttpCatalogRepository(
            http_client=http_client, base_url=api_url, api_token=api_token
        )
    else:
        raise ValueError(
            f"Unknown catalog backend: {backend!r}. "
            "Must be 'memory', 'diskcache' or 'http'."
        )
