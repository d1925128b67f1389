from __future__ import annotations

from collections.abc import Iterator
from contextlib import ExitStack, contextmanager

import httpx
import structlog

from episodarr.application.use_cases import CatalogHierarchyUseCase
from episodarr.infrastructure.config import AppConfig
from episodarr.infrastructure.persistence import (
    DiskcacheCatalogRepository,
    create_catalog_repository,
)
from episodarr.infrastructure.video_sources import VideoSourceResolver

log = structlog.get_logger(__name__)


@contextmanager
def catalog_session(config: AppConfig) -> Iterator[CatalogHierarchyUseCase]:
    """Composition root: build the use case and release its resources on exit.

    Order matters:
        1. HTTP client (only for the remote catalog API)
        2. Catalog store (opened when it is disk-backed)
        3. Video source resolver (stateless)
        4. Hierarchy use case
    """
    with ExitStack() as stack:
        http_client: httpx.Client | None = None
        if config.catalog_backend == "http":
            http_client = stack.enter_context(
                httpx.Client(timeout=config.catalog_timeout_seconds)
            )

        repository = create_catalog_repository(
            config.catalog_backend,
            directory=config.catalog_dir,
            http_client=http_client,
            api_url=config.catalog_api_url,
            api_token=config.catalog_api_token,
        )
        if isinstance(repository, DiskcacheCatalogRepository):
            stack.enter_context(repository)

        use_case = CatalogHierarchyUseCase(
            repository=repository,
            resolver=VideoSourceResolver(),
        )
        log.debug("catalog_session_ready", backend=config.catalog_backend)
        yield use_case
