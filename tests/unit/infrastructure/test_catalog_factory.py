"""Tests for create_catalog_repository and the catalog_session composition root."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from episodarr.application.use_cases import CatalogHierarchyUseCase
from episodarr.infrastructure.composition import catalog_session
from episodarr.infrastructure.config import AppConfig
from episodarr.infrastructure.persistence import (
    DiskcacheCatalogRepository,
    HttpCatalogRepository,
    InMemoryCatalogRepository,
    create_catalog_repository,
)


class TestCreateCatalogRepository:
    def test_memory(self) -> None:
        assert isinstance(create_catalog_repository("memory"), InMemoryCatalogRepository)

    def test_diskcache(self, tmp_path: Path) -> None:
        repo = create_catalog_repository("diskcache", directory=tmp_path / "c")
        assert isinstance(repo, DiskcacheCatalogRepository)
        assert repo.directory == tmp_path / "c"
        # Not opened by the factory
        assert not (tmp_path / "c").exists()

    def test_http(self) -> None:
        with httpx.Client() as client:
            repo = create_catalog_repository(
                "http", http_client=client, api_url="http://x/api"
            )
        assert isinstance(repo, HttpCatalogRepository)

    def test_http_requires_client(self) -> None:
        with pytest.raises(ValueError, match="http_client"):
            create_catalog_repository("http")

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown catalog backend"):
            create_catalog_repository("sqlite")  # type: ignore[arg-type]


class TestCatalogSession:
    def test_memory_session(self) -> None:
        config = AppConfig(catalog_backend="memory")
        with catalog_session(config) as use_case:
            assert isinstance(use_case, CatalogHierarchyUseCase)
            use_case.create_show({"name": "Dark"})
            assert len(use_case.list_shows()) == 1

    def test_diskcache_session_persists(self, tmp_path: Path) -> None:
        config = AppConfig(catalog_backend="diskcache", catalog_dir=tmp_path / "c")
        with catalog_session(config) as use_case:
            use_case.create_show({"name": "Dark"})

        with catalog_session(config) as use_case:
            assert [s.name for s in use_case.list_shows()] == ["Dark"]
