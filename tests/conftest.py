"""Shared test fixtures for Episodarr test suite."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from episodarr.application.use_cases import CatalogHierarchyUseCase
from episodarr.domain.entities import Episode, Season, Show
from episodarr.infrastructure.persistence import InMemoryCatalogRepository
from episodarr.infrastructure.video_sources import VideoSourceResolver

# ---------------------------------------------------------------------------
# Store / use case fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def repository() -> InMemoryCatalogRepository:
    """Empty in-memory catalog store."""
    return InMemoryCatalogRepository()


@pytest.fixture()
def use_case(repository: InMemoryCatalogRepository) -> CatalogHierarchyUseCase:
    return CatalogHierarchyUseCase(
        repository=repository, resolver=VideoSourceResolver()
    )


@pytest.fixture()
def show(use_case: CatalogHierarchyUseCase) -> Show:
    return use_case.create_show(
        {"name": "Breaking Bad", "description": "Albuquerque, 2008"}
    )


@pytest.fixture()
def season(use_case: CatalogHierarchyUseCase, show: Show) -> Season:
    return use_case.create_season({"show_id": show.id, "season_number": 1})


@pytest.fixture()
def episode(
    use_case: CatalogHierarchyUseCase, show: Show, season: Season
) -> Episode:
    return use_case.create_episode(
        {
            "show_id": show.id,
            "season_id": season.id,
            "episode_number": 1,
            "title": "Pilot",
            "video_url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "duration": "3480",
        }
    )


@pytest.fixture()
def clean_catalog_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove EPISODARR_* variables so config tests see only their own layers."""
    for name in list(os.environ):
        if name.upper().startswith("EPISODARR_"):
            monkeypatch.delenv(name, raising=False)
    yield
