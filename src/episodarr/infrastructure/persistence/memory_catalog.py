"""In-process catalog store (tests, demos, single-run CLI sessions)."""

from __future__ import annotations

import threading
import uuid
from dataclasses import asdict

import structlog

from episodarr.domain.entities.catalog import (
    CascadePlan,
    CatalogNotFoundError,
    CatalogSnapshot,
    Episode,
    EpisodeFields,
    Season,
    SeasonFields,
    Show,
    ShowFields,
)

log = structlog.get_logger(__name__)


class InMemoryCatalogRepository:
    """Insertion-ordered dicts guarded by one lock.

    The lock is held for the whole of a cascade, so readers never observe
    a Show whose Seasons are half gone.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._shows: dict[str, Show] = {}
        self._seasons: dict[str, Season] = {}
        self._episodes: dict[str, Episode] = {}

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    def snapshot(self) -> CatalogSnapshot:
        with self._lock:
            return CatalogSnapshot(
                shows=tuple(self._shows.values()),
                seasons=tuple(self._seasons.values()),
                episodes=tuple(self._episodes.values()),
            )

    def get_show(self, show_id: str) -> Show | None:
        return self._shows.get(show_id)

    def get_season(self, season_id: str) -> Season | None:
        return self._seasons.get(season_id)

    def get_episode(self, episode_id: str) -> Episode | None:
        return self._episodes.get(episode_id)

    # --- Create ---
    def add_show(self, fields: ShowFields) -> Show:
        show = Show(id=self._new_id(), **asdict(fields))
        with self._lock:
            self._shows[show.id] = show
        return show

    def add_season(self, fields: SeasonFields) -> Season:
        season = Season(id=self._new_id(), **asdict(fields))
        with self._lock:
            self._seasons[season.id] = season
        return season

    def add_episode(self, fields: EpisodeFields) -> Episode:
        episode = Episode(id=self._new_id(), **asdict(fields))
        with self._lock:
            self._episodes[episode.id] = episode
        return episode

    # --- Replace (keeps position) ---
    def replace_show(self, show_id: str, fields: ShowFields) -> Show:
        with self._lock:
            if show_id not in self._shows:
                raise CatalogNotFoundError("show", show_id)
            show = Show(id=show_id, **asdict(fields))
            self._shows[show_id] = show
            return show

    def replace_season(self, season_id: str, fields: SeasonFields) -> Season:
        with self._lock:
            if season_id not in self._seasons:
                raise CatalogNotFoundError("season", season_id)
            season = Season(id=season_id, **asdict(fields))
            self._seasons[season_id] = season
            return season

    def replace_episode(self, episode_id: str, fields: EpisodeFields) -> Episode:
        with self._lock:
            if episode_id not in self._episodes:
                raise CatalogNotFoundError("episode", episode_id)
            episode = Episode(id=episode_id, **asdict(fields))
            self._episodes[episode_id] = episode
            return episode

    # --- Delete ---
    def delete_show(self, show_id: str) -> CascadePlan:
        with self._lock:
            if show_id not in self._shows:
                raise CatalogNotFoundError("show", show_id)
            plan = self.snapshot().show_cascade(show_id)
            self._apply(plan)
        return plan

    def delete_season(self, season_id: str) -> CascadePlan:
        with self._lock:
            if season_id not in self._seasons:
                raise CatalogNotFoundError("season", season_id)
            plan = self.snapshot().season_cascade(season_id)
            self._apply(plan)
        return plan

    def delete_episode(self, episode_id: str) -> CascadePlan:
        with self._lock:
            if self._episodes.pop(episode_id, None) is None:
                raise CatalogNotFoundError("episode", episode_id)
        return CascadePlan(episode_ids=(episode_id,))

    def _apply(self, plan: CascadePlan) -> None:
        for episode_id in plan.episode_ids:
            self._episodes.pop(episode_id, None)
        for season_id in plan.season_ids:
            self._seasons.pop(season_id, None)
        for show_id in plan.show_ids:
            self._shows.pop(show_id, None)
        log.debug("catalog_cascade_deleted", removed=plan.total)
