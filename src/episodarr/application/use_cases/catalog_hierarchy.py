"""Use case for managing the Show → Season → Episode hierarchy."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from episodarr.application.factories import CatalogFieldsFactory
from episodarr.domain.entities.catalog import (
    CascadePlan,
    CatalogIntegrityError,
    CatalogNotFoundError,
    CatalogSnapshot,
    CatalogTree,
    Episode,
    EpisodeFields,
    Season,
    SeasonFields,
    Show,
)
from episodarr.domain.entities.video_source import ResolvedVideoSource
from episodarr.domain.ports import CatalogRepository, VideoSourceResolverPort

log = structlog.get_logger(__name__)


class CatalogHierarchyUseCase:
    """Create/update/delete/list operations that keep the hierarchy consistent.

    Every check (field validation, parent existence, same-show season) runs
    before the store is touched, so a rejected call leaves it unchanged.
    Store failures propagate to the caller as raised.
    """

    def __init__(
        self,
        *,
        repository: CatalogRepository,
        resolver: VideoSourceResolverPort,
        fields_factory: CatalogFieldsFactory | None = None,
    ) -> None:
        self._repo = repository
        self._resolver = resolver
        self._fields = fields_factory or CatalogFieldsFactory()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snapshot(self) -> CatalogSnapshot:
        return self._repo.snapshot()

    def list_shows(self) -> list[Show]:
        return list(self._repo.snapshot().shows)

    def list_seasons(self) -> list[Season]:
        return list(self._repo.snapshot().seasons)

    def list_episodes(self) -> list[Episode]:
        return list(self._repo.snapshot().episodes)

    def list_seasons_for_show(self, show_id: str) -> list[Season]:
        return self._repo.snapshot().seasons_for_show(show_id)

    def list_episodes_for_season(self, season_id: str) -> list[Episode]:
        return self._repo.snapshot().episodes_for_season(season_id)

    def list_episodes_for_show(self, show_id: str) -> list[Episode]:
        return self._repo.snapshot().episodes_for_show(show_id)

    def get_show(self, show_id: str) -> Show:
        show = self._repo.get_show(show_id)
        if show is None:
            raise CatalogNotFoundError("show", show_id)
        return show

    def get_season(self, season_id: str) -> Season:
        season = self._repo.get_season(season_id)
        if season is None:
            raise CatalogNotFoundError("season", season_id)
        return season

    def get_episode(self, episode_id: str) -> Episode:
        episode = self._repo.get_episode(episode_id)
        if episode is None:
            raise CatalogNotFoundError("episode", episode_id)
        return episode

    def resolve_episode_source(self, episode_id: str) -> ResolvedVideoSource:
        """Resolve the stored raw link of an Episode for playback."""
        return self._resolver.resolve(self.get_episode(episode_id).video_url)

    def resolve_video_url(self, raw_url: str | None) -> ResolvedVideoSource:
        return self._resolver.resolve(raw_url)

    def tree(self) -> list[CatalogTree]:
        """Group the whole catalog by Show, then Season, in store order."""
        snap = self._repo.snapshot()
        return [
            CatalogTree(
                show=show,
                seasons=[
                    (season, snap.episodes_for_season(season.id))
                    for season in snap.seasons_for_show(show.id)
                ],
            )
            for show in snap.shows
        ]

    # ------------------------------------------------------------------
    # Shows
    # ------------------------------------------------------------------

    def create_show(self, data: Mapping[str, Any]) -> Show:
        fields = self._fields.show_fields(data)
        show = self._repo.add_show(fields)
        log.info("show_created", show_id=show.id, name=show.name)
        return show

    def update_show(self, show_id: str, data: Mapping[str, Any]) -> Show:
        fields = self._fields.show_fields(data)
        self.get_show(show_id)
        show = self._repo.replace_show(show_id, fields)
        log.info("show_updated", show_id=show_id)
        return show

    def delete_show(self, show_id: str) -> CascadePlan:
        """Delete a Show with all its Seasons and Episodes. Irreversible."""
        self.get_show(show_id)
        plan = self._repo.delete_show(show_id)
        log.info(
            "show_deleted",
            show_id=show_id,
            seasons=len(plan.season_ids),
            episodes=len(plan.episode_ids),
        )
        return plan

    # ------------------------------------------------------------------
    # Seasons
    # ------------------------------------------------------------------

    def create_season(self, data: Mapping[str, Any]) -> Season:
        fields = self._fields.season_fields(data)
        self._require_show(fields)
        season = self._repo.add_season(fields)
        log.info(
            "season_created",
            season_id=season.id,
            show_id=season.show_id,
            season_number=season.season_number,
        )
        return season

    def update_season(self, season_id: str, data: Mapping[str, Any]) -> Season:
        fields = self._fields.season_fields(data)
        current = self.get_season(season_id)
        self._require_show(fields)
        if fields.show_id != current.show_id:
            owned = self._repo.snapshot().episodes_for_season(season_id)
            if owned:
                raise CatalogIntegrityError(
                    f"season {season_id} still has {len(owned)} episode(s) "
                    f"of show {current.show_id}"
                )
        season = self._repo.replace_season(season_id, fields)
        log.info("season_updated", season_id=season_id, show_id=season.show_id)
        return season

    def delete_season(self, season_id: str) -> CascadePlan:
        """Delete a Season with all its Episodes. Irreversible."""
        self.get_season(season_id)
        plan = self._repo.delete_season(season_id)
        log.info(
            "season_deleted",
            season_id=season_id,
            episodes=len(plan.episode_ids),
        )
        return plan

    # ------------------------------------------------------------------
    # Episodes
    # ------------------------------------------------------------------

    def create_episode(self, data: Mapping[str, Any]) -> Episode:
        fields = self._fields.episode_fields(data)
        self._require_consistent_parents(fields)
        episode = self._repo.add_episode(fields)
        log.info(
            "episode_created",
            episode_id=episode.id,
            season_id=episode.season_id,
            episode_number=episode.episode_number,
            provider=self._resolver.resolve(episode.video_url).kind.value,
        )
        return episode

    def update_episode(self, episode_id: str, data: Mapping[str, Any]) -> Episode:
        fields = self._fields.episode_fields(data)
        self.get_episode(episode_id)
        self._require_consistent_parents(fields)
        episode = self._repo.replace_episode(episode_id, fields)
        log.info(
            "episode_updated",
            episode_id=episode_id,
            provider=self._resolver.resolve(episode.video_url).kind.value,
        )
        return episode

    def delete_episode(self, episode_id: str) -> CascadePlan:
        self.get_episode(episode_id)
        plan = self._repo.delete_episode(episode_id)
        log.info("episode_deleted", episode_id=episode_id)
        return plan

    # ------------------------------------------------------------------
    # Referential checks
    # ------------------------------------------------------------------

    def _require_show(self, fields: SeasonFields) -> None:
        if self._repo.get_show(fields.show_id) is None:
            raise CatalogIntegrityError(f"show does not exist: {fields.show_id}")

    def _require_consistent_parents(self, fields: EpisodeFields) -> None:
        if self._repo.get_show(fields.show_id) is None:
            raise CatalogIntegrityError(f"show does not exist: {fields.show_id}")
        season = self._repo.get_season(fields.season_id)
        if season is None:
            raise CatalogIntegrityError(f"season does not exist: {fields.season_id}")
        if season.show_id != fields.show_id:
            log.warning(
                "episode_season_show_mismatch",
                season_id=season.id,
                season_show_id=season.show_id,
                episode_show_id=fields.show_id,
            )
            raise CatalogIntegrityError(
                f"season {season.id} belongs to show {season.show_id}, "
                f"not {fields.show_id}"
            )
