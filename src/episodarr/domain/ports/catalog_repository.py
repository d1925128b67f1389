"""Port for Show/Season/Episode persistence."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from episodarr.domain.entities.catalog import (
    CascadePlan,
    CatalogSnapshot,
    Episode,
    EpisodeFields,
    Season,
    SeasonFields,
    Show,
    ShowFields,
)


@runtime_checkable
class CatalogRepository(Protocol):
    """Synchronous interface to the catalog store (sole source of truth).

    The store assigns ids on ``add_*`` and keeps insertion order.
    ``replace_*`` and ``delete_*`` raise ``CatalogNotFoundError`` for
    unknown ids. Cascading deletes are all-or-nothing: either every id of
    the returned plan is gone, or the store raises and nothing changed.
    """

    def snapshot(self) -> CatalogSnapshot: ...

    def get_show(self, show_id: str) -> Show | None: ...

    def get_season(self, season_id: str) -> Season | None: ...

    def get_episode(self, episode_id: str) -> Episode | None: ...

    def add_show(self, fields: ShowFields) -> Show: ...

    def add_season(self, fields: SeasonFields) -> Season: ...

    def add_episode(self, fields: EpisodeFields) -> Episode: ...

    def replace_show(self, show_id: str, fields: ShowFields) -> Show: ...

    def replace_season(self, season_id: str, fields: SeasonFields) -> Season: ...

    def replace_episode(self, episode_id: str, fields: EpisodeFields) -> Episode: ...

    def delete_show(self, show_id: str) -> CascadePlan: ...

    def delete_season(self, season_id: str) -> CascadePlan: ...

    def delete_episode(self, episode_id: str) -> CascadePlan: ...
