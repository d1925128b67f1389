"""Domain entities for the Show → Season → Episode catalog.

Pure value objects and snapshot queries without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

CatalogEntity = Literal["show", "season", "episode"]


@dataclass(frozen=True)
class Show:
    id: str
    name: str
    description: str = ""
    poster_url: str = ""


@dataclass(frozen=True)
class Season:
    id: str
    show_id: str
    season_number: int
    name: str = ""


@dataclass(frozen=True)
class Episode:
    id: str
    show_id: str
    season_id: str
    episode_number: int
    video_url: str  # Raw link as entered; resolved on display
    title: str = ""
    description: str = ""
    duration: int | None = None  # Seconds
    thumbnail_url: str = ""


@dataclass(frozen=True)
class ShowFields:
    """Validated field set for creating or replacing a Show (no id yet)."""

    name: str
    description: str = ""
    poster_url: str = ""


@dataclass(frozen=True)
class SeasonFields:
    """Validated field set for creating or replacing a Season."""

    show_id: str
    season_number: int
    name: str = ""


@dataclass(frozen=True)
class EpisodeFields:
    """Validated field set for creating or replacing an Episode."""

    show_id: str
    season_id: str
    episode_number: int
    video_url: str
    title: str = ""
    description: str = ""
    duration: int | None = None
    thumbnail_url: str = ""


@dataclass(frozen=True)
class CascadePlan:
    """Ids removed together when a Show or Season is deleted."""

    show_ids: tuple[str, ...] = ()
    season_ids: tuple[str, ...] = ()
    episode_ids: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.show_ids) + len(self.season_ids) + len(self.episode_ids)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of all three collections in store order.

    Every query is a pure function of the snapshot, so repeated calls
    without an intervening mutation return equal sequences.
    """

    shows: tuple[Show, ...] = ()
    seasons: tuple[Season, ...] = ()
    episodes: tuple[Episode, ...] = ()

    def find_show(self, show_id: str) -> Show | None:
        return next((s for s in self.shows if s.id == show_id), None)

    def find_season(self, season_id: str) -> Season | None:
        return next((s for s in self.seasons if s.id == season_id), None)

    def find_episode(self, episode_id: str) -> Episode | None:
        return next((e for e in self.episodes if e.id == episode_id), None)

    def seasons_for_show(self, show_id: str) -> list[Season]:
        return [s for s in self.seasons if s.show_id == show_id]

    def episodes_for_season(self, season_id: str) -> list[Episode]:
        return [e for e in self.episodes if e.season_id == season_id]

    def episodes_for_show(self, show_id: str) -> list[Episode]:
        return [e for e in self.episodes if e.show_id == show_id]

    def show_cascade(self, show_id: str) -> CascadePlan:
        """Collect the Show plus every Season it owns and their Episodes.

        Episodes carrying the Show's id are included as well, so a record
        whose season pointer was already broken cannot outlive its Show.
        """
        season_ids = tuple(s.id for s in self.seasons_for_show(show_id))
        owned = set(season_ids)
        episode_ids = tuple(
            e.id for e in self.episodes if e.season_id in owned or e.show_id == show_id
        )
        return CascadePlan(
            show_ids=(show_id,), season_ids=season_ids, episode_ids=episode_ids
        )

    def season_cascade(self, season_id: str) -> CascadePlan:
        episode_ids = tuple(e.id for e in self.episodes_for_season(season_id))
        return CascadePlan(season_ids=(season_id,), episode_ids=episode_ids)


@dataclass(frozen=True)
class CatalogTree:
    """A Show with its Seasons and each Season's Episodes, for display."""

    show: Show
    seasons: list[tuple[Season, list[Episode]]] = field(default_factory=list)


class CatalogError(Exception):
    """Base error for catalog operations."""


class CatalogValidationError(CatalogError):
    """A required field is missing or malformed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class CatalogIntegrityError(CatalogError):
    """A Season/Episode references a missing or cross-hierarchy parent."""


class CatalogNotFoundError(CatalogError):
    """The addressed entity does not exist in the store."""

    def __init__(self, entity: CatalogEntity, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class CatalogExternalError(CatalogError):
    """Catalog store unreachable or rejected the operation."""
