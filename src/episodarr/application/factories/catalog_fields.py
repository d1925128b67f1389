"""Factory turning raw form mappings into validated catalog field sets."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from episodarr.domain.entities.catalog import (
    CatalogValidationError,
    EpisodeFields,
    SeasonFields,
    ShowFields,
)

log = structlog.get_logger(__name__)

# Canonical field name -> accepted camelCase alias (dashboard form keys).
_ALIASES: dict[str, str] = {
    "show_id": "showId",
    "season_id": "seasonId",
    "season_number": "seasonNumber",
    "episode_number": "episodeNumber",
    "video_url": "videoUrl",
    "poster_url": "posterUrl",
    "thumbnail_url": "thumbnailUrl",
}


def _raw(data: Mapping[str, Any], field: str) -> Any:
    if field in data:
        return data[field]
    alias = _ALIASES.get(field)
    if alias is not None:
        return data.get(alias)
    return None


def _text(data: Mapping[str, Any], field: str) -> str:
    value = _raw(data, field)
    if value is None:
        return ""
    return str(value).strip()


def _required_text(data: Mapping[str, Any], field: str) -> str:
    value = _text(data, field)
    if not value:
        raise CatalogValidationError(field, "is required")
    return value


def _to_int(value: Any) -> int | None:
    """Coerce form input to int; None when not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _positive_int(data: Mapping[str, Any], field: str) -> int:
    raw = _raw(data, field)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise CatalogValidationError(field, "is required")
    number = _to_int(raw)
    if number is None or number < 1:
        raise CatalogValidationError(field, "must be a positive integer")
    return number


def _optional_duration(data: Mapping[str, Any]) -> int | None:
    raw = _raw(data, "duration")
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    seconds = _to_int(raw)
    if seconds is None or seconds < 0:
        log.debug("episode_duration_ignored", duration=raw)
        return None
    return seconds


class CatalogFieldsFactory:
    """Builds ``*Fields`` value objects from dashboard-style form data.

    Only shape and type are checked here. Parent existence and hierarchy
    consistency need the store and are checked by the use case.
    """

    def show_fields(self, data: Mapping[str, Any]) -> ShowFields:
        return ShowFields(
            name=_required_text(data, "name"),
            description=_text(data, "description"),
            poster_url=_text(data, "poster_url"),
        )

    def season_fields(self, data: Mapping[str, Any]) -> SeasonFields:
        return SeasonFields(
            show_id=_required_text(data, "show_id"),
            season_number=_positive_int(data, "season_number"),
            name=_text(data, "name"),
        )

    def episode_fields(self, data: Mapping[str, Any]) -> EpisodeFields:
        return EpisodeFields(
            show_id=_required_text(data, "show_id"),
            season_id=_required_text(data, "season_id"),
            episode_number=_positive_int(data, "episode_number"),
            video_url=_required_text(data, "video_url"),
            title=_text(data, "title"),
            description=_text(data, "description"),
            duration=_optional_duration(data),
            thumbnail_url=_text(data, "thumbnail_url"),
        )
