"""JSON record mapping for catalog entities.

The record shape matches the remote catalog API: snake_case keys plus
``id``. Used by both the disk store and the HTTP store.
"""

from __future__ import annotations

from typing import Any

from episodarr.domain.entities.catalog import (
    Episode,
    EpisodeFields,
    Season,
    SeasonFields,
    Show,
    ShowFields,
)


def show_fields_to_record(fields: ShowFields) -> dict[str, Any]:
    return {
        "name": fields.name,
        "description": fields.description,
        "poster_url": fields.poster_url,
    }


def season_fields_to_record(fields: SeasonFields) -> dict[str, Any]:
    return {
        "show_id": fields.show_id,
        "season_number": fields.season_number,
        "name": fields.name,
    }


def episode_fields_to_record(fields: EpisodeFields) -> dict[str, Any]:
    return {
        "show_id": fields.show_id,
        "season_id": fields.season_id,
        "episode_number": fields.episode_number,
        "title": fields.title,
        "description": fields.description,
        "video_url": fields.video_url,
        "duration": fields.duration,
        "thumbnail_url": fields.thumbnail_url,
    }


def show_from_record(d: dict[str, Any]) -> Show:
    return Show(
        id=str(d["id"]),
        name=d["name"],
        description=d.get("description") or "",
        poster_url=d.get("poster_url") or "",
    )


def season_from_record(d: dict[str, Any]) -> Season:
    return Season(
        id=str(d["id"]),
        show_id=str(d["show_id"]),
        season_number=int(d["season_number"]),
        name=d.get("name") or "",
    )


def episode_from_record(d: dict[str, Any]) -> Episode:
    duration = d.get("duration")
    return Episode(
        id=str(d["id"]),
        show_id=str(d["show_id"]),
        season_id=str(d["season_id"]),
        episode_number=int(d["episode_number"]),
        video_url=d["video_url"],
        title=d.get("title") or "",
        description=d.get("description") or "",
        duration=int(duration) if duration is not None else None,
        thumbnail_url=d.get("thumbnail_url") or "",
    )


def show_to_record(show: Show) -> dict[str, Any]:
    return {
        "id": show.id,
        "name": show.name,
        "description": show.description,
        "poster_url": show.poster_url,
    }


def season_to_record(season: Season) -> dict[str, Any]:
    return {
        "id": season.id,
        "show_id": season.show_id,
        "season_number": season.season_number,
        "name": season.name,
    }


def episode_to_record(episode: Episode) -> dict[str, Any]:
    return {
        "id": episode.id,
        "show_id": episode.show_id,
        "season_id": episode.season_id,
        "episode_number": episode.episode_number,
        "title": episode.title,
        "description": episode.description,
        "video_url": episode.video_url,
        "duration": episode.duration,
        "thumbnail_url": episode.thumbnail_url,
    }
