"""Tests for the JSON record mapping shared by the disk and HTTP stores."""

from __future__ import annotations

from episodarr.domain.entities import Episode, EpisodeFields, Season, Show
from episodarr.infrastructure.persistence.catalog_records import (
    episode_fields_to_record,
    episode_from_record,
    episode_to_record,
    season_from_record,
    season_to_record,
    show_from_record,
    show_to_record,
)


class TestFromRecord:
    def test_show_missing_optional_text(self) -> None:
        show = show_from_record({"id": 7, "name": "Dark", "description": None})
        assert show == Show(id="7", name="Dark")

    def test_season_coerces_numbers(self) -> None:
        season = season_from_record({"id": "a", "show_id": 3, "season_number": "2"})
        assert season == Season(id="a", show_id="3", season_number=2)

    def test_episode_null_duration(self) -> None:
        episode = episode_from_record(
            {
                "id": "e",
                "show_id": "s",
                "season_id": "se",
                "episode_number": 1,
                "video_url": "https://x",
                "duration": None,
            }
        )
        assert episode.duration is None
        assert episode.title == ""

    def test_episode_duration_string(self) -> None:
        episode = episode_from_record(
            {
                "id": "e",
                "show_id": "s",
                "season_id": "se",
                "episode_number": "4",
                "video_url": "https://x",
                "duration": "90",
            }
        )
        assert episode.episode_number == 4
        assert episode.duration == 90


class TestToRecord:
    def test_show_round_trip(self) -> None:
        show = Show(id="s", name="Dark", description="d", poster_url="p")
        assert show_from_record(show_to_record(show)) == show

    def test_season_record_keys(self) -> None:
        record = season_to_record(Season(id="a", show_id="s", season_number=1))
        assert record == {"id": "a", "show_id": "s", "season_number": 1, "name": ""}

    def test_episode_record_keeps_raw_video_url(self) -> None:
        episode = Episode(
            id="e",
            show_id="s",
            season_id="se",
            episode_number=1,
            video_url="https://youtu.be/dQw4w9WgXcQ",
            duration=60,
        )
        record = episode_to_record(episode)
        assert record["video_url"] == "https://youtu.be/dQw4w9WgXcQ"
        assert record["duration"] == 60

    def test_fields_record_has_no_id(self) -> None:
        record = episode_fields_to_record(
            EpisodeFields(show_id="s", season_id="se", episode_number=1, video_url="u")
        )
        assert "id" not in record
        assert record["duration"] is None
