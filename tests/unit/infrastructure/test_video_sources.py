"""Tests for the video source rules and the resolver pipeline."""

from __future__ import annotations

import pytest

from episodarr.domain.entities import ResolvedVideoSource, VideoProvider
from episodarr.domain.ports import VideoSourceRulePort
from episodarr.infrastructure.video_sources import (
    VideoSourceResolver,
    default_rules,
    resolve,
)
from episodarr.infrastructure.video_sources.googledrive import GoogleDriveRule
from episodarr.infrastructure.video_sources.vimeo import VimeoRule
from episodarr.infrastructure.video_sources.youtube import YouTubeRule

_YT_EMBED = "https://www.youtube.com/embed/dQw4w9WgXcQ?autoplay=1&rel=0&modestbranding=1"


class TestYouTubeRule:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/v/dQw4w9WgXcQ",
            "https://m.youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
        ],
    )
    def test_extracts_id(self, url: str) -> None:
        rule = YouTubeRule()
        assert rule.matches(url)
        assert rule.extract_id(url) == "dQw4w9WgXcQ"

    def test_short_id_not_extracted(self) -> None:
        assert YouTubeRule().extract_id("https://youtu.be/abc") is None

    def test_channel_page_has_no_id(self) -> None:
        assert YouTubeRule().extract_id("https://www.youtube.com/@somechannel") is None

    def test_build_url(self) -> None:
        assert YouTubeRule().build_url("dQw4w9WgXcQ") == _YT_EMBED

    def test_satisfies_port(self) -> None:
        assert isinstance(YouTubeRule(), VideoSourceRulePort)


class TestGoogleDriveRule:
    def test_path_form(self) -> None:
        url = "https://drive.google.com/file/d/1AbC_dEf-9/view?usp=sharing"
        assert GoogleDriveRule().extract_id(url) == "1AbC_dEf-9"

    def test_query_form(self) -> None:
        url = "https://drive.google.com/open?id=1AbC_dEf-9"
        assert GoogleDriveRule().extract_id(url) == "1AbC_dEf-9"

    def test_query_form_after_other_params(self) -> None:
        url = "https://drive.google.com/uc?export=download&id=XyZ123"
        assert GoogleDriveRule().extract_id(url) == "XyZ123"

    def test_folder_has_no_id(self) -> None:
        url = "https://drive.google.com/drive/folders"
        rule = GoogleDriveRule()
        assert rule.matches(url)
        assert rule.extract_id(url) is None

    def test_build_url(self) -> None:
        assert (
            GoogleDriveRule().build_url("abc")
            == "https://drive.google.com/file/d/abc/preview"
        )

    def test_matches_uses_supported_domains(self) -> None:
        rule = GoogleDriveRule()
        rule.supported_domains = frozenset({"docs.google.com"})
        assert rule.matches("https://docs.google.com/file/d/abc/view")
        assert not rule.matches("https://drive.google.com/file/d/abc/view")


class TestVimeoRule:
    @pytest.mark.parametrize(
        "url",
        [
            "https://vimeo.com/76979871",
            "https://vimeo.com/channels/staffpicks/76979871",
            "http://www.vimeo.com/76979871",
        ],
    )
    def test_extracts_id(self, url: str) -> None:
        assert VimeoRule().extract_id(url) == "76979871"

    def test_non_numeric_path(self) -> None:
        assert VimeoRule().extract_id("https://vimeo.com/about") is None

    def test_build_url(self) -> None:
        assert (
            VimeoRule().build_url("1")
            == "https://player.vimeo.com/video/1?autoplay=1"
        )

    def test_matches_uses_supported_domains(self) -> None:
        rule = VimeoRule()
        assert rule.matches("https://vimeo.com/1")
        rule.supported_domains = frozenset({"player.vimeo.com"})
        assert not rule.matches("https://vimeo.com/1")


class TestResolver:
    def test_empty_input(self) -> None:
        assert resolve("") == ResolvedVideoSource(kind=VideoProvider.DIRECT, url="")

    def test_none_input(self) -> None:
        assert resolve(None) == ResolvedVideoSource(kind=VideoProvider.DIRECT, url="")

    def test_youtube_watch_and_short_link_agree(self) -> None:
        watch = resolve("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        short = resolve("https://youtu.be/dQw4w9WgXcQ")
        assert watch == short
        assert watch.kind is VideoProvider.YOUTUBE
        assert watch.url == _YT_EMBED

    def test_drive_view_link(self) -> None:
        src = resolve("https://drive.google.com/file/d/1AbC_dEf-9/view")
        assert src.kind is VideoProvider.GOOGLE_DRIVE
        assert src.url == "https://drive.google.com/file/d/1AbC_dEf-9/preview"

    def test_drive_open_link(self) -> None:
        src = resolve("https://drive.google.com/open?id=1AbC_dEf-9")
        assert src.url == "https://drive.google.com/file/d/1AbC_dEf-9/preview"

    def test_vimeo(self) -> None:
        src = resolve("https://vimeo.com/76979871")
        assert src.kind is VideoProvider.VIMEO
        assert src.url == "https://player.vimeo.com/video/76979871?autoplay=1"

    def test_drive_without_id_falls_back_to_direct(self) -> None:
        url = "https://drive.google.com/drive/folders"
        assert resolve(url) == ResolvedVideoSource(kind=VideoProvider.DIRECT, url=url)

    def test_unknown_host_is_direct(self) -> None:
        url = "https://cdn.example.com/media/ep1.mp4"
        assert resolve(url) == ResolvedVideoSource(kind=VideoProvider.DIRECT, url=url)

    def test_matching_rule_without_id_lets_next_rule_win(self) -> None:
        # A Drive URL whose query smuggles a Vimeo link.
        url = "https://drive.google.com/drive/folders?next=vimeo.com/123"
        src = resolve(url)
        assert src.kind is VideoProvider.VIMEO
        assert src.url == "https://player.vimeo.com/video/123?autoplay=1"

    def test_rule_order_is_priority(self) -> None:
        url = "https://youtu.be/dQw4w9WgXcQ?from=vimeo.com/123"
        assert resolve(url).kind is VideoProvider.YOUTUBE

        vimeo_first = VideoSourceResolver(rules=[VimeoRule(), YouTubeRule()])
        assert vimeo_first.resolve(url).kind is VideoProvider.VIMEO

    def test_resolution_is_deterministic(self) -> None:
        url = "https://vimeo.com/76979871"
        assert resolve(url) == resolve(url)

    def test_providers_in_evaluation_order(self) -> None:
        assert VideoSourceResolver().providers == [
            VideoProvider.YOUTUBE,
            VideoProvider.GOOGLE_DRIVE,
            VideoProvider.VIMEO,
            VideoProvider.DIRECT,
        ]

    def test_no_rules_everything_direct(self) -> None:
        resolver = VideoSourceResolver(rules=[])
        src = resolver.resolve("https://youtu.be/dQw4w9WgXcQ")
        assert src.kind is VideoProvider.DIRECT

    def test_default_rules_are_fresh_instances(self) -> None:
        assert default_rules() is not default_rules()
