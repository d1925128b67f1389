"""Vimeo rule: numeric video ids to the autoplaying player URL.

Matches ``vimeo.com/ID`` and ``vimeo.com/<path>/ID`` (channels, groups,
showcases). The id is the last run of digits that directly follows a slash.
"""

from __future__ import annotations

import re

from episodarr.domain.entities.video_source import VideoProvider

_VIDEO_ID_RE = re.compile(r"vimeo\.com/(?:.*/)?(\d+)")


class VimeoRule:
    supported_domains = frozenset({"vimeo.com"})

    @property
    def kind(self) -> VideoProvider:
        return VideoProvider.VIMEO

    def matches(self, url: str) -> bool:
        return any(domain in url for domain in self.supported_domains)

    def extract_id(self, url: str) -> str | None:
        match = _VIDEO_ID_RE.search(url)
        return match.group(1) if match else None

    def build_url(self, video_id: str) -> str:
        return f"https://player.vimeo.com/video/{video_id}?autoplay=1"
