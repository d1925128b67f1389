"""YouTube rule: watch/embed/short links to the privacy-light embed player.

Recognised forms:
    youtube.com/watch?v=ID        (``v`` may follow other query params)
    youtube.com/embed/ID, /v/ID, /e/ID
    youtube.com/<path>/<anything>/ID
    youtu.be/ID

The video id is 11 characters of ``[A-Za-z0-9_-]``.
"""

from __future__ import annotations

import re

from episodarr.domain.entities.video_source import VideoProvider

_VIDEO_ID_RE = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)"
    r"([A-Za-z0-9_-]{11})"
)

_EMBED_BASE = "https://www.youtube.com/embed/"
_EMBED_PARAMS = "autoplay=1&rel=0&modestbranding=1"


class YouTubeRule:
    """Extracts the 11-char video id and builds the canonical embed URL."""

    supported_domains = frozenset({"youtube.com", "youtu.be"})

    @property
    def kind(self) -> VideoProvider:
        return VideoProvider.YOUTUBE

    def matches(self, url: str) -> bool:
        return any(domain in url for domain in self.supported_domains)

    def extract_id(self, url: str) -> str | None:
        match = _VIDEO_ID_RE.search(url)
        return match.group(1) if match else None

    def build_url(self, video_id: str) -> str:
        return f"{_EMBED_BASE}{video_id}?{_EMBED_PARAMS}"
