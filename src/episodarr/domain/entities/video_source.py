"""Domain entities for video source resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class VideoProvider(str, Enum):
    """Provider kinds, in resolution priority order (DIRECT is the catch-all)."""

    YOUTUBE = "youtube"
    GOOGLE_DRIVE = "googledrive"
    VIMEO = "vimeo"
    DIRECT = "direct"


@dataclass(frozen=True)
class ResolvedVideoSource:
    """Embeddable playback form of a raw video link.

    Derived on demand from ``Episode.video_url`` and never persisted.
    """

    kind: VideoProvider
    url: str

    def as_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "url": self.url}
