"""Google Drive rule: shared file links to the ``/preview`` player.

File ids are looked up in two places, in order:
    drive.google.com/file/d/FILE_ID/view   (path form)
    drive.google.com/open?id=FILE_ID       (query form, also ``&id=``)

Drive links without a file id (folders, the Drive home page) yield no id;
the resolver then keeps evaluating the remaining rules.
"""

from __future__ import annotations

import re

from episodarr.domain.entities.video_source import VideoProvider

_PATH_ID_RE = re.compile(r"/d/([A-Za-z0-9_-]+)")
_QUERY_ID_RE = re.compile(r"[?&]id=([A-Za-z0-9_-]+)")


class GoogleDriveRule:
    supported_domains = frozenset({"drive.google.com"})

    @property
    def kind(self) -> VideoProvider:
        return VideoProvider.GOOGLE_DRIVE

    def matches(self, url: str) -> bool:
        return any(domain in url for domain in self.supported_domains)

    def extract_id(self, url: str) -> str | None:
        for pattern in (_PATH_ID_RE, _QUERY_ID_RE):
            match = pattern.search(url)
            if match:
                return match.group(1)
        return None

    def build_url(self, video_id: str) -> str:
        return f"https://drive.google.com/file/d/{video_id}/preview"
