"""Resolver that runs raw video links through an ordered list of provider rules."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from episodarr.domain.entities.video_source import ResolvedVideoSource, VideoProvider
from episodarr.domain.ports.video_source import VideoSourceRulePort

from .googledrive import GoogleDriveRule
from .vimeo import VimeoRule
from .youtube import YouTubeRule

log = structlog.get_logger(__name__)


def default_rules() -> list[VideoSourceRulePort]:
    """Built-in rules in priority order: YouTube, Google Drive, Vimeo."""
    return [YouTubeRule(), GoogleDriveRule(), VimeoRule()]


class VideoSourceResolver:
    """Classifies a raw URL and derives its embeddable playback URL.

    Rules are evaluated in registration order; the first rule whose
    predicate matches *and* whose extractor yields an id wins. A rule
    that matches the host but finds no id does not stop the pipeline.
    When nothing wins, the link is returned unchanged as ``direct``.

    ``resolve`` never raises and keeps no state between calls.
    """

    def __init__(self, rules: Iterable[VideoSourceRulePort] | None = None) -> None:
        self._rules: list[VideoSourceRulePort] = (
            list(rules) if rules is not None else default_rules()
        )

    @property
    def providers(self) -> list[VideoProvider]:
        """Provider kinds in evaluation order (``direct`` last)."""
        return [rule.kind for rule in self._rules] + [VideoProvider.DIRECT]

    def resolve(self, raw_url: str | None) -> ResolvedVideoSource:
        if not raw_url:
            return ResolvedVideoSource(kind=VideoProvider.DIRECT, url="")

        for rule in self._rules:
            if not rule.matches(raw_url):
                continue
            video_id = rule.extract_id(raw_url)
            if video_id is None:
                log.debug(
                    "video_source_rule_no_id",
                    provider=rule.kind.value,
                    url=raw_url,
                )
                continue
            resolved = ResolvedVideoSource(kind=rule.kind, url=rule.build_url(video_id))
            log.debug(
                "video_source_resolved",
                provider=resolved.kind.value,
                video_id=video_id,
            )
            return resolved

        return ResolvedVideoSource(kind=VideoProvider.DIRECT, url=raw_url)


_DEFAULT_RESOLVER = VideoSourceResolver()


def resolve(raw_url: str | None) -> ResolvedVideoSource:
    """Resolve ``raw_url`` with the built-in rule set."""
    return _DEFAULT_RESOLVER.resolve(raw_url)
