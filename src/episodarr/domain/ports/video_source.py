"""Port for provider-specific video URL rules."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from episodarr.domain.entities.video_source import ResolvedVideoSource, VideoProvider


@runtime_checkable
class VideoSourceRulePort(Protocol):
    """One ``(predicate, extractor, builder)`` step of the resolver pipeline.

    Implementations are pure: no I/O, no state, safe to share.
    """

    @property
    def kind(self) -> VideoProvider:
        """Provider kind assigned when this rule succeeds."""
        ...

    def matches(self, url: str) -> bool:
        """Cheap host check deciding whether the extractor is attempted."""
        ...

    def extract_id(self, url: str) -> str | None:
        """Return the provider's video/file id, or None when absent.

        A None result lets resolution continue with the next rule.
        """
        ...

    def build_url(self, video_id: str) -> str:
        """Build the embeddable playback URL for an extracted id."""
        ...


@runtime_checkable
class VideoSourceResolverPort(Protocol):
    """Turns a stored raw link into its embeddable form. Never raises."""

    def resolve(self, raw_url: str | None) -> ResolvedVideoSource: ...
