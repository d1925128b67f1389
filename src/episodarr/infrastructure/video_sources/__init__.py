"""Video source rules for turning raw links into embeddable playback URLs."""

from __future__ import annotations

from .registry import VideoSourceResolver, default_rules, resolve

__all__ = ["VideoSourceResolver", "default_rules", "resolve"]
