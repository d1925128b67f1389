from .catalog import (
    CascadePlan,
    CatalogEntity,
    CatalogError,
    CatalogExternalError,
    CatalogIntegrityError,
    CatalogNotFoundError,
    CatalogSnapshot,
    CatalogTree,
    CatalogValidationError,
    Episode,
    EpisodeFields,
    Season,
    SeasonFields,
    Show,
    ShowFields,
)
from .video_source import ResolvedVideoSource, VideoProvider

__all__ = [
    "CascadePlan",
    "CatalogEntity",
    "CatalogError",
    "CatalogExternalError",
    "CatalogIntegrityError",
    "CatalogNotFoundError",
    "CatalogSnapshot",
    "CatalogTree",
    "CatalogValidationError",
    "Episode",
    "EpisodeFields",
    "ResolvedVideoSource",
    "Season",
    "SeasonFields",
    "Show",
    "ShowFields",
    "VideoProvider",
]
