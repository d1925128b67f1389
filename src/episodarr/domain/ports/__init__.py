from .catalog_repository import CatalogRepository
from .video_source import VideoSourceResolverPort, VideoSourceRulePort

__all__ = [
    "CatalogRepository",
    "VideoSourceResolverPort",
    "VideoSourceRulePort",
]
