from .service import LikeService, LikeToggleOut

__all__ = ["LikeService", "LikeToggleOut"]
