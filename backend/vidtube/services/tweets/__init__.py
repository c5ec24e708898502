from .dto import TweetFeedItemOut, TweetOut, TweetOwnerOut
from .service import TweetService

__all__ = ["TweetFeedItemOut", "TweetOut", "TweetOwnerOut", "TweetService"]
