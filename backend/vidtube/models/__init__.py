from vidtube.models.account import Account
from vidtube.models.like import Like
from vidtube.models.subscription import Subscription
from vidtube.models.tweet import Tweet
from vidtube.models.video import Comment, Video, WatchHistoryEntry

__all__ = [
    "Account",
    "Comment",
    "Like",
    "Subscription",
    "Tweet",
    "Video",
    "WatchHistoryEntry",
]
