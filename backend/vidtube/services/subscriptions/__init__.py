from .dto import SubscribedChannelOut, SubscriberOut, SubscriptionToggleOut
from .service import SubscriptionService

__all__ = [
    "SubscribedChannelOut",
    "SubscriberOut",
    "SubscriptionService",
    "SubscriptionToggleOut",
]
