from .dto import AccountDetailsIn, ChannelProfileOut, PasswordChangeIn
from .service import AccountService

__all__ = ["AccountDetailsIn", "AccountService", "ChannelProfileOut", "PasswordChangeIn"]
