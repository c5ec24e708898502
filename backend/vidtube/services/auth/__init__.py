from .dto import AuthContext, LoginIn, LoginOut, RefreshIn, TokenPairOut
from .service import AuthService

__all__ = ["AuthContext", "AuthService", "LoginIn", "LoginOut", "RefreshIn", "TokenPairOut"]
