# ABOUTME: Authentication models package exports
# ABOUTME: Exports request, principal, token and result models

from .auth_request import AuthRequest, HeaderAuthRequest, RequestContext
from .auth_token import AuthenticationToken
from .enum import AuthFailure, AuthStatus
from .principal import Principal, SimplePrincipal
from .result import AuthResult

__all__ = [
    "AuthRequest",
    "HeaderAuthRequest",
    "RequestContext",
    "AuthenticationToken",
    "AuthFailure",
    "AuthStatus",
    "Principal",
    "SimplePrincipal",
    "AuthResult",
]
