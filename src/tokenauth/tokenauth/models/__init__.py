# ABOUTME: Models package exports
# ABOUTME: Re-exports authentication models and shared type definitions

from .auth import (
    AuthRequest,
    HeaderAuthRequest,
    RequestContext,
    AuthenticationToken,
    AuthFailure,
    AuthStatus,
    Principal,
    SimplePrincipal,
    AuthResult,
)
from .types import TokenAttributes

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
    "TokenAttributes",
]
