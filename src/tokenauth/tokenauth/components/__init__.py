# ABOUTME: Components package exports
# ABOUTME: Backend-agnostic building blocks composed on top of the interfaces

from .auth import TokenAuthenticationStrategy, TokenIssuer

__all__ = [
    "TokenAuthenticationStrategy",
    "TokenIssuer",
]
