# ABOUTME: In-memory implementations package
# ABOUTME: Zero-dependency implementations using Python standard library only

from .auth import InMemoryPrincipalRepository, InMemoryTokenRepository, InMemoryTokenStore

__all__ = [
    "InMemoryPrincipalRepository",
    "InMemoryTokenRepository",
    "InMemoryTokenStore",
]
