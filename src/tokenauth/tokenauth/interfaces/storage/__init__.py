# ABOUTME: Storage interfaces package exports
# ABOUTME: Exports abstract classes for per-principal token stores and backend repositories

from .token_store import AbstractTokenRepository, AbstractTokenStore

__all__ = [
    "AbstractTokenRepository",
    "AbstractTokenStore",
]
