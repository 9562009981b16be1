# ABOUTME: Interfaces package exports
# ABOUTME: Abstract contracts implemented by components and storage backends

from .auth import AbstractAuthenticator, AbstractPrincipalRepository
from .storage import AbstractTokenRepository, AbstractTokenStore

__all__ = [
    "AbstractAuthenticator",
    "AbstractPrincipalRepository",
    "AbstractTokenRepository",
    "AbstractTokenStore",
]
