# ABOUTME: Authentication interfaces package exports
# ABOUTME: Exports abstract classes for authentication strategies and principal lookup

from .authenticator import AbstractAuthenticator
from .principal_repository import AbstractPrincipalRepository

__all__ = [
    "AbstractAuthenticator",
    "AbstractPrincipalRepository",
]
