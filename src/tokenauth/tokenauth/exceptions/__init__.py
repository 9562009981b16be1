# ABOUTME: Exceptions package exports
# ABOUTME: Exports the structured exception hierarchy of the token authentication library

from tokenauth.exceptions.base import (
    TokenAuthException,
    ValidationException,
    ConfigurationException,
    AmbiguousTokenOwnerError,
    AuthenticationException,
    InvalidTokenError,
    StorageError,
)

__all__ = [
    "TokenAuthException",
    "ValidationException",
    "ConfigurationException",
    "AmbiguousTokenOwnerError",
    "AuthenticationException",
    "InvalidTokenError",
    "StorageError",
]
