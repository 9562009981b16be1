# ABOUTME: Core exception classes for the token authentication library
# ABOUTME: Provides structured error handling with context and error codes

from typing import Dict, Any


class TokenAuthException(Exception):
    """Base exception class for the token authentication library.

    Provides structured error handling with optional error codes and contextual
    details. All custom exceptions in the library inherit from this class to
    ensure consistent error handling patterns.

    Attributes:
        message: Human-readable error message
        code: Optional error code for programmatic handling
        details: Optional dictionary containing contextual information
    """

    def __init__(self, message: str, code: str | None = None, details: Dict[str, Any] | None = None):
        """Initialize TokenAuthException with message, optional code and details.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            details: Optional dictionary containing contextual information
        """
        self.message = message
        self.code = code
        self.details = details.copy() if details else {}
        super().__init__(self.message)


class ValidationException(TokenAuthException):
    """Exception raised for data validation errors.

    Used when input data fails validation checks, such as a negative
    ``expires_in`` or a malformed token record coming back from a store.
    """

    pass


class ConfigurationException(TokenAuthException):
    """Exception raised for configuration errors.

    Used when the library is wired incorrectly, such as:
    - A non-positive per-principal token cap
    - A token length below the minimum entropy
    - Invalid database configuration

    These surface at setup time, never per request.
    """

    pass


class AmbiguousTokenOwnerError(ConfigurationException):
    """Exception raised when the owner of a token collection cannot be determined.

    Raised when the issuer is handed something that is not a token repository,
    or when a principal exposes no usable identifier to scope its tokens by.
    This is an integration fault, not a per-request condition.
    """

    def __init__(self, message: str, details: Dict[str, Any] | None = None):
        super().__init__(message, code="AMBIGUOUS_TOKEN_OWNER", details=details)


class AuthenticationException(TokenAuthException):
    """Exception raised for authentication errors.

    Used when authentication fails and the caller prefers an exception over
    inspecting an `AuthResult`.
    """

    pass


class InvalidTokenError(AuthenticationException):
    """Exception raised when presented credentials do not authenticate.

    Unknown principal, unknown token and expired token all map to this single
    error so callers cannot tell which part of the credential pair was wrong.
    """

    def __init__(self, message: str = "Invalid credentials", details: Dict[str, Any] | None = None):
        super().__init__(message, code="INVALID_TOKEN", details=details)


class StorageError(TokenAuthException):
    """Exception raised for token store failures.

    Used when the persistence layer cannot complete an operation, such as:
    - Database connection failures
    - Unique constraint violations on the token digest
    - Transaction failures

    Should include details about the storage operation that failed.
    """

    pass
