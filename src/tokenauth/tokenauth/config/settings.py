# ABOUTME: Main configuration composition for the token authentication library
# ABOUTME: Adds token lifecycle, header and database settings on top of the base settings

from functools import lru_cache

from pydantic import Field, field_validator

from ._base import BaseCoreSettings


class TokenAuthSettings(BaseCoreSettings):
    """Represents the complete configuration for token issuance and verification.

    Values are injected into `TokenIssuer` and `TokenAuthenticationStrategy` at
    construction time. Components never read a process-wide constant, so two
    issuers with different caps can live side by side.

    Attributes:
        MAXIMUM_TOKENS_PER_USER: Tokens retained per principal after a purge.
        TOUCH_INTERVAL_SECONDS: Minimum age of ``last_used_at`` before a verified
            use writes a new timestamp.
        DIGEST_KEY: Fixed HMAC label binding digests to their purpose. It is a
            label, not a secret, and is not meant to be rotated.
        TOKEN_LENGTH: Number of random bytes behind each raw token.
        API_KEY_HEADER: Header carrying the principal lookup key.
        API_TOKEN_HEADER: Header carrying the raw token secret.
        DATABASE_URL: SQLAlchemy URL used by the relational token store.
    """

    MAXIMUM_TOKENS_PER_USER: int = Field(
        default=20,
        ge=1,
        description="Tokens retained per principal after purging the least recently used ones.",
    )
    TOUCH_INTERVAL_SECONDS: int = Field(
        default=3600,
        ge=0,
        description="Throttle window for last_used_at writes, in seconds.",
    )
    DIGEST_KEY: str = Field(
        default="API Key body",
        min_length=1,
        description="Fixed HMAC-SHA256 domain label used to digest raw tokens.",
    )
    TOKEN_LENGTH: int = Field(
        default=64,
        ge=64,
        description="Random bytes of entropy per generated token.",
    )
    API_KEY_HEADER: str = Field(
        default="X-API-KEY",
        description="Request header holding the principal lookup key.",
    )
    API_TOKEN_HEADER: str = Field(
        default="X-API-TOKEN",
        description="Request header holding the raw token secret.",
    )
    DATABASE_URL: str = Field(
        default="sqlite:///:memory:",
        description="SQLAlchemy database URL for the relational token store.",
    )

    @field_validator("API_KEY_HEADER", "API_TOKEN_HEADER", mode="before")
    @classmethod
    def validate_header_name(cls, v: str) -> str:
        """Strip header names and reject blank ones."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Header names must not be blank")
        return v


@lru_cache
def get_settings() -> TokenAuthSettings:
    """Provides a cached instance of the library settings.

    Returns:
        A single, cached instance of TokenAuthSettings.
    """
    return TokenAuthSettings()
