# ABOUTME: Common type definitions for improved type safety across the library
# ABOUTME: Provides TypedDict classes describing token attributes handed to token stores

from datetime import datetime
from typing import TypedDict


class TokenAttributes(TypedDict, total=False):
    """Type definition for the attributes of a token being persisted.

    The raw secret is never part of these attributes; only its digest is.
    """

    digest: str
    last_used_at: datetime
    expires_in: int | None
    ip_address: str | None
    user_agent: str | None
