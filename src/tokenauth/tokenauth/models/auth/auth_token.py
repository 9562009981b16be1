from datetime import datetime, timedelta, UTC

from pydantic import BaseModel, Field, field_validator


class AuthenticationToken(BaseModel):
    """
    A stored authentication token belonging to exactly one principal.

    Only the HMAC digest of the raw secret is kept; the raw value handed to the
    client cannot be recovered from this record. Expiry is not stored: it is
    recomputed from `last_used_at` and `expires_in` on every check, so an
    expired token still occupies storage until it is revoked or purged.
    """

    id: str = Field(description="Store-assigned identifier")
    principal_id: str = Field(description="Identifier of the owning principal")
    digest: str = Field(min_length=64, max_length=64, description="Hex HMAC-SHA256 of the raw secret")
    last_used_at: datetime = Field(description="Creation time, then the last throttled verified use")
    expires_in: int | None = Field(
        default=None, ge=0, description="Sliding expiry window in seconds; None or 0 never expires"
    )
    ip_address: str | None = Field(default=None, description="Client address at issuance")
    user_agent: str | None = Field(default=None, description="Client user agent at issuance")
    created_at: datetime | None = Field(default=None, description="When the token was issued")

    @field_validator("last_used_at", "created_at")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        """Interpret naive datetimes returned by a backend as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def never_expires(self) -> bool:
        """Whether the token has no expiry window at all."""
        return not self.expires_in

    @property
    def expires_at(self) -> datetime | None:
        """The moment the token stops being usable unless it is used again first."""
        if self.never_expires:
            return None
        return self.last_used_at + timedelta(seconds=self.expires_in)

    def __repr__(self) -> str:
        return (
            f"AuthenticationToken("
            f"id={self.id!r}, "
            f"principal_id={self.principal_id!r}, "
            f"last_used_at={self.last_used_at.isoformat()}, "
            f"expires_in={self.expires_in}"
            f")"
        )
