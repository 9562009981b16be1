"""
Relational model for authentication tokens.

Each row holds the HMAC digest of a raw token, never the token itself, plus
the timestamps needed for sliding expiry and provenance captured at issuance.
"""

import uuid
from datetime import datetime, UTC

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, UniqueConstraint

from tokenauth.implementations.sql.database import Base
from tokenauth.models.auth.auth_token import AuthenticationToken


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AuthenticationTokenRecord(Base):
    """
    Authentication token row.

    The unique constraint on ``digest`` backs the issuer's collision check: a
    concurrent issuance that loses the race fails on insert instead of storing
    a duplicate.
    """

    __tablename__ = "authentication_tokens"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    principal_id = Column(String(255), nullable=False)

    # HMAC-SHA256 hex digest of the raw token
    digest = Column(String(64), nullable=False)

    last_used_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    expires_in = Column(Integer, nullable=True)  # seconds; NULL or 0 never expires

    # Provenance, advisory only
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("digest", name="uq_authentication_token_digest"),
        Index("ix_authentication_token_owner_last_used", "principal_id", "last_used_at"),
    )

    def to_model(self) -> AuthenticationToken:
        return AuthenticationToken(
            id=self.id,
            principal_id=self.principal_id,
            digest=self.digest,
            last_used_at=self.last_used_at,
            expires_in=self.expires_in,
            ip_address=self.ip_address,
            user_agent=self.user_agent,
            created_at=self.created_at,
        )
