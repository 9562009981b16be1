"""
Relational token store built on SQLAlchemy.

Every operation runs in its own transactional session scope. Database errors
are wrapped in `StorageError` and propagated; this layer never retries.
"""

import uuid
from contextlib import contextmanager
from datetime import datetime, UTC
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tokenauth.config.logging import get_logger
from tokenauth.exceptions import StorageError
from tokenauth.implementations.sql.auth.models import AuthenticationTokenRecord
from tokenauth.implementations.sql.database import DatabaseManager
from tokenauth.interfaces.storage.token_store import AbstractTokenRepository, AbstractTokenStore
from tokenauth.models.auth.auth_token import AuthenticationToken
from tokenauth.models.types import TokenAttributes

logger = get_logger(__name__)


@contextmanager
def _guarded_session(database: DatabaseManager, operation: str, principal_id: str | None = None) -> Iterator[Session]:
    try:
        with database.session_scope() as session:
            yield session
    except IntegrityError as e:
        # Only the digest carries a unique constraint beyond the generated primary key
        logger.warning(f"Token store operation '{operation}' hit a duplicate digest")
        raise StorageError(
            "A token with this digest already exists",
            code="DUPLICATE_DIGEST",
            details={"operation": operation, "principal_id": principal_id},
        ) from e
    except SQLAlchemyError as e:
        logger.error(f"Token store operation '{operation}' failed: {type(e).__name__}")
        raise StorageError(
            f"Token store unavailable during {operation}",
            code="STORE_UNAVAILABLE",
            details={"operation": operation, "principal_id": principal_id, "error_type": type(e).__name__},
        ) from e


class SqlAlchemyTokenRepository(AbstractTokenRepository):
    """
    Relational token repository.

    Tokens of all principals live in one ``authentication_tokens`` table and a
    principal's store is a ``WHERE principal_id = :id`` view over it.
    """

    def __init__(self, database: DatabaseManager):
        self.database = database

    def for_owner(self, principal_id: str) -> "SqlAlchemyTokenStore":
        return SqlAlchemyTokenStore(self.database, principal_id)

    def digest_exists(self, digest: str) -> bool:
        with _guarded_session(self.database, "digest_exists") as session:
            match = (
                session.query(AuthenticationTokenRecord.id)
                .filter(AuthenticationTokenRecord.digest == digest)
                .first()
            )
            return match is not None


class SqlAlchemyTokenStore(AbstractTokenStore):
    """Token rows of a single principal."""

    def __init__(self, database: DatabaseManager, principal_id: str):
        self.database = database
        self._principal_id = principal_id

    @property
    def principal_id(self) -> str:
        return self._principal_id

    def _session(self, operation: str):
        return _guarded_session(self.database, operation, self._principal_id)

    def _owned(self, session: Session):
        return session.query(AuthenticationTokenRecord).filter(
            AuthenticationTokenRecord.principal_id == self._principal_id
        )

    def create(self, attributes: TokenAttributes) -> AuthenticationToken:
        record = AuthenticationTokenRecord(
            id=str(uuid.uuid4()),
            principal_id=self._principal_id,
            digest=attributes["digest"],
            last_used_at=attributes["last_used_at"],
            expires_in=attributes.get("expires_in"),
            ip_address=attributes.get("ip_address"),
            user_agent=attributes.get("user_agent"),
            created_at=datetime.now(UTC),
        )
        with self._session("create") as session:
            session.add(record)
            session.flush()
            return record.to_model()

    def find_by_digest(self, digest: str) -> AuthenticationToken | None:
        with self._session("find_by_digest") as session:
            # 'where' + first, not a primary-key style fetch
            record = self._owned(session).filter(AuthenticationTokenRecord.digest == digest).first()
            return record.to_model() if record is not None else None

    def list_ordered_by_last_used_descending(self) -> list[AuthenticationToken]:
        with self._session("list") as session:
            records = (
                self._owned(session)
                .order_by(AuthenticationTokenRecord.last_used_at.desc(), AuthenticationTokenRecord.created_at.desc())
                .all()
            )
            return [record.to_model() for record in records]

    def update_last_used(self, token: AuthenticationToken, last_used_at: datetime) -> AuthenticationToken:
        with self._session("update_last_used") as session:
            self._owned(session).filter(AuthenticationTokenRecord.id == token.id).update(
                {AuthenticationTokenRecord.last_used_at: last_used_at}, synchronize_session=False
            )
        return token.model_copy(update={"last_used_at": last_used_at})

    def delete(self, token: AuthenticationToken) -> None:
        with self._session("delete") as session:
            self._owned(session).filter(AuthenticationTokenRecord.id == token.id).delete(synchronize_session=False)

    def count(self) -> int:
        with self._session("count") as session:
            return self._owned(session).count()
