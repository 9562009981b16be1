# ABOUTME: In-memory document-style implementation of the token store interfaces
# ABOUTME: Keeps each principal's tokens as plain dict documents guarded by a reentrant lock

import threading
import uuid
from datetime import datetime, UTC
from typing import Any, Dict, List

from tokenauth.exceptions import StorageError
from tokenauth.interfaces.storage.token_store import AbstractTokenRepository, AbstractTokenStore
from tokenauth.models.auth.auth_token import AuthenticationToken
from tokenauth.models.types import TokenAttributes

Document = Dict[str, Any]


class InMemoryTokenRepository(AbstractTokenRepository):
    """
    In-memory, document-oriented token repository.

    Tokens are stored as schemaless dict documents grouped into one collection
    per principal, the way a document database embeds a collection in its
    owner. Reads return fresh `AuthenticationToken` models built from the
    documents, so mutating a returned token never changes stored state.

    Features:
    - "where"-style queries over documents
    - Global digest uniqueness, mirroring a unique index
    - Thread-safe operations

    Note:
        All data is lost when the process restarts. Use the SQLAlchemy backend
        for persistent storage.
    """

    def __init__(self):
        self._collections: Dict[str, List[Document]] = {}
        self._lock = threading.RLock()

    def for_owner(self, principal_id: str) -> "InMemoryTokenStore":
        return InMemoryTokenStore(self, principal_id)

    def digest_exists(self, digest: str) -> bool:
        with self._lock:
            return any(doc["digest"] == digest for docs in self._collections.values() for doc in docs)

    def collection(self, principal_id: str) -> List[Document]:
        """The live document list of a principal (created on first use)."""
        with self._lock:
            return self._collections.setdefault(principal_id, [])

    def clear(self) -> None:
        """Remove every stored token."""
        with self._lock:
            self._collections.clear()

    @property
    def lock(self) -> threading.RLock:
        return self._lock


class InMemoryTokenStore(AbstractTokenStore):
    """Token collection of a single principal inside an `InMemoryTokenRepository`."""

    def __init__(self, repository: InMemoryTokenRepository, principal_id: str):
        self._repository = repository
        self._principal_id = principal_id

    @property
    def principal_id(self) -> str:
        return self._principal_id

    def _where(self, **criteria: Any) -> List[Document]:
        docs = self._repository.collection(self._principal_id)
        return [doc for doc in docs if all(doc.get(field) == value for field, value in criteria.items())]

    @staticmethod
    def _to_model(doc: Document) -> AuthenticationToken:
        return AuthenticationToken.model_validate(doc)

    def create(self, attributes: TokenAttributes) -> AuthenticationToken:
        with self._repository.lock:
            if self._repository.digest_exists(attributes["digest"]):
                raise StorageError(
                    "A token with this digest already exists",
                    code="DUPLICATE_DIGEST",
                    details={"operation": "create", "principal_id": self._principal_id},
                )
            doc: Document = {
                "id": uuid.uuid4().hex,
                "principal_id": self._principal_id,
                "digest": attributes["digest"],
                "last_used_at": attributes["last_used_at"],
                "expires_in": attributes.get("expires_in"),
                "ip_address": attributes.get("ip_address"),
                "user_agent": attributes.get("user_agent"),
                "created_at": datetime.now(UTC),
            }
            token = self._to_model(doc)
            self._repository.collection(self._principal_id).append(doc)
            return token

    def find_by_digest(self, digest: str) -> AuthenticationToken | None:
        with self._repository.lock:
            matches = self._where(digest=digest)
            return self._to_model(matches[0]) if matches else None

    def list_ordered_by_last_used_descending(self) -> list[AuthenticationToken]:
        with self._repository.lock:
            docs = sorted(self._where(), key=lambda doc: doc["last_used_at"], reverse=True)
            return [self._to_model(doc) for doc in docs]

    def update_last_used(self, token: AuthenticationToken, last_used_at: datetime) -> AuthenticationToken:
        with self._repository.lock:
            for doc in self._where(id=token.id):
                doc["last_used_at"] = last_used_at
        return token.model_copy(update={"last_used_at": last_used_at})

    def delete(self, token: AuthenticationToken) -> None:
        with self._repository.lock:
            docs = self._repository.collection(self._principal_id)
            docs[:] = [doc for doc in docs if doc["id"] != token.id]

    def count(self) -> int:
        with self._repository.lock:
            return len(self._where())
