# ABOUTME: Abstract token store interfaces for per-principal token persistence
# ABOUTME: Defines the contract every storage backend (document or relational) implements

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from tokenauth.exceptions import AmbiguousTokenOwnerError
from tokenauth.models.auth.auth_token import AuthenticationToken
from tokenauth.models.types import TokenAttributes


class AbstractTokenStore(ABC):
    """
    Abstract store over the set of tokens belonging to one principal.

    Every lookup is a "where"-style query that returns the first match or
    `None`. Implementations must not rely on primary-key fetches that raise for
    absent rows, since document and relational backends disagree on that.
    """

    @property
    @abstractmethod
    def principal_id(self) -> str:
        """The identifier of the principal this store is scoped to."""
        pass

    @abstractmethod
    def create(self, attributes: TokenAttributes) -> AuthenticationToken:
        """
        Persist a new token for the principal.

        Args:
            attributes: Digest, timestamps and provenance of the new token.

        Returns:
            AuthenticationToken: The stored token, including its assigned id.

        Raises:
            StorageError: If the token cannot be stored, including a digest
                          uniqueness violation.
        """
        pass

    @abstractmethod
    def find_by_digest(self, digest: str) -> AuthenticationToken | None:
        """
        Find the principal's token whose digest equals `digest`.

        Returns:
            AuthenticationToken | None: The first match, or `None`.

        Raises:
            StorageError: If the store cannot be queried.
        """
        pass

    @abstractmethod
    def list_ordered_by_last_used_descending(self) -> list[AuthenticationToken]:
        """
        List the principal's tokens, most recently used first.

        Raises:
            StorageError: If the store cannot be queried.
        """
        pass

    @abstractmethod
    def update_last_used(self, token: AuthenticationToken, last_used_at: datetime) -> AuthenticationToken:
        """
        Write a new `last_used_at` for a token.

        Returns:
            AuthenticationToken: The token with the updated timestamp.

        Raises:
            StorageError: If the update cannot be written.
        """
        pass

    @abstractmethod
    def delete(self, token: AuthenticationToken) -> None:
        """
        Delete a token. Deleting a token that no longer exists is a no-op.

        Raises:
            StorageError: If the deletion cannot be performed.
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of tokens currently stored for the principal."""
        pass


class AbstractTokenRepository(ABC):
    """
    Backend adapter producing per-principal token stores.

    One implementation exists per persistence backend. The issuer depends only
    on this interface and never inspects which backend it is talking to.
    """

    @abstractmethod
    def for_owner(self, principal_id: str) -> AbstractTokenStore:
        """
        Return the token store scoped to the principal with id `principal_id`.
        """
        pass

    @abstractmethod
    def digest_exists(self, digest: str) -> bool:
        """
        Check whether any principal owns a token with this digest.

        Used to keep digests globally unique at issuance time.

        Raises:
            StorageError: If the store cannot be queried.
        """
        pass

    def for_principal(self, principal: Any) -> AbstractTokenStore:
        """
        Return the token store for `principal`.

        Raises:
            AmbiguousTokenOwnerError: If the principal exposes no usable `id`.
        """
        return self.for_owner(self.resolve_owner_id(principal))

    @staticmethod
    def resolve_owner_id(principal: Any) -> str:
        owner_id = getattr(principal, "id", None)
        if owner_id is None or (isinstance(owner_id, str) and not owner_id.strip()):
            raise AmbiguousTokenOwnerError(
                "Cannot determine the token collection of principal; it exposes no identifier",
                details={"principal_type": type(principal).__name__},
            )
        return str(owner_id)
