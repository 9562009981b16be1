# ABOUTME: Token issuer owning the lifecycle of opaque bearer tokens
# ABOUTME: Issues, finds, touches, expires, revokes and purges tokens through a token repository

import math
from datetime import datetime, timedelta, UTC
from typing import Any

from tokenauth.config.logging import get_logger
from tokenauth.config.settings import TokenAuthSettings, get_settings
from tokenauth.exceptions import AmbiguousTokenOwnerError, ConfigurationException, ValidationException
from tokenauth.interfaces.storage.token_store import AbstractTokenRepository
from tokenauth.models.auth.auth_request import AuthRequest
from tokenauth.models.auth.auth_token import AuthenticationToken
from tokenauth.models.types import TokenAttributes

from .utils import DEFAULT_DIGEST_KEY, MINIMUM_TOKEN_BYTES, generate_raw_token, token_digest


class TokenIssuer:
    """
    Authoritative lifecycle operations over the tokens of a principal.

    The issuer generates raw secrets, persists their digests through an
    `AbstractTokenRepository`, and decides whether a stored token is still
    usable. It holds no per-request state, so one instance can serve
    concurrent requests; the only shared resource is the backing store.

    Lifecycle of a single token:
        issued -> [touched]* -> expired (recomputed on each check)
                             -> revoked (explicit delete)
                             -> purged (deleted past the per-principal cap)

    Expiry is sliding: a token with ``expires_in`` stays usable while
    ``now <= last_used_at + expires_in``, and every throttled touch moves
    ``last_used_at`` forward.
    """

    def __init__(
        self,
        repository: AbstractTokenRepository,
        *,
        maximum_tokens_per_user: int = 20,
        touch_interval: timedelta = timedelta(hours=1),
        digest_key: str = DEFAULT_DIGEST_KEY,
        token_length: int = MINIMUM_TOKEN_BYTES,
        token_header: str = "X-API-TOKEN",
    ):
        """
        Initialize the issuer.

        Args:
            repository: Backend adapter producing per-principal token stores.
            maximum_tokens_per_user: Tokens kept per principal by `purge_old_tokens`.
            touch_interval: Minimum age of `last_used_at` before a use is written.
            digest_key: Fixed HMAC domain label.
            token_length: Random bytes behind each raw token (at least 64).
            token_header: Header read by `expire_token` to find the presented token.

        Raises:
            AmbiguousTokenOwnerError: If `repository` is not a token repository.
            ConfigurationException: If a numeric limit is out of range.
        """
        if not isinstance(repository, AbstractTokenRepository):
            raise AmbiguousTokenOwnerError(
                "Cannot determine authentication token storage; unsupported repository",
                details={"repository_type": type(repository).__name__},
            )
        if maximum_tokens_per_user < 1:
            raise ConfigurationException(
                "maximum_tokens_per_user must be at least 1",
                code="INVALID_TOKEN_CAP",
                details={"maximum_tokens_per_user": maximum_tokens_per_user},
            )
        if token_length < MINIMUM_TOKEN_BYTES:
            raise ConfigurationException(
                f"token_length must be at least {MINIMUM_TOKEN_BYTES} bytes",
                code="INVALID_TOKEN_LENGTH",
                details={"token_length": token_length},
            )
        if touch_interval < timedelta(0):
            raise ConfigurationException(
                "touch_interval must not be negative",
                code="INVALID_TOUCH_INTERVAL",
                details={"touch_interval": touch_interval.total_seconds()},
            )

        self.repository = repository
        self.maximum_tokens_per_user = maximum_tokens_per_user
        self.touch_interval = touch_interval
        self.digest_key = digest_key
        self.token_length = token_length
        self.token_header = token_header
        self._logger = get_logger(__name__)

    @classmethod
    def build(cls, repository: AbstractTokenRepository, settings: TokenAuthSettings | None = None) -> "TokenIssuer":
        """
        Build an issuer configured from settings.

        Args:
            repository: Backend adapter producing per-principal token stores.
            settings: Explicit settings; the cached environment settings otherwise.
        """
        settings = settings or get_settings()
        return cls(
            repository,
            maximum_tokens_per_user=settings.MAXIMUM_TOKENS_PER_USER,
            touch_interval=timedelta(seconds=settings.TOUCH_INTERVAL_SECONDS),
            digest_key=settings.DIGEST_KEY,
            token_length=settings.TOKEN_LENGTH,
            token_header=settings.API_TOKEN_HEADER,
        )

    def _now(self) -> datetime:
        return datetime.now(UTC)

    def digest(self, value: str) -> str:
        """Hex HMAC-SHA256 digest of a raw token under this issuer's domain label."""
        return token_digest(value, self.digest_key)

    def _generate_raw_token(self) -> str:
        return generate_raw_token(self.token_length)

    def _generate_unique_token(self) -> tuple[str, str]:
        """
        Generate a raw token whose digest no stored token already has.

        Returns:
            A (raw, digest) pair.
        """
        while True:
            raw = self._generate_raw_token()
            digest = self.digest(raw)
            if not self.repository.digest_exists(digest):
                return raw, digest
            self._logger.warning("Generated token digest collided with a stored token, regenerating")

    def create_and_return_token(
        self,
        principal: Any,
        request: AuthRequest | None = None,
        *,
        expires_in: float | timedelta | None = None,
    ) -> str:
        """
        Issue a new token for a principal and return its raw secret.

        The raw value exists outside the caller's hands only for the duration
        of this call. It must be delivered to its holder immediately and is
        never stored or logged; only its digest is persisted.

        Args:
            principal: The token owner.
            request: Provenance source; `remote_ip` and `user_agent` are read
                     when present.
            expires_in: Optional sliding expiry window, in seconds or as a
                        timedelta. `None` or 0 means the token never expires.

        Returns:
            The raw token secret.

        Raises:
            AmbiguousTokenOwnerError: If the principal exposes no identifier.
            ValidationException: If `expires_in` is negative.
            StorageError: If the token cannot be persisted.
        """
        store = self.repository.for_principal(principal)
        raw, digest = self._generate_unique_token()

        attributes: TokenAttributes = {
            "digest": digest,
            "last_used_at": self._now(),
            "ip_address": getattr(request, "remote_ip", None) if request is not None else None,
            "user_agent": getattr(request, "user_agent", None) if request is not None else None,
        }
        if expires_in is not None:
            attributes["expires_in"] = self._normalize_expires_in(expires_in)

        token = store.create(attributes)
        self._logger.info(
            f"Issued token {token.id} for principal {store.principal_id} "
            f"(expires_in={token.expires_in})"
        )
        return raw

    @staticmethod
    def _normalize_expires_in(expires_in: float | timedelta) -> int:
        seconds = expires_in.total_seconds() if isinstance(expires_in, timedelta) else float(expires_in)
        if seconds < 0:
            raise ValidationException(
                "expires_in must not be negative",
                code="INVALID_EXPIRES_IN",
                details={"expires_in": seconds},
            )
        # Round up so a positive window never collapses to 0
        return math.ceil(seconds)

    def find_token(self, principal: Any, token_secret: str | None) -> AuthenticationToken | None:
        """
        Find the principal's token matching a presented raw secret.

        An empty or missing secret returns `None` without hashing. Otherwise the
        secret is digested and matched by digest equality, which only a preimage
        of a stored digest can satisfy.

        Returns:
            The matching token (expired or not), or `None`.

        Raises:
            StorageError: If the store cannot be queried.
        """
        if not token_secret:
            return None
        store = self.repository.for_principal(principal)
        return store.find_by_digest(self.digest(str(token_secret)))

    def is_unexpired(self, token: AuthenticationToken, now: datetime | None = None) -> bool:
        """
        Whether a token is usable at `now` (defaults to the current time).

        Tokens without an expiry window, or with a zero window, never expire.
        A naive `now` is interpreted as UTC.
        """
        if token.never_expires:
            return True
        now = now or self._now()
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return now <= token.last_used_at + timedelta(seconds=token.expires_in)

    def touch_token(self, token: AuthenticationToken) -> bool:
        """
        Record a verified use of a token, at most once per touch interval.

        `last_used_at` is only written when strictly more than the touch
        interval has passed since its current value. Concurrent touches race
        and the last write wins.

        Returns:
            Whether a write was performed.

        Raises:
            StorageError: If the write fails.
        """
        now = self._now()
        if token.last_used_at >= now - self.touch_interval:
            return False

        self.repository.for_owner(token.principal_id).update_last_used(token, now)
        token.last_used_at = now
        self._logger.debug(f"Touched token {token.id} for principal {token.principal_id}")
        return True

    def revoke_token(self, principal: Any, token_secret: str | None) -> None:
        """
        Delete the principal's token matching a raw secret.

        Revoking a token that does not exist is a no-op.

        Raises:
            StorageError: If the store fails.
        """
        token = self.find_token(principal, token_secret)
        if token is None:
            return
        self.repository.for_owner(token.principal_id).delete(token)
        self._logger.info(f"Revoked token {token.id} for principal {token.principal_id}")

    def expire_token(self, principal: Any, request: AuthRequest) -> None:
        """
        Revoke the token presented in the request's token header (e.g. on sign out).

        Raises:
            StorageError: If the store fails.
        """
        self.revoke_token(principal, request.get_header(self.token_header))

    def purge_old_tokens(self, principal: Any) -> int:
        """
        Enforce the per-principal cap by deleting the least recently used tokens.

        Tokens are ordered by `last_used_at`, most recent first, and every token
        past the cap is deleted. Expired tokens count toward the cap until they
        are purged or revoked.

        Returns:
            Number of tokens deleted.

        Raises:
            StorageError: If the store fails.
        """
        store = self.repository.for_principal(principal)
        stale = store.list_ordered_by_last_used_descending()[self.maximum_tokens_per_user :]
        for token in stale:
            store.delete(token)

        if stale:
            self._logger.info(
                f"Purged {len(stale)} token(s) for principal {store.principal_id} "
                f"beyond cap of {self.maximum_tokens_per_user}"
            )
        return len(stale)
