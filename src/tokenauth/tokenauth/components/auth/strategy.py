# ABOUTME: Header token authentication strategy built on the token issuer
# ABOUTME: Extracts the lookup key and token from headers and verifies them per request

import asyncio

from tokenauth.config.logging import get_logger
from tokenauth.config.settings import TokenAuthSettings, get_settings
from tokenauth.exceptions import StorageError
from tokenauth.interfaces.auth.authenticator import AbstractAuthenticator
from tokenauth.interfaces.auth.principal_repository import AbstractPrincipalRepository
from tokenauth.models.auth.auth_request import AuthRequest
from tokenauth.models.auth.enum import AuthFailure
from tokenauth.models.auth.result import AuthResult

from .token_issuer import TokenIssuer


class TokenAuthenticationStrategy(AbstractAuthenticator):
    """
    Authenticates requests carrying a principal lookup key and a raw token.

    The key and token travel in two headers (``X-API-KEY`` and ``X-API-TOKEN``
    by default). When either is missing the strategy declines, so other
    strategies in a chain can run. Unknown principals, unknown tokens and
    expired tokens all fail with the same ``invalid_token`` reason.

    Every request re-authenticates from its headers: nothing is cached and no
    session state is stored, and surrounding frameworks are asked to skip their
    "trackable" sign-in bookkeeping.
    """

    # Framework integration flags
    stores_session = False
    skip_trackable = True

    def __init__(
        self,
        issuer: TokenIssuer,
        principals: AbstractPrincipalRepository,
        *,
        settings: TokenAuthSettings | None = None,
        key_header: str | None = None,
        token_header: str | None = None,
    ):
        """
        Initialize the strategy.

        Args:
            issuer: Token issuer used to find, check and touch tokens.
            principals: Repository resolving principals by lookup key.
            settings: Source of the default header names.
            key_header: Overrides the lookup key header name.
            token_header: Overrides the token header name.
        """
        settings = settings or get_settings()
        self.issuer = issuer
        self.principals = principals
        self.key_header = key_header or settings.API_KEY_HEADER
        self.token_header = token_header or settings.API_TOKEN_HEADER
        self._logger = get_logger(__name__)

    def _lookup_key_from_headers(self, request: AuthRequest) -> str | None:
        return _present(request.get_header(self.key_header))

    def _token_from_headers(self, request: AuthRequest) -> str | None:
        return _present(request.get_header(self.token_header))

    def is_applicable(self, request: AuthRequest) -> bool:
        return self._lookup_key_from_headers(request) is not None and self._token_from_headers(request) is not None

    async def authenticate(self, request: AuthRequest) -> AuthResult:
        """
        Authenticate a request from its key and token headers.

        Returns:
            AuthResult: success with the principal, ``invalid_token`` failure,
            or not applicable when credentials are absent.

        Raises:
            StorageError: If resolving the principal or finding the token fails.
        """
        lookup_key = self._lookup_key_from_headers(request)
        token_secret = self._token_from_headers(request)
        if lookup_key is None or token_secret is None:
            return AuthResult.not_applicable()

        # Store access may be a blocking database round trip; keep it off the event loop
        return await asyncio.to_thread(self._verify, lookup_key, token_secret)

    def _verify(self, lookup_key: str, token_secret: str) -> AuthResult:
        principal = self.principals.find_by_lookup_key(lookup_key)
        if principal is None:
            self._logger.info("Token authentication failed: unknown principal")
            return AuthResult.failed(AuthFailure.INVALID_TOKEN)

        token = self.issuer.find_token(principal, token_secret)
        if token is None or not self.issuer.is_unexpired(token):
            self._logger.info(f"Token authentication failed for principal {principal.id}")
            return AuthResult.failed(AuthFailure.INVALID_TOKEN)

        self._touch(token)
        return AuthResult.succeeded(principal)

    def _touch(self, token) -> None:
        # last_used_at is best effort; a failed write never fails authentication
        try:
            self.issuer.touch_token(token)
        except StorageError as e:
            self._logger.warning(f"Failed to record use of token {token.id}: {e.message}")


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
