# ABOUTME: Authentication components package exports
# ABOUTME: Exports the token issuer and the header token authentication strategy

from .strategy import TokenAuthenticationStrategy
from .token_issuer import TokenIssuer
from .utils import generate_raw_token, token_digest

__all__ = [
    "TokenAuthenticationStrategy",
    "TokenIssuer",
    "generate_raw_token",
    "token_digest",
]
