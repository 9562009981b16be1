# ABOUTME: Utility functions for token generation and digesting
# ABOUTME: Provides CSPRNG token generation and HMAC-SHA256 digests of raw tokens

import hashlib
import hmac
import secrets

DEFAULT_DIGEST_KEY = "API Key body"
MINIMUM_TOKEN_BYTES = 64


def generate_raw_token(nbytes: int = MINIMUM_TOKEN_BYTES) -> str:
    """
    Generate a raw token secret from the operating system CSPRNG.

    Args:
        nbytes: Number of random bytes; the URL-safe encoding is longer.

    Returns:
        A URL-safe random token string.
    """
    return secrets.token_urlsafe(nbytes)


def token_digest(value: str, key: str = DEFAULT_DIGEST_KEY) -> str:
    """
    Digest a raw token with HMAC-SHA256 keyed by a fixed domain label.

    The label only binds the digest to its purpose. It is not a secret, so the
    unguessability of a token rests entirely on its entropy.

    Args:
        value: The raw token secret.
        key: The domain label.

    Returns:
        The hex-encoded digest, 64 characters long.
    """
    return hmac.new(key.encode("utf-8"), value.encode("utf-8"), hashlib.sha256).hexdigest()
