# ABOUTME: Core package initialization for token authentication
# ABOUTME: Provides the token issuer, authentication strategy and storage abstractions

"""
Opaque bearer token authentication.

This package issues, verifies, rotates and expires opaque bearer tokens for
principals that own several concurrently valid tokens (one per device or
session). Only HMAC digests of the tokens are ever persisted. It follows clean
architecture principles with clear separation between interfaces, models,
components and backend implementations.
"""

__version__ = "0.1.0"
