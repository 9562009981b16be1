# ABOUTME: Memory-based authentication implementations for testing and development
# ABOUTME: Provides the document-style token repository and principal lookup

from .principal_repository import InMemoryPrincipalRepository
from .token_store import InMemoryTokenRepository, InMemoryTokenStore

__all__ = ["InMemoryPrincipalRepository", "InMemoryTokenRepository", "InMemoryTokenStore"]
