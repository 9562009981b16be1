# ABOUTME: Implementations package exports
# ABOUTME: Contains concrete token storage backends and principal lookups

"""
Token storage implementations.

`memory` keeps tokens as documents in process memory; `sql` stores them in a
relational database through SQLAlchemy. Both satisfy the same
`AbstractTokenRepository` contract.
"""

from .memory import InMemoryPrincipalRepository, InMemoryTokenRepository
from .sql import DatabaseConfig, DatabaseManager, SqlAlchemyTokenRepository

__all__ = [
    "InMemoryPrincipalRepository",
    "InMemoryTokenRepository",
    "DatabaseConfig",
    "DatabaseManager",
    "SqlAlchemyTokenRepository",
]
