# ABOUTME: SQL implementations package
# ABOUTME: Relational persistence for tokens using SQLAlchemy (SQLite, PostgreSQL)

from .auth import AuthenticationTokenRecord, SqlAlchemyTokenRepository, SqlAlchemyTokenStore
from .database import Base, DatabaseConfig, DatabaseManager

__all__ = [
    "AuthenticationTokenRecord",
    "SqlAlchemyTokenRepository",
    "SqlAlchemyTokenStore",
    "Base",
    "DatabaseConfig",
    "DatabaseManager",
]
