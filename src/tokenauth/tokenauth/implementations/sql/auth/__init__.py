# ABOUTME: Relational authentication implementations backed by SQLAlchemy
# ABOUTME: Provides the token ORM model and the SQL token repository

from .models import AuthenticationTokenRecord
from .token_store import SqlAlchemyTokenRepository, SqlAlchemyTokenStore

__all__ = ["AuthenticationTokenRecord", "SqlAlchemyTokenRepository", "SqlAlchemyTokenStore"]
