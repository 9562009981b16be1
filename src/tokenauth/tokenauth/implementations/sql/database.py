# ABOUTME: SQLAlchemy engine and session management for the relational token store
# ABOUTME: Provides DatabaseConfig and DatabaseManager with transactional session scopes

from contextlib import contextmanager
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from tokenauth.config.logging import get_logger
from tokenauth.config.settings import TokenAuthSettings, get_settings

# Base class for all SQLAlchemy models
Base: Any = declarative_base()


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///:memory:"
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    echo: bool = False
    development_mode: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v or "://" not in v:
            raise ValueError("Database URL must be a SQLAlchemy URL such as sqlite:///tokens.db")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        return self.is_sqlite and (":memory:" in self.url or self.url.rstrip("/") == "sqlite:")

    @classmethod
    def from_settings(cls, settings: TokenAuthSettings | None = None) -> "DatabaseConfig":
        settings = settings or get_settings()
        return cls(url=settings.DATABASE_URL, echo=settings.DEBUG, development_mode=settings.ENV == "development")

    def __repr__(self) -> str:
        """String representation with credentials masked."""
        scheme, _, rest = self.url.partition("://")
        host = rest.rsplit("@", 1)[-1]
        return f"DatabaseConfig(url='{scheme}://***@{host}')" if "@" in rest else f"DatabaseConfig(url='{self.url}')"


class DatabaseManager:
    """
    Database connection manager that uses a Pydantic DatabaseConfig.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.engine = self._create_engine()
        self.session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        self._logger = get_logger(__name__)

    def _create_engine(self):
        if self.config.is_sqlite:
            kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if self.config.is_in_memory:
                # One shared connection, otherwise every session sees an empty database
                kwargs["poolclass"] = StaticPool
            return create_engine(self.config.url, echo=self.config.echo, **kwargs)
        return create_engine(
            self.config.url,
            echo=self.config.echo,
            pool_size=self.config.pool_size,
            max_overflow=self.config.max_overflow,
            pool_timeout=self.config.pool_timeout,
            pool_pre_ping=True,
        )

    def create_tables(self) -> None:
        # Register the token model on Base.metadata before creating tables
        from tokenauth.implementations.sql.auth import models  # noqa: F401

        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        if self.config.development_mode:
            Base.metadata.drop_all(self.engine)
        else:
            raise RuntimeError("Cannot drop tables: not in development mode")

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope: commit on success, rollback on error."""
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        self.engine.dispose()
