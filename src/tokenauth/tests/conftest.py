# ABOUTME: pytest configuration and shared fixtures for tokenauth tests
# ABOUTME: Configures timeouts, logging and the token repositories of both backends

import pytest

from tokenauth.config.logging import configure_for_testing
from tokenauth.config.settings import TokenAuthSettings
from tokenauth.implementations.memory import InMemoryPrincipalRepository, InMemoryTokenRepository
from tokenauth.implementations.sql import DatabaseConfig, DatabaseManager, SqlAlchemyTokenRepository
from tokenauth.models.auth import SimplePrincipal


def pytest_configure(config):
    """Configure pytest for tokenauth tests."""
    config.addinivalue_line("markers", "unit: Unit tests with 20-second timeout")
    config.addinivalue_line("markers", "integration: Integration tests with 60-second timeout")
    configure_for_testing()


def pytest_collection_modifyitems(config, items):
    """Modify test items to add appropriate timeouts based on test type."""
    for item in items:
        # Respect explicit timeout markers
        if item.get_closest_marker("timeout"):
            continue

        if item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.timeout(20))
        elif item.get_closest_marker("integration"):
            item.add_marker(pytest.mark.timeout(60))


@pytest.fixture
def settings() -> TokenAuthSettings:
    """Settings isolated from the environment and any .env file."""
    return TokenAuthSettings(_env_file=None)


@pytest.fixture
def memory_repository() -> InMemoryTokenRepository:
    return InMemoryTokenRepository()


@pytest.fixture
def database():
    manager = DatabaseManager(DatabaseConfig(url="sqlite:///:memory:", development_mode=True))
    manager.create_tables()
    yield manager
    manager.drop_tables()
    manager.close()


@pytest.fixture
def sql_repository(database) -> SqlAlchemyTokenRepository:
    return SqlAlchemyTokenRepository(database)


@pytest.fixture(params=["memory", "sql"])
def token_repository(request):
    """Run a test once per storage backend."""
    if request.param == "memory":
        return request.getfixturevalue("memory_repository")
    return request.getfixturevalue("sql_repository")


@pytest.fixture
def alice() -> SimplePrincipal:
    return SimplePrincipal(id="user-alice", lookup_key="alice@example.com")


@pytest.fixture
def bob() -> SimplePrincipal:
    return SimplePrincipal(id="user-bob", lookup_key="bob@example.com")


@pytest.fixture
def principals(alice, bob) -> InMemoryPrincipalRepository:
    return InMemoryPrincipalRepository([alice, bob])
