# ABOUTME: Configuration package initialization
# ABOUTME: Exports configuration classes and logging utilities for the token authentication library

from tokenauth.config.settings import TokenAuthSettings, get_settings
from tokenauth.config.logging import (
    LoggerConfig,
    LoggingSettings,
    setup_logging,
    get_logger,
    configure_for_testing,
    configure_for_production,
    configure_for_development,
)

__all__ = [
    "TokenAuthSettings",
    "get_settings",
    "LoggerConfig",
    "LoggingSettings",
    "setup_logging",
    "get_logger",
    "configure_for_testing",
    "configure_for_production",
    "configure_for_development",
]
