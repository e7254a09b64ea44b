"""Utility modules for the Zendesk bridge."""

from .logger import setup_logging, get_logger
from .health import HealthChecker
from .token_storage import TokenStore, InMemoryTokenStore

__all__ = ["setup_logging", "get_logger", "HealthChecker", "TokenStore", "InMemoryTokenStore"]
