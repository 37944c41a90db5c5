"""Core infrastructure: Seed, Configuration, Logging."""

from rosecheck.core.config import CheckerSettings, ReplaySettings, load_settings
from rosecheck.core.logging import configure_logging, get_logger
from rosecheck.core.seed import Seed

__all__ = [
    "CheckerSettings",
    "ReplaySettings",
    "Seed",
    "configure_logging",
    "get_logger",
    "load_settings",
]
