# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Logging:
    Engine modules log run events through structlog. Tests silence those
    events so assertions on stdout only see the test report. Tests that
    exercise logging configure it explicitly with their own stream.
"""

import logging
import os
from collections.abc import Iterator

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from rosecheck.core.config import CheckerSettings
from rosecheck.core.seed import Seed


@pytest.fixture(autouse=True)
def _quiet_structlog() -> Iterator[None]:
    """Drop engine log events during tests and undo any logging setup afterwards."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers = []


@pytest.fixture
def seed() -> Seed:
    """Fixed starting seed so engine tests are reproducible."""
    return Seed.from_int(20240601)


@pytest.fixture
def small_settings() -> CheckerSettings:
    """Settings small enough for tests that run many full checks."""
    return CheckerSettings(max_success=20, max_discard=50, max_size=20)


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
