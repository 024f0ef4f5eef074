"""Shared pytest fixtures for the validator suites."""

import pytest
import structlog

from kubefield.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; start and end every test with a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


def codes(result):
    """Error codes of a ValidationResult, in order."""
    return [err.code for err in result.errors]
