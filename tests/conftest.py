################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Pytest's requirement to share fixtures across test files.
"""
import pytest

from chronos._base import _config
from chronos._base._env import DEFAULT_TIMEZONE_ENV


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Makes every test start with settings read from a clean environment, so the
    default timezone is UTC unless the test says otherwise.
    """
    monkeypatch.delenv(DEFAULT_TIMEZONE_ENV, raising=False)
    _config.reset_settings()
    yield
    _config.reset_settings()


@pytest.fixture
def warsaw_default(monkeypatch):
    monkeypatch.setenv(DEFAULT_TIMEZONE_ENV, "Europe/Warsaw")
    _config.reset_settings()
    return "Europe/Warsaw"
