"""Shared test fixtures and configuration for wslbootstrap tests."""

from unittest import mock

import pytest

from tests.helpers import FakeRunner
from wslbootstrap.logger import RunLogger
from wslbootstrap.models import RetryPolicy
from wslbootstrap.services.wsl_service import WSLService


@pytest.fixture
def runner():
    """Scripted command runner."""
    return FakeRunner()


@pytest.fixture
def wsl(runner):
    """WSLService over the scripted runner."""
    return WSLService(runner)


@pytest.fixture
def policy():
    """Fast set-default retry policy."""
    return RetryPolicy(
        max_attempts=3, delay_seconds=2, transient_signature="WSL_E_DISTRO_NOT_FOUND"
    )


@pytest.fixture
def sleep():
    """Recorded replacement for time.sleep."""
    return mock.MagicMock()


@pytest.fixture
def run_logger(tmp_path):
    """RunLogger writing under tmp_path."""
    logger = RunLogger("test-instance", "test", log_dir=tmp_path)
    yield logger
    logger.close()
