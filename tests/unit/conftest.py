"""
Pytest configuration and shared fixtures for unit tests.
"""

import pytest

from cloudwatch_logs_datasource.client.registry import ClientRegistry
from cloudwatch_logs_datasource.config.settings import Settings
from cloudwatch_logs_datasource.datasource import CloudWatchLogsDatasource
from tests.unit.fakes import FakeLogsClient


@pytest.fixture
def fake_client():
    """Empty fake CloudWatch Logs client."""
    return FakeLogsClient()


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings()


@pytest.fixture
def registry(fake_client):
    """Registry that hands out the fake client for every region."""
    return ClientRegistry(client_factory=lambda region: fake_client)


@pytest.fixture
def datasource(registry, settings):
    """Datasource wired to the fake client."""
    return CloudWatchLogsDatasource(registry=registry, settings=settings)
