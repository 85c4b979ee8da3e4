"""
Shared fixtures for integration tests.

Provides:
- A real boto3 CloudWatch Logs client built by the datasource's own
  factory, with dummy credentials
- A botocore Stubber attached to that client
- A datasource wired to the stubbed client
"""

import pytest
from botocore.stub import Stubber

from cloudwatch_logs_datasource.client.registry import ClientRegistry, create_logs_client
from cloudwatch_logs_datasource.config.settings import Settings
from cloudwatch_logs_datasource.datasource import CloudWatchLogsDatasource

REGION = "us-east-1"


@pytest.fixture
def aws_credentials(monkeypatch):
    """Dummy credentials so no real AWS account is ever touched."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def logs_client(aws_credentials):
    """Real CloudWatch Logs client for REGION."""
    return create_logs_client(REGION)


@pytest.fixture
def stubber(logs_client):
    """Activated Stubber; asserts every queued response was consumed."""
    with Stubber(logs_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def stubbed_datasource(logs_client, stubber):
    """Datasource whose registry hands out the stubbed client."""
    registry = ClientRegistry(client_factory=lambda region: logs_client)
    return CloudWatchLogsDatasource(registry=registry, settings=Settings())
