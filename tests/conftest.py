"""Shared test fixtures and configuration for Teams target tests."""

import pytest
import httpx
from pathlib import Path
import sys

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from msteams_target import LogEvent, LogLevel, MsTeamsTarget, TargetConfig, VariableTable


WEBHOOK_URL = "https://hook.example/x"


@pytest.fixture
def sample_event():
    """Sample error event for testing."""
    return LogEvent(
        level=LogLevel.ERROR,
        message="disk full",
        logger_name="billing.storage",
        properties={"volume": "/dev/sda1", "free_bytes": 0},
    )


@pytest.fixture
def sample_config():
    """Target configuration with a variable reference."""
    return TargetConfig(
        url=WEBHOOK_URL,
        application_name="${var:app}",
        environment="prod",
    )


@pytest.fixture
def variable_store():
    """Mutable variable store owned by the 'pipeline'."""
    return {"app": "Billing"}


@pytest.fixture
def sent_requests():
    """Requests that reached the mock transport."""
    return []


@pytest.fixture
def mock_transport(sent_requests):
    """Factory for mock transports recording every request."""
    def factory(status_code=200, reason_phrase=None, connect_error=False):
        def handler(request):
            sent_requests.append(request)
            if connect_error:
                raise httpx.ConnectError("Connection refused", request=request)
            extensions = {}
            if reason_phrase is not None:
                extensions["reason_phrase"] = reason_phrase.encode("ascii")
            return httpx.Response(status_code, extensions=extensions)

        return httpx.MockTransport(handler)

    return factory


@pytest.fixture
def make_target(sample_config, variable_store, mock_transport):
    """Factory for initialized targets posting to a mock transport."""
    def factory(config=None, status_code=200, reason_phrase=None, connect_error=False, variables=None):
        target = MsTeamsTarget(
            config or sample_config,
            variables=VariableTable(variable_store if variables is None else variables),
            transport=mock_transport(status_code, reason_phrase, connect_error),
        )
        target.initialize()
        return target

    return factory
