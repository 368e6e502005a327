"""
Pytest configuration and fixtures for quickfire tests.
"""

import pytest
import responses as responses_lib

from src.quickfire.core.config import NetworkConfig
from src.quickfire.core.logging.config import LoggingConfig
from src.quickfire.core.network_manager import NetworkManager
from src.quickfire.core.transport import RawResponse, Transport, UploadProgress


class FakeTransport(Transport):
    """
    Synchronous transport double.

    Records every request and answers with the queued RawResponse on the
    calling thread, so Deferreds are already settled when execute() returns.
    """

    def __init__(self, response=None, chunk_size=2):
        self.response = response or RawResponse(content=b"{}", status_code=200)
        self.chunk_size = chunk_size
        self.requests = []
        self.uploads = []
        self.closed = False

    def send(self, request, completion):
        self.requests.append(request)
        completion(self.response)

    def upload(self, request, payload, progress, completion):
        self.requests.append(request)
        self.uploads.append(payload)
        if progress is not None:
            for sent in range(self.chunk_size, len(payload), self.chunk_size):
                progress(UploadProgress(sent, len(payload)))
            progress(UploadProgress(len(payload), len(payload)))
        completion(self.response)

    def close(self):
        self.closed = True


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def config(base_url):
    """NetworkConfig with a fixed User-Agent."""
    return NetworkConfig(base_url=base_url, timeout=10, user_agent="shop/2.1 (test)")


@pytest.fixture
def fake_transport():
    """Synchronous transport double."""
    return FakeTransport()


@pytest.fixture
def manager(fake_transport):
    """NetworkManager wired to the fake transport."""
    manager = NetworkManager(transport=fake_transport)
    yield manager
    manager.close()


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def logging_config():
    """Console-only DEBUG logging configuration."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "quickfire.log"
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )
