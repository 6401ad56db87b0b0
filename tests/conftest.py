"""Shared fixtures and configuration for tests."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from unittest.mock import patch

import pytest
import respx

from phonegap_build.request import RequestDescriptor
from phonegap_build.transport import TransportResult

API_BASE_URL = "https://build.phonegap.test/api/v1"


class FakeTransport:
    """Transport that records requests and replays canned results."""

    def __init__(self, results: Iterable[TransportResult] = ()) -> None:
        self.results = list(results)
        self.requests: list[RequestDescriptor] = []
        self.closed = False

    def queue(self, result: TransportResult) -> None:
        self.results.append(result)

    def queue_json(self, status_code: int, payload: object) -> None:
        self.queue(TransportResult.completed(status_code, json.dumps(payload).encode()))

    def send(self, request: RequestDescriptor) -> TransportResult:
        self.requests.append(request)
        if self.results:
            return self.results.pop(0)
        return TransportResult.completed(200, b"{}")

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> RequestDescriptor:
        return self.requests[-1]

    @property
    def last_data(self) -> dict:
        """The decoded ``data`` field of the last request."""
        return json.loads(self.last.fields["data"])


# ==================== FIXTURES ====================


@pytest.fixture
def api_base_url() -> str:
    """Base URL for API mocks."""
    return API_BASE_URL


@pytest.fixture
def respx_mock():
    """Fixture for respx mocking."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def mock_token() -> str:
    """Mock authentication token for testing."""
    return "tok_test_1234567890"


@pytest.fixture
def clean_env():
    """Run without any PHONEGAP_BUILD_* environment variables."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("PHONEGAP_BUILD_")}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def missing_credentials_file(tmp_path):
    """Path to a credentials file that does not exist."""
    return tmp_path / "nonexistent" / "credentials.json"


@pytest.fixture
def temp_credentials_file(tmp_path, mock_token):
    """Create a temporary credentials file holding a token."""
    creds_dir = tmp_path / ".phonegap-build"
    creds_dir.mkdir()
    creds_file = creds_dir / "credentials.json"
    creds_file.write_text(json.dumps({"token": mock_token}))
    return creds_file


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def icon_file(tmp_path):
    """A small PNG-named file on disk."""
    path = tmp_path / "icon.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\nfake-icon")
    return path


@pytest.fixture
def archive_file(tmp_path):
    """A zip-named application archive on disk."""
    path = tmp_path / "app.zip"
    path.write_bytes(b"PK\x03\x04fake-archive")
    return path
