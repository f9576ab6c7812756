"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest
import requests

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeSession:
    """Stands in for ``requests.Session``, serving saved pages.

    Pages are keyed by the ``town`` query parameter; the overview page
    (no town) is keyed by ``None``.
    """

    def __init__(
        self,
        pages: Optional[Dict[Optional[str], bytes]] = None,
        default: bytes = b"",
        status_code: int = 200,
        content_type: str = "text/html; charset=utf-8",
        error: Optional[Exception] = None,
    ):
        self.pages = pages or {}
        self.default = default
        self.status_code = status_code
        self.content_type = content_type
        self.error = error
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        params = dict(params or {})
        self.calls.append({"url": url, "params": params, "headers": dict(headers or {}), "timeout": timeout})
        if self.error is not None:
            raise self.error

        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.pages.get(params.get("town"), self.default)
        response.url = url
        if self.content_type:
            response.headers["Content-Type"] = self.content_type
        return response


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def load_fixture() -> Callable[[str], bytes]:
    """Return a loader for saved HTML pages under tests/fixtures."""
    def _load(name: str) -> bytes:
        return (FIXTURES_DIR / name).read_bytes()
    return _load


@pytest.fixture(scope="function")
def thais_page(load_fixture) -> bytes:
    """Listing page for Thais on Antica with six well-formed rows."""
    return load_fixture("houses-thais-200.html")


@pytest.fixture(scope="function")
def bad_rent_page(thais_page: bytes) -> bytes:
    """Thais page whose third row has a non-numeric rent."""
    return thais_page.replace(b"<nobr>50k&#xa0;gold</nobr>", b"<nobr>fifty&#xa0;gold</nobr>")


@pytest.fixture(scope="function")
def duplicate_id_page(thais_page: bytes) -> bytes:
    """Thais page whose fourth row repeats the first row's house id."""
    return thais_page.replace(b'value="10204"', b'value="10201"')


@pytest.fixture(scope="session")
def reference_now() -> datetime:
    """Fixed request time for auction expiry estimates."""
    return datetime(2023, 6, 1, 14, 25, 30, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def make_session():
    """Return the FakeSession class for building upstream stand-ins."""
    return FakeSession


@pytest.fixture(scope="function")
def test_config(monkeypatch):
    """Create test configuration without touching a .env file.

    Yields:
        Config object configured for testing.
    """
    monkeypatch.setenv("TIBIAHOUSES_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("TIBIAHOUSES_MAX_WORKERS", "2")
    monkeypatch.setenv("TIBIAHOUSES_COMMUNITY_URL", "https://tibia.test/community/")

    from tibiahouses.config import reset_config, get_config
    reset_config()

    config = get_config()
    yield config

    reset_config()
