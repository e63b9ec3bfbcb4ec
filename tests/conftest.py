"""Pytest configuration and fixtures."""

import pytest
from unittest.mock import Mock

from spacegdn_sdk import QueryBuilder

ENDPOINT = "gdn.api.xereo.net"


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep a developer's SPACEGDN_* settings out of the tests."""
    monkeypatch.delenv("SPACEGDN_ENDPOINT", raising=False)
    monkeypatch.delenv("SPACEGDN_REQUEST_TIMEOUT", raising=False)


@pytest.fixture
def envelope():
    """A typical response envelope."""
    return {"results": [{"checksum": "abc"}], "pages": 5}


@pytest.fixture
def mock_response(envelope):
    """Create a mock HTTP response returning the envelope."""
    response = Mock()
    response.json.return_value = envelope
    return response


@pytest.fixture
def mock_fetcher(mock_response):
    """Create a mock transport."""
    fetcher = Mock()
    fetcher.get.return_value = mock_response
    return fetcher


@pytest.fixture
def builder(mock_fetcher):
    """Create a QueryBuilder bound to the mock transport."""
    return QueryBuilder(mock_fetcher).set_endpoint(ENDPOINT)
