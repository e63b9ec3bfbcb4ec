"""Tests for the requests-based GDNFetcher transport."""

import pytest
import requests
from unittest.mock import MagicMock, Mock, patch

from utils.transport import DEFAULT_TIMEOUT, GDNFetcher


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    session = MagicMock()
    session.headers = {}
    return session


class TestGDNFetcher:
    """Test cases for GDNFetcher."""

    def test_get_returns_response(self, mock_session):
        """Test that get() sends the URL with the timeout and returns the response."""
        mock_response = Mock()
        mock_response.status_code = 200
        mock_session.get.return_value = mock_response

        fetcher = GDNFetcher(session=mock_session, timeout=5)
        result = fetcher.get("http://gdn.api.xereo.net/v1/jar?json")

        assert result is mock_response
        mock_session.get.assert_called_once_with("http://gdn.api.xereo.net/v1/jar?json", timeout=5)
        mock_response.raise_for_status.assert_called_once()

    def test_get_raises_on_http_error(self, mock_session):
        """Test that non-2xx responses raise."""
        mock_response = Mock()
        mock_response.status_code = 500
        mock_response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        mock_session.get.return_value = mock_response

        fetcher = GDNFetcher(session=mock_session)
        with pytest.raises(requests.HTTPError):
            fetcher.get("http://gdn.api.xereo.net/v1?json")

    def test_sets_json_accept_header(self, mock_session):
        """Test that the session asks for JSON."""
        GDNFetcher(session=mock_session, headers={"User-Agent": "spacegdn-sdk"})
        assert mock_session.headers["Accept"] == "application/json"
        assert mock_session.headers["User-Agent"] == "spacegdn-sdk"

    def test_default_timeout(self, mock_session):
        """Test the default timeout."""
        assert GDNFetcher(session=mock_session).timeout == DEFAULT_TIMEOUT

    def test_timeout_from_environment(self, mock_session, monkeypatch):
        """Test that SPACEGDN_REQUEST_TIMEOUT configures the timeout."""
        monkeypatch.setenv("SPACEGDN_REQUEST_TIMEOUT", "2.5")
        assert GDNFetcher(session=mock_session).timeout == 2.5

    def test_explicit_timeout_wins(self, mock_session, monkeypatch):
        """Test that a constructor timeout overrides the environment."""
        monkeypatch.setenv("SPACEGDN_REQUEST_TIMEOUT", "2.5")
        assert GDNFetcher(session=mock_session, timeout=10).timeout == 10

    def test_injected_session_not_closed(self, mock_session):
        """Test that a caller's session is left open."""
        with GDNFetcher(session=mock_session):
            pass
        mock_session.close.assert_not_called()

    @patch("utils.transport.requests.Session")
    def test_owned_session_closed(self, mock_session_class):
        """Test that a session created by the fetcher is closed on exit."""
        mock_session_class.return_value.headers = {}
        with GDNFetcher() as fetcher:
            assert fetcher.session is mock_session_class.return_value
        mock_session_class.return_value.close.assert_called_once()
