"""HTTP transport for SpaceGDN API access."""

import logging
import os
from typing import Dict, Optional

import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class GDNFetcher:
    """
    Blocking HTTP GET transport backed by a requests.Session.

    Used as the default transport of QueryBuilder. Any object exposing
    ``get(url)`` and returning something with a ``json()`` method can take
    its place, which is how tests inject a fake.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        session: Optional pre-configured requests.Session. When omitted a new
                 one is created and owned (closed by ``close()``).
        timeout: Seconds to wait for the server (configurable via
                 SPACEGDN_REQUEST_TIMEOUT env var, default 30)
        headers: Extra headers sent with every request
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        if timeout is None:
            timeout = float(os.getenv("SPACEGDN_REQUEST_TIMEOUT", DEFAULT_TIMEOUT))
        self.timeout = timeout
        self.session.headers.update({"Accept": "application/json"})
        if headers:
            self.session.headers.update(headers)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def get(self, url: str) -> requests.Response:
        """
        Fetch a URL.

        Args:
            url: Fully built request URL

        Returns:
            The requests.Response, guaranteed to have a 2xx status

        Raises:
            requests.RequestException: On connection errors, timeouts and
                non-2xx responses
        """
        logger.debug(f"GET {url} (timeout={self.timeout}s)")
        response = self.session.get(url, timeout=self.timeout)
        logger.debug(f"GET {url} returned {response.status_code}")
        response.raise_for_status()
        return response

    def close(self) -> None:
        """Close the underlying session if this fetcher created it."""
        if self._owns_session:
            self.session.close()
