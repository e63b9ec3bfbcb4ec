"""Unified SpaceGDN API Client - hands out query builders sharing one transport."""

import os
from typing import Optional, Union

import requests

from utils.transport import GDNFetcher
from .query_builder import QueryBuilder


class SpaceGDNClient:
    """
    Unified SpaceGDN API Client.

    Owns one GDNFetcher and creates a fresh QueryBuilder per query, so
    builders never share state but do share the HTTP session. Works as a
    context manager to close the session when done.

    Example:
        ```python
        with SpaceGDNClient("gdn.api.xereo.net") as gdn:
            # List all jars
            for jar in gdn.jars():
                print(jar["name"])

            # Latest build of a version
            latest = gdn.query().select_version(7).get("builds").order_by("build", "desc")
            print(latest.record_at(0))
        ```
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize SpaceGDN API Client.

        Args:
            endpoint: GDN base URL (reads SPACEGDN_ENDPOINT env var if not provided)
            timeout: Request timeout in seconds (reads SPACEGDN_REQUEST_TIMEOUT
                env var if not provided)
            session: Optional requests.Session to send requests through
        """
        self.endpoint = endpoint or os.getenv("SPACEGDN_ENDPOINT")
        self.fetcher = GDNFetcher(session=session, timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.fetcher.close()

    def query(self) -> QueryBuilder:
        """Start a new query against this client's endpoint."""
        return QueryBuilder(self.fetcher, endpoint=self.endpoint)

    def jars(self) -> QueryBuilder:
        """Query all jars."""
        return self.query().get("jars")

    def jar(self, jar_id: Union[int, str]) -> QueryBuilder:
        """Start a query scoped to one jar, e.g. ``gdn.jar(2).get("channels")``."""
        return self.query().select_jar(jar_id)
