"""Fluent query builder for the SpaceGDN API.

Builds a route such as ``v1/jar/2/build`` and a query string from chained
calls, fetches it once on first access to the results, and exposes the
``results`` list of the response like a read-only sequence.

Example:
    >>> builds = (
    ...     QueryBuilder(endpoint="gdn.api.xereo.net")
    ...     .select_jar(2)
    ...     .get("builds")
    ...     .where("build", ">", 1234)
    ...     .order_by("build", "desc")
    ...     .page(3)
    ... )
    >>> builds.build_url()
    'http://gdn.api.xereo.net/v1/jar/2/build?where=build.gt.1234&sort=build.desc&page=3&json'
    >>> for build in builds:  # doctest: +SKIP
    ...     print(build["checksum"])
"""

import json
import logging
import os
from collections.abc import Sequence
from typing import Any, Dict, Iterator, List, Optional, Union
from urllib.parse import quote_plus

import requests

from utils.transport import GDNFetcher
from .exceptions import DecodeError, InvalidOperator, TransportError
from .response_types import ResultsEnvelope
from .schemas import (
    IN_OPERATOR,
    OPERATORS,
    envelope_results,
    query_column,
    resolve_column,
    validate_envelope,
)
from .types import ResourceKind, SortOrder

logger = logging.getLogger(__name__)

API_VERSION = "v1"

# Literal the API expects at the end of every query string.
JSON_MARKER = "json"


class QueryBuilder:
    """
    Mutable, chainable query against the SpaceGDN API.

    Configuration methods return the builder itself. The request is sent the
    first time results are read and the decoded response is kept until
    ``reset()``.

    A builder created without a fetcher owns its GDNFetcher; use it as a
    context manager or call ``close()`` to release the session. Running
    several queries is cheaper through SpaceGDNClient, which shares one.
    """

    def __init__(self, fetcher: Optional[GDNFetcher] = None, endpoint: Optional[str] = None):
        """
        Args:
            fetcher: Transport with a ``get(url)`` method returning a response
                that has ``json()``. Defaults to a new GDNFetcher.
            endpoint: Base URL of the GDN (reads SPACEGDN_ENDPOINT env var if
                not provided)
        """
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher if fetcher is not None else GDNFetcher()
        self.endpoint: Optional[str] = None
        self.route: List[str] = []
        self.parameters: Dict[str, str] = {}
        self._response: Optional[ResultsEnvelope] = None
        self.reset()

        endpoint = endpoint or os.getenv("SPACEGDN_ENDPOINT")
        if endpoint:
            self.set_endpoint(endpoint)

    def set_endpoint(self, endpoint: str) -> "QueryBuilder":
        """Set the GDN base URL, adding ``http://`` and a trailing slash as needed."""
        if "//" not in endpoint:
            endpoint = "http://" + endpoint
        self.endpoint = endpoint.rstrip("/") + "/"
        return self

    def reset(self) -> "QueryBuilder":
        """Clear parameters, route and any fetched response."""
        self.parameters = {}
        self.route = [API_VERSION]
        self._response = None
        return self

    clear = reset

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Close the transport if this builder created it."""
        if self._owns_fetcher:
            self.fetcher.close()

    def _select(self, kind: ResourceKind, id: Union[int, str]) -> "QueryBuilder":
        self.route.extend([kind.value, str(id)])
        return self

    def select_jar(self, id: Union[int, str]) -> "QueryBuilder":
        """Narrow the query to one jar."""
        return self._select(ResourceKind.Jar, id)

    def select_version(self, id: Union[int, str]) -> "QueryBuilder":
        """Narrow the query to one version."""
        return self._select(ResourceKind.Version, id)

    def select_channel(self, id: Union[int, str]) -> "QueryBuilder":
        """Narrow the query to one channel."""
        return self._select(ResourceKind.Channel, id)

    def select_build(self, id: Union[int, str]) -> "QueryBuilder":
        """Narrow the query to one build."""
        return self._select(ResourceKind.Build, id)

    def get(self, resource: str = "") -> "QueryBuilder":
        """
        Set the resource collection to fetch.

        A single trailing "s" is dropped, so ``get("builds")`` and
        ``get("build")`` are equivalent. ``get()`` changes nothing and only
        reads well at the end of a chain.
        """
        if resource:
            if resource.endswith("s"):
                resource = resource[:-1]
            self.route.append(resource)
        return self

    def where(self, column: str, operator: str, value: Any) -> "QueryBuilder":
        """
        Filter the results. Replaces any earlier filter.

        Args:
            column: Column name, bare or qualified with its model
            operator: One of ``=``, ``<``, ``>``, ``<=``, ``>=`` or ``in``
            value: Value to compare against; a list of values for ``in``

        Raises:
            UnknownColumn: If the column cannot be resolved
            InvalidOperator: If the operator is not supported
            TypeError: If ``in`` is given something other than a sequence
        """
        column = query_column(column)

        if operator == IN_OPERATOR:
            if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
                raise TypeError(f"'in' expects a sequence of values, got {type(value).__name__}")
            parts = [column, IN_OPERATOR, ".".join(str(v) for v in value)]
        else:
            try:
                token = OPERATORS[operator]
            except (KeyError, TypeError):
                raise InvalidOperator(operator) from None
            parts = [column, token, str(value)]

        self.parameters["where"] = ".".join(parts)
        return self

    def page(self, page: int) -> "QueryBuilder":
        """Set the (1-based) page to fetch."""
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValueError(f"Page must be a positive integer, got {page!r}")
        self.parameters["page"] = str(page)
        return self

    def order_by(self, column: str, direction: Union[SortOrder, str]) -> "QueryBuilder":
        """
        Sort the results.

        Args:
            column: Column name, bare or qualified with its model
            direction: ``"asc"``/``"desc"`` or a SortOrder member

        Raises:
            UnknownColumn: If the column cannot be resolved
            ValueError: If the direction is not asc or desc
        """
        column = query_column(column)
        try:
            direction = SortOrder(direction)
        except ValueError:
            raise ValueError(f"Sort direction must be 'asc' or 'desc', got {direction!r}") from None
        self.parameters["sort"] = f"{column}.{direction.value}"
        return self

    @staticmethod
    def resolve_column(column: str) -> str:
        """Qualify a bare column with its model name. See schemas.resolve_column."""
        return resolve_column(column)

    def build_url(self) -> str:
        """Build the request URL from the endpoint, route and parameters."""
        if not self.endpoint:
            raise RuntimeError("Endpoint not set - call set_endpoint() first")

        url = self.endpoint + "/".join(self.route) + "?"
        for key, value in self.parameters.items():
            url += f"{quote_plus(key)}={quote_plus(value)}&"
        return url + JSON_MARKER

    def results(self) -> ResultsEnvelope:
        """
        Get the decoded response, executing the query if it hasn't been done yet.

        Returns:
            The full response envelope

        Raises:
            TransportError: If the transport raises a requests or OS-level error,
                including non-2xx statuses from GDNFetcher
            DecodeError: If the body is not a JSON object
        """
        if self._response is not None:
            logger.debug("Returning cached response")
            return self._response

        url = self.build_url()
        logger.info(f"Fetching {url}")
        try:
            response = self.fetcher.get(url)
        except (requests.RequestException, OSError) as e:
            logger.warning(f"Request failed: {e}")
            raise TransportError(url, str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Response from {url} is not valid JSON: {e}")
            raise DecodeError(f"Response from {url} is not valid JSON: {e}") from e

        self._response = validate_envelope(data)
        return self._response

    @property
    def executed(self) -> bool:
        """Whether the query has been sent and its response cached."""
        return self._response is not None

    def as_sequence(self) -> List[Dict[str, Any]]:
        """Return the records of the response."""
        return envelope_results(self.results())

    def record_at(self, index: int) -> Optional[Dict[str, Any]]:
        """Return the record at ``index``, or None if there is none."""
        if not self.has_record(index):
            return None
        return self.as_sequence()[index]

    def has_record(self, index: int) -> bool:
        """Whether a record exists at ``index``."""
        size = self.length()
        return 0 <= index < size

    def length(self) -> int:
        """Number of records in the response."""
        return len(self.as_sequence())

    count = length

    def envelope_field(self, name: str) -> Any:
        """
        Read a top-level field of the response, e.g. ``pages``.

        Raises:
            KeyError: If the response has no such field
        """
        return self.results()[name]  # type: ignore[literal-required]

    def to_json(self) -> str:
        """Return the records as a JSON string."""
        return json.dumps(self.as_sequence())

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not real attributes.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.envelope_field(name)
        except KeyError:
            raise AttributeError(f"Response has no field {name!r}") from None

    def __getitem__(self, index):
        return self.as_sequence()[index]

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.as_sequence())

    def __len__(self) -> int:
        return self.length()

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        state = "executed" if self.executed else "pending"
        path = (self.endpoint or "") + "/".join(self.route)
        return f"<QueryBuilder {path} {self.parameters!r} ({state})>"
