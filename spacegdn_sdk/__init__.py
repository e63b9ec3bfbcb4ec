"""SpaceGDN API client."""

from .client import SpaceGDNClient
from .exceptions import DecodeError, InvalidOperator, SpaceGDNError, TransportError, UnknownColumn
from .query_builder import QueryBuilder
from .schemas import COLUMNS, OPERATORS, resolve_column
from .types import ResourceKind, SortOrder

__all__ = [
    "SpaceGDNClient",
    "QueryBuilder",
    "resolve_column",
    "COLUMNS",
    "OPERATORS",
    "ResourceKind",
    "SortOrder",
    "SpaceGDNError",
    "InvalidOperator",
    "UnknownColumn",
    "TransportError",
    "DecodeError",
]
