"""Shared types for SpaceGDN queries."""

from enum import Enum


class ResourceKind(str, Enum):
    """Queryable resource kinds, in column-resolution order."""

    Jar = "jar"
    Channel = "channel"
    Version = "version"
    Build = "build"


class SortOrder(str, Enum):
    """Sort direction."""

    Ascending = "asc"
    Descending = "desc"
