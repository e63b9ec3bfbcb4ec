"""Static resource schema and envelope validation for SpaceGDN responses."""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from .exceptions import DecodeError, UnknownColumn
from .response_types import ResultsEnvelope
from .types import ResourceKind

# Columns on each GDN model. Order matters: a bare column name resolves to
# the first kind that declares it.
COLUMNS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        ResourceKind.Jar.value: ("id", "name", "site_url", "created_at", "updated_at"),
        ResourceKind.Channel.value: ("id", "jar_id", "name", "created_at", "updated_at"),
        ResourceKind.Version.value: ("id", "channel_id", "version", "created_at", "updated_at"),
        ResourceKind.Build.value: (
            "id",
            "version_id",
            "build",
            "size",
            "checksum",
            "url",
            "created_at",
            "updated_at",
        ),
    }
)

# Comparison symbols to GDN operator tokens. "in" is handled by the builder.
OPERATORS: Mapping[str, str] = MappingProxyType(
    {
        "=": "eq",
        "<": "lt",
        ">": "gt",
        "<=": "lteq",
        ">=": "gteq",
    }
)

IN_OPERATOR = "in"


def resolve_column(column: str) -> str:
    """
    Qualify a column name with the model that owns it.

    Args:
        column: Bare column name (``"checksum"``) or an already qualified
            one (``"build.checksum"``)

    Returns:
        The qualified ``<kind>.<column>`` name

    Raises:
        UnknownColumn: If a bare name is not declared by any model

    Example:
        >>> resolve_column("site_url")
        'jar.site_url'
        >>> resolve_column("id")
        'jar.id'
        >>> resolve_column("build.id")
        'build.id'
    """
    if "." in column:
        return column

    for kind, columns in COLUMNS.items():
        if column in columns:
            return f"{kind}.{column}"

    raise UnknownColumn(column)


def query_column(column: str) -> str:
    """
    Column name as sent in ``where`` and ``sort`` parameters.

    A model's self-named column (``build.build``, ``version.version``) goes
    out as the bare model name, which is how the API addresses it, e.g.
    ``where=build.gt.1234``. Everything else is resolved with resolve_column.
    """
    if column in COLUMNS and column in COLUMNS[column]:
        return column
    return resolve_column(column)


def validate_envelope(data: Any) -> ResultsEnvelope:
    """Check that a decoded response body is a JSON object."""
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    return data  # type: ignore[return-value]


def envelope_results(envelope: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return the ``results`` list of an envelope, validating its structure."""
    try:
        results = envelope["results"]
    except KeyError:
        raise DecodeError("Response envelope has no 'results' field") from None
    if not isinstance(results, list):
        raise DecodeError(f"Expected 'results' to be a list, got {type(results).__name__}")
    return results
