"""Error types raised by the SpaceGDN SDK."""


class SpaceGDNError(Exception):
    """Base class for all SpaceGDN SDK errors."""


class InvalidOperator(SpaceGDNError, ValueError):
    """Raised when a where-clause uses an operator the API does not know."""

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"Invalid operator: {operator!r}")


class UnknownColumn(SpaceGDNError, ValueError):
    """Raised when a bare column name matches none of the resource schemas."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Unknown column: {column!r}")


class TransportError(SpaceGDNError):
    """Raised when the HTTP request fails or returns a non-2xx status."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Request to {url} failed: {message}")


class DecodeError(SpaceGDNError):
    """Raised when a response body is not a valid SpaceGDN envelope."""
