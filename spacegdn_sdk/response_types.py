"""Response type definitions for the SpaceGDN API."""

from typing import Any, Dict, List, TypedDict


class ResultsEnvelope(TypedDict, total=False):
    """Top-level response object. Only ``results`` is guaranteed."""

    results: List[Dict[str, Any]]  # Records of the queried kind
    pages: int  # Number of pages available for the query
