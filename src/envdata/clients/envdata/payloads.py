"""Request body builders for the environmental data endpoints.

Each builder is a pure function from typed input to a JSON-serializable
dictionary. Nothing is validated beyond the argument types.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from .categories import Category, classify_measure
from .constants import SINCE_YESTERDAY

Days = Union[int, str]


def build_stations_request(
    category: Optional[Category] = None,
    station_type: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the body for listing stations.

    Args:
        category: Restrict to stations of this category. None lists all.
        station_type: Optional station type within the category.

    Returns:
        ``{"all": 1}`` when no category is given, else ``{"cat", "type"}``.
    """
    if category is None:
        return {"all": 1}
    body: Dict[str, Any] = {"cat": category.wire_index}
    if station_type is not None:
        body["type"] = station_type
    return body


def build_measures_request(station_code: str) -> Dict[str, Any]:
    return {"type": station_code}


def build_values_request(station_code: str, measure: str, days: Days) -> Dict[str, Any]:
    """Build the body for a time-series query.

    The ``cat`` field is derived from the measurement identifier, so callers
    never pick the category themselves.

    Args:
        station_code: Station to query.
        measure: Measurement identifier.
        days: Number of days back, or ``SINCE_YESTERDAY``.

    Returns:
        ``{"type", "cat", "measure", "days"}`` request body.
    """
    return {
        "type": station_code,
        "cat": classify_measure(measure).wire_index,
        "measure": measure,
        "days": days,
    }


def build_editorials_request(category: Optional[Category] = None) -> Dict[str, Any]:
    if category is None:
        return {}
    return {"cat": category.wire_index}


def build_measure_editorials_request() -> Dict[str, Any]:
    return {"all": 1}


__all__ = [
    "Days",
    "SINCE_YESTERDAY",
    "build_stations_request",
    "build_measures_request",
    "build_values_request",
    "build_editorials_request",
    "build_measure_editorials_request",
]
