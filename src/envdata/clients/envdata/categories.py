"""Measurement categories and the measure-to-category classifier.

Every measurement identifier served by the environmental data service belongs
to exactly one of three categories. The backend addresses categories by a
stringified index, so the classifier output feeds directly into request
bodies (see :mod:`envdata.clients.envdata.payloads`).

The identifier tuples below are the catalogue this client declares. They are
not fetched from the service, so a deployment that names its measures
differently must update them here.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Mapping, Tuple


class Category(str, Enum):
    """Measurement category with its wire index."""

    AIR = "air"
    WEATHER = "weather"
    WATER = "water"

    @property
    def wire_index(self) -> str:
        """Return the stringified index the backend expects in ``cat``."""
        return _CATEGORY_INDEX[self]


_CATEGORY_INDEX: Dict[Category, str] = {
    Category.AIR: "0",
    Category.WEATHER: "1",
    Category.WATER: "2",
}

AIR_MEASURES: Tuple[str, ...] = (
    "pm10",
    "pm25",
    "no2",
    "ozone",
    "so2",
    "co",
    "benzene",
)

WEATHER_MEASURES: Tuple[str, ...] = (
    "temperature",
    "humidity",
    "pressure",
    "wind_speed",
    "wind_direction",
    "rain",
    "solar_radiation",
    "snow",
    "uv_index",
)

WATER_MEASURES: Tuple[str, ...] = (
    "ph",
    "water_temperature",
    "conductivity",
    "dissolved_oxygen",
    "turbidity",
    "water_level",
    "flow_rate",
    "nitrates",
)

CATEGORY_MEASURES: Mapping[Category, Tuple[str, ...]] = {
    Category.AIR: AIR_MEASURES,
    Category.WEATHER: WEATHER_MEASURES,
    Category.WATER: WATER_MEASURES,
}


def build_measure_lookup(
    groups: Mapping[Category, Iterable[str]],
) -> Dict[str, Category]:
    """Build the identifier -> category table, rejecting overlapping sets.

    Args:
        groups: Measurement identifiers grouped by owning category.

    Returns:
        Dictionary mapping each identifier to its category.

    Raises:
        ValueError: If an identifier is registered under two categories.
    """
    lookup: Dict[str, Category] = {}
    for category, measures in groups.items():
        for measure in measures:
            owner = lookup.get(measure)
            if owner is not None:
                raise ValueError(
                    f"Measure '{measure}' registered for both {owner.value} and {category.value}"
                )
            lookup[measure] = category
    return lookup


MEASURE_CATEGORY: Dict[str, Category] = build_measure_lookup(CATEGORY_MEASURES)


def classify_measure(measure: str) -> Category:
    """Return the category owning ``measure``.

    Air is checked first, then weather. Anything else, including identifiers
    that belong to no category at all, is treated as water.
    """
    owner = MEASURE_CATEGORY.get(measure)
    if owner is Category.AIR:
        return Category.AIR
    if owner is Category.WEATHER:
        return Category.WEATHER
    return Category.WATER


def is_known_measure(measure: str) -> bool:
    """Return True if ``measure`` is registered under any category."""
    return measure in MEASURE_CATEGORY


def measures_for(category: Category) -> Tuple[str, ...]:
    return CATEGORY_MEASURES[category]


__all__ = [
    "Category",
    "AIR_MEASURES",
    "WEATHER_MEASURES",
    "WATER_MEASURES",
    "CATEGORY_MEASURES",
    "MEASURE_CATEGORY",
    "build_measure_lookup",
    "classify_measure",
    "is_known_measure",
    "measures_for",
]
