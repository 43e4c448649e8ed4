"""Environmental data service client package.

This package provides a typed interface to the environmental data service
with support for:
- Measure-to-category classification driving request dispatch
- Type-safe payloads via Pydantic models (per-measure time-series records)
- Dependency injection for the HTTP client (testability)

Example usage:
    >>> from envdata.clients.envdata import EnvDataClient
    >>> with EnvDataClient() as client:
    ...     stations = client.list_stations()
    ...     measures = client.list_measures(stations[0].code)
    ...     records = client.get_values(stations[0].code, measures[0], days=30)
"""

from __future__ import annotations

from .categories import (
    AIR_MEASURES,
    CATEGORY_MEASURES,
    MEASURE_CATEGORY,
    WATER_MEASURES,
    WEATHER_MEASURES,
    Category,
    classify_measure,
    is_known_measure,
    measures_for,
)
from .client import (
    EnvDataClient,
    HTTPClient,
    HTTPResponse,
    RequestsHTTPClient,
    fetch_stations,
    fetch_values_dataframe,
    values_to_dataframe,
)
from .constants import DATE_ENTRY_KEY, DEFAULT_BASE_URL, SINCE_YESTERDAY
from .models import (
    ClientConfig,
    Delivered,
    EditorialEntry,
    Envelope,
    EnvDataApplicationError,
    EnvDataError,
    EnvDataPayloadError,
    EnvDataResponseError,
    EnvDataTransportError,
    MeasureEditorialEntry,
    Rejected,
    Station,
    timeseries_record_model,
)
from .payloads import (
    build_editorials_request,
    build_measure_editorials_request,
    build_measures_request,
    build_stations_request,
    build_values_request,
)

__all__ = [
    # Main client
    "EnvDataClient",
    "HTTPClient",
    "HTTPResponse",
    "RequestsHTTPClient",
    "fetch_stations",
    "fetch_values_dataframe",
    "values_to_dataframe",
    # Categories
    "Category",
    "AIR_MEASURES",
    "WEATHER_MEASURES",
    "WATER_MEASURES",
    "CATEGORY_MEASURES",
    "MEASURE_CATEGORY",
    "classify_measure",
    "is_known_measure",
    "measures_for",
    # Request builders
    "build_stations_request",
    "build_measures_request",
    "build_values_request",
    "build_editorials_request",
    "build_measure_editorials_request",
    # Models
    "ClientConfig",
    "Envelope",
    "Delivered",
    "Rejected",
    "Station",
    "EditorialEntry",
    "MeasureEditorialEntry",
    "timeseries_record_model",
    # Exceptions
    "EnvDataError",
    "EnvDataTransportError",
    "EnvDataApplicationError",
    "EnvDataResponseError",
    "EnvDataPayloadError",
    # Constants
    "DATE_ENTRY_KEY",
    "DEFAULT_BASE_URL",
    "SINCE_YESTERDAY",
]
