"""Endpoint paths and fixed keys for the environmental data service.

``DEFAULT_BASE_URL`` is a placeholder host. Point ``ENVDATA_API_URL`` (or
``ClientConfig.base_url``) at the real deployment.
"""

from __future__ import annotations

# Service base URL
DEFAULT_BASE_URL = "https://envdata.example.org/api"

# Endpoint paths (relative to base URL)
STATIONS_PATH = "stations"
MEASURES_PATH = "station-measures"
VALUES_PATH = "values"
EDITORIALS_PATH = "editorials"
MEASURE_EDITORIALS_PATH = "measure-editorials"

# Request headers
JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Fixed key present in every time-series record
DATE_ENTRY_KEY = "date_entry"

# `days` value meaning "since yesterday"
SINCE_YESTERDAY = "yesterday"

# Thread pool size for multi-measure fetches
DEFAULT_MAX_WORKERS = 4

__all__ = [
    "DEFAULT_BASE_URL",
    "STATIONS_PATH",
    "MEASURES_PATH",
    "VALUES_PATH",
    "EDITORIALS_PATH",
    "MEASURE_EDITORIALS_PATH",
    "JSON_HEADERS",
    "DATE_ENTRY_KEY",
    "SINCE_YESTERDAY",
    "DEFAULT_MAX_WORKERS",
]
