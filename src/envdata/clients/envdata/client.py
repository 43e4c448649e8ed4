from __future__ import annotations
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union
import pandas as pd
import requests
from pydantic import BaseModel, TypeAdapter, ValidationError
from envdata.utils.parsing import parse_encoded_list
from .categories import Category
from .constants import (
    DATE_ENTRY_KEY,
    EDITORIALS_PATH,
    JSON_HEADERS,
    MEASURE_EDITORIALS_PATH,
    MEASURES_PATH,
    STATIONS_PATH,
    VALUES_PATH,
)
from .models import (
    ClientConfig,
    Delivered,
    EditorialEntry,
    Envelope,
    EnvDataApplicationError,
    EnvDataPayloadError,
    EnvDataResponseError,
    EnvDataTransportError,
    MeasureEditorialEntry,
    Station,
    timeseries_record_model,
)
from .payloads import (
    Days,
    build_editorials_request,
    build_measure_editorials_request,
    build_measures_request,
    build_stations_request,
    build_values_request,
)

LOGGER = logging.getLogger(__name__)

_STATIONS_ADAPTER = TypeAdapter(List[Station])
_MEASURES_ADAPTER = TypeAdapter(Union[List[str], str])
_EDITORIALS_ADAPTER = TypeAdapter(List[EditorialEntry])
_MEASURE_EDITORIALS_ADAPTER = TypeAdapter(List[MeasureEditorialEntry])


@lru_cache(maxsize=None)
def _records_adapter(measure: str) -> TypeAdapter:
    return TypeAdapter(List[timeseries_record_model(measure)])  # type: ignore[misc]


# Raw HTTP result handed from the transport to the envelope validator
@dataclass(frozen=True)
class HTTPResponse:
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


# HTTP Client Protocol
class HTTPClient(Protocol):
    def post(
        self,
        url: str,
        headers: Dict[str, str],
        json_body: Dict[str, Any],
        timeout: Optional[float],
    ) -> HTTPResponse:
        ...


class RequestsHTTPClient:
    def __init__(self) -> None:
        self._session: Optional[requests.Session] = None
        self._session_lock = threading.Lock()

    def _get_session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        # Worker threads share one session
        with self._session_lock:
            if self._session is None:
                self._session = requests.Session()
            return self._session

    def close(self) -> None:
        with self._session_lock:
            if self._session is not None:
                self._session.close()
                self._session = None

    def __enter__(self) -> "RequestsHTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def post(
        self,
        url: str,
        headers: Dict[str, str],
        json_body: Dict[str, Any],
        timeout: Optional[float],
    ) -> HTTPResponse:
        session = self._get_session()
        response: Optional[requests.Response] = None

        try:
            response = session.post(url, json=json_body, headers=headers, timeout=timeout)
            return HTTPResponse(status_code=response.status_code, text=response.text)
        except requests.exceptions.Timeout as exc:
            raise EnvDataTransportError(
                f"Request timed out after {timeout} seconds while connecting to {url}"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise EnvDataTransportError(f"Failed to reach {url}: {exc}") from exc
        finally:
            # Release the connection back to the session pool
            if response is not None:
                response.close()


# Main client class for the environmental data service
class EnvDataClient:
    """Typed facade over the environmental data service.

    Every operation builds a request body, POSTs it, checks the HTTP status,
    unwraps the ``{success, message}`` envelope and returns the payload.

    Example:
        >>> with EnvDataClient() as client:
        ...     stations = client.list_stations()
        ...     values = client.get_values(stations[0].code, "ozone", days=30)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        http_client: Optional[HTTPClient] = None,
    ):
        if config is None:
            from envdata.config import get_settings

            config = ClientConfig.from_settings(get_settings())
        self._config = config
        # HTTP client - track if we own it for cleanup
        self._owns_http_client = http_client is None
        self._http_client = http_client or RequestsHTTPClient()
        self._base_url = self._config.base_url.rstrip("/")

    def close(self) -> None:
        if self._owns_http_client and hasattr(self._http_client, "close"):
            self._http_client.close()

    def __enter__(self) -> "EnvDataClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    def endpoint(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    # Send request and unwrap envelope
    def _call(self, path: str, body: Dict[str, Any]) -> Any:
        url = self.endpoint(path)
        LOGGER.debug("POST %s body=%s", url, body)
        response = self._http_client.post(
            url=url,
            headers=dict(JSON_HEADERS),
            json_body=body,
            timeout=self._config.timeout,
        )

        if not response.ok:
            LOGGER.warning("HTTP %s from %s: %s", response.status_code, url, response.text[:200])
            raise EnvDataTransportError(
                f"HTTP {response.status_code} error for {url}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            envelope = Envelope.model_validate_json(response.text)
        except ValidationError as exc:
            LOGGER.warning("Malformed envelope from %s: %s", url, exc)
            raise EnvDataResponseError(
                f"Response from {url} is not a valid envelope",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        outcome = envelope.result()
        if not isinstance(outcome, Delivered):
            LOGGER.warning("Service rejected request to %s: %s", url, outcome.reason)
            raise EnvDataApplicationError(
                f"Service reported failure for {url}: {outcome.reason}",
                status_code=response.status_code,
                reason=outcome.reason,
            )
        return outcome.payload

    def _validate(self, adapter: TypeAdapter, payload: Any) -> Any:
        if not self._config.validate_payloads:
            return payload
        try:
            return adapter.validate_python(payload)
        except ValidationError as exc:
            raise EnvDataPayloadError(
                f"Payload does not match the expected schema: {exc}", payload=payload
            ) from exc

    # List stations, optionally filtered by category and type
    def list_stations(
        self,
        category: Optional[Category] = None,
        station_type: Optional[str] = None,
    ) -> List[Station]:
        payload = self._call(STATIONS_PATH, build_stations_request(category, station_type))
        return self._validate(_STATIONS_ADAPTER, payload)

    # List measurement identifiers supported by a station
    def list_measures(self, station_code: str) -> List[str]:
        payload = self._call(MEASURES_PATH, build_measures_request(station_code))
        if not self._config.validate_payloads:
            return payload
        return parse_encoded_list(self._validate(_MEASURES_ADAPTER, payload))

    def get_values(self, station_code: str, measure: str, days: Days) -> List[BaseModel]:
        """Fetch time-series records for one measure on one station.

        Args:
            station_code: Station code as returned by :meth:`list_stations`.
            measure: Measurement identifier; its category is derived from it.
            days: Number of days back, or ``SINCE_YESTERDAY``.

        Returns:
            Records of ``timeseries_record_model(measure)``, each holding
            ``date_entry`` and the measure value. Raw dictionaries when payload
            validation is disabled.
        """
        body = build_values_request(station_code, measure, days)
        payload = self._call(VALUES_PATH, body)
        return self._validate(_records_adapter(measure), payload)

    def get_values_many(
        self,
        station_code: str,
        measures: Sequence[str],
        days: Days,
        max_workers: Optional[int] = None,
    ) -> Dict[str, List[BaseModel]]:
        """Fetch several measures for one station concurrently.

        One request per distinct measure is issued on a thread pool. The first
        failure is raised; no partial result is returned.

        Returns:
            Mapping measure -> records, in the order the measures were given.
        """
        unique_measures = list(dict.fromkeys(measures))
        if not unique_measures:
            return {}
        workers = max(1, min(max_workers or self._config.max_workers, len(unique_measures)))

        results: Dict[str, List[BaseModel]] = {}
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self.get_values, station_code, measure, days): measure
                for measure in unique_measures
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        return {measure: results[measure] for measure in unique_measures}

    # Fetch editorial entries, optionally filtered by category
    def get_editorials(self, category: Optional[Category] = None) -> List[EditorialEntry]:
        payload = self._call(EDITORIALS_PATH, build_editorials_request(category))
        return self._validate(_EDITORIALS_ADAPTER, payload)

    # Fetch descriptive metadata for every measure
    def get_measure_editorials(self) -> List[MeasureEditorialEntry]:
        payload = self._call(MEASURE_EDITORIALS_PATH, build_measure_editorials_request())
        return self._validate(_MEASURE_EDITORIALS_ADAPTER, payload)


def values_to_dataframe(records: Sequence[Any], measure: str) -> pd.DataFrame:
    """Convert a time-series payload into a DataFrame.

    ``date_entry`` is parsed to datetime and the measure column to numbers;
    values that cannot be parsed become NaT/NaN. Rows are sorted by date.

    Args:
        records: Records from :meth:`EnvDataClient.get_values`, either models
            or raw dictionaries.
        measure: The measurement identifier the records were requested for.

    Returns:
        DataFrame with ``date_entry`` and ``measure`` as leading columns.

    Raises:
        ValueError: If ``measure`` collides with the ``date_entry`` key.
    """
    if measure == DATE_ENTRY_KEY:
        raise ValueError(f"Measure name '{measure}' is reserved for the record timestamp")
    rows = [
        record.model_dump() if isinstance(record, BaseModel) else dict(record)
        for record in records
    ]
    frame = pd.DataFrame(rows)
    for column in (DATE_ENTRY_KEY, measure):
        if column not in frame.columns:
            frame[column] = None

    leading = [DATE_ENTRY_KEY, measure]
    frame = frame[leading + [c for c in frame.columns if c not in leading]].copy()
    frame[DATE_ENTRY_KEY] = pd.to_datetime(frame[DATE_ENTRY_KEY], errors="coerce")
    frame[measure] = pd.to_numeric(frame[measure], errors="coerce")

    if frame.empty:
        return frame
    return frame.sort_values(DATE_ENTRY_KEY, na_position="last").reset_index(drop=True)


# Convenience functions wrapping a short-lived client
def fetch_stations(
    *,
    category: Optional[Category] = None,
    station_type: Optional[str] = None,
    config: Optional[ClientConfig] = None,
) -> List[Station]:
    with EnvDataClient(config=config) as client:
        return client.list_stations(category, station_type)


def fetch_values_dataframe(
    *,
    station_code: str,
    measure: str,
    days: Days,
    config: Optional[ClientConfig] = None,
) -> pd.DataFrame:
    with EnvDataClient(config=config) as client:
        return values_to_dataframe(client.get_values(station_code, measure, days), measure)


__all__ = [
    # Main client class
    "EnvDataClient",
    # HTTP client protocol and implementation
    "HTTPClient",
    "HTTPResponse",
    "RequestsHTTPClient",
    # Helpers
    "values_to_dataframe",
    "fetch_stations",
    "fetch_values_dataframe",
]
