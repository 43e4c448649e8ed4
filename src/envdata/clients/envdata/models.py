"""Data models and custom exceptions for the environmental data client."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, create_model, field_validator

from envdata.utils.parsing import parse_encoded_list

from .categories import Category, classify_measure
from .constants import DATE_ENTRY_KEY, DEFAULT_BASE_URL, DEFAULT_MAX_WORKERS


# ─────────────────────────────────────────────────────────────────────────────
# Exceptions
# ─────────────────────────────────────────────────────────────────────────────

class EnvDataError(Exception):
    """Base exception for all environmental data client errors."""
    pass


class EnvDataTransportError(EnvDataError):
    """The HTTP call did not complete with a success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def ok(self) -> bool:
        return False


class EnvDataApplicationError(EnvDataError):
    """The service answered but the envelope's success flag was falsy."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        reason: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self) -> bool:
        return True


class EnvDataResponseError(EnvDataError):
    """The response body is not a well-formed envelope."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EnvDataPayloadError(EnvDataError):
    """The unwrapped payload does not match the expected schema."""

    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


# ─────────────────────────────────────────────────────────────────────────────
# Envelope
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Delivered:
    """Envelope that carried a payload."""
    payload: Any


@dataclass(frozen=True)
class Rejected:
    """Envelope that carried an error description instead of a payload."""
    reason: Any


EnvelopeResult = Union[Delivered, Rejected]


class Envelope(BaseModel):
    """Uniform response wrapper ``{success, message}``.

    ``message`` is the payload when ``success`` is truthy and a human-readable
    failure description otherwise. Use :meth:`result` instead of reading
    ``message`` directly.
    """

    success: bool
    message: Any = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("success", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        """Read the flag by truthiness; ``null``, ``0``, ``"0"`` and ``"false"`` reject."""
        if isinstance(v, str):
            return v.strip().lower() not in {"", "0", "false"}
        return bool(v)

    def result(self) -> EnvelopeResult:
        if self.success:
            return Delivered(payload=self.message)
        return Rejected(reason=self.message)


# ─────────────────────────────────────────────────────────────────────────────
# Payload models
# ─────────────────────────────────────────────────────────────────────────────

class Station(BaseModel):
    """Physical sensor location.

    Attributes:
        id: Numeric station identifier.
        name: Display name.
        code: Opaque station code used to address further queries.
        measures: Supported measurement identifiers, comma- or JSON-encoded.
    """

    id: int
    name: str
    code: str
    measures: Optional[Union[str, List[str]]] = None

    model_config = ConfigDict(frozen=True, extra="allow")

    def measure_list(self) -> List[str]:
        """Decode ``measures`` into a list of identifiers."""
        return parse_encoded_list(self.measures)


def _coerce_optional_float(v: Any) -> Optional[float]:
    if v is None or v == "":
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


class EditorialEntry(BaseModel):
    """Descriptive article attached to categories, stations or measures.

    ``cats``, ``stations`` and ``measures`` are JSON-encoded lists as shipped
    by the service; use the helper methods to decode them.
    """

    id: Optional[int] = None
    title: str
    description: Optional[str] = None
    image: Optional[str] = None
    link: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    cats: Optional[Union[str, List[Any]]] = None
    stations: Optional[Union[str, List[Any]]] = None
    measures: Optional[Union[str, List[Any]]] = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def coerce_coordinate(cls, v: Any) -> Optional[float]:
        """Convert coordinates to float, mapping blanks and junk to None."""
        return _coerce_optional_float(v)

    def category_list(self) -> List[Category]:
        """Decode ``cats``; tokens may be wire indices or category names."""
        by_token = {category.wire_index: category for category in Category}
        by_token.update({category.value: category for category in Category})
        return [by_token[token] for token in parse_encoded_list(self.cats) if token in by_token]

    def station_list(self) -> List[str]:
        return parse_encoded_list(self.stations)

    def measure_list(self) -> List[str]:
        return parse_encoded_list(self.measures)


class MeasureEditorialEntry(BaseModel):
    """Descriptive metadata for a single measurement identifier."""

    id: Optional[int] = None
    measure: str
    title: str
    description: Optional[str] = None
    unit: Optional[str] = None
    image: Optional[str] = None
    link: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def category(self) -> Category:
        return classify_measure(self.measure)


RecordValue = Optional[Union[int, float, str]]


@lru_cache(maxsize=None)
def timeseries_record_model(measure: str) -> Type[BaseModel]:
    """Return the record model for a time-series query on ``measure``.

    The service answers a values query with rows keyed by ``date_entry`` and
    the requested measurement identifier, so the row schema depends on the
    query. Models are cached per identifier.

    Example:
        >>> Ozone = timeseries_record_model("ozone")
        >>> Ozone(date_entry="2024-05-01 10:00:00", ozone=41.5).ozone
        41.5

    Raises:
        ValueError: If ``measure`` collides with the ``date_entry`` key.
    """
    if measure == DATE_ENTRY_KEY:
        raise ValueError(f"Measure name '{measure}' is reserved for the record timestamp")
    fields = {
        DATE_ENTRY_KEY: (RecordValue, ...),
        measure: (RecordValue, None),
    }
    model_name = "".join(part.capitalize() for part in measure.split("_")) + "Record"
    return create_model(  # type: ignore[call-overload]
        model_name,
        __config__=ConfigDict(frozen=True, extra="allow"),
        **fields,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────

class ClientConfig(BaseModel):
    """Configuration settings for the environmental data client.

    Attributes:
        base_url: Service base URL; endpoint paths are appended to it.
        timeout: Optional request timeout in seconds (None waits indefinitely).
        validate_payloads: Validate unwrapped payloads against the models.
            When False, ``envelope.message`` is returned exactly as received.
        max_workers: Thread pool size for multi-measure fetches.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None
    validate_payloads: bool = True
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1)

    @classmethod
    def from_settings(cls, settings: Any) -> "ClientConfig":
        """Build a config from :class:`envdata.config.settings.Settings`."""
        return cls(
            base_url=settings.api.envdata_api_url,
            timeout=settings.api.envdata_timeout,
            validate_payloads=settings.api.envdata_validate_payloads,
        )


__all__ = [
    # Exceptions
    "EnvDataError",
    "EnvDataTransportError",
    "EnvDataApplicationError",
    "EnvDataResponseError",
    "EnvDataPayloadError",
    # Envelope
    "Envelope",
    "EnvelopeResult",
    "Delivered",
    "Rejected",
    # Payload models
    "Station",
    "EditorialEntry",
    "MeasureEditorialEntry",
    "RecordValue",
    "timeseries_record_model",
    # Config
    "ClientConfig",
]
