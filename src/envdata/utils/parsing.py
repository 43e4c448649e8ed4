from __future__ import annotations
import json
from typing import Any, List, Optional


def parse_encoded_list(value: Optional[Any]) -> List[str]:
    """Decode a list field that the service ships either as JSON or as CSV.

    Station measures and editorial references arrive as strings such as
    ``'["pm10", "no2"]'`` or ``"pm10, no2"``. Already-decoded lists are
    accepted as well.

    Args:
        value: Encoded list string, a list, or None.

    Returns:
        List of stripped, non-empty string tokens.

    Examples:
        >>> parse_encoded_list('["pm10", "no2"]')
        ['pm10', 'no2']
        >>> parse_encoded_list("pm10, no2")
        ['pm10', 'no2']
        >>> parse_encoded_list(None)
        []
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]

    text = str(value).strip()
    if text.startswith("["):
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = None
        if isinstance(decoded, list):
            return [str(item).strip() for item in decoded if item is not None and str(item).strip()]
    return [item.strip() for item in text.split(",") if item.strip()]


__all__ = ["parse_encoded_list"]
