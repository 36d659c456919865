"""Detection and splitting of ``latitude:longitude`` location values."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Sequence

from .errors import CoordinateParseError
from .models import LocationFormat

_COORDINATE_PAIR_RE = re.compile(r"[0-9.\-]+:[0-9.\-]+")

_LOGGER = logging.getLogger("geomapkit.location")


def residual_length(values: Iterable[Any]) -> int:
    """Count characters left over after removing every coordinate-pair match.

    Each value is scanned on its own so a match never spans two rows.
    """
    total = 0
    for value in values:
        total += len(_COORDINATE_PAIR_RE.sub("", str(value)))
    return total


def classify_location_format(values: Sequence[Any]) -> LocationFormat:
    """Classify a whole location column as coordinate pairs or place names."""
    if len(values) == 0:
        return LocationFormat.PLACE_NAME
    residual = residual_length(values)
    _LOGGER.debug("Location scan: %d values, %d residual characters", len(values), residual)
    if residual == 0:
        return LocationFormat.COORDINATE_PAIR
    return LocationFormat.PLACE_NAME


def parse_coordinate_pair(value: Any) -> tuple[float, float]:
    """Split ``value`` on the first ``:`` and parse both sides as floats."""
    text = str(value)
    lat_raw, sep, lon_raw = text.partition(":")
    if not sep:
        raise CoordinateParseError(f"Missing ':' separator in '{text}'")
    try:
        lat = float(lat_raw)
    except ValueError:
        raise CoordinateParseError(f"Latitude '{lat_raw}' in '{text}' is not a number") from None
    try:
        lon = float(lon_raw)
    except ValueError:
        raise CoordinateParseError(f"Longitude '{lon_raw}' in '{text}' is not a number") from None
    return lat, lon


def split_coordinate_pairs(values: Sequence[Any]) -> tuple[list[float], list[float]]:
    """Split coordinate-pair values into latitude and longitude lists."""
    latitudes: list[float] = []
    longitudes: list[float] = []
    for idx, value in enumerate(values):
        try:
            lat, lon = parse_coordinate_pair(value)
        except CoordinateParseError as exc:
            raise CoordinateParseError(f"Row {idx}: {exc}") from None
        latitudes.append(lat)
        longitudes.append(lon)
    return latitudes, longitudes
