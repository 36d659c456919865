"""Validation and reshaping of GeoMap input tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import pandas as pd
from pandas.api import types as ptypes

from .errors import MissingColumnError, TypeMismatchError, ValidationError
from .location import classify_location_format, split_coordinate_pairs
from .models import GeoMapConfig, LocationFormat

LATITUDE_COLUMN = "Latitude"
LONGITUDE_COLUMN = "Longitude"

_LOGGER = logging.getLogger("geomapkit.validate")


@dataclass(frozen=True, slots=True)
class CheckedData:
    """Cleaned table plus the location format detected while building it."""

    frame: pd.DataFrame
    location_format: LocationFormat

    @property
    def columns(self) -> list[str]:
        return [str(col) for col in self.frame.columns]


class GeoMapDataValidator:
    """Resolves role columns, checks their types and splits coordinate pairs."""

    def __init__(self, config: GeoMapConfig) -> None:
        self.config = config

    def run(self, data: Any) -> CheckedData:
        if not isinstance(data, pd.DataFrame):
            raise ValidationError(
                f"Expected a pandas DataFrame for '{self.config.data_name}', got {type(data).__name__}"
            )
        roles = self.config.data
        location = self._resolve(data, roles.location_var, role="location")
        entries: list[tuple[str, pd.Series]] = []

        if roles.has_value:
            entries.append(
                (roles.num_var, self._check_numeric(self._resolve(data, roles.num_var, role="value")))
            )
        if roles.has_hover:
            entries.append(
                (roles.hover_var, self._check_string(self._resolve(data, roles.hover_var, role="hover")))
            )

        location_format = classify_location_format(location.tolist())
        if location_format is LocationFormat.COORDINATE_PAIR:
            latitudes, longitudes = split_coordinate_pairs(location.tolist())
            entries = [
                (LATITUDE_COLUMN, pd.Series(latitudes, index=location.index, dtype="float64")),
                (LONGITUDE_COLUMN, pd.Series(longitudes, index=location.index, dtype="float64")),
                *entries,
            ]
        else:
            entries.insert(0, (roles.location_var, location))

        names = _unique_names([name for name, _ in entries])
        frame = pd.DataFrame({name: series for name, (_, series) in zip(names, entries)})
        _LOGGER.debug(
            "Checked '%s': %s, columns=%s",
            self.config.data_name,
            location_format.value,
            list(frame.columns),
        )
        return CheckedData(frame=frame.reset_index(drop=True), location_format=location_format)

    def _resolve(self, data: pd.DataFrame, column: str, *, role: str) -> pd.Series:
        if not column:
            raise MissingColumnError(
                f"No column given for role '{role}' in '{self.config.data_name}'"
            )
        if column not in data.columns:
            available = ", ".join(str(col) for col in data.columns)
            raise MissingColumnError(
                f"'{self.config.data_name}' has no column '{column}' for role '{role}'. "
                f"Available columns: {available}"
            )
        return data[column].copy()

    def _check_numeric(self, series: pd.Series) -> pd.Series:
        if ptypes.is_bool_dtype(series) or not ptypes.is_numeric_dtype(series):
            raise TypeMismatchError(
                f"Column '{series.name}' in '{self.config.data_name}' must be numeric, "
                f"found dtype {series.dtype}"
            )
        return series

    def _check_string(self, series: pd.Series) -> pd.Series:
        try:
            return series.astype(str).astype(object).where(series.notna(), None)
        except (TypeError, ValueError) as exc:
            raise TypeMismatchError(
                f"Column '{series.name}' in '{self.config.data_name}' cannot be converted to text: {exc}"
            ) from exc


def check_geomap_data(data: Any, config: GeoMapConfig) -> CheckedData:
    """Validate ``data`` against the role mapping in ``config`` and return a cleaned copy."""
    return GeoMapDataValidator(config).run(data)



def _unique_names(names: list[str]) -> list[str]:
    """Suffix repeated column names with ``.1``, ``.2`` so no role overwrites another."""
    seen: set[str] = set()
    out: list[str] = []
    for name in names:
        candidate = name
        suffix = 0
        while candidate in seen:
            suffix += 1
            candidate = f"{name}.{suffix}"
        seen.add(candidate)
        out.append(candidate)
    return out
