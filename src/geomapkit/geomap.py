"""GeoMap preparation entry point and hand-off payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import pandas as pd
from pandas.api import types as ptypes

from .models import CHART_TYPE, GeoMapConfig, LocationFormat
from .options import apply_data_mode_default, build_options
from .validate import check_geomap_data

_LOGGER = logging.getLogger("geomapkit.geomap")


@dataclass(frozen=True, slots=True)
class GeoMapChart:
    """Everything the external chart assembler needs to produce a GeoMap."""

    data: pd.DataFrame
    config: GeoMapConfig
    location_format: LocationFormat
    chart_id: str | None = None
    type: str = CHART_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "chartid": self.chart_id,
            "locationFormat": self.location_format.value,
            "options": self.config.to_dict(),
            "dataTable": to_data_table(self.data),
        }


def geo_map(
    data: pd.DataFrame,
    location_var: str,
    num_var: str = "",
    hover_var: str = "",
    options: Mapping[str, Any] | None = None,
    *,
    chart_id: str | None = None,
    data_name: str | None = None,
    defaults: Mapping[str, Any] | None = None,
) -> GeoMapChart:
    """Build options, validate ``data`` and return the GeoMap hand-off record.

    Locations given as ``"lat:long"`` are split into ``Latitude`` and
    ``Longitude`` columns and ``dataMode`` defaults to ``"regions"``.
    Any other location values pass through unchanged.
    """
    config = build_options(
        data,
        location_var,
        num_var,
        hover_var,
        options,
        data_name=data_name,
        defaults=defaults,
    )
    checked = check_geomap_data(data, config)
    config = apply_data_mode_default(config, checked.location_format)
    _LOGGER.info(
        "Prepared GeoMap for '%s': %s, %d rows",
        config.data_name,
        checked.location_format.value,
        len(checked.frame),
    )
    return GeoMapChart(
        data=checked.frame,
        config=config,
        location_format=checked.location_format,
        chart_id=chart_id,
    )


def format_chart_lines(chart: GeoMapChart) -> Iterable[str]:
    yield f"[INFO] Location format: {chart.location_format.value}"
    yield f"[INFO] Columns: {', '.join(str(col) for col in chart.data.columns)}"
    yield f"[INFO] Rows: {len(chart.data)}"
    if chart.config.gvis.data_mode is not None:
        yield f"[INFO] dataMode: {chart.config.gvis.data_mode}"
    yield "[OK] Validation completed with no errors."


def column_type(series: pd.Series) -> str:
    if ptypes.is_numeric_dtype(series) and not ptypes.is_bool_dtype(series):
        return "number"
    return "string"


def to_data_table(frame: pd.DataFrame) -> dict[str, Any]:
    """Render ``frame`` as a typed column/row table with ``null`` for missing cells."""
    types = [column_type(frame[col]) for col in frame.columns]
    cols = [
        {"id": str(col), "label": str(col), "type": col_type}
        for col, col_type in zip(frame.columns, types)
    ]
    rows = []
    for record in frame.itertuples(index=False, name=None):
        cells = [{"v": _cell_value(value, col_type)} for value, col_type in zip(record, types)]
        rows.append({"c": cells})
    return {"cols": cols, "rows": rows}


def _cell_value(value: Any, col_type: str) -> Any:
    if value is None or pd.isna(value):
        return None
    if col_type == "number":
        if isinstance(value, float):
            return value
        number = float(value)
        return int(number) if number.is_integer() else number
    return str(value)
