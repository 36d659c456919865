"""Tests for the GeoMap entry point and the hand-off payload."""

from __future__ import annotations

import json

import pandas as pd
import pytest

from geomapkit.errors import TypeMismatchError
from geomapkit.geomap import format_chart_lines, geo_map, to_data_table
from geomapkit.models import LocationFormat

pytestmark = pytest.mark.unit


def test_coordinates_default_data_mode_to_regions() -> None:
    """Split coordinates add dataMode=regions alongside the default size."""

    frame = pd.DataFrame({"LatLong": ["40.7:-74.0", "34.0:-118.2"], "value": [10, 20]})
    chart = geo_map(frame, "LatLong", "value")

    assert chart.type == "GeoMap"
    assert chart.location_format is LocationFormat.COORDINATE_PAIR
    assert list(chart.data.columns) == ["Latitude", "Longitude", "value"]
    assert chart.config.gvis.to_dict() == {"width": 556, "height": 347, "dataMode": "regions"}


def test_user_markers_mode_is_kept() -> None:
    """An explicit dataMode survives the coordinate default."""

    frame = pd.DataFrame({"LatLong": ["25.4:-77.8"], "Speed_kt": [90]})
    chart = geo_map(frame, "LatLong", "Speed_kt", options={"dataMode": "markers", "height": 350})
    assert chart.config.gvis.data_mode == "markers"
    assert chart.config.gvis.height == 350


def test_place_names_leave_data_mode_unset() -> None:
    """Numeric values alone do not trigger the regions default."""

    frame = pd.DataFrame({"Country": ["England", "Germany"], "Profit": [5, 7]})
    chart = geo_map(frame, "Country", "Profit", data_name="Exports", chart_id="GeoMapID1")

    assert chart.config.gvis.data_mode is None
    assert chart.config.data_name == "Exports"
    assert chart.chart_id == "GeoMapID1"
    pd.testing.assert_frame_equal(chart.data, frame)


def test_validation_failure_propagates() -> None:
    """No chart is produced for invalid data."""

    frame = pd.DataFrame({"Country": ["England"], "Profit": ["n/a"]})
    with pytest.raises(TypeMismatchError):
        geo_map(frame, "Country", "Profit")


def test_data_table_types_and_values() -> None:
    """Numeric columns become number cells and missing values become null."""

    frame = pd.DataFrame(
        {"Latitude": [40.7, float("nan")], "Population": [10, 20], "Rank": ["a", "b"]}
    )
    table = to_data_table(frame)

    assert table["cols"] == [
        {"id": "Latitude", "label": "Latitude", "type": "number"},
        {"id": "Population", "label": "Population", "type": "number"},
        {"id": "Rank", "label": "Rank", "type": "string"},
    ]
    assert table["rows"][0] == {"c": [{"v": 40.7}, {"v": 10}, {"v": "a"}]}
    assert table["rows"][1]["c"][0] == {"v": None}


def test_chart_payload_is_json_serialisable() -> None:
    """The hand-off dict holds options, role metadata and the data table."""

    frame = pd.DataFrame(
        {"LatLong": ["25.4:-77.8"], "Speed_kt": [90], "Category": ["Hurricane"]}
    )
    chart = geo_map(frame, "LatLong", "Speed_kt", "Category", options={"region": "US"}, data_name="Andrew")
    payload = json.loads(json.dumps(chart.to_dict()))

    assert payload["type"] == "GeoMap"
    assert payload["chartid"] is None
    assert payload["locationFormat"] == "coordinate_pair"
    assert payload["options"]["gvis"] == {
        "width": 556,
        "height": 347,
        "dataMode": "regions",
        "region": "US",
    }
    assert payload["options"]["dataName"] == "Andrew"
    assert payload["options"]["data"]["locationvar"] == "LatLong"
    assert [col["id"] for col in payload["dataTable"]["cols"]] == [
        "Latitude",
        "Longitude",
        "Speed_kt",
        "Category",
    ]
    assert payload["dataTable"]["rows"][0]["c"] == [
        {"v": 25.4},
        {"v": -77.8},
        {"v": 90},
        {"v": "Hurricane"},
    ]


def test_format_chart_lines_reports_format() -> None:
    """Summary lines mention the detected format and resolved dataMode."""

    frame = pd.DataFrame({"LatLong": ["40.7:-74.0"]})
    lines = list(format_chart_lines(geo_map(frame, "LatLong")))
    assert "[INFO] Location format: coordinate_pair" in lines
    assert "[INFO] dataMode: regions" in lines
    assert lines[-1].startswith("[OK]")


def test_shared_value_and_hover_column_is_typed_per_role() -> None:
    """The value copy stays a number column and the hover copy is a string column."""

    frame = pd.DataFrame({"Country": ["England", "Germany"], "Profit": [5, 7]})
    table = to_data_table(geo_map(frame, "Country", "Profit", "Profit").data)

    assert [(col["id"], col["type"]) for col in table["cols"]] == [
        ("Country", "string"),
        ("Profit", "number"),
        ("Profit.1", "string"),
    ]


def test_missing_hover_becomes_null_in_data_table() -> None:
    """A missing hover cell is emitted as null."""

    frame = pd.DataFrame({"Country": ["England", "Germany"], "Note": ["big", None]})
    table = to_data_table(geo_map(frame, "Country", hover_var="Note").data)
    assert table["rows"][1]["c"][1] == {"v": None}
    assert table["rows"][0]["c"][1] == {"v": "big"}
