"""Domain models shared across the option builder, validator and chart hand-off."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping

CHART_TYPE = "GeoMap"
DEFAULT_WIDTH = 556
DEFAULT_HEIGHT = 347
ALLOWED_VALUE_TYPES = ("number", "string")

# Option keys understood by the GeoMap renderer; anything else is passed through.
_KNOWN_OPTION_FIELDS = {
    "width": "width",
    "height": "height",
    "dataMode": "data_mode",
    "region": "region",
    "colors": "colors",
    "showLegend": "show_legend",
    "showZoomOut": "show_zoom_out",
    "zoomOutLabel": "zoom_out_label",
}


class LocationFormat(str, Enum):
    """How the location column encodes places."""

    COORDINATE_PAIR = "coordinate_pair"
    PLACE_NAME = "place_name"


@dataclass(frozen=True, slots=True)
class RoleMapping:
    """Column names bound to the location, value and hover roles.

    An empty string means the role was not provided.
    """

    location_var: str
    num_var: str = ""
    hover_var: str = ""
    allowed: tuple[str, ...] = ALLOWED_VALUE_TYPES

    @property
    def has_value(self) -> bool:
        return bool(self.num_var)

    @property
    def has_hover(self) -> bool:
        return bool(self.hover_var)

    def to_dict(self) -> dict[str, Any]:
        return {
            "locationvar": self.location_var,
            "numvar": self.num_var,
            "hovervar": self.hover_var,
            "allowed": list(self.allowed),
        }


@dataclass(frozen=True, slots=True)
class GeoMapOptions:
    """Rendering options for the GeoMap renderer.

    Known renderer fields are typed attributes; every other key is kept
    verbatim in ``extra``.
    """

    width: int | str = DEFAULT_WIDTH
    height: int | str = DEFAULT_HEIGHT
    data_mode: str | None = None
    region: str | None = None
    colors: Any = None
    show_legend: bool | None = None
    show_zoom_out: bool | None = None
    zoom_out_label: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> GeoMapOptions:
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in raw.items():
            attr = _KNOWN_OPTION_FIELDS.get(str(key))
            if attr is None:
                extra[str(key)] = value
            else:
                known[attr] = value
        return cls(extra=extra, **known)

    def overlay(self, raw: Mapping[str, Any]) -> GeoMapOptions:
        """Return a copy with every key in ``raw`` taking precedence."""
        merged = self.to_dict()
        merged.update(raw)
        return GeoMapOptions.from_mapping(merged)

    def with_data_mode(self, data_mode: str) -> GeoMapOptions:
        return replace(self, data_mode=data_mode)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, attr in _KNOWN_OPTION_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        out.update(self.extra)
        return out


@dataclass(frozen=True, slots=True)
class GeoMapConfig:
    """Resolved configuration: renderer options, role metadata and display name."""

    gvis: GeoMapOptions
    data: RoleMapping
    data_name: str = "data"

    def to_dict(self) -> dict[str, Any]:
        return {
            "gvis": self.gvis.to_dict(),
            "dataName": self.data_name,
            "data": self.data.to_dict(),
        }

