"""Option builder: merges user rendering options onto GeoMap defaults."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from .models import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    GeoMapConfig,
    GeoMapOptions,
    LocationFormat,
    RoleMapping,
)

DEFAULT_OPTIONS: Mapping[str, Any] = {"width": DEFAULT_WIDTH, "height": DEFAULT_HEIGHT}
COORDINATE_DATA_MODE = "regions"


def resolve_data_name(data: Any, data_name: str | None = None) -> str:
    """Pick the display name used in diagnostics for ``data``."""
    if data_name:
        return data_name
    attrs = getattr(data, "attrs", None)
    if isinstance(attrs, Mapping):
        name = attrs.get("name")
        if isinstance(name, str) and name.strip():
            return name.strip()
    return "data"


def build_options(
    data: Any,
    location_var: str,
    num_var: str = "",
    hover_var: str = "",
    options: Mapping[str, Any] | None = None,
    *,
    data_name: str | None = None,
    defaults: Mapping[str, Any] | None = None,
) -> GeoMapConfig:
    """Assemble the GeoMap configuration.

    ``defaults`` (``width=556, height=347`` unless given) are overlaid with
    ``options``; user keys always win and unspecified keys keep their default.
    Nothing is validated here.
    """
    base = GeoMapOptions.from_mapping(DEFAULT_OPTIONS if defaults is None else defaults)
    gvis = base.overlay(options or {})
    roles = RoleMapping(
        location_var=location_var or "",
        num_var=num_var or "",
        hover_var=hover_var or "",
    )
    return GeoMapConfig(gvis=gvis, data=roles, data_name=resolve_data_name(data, data_name))


def apply_data_mode_default(config: GeoMapConfig, location_format: LocationFormat) -> GeoMapConfig:
    """Default ``dataMode`` to regions when locations were split into coordinates.

    An explicit ``dataMode`` from the caller is always kept.
    """
    if location_format is not LocationFormat.COORDINATE_PAIR:
        return config
    if config.gvis.data_mode is not None:
        return config
    return replace(config, gvis=config.gvis.with_data_mode(COORDINATE_DATA_MODE))
