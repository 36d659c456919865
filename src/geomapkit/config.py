"""Typed configuration loader for `geomapkit.yaml`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, cast

import yaml

from .models import DEFAULT_HEIGHT, DEFAULT_WIDTH


def _mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected mapping for '{field_name}'")
    return cast(Mapping[str, Any], value)


def _str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected non-empty string for '{field_name}'")
    return value.strip()


def _int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected integer for '{field_name}'")
    return value


def _bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Expected bool for '{field_name}'")
    return value


def _path_from_cfg(value: Any, field_name: str, root_dir: Path) -> Path:
    raw = _str(value, field_name)
    p = Path(raw)
    return p if p.is_absolute() else root_dir / p


@dataclass(frozen=True, slots=True)
class ChartDefaultsConfig:
    width: int
    height: int

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> ChartDefaultsConfig:
        width = _int(raw.get("width", DEFAULT_WIDTH), "chart.defaults.width")
        height = _int(raw.get("height", DEFAULT_HEIGHT), "chart.defaults.height")
        if width <= 0 or height <= 0:
            raise ValueError("chart.defaults.width and chart.defaults.height must be > 0")
        return cls(width=width, height=height)

    def as_options(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class ChartConfig:
    defaults: ChartDefaultsConfig

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> ChartConfig:
        return cls(
            defaults=ChartDefaultsConfig.from_mapping(_mapping(raw.get("defaults"), "chart.defaults")),
        )


@dataclass(frozen=True, slots=True)
class OutputConfig:
    dir: Path

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], root_dir: Path) -> OutputConfig:
        return cls(dir=_path_from_cfg(raw.get("dir", "build"), "output.dir", root_dir))


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    file: Path | None
    verbose: bool

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], root_dir: Path) -> LoggingConfig:
        file_raw = raw.get("file")
        return cls(
            file=None if file_raw is None else _path_from_cfg(file_raw, "logging.file", root_dir),
            verbose=_bool(raw.get("verbose", False), "logging.verbose"),
        )


@dataclass(frozen=True, slots=True)
class AppConfig:
    source_path: Path | None
    chart: ChartConfig
    output: OutputConfig
    logging: LoggingConfig

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], source_path: Path | None) -> AppConfig:
        root_dir = source_path.parent.resolve() if source_path is not None else Path.cwd()
        return cls(
            source_path=source_path.resolve() if source_path is not None else None,
            chart=ChartConfig.from_mapping(_mapping(raw.get("chart"), "chart")),
            output=OutputConfig.from_mapping(_mapping(raw.get("output"), "output"), root_dir),
            logging=LoggingConfig.from_mapping(_mapping(raw.get("logging"), "logging"), root_dir),
        )

    @classmethod
    def default(cls) -> AppConfig:
        return cls.from_mapping({}, None)


def load_config(path: str | Path) -> AppConfig:
    """Load and validate the YAML config file into typed settings."""
    cfg_path = Path(path).resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ValueError("Top-level config must be a YAML mapping")
    return AppConfig.from_mapping(cast(Mapping[str, Any], raw), cfg_path)
