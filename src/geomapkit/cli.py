"""CLI entrypoint for geomapkit."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from .config import AppConfig, load_config
from .errors import ValidationError
from .geomap import GeoMapChart, format_chart_lines, geo_map
from .util import parse_option_pairs, setup_logging, write_json

LOGGER = logging.getLogger("geomapkit.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geomapkit",
        description="Validate tables and prepare GeoMap chart configurations.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", default=None, help="Path to YAML config.")
        p.add_argument("--verbose", action="store_true", help="Enable debug logs.")
        p.add_argument("--input", required=True, help="CSV file with the table to map.")
        p.add_argument("--location", required=True, help="Column holding locations.")
        p.add_argument("--value", default="", help="Numeric column mapped to the locations.")
        p.add_argument("--hover", default="", help="Column with hover text.")

    check_p = subparsers.add_parser("check", help="Validate the table only.")
    add_common(check_p)

    prepare_p = subparsers.add_parser(
        "prepare",
        help="Validate the table and write the cleaned data and chart JSON.",
    )
    add_common(prepare_p)
    prepare_p.add_argument(
        "--option",
        action="append",
        default=[],
        help="Rendering option as key=value. Can be repeated.",
    )
    prepare_p.add_argument("--chart-id", default=None, help="Chart id passed to the assembler.")
    prepare_p.add_argument("--name", default=None, help="Dataset display name; defaults to the file stem.")
    prepare_p.add_argument("--output-dir", default=None, help="Override output.dir from the config.")

    return parser


def _load_and_setup(args: argparse.Namespace) -> AppConfig:
    cfg = load_config(args.config) if args.config else AppConfig.default()
    setup_logging(cfg.logging.file, verbose=bool(args.verbose) or cfg.logging.verbose)
    return cfg


def _read_table(path: str) -> pd.DataFrame:
    input_path = Path(path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    return pd.read_csv(input_path)


def _prepare_chart(
    cfg: AppConfig,
    args: argparse.Namespace,
    options: dict[str, Any] | None = None,
) -> GeoMapChart:
    frame = _read_table(args.input)
    name = getattr(args, "name", None) or Path(args.input).stem
    return geo_map(
        frame,
        args.location,
        args.value,
        args.hover,
        options,
        chart_id=getattr(args, "chart_id", None),
        data_name=name,
        defaults=cfg.chart.defaults.as_options(),
    )


def _run_check(cfg: AppConfig, args: argparse.Namespace) -> int:
    chart = _prepare_chart(cfg, args)
    for line in format_chart_lines(chart):
        LOGGER.info(line)
    return 0


def _run_prepare(cfg: AppConfig, args: argparse.Namespace) -> int:
    options = parse_option_pairs([str(item) for item in args.option])
    chart = _prepare_chart(cfg, args, options)
    output_dir = Path(args.output_dir) if args.output_dir else cfg.output.dir
    stem = chart.config.data_name

    data_path = output_dir / f"{stem}_data.csv"
    data_path.parent.mkdir(parents=True, exist_ok=True)
    chart.data.to_csv(data_path, index=False)
    LOGGER.info("Cleaned data written to %s", data_path)

    chart_path = output_dir / f"{stem}_chart.json"
    write_json(chart_path, chart.to_dict())
    LOGGER.info("Chart configuration written to %s", chart_path)
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    cfg = _load_and_setup(args)
    command = str(args.command)
    try:
        if command == "check":
            return _run_check(cfg, args)
        if command == "prepare":
            return _run_prepare(cfg, args)
    except ValidationError as exc:
        LOGGER.error("Validation failed: %s", exc)
        return 1
    except (FileNotFoundError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1
    raise ValueError(f"Unknown command: {command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return _dispatch(args)


if __name__ == "__main__":
    raise SystemExit(main())
