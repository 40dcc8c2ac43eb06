from __future__ import annotations

import argparse
from dataclasses import dataclass, fields, replace
import logging
from pathlib import Path
import sys
import tomllib
from typing import Any, Literal, Sequence

from vectorchart.charts import BarChart, ChartBase, LineChart
from vectorchart.options import ChartOptions, Padding
from vectorchart_threshold.errors import ThresholdConfigError
from vectorchart_threshold.plugin import ct_threshold
from vectorchart_threshold.styles import embed_stylesheet, stylesheet, validate_theme


LOGGER = logging.getLogger(__name__)

ChartKind = Literal["line", "bar"]
_CHART_OPTION_FIELDS = {f.name for f in fields(ChartOptions)} - {"padding"}
_THRESHOLD_KEYS = {"value", "show_indicator", "class_names", "mask_names", "embed_style", "theme"}


@dataclass(frozen=True)
class RenderConfig:
    kind: ChartKind
    labels: tuple[str, ...] | None
    series: tuple[Any, ...]
    chart_options: ChartOptions
    threshold: Any
    show_indicator: bool = False
    class_names: dict[str, Any] | None = None
    mask_names: dict[str, Any] | None = None
    embed_style: bool = False
    theme: dict[str, Any] | None = None


def load_render_config(path: str | Path) -> RenderConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ThresholdConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    return parse_render_config(raw)


def parse_render_config(raw: dict[str, Any]) -> RenderConfig:
    chart = _coerce_table(raw.get("chart"), "chart")
    threshold = _coerce_table(raw.get("threshold", {}), "threshold")

    kind = chart.get("kind", "line")
    if kind not in ("line", "bar"):
        raise ThresholdConfigError(f"chart.kind must be `line` or `bar`, got {kind!r}")
    if "series" not in chart:
        raise ThresholdConfigError("chart config missing required field: series")
    series = chart["series"]
    if not isinstance(series, list) or not series:
        raise ThresholdConfigError("chart.series must be a non-empty list")
    labels = chart.get("labels")
    if labels is not None:
        labels = tuple(str(label) for label in _coerce_list(labels, "chart.labels"))

    unknown = set(threshold) - _THRESHOLD_KEYS
    if unknown:
        raise ThresholdConfigError(f"unknown threshold field(s): {', '.join(sorted(unknown))}")

    return RenderConfig(
        kind=kind,
        labels=labels,
        series=tuple(series),
        chart_options=_chart_options(chart),
        threshold=threshold.get("value", 0),
        show_indicator=_coerce_bool(threshold.get("show_indicator", False), "threshold.show_indicator"),
        class_names=_coerce_optional_table(threshold.get("class_names"), "threshold.class_names"),
        mask_names=_coerce_optional_table(threshold.get("mask_names"), "threshold.mask_names"),
        embed_style=_coerce_bool(threshold.get("embed_style", False), "threshold.embed_style"),
        theme=_coerce_optional_table(threshold.get("theme"), "threshold.theme"),
    )


def render_chart(config: RenderConfig) -> ChartBase:
    plugin = ct_threshold(
        config.threshold,
        show_indicator=config.show_indicator,
        class_names=config.class_names,
        mask_names=config.mask_names,
    )
    chart_cls = LineChart if config.kind == "line" else BarChart
    chart = chart_cls(config.labels, config.series, config.chart_options, plugins=[plugin])
    svg = chart.render()
    if config.embed_style:
        theme = validate_theme(config.theme)
        embed_stylesheet(svg, stylesheet(plugin.options.class_names, theme))
    return chart


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="vectorchart-threshold")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a chart described by a TOML file to SVG.")
    render.add_argument("config", type=Path)
    render.add_argument("-o", "--output", type=Path, default=None, help="Output SVG path. Default: stdout.")
    render.add_argument("--threshold", type=float, default=None, help="Override threshold.value from the config.")
    render.add_argument("--show-indicator", action="store_true", help="Force the threshold indicator on.")
    render.add_argument("--embed-style", action="store_true", help="Embed the default threshold stylesheet.")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_render_config(args.config)
        overrides: dict[str, Any] = {}
        if args.threshold is not None:
            overrides["threshold"] = args.threshold
        if args.show_indicator:
            overrides["show_indicator"] = True
        if args.embed_style:
            overrides["embed_style"] = True
        if overrides:
            config = replace(config, **overrides)
        chart = render_chart(config)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    markup = chart.to_markup()
    if args.output is None:
        sys.stdout.write(markup + "\n")
    else:
        args.output.write_text(markup + "\n", encoding="utf-8")
        LOGGER.info("wrote %s", args.output)
    return 0


def _chart_options(chart: dict[str, Any]) -> ChartOptions:
    values: dict[str, Any] = {}
    for key, value in chart.items():
        if key in ("kind", "series", "labels"):
            continue
        if key == "padding":
            padding = _coerce_table(value, "chart.padding")
            try:
                values["padding"] = Padding(**padding)
            except TypeError as exc:
                raise ThresholdConfigError(f"invalid chart.padding: {exc}") from exc
            continue
        if key not in _CHART_OPTION_FIELDS:
            raise ThresholdConfigError(f"unknown chart field: {key}")
        values[key] = value
    try:
        return ChartOptions(**values)
    except TypeError as exc:
        raise ThresholdConfigError(f"invalid chart options: {exc}") from exc


def _coerce_table(value: object, field_name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ThresholdConfigError(f"{field_name} must be a table")
    return value


def _coerce_optional_table(value: object, field_name: str) -> dict[str, Any] | None:
    if value is None:
        return None
    return _coerce_table(value, field_name)


def _coerce_list(value: object, field_name: str) -> list[Any]:
    if not isinstance(value, list):
        raise ThresholdConfigError(f"{field_name} must be a list")
    return value


def _coerce_bool(value: object, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ThresholdConfigError(f"{field_name} must be a boolean")
    return value
