from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Mapping

from vectorchart.svg import SvgElement
from vectorchart_threshold.errors import ThresholdConfigError
from vectorchart_threshold.options import ThresholdNames

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")
_COLOR_TOKENS = ("above_color", "below_color", "indicator_color", "label_color")


@dataclass(frozen=True)
class ThresholdTheme:
    """Colors for the two threshold sides and the indicator."""

    above_color: str = "#D70206"
    below_color: str = "#0544D3"
    indicator_color: str = "#7A7A7A"
    label_color: str = "#4D4D4D"
    indicator_width_px: float = 1.0


DEFAULT_THEME = ThresholdTheme()


def validate_theme(overrides: Mapping[str, Any] | None = None) -> ThresholdTheme:
    raw: dict[str, Any] = asdict(DEFAULT_THEME)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ThresholdConfigError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ThresholdConfigError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    width = raw["indicator_width_px"]
    if isinstance(width, bool) or not isinstance(width, (int, float)) or float(width) <= 0:
        raise ThresholdConfigError("Token `indicator_width_px` must be a positive number")

    return ThresholdTheme(
        above_color=str(raw["above_color"]),
        below_color=str(raw["below_color"]),
        indicator_color=str(raw["indicator_color"]),
        label_color=str(raw["label_color"]),
        indicator_width_px=float(width),
    )


def stylesheet(class_names: ThresholdNames, theme: ThresholdTheme = DEFAULT_THEME) -> str:
    above = class_names.above_threshold
    below = class_names.below_threshold
    rules = [
        f".ct-line.{above}, .ct-point.{above}, .ct-bar.{above} {{ stroke: {theme.above_color}; }}",
        f".ct-line.{below}, .ct-point.{below}, .ct-bar.{below} {{ stroke: {theme.below_color}; }}",
        f".ct-bar.{above}, .ct-area.{above}, .ct-point.{above} {{ fill: {theme.above_color}; }}",
        f".ct-bar.{below}, .ct-area.{below}, .ct-point.{below} {{ fill: {theme.below_color}; }}",
        f".ct-area.{above}, .ct-area.{below} {{ fill-opacity: 0.1; stroke: none; }}",
        ".ct-line { fill: none; stroke-width: 2px; }",
        ".ct-grid { stroke: #d9d9d9; stroke-dasharray: 2px; }",
        f".ct-label {{ fill: {theme.label_color}; font-size: 12px; }}",
        f".ct-indicator line {{ stroke: {theme.indicator_color}; stroke-width: {theme.indicator_width_px}px; stroke-dasharray: none; }}",
    ]
    return "\n".join(rules)


def embed_stylesheet(svg: SvgElement, css: str) -> SvgElement:
    style = svg.query_selector("style") or svg.elem("style", {"type": "text/css"}, insert_first=True)
    return style.text(css)
