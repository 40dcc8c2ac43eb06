from vectorchart_threshold.binder import apply_threshold_style, create_masks, draw_indicator
from vectorchart_threshold.errors import ThresholdConfigError
from vectorchart_threshold.options import (
    DEFAULT_CLASS_NAMES,
    DEFAULT_MASK_NAMES,
    ThresholdNames,
    ThresholdOptions,
    build_options,
)
from vectorchart_threshold.plugin import ThresholdPlugin, ct_threshold
from vectorchart_threshold.projection import ProjectedThreshold, Rect, project_threshold, split_rects
from vectorchart_threshold.styles import DEFAULT_THEME, ThresholdTheme, embed_stylesheet, stylesheet

__all__ = [
    "DEFAULT_CLASS_NAMES",
    "DEFAULT_MASK_NAMES",
    "DEFAULT_THEME",
    "ProjectedThreshold",
    "Rect",
    "ThresholdConfigError",
    "ThresholdNames",
    "ThresholdOptions",
    "ThresholdPlugin",
    "ThresholdTheme",
    "apply_threshold_style",
    "build_options",
    "create_masks",
    "ct_threshold",
    "draw_indicator",
    "embed_stylesheet",
    "project_threshold",
    "split_rects",
    "stylesheet",
]
