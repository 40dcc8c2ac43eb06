from __future__ import annotations

import logging
from typing import Any

from vectorchart.scales import format_value
from vectorchart.svg import SvgElement
from vectorchart_threshold.options import ThresholdOptions
from vectorchart_threshold.projection import ProjectedThreshold, Rect, RenderContext, project_threshold


LOGGER = logging.getLogger(__name__)

INDICATOR_CLASS = "ct-indicator"
INDICATOR_LABEL_INSET = 10.0
CONTINUOUS_PRIMITIVES = frozenset({"line", "bar", "area"})


def create_masks(context: RenderContext, options: ThresholdOptions) -> SvgElement:
    """Register the above/below masks (and the indicator) for one build.

    Returns the ``defs`` element holding the masks.
    """
    svg: SvgElement = context.svg  # type: ignore[assignment]
    projected = project_threshold(context, options.threshold)
    defs = svg.query_selector("defs") or svg.elem("defs")
    width = svg.width()
    height = svg.height()

    register_mask(defs, options.above_mask_id, projected.above, width, height)
    register_mask(defs, options.below_mask_id, projected.below, width, height)

    if options.show_indicator:
        draw_indicator(svg, projected, options.threshold)
    return defs


def register_mask(defs: SvgElement, mask_id: str, rect: Rect, width: float, height: float) -> SvgElement:
    for existing in defs.query_selector_all("mask"):
        if existing.get_attr("id") == mask_id:
            existing.remove()
    mask = defs.elem(
        "mask",
        {
            "x": 0,
            "y": 0,
            "width": width,
            "height": height,
            "maskUnits": "userSpaceOnUse",
            "id": mask_id,
        },
    )
    mask.elem("rect", {**rect.as_attributes(), "fill": "white"})
    LOGGER.debug("registered mask %s at %s", mask_id, rect)
    return mask


def draw_indicator(svg: SvgElement, projected: ProjectedThreshold, threshold: float) -> SvgElement:
    group = svg.query_selector(f"g.{INDICATOR_CLASS}") or svg.elem("g", class_names=INDICATOR_CLASS)
    group.empty()
    offset = projected.offset
    if projected.orientation == "swapped":
        text_x, text_y = offset, INDICATOR_LABEL_INSET
        line = {"x1": offset, "x2": offset, "y1": 0, "y2": svg.height()}
    else:
        text_x, text_y = INDICATOR_LABEL_INSET, offset
        line = {"x1": 0, "x2": svg.width(), "y1": offset, "y2": offset}

    group.elem(
        "text",
        {"x": text_x, "y": text_y, "style": "text-anchor: middle"},
        "ct-label ct-value-label",
    ).text(format_value(threshold))
    group.elem("line", line, "ct-grid ct-horizontal")
    return group


def apply_threshold_style(event: Any, options: ThresholdOptions) -> None:
    """Style one drawn primitive for its side of the threshold.

    Points are classified by value (inclusive at the threshold). Continuous
    shapes get an above-masked copy inserted as the first child of their
    parent while the original stays in place with the below mask.
    """
    classes = options.class_names
    if event.type == "point":
        value = _point_value(event.value)
        if value is None:
            return
        event.element.add_class(
            classes.above_threshold if value >= options.threshold else classes.below_threshold
        )
    elif event.type in CONTINUOUS_PRIMITIVES:
        element: SvgElement = event.element
        parent = getattr(event, "group", None)
        if parent is None or parent == element:
            parent = element.parent()
        if parent is None:
            LOGGER.debug("detached %s primitive left unmasked", event.type)
            return
        clone = parent.elem(element.clone_node(), insert_first=True)
        clone.attr({"mask": options.above_mask_url}).add_class(classes.above_threshold)
        element.attr({"mask": options.below_mask_url}).add_class(classes.below_threshold)


def _point_value(value: Any) -> float | None:
    if value is None:
        return None
    if getattr(value, "y", None) is not None:
        return float(value.y)
    if getattr(value, "x", None) is not None:
        return float(value.x)
    return None
