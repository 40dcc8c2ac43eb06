from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any, Literal, Protocol


LOGGER = logging.getLogger(__name__)

Orientation = Literal["standard", "swapped"]


class AxisProjection(Protocol):
    def project_value(self, value: float) -> float:
        ...


class PlotArea(Protocol):
    x1: float
    y1: float
    x2: float
    y2: float

    def width(self) -> float:
        ...

    def height(self) -> float:
        ...


class Canvas(Protocol):
    def width(self) -> float:
        ...

    def height(self) -> float:
        ...


class RenderContext(Protocol):
    """What a chart's ``built`` event carries, as far as projection is concerned."""

    svg: Canvas
    chart_rect: PlotArea
    axis_x: AxisProjection
    axis_y: AxisProjection
    options: Any


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def clamped(self) -> "Rect":
        return Rect(
            x=max(0.0, self.x),
            y=max(0.0, self.y),
            width=max(0.0, self.width),
            height=max(0.0, self.height),
        )

    def as_attributes(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class ProjectedThreshold:
    offset: float
    orientation: Orientation
    above: Rect
    below: Rect


def orientation_of(context: RenderContext) -> Orientation:
    """Swapped only when the chart itself reports values laid out on x.

    Contexts that carry no ``horizontal`` flag fall back to
    ``options.horizontal_bars``.
    """
    horizontal = getattr(context, "horizontal", None)
    if horizontal is None:
        horizontal = getattr(context.options, "horizontal_bars", False)
    return "swapped" if horizontal else "standard"


def project_threshold(context: RenderContext, threshold: float) -> ProjectedThreshold:
    """Map ``threshold`` to a canvas offset and split the canvas at it.

    Standard charts measure the value along y, whose axis grows upward, so the
    projected value is flipped against the plot height and shifted by the plot
    top. Swapped (horizontal bar) charts measure along x from the plot left.
    """
    width = context.svg.width()
    height = context.svg.height()
    orientation = orientation_of(context)
    rect = context.chart_rect
    if orientation == "swapped":
        offset = context.axis_x.project_value(threshold) + rect.x1
        extent = width
    else:
        offset = rect.height() - context.axis_y.project_value(threshold) + rect.y2
        extent = height
    offset = float(offset)
    if not 0.0 <= offset <= extent:
        LOGGER.debug("threshold %s projects to %s, outside canvas extent %s", threshold, offset, extent)
    above, below = split_rects(offset, width, height, orientation)
    return ProjectedThreshold(offset=offset, orientation=orientation, above=above, below=below)


def split_rects(offset: float, width: float, height: float, orientation: Orientation) -> tuple[Rect, Rect]:
    """Partition the ``width`` x ``height`` canvas at ``offset``.

    The split is bounded to the canvas first so the pair always tiles it
    exactly; every field is floored at zero afterwards.
    """
    width = max(0.0, float(width))
    height = max(0.0, float(height))
    if orientation == "swapped":
        split = _bound(offset, width)
        above = Rect(x=split, y=0.0, width=width - split, height=height)
        below = Rect(x=0.0, y=0.0, width=split, height=height)
    else:
        split = _bound(offset, height)
        above = Rect(x=0.0, y=0.0, width=width, height=split)
        below = Rect(x=0.0, y=split, width=width, height=height - split)
    return above.clamped(), below.clamped()


def _bound(value: float, extent: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), extent)
