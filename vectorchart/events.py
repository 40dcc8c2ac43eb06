from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable, Literal

from vectorchart.axes import Axis, ChartRect
from vectorchart.options import ChartOptions
from vectorchart.svg import SvgElement


LOGGER = logging.getLogger(__name__)

PrimitiveType = Literal["point", "line", "area", "bar", "grid", "label"]
EventHandler = Callable[[Any], None]

DRAW_EVENT = "draw"
BUILT_EVENT = "built"


@dataclass(frozen=True)
class DataPoint:
    x: float | None = None
    y: float | None = None


@dataclass(frozen=True)
class DrawEvent:
    """One primitive the chart just added to its render tree."""

    type: PrimitiveType
    element: SvgElement
    group: SvgElement
    value: DataPoint | None = None
    index: int | None = None
    series_index: int | None = None


@dataclass(frozen=True)
class BuiltEvent:
    """Fired once after every primitive of a render pass has been drawn."""

    svg: SvgElement
    chart_rect: ChartRect
    axis_x: Axis
    axis_y: Axis
    options: ChartOptions
    horizontal: bool = False


class EventEmitter:
    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def on(self, event: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler: EventHandler | None = None) -> None:
        if handler is None:
            self._handlers.pop(event, None)
            return
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))

    def emit(self, event: str, data: Any) -> None:
        handlers = list(self._handlers.get(event, ()))
        if not handlers:
            return
        LOGGER.debug("emit %s to %d handler(s)", event, len(handlers))
        for handler in handlers:
            handler(data)
