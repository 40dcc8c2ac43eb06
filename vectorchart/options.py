from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class Padding:
    top: float = 15.0
    right: float = 15.0
    bottom: float = 5.0
    left: float = 10.0

    def __post_init__(self) -> None:
        if min(self.top, self.right, self.bottom, self.left) < 0:
            raise ValueError("chart padding must be >= 0")


@dataclass(frozen=True)
class ChartOptions:
    """Layout and drawing switches shared by line and bar charts."""

    width: float = 640.0
    height: float = 360.0
    padding: Padding = field(default_factory=Padding)
    x_axis_offset: float = 30.0
    y_axis_offset: float = 40.0
    low: float | None = None
    high: float | None = None
    tick_target: int = 5
    show_grid: bool = True
    show_labels: bool = True
    # line charts
    show_line: bool = True
    show_point: bool = True
    show_area: bool = False
    area_base: float = 0.0
    point_radius: float = 4.0
    full_width: bool = False
    # bar charts
    horizontal_bars: bool = False
    bar_width: float = 10.0
    series_bar_distance: float = 15.0

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("chart width/height must be >= 0")
        if self.x_axis_offset < 0 or self.y_axis_offset < 0:
            raise ValueError("axis offsets must be >= 0")
        if self.tick_target <= 0:
            raise ValueError("tick_target must be > 0")
        if self.point_radius < 0:
            raise ValueError("point_radius must be >= 0")
        if self.bar_width <= 0:
            raise ValueError("bar_width must be > 0")
        if self.low is not None and self.high is not None and self.low > self.high:
            raise ValueError("low must be <= high")

    def with_updates(self, **changes: Any) -> "ChartOptions":
        return replace(self, **changes)
