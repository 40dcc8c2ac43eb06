from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

import numpy as np

from vectorchart.options import ChartOptions, Padding
from vectorchart.scales import compute_bounds, format_ticks, nice_bounds


AxisUnits = Literal["x", "y"]


@dataclass(frozen=True)
class ChartRect:
    """Plot area in canvas pixels.

    ``y1`` is the bottom edge and ``y2`` the top edge, so ``height()`` is
    ``y1 - y2`` while canvas y coordinates grow downward.
    """

    x1: float
    y1: float
    x2: float
    y2: float

    def width(self) -> float:
        return self.x2 - self.x1

    def height(self) -> float:
        return self.y1 - self.y2

    @classmethod
    def from_canvas(
        cls,
        width: float,
        height: float,
        padding: Padding,
        *,
        x_axis_offset: float,
        y_axis_offset: float,
    ) -> "ChartRect":
        x1 = padding.left + y_axis_offset
        x2 = max(x1, width - padding.right)
        y2 = padding.top
        y1 = max(y2, height - padding.bottom - x_axis_offset)
        return cls(x1=x1, y1=y1, x2=x2, y2=y2)

    @classmethod
    def for_options(cls, options: ChartOptions) -> "ChartRect":
        return cls.from_canvas(
            options.width,
            options.height,
            options.padding,
            x_axis_offset=options.x_axis_offset,
            y_axis_offset=options.y_axis_offset,
        )


class Axis:
    units: AxisUnits
    chart_rect: ChartRect

    def axis_length(self) -> float:
        return self.chart_rect.width() if self.units == "x" else self.chart_rect.height()

    def project_value(self, value: float) -> float:
        raise NotImplementedError

    def position(self, value: float) -> float:
        """Canvas coordinate of ``value`` along this axis."""
        projected = self.project_value(value)
        if self.units == "x":
            return self.chart_rect.x1 + projected
        return self.chart_rect.y1 - projected

    def tick_values(self) -> list[float]:
        raise NotImplementedError

    def tick_labels(self) -> list[str]:
        raise NotImplementedError


class StepAxis(Axis):
    """Category axis: evenly spaced slots, one per label."""

    def __init__(
        self,
        units: AxisUnits,
        chart_rect: ChartRect,
        labels: Sequence[str],
        *,
        stretch: bool = False,
    ) -> None:
        self.units = units
        self.chart_rect = chart_rect
        self.labels = tuple(labels)
        self.stretch = stretch
        slots = len(self.labels) - (1 if stretch else 0)
        self.step_length = self.axis_length() / slots if slots > 0 else self.axis_length()

    def project_value(self, value: float) -> float:
        return self.step_length * value

    def tick_values(self) -> list[float]:
        return [float(i) for i in range(len(self.labels))]

    def tick_labels(self) -> list[str]:
        return list(self.labels)


class AutoScaleAxis(Axis):
    """Linear value axis whose bounds come from the charted data."""

    def __init__(
        self,
        units: AxisUnits,
        chart_rect: ChartRect,
        values: np.ndarray,
        *,
        low: float | None = None,
        high: float | None = None,
        reference_value: float | None = None,
        tick_target: int = 5,
    ) -> None:
        self.units = units
        self.chart_rect = chart_rect
        raw = compute_bounds(values, low=low, high=high, reference_value=reference_value)
        if low is None and high is None:
            self.bounds, ticks = nice_bounds(raw, tick_target)
        else:
            self.bounds = raw
            _, ticks = nice_bounds(raw, tick_target)
            eps = abs(raw.range) * 1e-9
            ticks = ticks[(ticks >= raw.low - eps) & (ticks <= raw.high + eps)]
        self.ticks = ticks

    @property
    def range(self) -> float:
        return self.bounds.range

    def project_value(self, value: float) -> float:
        if self.bounds.range == 0:
            return 0.0
        return self.axis_length() * (float(value) - self.bounds.low) / self.bounds.range

    def clamp(self, value: float) -> float:
        return min(max(float(value), self.bounds.low), self.bounds.high)

    def tick_values(self) -> list[float]:
        return [float(v) for v in self.ticks]

    def tick_labels(self) -> list[str]:
        return format_ticks(self.ticks)
