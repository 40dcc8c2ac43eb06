from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence

import numpy as np

from vectorchart.adapters import normalize_labels, normalize_series
from vectorchart.axes import AutoScaleAxis, Axis, ChartRect, StepAxis
from vectorchart.events import BUILT_EVENT, DRAW_EVENT, BuiltEvent, DataPoint, DrawEvent, EventEmitter, EventHandler
from vectorchart.options import ChartOptions
from vectorchart.series import SeriesData
from vectorchart.svg import SvgElement, create_svg


LOGGER = logging.getLogger(__name__)

Plugin = Callable[["ChartBase"], Any]


def _series_letter(index: int) -> str:
    letters = "abcdefghijklmnopqrstuvwxyz"
    out = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        out = letters[rem] + out
    return out


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def _path_data(points: Sequence[tuple[float, float]], *, close_to: float | None = None) -> str:
    """SVG path data; ``close_to`` drops both ends to that y and closes the shape."""
    closed = close_to is not None and len(points) > 0
    if closed:
        points = [(points[0][0], close_to), *points, (points[-1][0], close_to)]
    body = "".join(f"{'M' if i == 0 else 'L'}{_num(x)},{_num(y)}" for i, (x, y) in enumerate(points))
    return body + "Z" if closed else body


def _num(value: float) -> str:
    out = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if out in ("", "-0") else out


class ChartBase:
    """Shared render lifecycle: rebuild the SVG, fire ``draw`` per primitive, then ``built``."""

    chart_class = "ct-chart"
    supports_threshold_overlay = False

    def __init__(
        self,
        labels: Sequence[Any] | None = None,
        series: Iterable[Any] = (),
        options: ChartOptions | None = None,
        plugins: Iterable[Plugin] = (),
    ) -> None:
        self.options = options or ChartOptions()
        self._events = EventEmitter()
        self.series: list[SeriesData] = []
        self.labels: tuple[str, ...] = ()
        self._set_data(labels, series)
        self.svg: SvgElement | None = None
        for plugin in plugins:
            plugin(self)

    def on(self, event: str, handler: EventHandler) -> None:
        self._events.on(event, handler)

    def off(self, event: str, handler: EventHandler | None = None) -> None:
        self._events.off(event, handler)

    def update(
        self,
        *,
        labels: Sequence[Any] | None = None,
        series: Iterable[Any] | None = None,
        options: ChartOptions | None = None,
    ) -> SvgElement:
        if options is not None:
            self.options = options
        if series is not None or labels is not None:
            self._set_data(labels if labels is not None else self.labels, series if series is not None else self.series)
        return self.render()

    def render(self) -> SvgElement:
        svg = create_svg(self.options.width, self.options.height, class_names=self.chart_class)
        chart_rect = ChartRect.for_options(self.options)
        axis_x, axis_y = self._build_axes(chart_rect)
        grid_group = svg.elem("g", class_names="ct-grids")
        series_group = svg.elem("g", class_names="ct-series-group")
        label_group = svg.elem("g", class_names="ct-labels")
        self._draw_axis(axis_x, grid_group, label_group)
        self._draw_axis(axis_y, grid_group, label_group)
        self._draw_series(series_group, axis_x, axis_y)
        self.svg = svg
        LOGGER.debug("%s rendered %d series at %sx%s", type(self).__name__, len(self.series), self.options.width, self.options.height)
        self._events.emit(
            BUILT_EVENT,
            BuiltEvent(
                svg=svg,
                chart_rect=chart_rect,
                axis_x=axis_x,
                axis_y=axis_y,
                options=self.options,
                horizontal=self.values_on_x(),
            ),
        )
        return svg

    def to_markup(self) -> str:
        svg = self.svg if self.svg is not None else self.render()
        return svg.to_markup()

    def values_on_x(self) -> bool:
        """True when data values run along the x axis (horizontal bars)."""
        return False

    def _set_data(self, labels: Sequence[Any] | None, series: Iterable[Any]) -> None:
        normalized = [s if isinstance(s, SeriesData) else normalize_series(s) for s in series]
        length = max((len(s) for s in normalized), default=0)
        self.series = normalized
        self.labels = normalize_labels(labels, length)

    def _all_values(self) -> np.ndarray:
        if not self.series:
            return np.asarray([], dtype=np.float64)
        return np.concatenate([s.finite_values() for s in self.series])

    def _series_group(self, parent: SvgElement, series: SeriesData, index: int) -> SvgElement:
        attributes = {"data-series-name": series.name} if series.name else None
        class_names = series.class_name or f"ct-series ct-series-{_series_letter(index)}"
        return parent.elem("g", attributes, class_names)

    def _emit_draw(self, event: DrawEvent) -> None:
        self._events.emit(DRAW_EVENT, event)

    def _label_shift(self, axis: Axis) -> float:
        return 0.0

    def _draw_axis(self, axis: Axis, grid_group: SvgElement, label_group: SvgElement) -> None:
        rect = axis.chart_rect
        grid_class = "ct-grid ct-horizontal" if axis.units == "x" else "ct-grid ct-vertical"
        label_class = "ct-label ct-horizontal ct-end" if axis.units == "x" else "ct-label ct-vertical ct-start"
        shift = self._label_shift(axis)
        for index, (value, text) in enumerate(zip(axis.tick_values(), axis.tick_labels())):
            pos = axis.position(value)
            if self.options.show_grid:
                if axis.units == "x":
                    coords = {"x1": pos, "x2": pos, "y1": rect.y2, "y2": rect.y1}
                else:
                    coords = {"x1": rect.x1, "x2": rect.x2, "y1": pos, "y2": pos}
                grid = grid_group.elem("line", coords, grid_class)
                self._emit_draw(DrawEvent(type="grid", element=grid, group=grid_group, index=index))
            if self.options.show_labels:
                label_pos = axis.position(value + shift)
                if axis.units == "x":
                    coords = {"x": label_pos, "y": rect.y1 + self.options.x_axis_offset * 0.6}
                    anchor = "text-anchor: middle" if shift else "text-anchor: start"
                else:
                    coords = {"x": rect.x1 - 8.0, "y": label_pos}
                    anchor = "text-anchor: end"
                label = label_group.elem("text", {**coords, "style": anchor}, label_class).text(text)
                self._emit_draw(DrawEvent(type="label", element=label, group=label_group, index=index))

    def _build_axes(self, chart_rect: ChartRect) -> tuple[Axis, Axis]:
        raise NotImplementedError

    def _draw_series(self, series_group: SvgElement, axis_x: Axis, axis_y: Axis) -> None:
        raise NotImplementedError


class LineChart(ChartBase):
    chart_class = "ct-chart ct-chart-line"
    supports_threshold_overlay = True

    def _build_axes(self, chart_rect: ChartRect) -> tuple[Axis, Axis]:
        axis_x = StepAxis("x", chart_rect, self.labels, stretch=self.options.full_width)
        axis_y = AutoScaleAxis(
            "y",
            chart_rect,
            self._all_values(),
            low=self.options.low,
            high=self.options.high,
            tick_target=self.options.tick_target,
        )
        return axis_x, axis_y

    def _draw_series(self, series_group: SvgElement, axis_x: Axis, axis_y: Axis) -> None:
        opts = self.options
        area_base = axis_y.clamp(opts.area_base) if isinstance(axis_y, AutoScaleAxis) else opts.area_base
        base_y = axis_y.position(area_base)
        for series_index, series in enumerate(self.series):
            group = self._series_group(series_group, series, series_index)
            for start, stop in _contiguous_true_runs(series.mask):
                points = [(axis_x.position(i), axis_y.position(series.values[i])) for i in range(start, stop)]
                if opts.show_area:
                    area = group.elem("path", {"d": _path_data(points, close_to=base_y)}, "ct-area")
                    self._emit_draw(DrawEvent(type="area", element=area, group=group, index=start, series_index=series_index))
                if opts.show_line:
                    line = group.elem("path", {"d": _path_data(points)}, "ct-line")
                    self._emit_draw(DrawEvent(type="line", element=line, group=group, index=start, series_index=series_index))
            if not opts.show_point:
                continue
            for index in np.flatnonzero(series.mask):
                i = int(index)
                value = float(series.values[i])
                point = group.elem(
                    "circle",
                    {"cx": axis_x.position(i), "cy": axis_y.position(value), "r": opts.point_radius},
                    "ct-point",
                )
                self._emit_draw(
                    DrawEvent(
                        type="point",
                        element=point,
                        group=group,
                        value=DataPoint(x=float(i), y=value),
                        index=i,
                        series_index=series_index,
                    )
                )


class BarChart(ChartBase):
    chart_class = "ct-chart ct-chart-bar"
    supports_threshold_overlay = True

    def values_on_x(self) -> bool:
        return self.options.horizontal_bars

    def _build_axes(self, chart_rect: ChartRect) -> tuple[Axis, Axis]:
        horizontal = self.values_on_x()
        value_axis = AutoScaleAxis(
            "x" if horizontal else "y",
            chart_rect,
            self._all_values(),
            low=self.options.low,
            high=self.options.high,
            reference_value=0.0,
            tick_target=self.options.tick_target,
        )
        label_axis = StepAxis("y" if horizontal else "x", chart_rect, self.labels)
        if horizontal:
            return value_axis, label_axis
        return label_axis, value_axis

    def _label_shift(self, axis: Axis) -> float:
        return 0.5 if isinstance(axis, StepAxis) else 0.0

    def _draw_series(self, series_group: SvgElement, axis_x: Axis, axis_y: Axis) -> None:
        opts = self.options
        horizontal = self.values_on_x()
        value_axis = axis_x if horizontal else axis_y
        label_axis = axis_y if horizontal else axis_x
        assert isinstance(value_axis, AutoScaleAxis)
        zero = value_axis.position(value_axis.clamp(0.0))
        count = len(self.series)
        half = opts.bar_width / 2.0
        for series_index, series in enumerate(self.series):
            group = self._series_group(series_group, series, series_index)
            spread = (series_index - (count - 1) / 2.0) * opts.series_bar_distance
            for index in np.flatnonzero(series.mask):
                i = int(index)
                value = float(series.values[i])
                center = label_axis.position(i + 0.5) + (-spread if horizontal else spread)
                end = value_axis.position(value)
                if horizontal:
                    attrs = {"x": min(zero, end), "y": center - half, "width": abs(end - zero), "height": opts.bar_width}
                    point = DataPoint(x=value, y=None)
                else:
                    attrs = {"x": center - half, "y": min(zero, end), "width": opts.bar_width, "height": abs(end - zero)}
                    point = DataPoint(x=float(i), y=value)
                bar = group.elem("rect", attrs, "ct-bar")
                self._emit_draw(
                    DrawEvent(type="bar", element=bar, group=group, value=point, index=i, series_index=series_index)
                )
