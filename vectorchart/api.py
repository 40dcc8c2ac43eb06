from __future__ import annotations

from typing import Any, Iterable, Sequence

from vectorchart.charts import BarChart, LineChart, Plugin
from vectorchart.options import ChartOptions


def line_chart(
    labels: Sequence[Any] | None = None,
    series: Iterable[Any] = (),
    *,
    plugins: Iterable[Plugin] = (),
    **options: Any,
) -> LineChart:
    chart = LineChart(labels, series, ChartOptions(**options), plugins)
    chart.render()
    return chart


def bar_chart(
    labels: Sequence[Any] | None = None,
    series: Iterable[Any] = (),
    *,
    plugins: Iterable[Plugin] = (),
    **options: Any,
) -> BarChart:
    chart = BarChart(labels, series, ChartOptions(**options), plugins)
    chart.render()
    return chart
