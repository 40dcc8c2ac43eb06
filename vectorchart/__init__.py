from vectorchart.api import bar_chart, line_chart
from vectorchart.axes import AutoScaleAxis, Axis, ChartRect, StepAxis
from vectorchart.charts import BarChart, ChartBase, LineChart
from vectorchart.errors import ChartDataError
from vectorchart.events import BuiltEvent, DataPoint, DrawEvent, EventEmitter
from vectorchart.options import ChartOptions, Padding
from vectorchart.svg import SvgElement, create_svg

__all__ = [
    "AutoScaleAxis",
    "Axis",
    "BarChart",
    "BuiltEvent",
    "ChartBase",
    "ChartDataError",
    "ChartOptions",
    "ChartRect",
    "DataPoint",
    "DrawEvent",
    "EventEmitter",
    "LineChart",
    "Padding",
    "StepAxis",
    "SvgElement",
    "bar_chart",
    "create_svg",
    "line_chart",
]
