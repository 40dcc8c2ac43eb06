from __future__ import annotations

from decimal import Decimal
import importlib.util
import unittest

import numpy as np

from vectorchart import (
    BarChart,
    ChartDataError,
    ChartOptions,
    ChartRect,
    EventEmitter,
    LineChart,
    Padding,
    bar_chart,
    create_svg,
    line_chart,
)
from vectorchart.adapters import normalize_labels, normalize_series
from vectorchart.axes import AutoScaleAxis, StepAxis
from vectorchart.scales import compute_bounds, format_ticks, format_value, generate_nice_ticks
from vectorchart.svg import format_attr_value


class SvgBuilderTests(unittest.TestCase):
    def test_create_svg_sets_size_and_view_box(self) -> None:
        svg = create_svg(400.0, 300.5, class_names="ct-chart")
        self.assertEqual(svg.tag, "svg")
        self.assertEqual(svg.get_attr("width"), "400")
        self.assertEqual(svg.get_attr("height"), "300.5")
        self.assertEqual(svg.get_attr("viewBox"), "0 0 400 300.5")
        self.assertEqual((svg.width(), svg.height()), (400.0, 300.5))
        self.assertTrue(svg.has_class("ct-chart"))
        with self.assertRaises(ValueError):
            create_svg(-1.0, 10.0)

    def test_attribute_formatting(self) -> None:
        self.assertEqual(format_attr_value(True), "true")
        self.assertEqual(format_attr_value(2.0), "2")
        self.assertEqual(format_attr_value(1.5), "1.5")
        self.assertEqual(format_attr_value(-0.00001), "0")
        self.assertEqual(format_attr_value("url(#m)"), "url(#m)")

    def test_elem_attr_and_classes(self) -> None:
        svg = create_svg(10.0, 10.0)
        g = svg.elem("g", {"id": "a"}, "one two")
        g.add_class("two three")
        self.assertEqual(g.classes(), ["one", "two", "three"])
        g.remove_class("one three")
        self.assertEqual(g.classes(), ["two"])
        g.attr({"id": None, "data-x": 3})
        self.assertIsNone(g.get_attr("id"))
        self.assertEqual(g.get_attr("data-x"), "3")

    def test_insert_first_parent_and_remove(self) -> None:
        svg = create_svg(10.0, 10.0)
        group = svg.elem("g")
        second = group.elem("rect")
        first = group.elem("circle", insert_first=True)
        self.assertEqual([c.tag for c in group.children()], ["circle", "rect"])
        self.assertEqual(second.parent(), group)
        self.assertIsNone(svg.parent())
        self.assertEqual(first.remove(), group)
        self.assertEqual(group.children(), [second])

    def test_query_selector_matches_tag_and_classes(self) -> None:
        svg = create_svg(10.0, 10.0)
        svg.elem("g", class_names="ct-series").elem("path", class_names="ct-line ct-threshold-above")
        svg.elem("path", class_names="ct-area")
        self.assertEqual(len(svg.query_selector_all("path")), 2)
        self.assertEqual(len(svg.query_selector_all(".ct-line")), 1)
        self.assertEqual(len(svg.query_selector_all("path.ct-line.ct-threshold-above")), 1)
        self.assertIsNone(svg.query_selector("rect"))
        self.assertIsNone(svg.query_selector("svg"))
        with self.assertRaises(ValueError):
            svg.query_selector("g path")

    def test_clone_and_empty(self) -> None:
        svg = create_svg(10.0, 10.0)
        group = svg.elem("g")
        group.elem("text").text("hi")
        clone = svg.elem(group.clone_node())
        self.assertEqual(clone.text_content(), "hi")
        group.empty()
        self.assertEqual(group.children(), [])
        self.assertEqual(clone.text_content(), "hi")

    def test_markup_is_svg_xml(self) -> None:
        svg = create_svg(10.0, 10.0)
        svg.elem("rect", {"x": 1})
        markup = svg.to_markup()
        self.assertTrue(markup.startswith("<svg"))
        self.assertIn('xmlns="http://www.w3.org/2000/svg"', markup)
        self.assertIn('<rect x="1" />', markup)


class ScaleTests(unittest.TestCase):
    def test_nice_ticks_cover_data_range(self) -> None:
        ticks = generate_nice_ticks(0.0, 10.0, 5)
        np.testing.assert_allclose(ticks, [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])

    def test_bounds_without_data_default_to_unit_range(self) -> None:
        bounds = compute_bounds(np.asarray([], dtype=np.float64))
        self.assertEqual((bounds.low, bounds.high), (0.0, 1.0))

    def test_flat_data_is_padded(self) -> None:
        bounds = compute_bounds(np.asarray([3.0, 3.0]))
        self.assertEqual((bounds.low, bounds.high), (2.0, 4.0))

    def test_reference_value_is_included(self) -> None:
        bounds = compute_bounds(np.asarray([2.0, 8.0]), reference_value=0.0)
        self.assertEqual((bounds.low, bounds.high), (0.0, 8.0))

    def test_value_formatting(self) -> None:
        self.assertEqual(format_value(5.0), "5")
        self.assertEqual(format_value(2.5), "2.5")
        self.assertEqual(format_value(-0.0), "0")
        self.assertEqual(format_ticks(np.asarray([1.5, 2.0, 2.5])), ["1.5", "2", "2.5"])


class AxisTests(unittest.TestCase):
    def test_chart_rect_from_canvas(self) -> None:
        rect = ChartRect.from_canvas(400.0, 300.0, Padding(), x_axis_offset=30.0, y_axis_offset=40.0)
        self.assertEqual(rect, ChartRect(x1=50.0, y1=265.0, x2=385.0, y2=15.0))
        self.assertEqual((rect.width(), rect.height()), (335.0, 250.0))

    def test_chart_rect_never_inverts_on_tiny_canvas(self) -> None:
        rect = ChartRect.from_canvas(10.0, 10.0, Padding(), x_axis_offset=30.0, y_axis_offset=40.0)
        self.assertEqual(rect.width(), 0.0)
        self.assertEqual(rect.height(), 0.0)

    def test_auto_scale_axis_projects_linearly(self) -> None:
        rect = ChartRect(x1=50.0, y1=265.0, x2=385.0, y2=15.0)
        axis = AutoScaleAxis("y", rect, np.asarray([0.0, 10.0]))
        self.assertEqual((axis.bounds.low, axis.bounds.high), (0.0, 10.0))
        self.assertAlmostEqual(axis.project_value(5.0), 125.0)
        self.assertAlmostEqual(axis.position(5.0), 140.0)
        self.assertEqual(axis.tick_labels(), ["0", "2", "4", "6", "8", "10"])

    def test_explicit_bounds_are_kept_exactly(self) -> None:
        rect = ChartRect(x1=0.0, y1=100.0, x2=100.0, y2=0.0)
        axis = AutoScaleAxis("x", rect, np.asarray([1.0, 2.0]), low=0.0, high=7.0)
        self.assertEqual((axis.bounds.low, axis.bounds.high), (0.0, 7.0))
        self.assertTrue(all(0.0 <= t <= 7.0 for t in axis.tick_values()))
        self.assertEqual(axis.clamp(9.0), 7.0)
        self.assertAlmostEqual(axis.position(3.5), 50.0)

    def test_step_axis_slots(self) -> None:
        rect = ChartRect(x1=10.0, y1=100.0, x2=110.0, y2=0.0)
        self.assertAlmostEqual(StepAxis("x", rect, ["a", "b", "c", "d"]).step_length, 25.0)
        stretched = StepAxis("x", rect, ["a", "b", "c"], stretch=True)
        self.assertAlmostEqual(stretched.position(2.0), 110.0)


class NormalizeTests(unittest.TestCase):
    def test_none_becomes_gap(self) -> None:
        series = normalize_series([1, None, Decimal("2.5")])
        np.testing.assert_array_equal(series.mask, [True, False, True])
        np.testing.assert_allclose(series.finite_values(), [1.0, 2.5])
        self.assertEqual(len(series), 3)

    def test_mapping_carries_name_and_class(self) -> None:
        series = normalize_series({"data": [1, 2], "name": "Revenue", "class_name": "rev"})
        self.assertEqual((series.name, series.class_name), ("Revenue", "rev"))
        with self.assertRaises(ChartDataError):
            normalize_series({"name": "missing"})

    def test_rejects_bad_input(self) -> None:
        for bad in ([], "123", [True, 1.0], [1, "x"], np.zeros((2, 2)), 5):
            with self.subTest(bad=bad):
                with self.assertRaises(ChartDataError):
                    normalize_series(bad)
        self.assertTrue(issubclass(ChartDataError, ValueError))

    def test_labels_default_to_positions(self) -> None:
        self.assertEqual(normalize_labels(None, 3), ("1", "2", "3"))
        self.assertEqual(normalize_labels(["Mon", 2], 2), ("Mon", "2"))
        with self.assertRaises(ChartDataError):
            normalize_labels("abc", 3)

    @unittest.skipUnless(importlib.util.find_spec("pandas") is not None, "pandas not installed")
    def test_pandas_series_input(self) -> None:
        import pandas as pd

        series = normalize_series(pd.Series([1.0, None, 3.0]))
        np.testing.assert_array_equal(series.mask, [True, False, True])
        self.assertEqual(normalize_labels(pd.Index(["a", "b"]), 2), ("a", "b"))


class EventEmitterTests(unittest.TestCase):
    def test_on_emit_off(self) -> None:
        emitter = EventEmitter()
        seen: list[object] = []
        emitter.on("draw", seen.append)
        emitter.on("draw", lambda data: seen.append(("second", data)))
        emitter.emit("draw", 1)
        self.assertEqual(seen, [1, ("second", 1)])
        self.assertEqual(emitter.handler_count("draw"), 2)
        emitter.off("draw", seen.append)
        self.assertEqual(emitter.handler_count("draw"), 1)
        emitter.off("draw")
        self.assertEqual(emitter.handler_count("draw"), 0)
        emitter.emit("draw", 2)
        emitter.emit("unknown", 3)

    def test_handler_errors_propagate(self) -> None:
        emitter = EventEmitter()

        def boom(_data: object) -> None:
            raise RuntimeError("handler failed")

        emitter.on("built", boom)
        with self.assertRaisesRegex(RuntimeError, "handler failed"):
            emitter.emit("built", None)


class ChartOptionsTests(unittest.TestCase):
    def test_validation(self) -> None:
        for kwargs in ({"width": -1.0}, {"tick_target": 0}, {"bar_width": 0.0}, {"low": 5.0, "high": 1.0}):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    ChartOptions(**kwargs)
        with self.assertRaises(ValueError):
            Padding(top=-1.0)

    def test_with_updates_returns_new_options(self) -> None:
        base = ChartOptions()
        updated = base.with_updates(show_area=True)
        self.assertFalse(base.show_area)
        self.assertTrue(updated.show_area)


class ChartLifecycleTests(unittest.TestCase):
    def test_line_chart_draws_line_and_points(self) -> None:
        chart = LineChart(["a", "b"], [[0.0, 10.0]], ChartOptions(width=400.0, height=300.0))
        svg = chart.render()
        self.assertTrue(svg.has_class("ct-chart-line"))
        line = svg.query_selector("path.ct-line")
        assert line is not None
        self.assertEqual(line.get_attr("d"), "M50,265L217.5,15")
        points = svg.query_selector_all("circle.ct-point")
        self.assertEqual(
            [(p.get_attr("cx"), p.get_attr("cy")) for p in points],
            [("50", "265"), ("217.5", "15")],
        )
        group = svg.query_selector("g.ct-series")
        assert group is not None
        self.assertTrue(group.has_class("ct-series-a"))

    def test_gaps_split_lines(self) -> None:
        chart = LineChart(None, [[1.0, None, 3.0, 4.0]], ChartOptions(show_area=True))
        svg = chart.render()
        self.assertEqual(len(svg.query_selector_all("path.ct-line")), 2)
        self.assertEqual(len(svg.query_selector_all("path.ct-area")), 2)
        self.assertEqual(len(svg.query_selector_all("circle.ct-point")), 3)
        area = svg.query_selector("path.ct-area")
        assert area is not None
        self.assertTrue(area.get_attr("d").endswith("Z"))

    def test_draw_events_precede_single_built_event(self) -> None:
        chart = LineChart(["a", "b"], [[0.0, 10.0]], ChartOptions(width=400.0, height=300.0))
        order: list[str] = []
        chart.on("draw", lambda event: order.append(event.type))
        chart.on("built", lambda event: order.append("built"))
        chart.render()
        self.assertEqual(order[-1], "built")
        self.assertEqual(order.count("built"), 1)
        self.assertEqual(order.count("grid"), 8)
        self.assertEqual(order.count("label"), 8)
        self.assertEqual(order.count("line"), 1)
        self.assertEqual(order.count("point"), 2)

    def test_point_events_carry_values(self) -> None:
        chart = LineChart(None, [[3.0, 7.0]])
        values = []
        chart.on("draw", lambda event: values.append(event.value) if event.type == "point" else None)
        chart.render()
        self.assertEqual([(v.x, v.y) for v in values], [(0.0, 3.0), (1.0, 7.0)])

    def test_vertical_bars(self) -> None:
        chart = BarChart(["a", "b"], [[2.0, 8.0]], ChartOptions(width=400.0, height=300.0))
        bars = chart.render().query_selector_all("rect.ct-bar")
        self.assertEqual(
            [[b.get_attr(k) for k in ("x", "y", "width", "height")] for b in bars],
            [["128.75", "202.5", "10", "62.5"], ["296.25", "15", "10", "250"]],
        )

    def test_horizontal_bar_events_report_value_on_x(self) -> None:
        chart = BarChart(["a"], [[4.0]], ChartOptions(horizontal_bars=True))
        values = []
        chart.on("draw", lambda event: values.append(event.value) if event.type == "bar" else None)
        chart.render()
        self.assertEqual((values[0].x, values[0].y), (4.0, None))

    def test_built_event_reports_value_axis_orientation(self) -> None:
        options = ChartOptions(horizontal_bars=True)
        seen = []
        for chart in (LineChart(None, [[1.0]], options), BarChart(None, [[1.0]], options), BarChart(None, [[1.0]])):
            chart.on("built", lambda event: seen.append(event.horizontal))
            chart.render()
        self.assertEqual(seen, [False, True, False])

    def test_update_rerenders_with_new_data(self) -> None:
        chart = line_chart(["a", "b"], [[1.0, 2.0]])
        first = chart.svg
        svg = chart.update(series=[[5.0, 6.0, 7.0]], labels=["x", "y", "z"])
        self.assertIsNot(svg, first)
        self.assertEqual(len(svg.query_selector_all("circle.ct-point")), 3)
        svg = chart.update(options=chart.options.with_updates(show_point=False))
        self.assertEqual(svg.query_selector_all("circle.ct-point"), [])

    def test_named_series_group(self) -> None:
        chart = bar_chart(None, [{"data": [1.0], "name": "Revenue"}, [2.0]])
        groups = chart.svg.query_selector_all("g.ct-series")
        self.assertEqual(groups[0].get_attr("data-series-name"), "Revenue")
        self.assertTrue(groups[1].has_class("ct-series-b"))
        self.assertIn("<svg", chart.to_markup())

    def test_plugins_are_called_with_chart(self) -> None:
        seen = []
        chart = LineChart(None, [[1.0]], plugins=[seen.append])
        self.assertEqual(seen, [chart])


if __name__ == "__main__":
    unittest.main()
