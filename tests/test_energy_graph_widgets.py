from __future__ import annotations

import unittest
import xml.etree.ElementTree as ET

from energy_graph.errors import MissingFieldError
from energy_graph.scales import AxisTransform
from energy_graph.stats import StatSample
from energy_graph.svg import Point, Style, path_commands, render
from energy_graph.widgets import (
    INFO_OVERLAY_CLASS,
    DataPoint,
    GraphInfoOverlay,
    GraphLine,
    GraphRegion,
    HorizontalAxis,
    IntervalBlock,
    TrackedColumn,
)

from svg_helpers import strip_namespace


def _axes() -> tuple[AxisTransform, AxisTransform]:
    x_axis = AxisTransform.from_range(0.0, 100.0).apply_display(AxisTransform.from_range(0.0, 200.0))
    y_axis = AxisTransform.from_range(0.0, 10.0).apply_display(AxisTransform.from_range(100.0, 0.0))
    return x_axis, y_axis


SERIES = [
    StatSample(timestamp=0, current=2.0, average=3.0, q1=1.0, q3=5.0),
    StatSample(timestamp=50, current=4.0, average=3.5, q1=2.0, q3=6.0),
    StatSample(timestamp=100, current=6.0, average=4.0, q1=3.0, q3=7.0),
]


class GraphRegionTests(unittest.TestCase):
    def test_region_reverses_lower_bound_then_walks_upper(self) -> None:
        region = GraphRegion(lower=[(0, 0), (1, 1)], upper=[(0, 2), (1, 3)], style=Style())
        ends = [command.end for command in path_commands(region.to_path())]
        self.assertEqual(ends, [Point(1, 1), Point(0, 0), Point(0, 2), Point(1, 3)])

    def test_region_renders_single_path(self) -> None:
        region = GraphRegion(lower=[(0, 0), (1, 1)], upper=[(0, 2), (1, 3)], style=Style())
        elem = ET.fromstring(render(region))
        self.assertEqual(strip_namespace(elem.tag), "path")
        self.assertTrue(elem.attrib["d"].startswith("M 1 1 "))
        self.assertIn(" L 0 2 ", elem.attrib["d"])

    def test_mismatched_bounds_rejected(self) -> None:
        with self.assertRaises(MissingFieldError):
            GraphRegion(lower=[(0, 0)], upper=[(0, 2), (1, 3)], style=Style())

    def test_from_series_projects_both_columns(self) -> None:
        x_axis, y_axis = _axes()
        region = GraphRegion.from_series(SERIES, "q1", "q3", x_axis, y_axis, Style())
        for got, want in [(region.lower[0], (0.0, 90.0)), (region.upper[-1], (200.0, 30.0))]:
            self.assertAlmostEqual(got.x, want[0], places=9)
            self.assertAlmostEqual(got.y, want[1], places=9)


class GraphLineTests(unittest.TestCase):
    def test_from_series_projects_column_through_both_axes(self) -> None:
        x_axis, y_axis = _axes()
        line = GraphLine.from_series(SERIES, "current", x_axis, y_axis, Style(fill="none"))
        expected = [Point(0.0, 80.0), Point(100.0, 60.0), Point(200.0, 40.0)]
        for got, want in zip(line.points, expected):
            self.assertAlmostEqual(got.x, want.x, places=9)
            self.assertAlmostEqual(got.y, want.y, places=9)

    def test_renders_cubic_path(self) -> None:
        x_axis, y_axis = _axes()
        elem = ET.fromstring(render(GraphLine.from_series(SERIES, "average", x_axis, y_axis, Style())))
        d = elem.attrib["d"]
        self.assertTrue(d.startswith("M 0 70 S "))
        self.assertEqual(d.count("S "), 2)

    def test_missing_column_raises(self) -> None:
        x_axis, y_axis = _axes()
        with self.assertRaises(MissingFieldError) as ctx:
            GraphLine.from_series(SERIES, "median", x_axis, y_axis, Style())
        self.assertEqual(ctx.exception.column, "median")

    def test_mapping_samples_are_supported(self) -> None:
        x_axis, y_axis = _axes()
        rows = [{"timestamp": 0, "current": 1.0}, {"timestamp": 100, "current": 2.0}]
        line = GraphLine.from_series(rows, "current", x_axis, y_axis, Style())
        self.assertEqual(len(line.points), 2)
        with self.assertRaises(MissingFieldError):
            GraphLine.from_series(rows + [{"timestamp": 50}], "current", x_axis, y_axis, Style())


class CompositeRenderTests(unittest.TestCase):
    def test_data_point_has_tooltip(self) -> None:
        elem = ET.fromstring(render(DataPoint(10, 20, "Average: 1.5 kW", Style(fill="red"), radius=4)))
        self.assertEqual(strip_namespace(elem.tag), "circle")
        self.assertEqual((elem.attrib["cx"], elem.attrib["cy"], elem.attrib["r"]), ("10", "20", "4"))
        (title,) = list(elem)
        self.assertEqual(strip_namespace(title.tag), "title")
        self.assertEqual(title.text, "Average: 1.5 kW")

    def test_interval_block_spans_height_with_caption(self) -> None:
        block = IntervalBlock(
            x1=100,
            x2=250,
            top=20,
            height=570,
            label="Mon",
            style=Style(fill="#eee"),
            caption_style=Style(fill="#ccc"),
        )
        elem = ET.fromstring(render(block))
        background, caption, label = list(elem)
        self.assertEqual(background.attrib["width"], "150")
        self.assertEqual(background.attrib["height"], "570")
        self.assertEqual(caption.attrib["height"], "18")
        self.assertEqual(label.text, "Mon")

    def test_horizontal_axis_draws_level_line_and_label(self) -> None:
        elem = ET.fromstring(render(HorizontalAxis(y=42, x1=60, x2=820, label="2 kW", style=Style())))
        line, label = list(elem)
        self.assertEqual(line.attrib["y1"], line.attrib["y2"])
        self.assertEqual(label.text, "2 kW")
        self.assertEqual(label.attrib["text-anchor"], "end")

    def test_info_overlay_tracks_each_column(self) -> None:
        x_axis, y_axis = _axes()
        tracked = [
            TrackedColumn("current", "Consumption", Style(fill="blue")),
            TrackedColumn("average", "Average", Style(fill="orange")),
            TrackedColumn("q1", "Lower quartile", Style(fill="green")),
            TrackedColumn("q3", "Upper quartile", Style(fill="red")),
        ]
        overlay = GraphInfoOverlay.build(
            SERIES[0], x_axis, y_axis, plot_top=0, plot_bottom=100, tracked=tracked, guide_style=Style()
        )
        elem = ET.fromstring(render(overlay))
        self.assertEqual(elem.attrib["class"], INFO_OVERLAY_CLASS)
        tags = [strip_namespace(child.tag) for child in elem]
        self.assertEqual(tags[:2], ["line", "text"])
        self.assertEqual(tags.count("circle"), 4)
        self.assertEqual(elem[1].text, "1970-01-01 00:00")
        titles = [child[0].text for child in elem if strip_namespace(child.tag) == "circle"]
        self.assertEqual(titles[0], "Consumption: 2 kW")

    def test_info_overlay_missing_column_raises(self) -> None:
        x_axis, y_axis = _axes()
        with self.assertRaises(MissingFieldError):
            GraphInfoOverlay.build(
                SERIES[0],
                x_axis,
                y_axis,
                plot_top=0,
                plot_bottom=100,
                tracked=[TrackedColumn("peak", "Peak", Style())],
                guide_style=Style(),
            )


if __name__ == "__main__":
    unittest.main()
