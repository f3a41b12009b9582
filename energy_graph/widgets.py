from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
import datetime as dt
from typing import Any
import xml.etree.ElementTree as ET

import numpy as np

from energy_graph.errors import MissingFieldError
from energy_graph.scales import AxisTransform
from energy_graph.svg.nodes import Group, Line, Path, Rect, Text
from energy_graph.svg.path import CubicSegment, Point
from energy_graph.svg.render import append_children, to_element
from energy_graph.svg.style import Style, format_number


INFO_OVERLAY_CLASS = "hh-energy-graph-info"
CAPTION_CLASS = "hh-energy-graph-caption"
AXIS_LABEL_CLASS = "hh-energy-graph-axis-label"

_HIT_STYLE = Style(stroke="none", fill="white", stroke_width=0.0, fill_opacity=0.0)


def column_value(sample: Any, column: str) -> float:
    """Read ``column`` from a StatSample-like object or a mapping."""
    if isinstance(sample, Mapping):
        value = sample.get(column)
    else:
        value = getattr(sample, column, None)
    if value is None:
        raise MissingFieldError(column)
    return float(value)


def project_column(
    series: Sequence[Any],
    column: str,
    x_axis: AxisTransform,
    y_axis: AxisTransform,
) -> tuple[Point, ...]:
    timestamps = np.asarray([column_value(sample, "timestamp") for sample in series], dtype=np.float64)
    values = np.asarray([column_value(sample, column) for sample in series], dtype=np.float64)
    xs = x_axis.map(timestamps)
    ys = y_axis.map(values)
    return _as_points(zip(xs.tolist(), ys.tolist()))


def _as_points(points: Iterable[tuple[float, float]]) -> tuple[Point, ...]:
    return tuple(Point(float(x), float(y)) for x, y in points)


@dataclass(frozen=True)
class DataPoint:
    """Hover marker: a circle carrying a tooltip."""

    x: float
    y: float
    title: str
    style: Style = field(default_factory=Style)
    radius: float = 3.0


@dataclass(frozen=True)
class IntervalBlock:
    """Shaded background for one calendar period, captioned at the top."""

    x1: float
    x2: float
    top: float
    height: float
    label: str
    style: Style
    caption_style: Style
    caption_height: float = 18.0


@dataclass(frozen=True)
class HorizontalAxis:
    """Gridline across the plot with its value label left of the plot."""

    y: float
    x1: float
    x2: float
    label: str
    style: Style


@dataclass(frozen=True)
class GraphLine:
    points: tuple[Point, ...]
    style: Style

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _as_points(self.points))

    @classmethod
    def from_series(
        cls,
        series: Sequence[Any],
        column: str,
        x_axis: AxisTransform,
        y_axis: AxisTransform,
        style: Style,
    ) -> "GraphLine":
        return cls(points=project_column(series, column, x_axis, y_axis), style=style)


@dataclass(frozen=True)
class GraphRegion:
    """Band between two curves, closed by walking the lower one backwards."""

    lower: tuple[Point, ...]
    upper: tuple[Point, ...]
    style: Style

    def __post_init__(self) -> None:
        object.__setattr__(self, "lower", _as_points(self.lower))
        object.__setattr__(self, "upper", _as_points(self.upper))
        if len(self.lower) != len(self.upper):
            raise MissingFieldError(
                "lower" if len(self.lower) < len(self.upper) else "upper",
                f"region bounds differ in length: {len(self.lower)} != {len(self.upper)}",
            )

    @classmethod
    def from_series(
        cls,
        series: Sequence[Any],
        lower_column: str,
        upper_column: str,
        x_axis: AxisTransform,
        y_axis: AxisTransform,
        style: Style,
    ) -> "GraphRegion":
        return cls(
            lower=project_column(series, lower_column, x_axis, y_axis),
            upper=project_column(series, upper_column, x_axis, y_axis),
            style=style,
        )

    def to_path(self) -> Path:
        return Path(self.style, (CubicSegment(tuple(reversed(self.lower))), CubicSegment(self.upper)))


@dataclass(frozen=True)
class TrackedColumn:
    column: str
    label: str
    style: Style


@dataclass(frozen=True)
class GraphInfoOverlay:
    """Static hover panel for one bucket; the host page toggles it via CSS."""

    children: Iterable[Any] = ()
    css_class: str = INFO_OVERLAY_CLASS

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def build(
        cls,
        sample: Any,
        x_axis: AxisTransform,
        y_axis: AxisTransform,
        *,
        plot_top: float,
        plot_bottom: float,
        tracked: Sequence[TrackedColumn],
        guide_style: Style,
        hit_width: float | None = None,
        unit: str = "kW",
        timestamp_format: str = "%Y-%m-%d %H:%M",
        tz: dt.tzinfo = dt.timezone.utc,
    ) -> "GraphInfoOverlay":
        timestamp = int(column_value(sample, "timestamp"))
        x = float(x_axis.map(timestamp))
        children: list[Any] = []
        if hit_width:
            children.append(Rect(x - hit_width / 2, plot_top, hit_width, plot_bottom - plot_top, _HIT_STYLE))
        children.append(Line(x, plot_top, x, plot_bottom, guide_style))
        when = dt.datetime.fromtimestamp(timestamp, tz=tz).strftime(timestamp_format)
        children.append(Text(x, plot_top - 4, when, css_class=CAPTION_CLASS, text_anchor="middle"))
        for entry in tracked:
            value = column_value(sample, entry.column)
            y = float(y_axis.map(value))
            text = f"{entry.label}: {format_number(value)} {unit}"
            children.append(DataPoint(x, y, text, entry.style))
            children.append(Text(x + 6, y + 4, text))
        return cls(children=children)


@to_element.register(DataPoint)
def _data_point(node: DataPoint) -> ET.Element:
    attrs = node.style.attrs()
    attrs.update(cx=format_number(node.x), cy=format_number(node.y), r=format_number(node.radius))
    circle = ET.Element("circle", attrs)
    ET.SubElement(circle, "title").text = node.title
    return circle


@to_element.register(IntervalBlock)
def _interval_block(node: IntervalBlock) -> ET.Element:
    width = node.x2 - node.x1
    group = Group(
        (
            Rect(node.x1, node.top, width, node.height, node.style),
            Rect(node.x1, node.top, width, node.caption_height, node.caption_style),
            Text(node.x1 + 4, node.top + node.caption_height - 5, node.label, css_class=CAPTION_CLASS),
        )
    )
    return to_element(group)


@to_element.register(HorizontalAxis)
def _horizontal_axis(node: HorizontalAxis) -> ET.Element:
    group = Group(
        (
            Line(node.x1, node.y, node.x2, node.y, node.style),
            Text(node.x1 - 4, node.y + 4, node.label, css_class=AXIS_LABEL_CLASS, text_anchor="end"),
        )
    )
    return to_element(group)


@to_element.register(GraphLine)
def _graph_line(node: GraphLine) -> ET.Element:
    return to_element(Path(node.style, (CubicSegment(node.points),)))


@to_element.register(GraphRegion)
def _graph_region(node: GraphRegion) -> ET.Element:
    return to_element(node.to_path())


@to_element.register(GraphInfoOverlay)
def _graph_info_overlay(node: GraphInfoOverlay) -> ET.Element:
    return append_children(ET.Element("g", {"class": node.css_class}), node.children)
