from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
import datetime as dt
import logging
from typing import Any, NamedTuple

from energy_graph.errors import DegenerateRangeError
from energy_graph.scales import (
    AxisTransform,
    division_ticks,
    format_tick,
    round_up_to_interval,
    select_division_interval,
)
from energy_graph.stats import STAT_COLUMNS, StatSample, aggregate_statistics
from energy_graph.svg.nodes import DEFAULT_DOCUMENT_CLASS, Document, Group
from energy_graph.svg.render import render
from energy_graph.svg.style import Style
from energy_graph.widgets import (
    GraphInfoOverlay,
    GraphLine,
    GraphRegion,
    HorizontalAxis,
    IntervalBlock,
    TrackedColumn,
)


LOGGER = logging.getLogger(__name__)


class Division(NamedTuple):
    boundary_timestamp: int
    label: str


@dataclass(frozen=True)
class GraphRenderConfig:
    width: int = 840
    height: int = 630
    css_class: str = DEFAULT_DOCUMENT_CLASS
    margin_left: float = 60.0
    margin_right: float = 20.0
    margin_top: float = 20.0
    margin_bottom: float = 40.0
    desired_gridlines: int = 6
    stats_duration: int | None = 10
    unit: str = "kW"
    timestamp_format: str = "%Y-%m-%d %H:%M"
    tz: dt.tzinfo = dt.timezone.utc
    caption_height: float = 18.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width/height must be > 0")
        if min(self.margin_left, self.margin_right, self.margin_top, self.margin_bottom) < 0:
            raise ValueError("margins must be >= 0")
        if self.margin_left + self.margin_right >= self.width:
            raise ValueError("horizontal margins leave no room for the plot")
        if self.margin_top + self.margin_bottom >= self.height:
            raise ValueError("vertical margins leave no room for the plot")
        if self.desired_gridlines < 1:
            raise ValueError("desired_gridlines must be >= 1")
        if self.stats_duration is not None and self.stats_duration < 1:
            raise ValueError("stats_duration must be >= 1")

    @property
    def plot_left(self) -> float:
        return self.margin_left

    @property
    def plot_right(self) -> float:
        return self.width - self.margin_right

    @property
    def plot_top(self) -> float:
        return self.margin_top

    @property
    def plot_bottom(self) -> float:
        return self.height - self.margin_bottom


@dataclass(frozen=True)
class GraphStyles:
    consumption: Style = field(default_factory=lambda: Style(stroke="#1f77b4", fill="none", stroke_width=2.0))
    average: Style = field(default_factory=lambda: Style(stroke="#ff7f0e", fill="none", stroke_width=1.5))
    q1: Style = field(default_factory=lambda: Style(stroke="#2ca02c", fill="none", stroke_opacity=0.6))
    q3: Style = field(default_factory=lambda: Style(stroke="#d62728", fill="none", stroke_opacity=0.6))
    band: Style = field(default_factory=lambda: Style(stroke="none", fill="#2ca02c", fill_opacity=0.15))
    gridline: Style = field(default_factory=lambda: Style(stroke="#cccccc", fill="none"))
    interval_even: Style = field(default_factory=lambda: Style(stroke="none", fill="#f4f4f4"))
    interval_odd: Style = field(default_factory=lambda: Style(stroke="none", fill="#ffffff"))
    caption: Style = field(default_factory=lambda: Style(stroke="none", fill="#e0e0e0"))
    guide: Style = field(default_factory=lambda: Style(stroke="#444444", fill="none", stroke_opacity=0.6))


# Curve order is also the draw order: later entries sit on top.
_CURVES = (
    ("current", "consumption", "Consumption"),
    ("average", "average", "Average"),
    ("q1", "q1", "Lower quartile"),
    ("q3", "q3", "Upper quartile"),
)


def build_graph(
    samples: Any,
    desired_bucket_count: int,
    divisions: Iterable[tuple[int, str]] = (),
    config: GraphRenderConfig | None = None,
    styles: GraphStyles | None = None,
) -> Document:
    """Assemble the scene graph for one render call.

    The aggregator output is materialized here: axis ranges, the band and the
    overlays all walk the bucket series more than once. ``divisions`` is
    consumed once.
    """
    cfg = config or GraphRenderConfig()
    sty = styles or GraphStyles()

    series = list(aggregate_statistics(samples, desired_bucket_count, cfg.stats_duration))
    if len(series) < 2:
        raise DegenerateRangeError(f"need at least two buckets to span a time axis, got {len(series)}")

    x_axis = AxisTransform.from_range(series[0].timestamp, series[-1].timestamp).apply_display(
        AxisTransform.from_range(cfg.plot_left, cfg.plot_right)
    )
    interval, y_top = _value_scale(series, cfg.desired_gridlines)
    y_axis = AxisTransform.from_range(0.0, y_top).apply_display(
        AxisTransform.from_range(cfg.plot_bottom, cfg.plot_top)
    )

    blocks = _interval_blocks(divisions, x_axis, cfg, sty)
    gridlines = [
        HorizontalAxis(
            y=float(y_axis.map(tick)),
            x1=cfg.plot_left,
            x2=cfg.plot_right,
            label=f"{format_tick(tick, step=interval)} {cfg.unit}",
            style=sty.gridline,
        )
        for tick in division_ticks(y_top, interval).tolist()
    ]
    band = GraphRegion.from_series(series, "q1", "q3", x_axis, y_axis, sty.band)
    curves = [
        GraphLine.from_series(series, column, x_axis, y_axis, getattr(sty, style_name))
        for column, style_name, _ in _CURVES
    ]

    tracked = tuple(
        TrackedColumn(column, label, _marker_style(getattr(sty, style_name)))
        for column, style_name, label in _CURVES
    )
    hit_width = (cfg.plot_right - cfg.plot_left) / (len(series) - 1)
    overlays = [
        GraphInfoOverlay.build(
            sample,
            x_axis,
            y_axis,
            plot_top=cfg.plot_top,
            plot_bottom=cfg.plot_bottom,
            tracked=tracked,
            guide_style=sty.guide,
            hit_width=hit_width,
            unit=cfg.unit,
            timestamp_format=cfg.timestamp_format,
            tz=cfg.tz,
        )
        for sample in series
    ]

    LOGGER.debug(
        "assembled graph: %d buckets, %d interval blocks, y top %s %s",
        len(series),
        len(blocks),
        y_top,
        cfg.unit,
    )
    return Document(
        width=cfg.width,
        height=cfg.height,
        css_class=cfg.css_class,
        children=(
            Group(blocks, css_class=f"{cfg.css_class}-intervals"),
            Group(gridlines, css_class=f"{cfg.css_class}-grid"),
            band,
            *curves,
            Group(overlays, css_class=f"{cfg.css_class}-overlays"),
        ),
    )


def render_graph(
    samples: Any,
    desired_bucket_count: int,
    divisions: Iterable[tuple[int, str]] = (),
    config: GraphRenderConfig | None = None,
    styles: GraphStyles | None = None,
) -> str:
    return render(build_graph(samples, desired_bucket_count, divisions, config, styles))


def _value_scale(series: list[StatSample], desired_gridlines: int) -> tuple[float, float]:
    peak = max(getattr(sample, column) for sample in series for column in STAT_COLUMNS)
    if peak <= 0:
        # Nothing above zero to scale against; keep a unit-high axis.
        return 1.0, 1.0
    interval = select_division_interval(peak, desired_gridlines)
    return interval, round_up_to_interval(peak, interval)


def _interval_blocks(
    divisions: Iterable[tuple[int, str]],
    x_axis: AxisTransform,
    cfg: GraphRenderConfig,
    sty: GraphStyles,
) -> list[IntervalBlock]:
    bounds = [Division(int(ts), str(label)) for ts, label in divisions]
    blocks: list[IntervalBlock] = []
    for index, (start, end) in enumerate(zip(bounds, bounds[1:])):
        x1 = _clip(float(x_axis.map(start.boundary_timestamp)), cfg.plot_left, cfg.plot_right)
        x2 = _clip(float(x_axis.map(end.boundary_timestamp)), cfg.plot_left, cfg.plot_right)
        if x2 <= x1:
            continue
        blocks.append(
            IntervalBlock(
                x1=x1,
                x2=x2,
                top=cfg.plot_top,
                height=cfg.plot_bottom - cfg.plot_top,
                label=start.label,
                style=sty.interval_even if index % 2 == 0 else sty.interval_odd,
                caption_style=sty.caption,
                caption_height=cfg.caption_height,
            )
        )
    return blocks


def _marker_style(curve: Style) -> Style:
    return replace(curve, fill=curve.stroke, fill_opacity=1.0, stroke_opacity=1.0)


def _clip(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
