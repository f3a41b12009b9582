from energy_graph.api import energy_graph_svg
from energy_graph.chart import Division, GraphRenderConfig, GraphStyles, build_graph, render_graph
from energy_graph.errors import (
    DegenerateRangeError,
    EnergyGraphError,
    MissingFieldError,
    SampleDataError,
    UndefinedTangentError,
)
from energy_graph.scales import AxisTransform, select_division_interval
from energy_graph.stats import StatSample, aggregate_statistics
from energy_graph.widgets import DataPoint, GraphInfoOverlay, GraphLine, GraphRegion, HorizontalAxis, IntervalBlock

__all__ = [
    "AxisTransform",
    "DataPoint",
    "DegenerateRangeError",
    "Division",
    "EnergyGraphError",
    "GraphInfoOverlay",
    "GraphLine",
    "GraphRegion",
    "GraphRenderConfig",
    "GraphStyles",
    "HorizontalAxis",
    "IntervalBlock",
    "MissingFieldError",
    "SampleDataError",
    "StatSample",
    "UndefinedTangentError",
    "aggregate_statistics",
    "build_graph",
    "energy_graph_svg",
    "render_graph",
    "select_division_interval",
]
