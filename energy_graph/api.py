from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from energy_graph.chart import GraphRenderConfig, GraphStyles, render_graph


def energy_graph_svg(
    samples: Any,
    desired_bucket_count: int,
    divisions: Iterable[tuple[int, str]] = (),
    *,
    width: int | None = None,
    height: int | None = None,
    stats_duration: int | None = 10,
    styles: GraphStyles | None = None,
) -> str:
    """Render power samples (oldest first) as a standalone SVG document."""
    defaults = GraphRenderConfig()
    config = GraphRenderConfig(
        width=defaults.width if width is None else width,
        height=defaults.height if height is None else height,
        stats_duration=stats_duration,
    )
    return render_graph(samples, desired_bucket_count, divisions, config=config, styles=styles)
