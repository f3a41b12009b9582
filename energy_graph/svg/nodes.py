from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from energy_graph.svg.path import PathSegment
from energy_graph.svg.style import Style


DEFAULT_DOCUMENT_CLASS = "hh-energy-graph"


def _freeze_children(node: Any) -> None:
    object.__setattr__(node, "children", tuple(node.children))


@dataclass(frozen=True)
class Document:
    """Root of one rendered graph; ``children`` are drawn in order."""

    width: float
    height: float
    children: Iterable[Any] = ()
    css_class: str = DEFAULT_DOCUMENT_CLASS

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("document width/height must be > 0")
        _freeze_children(self)


@dataclass(frozen=True)
class Group:
    children: Iterable[Any] = ()
    css_class: str | None = None

    def __post_init__(self) -> None:
        _freeze_children(self)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    style: Style = field(default_factory=Style)


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    style: Style = field(default_factory=Style)


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    content: str
    css_class: str | None = None
    text_anchor: str | None = None


@dataclass(frozen=True)
class Path:
    """A ``<path>`` joining its segments; later segments start with a line-to."""

    style: Style
    segments: Iterable[PathSegment]

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        if not segments:
            raise ValueError("path needs at least one segment")
        object.__setattr__(self, "segments", segments)
