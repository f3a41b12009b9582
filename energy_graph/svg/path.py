from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import logging
from typing import NamedTuple, Protocol

from energy_graph.errors import UndefinedTangentError
from energy_graph.svg.style import format_number


LOGGER = logging.getLogger(__name__)

# Catmull-Rom style tangent weights for CubicSegment.
_TANGENT_SCALE = 0.5
_HANDLE_SCALE = 0.5


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class PathCommand:
    """One absolute path command; ``points`` ends with the command's target."""

    op: str
    points: tuple[Point, ...]

    @property
    def end(self) -> Point:
        return self.points[-1]

    def __str__(self) -> str:
        return f"{self.op} " + ", ".join(f"{format_number(p.x)} {format_number(p.y)}" for p in self.points)


def move(point: Point) -> PathCommand:
    return PathCommand("M", (point,))


def line(point: Point) -> PathCommand:
    return PathCommand("L", (point,))


def quadratic(point: Point, control: Point | None = None) -> PathCommand:
    if control is None:
        return PathCommand("T", (point,))
    return PathCommand("Q", (control, point))


def cubic(point: Point, control2: Point, control1: Point | None = None) -> PathCommand:
    if control1 is None:
        return PathCommand("S", (control2, point))
    return PathCommand("C", (control1, control2, point))


class PathSegment(Protocol):
    def get_start(self) -> Point:
        ...

    def get_commands(self) -> Iterator[PathCommand]:
        ...


@dataclass(frozen=True)
class _JoinedPoints:
    points: Iterable[tuple[float, float]]

    def __post_init__(self) -> None:
        pts = tuple(Point(float(x), float(y)) for x, y in self.points)
        if not pts:
            raise ValueError(f"{type(self).__name__} needs at least one point")
        object.__setattr__(self, "points", pts)

    def get_start(self) -> Point:
        return self.points[0]


class LinearSegment(_JoinedPoints):
    """Straight lines through every point."""

    def get_commands(self) -> Iterator[PathCommand]:
        for point in self.points[1:]:
            yield line(point)


class QuadraticSegment(_JoinedPoints):
    """Smooth quadratic curve starting from a midpoint control handle."""

    def get_commands(self) -> Iterator[PathCommand]:
        if len(self.points) < 2:
            return
        start, first = self.points[0], self.points[1]
        yield quadratic(first, Point((start.x + first.x) / 2, (start.y + first.y) / 2))
        for point in self.points[2:]:
            yield quadratic(point)


@dataclass(frozen=True)
class CubicSegment(_JoinedPoints):
    """Smooth cubic curve with one explicit control handle per point.

    Each handle comes from a Catmull-Rom style tangent across the point's
    neighbours; the outgoing handle is left to the ``S`` reflection rule. When
    both neighbours share an x coordinate the tangent is taken as flat, or
    ``UndefinedTangentError`` is raised if ``strict`` is set.
    """

    strict: bool = False

    def get_commands(self) -> Iterator[PathCommand]:
        pts = self.points
        last = len(pts) - 1
        for i in range(1, len(pts)):
            prev, current = pts[i - 1], pts[i]
            nxt = pts[i + 1] if i < last else current
            yield cubic(current, self._control_point(prev, current, nxt))

    def _control_point(self, prev: Point, current: Point, nxt: Point) -> Point:
        dx = nxt.x - prev.x
        if dx == 0:
            if self.strict:
                raise UndefinedTangentError(
                    f"tangent at ({current.x}, {current.y}) is undefined: neighbours share x={prev.x}"
                )
            LOGGER.debug("flat tangent used at (%s, %s); neighbours share x", current.x, current.y)
            gradient = 0.0
        else:
            gradient = _TANGENT_SCALE * (nxt.y - prev.y) / dx
        offset = current.x - prev.x
        return Point(current.x - _HANDLE_SCALE * offset, current.y - _HANDLE_SCALE * offset * gradient)
