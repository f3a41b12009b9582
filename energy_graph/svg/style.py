from __future__ import annotations

from dataclasses import dataclass


def format_number(value: float, *, decimals: int = 3) -> str:
    """Compact fixed-point text for SVG attributes (``12.5``, ``0``, ``-3``)."""
    out = f"{float(value):.{decimals}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


@dataclass(frozen=True)
class Style:
    """Presentation attributes shared by reference across many nodes."""

    stroke: str = "black"
    fill: str = "black"
    stroke_width: float = 1.0
    stroke_opacity: float = 1.0
    fill_opacity: float = 1.0

    def __post_init__(self) -> None:
        if self.stroke_width < 0:
            raise ValueError("stroke_width must be >= 0")
        for name in ("stroke_opacity", "fill_opacity"):
            value = getattr(self, name)
            if value < 0.0 or value > 1.0:
                raise ValueError(f"{name} must be in [0, 1]")

    def attrs(self) -> dict[str, str]:
        return {
            "stroke": self.stroke,
            "fill": self.fill,
            "stroke-width": format_number(self.stroke_width),
            "stroke-opacity": format_number(self.stroke_opacity),
            "fill-opacity": format_number(self.fill_opacity),
        }
