from .nodes import Document, Group, Line, Path, Rect, Text
from .path import CubicSegment, LinearSegment, PathCommand, PathSegment, Point, QuadraticSegment
from .render import append_children, path_commands, render, to_element
from .style import Style, format_number

__all__ = [
    "CubicSegment",
    "Document",
    "Group",
    "Line",
    "LinearSegment",
    "Path",
    "PathCommand",
    "PathSegment",
    "Point",
    "QuadraticSegment",
    "Rect",
    "Style",
    "Text",
    "append_children",
    "format_number",
    "path_commands",
    "render",
    "to_element",
]
