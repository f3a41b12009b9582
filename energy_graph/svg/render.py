from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import singledispatch
from typing import Any
import xml.etree.ElementTree as ET

from energy_graph.svg.nodes import Document, Group, Line, Path, Rect, Text
from energy_graph.svg.path import PathCommand, line, move
from energy_graph.svg.style import format_number


SVG_NAMESPACE = "http://www.w3.org/2000/svg"


@singledispatch
def to_element(node: Any) -> ET.Element:
    """Build the element tree for one scene-graph node."""
    raise TypeError(f"no SVG rendering registered for {type(node).__name__}")


def render(node: Any) -> str:
    """Serialize ``node`` and everything below it to SVG markup."""
    return ET.tostring(to_element(node), encoding="unicode")


def append_children(parent: ET.Element, children: Iterable[Any]) -> ET.Element:
    for child in children:
        parent.append(to_element(child))
    return parent


def path_commands(path: Path) -> Iterator[PathCommand]:
    """Full command sequence of ``path``: one move-to, then each segment in turn."""
    for index, segment in enumerate(path.segments):
        start = segment.get_start()
        yield move(start) if index == 0 else line(start)
        yield from segment.get_commands()


@to_element.register(Document)
def _document(node: Document) -> ET.Element:
    width = format_number(node.width)
    height = format_number(node.height)
    root = ET.Element(
        "svg",
        {
            "version": "1.1",
            "width": width,
            "height": height,
            "viewBox": f"0 0 {width} {height}",
            "xmlns": SVG_NAMESPACE,
            "class": node.css_class,
        },
    )
    return append_children(root, node.children)


@to_element.register(Group)
def _group(node: Group) -> ET.Element:
    attrs = {"class": node.css_class} if node.css_class else {}
    return append_children(ET.Element("g", attrs), node.children)


@to_element.register(Rect)
def _rect(node: Rect) -> ET.Element:
    attrs = node.style.attrs()
    attrs.update(
        x=format_number(node.x),
        y=format_number(node.y),
        width=format_number(node.width),
        height=format_number(node.height),
    )
    return ET.Element("rect", attrs)


@to_element.register(Line)
def _line(node: Line) -> ET.Element:
    attrs = node.style.attrs()
    attrs.update(
        x1=format_number(node.x1),
        y1=format_number(node.y1),
        x2=format_number(node.x2),
        y2=format_number(node.y2),
    )
    return ET.Element("line", attrs)


@to_element.register(Text)
def _text(node: Text) -> ET.Element:
    attrs = {"x": format_number(node.x), "y": format_number(node.y)}
    if node.css_class:
        attrs["class"] = node.css_class
    if node.text_anchor:
        attrs["text-anchor"] = node.text_anchor
    elem = ET.Element("text", attrs)
    elem.text = node.content
    return elem


@to_element.register(Path)
def _path(node: Path) -> ET.Element:
    attrs = node.style.attrs()
    attrs["d"] = " ".join(str(command) for command in path_commands(node))
    return ET.Element("path", attrs)
