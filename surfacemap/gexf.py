"""Write the graph in GEXF format for Gephi."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TextIO

from .dot import GRAPH_NAME
from .graph import Edge, Node

XML_NS = "http://www.gephi.org/gexf"
XML_NS_VIZ = "http://www.gephi.org/gexf/viz"
CREATOR = "surfacemap"

_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
_PREFIX = "  "
_INDENT = "    "

_COLORS = {
    "subdomain": (34, 153, 84),
    "domain": (242, 44, 13),
    "address": (243, 156, 18),
    "ptr": (237, 243, 26),
    "ns": (26, 243, 240),
    "mx": (142, 68, 173),
    "netblock": (243, 26, 188),
    "as": (26, 69, 243),
}

_XML_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


def _is_xml_char(ch: str) -> bool:
    cp = ord(ch)
    return (
        cp in (0x9, 0xA, 0xD)
        or 0x20 <= cp <= 0xD7FF
        or 0xE000 <= cp <= 0xFFFD
        or 0x10000 <= cp <= 0x10FFFF
    )


def _escape(text: str) -> str:
    return "".join(
        _XML_ESCAPES.get(ch, ch if _is_xml_char(ch) else "\ufffd") for ch in text
    )


@dataclass
class _Element:
    tag: str
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[_Element] = field(default_factory=list)
    text: str = ""

    def lines(self, depth: int = 0) -> Iterator[str]:
        pad = _PREFIX + _INDENT * depth
        attrs = "".join(f' {name}="{_escape(value)}"' for name, value in self.attrs)
        if not self.children:
            yield f"{pad}<{self.tag}{attrs}>{_escape(self.text)}</{self.tag}>"
            return
        yield f"{pad}<{self.tag}{attrs}>"
        for child in self.children:
            yield from child.lines(depth + 1)
        yield f"{pad}</{self.tag}>"


def _labelled(attrs: list[tuple[str, str]], label: str) -> list[tuple[str, str]]:
    """Insert a label attribute after the id when the label is not empty."""
    if label:
        return [attrs[0], ("label", label), *attrs[1:]]
    return attrs


def _node_element(idx: int, node: Node) -> _Element:
    children = [
        _Element(
            "attvalues",
            children=[
                _Element("attvalue", [("for", "0"), ("value", node.title)]),
                _Element("attvalue", [("for", "1"), ("value", node.source)]),
                _Element("attvalue", [("for", "2"), ("value", node.type)]),
            ],
        ),
        _Element("parents"),
    ]
    color = _COLORS.get(node.type)
    if color is not None:
        red, green, blue = color
        children.append(
            _Element("viz:color", [("r", str(red)), ("g", str(green)), ("b", str(blue))])
        )
    return _Element("node", _labelled([("id", str(idx))], node.label), children)


def _edge_element(idx: int, edge: Edge) -> _Element:
    attrs = _labelled(
        [("id", str(idx)), ("source", str(edge.from_)), ("target", str(edge.to))],
        edge.label,
    )
    return _Element("edge", attrs, [_Element("attvalues")])


def _document(nodes: Sequence[Node], edges: Sequence[Edge], today: str) -> _Element:
    meta = _Element(
        "meta",
        [("lastmodifieddate", today)],
        [_Element("creator", text=CREATOR), _Element("description", text=GRAPH_NAME)],
    )
    attributes = _Element(
        "attributes",
        [("class", "node")],
        [
            _Element("attribute", [("id", str(i)), ("title", title), ("type", "string")])
            for i, title in enumerate(("Title", "Source", "Type"))
        ],
    )
    graph = _Element(
        "graph",
        [("mode", "static"), ("defaultedgetype", "directed")],
        [
            attributes,
            _Element("nodes", children=[_node_element(i, n) for i, n in enumerate(nodes)]),
            _Element("edges", children=[_edge_element(i, e) for i, e in enumerate(edges)]),
        ],
    )
    return _Element(
        "gexf",
        [("xmlns", XML_NS), ("version", "1.3"), ("xmlns:viz", XML_NS_VIZ)],
        [meta, graph],
    )


def write_gexf_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write nodes and edges as an indented GEXF 1.3 document to output."""
    today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    document = _document(nodes, edges, today)
    output.write(_HEADER + "\n".join(document.lines()))