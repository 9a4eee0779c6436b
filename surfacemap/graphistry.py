"""Write the graph as Graphistry edge-list JSON."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime
from typing import TextIO

from .graph import Edge, Node

_COLORS = {
    "subdomain": 3,
    "domain": 5,
    "address": 7,
    "ptr": 10,
    "ns": 0,
    "mx": 9,
    "netblock": 4,
    "as": 1,
}
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _graph_name(now: datetime) -> str:
    return f"surfacemap_{_MONTHS[now.month - 1]}_{now.day}_{now:%Y_%H_%M_%S}"


def write_graphistry_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write nodes and edges as indented Graphistry JSON to output."""
    graph = [
        {"src": str(edge.from_), "dst": str(edge.to), "edgeTitle": edge.title}
        for edge in edges
    ]
    labels = [
        {
            "node": str(idx),
            "pointLabel": node.label,
            "pointTitle": node.title,
            "pointColor": _COLORS.get(node.type, 0),
            "type": node.type,
            "source": node.source,
        }
        for idx, node in enumerate(nodes)
    ]
    document = {
        "name": _graph_name(datetime.now()),
        "type": "edgelist",
        "bindings": {
            "sourceField": "src",
            "destinationField": "dst",
            "idField": "node",
        },
        "graph": graph or None,
        "labels": labels or None,
    }
    text = json.dumps(document, indent=2, ensure_ascii=False)
    for char, escaped in _ESCAPES:
        text = text.replace(char, escaped)
    output.write(text + "\n")