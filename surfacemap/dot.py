"""Write the graph in Graphviz DOT format."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from .graph import NODE_COLORS, Edge, Node

GRAPH_NAME = "Surface Map Network Mapping"


def write_dot_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write a DOT digraph of nodes and edges to output."""
    parts = [
        f'\ndigraph "{GRAPH_NAME}" {{\n'
        '\tsize = "7.5,10"; ranksep="2.5 equally"; ratio=auto;\n\n'
    ]
    for number, node in enumerate(nodes, start=1):
        color = NODE_COLORS.get(node.type, "")
        parts.append(
            f'\n        node [label="{node.label}",color="{color}",'
            f'type="{node.type}",source="{node.source}"]; n{number};\n'
        )
    parts.append("\n\n")
    for edge in edges:
        parts.append(
            f'\n        n{edge.from_ + 1} -> n{edge.to + 1} [label="{edge.title}"];\n'
        )
    parts.append("\n}\n")
    output.write("".join(parts))