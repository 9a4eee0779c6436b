"""Write the graph as a CSV table that Maltego can import."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from .graph import Edge, Node
from .requests import _parse_cidr

_COLUMNS = (
    "maltego.Domain",
    "maltego.DNSName",
    "maltego.NSRecord",
    "maltego.MXRecord",
    "maltego.IPv4Address",
    "maltego.Netblock",
    "maltego.AS",
    "maltego.Company",
    "maltego.DNSName",
)
_TYPE_INDEX = {
    "domain": 0,
    "subdomain": 1,
    "ptr": 8,
    "cname": 8,
    "address": 4,
    "ns": 2,
    "mx": 3,
    "netblock": 5,
    "as": 6,
    "company": 7,
}


def cidr_to_maltego_netblock(cidr: str) -> str:
    """Render a CIDR block as 'first-last', or '' when it cannot be parsed."""
    network = _parse_cidr(cidr)
    if network is None:
        return ""
    return f"{network.network_address}-{network.broadcast_address}"


def _cell(data: str, node_type: str) -> str:
    return cidr_to_maltego_netblock(data) if node_type == "netblock" else data


def _write_line(output: TextIO, data1: str, type1: str, data2: str, type2: str) -> None:
    row = [""] * len(_COLUMNS)
    row[_TYPE_INDEX.get(type1, 0)] = _cell(data1, type1)
    row[_TYPE_INDEX.get(type2, 0)] = _cell(data2, type2)
    output.write(",".join(row) + "\n")


def _next_node(node_id: int, outgoing: bool, edge: Edge) -> int | None:
    if outgoing:
        return edge.to if edge.from_ == node_id else None
    return edge.from_ if edge.to == node_id else None


def _company(title: str) -> str:
    parts = title.split(":")
    if len(parts) < 3:
        raise ValueError(f"autonomous system title lacks a description: {title!r}")
    return parts[2].strip().replace(",", "")


def _traverse(
    output: TextIO,
    node_id: int,
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    visited: set[int],
) -> None:
    node = nodes[node_id]
    data1, type1 = node.label, node.type
    outgoing = type1 in ("netblock", "as")

    if node_id in visited:
        return
    visited.add(node_id)

    if type1 == "as":
        _write_line(output, data1, type1, _company(node.title), "company")

    for edge in edges:
        sub_outgoing = outgoing
        target = _next_node(node_id, outgoing, edge)
        if target is None and type1 in ("subdomain", "domain"):
            sub_outgoing = True
            target = _next_node(node_id, sub_outgoing, edge)
        if target is None:
            continue

        data2, type2 = nodes[target].label, nodes[target].type
        if "cname" in edge.title:
            if sub_outgoing:
                _write_line(output, data1, "cname", data2, type2)
            else:
                _write_line(output, data1, type1, data2, "cname")
        else:
            _write_line(output, data1, type1, data2, type2)
        _traverse(output, target, nodes, edges, visited)


def write_maltego_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write the graph as Maltego CSV, walking outward from autonomous systems."""
    output.write(",".join(_COLUMNS) + "\n")
    visited: set[int] = set()
    for idx, node in enumerate(nodes):
        if node.type == "as":
            _traverse(output, idx, nodes, edges, visited)