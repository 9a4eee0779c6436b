"""Turn stored graph quads into plain nodes and edges for visualisation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import NamedTuple

NODE_COLORS = {
    "subdomain": "green",
    "domain": "red",
    "address": "orange",
    "ptr": "yellow",
    "ns": "cyan",
    "mx": "purple",
    "netblock": "pink",
    "as": "blue",
}

_SKIPPED_TYPES = frozenset({"", "source", "event", "response"})
_EDGE_PREDICATES = frozenset(
    {
        "root",
        "cname_record",
        "a_record",
        "aaaa_record",
        "ptr_record",
        "service",
        "srv_record",
        "ns_record",
        "mx_record",
        "contains",
        "prefix",
    }
)
_IN_EDGE_TYPES = {"root": "domain", "ns_record": "ns", "mx_record": "mx"}


@dataclass
class Edge:
    """A directed edge between two nodes, given by their indices."""

    from_: int
    to: int
    label: str = ""
    title: str = ""


@dataclass
class Node:
    """A graph node prepared for visualisation."""

    id: int = 0
    type: str = ""
    label: str = ""
    title: str = ""
    source: str = ""
    actual_type: str = ""


@dataclass(frozen=True)
class Quad:
    """A subject-predicate-object statement from the graph store."""

    subject: str
    predicate: str
    obj: str
    label: str = ""


class _Triple(NamedTuple):
    subject: str
    predicate: str
    obj: str


def _text(value: object) -> str:
    """Strip IRI brackets or string quotes from a stored value."""
    if value is None:
        return ""
    text = str(value)
    if text.startswith("<") or text.endswith(">"):
        return text.lstrip("<").rstrip(">")
    return text.strip('"')


def _get_value(triples: Iterable[_Triple], predicate: str) -> str:
    for triple in triples:
        if triple.predicate == predicate:
            return triple.obj
    return ""


def _is_tld(name: str, by_subject: dict[str, list[_Triple]]) -> bool:
    return any(
        triple.obj == name and triple.predicate == "tld"
        for triples in by_subject.values()
        for triple in triples
    )


def _get_source(
    name: str, events: Sequence[str], by_subject: dict[str, list[_Triple]]
) -> str:
    for event in events:
        for triple in by_subject.get(event, ()):
            if triple.obj == name and triple.predicate and triple.predicate != "domain":
                return triple.predicate
    return ""


def _out_edges(triples: Iterable[_Triple], predicates: Iterable[str]) -> list[_Triple]:
    wanted = frozenset(predicates)
    return [triple for triple in triples if triple.predicate and triple.predicate in wanted]


def _in_edge(name: str, by_subject: dict[str, list[_Triple]], predicates: Iterable[str]) -> str:
    """Return the predicate of the last subject pointing at name with one of predicates."""
    wanted = frozenset(predicates)
    result = ""
    for triples in by_subject.values():
        for triple in triples:
            if triple.obj == name and triple.predicate in wanted:
                result = triple.predicate
                break
    return result


def _convert_node_type(name: str, ntype: str, by_subject: dict[str, list[_Triple]]) -> str:
    if ntype == "fqdn":
        incoming = _in_edge(name, by_subject, _IN_EDGE_TYPES)
        if incoming:
            return _IN_EDGE_TYPES[incoming]
        if _out_edges(by_subject.get(name, ()), ("ptr_record",)):
            return "ptr"
        return "subdomain"
    if ntype == "ipaddr":
        return "address"
    return ntype


def _viz_edges(
    nodes: Sequence[Node],
    node_index: dict[str, int],
    by_subject: dict[str, list[_Triple]],
) -> list[Edge]:
    edges = []
    for node in nodes:
        for triple in _out_edges(by_subject.get(node.label, ()), _EDGE_PREDICATES):
            target = node_index.get(triple.obj)
            if target is not None:
                edges.append(Edge(from_=node.id, to=target, title=triple.predicate))
    return edges


def viz_data(quads: Iterable[Quad], uuids: Sequence[str]) -> tuple[list[Node], list[Edge]]:
    """Build visualisation nodes and edges from the quads of the given events."""
    by_subject: dict[str, list[_Triple]] = {}
    for quad in quads:
        subject = _text(quad.subject)
        if subject:
            by_subject.setdefault(subject, []).append(
                _Triple(subject, _text(quad.predicate), _text(quad.obj))
            )

    nodes: list[Node] = []
    node_index: dict[str, int] = {}
    for subject, triples in by_subject.items():
        ntype = _get_value(triples, "type")
        if ntype in _SKIPPED_TYPES:
            continue
        if ntype == "fqdn" and _is_tld(subject, by_subject):
            continue

        source = _get_source(subject, uuids, by_subject)
        if not source:
            continue

        new_type = _convert_node_type(subject, ntype, by_subject)
        if not new_type:
            continue

        title = f"{new_type}: {subject}"
        if new_type == "as":
            title += ", Desc: " + _get_value(triples, "description")

        node_index[subject] = len(nodes)
        nodes.append(
            Node(
                id=len(nodes),
                type=new_type,
                label=subject,
                title=title,
                source=source,
                actual_type=ntype,
            )
        )

    return nodes, _viz_edges(nodes, node_index, by_subject)