"""Write the graph as a self-contained HTML page drawn with D3."""

from __future__ import annotations

from collections.abc import Sequence
from string import Template
from typing import TextIO

from .graph import NODE_COLORS, Edge, Node

_PAGE = Template("""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Surface Map Network Mapping</title>
<script src="https://d3js.org/d3.v4.min.js"></script>
<style>
div#tooltip {
  position: absolute; display: inline-block; padding: 10px;
  font-family: 'Open Sans', sans-serif; color: #000; background-color: #fff;
  border: 1px solid #999; border-radius: 2px; pointer-events: none;
  opacity: 0; z-index: 1;
}
</style>
</head>
<body>
<div id="graphDiv"></div>
<div id="tooltip"></div>
<script>
/* global d3 */
const graph = {
  nodes: [
${nodes}  ],
  edges: [
${edges}  ]
};
const maxDegree = ${max_num};
const baseRadius = 5;
const width = window.innerWidth;
const height = window.innerHeight;

const canvas = d3.select('#graphDiv').append('canvas')
  .classed('mainCanvas', true)
  .attr('width', width + 'px')
  .attr('height', height + 'px')
  .node();
const ctx = canvas.getContext('2d');
const tooltip = d3.select('#tooltip');
let transform = d3.zoomIdentity;
let hovered = null;

const share = n => maxDegree ? n.num / maxDegree : 0;
const radius = n => 1.5 * baseRadius + 3 * baseRadius * share(n);
const pairShare = e =>
  (share(graph.nodes[e.source.id]) + share(graph.nodes[e.target.id])) / 2;

function nodeAt(x, y) {
  const px = transform.invertX(x);
  const py = transform.invertY(y);
  for (let i = graph.nodes.length - 1; i >= 0; i--) {
    const n = graph.nodes[i];
    const dx = px - n.x;
    const dy = py - n.y;
    const r = radius(n);
    if (dx * dx + dy * dy < r * r) {
      return n;
    }
  }
  return null;
}

function drawEdge(e) {
  const dx = e.target.x - e.source.x;
  const dy = e.target.y - e.source.y;
  ctx.beginPath();
  ctx.moveTo(e.source.x, e.source.y);
  ctx.lineTo(e.target.x, e.target.y);
  ctx.strokeStyle = '#aaa';
  ctx.stroke();

  ctx.save();
  ctx.textAlign = 'center';
  ctx.translate(e.source.x + dx / 2, e.source.y + dy / 2);
  const angle = Math.atan2(dy, dx);
  ctx.rotate(dx < 0 ? angle - Math.PI : angle);
  ctx.fillStyle = '#aaa';
  ctx.fillText(e.label, 0, 0);
  ctx.restore();
}

function drawNode(n) {
  ctx.beginPath();
  ctx.fillStyle = n.color;
  ctx.moveTo(n.x, n.y);
  ctx.arc(n.x, n.y, radius(n), 0, 2 * Math.PI);
  ctx.strokeStyle = '#333333';
  ctx.stroke();
  ctx.fill();
}

function render() {
  ctx.save();
  ctx.clearRect(0, 0, width, height);
  ctx.translate(transform.x, transform.y);
  ctx.scale(transform.k, transform.k);
  graph.edges.forEach(drawEdge);
  graph.nodes.forEach(drawNode);
  if (hovered) {
    tooltip.style('opacity', 0.8)
      .style('top', transform.applyY(hovered.y) + 5 + 'px')
      .style('left', transform.applyX(hovered.x) + 5 + 'px')
      .html(hovered.label);
  } else {
    tooltip.style('opacity', 0);
  }
  ctx.restore();
}

const simulation = d3.forceSimulation(graph.nodes)
  .force('link', d3.forceLink(graph.edges)
    .id(d => d.id)
    .distance(e => 60 * pairShare(e))
    .strength(e => 1 - pairShare(e)))
  .force('charge', d3.forceManyBody()
    .strength(n => -100 - 300 * share(n))
    .distanceMax(width * 2))
  .force('collide', d3.forceCollide().radius(n => radius(n) + 1))
  .force('center', d3.forceCenter(width / 2, height / 2))
  .on('tick', render);

function dragSubject() {
  const n = nodeAt(d3.event.x, d3.event.y);
  if (n) {
    n.x = transform.applyX(n.x);
    n.y = transform.applyY(n.y);
  }
  return n;
}

function dragStart() {
  if (!d3.event.active) {
    simulation.alphaTarget(0.3).restart();
  }
  d3.event.subject.fx = transform.invertX(d3.event.subject.x);
  d3.event.subject.fy = transform.invertY(d3.event.subject.y);
}

function dragMove() {
  d3.event.subject.fx = transform.invertX(d3.event.x);
  d3.event.subject.fy = transform.invertY(d3.event.y);
}

function dragEnd() {
  if (!d3.event.active) {
    simulation.alphaTarget(0);
  }
  d3.event.subject.fx = null;
  d3.event.subject.fy = null;
}

d3.select(canvas)
  .call(d3.drag()
    .container(canvas)
    .subject(dragSubject)
    .on('start', dragStart)
    .on('drag', dragMove)
    .on('end', dragEnd))
  .call(d3.zoom().scaleExtent([0.1, 8]).on('zoom', () => {
    transform = d3.event.transform;
    render();
  }));

d3.select(canvas).on('mousemove', function () {
  const p = d3.mouse(this);
  hovered = nodeAt(p[0], p[1]);
  render();
});

render();
</script>
</body>
</html>
""")


def _node_label(node: Node) -> str:
    if node.source:
        return f"{node.title}, Source: {node.source}"
    return node.title


def _check_index(index: int, count: int) -> int:
    if not 0 <= index < count:
        raise IndexError(f"edge refers to node {index}, but there are {count} nodes")
    return index


def write_d3_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write an HTML page that draws nodes and edges with a D3 force layout."""
    counts = [0] * len(nodes)
    for edge in edges:
        counts[_check_index(edge.from_, len(nodes))] += 1
        counts[_check_index(edge.to, len(nodes))] += 1

    node_text = "".join(
        f'    {{id: {idx}, num: {counts[idx]}, label: "{_node_label(node)}", '
        f'color: "{NODE_COLORS.get(node.type, "")}"}},\n'
        for idx, node in enumerate(nodes)
    )
    edge_text = "".join(
        f'    {{source: {edge.from_}, target: {edge.to}, label: "{edge.title}"}},\n'
        for edge in edges
    )
    output.write(
        _PAGE.substitute(nodes=node_text, edges=edge_text, max_num=max(counts, default=0))
    )