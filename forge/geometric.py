"""
GRAPHGEN.FORGE.GEOMETRIC - Geometric and Planar Generators

Unit disk graphs: random points in a square, edge iff distance <= radius.
Planar graphs: outerplanar drawings, a cycle on a circle plus non-crossing
chords obtained by ear clipping.

Both record their embedding in node.data (coordinates / circle position)
so validators can check the graph against it directly.
"""
import math
from typing import List

from core.schemas import TestNode
from core.spec import GraphSpec
from forge.edges import EdgeSet
from forge.rng import SeededRandom

DEFAULT_UNIT_RADIUS = 1.0
CHORD_PROBABILITY = 0.5


def generate_unit_disk_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Points uniform in [0, space]^2 with space defaulting to max(2, sqrt(n)) * radius.
    """
    n = len(nodes)
    radius = spec.unit_disk.unit_radius or DEFAULT_UNIT_RADIUS
    space = spec.unit_disk.space_size or max(2.0, math.sqrt(n)) * radius

    for node in nodes:
        node.data["x"] = rng.uniform(0.0, space)
        node.data["y"] = rng.uniform(0.0, space)
        node.data["unitRadius"] = radius

    for i in range(n):
        for j in range(i + 1, n):
            a, b = nodes[i].data, nodes[j].data
            if math.hypot(a["x"] - b["x"], a["y"] - b["y"]) <= radius:
                edges.add(nodes[i].id, nodes[j].id)


def generate_planar_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Outerplanar graph: boundary cycle in a random circular order, then ear
    clipping adds each ear's chord with p = 0.5. Ear chords never cross.
    """
    order = rng.shuffle([node.id for node in nodes])
    n = len(order)
    position = {node_id: i for i, node_id in enumerate(order)}
    for node in nodes:
        node.data["outerplanarPosition"] = position[node.id]

    for i in range(n - 1):
        edges.add(order[i], order[i + 1])
    if n >= 3:
        edges.add(order[-1], order[0])

    polygon = list(order)
    while len(polygon) > 3:
        ear = rng.integer(0, len(polygon) - 1)
        before = polygon[ear - 1]
        after = polygon[(ear + 1) % len(polygon)]
        if rng.chance(CHORD_PROBABILITY):
            edges.add(before, after)
        polygon.pop(ear)
