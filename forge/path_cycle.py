"""
GRAPHGEN.FORGE.PATH_CYCLE - Traversal and Metric Generators

Constructions that pin a path or cycle quantity:

- hamiltonian:   shuffled spanning cycle plus n/2 random chords
- traceable:     shuffled spanning path plus n/3 extras (never closing the path)
- diameter d:    spine P_{d+1}; every other node joins two consecutive spine nodes
- radius r:      spine P_{2r+1}; same attachment rule, so the centre keeps eccentricity r
- girth g:       one g-cycle with tree pendants, so the shortest cycle is g
- circumference: one c-cycle with pendants and short chords inside the cycle

The requested value is stored in node.data next to the certificate
(cycle / path position) where one exists.
"""
import itertools
import logging
from typing import List

from core.schemas import TestNode
from core.spec import GraphSpec
from forge.edges import EdgeSet
from forge.rng import SeededRandom
from forge.topologist import generate_tree_edges

logger = logging.getLogger(__name__)


def _path(ids: List[str], edges: EdgeSet) -> None:
    for i in range(len(ids) - 1):
        edges.add(ids[i], ids[i + 1])


def _cycle(ids: List[str], edges: EdgeSet) -> None:
    _path(ids, edges)
    if len(ids) >= 3:
        edges.add(ids[-1], ids[0])


def _attach_pendants(ids: List[str], core_size: int, edges: EdgeSet, rng: SeededRandom) -> None:
    """Nodes past the core hang off a random earlier node, adding no cycles."""
    for i in range(core_size, len(ids)):
        edges.add(ids[rng.integer(0, i - 1)], ids[i])


def _attach_to_spine(ids: List[str], spine_length: int, edges: EdgeSet, rng: SeededRandom) -> None:
    """
    Join each non-spine node to two consecutive spine nodes (i, i+1).
    Distances between spine nodes are unchanged and extras sit within the
    spine's eccentricity range.
    """
    for node_id in ids[spine_length:]:
        i = rng.integer(0, spine_length - 2)
        edges.add(ids[i], node_id)
        edges.add(ids[i + 1], node_id)


# =============================================================================
# HAMILTONIAN AND TRACEABLE
# =============================================================================

def generate_hamiltonian_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    order = rng.shuffle(list(range(len(nodes))))
    ids = [nodes[i].id for i in order]
    for position, index in enumerate(order):
        nodes[index].data["hamiltonianPosition"] = position

    _cycle(ids, edges)
    n = len(ids)
    if n < 4:
        return
    for _ in range(n // 2):
        a, b = rng.sample(ids, 2)
        edges.add(a, b)


def generate_traceable_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    order = rng.shuffle(list(range(len(nodes))))
    ids = [nodes[i].id for i in order]
    for position, index in enumerate(order):
        nodes[index].data["traceablePosition"] = position

    _path(ids, edges)
    n = len(ids)
    if n < 4:
        return
    endpoints = {ids[0], ids[-1]}
    for _ in range(n // 3):
        a, b = rng.sample(ids, 2)
        if {a, b} == endpoints:
            continue
        edges.add(a, b)


# =============================================================================
# DIAMETER AND RADIUS
# =============================================================================

def generate_diameter_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    d <= 0: no edges. d == 1: complete. d >= n-1: a path.
    Otherwise a spine P_{d+1} with the rest attached to spine pairs.
    """
    d = spec.diameter.value
    ids = [node.id for node in nodes]
    n = len(ids)
    for node in nodes:
        node.data["targetDiameter"] = d

    if d is None or d <= 0 or n < 2:
        return
    if d == 1:
        for a, b in itertools.combinations(ids, 2):
            edges.add(a, b)
        return
    if d >= n - 1:
        _path(ids, edges)
        return

    _path(ids[: d + 1], edges)
    _attach_to_spine(ids, d + 1, edges, rng)


def generate_radius_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    r <= 0: no edges. r == 1: a star. n >= 2r+1: spine P_{2r+1} with the rest
    attached to spine pairs. Otherwise a path, the largest radius n allows.
    """
    r = spec.radius.value
    ids = [node.id for node in nodes]
    n = len(ids)
    for node in nodes:
        node.data["targetRadius"] = r

    if r is None or r <= 0 or n < 2:
        return
    if r == 1:
        for leaf in ids[1:]:
            edges.add(ids[0], leaf)
        return
    if n >= 2 * r + 1:
        _path(ids[: 2 * r + 1], edges)
        _attach_to_spine(ids, 2 * r + 1, edges, rng)
        return

    logger.debug("Radius %d needs %d nodes, falling back to a path over %d", r, 2 * r + 1, n)
    _path(ids, edges)


# =============================================================================
# GIRTH AND CIRCUMFERENCE
# =============================================================================

def generate_girth_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """A single cycle of length min(g, n) plus pendant trees; g < 3 yields a tree."""
    g = spec.girth.girth
    ids = [node.id for node in nodes]
    n = len(ids)
    for node in nodes:
        node.data["targetGirth"] = g

    if g is None or g < 3 or n < 3:
        generate_tree_edges(nodes, edges, spec, rng)
        return

    core = min(g, n)
    _cycle(ids[:core], edges)
    _attach_pendants(ids, core, edges, rng)


def generate_circumference_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    A cycle of length min(c, n), pendant trees, and chords (a, a+2) inside the
    cycle. Chords never lengthen the longest cycle beyond the cycle itself.
    """
    c = spec.circumference.value
    ids = [node.id for node in nodes]
    n = len(ids)
    for node in nodes:
        node.data["targetCircumference"] = c

    if c is None or c < 3 or n < 3:
        generate_tree_edges(nodes, edges, spec, rng)
        return

    core = min(c, n)
    _cycle(ids[:core], edges)
    _attach_pendants(ids, core, edges, rng)
    if core >= 5:
        for _ in range(core // 3):
            a = rng.integer(0, core - 1)
            edges.add(ids[a], ids[(a + 2) % core])
