"""
GRAPHGEN.FORGE.BIPARTITE - Two-Sided Structure Generators

Every edge produced here joins a "left" node to a "right" node, using the
partition labels generate_nodes assigned before any edge existed. Edges are
oriented left -> right, so directed variants are acyclic by construction
(left nodes carry the lower indices).

Variants (connectivity x cycles):
- tree:         spanning tree alternating sides
- connected:    spanning tree plus extra cross edges (even cycles)
- forest:       each node joins the forest with p = 0.7
- disconnected: 2..n/3 groups, each a small bipartite tree with a closing cross edge
- complete:     K_{m,n}, every left node to every right node
"""
import logging
from typing import Dict, List, Tuple

from core.ontology import Partition
from core.schemas import TestNode
from core.spec import GraphSpec
from forge.edges import EdgeSet
from forge.rng import SeededRandom

logger = logging.getLogger(__name__)

FOREST_ATTACH_PROBABILITY = 0.7


def split_partitions(nodes: List[TestNode]) -> Tuple[List[str], List[str]]:
    left = [node.id for node in nodes if node.partition == Partition.LEFT.value]
    right = [node.id for node in nodes if node.partition == Partition.RIGHT.value]
    return left, right


def _cross(edges: EdgeSet, side: Dict[str, str], a: str, b: str) -> bool:
    """Add a cross edge oriented left -> right."""
    if side[a] == Partition.LEFT.value:
        return edges.add(a, b)
    return edges.add(b, a)


def _grow_tree(
    left: List[str],
    right: List[str],
    edges: EdgeSet,
    rng: SeededRandom,
    attach_probability: float = 1.0,
) -> None:
    """Attach nodes one at a time to a random placed node on the other side."""
    side = {node_id: Partition.LEFT.value for node_id in left}
    side.update({node_id: Partition.RIGHT.value for node_id in right})
    if not left or not right:
        return

    placed = {Partition.LEFT.value: [left[0]], Partition.RIGHT.value: [right[0]]}
    edges.add(left[0], right[0])

    pending = rng.shuffle(left[1:] + right[1:])
    for node_id in pending:
        own = side[node_id]
        other = Partition.RIGHT.value if own == Partition.LEFT.value else Partition.LEFT.value
        if attach_probability >= 1.0 or rng.chance(attach_probability):
            _cross(edges, side, node_id, rng.choice(placed[other]))
        placed[own].append(node_id)


def _add_cross_edges(left: List[str], right: List[str], edges: EdgeSet, rng: SeededRandom, count: int) -> int:
    """Add up to `count` new left -> right edges; returns how many were added."""
    capacity = len(left) * len(right) - len(edges)
    added = 0
    attempts = 0
    while added < min(count, capacity) and attempts < count * 10:
        attempts += 1
        if edges.add(rng.choice(left), rng.choice(right)):
            added += 1
    return added


# =============================================================================
# GENERATORS
# =============================================================================

def generate_complete_bipartite_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """K_{m,n}: m*n edges over the labelled partitions; surplus nodes stay isolated."""
    left, right = split_partitions(nodes)
    for a in left:
        for b in right:
            edges.add(a, b)


def generate_bipartite_tree_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    left, right = split_partitions(nodes)
    _grow_tree(left, right, edges, rng)


def generate_bipartite_connected_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Bipartite spanning tree plus max(1, n/4) cross edges, each closing an even cycle."""
    left, right = split_partitions(nodes)
    _grow_tree(left, right, edges, rng)
    if len(left) >= 2 and len(right) >= 2:
        _add_cross_edges(left, right, edges, rng, max(1, len(nodes) // 4))


def generate_bipartite_forest_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    left, right = split_partitions(nodes)
    _grow_tree(left, right, edges, rng, attach_probability=FOREST_ATTACH_PROBABILITY)


def generate_bipartite_disconnected_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Split both sides round-robin into groups; each group gets a bipartite
    tree and, when it has two nodes per side, one cycle-closing cross edge.
    """
    left, right = split_partitions(nodes)
    n = len(nodes)
    if n < 2:
        return
    groups = rng.integer(2, max(2, n // 3))
    logger.debug("Bipartite disconnected graph with %d groups", groups)

    for g in range(groups):
        group_left = left[g::groups]
        group_right = right[g::groups]
        _grow_tree(group_left, group_right, edges, rng)
        if len(group_left) >= 2 and len(group_right) >= 2:
            for a in group_left:
                if any(edges.add(a, b) for b in group_right):
                    break


def generate_bipartite_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Connectivity x cycles dispatch for two-sided structures."""
    connected = spec.connectivity.kind == "connected"
    acyclic = spec.cycles.kind == "acyclic"
    if connected and acyclic:
        generate_bipartite_tree_edges(nodes, edges, spec, rng)
    elif connected:
        generate_bipartite_connected_edges(nodes, edges, spec, rng)
    elif acyclic:
        generate_bipartite_forest_edges(nodes, edges, spec, rng)
    else:
        generate_bipartite_disconnected_edges(nodes, edges, spec, rng)
