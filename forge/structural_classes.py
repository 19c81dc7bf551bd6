"""
GRAPHGEN.FORGE.STRUCTURAL_CLASSES - Hereditary Graph Class Generators

Constructions that land inside a named graph class by construction:

- split:         ceil(n/3)-clique + independent set, cross edges at p = 0.5
- cograph:       random cotree (disjoint union / join at p = 0.5)
- claw-free:     square of a cycle C_n^2 in a random order
- chordal:       random k-tree, k in 1..3
- interval:      random intervals, edge iff they overlap
- permutation:   random permutation π, edge iff (i-j)(π(i)-π(j)) < 0
- comparability: random forward edges over a shuffled order, transitively closed
- perfect:       one of chordal / complete bipartite / cograph, recorded

Where a construction has a certificate (interval endpoints, permutation
values, topological order, clique membership) it is written to node.data.
"""
import itertools
import logging
import math
from typing import Dict, List, Sequence, Set

from core.schemas import TestNode
from core.spec import GraphSpec
from forge.connectivity import build_k_tree
from forge.edges import EdgeSet
from forge.rng import SeededRandom

logger = logging.getLogger(__name__)

SPLIT_CROSS_PROBABILITY = 0.5
COGRAPH_JOIN_PROBABILITY = 0.5
COMPARABILITY_EDGE_PROBABILITY = 0.25
INTERVAL_START_SCALE = 100.0
INTERVAL_MAX_LENGTH = 20.0


def _ids(nodes: List[TestNode]) -> List[str]:
    return [node.id for node in nodes]


# =============================================================================
# SPLIT, COGRAPH, CLAW-FREE
# =============================================================================

def generate_split_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    n = len(nodes)
    if n == 0:
        return
    clique_size = max(1, math.ceil(n / 3))
    clique = nodes[:clique_size]
    independent = nodes[clique_size:]

    for node in clique:
        node.data["splitPartition"] = "clique"
    for node in independent:
        node.data["splitPartition"] = "independent"

    for a, b in itertools.combinations(clique, 2):
        edges.add(a.id, b.id)
    for a in clique:
        for b in independent:
            if rng.chance(SPLIT_CROSS_PROBABILITY):
                edges.add(a.id, b.id)


def generate_cograph_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Cographs are closed under disjoint union and join; recurse on a random cotree."""

    def build(members: Sequence[str]) -> None:
        if len(members) <= 1:
            return
        cut = rng.integer(1, len(members) - 1)
        left, right = members[:cut], members[cut:]
        build(left)
        build(right)
        if rng.chance(COGRAPH_JOIN_PROBABILITY):
            for a in left:
                for b in right:
                    edges.add(a, b)

    build(rng.shuffle(_ids(nodes)))


def generate_claw_free_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """C_n^2: every neighbourhood splits into two cliques, so no induced K_{1,3}."""
    order = rng.shuffle(_ids(nodes))
    n = len(order)
    if n < 5:
        for a, b in itertools.combinations(order, 2):
            edges.add(a, b)
        return
    for i in range(n):
        edges.add(order[i], order[(i + 1) % n])
        edges.add(order[i], order[(i + 2) % n])


# =============================================================================
# CHORDAL, INTERVAL, PERMUTATION, COMPARABILITY
# =============================================================================

def generate_chordal_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """k-trees are chordal (every new vertex is simplicial when added)."""
    n = len(nodes)
    if n < 2:
        return
    k = min(rng.integer(1, 3), n - 1)
    build_k_tree(_ids(nodes), k, edges, rng)


def generate_interval_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    for node in nodes:
        start = rng.next() * INTERVAL_START_SCALE
        length = 1 + rng.next() * INTERVAL_MAX_LENGTH
        node.data["interval"] = {"start": start, "end": start + length, "length": length}

    for a, b in itertools.combinations(nodes, 2):
        ia, ib = a.data["interval"], b.data["interval"]
        if ia["start"] <= ib["end"] and ib["start"] <= ia["end"]:
            edges.add(a.id, b.id)


def generate_permutation_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    perm = rng.shuffle(list(range(len(nodes))))
    for node, value in zip(nodes, perm):
        node.data["permutationValue"] = value

    for i, j in itertools.combinations(range(len(nodes)), 2):
        if (i - j) * (perm[i] - perm[j]) < 0:
            edges.add(nodes[i].id, nodes[j].id)


def generate_comparability_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Random DAG over a shuffled order, then its transitive closure. Every edge
    points forward in the stored topologicalOrder.
    """
    order = rng.shuffle(list(range(len(nodes))))
    rank = {v: i for i, v in enumerate(order)}
    for node_index, node in enumerate(nodes):
        node.data["topologicalOrder"] = rank[node_index]

    successors: Dict[int, Set[int]] = {v: set() for v in order}
    for a, b in itertools.combinations(order, 2):
        if rng.chance(COMPARABILITY_EDGE_PROBABILITY):
            successors[a].add(b)

    reach: Dict[int, Set[int]] = {}
    for v in reversed(order):
        closure: Set[int] = set()
        for w in successors[v]:
            closure.add(w)
            closure |= reach[w]
        reach[v] = closure

    for v in order:
        for w in sorted(reach[v], key=rank.get):
            edges.add(nodes[v].id, nodes[w].id)


# =============================================================================
# PERFECT
# =============================================================================

def generate_perfect_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Chordal, bipartite and cographs are all perfect; pick one and record it."""
    choice = rng.next()
    if choice < 0.4:
        perfect_class = "chordal"
        generate_chordal_edges(nodes, edges, spec, rng)
    elif choice < 0.7:
        perfect_class = "bipartite"
        half = len(nodes) // 2
        for node in nodes[:half]:
            node.data["perfectSide"] = 0
        for node in nodes[half:]:
            node.data["perfectSide"] = 1
        for a in nodes[:half]:
            for b in nodes[half:]:
                edges.add(a.id, b.id)
    else:
        perfect_class = "cograph"
        generate_cograph_edges(nodes, edges, spec, rng)

    for node in nodes:
        node.data["perfectClass"] = perfect_class
    logger.debug("Perfect graph built as %s", perfect_class)
