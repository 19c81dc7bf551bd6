"""
GRAPHGEN.FORGE.INVARIANTS - Extremal Invariant Generators

Generators that pin a hard invariant by construction, so the validator can
check the stored certificate instead of searching:

- hereditary class:   greedy edge addition that never creates a forbidden
                      induced subgraph (small n), random sparse graph otherwise
- independence α:     complete graph minus the pairs inside a chosen set S, |S| = α
- vertex cover τ:     same construction with |S| = n - τ (Gallai: τ = n - α)
- domination γ:       γ centres with private pendants, or γ components

Architecture:
    nodes ──► GraphView (empty) ──► candidate edge ──► forbidden pattern search
                                           │ found            │ clean
                                           ▼                  ▼
                                     remove + skip        EdgeSet.add
"""
import itertools
import logging
from typing import List

from core.graph_invariants import GraphView, find_forbidden_subgraph, forbidden_pattern
from core.schemas import GenerationError, TestNode
from core.spec import GraphSpec
from forge.edges import EdgeSet
from forge.rng import SeededRandom

logger = logging.getLogger(__name__)

HEREDITARY_GREEDY_MAX_NODES = 20
HEREDITARY_FALLBACK_DENSITY = 0.3


# =============================================================================
# HEREDITARY CLASSES
# =============================================================================

def generate_hereditary_class_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Add edges over shuffled pairs, keeping each only if no forbidden induced
    subgraph appears through it.

    Raises:
        GenerationError: A forbidden pattern name is not recognised
    """
    forbidden = tuple(spec.hereditary_class.forbidden)
    unknown = [name for name in forbidden if forbidden_pattern(name) is None]
    if unknown:
        raise GenerationError(f"Unknown forbidden subgraph pattern(s): {', '.join(unknown)}")

    for node in nodes:
        node.data["forbiddenSubgraphs"] = list(forbidden)

    n = len(nodes)
    pairs = rng.shuffle(list(itertools.combinations(range(n), 2)))
    if not forbidden:
        for u, v in pairs:
            if rng.chance(HEREDITARY_FALLBACK_DENSITY):
                edges.add(nodes[u].id, nodes[v].id)
        return

    if n > HEREDITARY_GREEDY_MAX_NODES:
        logger.warning(
            "Hereditary class with %d nodes exceeds greedy limit %d; generating unchecked random graph",
            n, HEREDITARY_GREEDY_MAX_NODES,
        )
        for u, v in pairs:
            if rng.chance(HEREDITARY_FALLBACK_DENSITY):
                edges.add(nodes[u].id, nodes[v].id)
        return

    view = GraphView(nodes, [])
    rejected = 0
    for u, v in pairs:
        view.add_edge(u, v)
        if any(find_forbidden_subgraph(view, name, containing=(u, v)) for name in forbidden):
            view.remove_edge(u, v)
            rejected += 1
            continue
        edges.add(nodes[u].id, nodes[v].id)
    logger.debug("Hereditary class: kept %d edges, rejected %d", len(edges), rejected)


# =============================================================================
# INDEPENDENCE AND VERTEX COVER
# =============================================================================

def _complete_minus_independent(nodes: List[TestNode], edges: EdgeSet, size: int, rng: SeededRandom) -> None:
    """Join every pair except those with both ends in a random set of `size` nodes."""
    chosen = set(rng.sample(range(len(nodes)), size))
    for i, node in enumerate(nodes):
        node.data["inIndependentSet"] = i in chosen
    for i, j in itertools.combinations(range(len(nodes)), 2):
        if i in chosen and j in chosen:
            continue
        edges.add(nodes[i].id, nodes[j].id)


def generate_independence_number_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Raises:
        GenerationError: α > n, or α < 1 on a non-empty graph
    """
    a = spec.independence_number.value
    n = len(nodes)
    if a > n:
        raise GenerationError(f"Independence number {a} cannot exceed node count {n}")
    if n > 0 and a < 1:
        raise GenerationError(f"Independence number must be at least 1 for {n} nodes (got {a})")
    for node in nodes:
        node.data["targetIndependenceNumber"] = a
    _complete_minus_independent(nodes, edges, a, rng)


def generate_vertex_cover_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Raises:
        GenerationError: τ > n, τ < 0, or τ = n on a non-empty graph
    """
    t = spec.vertex_cover.value
    n = len(nodes)
    if t > n:
        raise GenerationError(f"Vertex cover number {t} cannot exceed node count {n}")
    if t < 0 or (n > 0 and t == n):
        raise GenerationError(f"Vertex cover number {t} must lie in [0, {n - 1}] for {n} nodes")
    for node in nodes:
        node.data["targetVertexCover"] = t
    _complete_minus_independent(nodes, edges, n - t, rng)


# =============================================================================
# DOMINATION
# =============================================================================

def generate_domination_number_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    n >= 2γ: γ centres on a path, each with a private pendant, remaining nodes
    attached to random centres. Every pendant needs its own dominator.

    n < 2γ: n - γ disjoint edges plus 2γ - n isolated nodes (γ components).

    Raises:
        GenerationError: γ > n, or γ < 1 on a non-empty graph
    """
    g = spec.domination_number.value
    n = len(nodes)
    if g > n:
        raise GenerationError(f"Domination number {g} cannot exceed node count {n}")
    if n > 0 and g < 1:
        raise GenerationError(f"Domination number must be at least 1 for {n} nodes (got {g})")
    for node in nodes:
        node.data["targetDominationNumber"] = g
        node.data["inDominatingSet"] = False

    ids = [node.id for node in nodes]
    if n >= 2 * g:
        centres = list(range(g))
        for c in centres:
            nodes[c].data["inDominatingSet"] = True
            edges.add(ids[c], ids[g + c])
        for a, b in zip(centres, centres[1:]):
            edges.add(ids[a], ids[b])
        for extra in range(2 * g, n):
            edges.add(ids[rng.choice(centres)], ids[extra])
        return

    pairs = n - g
    for p in range(pairs):
        nodes[2 * p].data["inDominatingSet"] = True
        edges.add(ids[2 * p], ids[2 * p + 1])
    for isolated in range(2 * pairs, n):
        nodes[isolated].data["inDominatingSet"] = True
