"""
GRAPHGEN.FORGE.SYMMETRY - Symmetry and Degree-Structure Generators

- line graph:          vertices are edges of a complete base graph K_b,
                       adjacent iff the base edges share an endpoint
- self-complementary:  fill to n(n-1)/4 edges, even-parity pairs first
- threshold:           creation sequence of isolated / dominating vertices
- strongly regular:    parameter identity check, then a cycle skeleton
- vertex-transitive:   circulant graph
- edge-transitive:     complete graph
- arc-transitive:      cycle

The strongly-regular construction only realises (n, 2, 0, 1)-style cycles;
other parameter sets pass the identity check and are reported by the
validator as not regular.
"""
import itertools
import logging
import math
from typing import List

from core.schemas import GenerationError, TestNode
from core.spec import GraphSpec
from forge.edges import EdgeSet
from forge.rng import SeededRandom

logger = logging.getLogger(__name__)

DOMINANT_PROBABILITY = 0.5


def _complete(nodes: List[TestNode], edges: EdgeSet) -> None:
    for a, b in itertools.combinations(nodes, 2):
        edges.add(a.id, b.id)


def _cycle(nodes: List[TestNode], edges: EdgeSet) -> None:
    n = len(nodes)
    for i in range(n - 1):
        edges.add(nodes[i].id, nodes[i + 1].id)
    if n >= 3:
        edges.add(nodes[-1].id, nodes[0].id)


# =============================================================================
# LINE, SELF-COMPLEMENTARY, THRESHOLD
# =============================================================================

def generate_line_graph_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Each node stands for a distinct edge of K_b, b = ceil(sqrt(2n)) + 1, so
    the base always has at least n edges to draw from.
    """
    n = len(nodes)
    if n == 0:
        return
    base_size = math.ceil(math.sqrt(2 * n)) + 1
    base_edges = rng.shuffle(list(itertools.combinations(range(base_size), 2)))[:n]
    for node, base_edge in zip(nodes, base_edges):
        node.data["baseEdge"] = list(base_edge)

    for i, j in itertools.combinations(range(n), 2):
        if set(base_edges[i]) & set(base_edges[j]):
            edges.add(nodes[i].id, nodes[j].id)


def generate_self_complementary_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    A self-complementary graph has exactly half of all pairs. Walk the pairs
    with (i + j) even, then odd, adding until floor(n(n-1)/4) edges exist.
    """
    n = len(nodes)
    target = n * (n - 1) // 4
    for node in nodes:
        node.data["selfComplementaryType"] = "deterministic"

    pairs = list(itertools.combinations(range(n), 2))
    ordered = [p for p in pairs if (p[0] + p[1]) % 2 == 0] + [p for p in pairs if (p[0] + p[1]) % 2 == 1]
    for i, j in ordered:
        if len(edges) >= target:
            break
        edges.add(nodes[i].id, nodes[j].id)

    if n % 4 not in (0, 1):
        logger.debug("No self-complementary graph on %d nodes; kept %d edges", n, len(edges))


def generate_threshold_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Each new vertex is dominating (joins every earlier vertex) with p = 0.5, else isolated."""
    for i, node in enumerate(nodes):
        node.data["creationOrder"] = i
        if i > 0 and rng.chance(DOMINANT_PROBABILITY):
            node.data["thresholdType"] = "dominant"
            for earlier in nodes[:i]:
                edges.add(earlier.id, node.id)
        else:
            node.data["thresholdType"] = "isolated"


# =============================================================================
# REGULAR SYMMETRIC FAMILIES
# =============================================================================

def generate_strongly_regular_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Raises:
        GenerationError: k(k - λ - 1) != (n - k - 1)μ
    """
    n = len(nodes)
    axis = spec.strongly_regular
    k, lam, mu = axis.k, axis.lambda_, axis.mu
    if k * (k - lam - 1) != (n - k - 1) * mu:
        raise GenerationError(
            f"Invalid SRG parameters: k(k-λ-1) = (n-k-1)μ required "
            f"(n={n}, k={k}, λ={lam}, μ={mu})"
        )

    for node in nodes:
        node.data["srgParams"] = {"n": n, "k": k, "lambda": lam, "mu": mu}
    _cycle(nodes, edges)
    if k != 2:
        logger.warning("Strongly regular k=%d realised as a 2-regular cycle skeleton", k)


def generate_vertex_transitive_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Circulant C_n(1, n/2 when n even, n/3 when 3 | n and n > 5)."""
    n = len(nodes)
    offsets = [1]
    if n % 2 == 0 and n >= 4:
        offsets.append(n // 2)
    if n > 5 and n % 3 == 0:
        offsets.append(n // 3)

    for node in nodes:
        node.data["vertexTransitiveGroup"] = "cyclic"
        node.data["circulantOffsets"] = list(offsets)
    if n < 2:
        return
    for i in range(n):
        for offset in offsets:
            j = (i + offset) % n
            if i != j:
                edges.add(nodes[i].id, nodes[j].id)


def generate_edge_transitive_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    for node in nodes:
        node.data["edgeTransitive"] = True
    _complete(nodes, edges)


def generate_arc_transitive_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    for node in nodes:
        node.data["arcTransitive"] = True
    _cycle(nodes, edges)
