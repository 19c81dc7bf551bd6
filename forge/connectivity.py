"""
GRAPHGEN.FORGE.CONNECTIVITY - Connectivity-Driven Structure Generators

The connectivity x cycles defaults plus the families defined by how a graph
holds together: Eulerian circuits, flow networks, Harary graphs for
k-connectivity, k-trees for bounded treewidth and random proper colourings.

Edges between indexed nodes point from the lower to the higher index unless
a family needs otherwise, so directed acyclic requests stay acyclic.
"""
import itertools
import logging
from typing import List, Sequence

from core.schemas import GenerationError, TestNode
from core.spec import GraphSpec
from forge.edges import EdgeSet
from forge.rng import SeededRandom
from forge.topologist import generate_tree_edges

logger = logging.getLogger(__name__)

FOREST_ATTACH_PROBABILITY = 0.7
COLORED_EDGE_PROBABILITY = 0.5


def _ids(nodes: List[TestNode]) -> List[str]:
    return [node.id for node in nodes]


def _close_cycle(ids: Sequence[str], edges: EdgeSet) -> bool:
    """
    Add one edge that closes a cycle in a tree rooted at ids[0].

    Directed: last -> first is a back edge because every tree edge points away
    from the root. Undirected: the first non-adjacent pair, preferring (last, first).
    """
    if len(ids) < 2:
        return False
    if edges.directed:
        return edges.add(ids[-1], ids[0])
    if len(ids) < 3:
        return False
    if edges.add(ids[0], ids[-1]):
        return True
    for a, b in itertools.combinations(ids, 2):
        if edges.add(a, b):
            return True
    return False


# =============================================================================
# CONNECTIVITY x CYCLES DEFAULTS
# =============================================================================

def generate_connected_cyclic_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Random tree plus one cycle-closing edge."""
    generate_tree_edges(nodes, edges, spec, rng)
    _close_cycle(_ids(nodes), edges)


def generate_forest_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Each node after the first attaches to an earlier node with p = 0.7."""
    ids = _ids(nodes)
    for i in range(1, len(ids)):
        if rng.chance(FOREST_ATTACH_PROBABILITY):
            edges.add(ids[rng.integer(0, i - 1)], ids[i])


def generate_disconnected_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Split the nodes into 2..max(2, n/3) contiguous groups, build a tree in
    each and close one cycle in the largest group.
    """
    ids = _ids(nodes)
    n = len(ids)
    if n < 2:
        return
    groups = min(n, rng.integer(2, max(2, n // 3)))
    size, extra = divmod(n, groups)

    members: List[List[str]] = []
    start = 0
    for g in range(groups):
        end = start + size + (1 if g < extra else 0)
        members.append(ids[start:end])
        start = end

    for group in members:
        for i in range(1, len(group)):
            edges.add(group[rng.integer(0, i - 1)], group[i])

    largest = max(members, key=len)
    _close_cycle(largest, edges)
    logger.debug("Disconnected graph with %d groups (largest %d)", groups, len(largest))


# =============================================================================
# EULERIAN AND FLOW NETWORKS
# =============================================================================

def generate_eulerian_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Eulerian: a Hamiltonian cycle plus edge-disjoint triangles, so every
    degree stays even (in = out when directed).
    Semi-Eulerian: the same, minus one cycle edge, leaving exactly two odd vertices.
    """
    order = rng.shuffle(_ids(nodes))
    n = len(order)
    if n < 3:
        if n == 2 and spec.eulerian.kind == "semi_eulerian":
            edges.add(order[0], order[1])
        return

    cycle = [(order[i], order[(i + 1) % n]) for i in range(n)]
    if spec.eulerian.kind == "semi_eulerian":
        cycle = cycle[:-1]
    for a, b in cycle:
        edges.add(a, b)

    for _ in range(n // 3):
        a, b, c = rng.sample(order, 3)
        if edges.has(a, b) or edges.has(b, c) or edges.has(c, a):
            continue
        if edges.directed and (edges.has(b, a) or edges.has(c, b) or edges.has(a, c)):
            continue
        edges.add(a, b)
        edges.add(b, c)
        edges.add(c, a)


def generate_flow_network_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Layered source -> sink DAG.

    Intermediates are shuffled between source and sink; each one receives an
    arc from an earlier node and sends one to a later node, so every node lies
    on a source-sink path, nothing enters the source and nothing leaves the sink.

    Raises:
        GenerationError: Source or sink missing from the node set
    """
    ids = _ids(nodes)
    source = spec.flow_network.source
    sink = spec.flow_network.sink
    if not source or not sink or source not in ids or sink not in ids or source == sink:
        raise GenerationError(
            f"Flow network requires source and sink to be distinct existing nodes "
            f"(got source={source!r}, sink={sink!r})"
        )

    middle = rng.shuffle([node_id for node_id in ids if node_id not in (source, sink)])
    order = [source] + middle + [sink]
    if not middle:
        edges.add(source, sink)

    for position in range(1, len(order) - 1):
        node_id = order[position]
        edges.add(order[rng.integer(0, position - 1)], node_id)
        edges.add(node_id, order[rng.integer(position + 1, len(order) - 1)])

    for node in nodes:
        if node.id == source:
            node.data["flowRole"] = "source"
        elif node.id == sink:
            node.data["flowRole"] = "sink"
        else:
            node.data["flowRole"] = "intermediate"


# =============================================================================
# k-CONNECTIVITY (HARARY GRAPHS)
# =============================================================================

def add_harary_edges(ids: Sequence[str], edges: EdgeSet, k: int) -> None:
    """
    Harary graph H_{k,n}: the minimum-edge graph with vertex and edge
    connectivity k. k = 1 is a path.
    """
    n = len(ids)
    if k <= 0 or n < 2:
        return
    if k == 1:
        for i in range(n - 1):
            edges.add(ids[i], ids[i + 1])
        return

    for i in range(n):
        for offset in range(1, k // 2 + 1):
            edges.add(ids[i], ids[(i + offset) % n])

    if k % 2 == 1:
        if n % 2 == 0:
            for i in range(n // 2):
                edges.add(ids[i], ids[i + n // 2])
        else:
            half = (n - 1) // 2
            for i in range(half + 1):
                edges.add(ids[i], ids[(i + half) % n])


def generate_k_vertex_connected_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Raises:
        GenerationError: n < k + 1
    """
    k = spec.k_vertex_connected.k
    n = len(nodes)
    if n < k + 1:
        raise GenerationError(f"k-vertex-connected graph requires at least {k + 1} nodes (got k={k}, n={n})")
    add_harary_edges(_ids(nodes), edges, k)


def generate_k_edge_connected_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Raises:
        GenerationError: n < k + 1
    """
    k = spec.k_edge_connected.k
    n = len(nodes)
    if n < k + 1:
        raise GenerationError(f"k-edge-connected graph requires at least {k + 1} nodes (got k={k}, n={n})")
    add_harary_edges(_ids(nodes), edges, k)


# =============================================================================
# TREEWIDTH AND COLORING
# =============================================================================

def build_k_tree(ids: Sequence[str], k: int, edges: EdgeSet, rng: SeededRandom) -> None:
    """
    Random k-tree: start from K_{k+1}, then attach each new vertex to a
    random existing k-clique. Graphs on <= k+1 vertices become complete.
    """
    n = len(ids)
    if k <= 0 or n < 2:
        return
    seed_size = min(n, k + 1)
    for a, b in itertools.combinations(range(seed_size), 2):
        edges.add(ids[a], ids[b])
    if n <= k + 1:
        return

    cliques = [tuple(c) for c in itertools.combinations(range(k + 1), k)]
    for v in range(k + 1, n):
        clique = rng.choice(cliques)
        for u in clique:
            edges.add(ids[u], ids[v])
        for dropped in clique:
            cliques.append(tuple(sorted([u for u in clique if u != dropped] + [v])))


def generate_treewidth_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """k-tree with k = width, so treewidth is exactly min(width, n-1)."""
    width = spec.treewidth.width
    build_k_tree(_ids(nodes), width, edges, rng)
    for node in nodes:
        node.data["kTreeWidth"] = width


def generate_k_colorable_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Draw a random colour per node, then join differently coloured pairs with
    p = 0.5. The colouring is stored as node.data["color"].

    Raises:
        GenerationError: k < 1
    """
    k = spec.k_colorable.k
    if k is None or k < 1:
        raise GenerationError(f"k-colorable graph requires k >= 1 (got k={k})")

    for node in nodes:
        node.data["color"] = rng.integer(0, k - 1)
    for a, b in itertools.combinations(nodes, 2):
        if a.data["color"] != b.data["color"] and rng.chance(COLORED_EDGE_PROBABILITY):
            edges.add(a.id, b.id)
