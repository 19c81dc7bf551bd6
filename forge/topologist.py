"""
GRAPHGEN.FORGE.TOPOLOGIST - Fixed-Shape Skeleton Generators

Builds the graph families whose shape is fully determined by the node count
(and a few parameters): trees, stars, wheels, grids, tori, binary trees,
tournaments and k-regular circulants.

Architecture:
- Each generator takes (nodes, edges, spec, rng) and appends to the EdgeSet
- Edges of rooted shapes point parent -> child, so directed variants stay acyclic
- Edge counts are exact; the density pass leaves these families alone

Topology Types:
1. Tree: Random recursive tree (node i picks a parent among 0..i-1)
2. Star / Wheel: Hub N0 plus leaves / plus a rim cycle
3. Grid / Toroidal: rows x cols lattice, optionally wrapped
4. Binary tree: Arbitrary, full (0 or 2 children) or complete (heap layout)
5. Tournament: One coin-flip orientation per vertex pair
6. k-regular: Circulant C_n(1..k/2 [, n/2]) with a random relabelling

Example Usage:
    edges = EdgeSet(directed=False)
    generate_grid_edges(nodes, edges, spec, rng)   # spec.grid = Grid(rows=3, cols=4)
    len(edges)  # 17
"""
import logging
from typing import List

from core.schemas import GenerationError, TestNode
from core.spec import GraphSpec
from forge.edges import EdgeSet
from forge.rng import SeededRandom

logger = logging.getLogger(__name__)


def _ids(nodes: List[TestNode]) -> List[str]:
    return [node.id for node in nodes]


# =============================================================================
# TREES
# =============================================================================

def generate_tree_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Random recursive tree: exactly n-1 edges, rooted at N0."""
    ids = _ids(nodes)
    for i in range(1, len(ids)):
        parent = rng.integer(0, i - 1)
        edges.add(ids[parent], ids[i])


def generate_star_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Center N0 joined to every other node."""
    ids = _ids(nodes)
    for leaf in ids[1:]:
        edges.add(ids[0], leaf)


def generate_binary_tree_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Binary tree in one of three flavours.

    - complete_binary: heap layout, parent of i is (i-1)//2
    - full_binary: repeatedly split a random leaf into two children (n must be odd)
    - binary_tree: each node hangs off a random earlier node with a free slot

    Raises:
        GenerationError: full_binary with an even node count
    """
    ids = _ids(nodes)
    n = len(ids)
    kind = spec.binary_tree.kind

    if kind == "complete_binary":
        for i in range(1, n):
            edges.add(ids[(i - 1) // 2], ids[i])
        return

    if kind == "full_binary":
        if n % 2 == 0:
            raise GenerationError(f"Full binary tree requires an odd number of nodes, got {n}")
        leaves = [0] if n else []
        next_index = 1
        while next_index < n:
            leaf = leaves.pop(rng.integer(0, len(leaves) - 1))
            for child in (next_index, next_index + 1):
                edges.add(ids[leaf], ids[child])
                leaves.append(child)
            next_index += 2
        return

    children = [0] * n
    for i in range(1, n):
        open_slots = [p for p in range(i) if children[p] < 2]
        parent = rng.choice(open_slots)
        children[parent] += 1
        edges.add(ids[parent], ids[i])


# =============================================================================
# HUB AND LATTICE SHAPES
# =============================================================================

def generate_wheel_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Hub N0 plus a rim cycle over N1..N{n-1}: 2(n-1) edges for n >= 4."""
    ids = _ids(nodes)
    rim = ids[1:]
    for node_id in rim:
        edges.add(ids[0], node_id)
    for i in range(len(rim) - 1):
        edges.add(rim[i], rim[i + 1])
    if len(rim) >= 3:
        edges.add(rim[-1], rim[0])


def _lattice(nodes: List[TestNode], edges: EdgeSet, rows: int, cols: int, wrap: bool) -> None:
    ids = _ids(nodes)
    cells = min(rows * cols, len(ids))

    def cell(r: int, c: int) -> int:
        return r * cols + c

    for r in range(rows):
        for c in range(cols):
            here = cell(r, c)
            if here >= cells:
                continue
            right = cell(r, c + 1) if c + 1 < cols else (cell(r, 0) if wrap and cols >= 3 else None)
            down = cell(r + 1, c) if r + 1 < rows else (cell(0, c) if wrap and rows >= 3 else None)
            for other in (right, down):
                if other is not None and other < cells:
                    edges.add(ids[here], ids[other])

    if len(ids) > cells:
        logger.debug("Lattice %dx%d leaves %d nodes isolated", rows, cols, len(ids) - cells)


def generate_grid_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """rows x cols lattice: rows(cols-1) + cols(rows-1) edges."""
    _lattice(nodes, edges, spec.grid.rows, spec.grid.cols, wrap=False)


def generate_toroidal_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Lattice with wraparound in each dimension of length >= 3: 2*rows*cols edges."""
    _lattice(nodes, edges, spec.toroidal.rows, spec.toroidal.cols, wrap=True)


# =============================================================================
# ORIENTED AND REGULAR SHAPES
# =============================================================================

def generate_tournament_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Exactly one arc per unordered pair, oriented by a fair coin."""
    ids = _ids(nodes)
    for i in range(len(ids)):
        for j in range(i + 1, len(ids)):
            if rng.chance(0.5):
                edges.add(ids[i], ids[j])
            else:
                edges.add(ids[j], ids[i])


def generate_regular_edges(
    nodes: List[TestNode],
    edges: EdgeSet,
    spec: GraphSpec,
    rng: SeededRandom,
    k: int,
) -> None:
    """
    k-regular graph as a randomly relabelled circulant.

    Offsets 1..k//2 give degree 2*(k//2); odd k adds the diameter chord n/2
    (n is even whenever n*k is).

    Raises:
        GenerationError: k >= n or n*k odd
    """
    ids = _ids(nodes)
    n = len(ids)
    if k < 0 or k >= n:
        raise GenerationError(f"k-regular graph requires k < n (got k={k}, n={n})")
    if (n * k) % 2 != 0:
        raise GenerationError(f"k-regular graph requires n*k to be even (got k={k}, n={n})")

    label = rng.shuffle(list(range(n)))
    offsets = list(range(1, k // 2 + 1))
    for i in range(n):
        for offset in offsets:
            edges.add(ids[label[i]], ids[label[(i + offset) % n]])
    if k % 2 == 1:
        for i in range(n // 2):
            edges.add(ids[label[i]], ids[label[i + n // 2]])


def generate_cubic_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    generate_regular_edges(nodes, edges, spec, rng, 3)


def generate_k_regular_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    generate_regular_edges(nodes, edges, spec, rng, spec.specific_regular.k)
