"""
GRAPHGEN.FORGE - The Statistician
Edge Budget Engine for Density Targets and Edge Annotation

The Topologist lays down a base structure; the Statistician makes the edge
count match the requested density tier and then annotates every edge.

Architecture:
- Layer 1: Edge budget (maximum possible edges, tier percentage, target)
- Layer 2: Density pass (deterministic complete rebuild, or bounded random
           sampling that respects partitions, components and DAG order)
- Layer 3: Closing guarantees (self-loop, back-edge, parallel edge)
- Layer 4: Annotation (integer weights, edge types)

Design Principles:
1. FIXED FAMILIES ARE LEFT ALONE: only the default, bipartite and
   metadata-recording families take part in the density pass
2. BOUNDED: sampling gives up after attempt_multiplier x needed attempts
   (dense_attempt_multiplier for dense targets); best effort never raises
3. DETERMINISTIC: every draw goes through the one SeededRandom

Usage:
    from forge.statistician import add_density_edges, assign_weights

    summary = add_density_edges(nodes, edges, spec, rng)
    assign_weights(edges.edges, (1, 100), rng)
"""
import logging
import math
from typing import List, Optional, Sequence, Tuple

import msgspec

from core.graph_invariants import GraphView, connected_components, has_directed_cycle
from core.ontology import StructureFamily, family_uses_density_pass, select_structure_family
from core.schemas import TestEdge, TestNode
from core.spec import GraphSpec
from forge.bipartite import split_partitions
from forge.edges import EdgeSet
from forge.rng import SeededRandom
from infrastructure.config_graph import GenerationSettings, get_settings
from infrastructure.logger import get_generation_logger

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMAS
# =============================================================================

class DensityPassSummary(msgspec.Struct, kw_only=True, frozen=True):
    """What the density pass did to one edge set."""
    family: str
    edges_before: int
    edges_after: int
    target_edges: Optional[int] = None
    attempts: int = 0
    skipped: bool = False


# =============================================================================
# EDGE BUDGET
# =============================================================================

def max_possible_edges(
    n: int,
    directed: bool,
    loops: bool,
    partitions: Optional[Tuple[Sequence[str], Sequence[str]]] = None,
    components: Optional[List[List[int]]] = None,
) -> int:
    """
    Upper bound on distinct edges for the pass.

    Args:
        n: Vertex count
        directed: Ordered pairs count separately
        loops: Self-loops allowed (one per vertex)
        partitions: (left, right) ids when edges must cross sides
        components: Vertex groups edges must stay inside (more than one)
    """
    loop_count = n if loops else 0
    if partitions is not None:
        left, right = partitions
        cross = len(left) * len(right)
        return 2 * cross if directed else cross
    if components is not None and len(components) > 1:
        total = 0
        for component in components:
            size = len(component)
            total += size * (size - 1) if directed else size * (size - 1) // 2
        return total + loop_count
    if directed:
        return n * (n - 1) + loop_count
    return n * (n - 1) // 2


# =============================================================================
# DENSITY PASS
# =============================================================================

def _duplicate_random_edge(edges: EdgeSet, rng: SeededRandom) -> bool:
    if not len(edges):
        return False
    edge = rng.choice(edges.edges)
    edges.add_raw(edge.source, edge.target)
    return True


def _add_back_edge(nodes: List[TestNode], edges: EdgeSet, rng: SeededRandom) -> bool:
    """Reverse a random edge unless its reverse already exists."""
    view = GraphView(nodes, edges.edges, directed=True)
    if not len(edges) or has_directed_cycle(view):
        return False
    edge = rng.choice(edges.edges)
    if edges.has(edge.target, edge.source):
        return False
    return edges.add(edge.target, edge.source)


def _add_self_loop(nodes: List[TestNode], edges: EdgeSet, rng: SeededRandom) -> bool:
    node_id = rng.choice(nodes).id
    return edges.add(node_id, node_id)


def _rebuild_complete(ids: Sequence[str], edges: EdgeSet, loops: bool, partitions) -> None:
    edges.clear()
    if partitions is not None:
        left, right = partitions
        for a in left:
            for b in right:
                edges.add(a, b)
                if edges.directed:
                    edges.add(b, a)
        return
    for i, a in enumerate(ids):
        for j, b in enumerate(ids):
            if i == j and not loops:
                continue
            if not edges.directed and j < i:
                continue
            edges.add(a, b)


def add_density_edges(
    nodes: List[TestNode],
    edges: EdgeSet,
    spec: GraphSpec,
    rng: SeededRandom,
    settings: Optional[GenerationSettings] = None,
) -> DensityPassSummary:
    """
    Grow the edge set toward the spec's density tier.

    Only the default, bipartite and metadata-recording families take part;
    every other family pins its own edge count and is returned untouched.

    Args:
        nodes: Graph nodes (partition labels are read for bipartite specs)
        edges: Edge set produced by the base structure
        spec: Graph spec
        rng: Shared random source
        settings: Generation settings (cached settings when omitted)

    Returns:
        DensityPassSummary describing the pass
    """
    settings = settings or get_settings()
    gen = settings.generation
    family = select_structure_family(spec)
    edges_before = len(edges)

    if not family_uses_density_pass(family):
        return _finish(family, edges_before, edges, None, 0, skipped=True)

    n = len(nodes)
    ids = [node.id for node in nodes]
    index = {node_id: i for i, node_id in enumerate(ids)}
    directed = spec.directionality.kind == "directed"
    acyclic = spec.cycles.kind == "acyclic"
    complete = spec.completeness.kind == "complete"
    simple = spec.edge_multiplicity.kind == "simple"
    multi = not simple
    bipartite = family == StructureFamily.BIPARTITE
    loops = spec.self_loops.kind == "allowed" and not bipartite
    unconstrained = spec.connectivity.kind == "unconstrained"

    partitions = split_partitions(nodes) if bipartite else None
    components: Optional[List[List[int]]] = None
    if unconstrained and not bipartite:
        components = connected_components(GraphView(nodes, edges.edges, directed))

    max_edges = max_possible_edges(n, directed, loops, partitions, components)

    if not directed and acyclic:
        # Any extra edge inside a tree component closes a cycle
        if multi:
            _duplicate_random_edge(edges, rng)
        return _finish(family, edges_before, edges, None, 0)

    if complete:
        target = max_edges
    else:
        target = math.floor(max_edges * gen.density_percentages.for_tier(spec.density.kind))

    if complete and simple:
        _rebuild_complete(ids, edges, loops, partitions)
        return _finish(family, edges_before, edges, target, 0)

    needs_self_loop = loops and not complete and n > 0
    cycle_wanted = directed and not acyclic and unconstrained
    to_add = target - len(edges)
    attempts = 0

    if to_add > 0:
        dense = spec.density.kind == "dense"
        multiplier = gen.dense_attempt_multiplier if dense else gen.attempt_multiplier
        max_attempts = to_add * multiplier
        added = 0
        left_right = list(partitions[0]) + list(partitions[1]) if partitions else []
        left_set = set(partitions[0]) if partitions else set()

        while added < to_add and attempts < max_attempts:
            attempts += 1
            if (
                needs_self_loop
                and attempts % gen.self_loop_attempt_interval == 0
                and not edges.has_self_loop()
            ):
                if _add_self_loop(nodes, edges, rng):
                    added += 1
                continue

            if partitions is not None:
                if not partitions[0] or not partitions[1]:
                    break
                source = rng.choice(left_right)
                target_id = rng.choice(partitions[1] if source in left_set else partitions[0])
            elif components is not None:
                component = rng.choice(components)
                if len(component) < 2:
                    continue
                source = ids[rng.choice(component)]
                target_id = ids[rng.choice(component)]
            else:
                if n < 1:
                    break
                source = rng.choice(ids)
                target_id = rng.choice(ids)

            if source == target_id and not loops:
                continue
            if simple and edges.has(source, target_id):
                continue
            if directed and acyclic and index[target_id] <= index[source]:
                continue

            edges.add_raw(source, target_id)
            added += 1

        if added < to_add:
            logger.debug("Density pass stopped at %d/%d edges after %d attempts", added, to_add, attempts)

    # Closing guarantees
    if needs_self_loop and not edges.has_self_loop():
        _add_self_loop(nodes, edges, rng)
    if cycle_wanted:
        _add_back_edge(nodes, edges, rng)
    if multi:
        _duplicate_random_edge(edges, rng)

    return _finish(family, edges_before, edges, target, attempts)


def _finish(
    family: StructureFamily,
    edges_before: int,
    edges: EdgeSet,
    target: Optional[int],
    attempts: int,
    skipped: bool = False,
) -> DensityPassSummary:
    get_generation_logger().log_density_pass(
        family.value,
        edges_before,
        len(edges),
        target_edges=target,
        attempts=attempts,
        skipped=skipped,
    )
    return DensityPassSummary(
        family=family.value,
        edges_before=edges_before,
        edges_after=len(edges),
        target_edges=target,
        attempts=attempts,
        skipped=skipped,
    )


# =============================================================================
# ANNOTATION
# =============================================================================

def assign_weights(edges: List[TestEdge], weight_range: Tuple[int, int], rng: SeededRandom) -> None:
    """Integer weight per edge, uniform over the inclusive range."""
    low, high = weight_range
    for edge in edges:
        edge.weight = rng.integer(low, high)


def assign_edge_types(edges: List[TestEdge], edge_types: Sequence[str], rng: SeededRandom) -> None:
    for edge in edges:
        edge.type = rng.choice(edge_types)
