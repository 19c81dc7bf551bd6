"""
GRAPHGEN.FORGE.NETWORK_STRUCTURES - Network Science Models

Three classic random-network models, each writing its parameters into
node.data so analytics can compare the realised graph against the request:

- scale-free:  preferential attachment on a complete core, weight ~ degree^exponent
- small-world: Watts-Strogatz ring lattice with random rewiring
- modular:     planted partition, dense inside communities and sparse between

Defaults: exponent 2.1; rewire probability 0.1 with mean degree 4;
3 communities with intra density 0.7 and inter density 0.05.
"""
import logging
from typing import Dict, List, Set, Tuple

from core.schemas import TestNode
from core.spec import GraphSpec
from forge.edges import EdgeSet
from forge.rng import SeededRandom

logger = logging.getLogger(__name__)

DEFAULT_SCALE_FREE_EXPONENT = 2.1
ATTACHMENTS_PER_NODE = 3
DEFAULT_REWIRE_PROBABILITY = 0.1
DEFAULT_MEAN_DEGREE = 4
DEFAULT_COMMUNITIES = 3
DEFAULT_INTRA_DENSITY = 0.7
DEFAULT_INTER_DENSITY = 0.05


# =============================================================================
# SCALE-FREE
# =============================================================================

def _weighted_pick(candidates: List[int], weights: List[float], rng: SeededRandom) -> int:
    total = sum(weights)
    if total <= 0:
        return rng.choice(candidates)
    threshold = rng.next() * total
    running = 0.0
    for candidate, weight in zip(candidates, weights):
        running += weight
        if running > threshold:
            return candidate
    return candidates[-1]


def generate_scale_free_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Preferential attachment.

    A complete core of max(2, n/10) nodes seeds the degree distribution; every
    later node attaches to min(3, i) distinct earlier nodes chosen with
    probability proportional to degree^exponent.
    """
    exponent = spec.scale_free.exponent or DEFAULT_SCALE_FREE_EXPONENT
    n = len(nodes)
    for node in nodes:
        node.data["scaleFreeExponent"] = exponent
    if n < 2:
        return

    core = min(n, max(2, n // 10))
    degree = [0] * n
    for i in range(core):
        for j in range(i + 1, core):
            edges.add(nodes[i].id, nodes[j].id)
            degree[i] += 1
            degree[j] += 1

    for i in range(core, n):
        targets: Set[int] = set()
        wanted = min(ATTACHMENTS_PER_NODE, i)
        while len(targets) < wanted:
            candidates = [j for j in range(i) if j not in targets]
            weights = [max(degree[j], 1) ** exponent for j in candidates]
            targets.add(_weighted_pick(candidates, weights, rng))
        for j in sorted(targets):
            if edges.add(nodes[j].id, nodes[i].id):
                degree[i] += 1
                degree[j] += 1


# =============================================================================
# SMALL-WORLD
# =============================================================================

def generate_small_world_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """
    Watts-Strogatz: ring lattice linking each node to its k = mean_degree/2
    nearest neighbours on each side, then each lattice edge is rewired to a
    random non-neighbour with the rewire probability.
    """
    p = spec.small_world.rewire_probability
    if p is None:
        p = DEFAULT_REWIRE_PROBABILITY
    mean_degree = spec.small_world.mean_degree or DEFAULT_MEAN_DEGREE
    n = len(nodes)
    for node in nodes:
        node.data["smallWorldRewireProb"] = p
        node.data["smallWorldMeanDegree"] = mean_degree
    if n < 2:
        return

    k = max(1, mean_degree // 2)
    lattice: List[Tuple[int, int]] = []
    present: Set[Tuple[int, int]] = set()
    for i in range(n):
        for offset in range(1, k + 1):
            j = (i + offset) % n
            key = (min(i, j), max(i, j))
            if i != j and key not in present:
                present.add(key)
                lattice.append((i, j))

    final: List[Tuple[int, int]] = []
    for i, j in lattice:
        if rng.chance(p):
            options = [
                t for t in range(n)
                if t != i and (min(i, t), max(i, t)) not in present
            ]
            if options:
                t = rng.choice(options)
                present.discard((min(i, j), max(i, j)))
                present.add((min(i, t), max(i, t)))
                final.append((i, t))
                continue
        final.append((i, j))

    for i, j in final:
        a, b = min(i, j), max(i, j)
        edges.add(nodes[a].id, nodes[b].id)


# =============================================================================
# MODULAR
# =============================================================================

def generate_modular_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Planted partition with community = index % c."""
    axis = spec.community_structure
    communities = axis.num_communities or DEFAULT_COMMUNITIES
    intra = axis.intra_community_density
    inter = axis.inter_community_density
    intra = DEFAULT_INTRA_DENSITY if intra is None else intra
    inter = DEFAULT_INTER_DENSITY if inter is None else inter

    membership: Dict[str, int] = {}
    for i, node in enumerate(nodes):
        membership[node.id] = i % communities
        node.data["community"] = i % communities
        node.data["numCommunities"] = communities
        node.data["intraDensity"] = intra
        node.data["interDensity"] = inter

    n = len(nodes)
    for i in range(n):
        for j in range(i + 1, n):
            same = membership[nodes[i].id] == membership[nodes[j].id]
            if rng.chance(intra if same else inter):
                edges.add(nodes[i].id, nodes[j].id)

    logger.debug("Modular graph: %d communities over %d nodes", communities, n)
