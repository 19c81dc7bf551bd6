"""
WorldBuilder - Graph Synthesis Pipeline for GraphGen.Forge

Turns a GraphSpec and a GraphGenerationConfig into a concrete TestGraph.

Pipeline:
    1. generate_nodes          ids N0..N{n-1}, bipartite partitions, node types
    2. generate_base_structure first matching family in the dispatch table
    3. add_density_edges       density tier pass (default, bipartite and metadata
                               families; metadata handlers run it before measuring)
    4. annotation              weights (weighted_numeric), edge types (heterogeneous)

Usage:
    from forge import generate_graph, GraphGenerator

    graph = generate_graph(make_graph_spec(cycles="acyclic", connectivity="connected"),
                           GraphGenerationConfig(node_count=10, seed=42))

    generator = GraphGenerator(seed=42)
    graph = generator.generate(spec, 10)

Design Philosophy:
    - DISPATCH IS DATA: the family table below mirrors STRUCTURE_TRIGGERS
    - ONE RNG PER CALL: no random state outlives a generate_graph call
    - DETERMINISTIC: same (spec, config, seed) = same node and edge sequence
"""
import logging
from typing import Callable, Dict, List, Optional, Union

from core.ontology import Partition, StructureFamily, family_records_metadata, select_structure_family
from core.schemas import GraphGenerationConfig, TestGraph, TestNode
from core.spec import GraphSpec, axis_kind, describe_spec
from forge import bipartite, connectivity, geometric, invariants, network_structures
from forge import path_cycle, structural_classes, structure_handlers, symmetry, topologist
from forge.edges import EdgeSet
from forge.rng import SeededRandom
from forge.statistician import add_density_edges, assign_edge_types, assign_weights
from infrastructure.config_graph import get_settings
from infrastructure.logger import get_generation_logger

logger = logging.getLogger(__name__)

EdgeGenerator = Callable[[List[TestNode], EdgeSet, GraphSpec, SeededRandom], None]

F = StructureFamily

# Family -> generator. Priority lives in core.ontology.STRUCTURE_TRIGGERS.
BASE_STRUCTURE_GENERATORS: Dict[StructureFamily, EdgeGenerator] = {
    F.COMPLETE_BIPARTITE: bipartite.generate_complete_bipartite_edges,
    F.BIPARTITE: bipartite.generate_bipartite_edges,
    F.STAR: topologist.generate_star_edges,
    F.WHEEL: topologist.generate_wheel_edges,
    F.GRID: topologist.generate_grid_edges,
    F.TOROIDAL: topologist.generate_toroidal_edges,
    F.BINARY_TREE: topologist.generate_binary_tree_edges,
    F.TOURNAMENT: topologist.generate_tournament_edges,
    F.CUBIC: topologist.generate_cubic_edges,
    F.K_REGULAR: topologist.generate_k_regular_edges,
    F.FLOW_NETWORK: connectivity.generate_flow_network_edges,
    F.EULERIAN: connectivity.generate_eulerian_edges,
    F.K_VERTEX_CONNECTED: connectivity.generate_k_vertex_connected_edges,
    F.K_EDGE_CONNECTED: connectivity.generate_k_edge_connected_edges,
    F.TREEWIDTH: connectivity.generate_treewidth_edges,
    F.K_COLORABLE: connectivity.generate_k_colorable_edges,
    F.BIPARTITE_COLORABLE: bipartite.generate_bipartite_edges,
    F.SPLIT: structural_classes.generate_split_edges,
    F.COGRAPH: structural_classes.generate_cograph_edges,
    F.CLAW_FREE: structural_classes.generate_claw_free_edges,
    F.CHORDAL: structural_classes.generate_chordal_edges,
    F.INTERVAL: structural_classes.generate_interval_edges,
    F.PERMUTATION: structural_classes.generate_permutation_edges,
    F.COMPARABILITY: structural_classes.generate_comparability_edges,
    F.PERFECT: structural_classes.generate_perfect_edges,
    F.SCALE_FREE: network_structures.generate_scale_free_edges,
    F.SMALL_WORLD: network_structures.generate_small_world_edges,
    F.MODULAR: network_structures.generate_modular_edges,
    F.LINE_GRAPH: symmetry.generate_line_graph_edges,
    F.SELF_COMPLEMENTARY: symmetry.generate_self_complementary_edges,
    F.THRESHOLD: symmetry.generate_threshold_edges,
    F.UNIT_DISK: geometric.generate_unit_disk_edges,
    F.PLANAR: geometric.generate_planar_edges,
    F.HAMILTONIAN: path_cycle.generate_hamiltonian_edges,
    F.TRACEABLE: path_cycle.generate_traceable_edges,
    F.STRONGLY_REGULAR: symmetry.generate_strongly_regular_edges,
    F.VERTEX_TRANSITIVE: symmetry.generate_vertex_transitive_edges,
    F.EDGE_TRANSITIVE: symmetry.generate_edge_transitive_edges,
    F.ARC_TRANSITIVE: symmetry.generate_arc_transitive_edges,
    F.DIAMETER: path_cycle.generate_diameter_edges,
    F.RADIUS: path_cycle.generate_radius_edges,
    F.GIRTH: path_cycle.generate_girth_edges,
    F.CIRCUMFERENCE: path_cycle.generate_circumference_edges,
    F.HEREDITARY_CLASS: invariants.generate_hereditary_class_edges,
    F.INDEPENDENCE_NUMBER: invariants.generate_independence_number_edges,
    F.VERTEX_COVER: invariants.generate_vertex_cover_edges,
    F.DOMINATION_NUMBER: invariants.generate_domination_number_edges,
    F.SPECTRUM: structure_handlers.handle_spectrum,
    F.ALGEBRAIC_CONNECTIVITY: structure_handlers.handle_algebraic_connectivity,
    F.SPECTRAL_RADIUS: structure_handlers.handle_spectral_radius,
    F.TOUGHNESS: structure_handlers.handle_toughness,
    F.INTEGRITY: structure_handlers.handle_integrity,
    F.CAGE: structure_handlers.handle_cage,
    F.MOORE: structure_handlers.handle_moore,
    F.RAMANUJAN: structure_handlers.handle_ramanujan,
    F.CARTESIAN_PRODUCT: structure_handlers.handle_cartesian_product,
    F.TENSOR_PRODUCT: structure_handlers.handle_tensor_product,
    F.STRONG_PRODUCT: structure_handlers.handle_strong_product,
    F.LEXICOGRAPHIC_PRODUCT: structure_handlers.handle_lexicographic_product,
    F.MINOR_FREE: structure_handlers.handle_minor_free,
    F.TOPOLOGICAL_MINOR_FREE: structure_handlers.handle_topological_minor_free,
    F.DEFAULT: structure_handlers.generate_standard_edges,
}


# =============================================================================
# NODES
# =============================================================================

def _partition_sizes(spec: GraphSpec, n: int) -> Optional[tuple]:
    """(left, right) sizes when the spec needs partition labels, else None."""
    if axis_kind(spec, "complete_bipartite") == "complete_bipartite":
        left = min(spec.complete_bipartite.m, n)
        return left, min(spec.complete_bipartite.n, n - left)
    if axis_kind(spec, "partiteness") == "bipartite" or axis_kind(spec, "k_colorable") == "bipartite_colorable":
        left = n // 2
        return left, n - left
    return None


def generate_nodes(spec: GraphSpec, config: GraphGenerationConfig, rng: SeededRandom) -> List[TestNode]:
    """
    Allocate config.node_count nodes with sequential ids.

    Partition labels are assigned before any edge exists. With a
    heterogeneous schema and node_types supplied, each node type is drawn
    by cumulative probability, the last type catching any remainder.
    """
    n = config.node_count
    sizes = _partition_sizes(spec, n)
    typed = spec.schema.kind == "heterogeneous" and config.node_types

    nodes: List[TestNode] = []
    for i in range(n):
        node = TestNode(id=f"N{i}")
        if sizes is not None:
            left, right = sizes
            if i < left:
                node.partition = Partition.LEFT.value
            elif i < left + right:
                node.partition = Partition.RIGHT.value

        if typed:
            draw = rng.next()
            cumulative = 0.0
            for proportion in config.node_types:
                cumulative += proportion.proportion
                if draw < cumulative:
                    node.type = proportion.type
                    break
            if node.type is None:
                node.type = config.node_types[-1].type

        nodes.append(node)
    return nodes


# =============================================================================
# BASE STRUCTURE
# =============================================================================

def generate_base_structure(
    nodes: List[TestNode],
    edges: EdgeSet,
    spec: GraphSpec,
    rng: SeededRandom,
) -> StructureFamily:
    """
    Run the generator of the first family whose trigger matches the spec.

    Returns:
        The family that built the structure

    Raises:
        GenerationError: The family's parameters are infeasible for len(nodes)
    """
    family = select_structure_family(spec)
    BASE_STRUCTURE_GENERATORS[family](nodes, edges, spec, rng)
    return family


# =============================================================================
# PIPELINE
# =============================================================================

def generate_graph(spec: GraphSpec, config: GraphGenerationConfig) -> TestGraph:
    """
    Generate a graph with the properties the spec requests.

    Args:
        spec: Graph spec
        config: Node count, type proportions, weight range and seed

    Returns:
        TestGraph whose node and edge order is fixed by (spec, config)

    Raises:
        ValueError: Invalid config
        GenerationError: Infeasible parameters for the selected family
    """
    config.validate()
    settings = get_settings()
    rng = SeededRandom(config.seed)
    gen_log = get_generation_logger()

    nodes = generate_nodes(spec, config, rng)
    edges = EdgeSet(directed=spec.directionality.kind == "directed")

    family = select_structure_family(spec)
    gen_log.log_structure_selected(family.value, describe_spec(spec), len(nodes), seed=rng.seed)
    generate_base_structure(nodes, edges, spec, rng)

    if not family_records_metadata(family):
        add_density_edges(nodes, edges, spec, rng, settings)

    weighted = spec.weighting.kind == "weighted_numeric"
    typed = spec.schema.kind == "heterogeneous"
    if weighted:
        assign_weights(edges.edges, config.weight_range or settings.generation.default_weight_range, rng)
    if typed:
        assign_edge_types(edges.edges, config.edge_types or settings.generation.default_edge_types, rng)
    if weighted or typed:
        gen_log.log_annotation(len(edges), weighted, typed)

    logger.debug("Generated %s graph: %d nodes, %d edges", family.value, len(nodes), len(edges))
    return TestGraph(nodes=nodes, edges=list(edges.edges), spec=spec)


class GraphGenerator:
    """
    Seeded generator for repeated calls with one seed.

    Example:
        generator = GraphGenerator(seed=42)
        tree = generator.generate(make_graph_spec(cycles="acyclic", connectivity="connected"), 10)
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    def generate(
        self,
        spec: GraphSpec,
        config: Union[GraphGenerationConfig, int],
    ) -> TestGraph:
        """
        Args:
            spec: Graph spec
            config: Full config, or just a node count. The generator's seed
                    fills in a config without one.
        """
        if isinstance(config, int):
            config = GraphGenerationConfig(node_count=config, seed=self.seed)
        elif config.seed is None and self.seed is not None:
            config = GraphGenerationConfig(
                node_count=config.node_count,
                node_types=config.node_types,
                edge_types=config.edge_types,
                weight_range=config.weight_range,
                seed=self.seed,
            )
        return generate_graph(spec, config)
