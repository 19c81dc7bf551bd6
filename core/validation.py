"""
GRAPHGEN VALIDATION - Checking a Generated Graph Against Its Spec

validate_graph_properties() runs every registered validator over one graph
and folds the results into a GraphValidationResult.

Validators are listed in VALIDATORS in the order their results appear:
core axes first, then the descriptive axes, special structures, structural
classes and finally the measured properties. A validator whose axis the spec
leaves unconstrained reports "not applicable" (valid, no message), so every
run returns one result per registered property.

Strategy per property (cheapest first):
1. Trust generator-stored metadata when it is present and consistent
2. Exact combinatorial search below the [validation] node limits
3. Otherwise a necessary condition or an explicit skip, never a silent pass

Usage:
    graph = generate_graph(spec, GraphGenerationConfig(node_count=10, seed=42))
    result = validate_graph_properties(graph)
    if not result.valid:
        print(result.errors)
"""
import logging
from typing import Callable, List, Optional, Tuple

from core.axis_validators import (
    validate_connectivity,
    validate_cycles,
    validate_degree_constraint,
    validate_density_and_completeness,
    validate_directionality,
    validate_edge_multiplicity,
    validate_partiteness,
    validate_schema,
    validate_self_loops,
    validate_vertex_cardinality,
    validate_weighting,
)
from core.constraints import ConstraintAnalysis, analyze_graph_spec_constraints
from core.metric_validators import (
    validate_algebraic_connectivity,
    validate_cage,
    validate_cartesian_product,
    validate_circumference,
    validate_community_structure,
    validate_diameter,
    validate_domination_number,
    validate_girth,
    validate_hereditary_class,
    validate_independence_number,
    validate_integrity,
    validate_lexicographic_product,
    validate_minor_free,
    validate_moore,
    validate_radius,
    validate_ramanujan,
    validate_scale_free,
    validate_small_world,
    validate_spectral_radius,
    validate_spectrum,
    validate_strong_product,
    validate_tensor_product,
    validate_topological_minor_free,
    validate_toughness,
    validate_vertex_cover,
)
from core.schemas import GraphValidationResult, PropertyValidationResult, TestGraph
from core.spec import describe_spec
from core.structural_validators import (
    validate_arc_transitive,
    validate_binary_tree,
    validate_branchwidth,
    validate_chordal,
    validate_chromatic_number,
    validate_claw_free,
    validate_cograph,
    validate_comparability,
    validate_complete_bipartite,
    validate_cubic,
    validate_edge_transitive,
    validate_eulerian,
    validate_flow_network,
    validate_grid,
    validate_hamiltonian,
    validate_interval,
    validate_k_colorable,
    validate_k_edge_connected,
    validate_k_vertex_connected,
    validate_line_graph,
    validate_perfect,
    validate_perfect_matching,
    validate_permutation,
    validate_planarity,
    validate_self_complementary,
    validate_spanning_tree,
    validate_specific_regular,
    validate_split,
    validate_star,
    validate_strongly_regular,
    validate_threshold,
    validate_toroidal,
    validate_tournament,
    validate_traceable,
    validate_treewidth,
    validate_unit_disk,
    validate_vertex_transitive,
    validate_wheel,
)
from core.validator_base import ValidationContext
from infrastructure.config_graph import get_settings
from infrastructure.logger import get_generation_logger

logger = logging.getLogger(__name__)

Validator = Callable[[ValidationContext], PropertyValidationResult]


# =============================================================================
# REGISTRY
# =============================================================================

VALIDATORS: List[Tuple[str, Validator]] = [
    # Core axes
    ("directionality", validate_directionality),
    ("weighting", validate_weighting),
    ("cycles", validate_cycles),
    ("connectivity", validate_connectivity),
    ("schema", validate_schema),
    ("edge_multiplicity", validate_edge_multiplicity),
    ("self_loops", validate_self_loops),
    ("density", validate_density_and_completeness),
    # Descriptive axes
    ("vertex_cardinality", validate_vertex_cardinality),
    ("degree_constraint", validate_degree_constraint),
    ("partiteness", validate_partiteness),
    # Special structures
    ("complete_bipartite", validate_complete_bipartite),
    ("star", validate_star),
    ("wheel", validate_wheel),
    ("grid", validate_grid),
    ("toroidal", validate_toroidal),
    ("binary_tree", validate_binary_tree),
    ("tournament", validate_tournament),
    ("cubic", validate_cubic),
    ("specific_regular", validate_specific_regular),
    ("flow_network", validate_flow_network),
    ("eulerian", validate_eulerian),
    ("k_vertex_connected", validate_k_vertex_connected),
    ("k_edge_connected", validate_k_edge_connected),
    ("treewidth", validate_treewidth),
    ("k_colorable", validate_k_colorable),
    ("chromatic_number", validate_chromatic_number),
    ("perfect_matching", validate_perfect_matching),
    ("branchwidth", validate_branchwidth),
    ("spanning_tree", validate_spanning_tree),
    # Structural classes
    ("split", validate_split),
    ("cograph", validate_cograph),
    ("claw_free", validate_claw_free),
    ("chordal", validate_chordal),
    ("interval", validate_interval),
    ("permutation", validate_permutation),
    ("comparability", validate_comparability),
    ("perfect", validate_perfect),
    # Symmetry, geometry and traversal
    ("line", validate_line_graph),
    ("self_complementary", validate_self_complementary),
    ("threshold", validate_threshold),
    ("unit_disk", validate_unit_disk),
    ("planarity", validate_planarity),
    ("hamiltonian", validate_hamiltonian),
    ("traceable", validate_traceable),
    ("strongly_regular", validate_strongly_regular),
    ("vertex_transitive", validate_vertex_transitive),
    ("edge_transitive", validate_edge_transitive),
    ("arc_transitive", validate_arc_transitive),
    # Network models
    ("scale_free", validate_scale_free),
    ("small_world", validate_small_world),
    ("community_structure", validate_community_structure),
    # Distances and cycles
    ("diameter", validate_diameter),
    ("radius", validate_radius),
    ("girth", validate_girth),
    ("circumference", validate_circumference),
    # Extremal invariants
    ("hereditary_class", validate_hereditary_class),
    ("independence_number", validate_independence_number),
    ("vertex_cover", validate_vertex_cover),
    ("domination_number", validate_domination_number),
    # Recorded axes
    ("spectrum", validate_spectrum),
    ("algebraic_connectivity", validate_algebraic_connectivity),
    ("spectral_radius", validate_spectral_radius),
    ("toughness", validate_toughness),
    ("integrity", validate_integrity),
    ("cage", validate_cage),
    ("moore", validate_moore),
    ("ramanujan", validate_ramanujan),
    ("cartesian_product", validate_cartesian_product),
    ("tensor_product", validate_tensor_product),
    ("strong_product", validate_strong_product),
    ("lexicographic_product", validate_lexicographic_product),
    ("minor_free", validate_minor_free),
    ("topological_minor_free", validate_topological_minor_free),
]


# =============================================================================
# ENTRY POINT
# =============================================================================

def validate_graph_properties(
    graph: TestGraph,
    analysis: Optional[ConstraintAnalysis] = None,
) -> GraphValidationResult:
    """
    Check a graph against every property its spec requests.

    Args:
        graph: Graph to validate (its spec travels with it)
        analysis: Precomputed constraint analysis; computed from graph.spec
            and the vertex count when omitted

    Returns:
        GraphValidationResult; valid is False iff some check failed
    """
    if analysis is None:
        analysis = analyze_graph_spec_constraints(graph.spec, len(graph.nodes))
    ctx = ValidationContext(graph, analysis, get_settings().validation)

    results = []
    for name, validator in VALIDATORS:
        result = validator(ctx)
        logger.debug("Validated %s: valid=%s", name, result.valid)
        results.append(result)

    outcome = GraphValidationResult.from_results(results, analysis)

    gen_log = get_generation_logger()
    for failure in outcome.failed:
        gen_log.log_validation_failure(failure.property, failure.expected, failure.actual, failure.message)
    gen_log.log_validation(
        describe_spec(graph.spec),
        outcome.valid,
        len(results),
        len(outcome.failed),
        len(outcome.skipped),
    )
    return outcome
