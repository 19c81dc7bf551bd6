"""
GRAPHGEN.FORGE.STRUCTURE_HANDLERS - Standard Structure + Property Metadata

Properties that no generator constructs directly (spectra, robustness,
extremal families, products, minors) share one pattern: build the standard
connectivity x cycles structure, grow it to the density tier, then measure
the graph and record the actual value next to the requested target in
node.data.

    handler = create_property_handler(attach_toughness)
    handler(nodes, edges, spec, rng)
        1. generate_standard_edges   (tree / connected-cyclic / forest / disconnected)
        2. add_density_edges         (density tier and closing guarantees)
        3. attach_toughness          (guard spec, measure, write metadata)

The pipeline skips its own density pass for these families, so the edge set
the metadata describes is the one that is returned.

Every attach_* function raises GenerationError when called with a spec that
does not request its property.
"""
import logging
import math
from typing import Callable, List

from core.analytics import (
    adjacency_spectrum,
    algebraic_connectivity,
    finite_or_none,
    integrity_approximation,
    integrity_exact,
    moore_bound,
    second_largest_eigenvalue_magnitude,
    spectral_radius,
    toughness_approximation,
    toughness_exact,
)
from core.graph_invariants import GraphView, girth
from core.schemas import GenerationError, TestNode
from core.spec import GraphSpec, axis_kind, forbids_triangle_minor
from forge.connectivity import (
    generate_connected_cyclic_edges,
    generate_disconnected_edges,
    generate_forest_edges,
)
from forge.edges import EdgeSet
from forge.rng import SeededRandom
from forge.statistician import add_density_edges
from forge.topologist import generate_tree_edges
from infrastructure.config_graph import get_settings

logger = logging.getLogger(__name__)

EdgeGenerator = Callable[[List[TestNode], EdgeSet, GraphSpec, SeededRandom], None]


def generate_standard_edges(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Connectivity x cycles default structure."""
    connected = spec.connectivity.kind == "connected"
    acyclic = spec.cycles.kind == "acyclic" or forbids_triangle_minor(spec)
    if connected and acyclic:
        generate_tree_edges(nodes, edges, spec, rng)
    elif connected:
        generate_connected_cyclic_edges(nodes, edges, spec, rng)
    elif acyclic:
        generate_forest_edges(nodes, edges, spec, rng)
    else:
        generate_disconnected_edges(nodes, edges, spec, rng)


def create_property_handler(attach: EdgeGenerator) -> EdgeGenerator:
    """
    Compose the standard structure, the density pass and a metadata attach
    function, in that order, so the recorded values describe the final edge set.

    A forbidden K3 minor leaves the standard forest as it is: any edge the
    density pass could add would close a cycle.
    """

    def handler(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
        generate_standard_edges(nodes, edges, spec, rng)
        if not forbids_triangle_minor(spec):
            add_density_edges(nodes, edges, spec, rng)
        attach(nodes, edges, spec, rng)

    handler.__name__ = f"handle_{attach.__name__.replace('attach_', '')}"
    return handler


def _require(spec: GraphSpec, axis: str, kind: str, label: str) -> None:
    if axis_kind(spec, axis) != kind:
        raise GenerationError(f"{label} computation requires {label} spec")


def _view(nodes: List[TestNode], edges: EdgeSet) -> GraphView:
    return GraphView(nodes, edges.edges, edges.directed)


def _store(nodes: List[TestNode], **values) -> None:
    for node in nodes:
        node.data.update(values)


# =============================================================================
# SPECTRAL
# =============================================================================

def attach_spectrum(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "spectrum", "spectrum", "Spectrum")
    actual = [finite_or_none(x) for x in adjacency_spectrum(_view(nodes, edges))]
    _store(nodes, actualSpectrum=actual, targetSpectrum=list(spec.spectrum.eigenvalues))


def attach_algebraic_connectivity(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "algebraic_connectivity", "algebraic_connectivity", "Algebraic connectivity")
    actual = finite_or_none(algebraic_connectivity(_view(nodes, edges)))
    _store(
        nodes,
        algebraicConnectivity=actual,
        targetAlgebraicConnectivity=spec.algebraic_connectivity.value,
    )


def attach_spectral_radius(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "spectral_radius", "spectral_radius", "Spectral radius")
    actual = finite_or_none(spectral_radius(_view(nodes, edges)))
    _store(nodes, spectralRadius=actual, targetSpectralRadius=spec.spectral_radius.value)


# =============================================================================
# ROBUSTNESS
# =============================================================================

def attach_toughness(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    """Exact below connectivity_exact_max_nodes, min-degree estimate above."""
    _require(spec, "toughness", "toughness", "Toughness")
    view = _view(nodes, edges)
    if view.n <= get_settings().validation.connectivity_exact_max_nodes:
        actual, method = toughness_exact(view), "exact"
    else:
        actual, method = toughness_approximation(view), "approximation"
    _store(
        nodes,
        toughness=finite_or_none(actual),
        toughnessMethod=method,
        targetToughness=spec.toughness.value,
    )


def attach_integrity(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "integrity", "integrity", "Integrity")
    view = _view(nodes, edges)
    if view.n <= get_settings().validation.connectivity_exact_max_nodes:
        actual, method = integrity_exact(view), "exact"
    else:
        actual, method = integrity_approximation(view), "approximation"
    _store(
        nodes,
        integrity=finite_or_none(actual),
        integrityMethod=method,
        targetIntegrity=spec.integrity.value,
    )


# =============================================================================
# EXTREMAL FAMILIES
# =============================================================================

def attach_cage(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "cage", "cage", "Cage")
    view = _view(nodes, edges)
    _store(
        nodes,
        targetGirth=spec.cage.girth,
        targetDegree=spec.cage.degree,
        actualGirth=girth(view),
        actualMaxDegree=max(view.degrees(), default=0),
    )


def attach_moore(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "moore", "moore", "Moore graph")
    degree, diameter = spec.moore.degree, spec.moore.diameter
    _store(
        nodes,
        targetDiameter=diameter,
        targetDegree=degree,
        mooreBound=moore_bound(degree, diameter),
    )


def attach_ramanujan(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "ramanujan", "ramanujan", "Ramanujan")
    degree = spec.ramanujan.degree
    bound = 2 * math.sqrt(degree - 1) if degree >= 1 else 0.0
    _store(
        nodes,
        targetDegree=degree,
        ramanujanBound=bound,
        secondEigenvalue=finite_or_none(second_largest_eigenvalue_magnitude(_view(nodes, edges))),
    )


# =============================================================================
# PRODUCTS AND MINORS
# =============================================================================

def _attach_product(nodes: List[TestNode], spec: GraphSpec, axis: str, label: str) -> None:
    _require(spec, axis, axis, label)
    value = getattr(spec, axis)
    _store(
        nodes,
        productType=axis,
        leftFactors=value.left_factors,
        rightFactors=value.right_factors,
    )


def attach_cartesian_product(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _attach_product(nodes, spec, "cartesian_product", "Cartesian product")


def attach_tensor_product(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _attach_product(nodes, spec, "tensor_product", "Tensor product")


def attach_strong_product(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _attach_product(nodes, spec, "strong_product", "Strong product")


def attach_lexicographic_product(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _attach_product(nodes, spec, "lexicographic_product", "Lexicographic product")


def attach_minor_free(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "minor_free", "minor_free", "Minor-free")
    _store(nodes, forbiddenMinors=list(spec.minor_free.forbidden_minors))


def attach_topological_minor_free(nodes: List[TestNode], edges: EdgeSet, spec: GraphSpec, rng: SeededRandom) -> None:
    _require(spec, "topological_minor_free", "topological_minor_free", "Topological minor-free")
    _store(nodes, forbiddenTopologicalMinors=list(spec.topological_minor_free.forbidden_minors))


# =============================================================================
# HANDLERS
# =============================================================================

handle_spectrum = create_property_handler(attach_spectrum)
handle_algebraic_connectivity = create_property_handler(attach_algebraic_connectivity)
handle_spectral_radius = create_property_handler(attach_spectral_radius)
handle_toughness = create_property_handler(attach_toughness)
handle_integrity = create_property_handler(attach_integrity)
handle_cage = create_property_handler(attach_cage)
handle_moore = create_property_handler(attach_moore)
handle_ramanujan = create_property_handler(attach_ramanujan)
handle_cartesian_product = create_property_handler(attach_cartesian_product)
handle_tensor_product = create_property_handler(attach_tensor_product)
handle_strong_product = create_property_handler(attach_strong_product)
handle_lexicographic_product = create_property_handler(attach_lexicographic_product)
handle_minor_free = create_property_handler(attach_minor_free)
handle_topological_minor_free = create_property_handler(attach_topological_minor_free)
