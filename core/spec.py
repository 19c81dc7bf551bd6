"""
GRAPHGEN SPEC - The Grammar of Graph Requests

If ontology.py is the Dictionary (the axis kinds we can use),
spec.py is the Grammar (how a request for a graph is composed).

A GraphSpec is an immutable record of orthogonal property axes:
- 9 CORE axes, always present (directionality, weighting, cycles, connectivity,
  schema, edge multiplicity, self-loops, density, completeness)
- ADVANCED axes, optional (partiteness, regularity, spectral invariants,
  structural classes, symmetry, robustness, products, special structures...)

Every axis is a small frozen msgspec.Struct with a `kind` discriminator plus
whatever parameters that kind needs:

    Partiteness(kind="k_partite", k=3)
    ScaleFree(kind="scale_free", exponent=2.5)

Design Principles:
1. PURE VALUES: Specs are frozen; composition returns a new spec
2. VALIDITY IS SEPARATE: Contradictory specs are representable but flagged
   (see is_valid_spec and core.constraints)
3. STRICT DECODING: Patches go through msgspec.convert, so unknown kinds and
   missing parameters fail loudly with SpecError

Usage:
    from core.spec import make_graph_spec, describe_spec

    spec = make_graph_spec(directionality="directed", cycles="acyclic")
    describe_spec(spec)  # "directed, acyclic"
"""
import itertools
from enum import Enum
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple

import msgspec


class GraphGenError(Exception):
    """Base exception for the graph generation engine."""
    pass


class SpecError(GraphGenError, ValueError):
    """Raised when a spec patch is malformed (unknown axis, kind or parameter)."""
    pass


# =============================================================================
# AXIS BASE
# =============================================================================

class Axis(msgspec.Struct, kw_only=True, frozen=True):
    """
    Base for all axes.

    Subclasses narrow `kind` to a Literal and may declare `_requires`, the
    parameters a given kind cannot do without.
    """
    kind: str

    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {}

    def __post_init__(self):
        for param in self._requires.get(self.kind, ()):
            if getattr(self, param) is None:
                raise ValueError(
                    f"{type(self).__name__} kind '{self.kind}' requires parameter '{param}'"
                )


# =============================================================================
# CORE AXES
# =============================================================================

class Directionality(Axis, kw_only=True, frozen=True):
    kind: Literal["directed", "undirected"]


class Weighting(Axis, kw_only=True, frozen=True):
    kind: Literal["unweighted", "weighted_numeric"]


class Cycles(Axis, kw_only=True, frozen=True):
    kind: Literal["acyclic", "cycles_allowed"]


class Connectivity(Axis, kw_only=True, frozen=True):
    kind: Literal["connected", "unconstrained"]


class SchemaHomogeneity(Axis, kw_only=True, frozen=True):
    kind: Literal["homogeneous", "heterogeneous"]


class EdgeMultiplicity(Axis, kw_only=True, frozen=True):
    kind: Literal["simple", "multi"]


class SelfLoops(Axis, kw_only=True, frozen=True):
    kind: Literal["allowed", "disallowed"]


class Density(Axis, kw_only=True, frozen=True):
    kind: Literal["sparse", "moderate", "dense", "unconstrained"]


class Completeness(Axis, kw_only=True, frozen=True):
    kind: Literal["complete", "incomplete"]


# =============================================================================
# DESCRIPTIVE AXES (recorded, not generated)
# =============================================================================

class VertexCardinality(Axis, kw_only=True, frozen=True):
    kind: Literal["finite", "countably_infinite", "uncountably_infinite"]
    n: Optional[int] = None


class VertexIdentity(Axis, kw_only=True, frozen=True):
    kind: Literal["distinguishable", "indistinguishable"]


class VertexOrdering(Axis, kw_only=True, frozen=True):
    kind: Literal["unordered", "total_order", "partial_order"]


class EdgeArity(Axis, kw_only=True, frozen=True):
    kind: Literal["binary", "k_ary"]
    k: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"k_ary": ("k",)}


class Signedness(Axis, kw_only=True, frozen=True):
    kind: Literal["unsigned", "signed", "multi_signed"]


class Uncertainty(Axis, kw_only=True, frozen=True):
    kind: Literal["deterministic", "probabilistic", "fuzzy"]


class VertexData(Axis, kw_only=True, frozen=True):
    kind: Literal["unlabelled", "labelled", "attributed"]


class EdgeData(Axis, kw_only=True, frozen=True):
    kind: Literal["unlabelled", "labelled", "attributed"]


class DegreeConstraint(Axis, kw_only=True, frozen=True):
    kind: Literal["unconstrained", "bounded", "regular", "degree_sequence"]
    max: Optional[int] = None
    degree: Optional[int] = None
    sequence: Optional[Tuple[int, ...]] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "bounded": ("max",),
        "regular": ("degree",),
        "degree_sequence": ("sequence",),
    }


class Partiteness(Axis, kw_only=True, frozen=True):
    kind: Literal["unrestricted", "bipartite", "k_partite"]
    k: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"k_partite": ("k",)}


class Embedding(Axis, kw_only=True, frozen=True):
    kind: Literal["abstract", "planar", "surface_embedded", "geometric_metric_space", "spatial_coordinates"]
    dims: Optional[Literal[2, 3]] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"spatial_coordinates": ("dims",)}


class Rooting(Axis, kw_only=True, frozen=True):
    kind: Literal["unrooted", "rooted", "multi_rooted"]


class Temporal(Axis, kw_only=True, frozen=True):
    kind: Literal["static", "dynamic_structure", "temporal_edges", "temporal_vertices", "time_ordered"]


class Layering(Axis, kw_only=True, frozen=True):
    kind: Literal["single_layer", "multi_layer", "multiplex", "interdependent"]


class EdgeOrdering(Axis, kw_only=True, frozen=True):
    kind: Literal["unordered", "ordered"]


class Ports(Axis, kw_only=True, frozen=True):
    kind: Literal["none", "port_labelled_vertices"]


class Observability(Axis, kw_only=True, frozen=True):
    kind: Literal["fully_specified", "partially_observed", "latent_or_inferred"]


class OperationalSemantics(Axis, kw_only=True, frozen=True):
    kind: Literal["structural_only", "annotated_with_functions", "executable"]


class MeasureSemantics(Axis, kw_only=True, frozen=True):
    kind: Literal["none", "metric", "cost", "utility"]


# =============================================================================
# NETWORK ANALYSIS AXES
# =============================================================================

class ScaleFree(Axis, kw_only=True, frozen=True):
    kind: Literal["scale_free", "not_scale_free", "unconstrained"]
    exponent: Optional[float] = None  # Power-law exponent (default 2.1)


class SmallWorld(Axis, kw_only=True, frozen=True):
    kind: Literal["small_world", "not_small_world", "unconstrained"]
    rewire_probability: Optional[float] = None
    mean_degree: Optional[int] = None


class CommunityStructure(Axis, kw_only=True, frozen=True):
    kind: Literal["modular", "non_modular", "unconstrained"]
    num_communities: Optional[int] = None
    intra_community_density: Optional[float] = None
    inter_community_density: Optional[float] = None


# =============================================================================
# GEOMETRIC, TRAVERSAL AND STRUCTURAL CLASS AXES
# =============================================================================

class UnitDisk(Axis, kw_only=True, frozen=True):
    kind: Literal["unit_disk", "not_unit_disk", "unconstrained"]
    unit_radius: Optional[float] = None
    space_size: Optional[float] = None


class Planarity(Axis, kw_only=True, frozen=True):
    kind: Literal["planar", "non_planar", "unconstrained"]


class Hamiltonian(Axis, kw_only=True, frozen=True):
    kind: Literal["hamiltonian", "non_hamiltonian", "unconstrained"]


class Traceable(Axis, kw_only=True, frozen=True):
    kind: Literal["traceable", "non_traceable", "unconstrained"]


class Perfect(Axis, kw_only=True, frozen=True):
    kind: Literal["perfect", "imperfect", "unconstrained"]


class Split(Axis, kw_only=True, frozen=True):
    kind: Literal["split", "non_split", "unconstrained"]


class Cograph(Axis, kw_only=True, frozen=True):
    kind: Literal["cograph", "non_cograph", "unconstrained"]


class Threshold(Axis, kw_only=True, frozen=True):
    kind: Literal["threshold", "non_threshold", "unconstrained"]


class Line(Axis, kw_only=True, frozen=True):
    kind: Literal["line_graph", "non_line_graph", "unconstrained"]


class ClawFree(Axis, kw_only=True, frozen=True):
    kind: Literal["claw_free", "has_claw", "unconstrained"]


class Comparability(Axis, kw_only=True, frozen=True):
    kind: Literal["comparability", "incomparability", "unconstrained"]


class Interval(Axis, kw_only=True, frozen=True):
    kind: Literal["interval", "not_interval", "unconstrained"]


class Permutation(Axis, kw_only=True, frozen=True):
    kind: Literal["permutation", "not_permutation", "unconstrained"]


class Chordal(Axis, kw_only=True, frozen=True):
    kind: Literal["chordal", "non_chordal", "unconstrained"]


# =============================================================================
# REGULARITY AND SYMMETRY AXES
# =============================================================================

class Cubic(Axis, kw_only=True, frozen=True):
    kind: Literal["cubic", "non_cubic", "unconstrained"]


class SpecificRegular(Axis, kw_only=True, frozen=True):
    kind: Literal["k_regular", "not_k_regular", "unconstrained"]
    k: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"k_regular": ("k",)}


class StronglyRegular(Axis, kw_only=True, frozen=True):
    kind: Literal["strongly_regular", "not_strongly_regular", "unconstrained"]
    k: Optional[int] = None
    lambda_: Optional[int] = msgspec.field(default=None, name="lambda")
    mu: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"strongly_regular": ("k", "lambda_", "mu")}


class SelfComplementary(Axis, kw_only=True, frozen=True):
    kind: Literal["self_complementary", "not_self_complementary", "unconstrained"]


class VertexTransitive(Axis, kw_only=True, frozen=True):
    kind: Literal["vertex_transitive", "not_vertex_transitive", "unconstrained"]


class EdgeTransitive(Axis, kw_only=True, frozen=True):
    kind: Literal["edge_transitive", "not_edge_transitive", "unconstrained"]


class ArcTransitive(Axis, kw_only=True, frozen=True):
    kind: Literal["arc_transitive", "not_arc_transitive", "unconstrained"]


# =============================================================================
# METRIC AND EXTREMAL AXES
# =============================================================================

class Diameter(Axis, kw_only=True, frozen=True):
    kind: Literal["diameter", "unconstrained"]
    value: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"diameter": ("value",)}


class Radius(Axis, kw_only=True, frozen=True):
    kind: Literal["radius", "unconstrained"]
    value: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"radius": ("value",)}


class Girth(Axis, kw_only=True, frozen=True):
    kind: Literal["girth", "unconstrained"]
    girth: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"girth": ("girth",)}


class Circumference(Axis, kw_only=True, frozen=True):
    kind: Literal["circumference", "unconstrained"]
    value: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"circumference": ("value",)}


class HereditaryClass(Axis, kw_only=True, frozen=True):
    kind: Literal["hereditary_class", "unconstrained"]
    forbidden: Tuple[str, ...] = ()


class IndependenceNumber(Axis, kw_only=True, frozen=True):
    kind: Literal["independence_number", "unconstrained"]
    value: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"independence_number": ("value",)}


class VertexCover(Axis, kw_only=True, frozen=True):
    kind: Literal["vertex_cover", "unconstrained"]
    value: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"vertex_cover": ("value",)}


class DominationNumber(Axis, kw_only=True, frozen=True):
    kind: Literal["domination_number", "unconstrained"]
    value: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"domination_number": ("value",)}


# =============================================================================
# SPECTRAL AND ROBUSTNESS AXES
# =============================================================================

class Spectrum(Axis, kw_only=True, frozen=True):
    kind: Literal["spectrum", "unconstrained"]
    eigenvalues: Tuple[float, ...] = ()


class AlgebraicConnectivity(Axis, kw_only=True, frozen=True):
    kind: Literal["algebraic_connectivity", "unconstrained"]
    value: Optional[float] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"algebraic_connectivity": ("value",)}


class SpectralRadius(Axis, kw_only=True, frozen=True):
    kind: Literal["spectral_radius", "unconstrained"]
    value: Optional[float] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"spectral_radius": ("value",)}


class Toughness(Axis, kw_only=True, frozen=True):
    kind: Literal["toughness", "unconstrained"]
    value: Optional[float] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"toughness": ("value",)}


class Integrity(Axis, kw_only=True, frozen=True):
    kind: Literal["integrity", "unconstrained"]
    value: Optional[float] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"integrity": ("value",)}


class Cage(Axis, kw_only=True, frozen=True):
    kind: Literal["cage", "not_cage", "unconstrained"]
    girth: Optional[int] = None
    degree: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"cage": ("girth", "degree")}


class MooreGraph(Axis, kw_only=True, frozen=True):
    kind: Literal["moore", "not_moore", "unconstrained"]
    diameter: Optional[int] = None
    degree: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"moore": ("diameter", "degree")}


class Ramanujan(Axis, kw_only=True, frozen=True):
    kind: Literal["ramanujan", "not_ramanujan", "unconstrained"]
    degree: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"ramanujan": ("degree",)}


# =============================================================================
# PRODUCT AND MINOR AXES
# =============================================================================

class _ProductAxis(Axis, kw_only=True, frozen=True):
    left_factors: Optional[int] = None
    right_factors: Optional[int] = None


class CartesianProduct(_ProductAxis, kw_only=True, frozen=True):
    kind: Literal["cartesian_product", "not_cartesian_product", "unconstrained"]
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"cartesian_product": ("left_factors", "right_factors")}


class TensorProduct(_ProductAxis, kw_only=True, frozen=True):
    kind: Literal["tensor_product", "not_tensor_product", "unconstrained"]
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"tensor_product": ("left_factors", "right_factors")}


class StrongProduct(_ProductAxis, kw_only=True, frozen=True):
    kind: Literal["strong_product", "not_strong_product", "unconstrained"]
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"strong_product": ("left_factors", "right_factors")}


class LexicographicProduct(_ProductAxis, kw_only=True, frozen=True):
    kind: Literal["lexicographic_product", "not_lexicographic_product", "unconstrained"]
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"lexicographic_product": ("left_factors", "right_factors")}


class MinorFree(Axis, kw_only=True, frozen=True):
    kind: Literal["minor_free", "unconstrained"]
    forbidden_minors: Tuple[str, ...] = ()


class TopologicalMinorFree(Axis, kw_only=True, frozen=True):
    kind: Literal["topological_minor_free", "unconstrained"]
    forbidden_minors: Tuple[str, ...] = ()


# =============================================================================
# SPECIAL STRUCTURE AXES
# =============================================================================

class CompleteBipartite(Axis, kw_only=True, frozen=True):
    kind: Literal["complete_bipartite", "not_complete_bipartite", "unconstrained"]
    m: Optional[int] = None
    n: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"complete_bipartite": ("m", "n")}


class Eulerian(Axis, kw_only=True, frozen=True):
    kind: Literal["eulerian", "semi_eulerian", "non_eulerian", "unconstrained"]


class KVertexConnected(Axis, kw_only=True, frozen=True):
    kind: Literal["k_vertex_connected", "unconstrained"]
    k: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"k_vertex_connected": ("k",)}


class KEdgeConnected(Axis, kw_only=True, frozen=True):
    kind: Literal["k_edge_connected", "unconstrained"]
    k: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"k_edge_connected": ("k",)}


class Wheel(Axis, kw_only=True, frozen=True):
    kind: Literal["wheel", "not_wheel", "unconstrained"]


class Grid(Axis, kw_only=True, frozen=True):
    kind: Literal["grid", "not_grid", "unconstrained"]
    rows: Optional[int] = None
    cols: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"grid": ("rows", "cols")}


class Toroidal(Axis, kw_only=True, frozen=True):
    kind: Literal["toroidal", "not_toroidal", "unconstrained"]
    rows: Optional[int] = None
    cols: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"toroidal": ("rows", "cols")}


class Star(Axis, kw_only=True, frozen=True):
    kind: Literal["star", "not_star", "unconstrained"]


class PerfectMatching(Axis, kw_only=True, frozen=True):
    kind: Literal["perfect_matching", "near_perfect", "no_perfect_matching", "unconstrained"]


class KColorable(Axis, kw_only=True, frozen=True):
    kind: Literal["k_colorable", "bipartite_colorable", "unconstrained"]
    k: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"k_colorable": ("k",)}


class ChromaticNumber(Axis, kw_only=True, frozen=True):
    kind: Literal["chromatic_number", "unconstrained"]
    chi: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"chromatic_number": ("chi",)}


class Treewidth(Axis, kw_only=True, frozen=True):
    kind: Literal["treewidth", "unconstrained"]
    width: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"treewidth": ("width",)}


class Branchwidth(Axis, kw_only=True, frozen=True):
    kind: Literal["branchwidth", "unconstrained"]
    width: Optional[int] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"branchwidth": ("width",)}


class FlowNetwork(Axis, kw_only=True, frozen=True):
    kind: Literal["flow_network", "not_flow_network", "unconstrained"]
    source: Optional[str] = None
    sink: Optional[str] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"flow_network": ("source", "sink")}


class BinaryTree(Axis, kw_only=True, frozen=True):
    kind: Literal["binary_tree", "full_binary", "complete_binary", "not_binary_tree", "unconstrained"]


class SpanningTree(Axis, kw_only=True, frozen=True):
    kind: Literal["spanning_tree", "not_spanning_tree", "unconstrained"]
    of: Optional[str] = None
    _requires: ClassVar[Dict[str, Tuple[str, ...]]] = {"spanning_tree": ("of",)}


class Tournament(Axis, kw_only=True, frozen=True):
    kind: Literal["tournament", "not_tournament", "unconstrained"]


# =============================================================================
# GRAPH SPEC
# =============================================================================

def _default(axis_type, kind: str):
    return msgspec.field(default_factory=lambda: axis_type(kind=kind))


class GraphSpec(msgspec.Struct, kw_only=True, frozen=True):
    """
    Immutable record of the properties a generated graph must have.

    Core axes always carry a value (see DEFAULT_SPEC for the defaults).
    Advanced axes are None unless requested.
    """
    # Core axes
    directionality: Directionality = _default(Directionality, "undirected")
    weighting: Weighting = _default(Weighting, "unweighted")
    cycles: Cycles = _default(Cycles, "cycles_allowed")
    connectivity: Connectivity = _default(Connectivity, "unconstrained")
    schema: SchemaHomogeneity = _default(SchemaHomogeneity, "homogeneous")
    edge_multiplicity: EdgeMultiplicity = _default(EdgeMultiplicity, "simple")
    self_loops: SelfLoops = _default(SelfLoops, "disallowed")
    density: Density = _default(Density, "unconstrained")
    completeness: Completeness = _default(Completeness, "incomplete")

    # Descriptive axes
    vertex_cardinality: Optional[VertexCardinality] = None
    vertex_identity: Optional[VertexIdentity] = None
    vertex_ordering: Optional[VertexOrdering] = None
    edge_arity: Optional[EdgeArity] = None
    signedness: Optional[Signedness] = None
    uncertainty: Optional[Uncertainty] = None
    vertex_data: Optional[VertexData] = None
    edge_data: Optional[EdgeData] = None
    degree_constraint: Optional[DegreeConstraint] = None
    partiteness: Optional[Partiteness] = None
    embedding: Optional[Embedding] = None
    rooting: Optional[Rooting] = None
    temporal: Optional[Temporal] = None
    layering: Optional[Layering] = None
    edge_ordering: Optional[EdgeOrdering] = None
    ports: Optional[Ports] = None
    observability: Optional[Observability] = None
    operational_semantics: Optional[OperationalSemantics] = None
    measure_semantics: Optional[MeasureSemantics] = None

    # Network analysis
    scale_free: Optional[ScaleFree] = None
    small_world: Optional[SmallWorld] = None
    community_structure: Optional[CommunityStructure] = None

    # Geometric, traversal and structural classes
    unit_disk: Optional[UnitDisk] = None
    planarity: Optional[Planarity] = None
    hamiltonian: Optional[Hamiltonian] = None
    traceable: Optional[Traceable] = None
    perfect: Optional[Perfect] = None
    split: Optional[Split] = None
    cograph: Optional[Cograph] = None
    threshold: Optional[Threshold] = None
    line: Optional[Line] = None
    claw_free: Optional[ClawFree] = None
    comparability: Optional[Comparability] = None
    interval: Optional[Interval] = None
    permutation: Optional[Permutation] = None
    chordal: Optional[Chordal] = None

    # Regularity and symmetry
    cubic: Optional[Cubic] = None
    specific_regular: Optional[SpecificRegular] = None
    strongly_regular: Optional[StronglyRegular] = None
    self_complementary: Optional[SelfComplementary] = None
    vertex_transitive: Optional[VertexTransitive] = None
    edge_transitive: Optional[EdgeTransitive] = None
    arc_transitive: Optional[ArcTransitive] = None

    # Metric and extremal invariants
    diameter: Optional[Diameter] = None
    radius: Optional[Radius] = None
    girth: Optional[Girth] = None
    circumference: Optional[Circumference] = None
    hereditary_class: Optional[HereditaryClass] = None
    independence_number: Optional[IndependenceNumber] = None
    vertex_cover: Optional[VertexCover] = None
    domination_number: Optional[DominationNumber] = None

    # Spectral and robustness
    spectrum: Optional[Spectrum] = None
    algebraic_connectivity: Optional[AlgebraicConnectivity] = None
    spectral_radius: Optional[SpectralRadius] = None
    toughness: Optional[Toughness] = None
    integrity: Optional[Integrity] = None
    cage: Optional[Cage] = None
    moore: Optional[MooreGraph] = None
    ramanujan: Optional[Ramanujan] = None

    # Products and minors
    cartesian_product: Optional[CartesianProduct] = None
    tensor_product: Optional[TensorProduct] = None
    strong_product: Optional[StrongProduct] = None
    lexicographic_product: Optional[LexicographicProduct] = None
    minor_free: Optional[MinorFree] = None
    topological_minor_free: Optional[TopologicalMinorFree] = None

    # Special structures
    complete_bipartite: Optional[CompleteBipartite] = None
    eulerian: Optional[Eulerian] = None
    k_vertex_connected: Optional[KVertexConnected] = None
    k_edge_connected: Optional[KEdgeConnected] = None
    wheel: Optional[Wheel] = None
    grid: Optional[Grid] = None
    toroidal: Optional[Toroidal] = None
    star: Optional[Star] = None
    perfect_matching: Optional[PerfectMatching] = None
    k_colorable: Optional[KColorable] = None
    chromatic_number: Optional[ChromaticNumber] = None
    treewidth: Optional[Treewidth] = None
    branchwidth: Optional[Branchwidth] = None
    flow_network: Optional[FlowNetwork] = None
    binary_tree: Optional[BinaryTree] = None
    spanning_tree: Optional[SpanningTree] = None
    tournament: Optional[Tournament] = None


CORE_AXES: Tuple[str, ...] = (
    "directionality",
    "weighting",
    "cycles",
    "connectivity",
    "schema",
    "edge_multiplicity",
    "self_loops",
    "density",
    "completeness",
)

DEFAULT_SPEC = GraphSpec()


# =============================================================================
# COMPOSITION
# =============================================================================

def _coerce_axis(value: Any) -> Any:
    """Turn a patch value (struct, kind string, enum or dict) into builtins."""
    if value is None:
        return None
    if isinstance(value, msgspec.Struct):
        return msgspec.to_builtins(value)
    if isinstance(value, Enum):
        return {"kind": value.value}
    if isinstance(value, str):
        return {"kind": value}
    if isinstance(value, dict):
        return value
    raise SpecError(f"Cannot interpret axis value {value!r}")


def patch_spec(base: GraphSpec, **patch: Any) -> GraphSpec:
    """
    Return a new spec with the given axes replaced.

    Args:
        base: Spec to start from (never mutated)
        **patch: Axis name -> axis struct, kind string, or dict of fields.
                 None clears an advanced axis.

    Returns:
        New GraphSpec

    Raises:
        SpecError: On unknown axis names, unknown kinds or missing parameters
    """
    fields = GraphSpec.__struct_fields__
    merged = msgspec.to_builtins(base)
    for axis, value in patch.items():
        if axis not in fields:
            raise SpecError(f"Unknown spec axis: {axis}")
        if value is None and axis in CORE_AXES:
            raise SpecError(f"Core axis '{axis}' cannot be cleared")
        merged[axis] = _coerce_axis(value)

    try:
        return msgspec.convert(merged, GraphSpec)
    except msgspec.ValidationError as e:
        raise SpecError(f"Invalid graph spec: {e}") from e


def make_graph_spec(**patch: Any) -> GraphSpec:
    """
    Merge a partial override onto the documented defaults.

    Defaults: undirected, unweighted, cycles allowed, connectivity
    unconstrained, homogeneous, simple, no self-loops, density
    unconstrained, incomplete.

    Example:
        make_graph_spec(directionality="directed", specific_regular={"kind": "k_regular", "k": 3})
    """
    return patch_spec(DEFAULT_SPEC, **patch)


create_spec = make_graph_spec


def spec_from_json(data: bytes) -> GraphSpec:
    """Decode a JSON object of axis patches into a GraphSpec."""
    try:
        patch = msgspec.json.decode(data)
    except msgspec.DecodeError as e:
        raise SpecError(f"Spec JSON could not be decoded: {e}") from e
    if not isinstance(patch, dict):
        raise SpecError("Spec JSON must be an object of axis patches")
    return make_graph_spec(**patch)


def spec_to_json(spec: GraphSpec) -> bytes:
    return msgspec.json.encode(spec)


# =============================================================================
# PRESETS
# =============================================================================

def simple_undirected_graph() -> GraphSpec:
    return make_graph_spec()


def simple_directed_graph() -> GraphSpec:
    return make_graph_spec(directionality="directed")


def dag() -> GraphSpec:
    return make_graph_spec(directionality="directed", cycles="acyclic")


def tree() -> GraphSpec:
    return make_graph_spec(cycles="acyclic", connectivity="connected")


def weighted_directed_network() -> GraphSpec:
    return make_graph_spec(directionality="directed", weighting="weighted_numeric")


PRESETS = {
    "simple_undirected_graph": simple_undirected_graph,
    "simple_directed_graph": simple_directed_graph,
    "dag": dag,
    "tree": tree,
    "weighted_directed_network": weighted_directed_network,
}


# =============================================================================
# TYPE GUARDS
# =============================================================================

def is_directed(spec: GraphSpec) -> bool:
    return spec.directionality.kind == "directed"


def is_weighted(spec: GraphSpec) -> bool:
    return spec.weighting.kind == "weighted_numeric"


def is_acyclic(spec: GraphSpec) -> bool:
    return spec.cycles.kind == "acyclic"


def is_connected(spec: GraphSpec) -> bool:
    return spec.connectivity.kind == "connected"


def is_heterogeneous(spec: GraphSpec) -> bool:
    return spec.schema.kind == "heterogeneous"


def is_multigraph(spec: GraphSpec) -> bool:
    return spec.edge_multiplicity.kind == "multi"


def allows_self_loops(spec: GraphSpec) -> bool:
    return spec.self_loops.kind == "allowed"


def is_complete(spec: GraphSpec) -> bool:
    return spec.completeness.kind == "complete"


def axis_kind(spec: GraphSpec, axis: str) -> Optional[str]:
    """Kind of an axis, or None when the axis is not set."""
    value = getattr(spec, axis, None)
    return value.kind if value is not None else None


def forbids_triangle_minor(spec: GraphSpec) -> bool:
    """True when K3 is a forbidden minor or topological minor, which pins the graph to a forest."""
    for axis in ("minor_free", "topological_minor_free"):
        if axis_kind(spec, axis) == axis:
            names = {name.strip().upper() for name in getattr(spec, axis).forbidden_minors}
            if names & {"K3", "TRIANGLE"}:
                return True
    return False


# =============================================================================
# VALIDITY AND DESCRIPTION
# =============================================================================

def is_valid_spec(spec: GraphSpec) -> bool:
    """
    Reject core-axis combinations that are contradictory by definition.

    - self-loops + acyclic (a self-loop is a cycle)
    - complete + acyclic (complete graphs with n >= 3 contain cycles)
    - complete + sparse
    - multigraph + complete
    - tree (acyclic + connected) with dense or complete target
    - forest (acyclic + unconstrained) with moderate, dense or complete target
    """
    acyclic = is_acyclic(spec)
    complete = is_complete(spec)
    density = spec.density.kind

    if allows_self_loops(spec) and acyclic:
        return False
    if complete and acyclic:
        return False
    if complete and density == "sparse":
        return False
    if is_multigraph(spec) and complete:
        return False
    if acyclic and is_connected(spec) and (density == "dense" or complete):
        return False
    if acyclic and not is_connected(spec) and (density in ("moderate", "dense") or complete):
        return False
    return True


def describe_spec(spec: GraphSpec) -> str:
    """Human-readable summary of the core axes."""
    parts: List[str] = ["directed" if is_directed(spec) else "undirected"]

    if is_weighted(spec):
        parts.append("weighted")
    if is_acyclic(spec):
        parts.append("acyclic")
    if is_connected(spec):
        parts.append("connected")
    if is_heterogeneous(spec):
        parts.append("heterogeneous")
    if is_multigraph(spec):
        parts.append("multigraph")
    if allows_self_loops(spec):
        parts.append("self-loops")
    if spec.density.kind != "unconstrained":
        parts.append(spec.density.kind)
    if is_complete(spec):
        parts.append("complete")

    return ", ".join(parts) if parts else "default graph"


def generate_core_spec_permutations() -> List[GraphSpec]:
    """
    Cross-product of the 9 core axes (2048 combinations), filtered by is_valid_spec.

    The iteration order is stable so test matrices are reproducible.
    """
    axes = (
        ("directed", "undirected"),
        ("unweighted", "weighted_numeric"),
        ("acyclic", "cycles_allowed"),
        ("connected", "unconstrained"),
        ("homogeneous", "heterogeneous"),
        ("simple", "multi"),
        ("allowed", "disallowed"),
        ("sparse", "moderate", "dense", "unconstrained"),
        ("complete", "incomplete"),
    )

    specs: List[GraphSpec] = []
    for combo in itertools.product(*axes):
        direction, weighting, cycles, connectivity, schema, multiplicity, loops, density, completeness = combo
        spec = GraphSpec(
            directionality=Directionality(kind=direction),
            weighting=Weighting(kind=weighting),
            cycles=Cycles(kind=cycles),
            connectivity=Connectivity(kind=connectivity),
            schema=SchemaHomogeneity(kind=schema),
            edge_multiplicity=EdgeMultiplicity(kind=multiplicity),
            self_loops=SelfLoops(kind=loops),
            density=Density(kind=density),
            completeness=Completeness(kind=completeness),
        )
        if is_valid_spec(spec):
            specs.append(spec)
    return specs
