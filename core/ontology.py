"""
GRAPHGEN ONTOLOGY - The Dictionary of the Engine

If spec.py is the Grammar (how a graph request is phrased),
ontology.py is the Dictionary (the words a request may use).

This module defines:
- Enums: The vocabulary (axis kinds for the core axes, Severity, StructureFamily)
- StructureTrigger: Declarative "axis kind -> generator family" rules
- STRUCTURE_TRIGGERS: The ordered registry that decides which family builds a graph

Key Principle: Dispatch is data, not control flow.
We don't bury the priority order inside a chain of if/else branches - we
list the triggers in priority order and the first one that matches wins.
The order is load-bearing: several axes can co-occur in one spec and the
earlier trigger always takes precedence.
"""
from typing import Dict, Optional, Tuple
from enum import Enum

import msgspec


# =============================================================================
# CORE AXIS VOCABULARY
# =============================================================================

class DirectionalityKind(str, Enum):
    DIRECTED = "directed"
    UNDIRECTED = "undirected"


class WeightingKind(str, Enum):
    UNWEIGHTED = "unweighted"
    WEIGHTED_NUMERIC = "weighted_numeric"


class CyclesKind(str, Enum):
    ACYCLIC = "acyclic"
    CYCLES_ALLOWED = "cycles_allowed"


class ConnectivityKind(str, Enum):
    CONNECTED = "connected"
    UNCONSTRAINED = "unconstrained"


class SchemaKind(str, Enum):
    HOMOGENEOUS = "homogeneous"
    HETEROGENEOUS = "heterogeneous"


class MultiplicityKind(str, Enum):
    SIMPLE = "simple"
    MULTI = "multi"


class SelfLoopsKind(str, Enum):
    ALLOWED = "allowed"
    DISALLOWED = "disallowed"


class DensityTier(str, Enum):
    """Qualitative edge-count targets, mapped to percentages in config."""
    SPARSE = "sparse"
    MODERATE = "moderate"
    DENSE = "dense"
    UNCONSTRAINED = "unconstrained"


class CompletenessKind(str, Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


class Partition(str, Enum):
    """Bipartite side labels stored on TestNode.partition."""
    LEFT = "left"
    RIGHT = "right"


# =============================================================================
# DIAGNOSTIC SEVERITY
# =============================================================================

class Severity(str, Enum):
    """Severity levels for constraint diagnostics."""
    ERROR = "error"      # Definitionally contradictory
    WARNING = "warning"  # Hard to satisfy exactly
    INFO = "info"        # Recorded, not constructed


# =============================================================================
# STRUCTURE FAMILIES
# =============================================================================

class StructureFamily(str, Enum):
    """Edge-generation families selected by the dispatch table."""
    COMPLETE_BIPARTITE = "complete_bipartite"
    BIPARTITE = "bipartite"
    STAR = "star"
    WHEEL = "wheel"
    GRID = "grid"
    TOROIDAL = "toroidal"
    BINARY_TREE = "binary_tree"
    TOURNAMENT = "tournament"
    CUBIC = "cubic"
    K_REGULAR = "k_regular"
    FLOW_NETWORK = "flow_network"
    EULERIAN = "eulerian"
    K_VERTEX_CONNECTED = "k_vertex_connected"
    K_EDGE_CONNECTED = "k_edge_connected"
    TREEWIDTH = "treewidth"
    K_COLORABLE = "k_colorable"
    BIPARTITE_COLORABLE = "bipartite_colorable"
    # Structural graph classes
    SPLIT = "split"
    COGRAPH = "cograph"
    CLAW_FREE = "claw_free"
    CHORDAL = "chordal"
    INTERVAL = "interval"
    PERMUTATION = "permutation"
    COMPARABILITY = "comparability"
    PERFECT = "perfect"
    # Network science models
    SCALE_FREE = "scale_free"
    SMALL_WORLD = "small_world"
    MODULAR = "modular"
    # Symmetry, geometry and traversal classes
    LINE_GRAPH = "line_graph"
    SELF_COMPLEMENTARY = "self_complementary"
    THRESHOLD = "threshold"
    UNIT_DISK = "unit_disk"
    PLANAR = "planar"
    HAMILTONIAN = "hamiltonian"
    TRACEABLE = "traceable"
    STRONGLY_REGULAR = "strongly_regular"
    VERTEX_TRANSITIVE = "vertex_transitive"
    EDGE_TRANSITIVE = "edge_transitive"
    ARC_TRANSITIVE = "arc_transitive"
    # Metric and extremal invariants
    DIAMETER = "diameter"
    RADIUS = "radius"
    GIRTH = "girth"
    CIRCUMFERENCE = "circumference"
    HEREDITARY_CLASS = "hereditary_class"
    INDEPENDENCE_NUMBER = "independence_number"
    VERTEX_COVER = "vertex_cover"
    DOMINATION_NUMBER = "domination_number"
    # Standard structure + attached metadata
    SPECTRUM = "spectrum"
    ALGEBRAIC_CONNECTIVITY = "algebraic_connectivity"
    SPECTRAL_RADIUS = "spectral_radius"
    TOUGHNESS = "toughness"
    INTEGRITY = "integrity"
    CAGE = "cage"
    MOORE = "moore"
    RAMANUJAN = "ramanujan"
    CARTESIAN_PRODUCT = "cartesian_product"
    TENSOR_PRODUCT = "tensor_product"
    STRONG_PRODUCT = "strong_product"
    LEXICOGRAPHIC_PRODUCT = "lexicographic_product"
    MINOR_FREE = "minor_free"
    TOPOLOGICAL_MINOR_FREE = "topological_minor_free"
    # Fallback: connectivity x cycles
    DEFAULT = "default"


# =============================================================================
# STRUCTURE TRIGGERS
# =============================================================================

class StructureTrigger(msgspec.Struct, kw_only=True, frozen=True):
    """
    Defines when a generator family should build the base structure.

    A trigger matches when the spec's `axis` attribute is set and its kind is
    one of `kinds`. Families whose edge count is pinned by construction skip
    the density pass (`density_pass=False`). Metadata families measure the
    finished edge set, so their handler runs the density pass itself before
    measuring (`records_metadata=True`) and the pipeline does not repeat it.
    """
    family: StructureFamily
    axis: str                        # GraphSpec attribute name
    kinds: Tuple[str, ...]           # Axis kinds that select this family
    density_pass: bool = False       # Whether add_density_edges may add edges
    records_metadata: bool = False   # Handler runs the density pass, then measures


def _t(family: StructureFamily, axis: str, *kinds: str, density_pass: bool = False) -> StructureTrigger:
    return StructureTrigger(family=family, axis=axis, kinds=kinds, density_pass=density_pass)


def _m(family: StructureFamily, axis: str) -> StructureTrigger:
    return StructureTrigger(family=family, axis=axis, kinds=(axis,), density_pass=True, records_metadata=True)


F = StructureFamily

# Priority order: first match wins.
STRUCTURE_TRIGGERS: Tuple[StructureTrigger, ...] = (
    _t(F.COMPLETE_BIPARTITE, "complete_bipartite", "complete_bipartite"),
    _t(F.BIPARTITE, "partiteness", "bipartite", density_pass=True),
    _t(F.STAR, "star", "star"),
    _t(F.WHEEL, "wheel", "wheel"),
    _t(F.GRID, "grid", "grid"),
    _t(F.TOROIDAL, "toroidal", "toroidal"),
    _t(F.BINARY_TREE, "binary_tree", "binary_tree", "full_binary", "complete_binary"),
    _t(F.TOURNAMENT, "tournament", "tournament"),
    _t(F.CUBIC, "cubic", "cubic"),
    _t(F.K_REGULAR, "specific_regular", "k_regular"),
    _t(F.FLOW_NETWORK, "flow_network", "flow_network"),
    _t(F.EULERIAN, "eulerian", "eulerian", "semi_eulerian"),
    _t(F.K_VERTEX_CONNECTED, "k_vertex_connected", "k_vertex_connected"),
    _t(F.K_EDGE_CONNECTED, "k_edge_connected", "k_edge_connected"),
    _t(F.TREEWIDTH, "treewidth", "treewidth"),
    _t(F.K_COLORABLE, "k_colorable", "k_colorable"),
    _t(F.BIPARTITE_COLORABLE, "k_colorable", "bipartite_colorable"),
    _t(F.SPLIT, "split", "split"),
    _t(F.COGRAPH, "cograph", "cograph"),
    _t(F.CLAW_FREE, "claw_free", "claw_free"),
    _t(F.CHORDAL, "chordal", "chordal"),
    _t(F.INTERVAL, "interval", "interval"),
    _t(F.PERMUTATION, "permutation", "permutation"),
    _t(F.COMPARABILITY, "comparability", "comparability"),
    _t(F.PERFECT, "perfect", "perfect"),
    _t(F.SCALE_FREE, "scale_free", "scale_free"),
    _t(F.SMALL_WORLD, "small_world", "small_world"),
    _t(F.MODULAR, "community_structure", "modular"),
    _t(F.LINE_GRAPH, "line", "line_graph"),
    _t(F.SELF_COMPLEMENTARY, "self_complementary", "self_complementary"),
    _t(F.THRESHOLD, "threshold", "threshold"),
    _t(F.UNIT_DISK, "unit_disk", "unit_disk"),
    _t(F.PLANAR, "planarity", "planar"),
    _t(F.HAMILTONIAN, "hamiltonian", "hamiltonian"),
    _t(F.TRACEABLE, "traceable", "traceable"),
    _t(F.STRONGLY_REGULAR, "strongly_regular", "strongly_regular"),
    _t(F.VERTEX_TRANSITIVE, "vertex_transitive", "vertex_transitive"),
    _t(F.EDGE_TRANSITIVE, "edge_transitive", "edge_transitive"),
    _t(F.ARC_TRANSITIVE, "arc_transitive", "arc_transitive"),
    _t(F.DIAMETER, "diameter", "diameter"),
    _t(F.RADIUS, "radius", "radius"),
    _t(F.GIRTH, "girth", "girth"),
    _t(F.CIRCUMFERENCE, "circumference", "circumference"),
    _t(F.HEREDITARY_CLASS, "hereditary_class", "hereditary_class"),
    _t(F.INDEPENDENCE_NUMBER, "independence_number", "independence_number"),
    _t(F.VERTEX_COVER, "vertex_cover", "vertex_cover"),
    _t(F.DOMINATION_NUMBER, "domination_number", "domination_number"),
    _m(F.SPECTRUM, "spectrum"),
    _m(F.ALGEBRAIC_CONNECTIVITY, "algebraic_connectivity"),
    _m(F.SPECTRAL_RADIUS, "spectral_radius"),
    _m(F.TOUGHNESS, "toughness"),
    _m(F.INTEGRITY, "integrity"),
    _m(F.CAGE, "cage"),
    _m(F.MOORE, "moore"),
    _m(F.RAMANUJAN, "ramanujan"),
    _m(F.CARTESIAN_PRODUCT, "cartesian_product"),
    _m(F.TENSOR_PRODUCT, "tensor_product"),
    _m(F.STRONG_PRODUCT, "strong_product"),
    _m(F.LEXICOGRAPHIC_PRODUCT, "lexicographic_product"),
    _m(F.MINOR_FREE, "minor_free"),
    _m(F.TOPOLOGICAL_MINOR_FREE, "topological_minor_free"),
)

DEFAULT_TRIGGER = StructureTrigger(family=F.DEFAULT, axis="", kinds=(), density_pass=True)

TRIGGERS_BY_FAMILY: Dict[StructureFamily, StructureTrigger] = {
    trigger.family: trigger for trigger in STRUCTURE_TRIGGERS
}
TRIGGERS_BY_FAMILY[F.DEFAULT] = DEFAULT_TRIGGER


def trigger_matches(trigger: StructureTrigger, spec) -> bool:
    """Check whether a spec's axis selects this trigger."""
    axis_value = getattr(spec, trigger.axis, None)
    return axis_value is not None and axis_value.kind in trigger.kinds


def select_trigger(spec) -> StructureTrigger:
    """Return the first matching trigger, or the connectivity x cycles default."""
    for trigger in STRUCTURE_TRIGGERS:
        if trigger_matches(trigger, spec):
            return trigger
    return DEFAULT_TRIGGER


def select_structure_family(spec) -> StructureFamily:
    """
    Select the generator family that builds the spec's base structure.

    Args:
        spec: GraphSpec to inspect

    Returns:
        StructureFamily of the first matching trigger (DEFAULT if none match)
    """
    return select_trigger(spec).family


def family_uses_density_pass(family: StructureFamily) -> bool:
    """Families with a pinned edge count are left alone by the density pass."""
    return TRIGGERS_BY_FAMILY[family].density_pass


def family_records_metadata(family: StructureFamily) -> bool:
    """Families whose handler runs the density pass before measuring the graph."""
    return TRIGGERS_BY_FAMILY[family].records_metadata


def find_trigger(family: StructureFamily) -> Optional[StructureTrigger]:
    return TRIGGERS_BY_FAMILY.get(family)
