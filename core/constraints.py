"""
GRAPHGEN CONSTRAINTS - Feasibility Analysis for Graph Specs

Some axis combinations cannot be realised at all (self-loops + acyclic),
others can be realised but not pinned exactly (an acyclic forest's edge
count is fixed by its component count, not by a density tier).

The analyzer inspects a GraphSpec and reports:
- Diagnostics: (property, reason, severity) triples
    ERROR   - definitionally contradictory
    WARNING - hard to satisfy exactly
    INFO    - value is recorded as metadata or only checked, not constructed
- Adjustments: tolerance switches the validator must honour so that
  structurally forced outcomes are not reported as failures

The analyzer is pure. Checks that need the vertex count only run when
node_count is given.

Usage:
    analysis = analyze_graph_spec_constraints(spec, node_count=20)
    if analysis.has_errors:
        ...
    analysis.adjustments.relax_density_validation
"""
import logging
from typing import List, Optional

import msgspec

from core.ontology import Severity, StructureFamily, select_structure_family, family_uses_density_pass
from core.spec import GraphSpec, axis_kind, forbids_triangle_minor

logger = logging.getLogger(__name__)


class ConstraintDiagnostic(msgspec.Struct, kw_only=True, frozen=True):
    property: str
    reason: str
    severity: Severity


class ValidationAdjustments(msgspec.Struct, kw_only=True, frozen=True):
    """Tolerance switches consumed by the validator."""
    relax_density_validation: bool = False
    relax_cycle_validation: bool = False


class ConstraintAnalysis(msgspec.Struct, kw_only=True, frozen=True):
    impossibilities: List[ConstraintDiagnostic] = msgspec.field(default_factory=list)
    adjustments: ValidationAdjustments = msgspec.field(default_factory=ValidationAdjustments)

    @property
    def errors(self) -> List[ConstraintDiagnostic]:
        return [d for d in self.impossibilities if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ConstraintDiagnostic]:
        return [d for d in self.impossibilities if d.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


# Axes whose values are attached as metadata on top of a standard structure
RECORDED_AXES = (
    "spectrum",
    "algebraic_connectivity",
    "spectral_radius",
    "toughness",
    "integrity",
    "cage",
    "moore",
    "ramanujan",
    "cartesian_product",
    "tensor_product",
    "strong_product",
    "lexicographic_product",
    "minor_free",
    "topological_minor_free",
    "diameter",
    "radius",
    "girth",
    "circumference",
)

# Axes only validated; no generator builds toward them
CHECK_ONLY_AXES = ("spanning_tree", "perfect_matching", "chromatic_number", "branchwidth")

# Families whose generators may leave several components
UNBRIDGED_FAMILIES = frozenset({
    StructureFamily.INTERVAL,
    StructureFamily.UNIT_DISK,
    StructureFamily.COGRAPH,
    StructureFamily.COMPARABILITY,
    StructureFamily.SPLIT,
    StructureFamily.K_COLORABLE,
    StructureFamily.MODULAR,
    StructureFamily.HEREDITARY_CLASS,
    StructureFamily.INDEPENDENCE_NUMBER,
    StructureFamily.DOMINATION_NUMBER,
})


# =============================================================================
# RULES
# =============================================================================

def _contradictions(spec: GraphSpec) -> List[ConstraintDiagnostic]:
    """The combinations is_valid_spec rejects, with a reason each."""
    found = []

    def error(prop: str, reason: str):
        found.append(ConstraintDiagnostic(property=prop, reason=reason, severity=Severity.ERROR))

    acyclic = spec.cycles.kind == "acyclic"
    complete = spec.completeness.kind == "complete"
    density = spec.density.kind
    connected = spec.connectivity.kind == "connected"

    if spec.self_loops.kind == "allowed" and acyclic:
        error("self_loops", "A self-loop is a cycle of length 1, so acyclic graphs cannot have one")
    if complete and acyclic:
        error("completeness", "Complete graphs on 3 or more vertices always contain cycles")
    if complete and density == "sparse":
        error("density", "A complete graph cannot be sparse")
    if spec.edge_multiplicity.kind == "multi" and complete:
        error("edge_multiplicity", "Complete graphs are defined on simple edges")
    if acyclic and connected and (density == "dense" or complete):
        error("density", "Trees have exactly n-1 edges and cannot be dense or complete")
    if acyclic and not connected and (density in ("moderate", "dense") or complete):
        error("density", "Forests have fewer than n edges and cannot reach moderate or dense targets")
    return found


def _parameter_checks(spec: GraphSpec, node_count: Optional[int]) -> List[ConstraintDiagnostic]:
    found = []

    if spec.partiteness is not None and spec.partiteness.kind == "k_partite":
        if spec.partiteness.k is not None and spec.partiteness.k < 2:
            found.append(ConstraintDiagnostic(
                property="partiteness",
                reason=f"k-partite graphs require k >= 2, got k={spec.partiteness.k}",
                severity=Severity.ERROR,
            ))

    if spec.specific_regular is not None and spec.specific_regular.kind == "k_regular":
        k = spec.specific_regular.k
        if node_count is None:
            found.append(ConstraintDiagnostic(
                property="specific_regular",
                reason=f"{k}-regular graphs need k < n and n*k even; n is only known at generation time",
                severity=Severity.WARNING,
            ))
        elif k >= node_count or (node_count * k) % 2 != 0:
            found.append(ConstraintDiagnostic(
                property="specific_regular",
                reason=f"No {k}-regular graph exists on {node_count} vertices",
                severity=Severity.ERROR,
            ))

    if spec.cubic is not None and spec.cubic.kind == "cubic" and node_count is not None:
        if node_count < 4 or node_count % 2 != 0:
            found.append(ConstraintDiagnostic(
                property="cubic",
                reason=f"Cubic graphs need an even vertex count >= 4, got {node_count}",
                severity=Severity.ERROR,
            ))

    if spec.strongly_regular is not None and spec.strongly_regular.kind == "strongly_regular":
        srg = spec.strongly_regular
        found.append(ConstraintDiagnostic(
            property="strongly_regular",
            reason="Generated as a 2-regular cycle skeleton; degree checks fail unless k=2",
            severity=Severity.WARNING,
        ))
        if node_count is not None:
            if srg.k * (srg.k - srg.lambda_ - 1) != (node_count - srg.k - 1) * srg.mu:
                found.append(ConstraintDiagnostic(
                    property="strongly_regular",
                    reason=(
                        f"SRG({node_count},{srg.k},{srg.lambda_},{srg.mu}) fails "
                        f"k(k-λ-1) = (n-k-1)μ"
                    ),
                    severity=Severity.ERROR,
                ))

    for axis in ("k_vertex_connected", "k_edge_connected"):
        value = getattr(spec, axis)
        if value is not None and value.kind == axis and node_count is not None:
            if node_count < value.k + 1:
                found.append(ConstraintDiagnostic(
                    property=axis,
                    reason=f"{value.k}-connectivity requires at least {value.k + 1} vertices, got {node_count}",
                    severity=Severity.ERROR,
                ))

    if axis_kind(spec, "self_complementary") == "self_complementary" and node_count is not None:
        if node_count % 4 not in (0, 1):
            found.append(ConstraintDiagnostic(
                property="self_complementary",
                reason=f"Self-complementary graphs need n ≡ 0 or 1 (mod 4), got {node_count}",
                severity=Severity.ERROR,
            ))

    if node_count is not None:
        for axis in ("independence_number", "vertex_cover", "domination_number"):
            value = getattr(spec, axis)
            if value is not None and value.kind == axis and value.value > node_count:
                found.append(ConstraintDiagnostic(
                    property=axis,
                    reason=f"Target {value.value} exceeds vertex count {node_count}",
                    severity=Severity.ERROR,
                ))

    if node_count is not None:
        for axis in ("grid", "toroidal"):
            if axis_kind(spec, axis) != axis:
                continue
            value = getattr(spec, axis)
            cells = value.rows * value.cols
            if cells < node_count:
                isolated = node_count - cells
                severity = Severity.ERROR if spec.connectivity.kind == "connected" else Severity.WARNING
                found.append(ConstraintDiagnostic(
                    property=axis,
                    reason=f"{value.rows}x{value.cols} {axis} covers {cells} of {node_count} vertices; {isolated} stay isolated",
                    severity=severity,
                ))
            elif cells > node_count:
                found.append(ConstraintDiagnostic(
                    property=axis,
                    reason=f"{value.rows}x{value.cols} {axis} needs {cells} vertices, got {node_count}; the lattice is truncated",
                    severity=Severity.WARNING,
                ))

    return found


def _difficulties(spec: GraphSpec) -> List[ConstraintDiagnostic]:
    found = []

    def warn(prop: str, reason: str):
        found.append(ConstraintDiagnostic(property=prop, reason=reason, severity=Severity.WARNING))

    density = spec.density.kind
    if spec.cycles.kind == "acyclic" and density != "unconstrained":
        warn("density", f"Acyclic edge counts are pinned by the component count; '{density}' is approximate")
    if spec.connectivity.kind == "unconstrained" and density != "unconstrained":
        warn("density", f"Disconnected edge counts depend on component sizes; '{density}' is approximate")
    if density == "sparse" and spec.self_loops.kind == "allowed":
        warn("self_loops", "A guaranteed self-loop may push a small graph past the sparse tier")
    if density == "sparse" and spec.edge_multiplicity.kind == "multi":
        warn("edge_multiplicity", "A guaranteed parallel edge may push a small graph past the sparse tier")
    if axis_kind(spec, "partiteness") == "bipartite" and spec.self_loops.kind == "allowed":
        warn("partiteness", "Self-loops break bipartiteness; generated graphs will not contain any")
    if axis_kind(spec, "partiteness") == "bipartite" and density == "sparse":
        warn("density", "A bipartite spanning tree plus its even-cycle cross edges can exceed the sparse tier")

    for axis in RECORDED_AXES:
        if axis_kind(spec, axis) == axis:
            found.append(ConstraintDiagnostic(
                property=axis,
                reason="Recorded as metadata on a standard structure, not constructed",
                severity=Severity.INFO,
            ))

    family = select_structure_family(spec)
    if spec.connectivity.kind == "connected" and family in UNBRIDGED_FAMILIES:
        warn("connectivity", f"The {family.value} generator does not join its components; the graph may be disconnected")

    if forbids_triangle_minor(spec):
        warn("density", "A forbidden K3 minor pins the graph to a forest; density and completeness are approximate")

    for axis in CHECK_ONLY_AXES:
        if axis_kind(spec, axis) not in (None, "unconstrained"):
            found.append(ConstraintDiagnostic(
                property=axis,
                reason="Checked against the generated graph but not constructed; failures are expected",
                severity=Severity.INFO,
            ))
    return found


def _adjustments(spec: GraphSpec) -> ValidationAdjustments:
    density = spec.density.kind
    acyclic = spec.cycles.kind == "acyclic"
    family = select_structure_family(spec)

    relax_density = (
        (acyclic and density != "unconstrained")
        or (spec.connectivity.kind == "unconstrained" and density != "unconstrained")
        or (family == StructureFamily.BIPARTITE and density == "sparse")
        or ((not family_uses_density_pass(family) or forbids_triangle_minor(spec))
            and (density != "unconstrained" or spec.completeness.kind == "complete"))
    )
    relax_cycles = (
        acyclic
        and spec.directionality.kind == "undirected"
        and (spec.self_loops.kind == "allowed" or spec.edge_multiplicity.kind == "multi")
    )
    return ValidationAdjustments(
        relax_density_validation=relax_density,
        relax_cycle_validation=relax_cycles,
    )


# =============================================================================
# ENTRY POINT
# =============================================================================

def analyze_graph_spec_constraints(
    spec: GraphSpec,
    node_count: Optional[int] = None,
) -> ConstraintAnalysis:
    """
    Analyze a spec for impossible or awkward axis combinations.

    Args:
        spec: GraphSpec to analyze
        node_count: Vertex count, when known, for parameter feasibility checks

    Returns:
        ConstraintAnalysis with diagnostics and validator adjustments
    """
    diagnostics = _contradictions(spec)
    diagnostics.extend(_parameter_checks(spec, node_count))
    diagnostics.extend(_difficulties(spec))

    analysis = ConstraintAnalysis(impossibilities=diagnostics, adjustments=_adjustments(spec))
    if analysis.has_errors:
        logger.debug("Spec has %d contradictory constraints", len(analysis.errors))
    return analysis
