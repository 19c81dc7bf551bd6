"""
GRAPHGEN CORE - Central exports for specs, schemas and validation.

This module provides access to:
- The GraphSpec type system and spec helpers (spec)
- Graph and result schemas (schemas)
- Spec feasibility analysis (constraints)
- Structure family dispatch data (ontology)
- Post-generation property validation (validation)
"""

# Specification
from core.spec import (
    CORE_AXES,
    DEFAULT_SPEC,
    PRESETS,
    GraphGenError,
    GraphSpec,
    SpecError,
    allows_self_loops,
    describe_spec,
    generate_core_spec_permutations,
    is_acyclic,
    is_complete,
    is_connected,
    is_directed,
    is_heterogeneous,
    is_multigraph,
    is_valid_spec,
    is_weighted,
    make_graph_spec,
    patch_spec,
    spec_from_json,
    spec_to_json,
)

# Schemas
from core.schemas import (
    GenerationError,
    GraphGenerationConfig,
    GraphValidationResult,
    PropertyValidationResult,
    TestEdge,
    TestGraph,
    TestNode,
)

# Analysis and dispatch
from core.constraints import (
    ConstraintAnalysis,
    ConstraintDiagnostic,
    ValidationAdjustments,
    analyze_graph_spec_constraints,
)
from core.ontology import (
    STRUCTURE_TRIGGERS,
    Partition,
    Severity,
    StructureFamily,
    select_structure_family,
)

# Graph algorithms and validation
from core.graph_invariants import GraphView, check_bipartite_with_bfs, to_rustworkx
from core.validation import VALIDATORS, validate_graph_properties

__all__ = [
    # Spec
    "CORE_AXES",
    "DEFAULT_SPEC",
    "PRESETS",
    "GraphGenError",
    "GraphSpec",
    "SpecError",
    "allows_self_loops",
    "describe_spec",
    "generate_core_spec_permutations",
    "is_acyclic",
    "is_complete",
    "is_connected",
    "is_directed",
    "is_heterogeneous",
    "is_multigraph",
    "is_valid_spec",
    "is_weighted",
    "make_graph_spec",
    "patch_spec",
    "spec_from_json",
    "spec_to_json",
    # Schemas
    "GenerationError",
    "GraphGenerationConfig",
    "GraphValidationResult",
    "PropertyValidationResult",
    "TestEdge",
    "TestGraph",
    "TestNode",
    # Analysis
    "ConstraintAnalysis",
    "ConstraintDiagnostic",
    "ValidationAdjustments",
    "analyze_graph_spec_constraints",
    "STRUCTURE_TRIGGERS",
    "Partition",
    "Severity",
    "StructureFamily",
    "select_structure_family",
    # Validation
    "GraphView",
    "check_bipartite_with_bfs",
    "to_rustworkx",
    "VALIDATORS",
    "validate_graph_properties",
]
