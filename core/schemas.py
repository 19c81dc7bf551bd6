"""
GRAPHGEN SCHEMAS - The Records that Flow Through the Engine

If spec.py is the Grammar (what a caller asks for),
schemas.py is the Vocabulary of results (what comes back).

This module defines the data structures produced by generation and validation:
- TestNode / TestEdge: Mutable while a generator builds them, read-only after
- TestGraph: The frozen product of one generate_graph call
- GraphGenerationConfig: Node count, type proportions, weight range, seed
- PropertyValidationResult / GraphValidationResult: Validator output
- GenerationError: Infeasible-parameter failures raised by generators

Design Principles:
1. STRICT TYPING: msgspec.Struct with no silent type coercion
2. KW_ONLY: Enforce keyword arguments to prevent positional mix-ups
3. OPEN METADATA BAG: TestNode.data carries per-property construction
   metadata from generator to validator. It is owned by the node and passed
   explicitly, never stashed in module state.
4. FAILURES ARE DATA: A failed property check is a result with valid=False,
   not an exception
"""
import msgspec
from typing import Optional, Dict, Any, List, Tuple

from core.spec import GraphSpec, GraphGenError
from core.constraints import ConstraintAnalysis


class GenerationError(GraphGenError, ValueError):
    """Raised when a generator's required invariant cannot exist for the given parameters."""
    pass


# =============================================================================
# GRAPH RECORDS
# =============================================================================

class TestNode(msgspec.Struct, kw_only=True):
    """
    A vertex of a generated graph.

    Attributes:
        id: Sequential identity N0..N{n-1}, assigned at synthesis time
        partition: "left" / "right" for bipartite-style specs, else None
        type: Node type for heterogeneous schemas, else None
        data: Generator metadata (target invariants, construction parameters)
    """
    __test__ = False

    id: str
    partition: Optional[str] = None
    type: Optional[str] = None
    data: Dict[str, Any] = msgspec.field(default_factory=dict)


class TestEdge(msgspec.Struct, kw_only=True):
    """
    An edge of a generated graph.

    Undirected edges are stored once; adjacency views add the reverse side.
    """
    __test__ = False

    source: str
    target: str
    weight: Optional[float] = None   # Present iff weighting is weighted_numeric
    type: Optional[str] = None       # Present iff schema is heterogeneous


class TestGraph(msgspec.Struct, kw_only=True, frozen=True):
    """The product of one generation call, consumed read-only afterwards."""
    __test__ = False

    nodes: List[TestNode]
    edges: List[TestEdge]
    spec: GraphSpec

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]


# =============================================================================
# GENERATION CONFIG
# =============================================================================

class NodeTypeProportion(msgspec.Struct, kw_only=True, frozen=True):
    """Share of nodes that receive `type` in a heterogeneous graph."""
    type: str
    proportion: float


class GraphGenerationConfig(msgspec.Struct, kw_only=True, frozen=True):
    """
    Per-call generation parameters.

    Attributes:
        node_count: Number of vertices (>= 0)
        node_types: Type proportions for heterogeneous schemas
        edge_types: Edge type vocabulary for heterogeneous schemas
        weight_range: Inclusive (min, max) for integer edge weights
        seed: RNG seed; drawn from the clock and logged when omitted
    """
    node_count: int
    node_types: Optional[Tuple[NodeTypeProportion, ...]] = None
    edge_types: Optional[Tuple[str, ...]] = None
    weight_range: Optional[Tuple[int, int]] = None
    seed: Optional[int] = None

    def validate(self) -> None:
        """
        Validate config parameters.

        Raises:
            ValueError: If any parameter is out of range
        """
        if self.node_count < 0:
            raise ValueError(f"node_count must be >= 0, got {self.node_count}")
        if self.weight_range is not None:
            low, high = self.weight_range
            if low > high:
                raise ValueError(f"weight_range min must be <= max, got {self.weight_range}")
        if self.node_types is not None:
            if not self.node_types:
                raise ValueError("node_types must not be empty when provided")
            for proportion in self.node_types:
                if proportion.proportion < 0:
                    raise ValueError(f"Proportion for type '{proportion.type}' must be >= 0")
        if self.edge_types is not None and not self.edge_types:
            raise ValueError("edge_types must not be empty when provided")


# =============================================================================
# VALIDATION RESULTS
# =============================================================================

class PropertyValidationResult(msgspec.Struct, kw_only=True, frozen=True):
    """
    Outcome of checking one property against a generated graph.

    `inconclusive` marks results that passed without a real check
    (metadata absent, graph too large for exact search, or only a
    necessary condition was tested). Use is_skipped to tell those apart
    from confirmed passes.
    """
    property: str
    expected: str
    actual: str
    valid: bool
    message: Optional[str] = None
    inconclusive: bool = False

    @property
    def is_skipped(self) -> bool:
        return self.valid and self.inconclusive


class GraphValidationResult(msgspec.Struct, kw_only=True, frozen=True):
    """Aggregate of all property checks for one graph."""
    valid: bool
    results: List[PropertyValidationResult]
    errors: List[str]
    warnings: List[str]
    analysis: ConstraintAnalysis

    @classmethod
    def from_results(
        cls,
        results: List[PropertyValidationResult],
        analysis: ConstraintAnalysis,
    ) -> "GraphValidationResult":
        """Build the aggregate: failures become errors, skips and diagnostics become warnings."""
        errors = [
            r.message or f"{r.property}: expected {r.expected}, got {r.actual}"
            for r in results if not r.valid
        ]
        warnings = [f"{d.property}: {d.reason}" for d in analysis.impossibilities]
        warnings.extend(f"{r.property}: {r.message}" for r in results if r.is_skipped)
        return cls(
            valid=not errors,
            results=results,
            errors=errors,
            warnings=warnings,
            analysis=analysis,
        )

    @property
    def failed(self) -> List[PropertyValidationResult]:
        return [r for r in self.results if not r.valid]

    @property
    def skipped(self) -> List[PropertyValidationResult]:
        return [r for r in self.results if r.is_skipped]

    def get(self, property_name: str) -> Optional[PropertyValidationResult]:
        """Look up the result for one property."""
        for result in self.results:
            if result.property == property_name:
                return result
        return None
