"""
GRAPHGEN VALIDATOR BASE - Shared Context and Result Builders

Every property validator has the same signature:

    validate_x(ctx: ValidationContext) -> PropertyValidationResult

The context bundles what a validator needs so the graph is indexed once per
validation run rather than once per property:
- graph / spec: the TestGraph under test and the spec it was built from
- view: GraphView over the nodes and edges (adjacency, degrees, arcs)
- analysis: the constraint analysis (tolerance switches for density/cycles)
- limits: the [validation] section of the settings (exact-search limits,
  tolerances, density buckets)

Result vocabulary:
- not_applicable: the spec does not request the property
- passed / failed: a real check was made
- inconclusive: the check was skipped or only a necessary condition held
"""
from typing import Any, List, Optional

from core.constraints import ConstraintAnalysis
from core.graph_invariants import GraphView
from core.schemas import PropertyValidationResult, TestGraph
from core.spec import axis_kind
from infrastructure.config_graph import ValidationSection


class ValidationContext:
    """
    Per-run state shared by all validators.

    Args:
        graph: Graph under test
        analysis: Constraint analysis for graph.spec
        limits: Validation settings section
    """

    def __init__(self, graph: TestGraph, analysis: ConstraintAnalysis, limits: ValidationSection):
        self.graph = graph
        self.spec = graph.spec
        self.nodes = graph.nodes
        self.edges = graph.edges
        self.analysis = analysis
        self.limits = limits
        self.view = GraphView.from_graph(graph)

    @property
    def n(self) -> int:
        return len(self.nodes)

    @property
    def directed(self) -> bool:
        return self.spec.directionality.kind == "directed"

    def kind(self, axis: str) -> Optional[str]:
        return axis_kind(self.spec, axis)

    def metadata(self, key: str) -> Optional[List[Any]]:
        """Per-node values of node.data[key], or None unless every node has it."""
        if not self.nodes:
            return None
        values = []
        for node in self.nodes:
            if key not in node.data:
                return None
            values.append(node.data[key])
        return values

    def shared_metadata(self, key: str) -> Any:
        """
        The common value of node.data[key].

        Returns:
            The value, or None when a node is missing it

        Raises:
            InconsistentMetadata: Nodes disagree on the value
        """
        values = self.metadata(key)
        if values is None:
            return None
        first = values[0]
        if any(v != first for v in values[1:]):
            raise InconsistentMetadata(key)
        return first


class InconsistentMetadata(Exception):
    """Nodes carry different values for metadata that should be shared."""

    def __init__(self, key: str):
        super().__init__(f"Nodes have inconsistent {key} markers")
        self.key = key


# =============================================================================
# RESULT BUILDERS
# =============================================================================

def not_applicable(prop: str, kind: Optional[str]) -> PropertyValidationResult:
    value = kind or "unconstrained"
    return PropertyValidationResult(property=prop, expected=value, actual=value, valid=True)


def passed(prop: str, expected: str, actual: Optional[str] = None, message: Optional[str] = None) -> PropertyValidationResult:
    return PropertyValidationResult(
        property=prop,
        expected=expected,
        actual=expected if actual is None else actual,
        valid=True,
        message=message,
    )


def failed(prop: str, expected: str, actual: str, message: str) -> PropertyValidationResult:
    return PropertyValidationResult(
        property=prop,
        expected=expected,
        actual=actual,
        valid=False,
        message=message,
    )


def inconclusive(prop: str, expected: str, actual: str, message: str) -> PropertyValidationResult:
    """A non-failing result that did not confirm the property."""
    return PropertyValidationResult(
        property=prop,
        expected=expected,
        actual=actual,
        valid=True,
        message=message,
        inconclusive=True,
    )


def trivial(prop: str, expected: str) -> PropertyValidationResult:
    return passed(prop, expected, "trivial")


def inconsistent(prop: str, expected: str, error: InconsistentMetadata) -> PropertyValidationResult:
    return failed(prop, expected, "inconsistent_metadata", str(error))
