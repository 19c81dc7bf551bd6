"""
GraphGen.Forge - Spec-Driven Graph Synthesis

The Forge turns a declarative GraphSpec into a concrete TestGraph.

Components:
- rng: Seeded randomness shared by one generation call
- edges: Ordered edge accumulator with duplicate tracking
- topologist: Classic shapes (trees, stars, wheels, lattices, tournaments, regular graphs)
- bipartite / connectivity / geometric: Two-sided, connectivity-driven and embedded families
- structural_classes / network_structures / path_cycle / symmetry / invariants:
  One generator per named graph class
- structure_handlers: Standard structure + measured metadata
- statistician: Density pass and edge annotation
- world_builder: The generate_graph pipeline and family dispatch table

Design Philosophy:
1. NO PYDANTIC: All schemas use msgspec.Struct
2. DETERMINISTIC: Reproducible via seeds
3. DISPATCH IS DATA: Family priority lives in core.ontology
"""

from forge.rng import SeededRandom
from forge.edges import EdgeSet, edge_key
from forge.statistician import (
    DensityPassSummary,
    add_density_edges,
    assign_edge_types,
    assign_weights,
    max_possible_edges,
)
from forge.world_builder import (
    BASE_STRUCTURE_GENERATORS,
    GraphGenerator,
    generate_base_structure,
    generate_graph,
    generate_nodes,
)

__all__ = [
    # Randomness and edges
    "SeededRandom",
    "EdgeSet",
    "edge_key",
    # Statistician exports
    "DensityPassSummary",
    "add_density_edges",
    "assign_edge_types",
    "assign_weights",
    "max_possible_edges",
    # Pipeline exports
    "BASE_STRUCTURE_GENERATORS",
    "GraphGenerator",
    "generate_base_structure",
    "generate_graph",
    "generate_nodes",
]
