"""
Unit tests for forge/world_builder.py - The Generation Pipeline

Tests:
- Node allocation (ids, bipartite partitions, heterogeneous types)
- Base structure dispatch returning the selected family
- generate_graph determinism, annotation and logged events
- GraphGenerator seed handling
- Config validation errors
"""
import pytest

from core.ontology import Partition, StructureFamily, family_records_metadata, family_uses_density_pass
from core.schemas import GraphGenerationConfig, NodeTypeProportion, TestNode
from core.spec import make_graph_spec
from forge.edges import EdgeSet
from forge.world_builder import (
    BASE_STRUCTURE_GENERATORS,
    GraphGenerator,
    generate_base_structure,
    generate_graph,
    generate_nodes,
)
from infrastructure.logger import GenerationEventType, get_generation_logger


def _config(n, seed=42, **kwargs):
    return GraphGenerationConfig(node_count=n, seed=seed, **kwargs)


# =============================================================================
# NODES
# =============================================================================

class TestGenerateNodes:
    """Tests for generate_nodes."""

    def test_sequential_ids(self, rng):
        nodes = generate_nodes(make_graph_spec(), _config(4), rng)

        assert [node.id for node in nodes] == ["N0", "N1", "N2", "N3"]
        assert all(node.partition is None and node.type is None for node in nodes)

    def test_bipartite_halves(self, rng):
        nodes = generate_nodes(make_graph_spec(partiteness="bipartite"), _config(7), rng)

        sides = [node.partition for node in nodes]
        assert sides == [Partition.LEFT.value] * 3 + [Partition.RIGHT.value] * 4

    def test_complete_bipartite_sizes(self, rng):
        """
        K_{2,3} on 7 nodes labels 2 + 3 and leaves the rest unlabelled.

        Verifies:
        - Left then right labels in id order
        - Surplus nodes have no partition
        """
        spec = make_graph_spec(complete_bipartite={"kind": "complete_bipartite", "m": 2, "n": 3})
        nodes = generate_nodes(spec, _config(7), rng)

        sides = [node.partition for node in nodes]
        assert sides == ["left", "left", "right", "right", "right", None, None]

    def test_heterogeneous_types(self, rng):
        config = _config(40, node_types=(
            NodeTypeProportion(type="person", proportion=0.5),
            NodeTypeProportion(type="place", proportion=0.5),
        ))
        nodes = generate_nodes(make_graph_spec(schema="heterogeneous"), config, rng)

        assert {node.type for node in nodes} == {"person", "place"}

    def test_types_ignored_when_homogeneous(self, rng):
        config = _config(5, node_types=(NodeTypeProportion(type="person", proportion=1.0),))
        nodes = generate_nodes(make_graph_spec(), config, rng)

        assert all(node.type is None for node in nodes)

    def test_last_type_catches_remainder(self, rng):
        """Proportions that sum below 1 still give every node a type."""
        config = _config(30, node_types=(
            NodeTypeProportion(type="rare", proportion=0.0),
            NodeTypeProportion(type="common", proportion=0.0),
        ))
        nodes = generate_nodes(make_graph_spec(schema="heterogeneous"), config, rng)

        assert {node.type for node in nodes} == {"common"}


# =============================================================================
# BASE STRUCTURE
# =============================================================================

class TestBaseStructure:
    """Tests for generate_base_structure and the family table."""

    def test_every_family_has_a_generator(self):
        assert set(BASE_STRUCTURE_GENERATORS) == set(StructureFamily)

    @pytest.mark.parametrize("patch,family", [
        ({}, StructureFamily.DEFAULT),
        ({"star": "star", "wheel": "wheel"}, StructureFamily.STAR),
        ({"partiteness": "bipartite", "complete_bipartite": {"kind": "complete_bipartite", "m": 2, "n": 2}},
         StructureFamily.COMPLETE_BIPARTITE),
        ({"cubic": "cubic"}, StructureFamily.CUBIC),
    ])
    def test_returns_selected_family(self, rng, patch, family):
        spec = make_graph_spec(**patch)
        nodes = generate_nodes(spec, _config(6), rng)

        assert generate_base_structure(nodes, EdgeSet(directed=False), spec, rng) == family

    def test_metadata_families_flagged(self):
        """
        Metadata families take the density pass inside their handler.

        Verifies:
        - Every metadata family uses the density pass and records metadata
        - Fixed-shape and default families do not record metadata
        """
        metadata = [StructureFamily.TOUGHNESS, StructureFamily.SPECTRUM, StructureFamily.MINOR_FREE]
        for family in metadata:
            assert family_uses_density_pass(family)
            assert family_records_metadata(family)

        assert not family_records_metadata(StructureFamily.STAR)
        assert not family_records_metadata(StructureFamily.DEFAULT)


# =============================================================================
# PIPELINE
# =============================================================================

class TestGenerateGraph:
    """Tests for generate_graph and GraphGenerator."""

    def test_deterministic(self):
        spec = make_graph_spec(connectivity="connected", density="moderate")

        first = generate_graph(spec, _config(12))
        second = generate_graph(spec, _config(12))

        assert first == second

    def test_seed_changes_edges(self):
        spec = make_graph_spec(connectivity="connected", density="moderate")

        a = generate_graph(spec, _config(12, seed=42))
        b = generate_graph(spec, _config(12, seed=43))

        assert [(e.source, e.target) for e in a.edges] != [(e.source, e.target) for e in b.edges]

    def test_spec_travels_with_graph(self):
        spec = make_graph_spec(cycles="acyclic", connectivity="connected")
        graph = generate_graph(spec, _config(5))

        assert graph.spec == spec
        assert len(graph.nodes) == 5
        assert len(graph.edges) == 4

    def test_weighted_annotation(self):
        """
        weighted_numeric specs get integer weights from the default range.

        Verifies:
        - Every edge has a weight in [1, 100]
        - An annotation event is logged
        """
        spec = make_graph_spec(weighting="weighted_numeric", connectivity="connected")
        graph = generate_graph(spec, _config(10))

        assert graph.edges
        assert all(1 <= edge.weight <= 100 for edge in graph.edges)
        events = get_generation_logger().get_events(GenerationEventType.ANNOTATION)
        assert len(events) == 1 and events[0].details == {"weighted": True, "typed": False}

    def test_custom_weight_range_and_edge_types(self):
        spec = make_graph_spec(weighting="weighted_numeric", schema="heterogeneous", connectivity="connected")
        graph = generate_graph(spec, _config(10, weight_range=(7, 7), edge_types=("link",)))

        assert {edge.weight for edge in graph.edges} == {7}
        assert {edge.type for edge in graph.edges} == {"link"}

    def test_unweighted_has_no_annotation(self):
        graph = generate_graph(make_graph_spec(), _config(6))

        assert all(edge.weight is None and edge.type is None for edge in graph.edges)
        assert get_generation_logger().get_events(GenerationEventType.ANNOTATION) == []

    def test_structure_event(self):
        generate_graph(make_graph_spec(star="star"), _config(6, seed=9))

        events = get_generation_logger().get_events(GenerationEventType.STRUCTURE_SELECTED)
        assert len(events) == 1
        assert events[0].family == "star"
        assert events[0].node_count == 6
        assert events[0].seed == 9

    def test_metadata_family_density_pass_runs_once(self):
        """
        The toughness handler runs the density pass itself.

        Verifies:
        - Exactly one DENSITY_PASS event, not skipped
        - Its edge count is the final edge count
        """
        spec = make_graph_spec(connectivity="connected", density="dense", toughness={"kind": "toughness", "value": 1.0})
        graph = generate_graph(spec, _config(10))

        events = get_generation_logger().get_events(GenerationEventType.DENSITY_PASS)
        assert len(events) == 1
        assert events[0].details["skipped"] is False
        assert events[0].edge_count == len(graph.edges)

    def test_empty_graph(self):
        graph = generate_graph(make_graph_spec(), _config(0))
        assert graph.nodes == [] and graph.edges == []

    def test_invalid_config(self):
        with pytest.raises(ValueError, match="node_count must be >= 0"):
            generate_graph(make_graph_spec(), _config(-1))
        with pytest.raises(ValueError, match="weight_range"):
            generate_graph(make_graph_spec(), _config(3, weight_range=(5, 1)))

    def test_generator_fills_seed(self):
        spec = make_graph_spec(connectivity="connected")
        generator = GraphGenerator(seed=5)

        by_count = generator.generate(spec, 8)
        by_config = generator.generate(spec, GraphGenerationConfig(node_count=8))

        assert by_count == by_config == generate_graph(spec, _config(8, seed=5))


def test_nodes_are_fresh_per_call():
    """Mutating one graph's node data does not leak into the next call."""
    spec = make_graph_spec()
    first = generate_graph(spec, _config(3))
    first.nodes[0].data["mark"] = True

    assert "mark" not in generate_graph(spec, _config(3)).nodes[0].data
    assert isinstance(first.nodes[0], TestNode)
