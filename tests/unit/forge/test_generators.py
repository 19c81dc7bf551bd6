"""
Unit tests for the forge family generators

Each family is checked against the property it is built to have, using the
exact recognisers in core/graph_invariants.py:
- Bipartite and connectivity defaults
- Eulerian, flow networks, k-connectivity, treewidth and colouring
- Structural classes (split, cograph, claw-free, chordal, interval,
  permutation, comparability, perfect)
- Network models, symmetry families and geometric embeddings
- Path / cycle metrics and extremal invariants
"""
import itertools
import math

import pytest

from core.graph_invariants import (
    bipartite_coloring,
    chords_cross,
    circumference,
    diameter,
    domination_number_exact,
    edge_connectivity,
    find_claw,
    find_forbidden_subgraph,
    girth,
    has_hamiltonian_cycle,
    has_hamiltonian_path,
    independence_number_exact,
    is_chordal,
    is_cograph,
    is_connected,
    is_forest,
    is_proper_coloring,
    is_split,
    is_threshold,
    is_transitive_orientation,
    radius,
    strongly_regular_violation,
    treewidth_upper_bound,
    vertex_connectivity_exact,
)
from core.schemas import GenerationError
from forge.bipartite import (
    generate_bipartite_edges,
    generate_complete_bipartite_edges,
)
from forge.connectivity import (
    generate_connected_cyclic_edges,
    generate_disconnected_edges,
    generate_eulerian_edges,
    generate_flow_network_edges,
    generate_forest_edges,
    generate_k_colorable_edges,
    generate_k_edge_connected_edges,
    generate_k_vertex_connected_edges,
    generate_treewidth_edges,
)
from forge.geometric import generate_planar_edges, generate_unit_disk_edges
from forge.invariants import (
    generate_domination_number_edges,
    generate_hereditary_class_edges,
    generate_independence_number_edges,
    generate_vertex_cover_edges,
)
from forge.network_structures import (
    generate_modular_edges,
    generate_scale_free_edges,
    generate_small_world_edges,
)
from forge.path_cycle import (
    generate_circumference_edges,
    generate_diameter_edges,
    generate_girth_edges,
    generate_hamiltonian_edges,
    generate_radius_edges,
    generate_traceable_edges,
)
from forge.structural_classes import (
    generate_chordal_edges,
    generate_claw_free_edges,
    generate_cograph_edges,
    generate_comparability_edges,
    generate_interval_edges,
    generate_perfect_edges,
    generate_permutation_edges,
    generate_split_edges,
)
from forge.symmetry import (
    generate_arc_transitive_edges,
    generate_edge_transitive_edges,
    generate_line_graph_edges,
    generate_self_complementary_edges,
    generate_strongly_regular_edges,
    generate_threshold_edges,
    generate_vertex_transitive_edges,
)


def _odd_vertices(view):
    return [v for v in range(view.n) if view.endpoint_degree[v] % 2]


# =============================================================================
# BIPARTITE AND CONNECTIVITY DEFAULTS
# =============================================================================

class TestBipartite:
    """Two-sided generators."""

    def test_complete_bipartite(self, run):
        nodes, edges, _ = run(
            generate_complete_bipartite_edges, 7, partitions="halves",
            complete_bipartite={"kind": "complete_bipartite", "m": 3, "n": 4},
        )
        assert len(edges) == 12

    def test_tree(self, run):
        """
        Connected + acyclic bipartite spec gives a two-coloured spanning tree.

        Verifies:
        - n - 1 edges, connected, acyclic
        - Every edge runs left -> right
        """
        nodes, edges, view = run(
            generate_bipartite_edges, 10, partitions="halves",
            partiteness="bipartite", connectivity="connected", cycles="acyclic",
        )
        side = {node.id: node.partition for node in nodes}

        assert len(edges) == 9
        assert is_connected(view) and is_forest(view)
        assert all(side[e.source] == "left" and side[e.target] == "right" for e in edges)

    def test_connected_has_even_cycles(self, run):
        _, edges, view = run(
            generate_bipartite_edges, 10, partitions="halves",
            partiteness="bipartite", connectivity="connected",
        )

        assert len(edges) > 9
        assert is_connected(view)
        assert bipartite_coloring(view) is not None

    @pytest.mark.parametrize("cycles", ["acyclic", "cycles_allowed"])
    def test_unconstrained_variants_stay_bipartite(self, run, cycles):
        nodes, edges, _ = run(
            generate_bipartite_edges, 12, partitions="halves",
            partiteness="bipartite", cycles=cycles,
        )
        side = {node.id: node.partition for node in nodes}
        assert all(side[e.source] != side[e.target] for e in edges)


class TestConnectivityDefaults:
    """Connectivity x cycles default structures."""

    def test_connected_cyclic(self, run):
        _, edges, view = run(generate_connected_cyclic_edges, 8, connectivity="connected")

        assert len(edges) == 8
        assert is_connected(view)
        assert not is_forest(view)

    def test_forest(self, run):
        _, _, view = run(generate_forest_edges, 12, cycles="acyclic")
        assert is_forest(view)

    def test_disconnected_with_cycle(self, run):
        _, _, view = run(generate_disconnected_edges, 9)

        assert not is_connected(view)
        assert girth(view) is not None


# =============================================================================
# CONNECTIVITY-PINNED FAMILIES
# =============================================================================

class TestEulerianAndFlow:
    """Eulerian circuits / trails and flow networks."""

    def test_eulerian_even_degrees(self, run):
        _, _, view = run(generate_eulerian_edges, 9, eulerian="eulerian")

        assert is_connected(view)
        assert _odd_vertices(view) == []

    def test_directed_eulerian_balanced(self, run):
        _, edges, view = run(generate_eulerian_edges, 9, directed=True, eulerian="eulerian")

        out_degree = [0] * view.n
        in_degree = [0] * view.n
        for u, v in view.arcs:
            out_degree[u] += 1
            in_degree[v] += 1
        assert out_degree == in_degree

    def test_semi_eulerian_two_odd_vertices(self, run):
        _, _, view = run(generate_eulerian_edges, 8, eulerian="semi_eulerian")

        assert is_connected(view)
        assert len(_odd_vertices(view)) == 2

    def test_flow_network(self, run):
        """
        Every intermediate lies on a source -> sink path.

        Verifies:
        - Nothing enters the source, nothing leaves the sink
        - flowRole is stored on every node
        """
        nodes, edges, _ = run(
            generate_flow_network_edges, 8, directed=True,
            flow_network={"kind": "flow_network", "source": "N0", "sink": "N7"},
        )

        assert not any(e.target == "N0" for e in edges)
        assert not any(e.source == "N7" for e in edges)
        roles = [node.data["flowRole"] for node in nodes]
        assert roles[0] == "source" and roles[-1] == "sink"
        assert set(roles[1:-1]) == {"intermediate"}

    def test_flow_network_bad_terminals(self, run):
        with pytest.raises(GenerationError, match="distinct existing nodes"):
            run(
                generate_flow_network_edges, 4, directed=True,
                flow_network={"kind": "flow_network", "source": "N0", "sink": "N9"},
            )


class TestConnectivityFamilies:
    """Harary graphs, k-trees and colourings."""

    @pytest.mark.parametrize("n,k", [(8, 3), (7, 4), (7, 3), (6, 1)])
    def test_k_vertex_connected(self, run, n, k):
        _, _, view = run(generate_k_vertex_connected_edges, n, k_vertex_connected={"kind": "k_vertex_connected", "k": k})
        assert vertex_connectivity_exact(view) >= k

    def test_k_vertex_connected_too_few_nodes(self, run):
        with pytest.raises(GenerationError, match="k-vertex-connected graph requires at least 6 nodes"):
            run(generate_k_vertex_connected_edges, 3, k_vertex_connected={"kind": "k_vertex_connected", "k": 5})

    def test_k_edge_connected(self, run):
        _, _, view = run(generate_k_edge_connected_edges, 9, k_edge_connected={"kind": "k_edge_connected", "k": 3})
        assert edge_connectivity(view) >= 3

    def test_treewidth(self, run):
        nodes, _, view = run(generate_treewidth_edges, 10, treewidth={"kind": "treewidth", "width": 2})

        assert is_chordal(view)
        assert treewidth_upper_bound(view) == 2
        assert all(node.data["kTreeWidth"] == 2 for node in nodes)

    def test_k_colorable(self, run):
        nodes, _, view = run(generate_k_colorable_edges, 12, k_colorable={"kind": "k_colorable", "k": 3})

        colors = {i: node.data["color"] for i, node in enumerate(nodes)}
        assert set(colors.values()) <= {0, 1, 2}
        assert is_proper_coloring(view, colors)

    def test_k_colorable_needs_positive_k(self, run):
        with pytest.raises(GenerationError, match="k >= 1"):
            run(generate_k_colorable_edges, 4, k_colorable={"kind": "k_colorable", "k": 0})


# =============================================================================
# STRUCTURAL CLASSES
# =============================================================================

class TestStructuralClasses:
    """Hereditary class constructions land in their class."""

    def test_split(self, run):
        nodes, _, view = run(generate_split_edges, 9, split="split")

        assert is_split(view)
        assert [node.data["splitPartition"] for node in nodes].count("clique") == 3

    def test_cograph(self, run):
        _, _, view = run(generate_cograph_edges, 10, cograph="cograph")
        assert is_cograph(view)

    def test_claw_free(self, run):
        _, edges, view = run(generate_claw_free_edges, 9, claw_free="claw_free")

        assert len(edges) == 18
        assert find_claw(view) is None

    def test_chordal(self, run):
        _, _, view = run(generate_chordal_edges, 12, chordal="chordal")
        assert is_chordal(view)

    def test_interval_matches_overlaps(self, run):
        """Edges are exactly the overlapping interval pairs, so the graph is chordal."""
        nodes, edges, view = run(generate_interval_edges, 10, interval="interval")

        present = {frozenset((e.source, e.target)) for e in edges}
        for a, b in itertools.combinations(nodes, 2):
            ia, ib = a.data["interval"], b.data["interval"]
            overlap = ia["start"] <= ib["end"] and ib["start"] <= ia["end"]
            assert (frozenset((a.id, b.id)) in present) == overlap
        assert is_chordal(view)

    def test_permutation_matches_inversions(self, run):
        nodes, edges, _ = run(generate_permutation_edges, 8, permutation="permutation")

        value = {node.id: node.data["permutationValue"] for node in nodes}
        position = {node.id: i for i, node in enumerate(nodes)}
        for e in edges:
            assert (position[e.source] - position[e.target]) * (value[e.source] - value[e.target]) < 0
        assert sorted(value.values()) == list(range(8))

    def test_comparability_orientation(self, run):
        nodes, _, view = run(generate_comparability_edges, 10, comparability="comparability")

        rank = {i: node.data["topologicalOrder"] for i, node in enumerate(nodes)}
        assert is_transitive_orientation(view, rank)

    def test_perfect_records_class(self, run):
        nodes, _, view = run(generate_perfect_edges, 10, perfect="perfect")

        perfect_class = nodes[0].data["perfectClass"]
        assert perfect_class in {"chordal", "bipartite", "cograph"}
        if perfect_class == "chordal":
            assert is_chordal(view)
        elif perfect_class == "cograph":
            assert is_cograph(view)
        else:
            assert bipartite_coloring(view) is not None


# =============================================================================
# NETWORK MODELS
# =============================================================================

class TestNetworkModels:
    """Scale-free, small-world and modular generators."""

    def test_scale_free_edge_count(self, run):
        """
        30 nodes: a K3 core plus 3 attachments for each of the 27 later nodes.

        Verifies:
        - 3 + 27 * 3 = 84 edges
        - Connected
        - Default exponent recorded
        """
        nodes, edges, view = run(generate_scale_free_edges, 30, scale_free="scale_free")

        assert len(edges) == 84
        assert is_connected(view)
        assert nodes[0].data["scaleFreeExponent"] == pytest.approx(2.1)

    def test_small_world_ring_lattice(self, run):
        _, edges, view = run(
            generate_small_world_edges, 20,
            small_world={"kind": "small_world", "rewire_probability": 0.0, "mean_degree": 4},
        )

        assert len(edges) == 40
        assert set(view.degrees()) == {4}

    def test_rewiring_keeps_edge_count(self, run):
        nodes, edges, _ = run(
            generate_small_world_edges, 20,
            small_world={"kind": "small_world", "rewire_probability": 0.3},
        )

        assert len(edges) == 40
        assert nodes[0].data["smallWorldRewireProb"] == 0.3
        assert nodes[0].data["smallWorldMeanDegree"] == 4

    def test_planted_partition(self, run):
        nodes, edges, _ = run(
            generate_modular_edges, 12,
            community_structure={
                "kind": "modular",
                "num_communities": 3,
                "intra_community_density": 1.0,
                "inter_community_density": 0.0,
            },
        )

        community = {node.id: node.data["community"] for node in nodes}
        assert len(edges) == 18
        assert all(community[e.source] == community[e.target] for e in edges)


# =============================================================================
# SYMMETRY AND GEOMETRY
# =============================================================================

class TestSymmetryFamilies:
    """Line, self-complementary, threshold and transitive families."""

    def test_line_graph_adjacency(self, run):
        nodes, edges, _ = run(generate_line_graph_edges, 8, line="line_graph")

        present = {frozenset((e.source, e.target)) for e in edges}
        bases = [tuple(node.data["baseEdge"]) for node in nodes]
        assert len(set(bases)) == 8
        for (a, ba), (b, bb) in itertools.combinations(zip(nodes, bases), 2):
            assert (frozenset((a.id, b.id)) in present) == bool(set(ba) & set(bb))

    @pytest.mark.parametrize("n,expected", [(4, 3), (5, 5), (8, 14), (9, 18)])
    def test_self_complementary_edge_count(self, run, n, expected):
        _, edges, _ = run(generate_self_complementary_edges, n, self_complementary="self_complementary")
        assert len(edges) == expected

    def test_threshold(self, run):
        nodes, _, view = run(generate_threshold_edges, 12, threshold="threshold")

        assert is_threshold(view)
        assert nodes[0].data["thresholdType"] == "isolated"

    def test_strongly_regular_pentagon(self, run):
        _, edges, view = run(
            generate_strongly_regular_edges, 5,
            strongly_regular={"kind": "strongly_regular", "k": 2, "lambda": 0, "mu": 1},
        )

        assert len(edges) == 5
        assert strongly_regular_violation(view, 2, 0, 1) is None

    def test_strongly_regular_identity_rejected(self, run):
        with pytest.raises(GenerationError, match="Invalid SRG parameters"):
            run(
                generate_strongly_regular_edges, 10,
                strongly_regular={"kind": "strongly_regular", "k": 3, "lambda": 1, "mu": 1},
            )

    @pytest.mark.parametrize("n,degree", [(8, 3), (9, 4), (7, 2)])
    def test_vertex_transitive_circulant_is_regular(self, run, n, degree):
        _, _, view = run(generate_vertex_transitive_edges, n, vertex_transitive="vertex_transitive")
        assert set(view.degrees()) == {degree}

    def test_edge_and_arc_transitive(self, run):
        _, complete, _ = run(generate_edge_transitive_edges, 5, edge_transitive="edge_transitive")
        _, cycle, view = run(generate_arc_transitive_edges, 6, arc_transitive="arc_transitive")

        assert len(complete) == 10
        assert len(cycle) == 6 and set(view.degrees()) == {2}


class TestGeometric:
    """Unit disk and outerplanar generators."""

    def test_unit_disk_matches_distances(self, run):
        nodes, edges, _ = run(generate_unit_disk_edges, 15, unit_disk={"kind": "unit_disk", "unit_radius": 1.5})

        present = {frozenset((e.source, e.target)) for e in edges}
        for a, b in itertools.combinations(nodes, 2):
            close = math.hypot(a.data["x"] - b.data["x"], a.data["y"] - b.data["y"]) <= 1.5
            assert (frozenset((a.id, b.id)) in present) == close

    def test_planar_chords_never_cross(self, run):
        nodes, edges, view = run(generate_planar_edges, 12, planarity="planar")

        order = sorted(range(view.n), key=lambda v: nodes[v].data["outerplanarPosition"])
        assert len(edges) >= 12
        assert chords_cross(order, view.simple_edges()) is None


# =============================================================================
# PATHS, CYCLES AND METRICS
# =============================================================================

class TestPathCycle:
    """Traversal and metric generators."""

    def test_hamiltonian(self, run):
        _, _, view = run(generate_hamiltonian_edges, 8, hamiltonian="hamiltonian")
        assert has_hamiltonian_cycle(view)

    def test_traceable(self, run):
        _, _, view = run(generate_traceable_edges, 8, traceable="traceable")
        assert has_hamiltonian_path(view)

    @pytest.mark.parametrize("d", [1, 2, 3, 5, 9])
    def test_diameter(self, run, d):
        nodes, _, view = run(generate_diameter_edges, 10, diameter={"kind": "diameter", "value": d})

        assert diameter(view) == d
        assert nodes[0].data["targetDiameter"] == d

    @pytest.mark.parametrize("r", [1, 2, 3])
    def test_radius(self, run, r):
        _, _, view = run(generate_radius_edges, 9, radius={"kind": "radius", "value": r})
        assert radius(view) == r

    def test_girth(self, run):
        _, _, view = run(generate_girth_edges, 10, girth={"kind": "girth", "girth": 5})
        assert girth(view) == 5

    def test_small_girth_request_gives_tree(self, run):
        _, _, view = run(generate_girth_edges, 6, girth={"kind": "girth", "girth": 2})
        assert is_forest(view) and is_connected(view)

    def test_circumference(self, run):
        _, _, view = run(generate_circumference_edges, 9, circumference={"kind": "circumference", "value": 6})
        assert circumference(view) == 6


# =============================================================================
# EXTREMAL INVARIANTS
# =============================================================================

class TestExtremalInvariants:
    """Hereditary classes, independence, vertex cover and domination."""

    def test_triangle_free(self, run):
        nodes, edges, view = run(generate_hereditary_class_edges, 8, hereditary_class={"kind": "hereditary_class", "forbidden": ["K3"]})

        assert len(edges) > 0
        assert find_forbidden_subgraph(view, "K3") is None
        assert nodes[0].data["forbiddenSubgraphs"] == ["K3"]

    def test_unknown_pattern(self, run):
        with pytest.raises(GenerationError, match="Unknown forbidden subgraph pattern"):
            run(generate_hereditary_class_edges, 5, hereditary_class={"kind": "hereditary_class", "forbidden": ["PETERSEN"]})

    def test_independence_number(self, run):
        nodes, _, view = run(generate_independence_number_edges, 7, independence_number={"kind": "independence_number", "value": 3})

        assert independence_number_exact(view) == 3
        assert sum(node.data["inIndependentSet"] for node in nodes) == 3

    def test_independence_exceeds_nodes(self, run):
        with pytest.raises(GenerationError, match="cannot exceed node count"):
            run(generate_independence_number_edges, 5, independence_number={"kind": "independence_number", "value": 9})

    def test_vertex_cover(self, run):
        """A vertex cover of size 4 on 7 nodes leaves an independent set of 3 (Gallai)."""
        _, _, view = run(generate_vertex_cover_edges, 7, vertex_cover={"kind": "vertex_cover", "value": 4})
        assert independence_number_exact(view) == 3

    def test_vertex_cover_equal_to_n_rejected(self, run):
        with pytest.raises(GenerationError, match="must lie in"):
            run(generate_vertex_cover_edges, 4, vertex_cover={"kind": "vertex_cover", "value": 4})

    @pytest.mark.parametrize("n,g", [(8, 3), (6, 4), (5, 1)])
    def test_domination_number(self, run, n, g):
        nodes, _, view = run(generate_domination_number_edges, n, domination_number={"kind": "domination_number", "value": g})

        assert domination_number_exact(view) == g
        assert sum(node.data["inDominatingSet"] for node in nodes) == g
