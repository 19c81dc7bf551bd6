"""
Unit tests for core/graph_invariants.py - Graph Algorithms for Validation

Tests the GraphView index and the recognisers built on it:
1. GraphView (adjacency, self-loops, duplicates, unknown ids)
2. Connectivity, bipartiteness and rustworkx conversion
3. Cycles and distances (girth, circumference, Hamiltonicity, diameter)
4. Graph classes (chordal, split, cograph, claw-free, comparability, threshold)
5. Independence, domination and colouring
6. Forbidden induced subgraphs
"""
import pytest
import rustworkx as rx

from core.graph_invariants import (
    GraphView,
    bipartite_coloring,
    check_bipartite_with_bfs,
    chords_cross,
    chromatic_number_exact,
    circumference,
    connected_components,
    diameter,
    domination_number_exact,
    domination_number_greedy,
    edge_connectivity,
    find_chordless_cycle,
    find_claw,
    find_forbidden_subgraph,
    find_induced_p4,
    girth,
    has_directed_cycle,
    has_hamiltonian_cycle,
    has_hamiltonian_path,
    independence_number_exact,
    independence_number_greedy,
    is_chordal,
    is_cograph,
    is_comparability,
    is_connected,
    is_dominating_set,
    is_forest,
    is_k_colorable,
    is_split,
    is_threshold,
    is_transitive_orientation,
    maximum_matching_size,
    radius,
    strongly_regular_violation,
    to_rustworkx,
    treewidth_upper_bound,
    vertex_connectivity_exact,
)


def cycle_pairs(n):
    return [(i, (i + 1) % n) for i in range(n)]


def path_pairs(n):
    return [(i, i + 1) for i in range(n - 1)]


def complete_pairs(n):
    return [(i, j) for i in range(n) for j in range(i + 1, n)]


PETERSEN = (
    cycle_pairs(5)
    + [(5 + i, 5 + (i + 2) % 5) for i in range(5)]
    + [(i, i + 5) for i in range(5)]
)


@pytest.fixture
def view(make_graph):
    def _view(n, pairs, directed=False):
        return GraphView.from_graph(make_graph(n, pairs, directed=directed))
    return _view


# =============================================================================
# GRAPH VIEW
# =============================================================================

class TestGraphView:
    """Tests for the index-based GraphView."""

    def test_simple_adjacency(self, view):
        """
        Undirected edges appear on both sides.

        Verifies:
        - adj is symmetric
        - n and m count vertices and edges
        - simple_edges lists each edge once as (u < v)
        """
        v = view(3, [(0, 1), (2, 1)])

        assert v.n == 3
        assert v.m == 2
        assert v.adj[1] == {0, 2}
        assert v.simple_edges() == [(0, 1), (1, 2)]
        assert v.degrees() == [1, 2, 1]

    def test_self_loops_and_duplicates(self, view):
        v = view(2, [(0, 0), (0, 1), (1, 0)])

        assert v.self_loops == 1
        assert v.duplicate_edges == 1
        assert v.endpoint_degree == [4, 2]
        assert v.simple_edge_count() == 1

    def test_directed_arcs(self, view):
        v = view(2, [(0, 1), (1, 0)], directed=True)

        assert v.duplicate_edges == 0
        assert v.has_arc(0, 1) and v.has_arc(1, 0)
        assert v.has_edge(0, 1)

    def test_unknown_node_rejected(self, make_graph):
        graph = make_graph(2, [(0, 1)])
        graph.edges[0].target = "N9"
        with pytest.raises(ValueError, match="unknown node"):
            GraphView.from_graph(graph)

    def test_add_and_remove_edge(self, view):
        v = view(3, [])
        v.add_edge(0, 2)
        assert v.has_edge(2, 0)
        v.remove_edge(0, 2)
        assert not v.has_edge(0, 2)
        assert v.m == 0


# =============================================================================
# CONNECTIVITY AND BIPARTITENESS
# =============================================================================

class TestConnectivity:
    """Components, bipartiteness and conversion."""

    def test_components_sorted(self, view):
        v = view(5, [(3, 4), (0, 1)])
        assert connected_components(v) == [[0, 1], [2], [3, 4]]
        assert not is_connected(v)

    def test_null_graph_connected(self, view):
        assert is_connected(view(0, []))

    def test_components_within_subset(self, view):
        v = view(4, path_pairs(4))
        assert connected_components(v, [0, 1, 3]) == [[0, 1], [3]]

    def test_bipartite_bfs(self, make_graph):
        even = make_graph(4, cycle_pairs(4))
        odd = make_graph(5, cycle_pairs(5))
        looped = make_graph(2, [(0, 1), (1, 1)])

        assert check_bipartite_with_bfs(even.nodes, even.edges)
        assert not check_bipartite_with_bfs(odd.nodes, odd.edges)
        assert not check_bipartite_with_bfs(looped.nodes, looped.edges)

    def test_bipartite_coloring_alternates(self, view):
        coloring = bipartite_coloring(view(4, path_pairs(4)))
        assert coloring == [0, 1, 0, 1]

    def test_to_rustworkx(self, make_graph):
        """
        Conversion keeps direction and payloads.

        Verifies:
        - Undirected specs give PyGraph, directed give PyDiGraph
        - Node payloads are the TestNode records
        """
        undirected = to_rustworkx(make_graph(3, path_pairs(3)))
        directed = to_rustworkx(make_graph(3, path_pairs(3), directed=True))

        assert isinstance(undirected, rx.PyGraph)
        assert isinstance(directed, rx.PyDiGraph)
        assert undirected.num_edges() == 2
        assert [node.id for node in directed.nodes()] == ["N0", "N1", "N2"]

    def test_connectivity_strength(self, view):
        assert vertex_connectivity_exact(view(5, complete_pairs(5))) == 4
        assert vertex_connectivity_exact(view(6, cycle_pairs(6))) == 2
        assert vertex_connectivity_exact(view(4, path_pairs(4))) == 1
        assert edge_connectivity(view(6, cycle_pairs(6))) == 2
        assert edge_connectivity(view(4, [(0, 1), (2, 3)])) == 0


# =============================================================================
# CYCLES AND DISTANCES
# =============================================================================

class TestCycles:
    """Cycle detection and cycle-length invariants."""

    def test_forest(self, view):
        assert is_forest(view(4, path_pairs(4)))
        assert not is_forest(view(3, cycle_pairs(3)))

    def test_forest_with_parallel_edges(self, view):
        v = view(2, [(0, 1), (0, 1)])
        assert not is_forest(v)
        assert is_forest(v, collapse_parallel=True)

    def test_directed_cycle(self, view):
        assert not has_directed_cycle(view(3, [(0, 1), (1, 2), (0, 2)], directed=True))
        assert has_directed_cycle(view(3, [(0, 1), (1, 2), (2, 0)], directed=True))
        assert has_directed_cycle(view(1, [(0, 0)], directed=True))

    def test_girth(self, view):
        assert girth(view(4, path_pairs(4))) is None
        assert girth(view(6, cycle_pairs(6))) == 6
        assert girth(view(10, PETERSEN)) == 5
        assert girth(view(4, complete_pairs(4))) == 3

    def test_circumference(self, view):
        assert circumference(view(4, path_pairs(4))) is None
        assert circumference(view(5, cycle_pairs(5))) == 5
        # Triangle with a pendant path
        assert circumference(view(5, cycle_pairs(3) + [(2, 3), (3, 4)])) == 3

    def test_hamiltonian(self, view):
        """
        Hamiltonian cycle and path detection.

        Verifies:
        - Cycles are Hamiltonian, paths only traceable
        - The star K_{1,3} is neither
        - The Petersen graph is traceable but not Hamiltonian
        """
        assert has_hamiltonian_cycle(view(5, cycle_pairs(5)))
        assert not has_hamiltonian_cycle(view(4, path_pairs(4)))
        assert has_hamiltonian_path(view(4, path_pairs(4)))
        assert not has_hamiltonian_path(view(4, [(0, 1), (0, 2), (0, 3)]))
        assert not has_hamiltonian_cycle(view(10, PETERSEN))
        assert has_hamiltonian_path(view(10, PETERSEN))

    def test_small_graph_conventions(self, view):
        assert not has_hamiltonian_cycle(view(2, [(0, 1)]))
        assert has_hamiltonian_path(view(1, []))


class TestDistances:
    """Diameter and radius over reachable vertices."""

    def test_path(self, view):
        v = view(5, path_pairs(5))
        assert diameter(v) == 4
        assert radius(v) == 2

    def test_disconnected_uses_reachable_pairs(self, view):
        v = view(5, [(0, 1), (1, 2), (3, 4)])
        assert diameter(v) == 2
        assert radius(v) == 1

    def test_trivial(self, view):
        assert diameter(view(1, [])) == 0
        assert diameter(view(0, [])) == 0


# =============================================================================
# GRAPH CLASSES
# =============================================================================

class TestGraphClasses:
    """Recognisers for the structural graph classes."""

    def test_chordal(self, view):
        assert is_chordal(view(4, complete_pairs(4)))
        assert is_chordal(view(5, path_pairs(5)))
        assert not is_chordal(view(4, cycle_pairs(4)))
        assert find_chordless_cycle(view(5, cycle_pairs(5))) == [0, 1, 2, 3, 4]
        assert find_chordless_cycle(view(4, complete_pairs(4))) is None

    def test_split(self, view):
        # Triangle with a pendant on each vertex: clique + independent set
        assert is_split(view(6, cycle_pairs(3) + [(0, 3), (1, 4), (2, 5)]))
        assert not is_split(view(4, cycle_pairs(4)))
        assert not is_split(view(4, [(0, 1), (2, 3)]))

    def test_cograph(self, view):
        assert is_cograph(view(4, cycle_pairs(4)))
        assert not is_cograph(view(4, path_pairs(4)))
        assert find_induced_p4(view(4, path_pairs(4))) == [0, 1, 2, 3]
        assert find_induced_p4(view(4, complete_pairs(4))) is None

    def test_claw(self, view):
        assert find_claw(view(4, [(0, 1), (0, 2), (0, 3)])) == (0, (1, 2, 3))
        assert find_claw(view(5, cycle_pairs(5))) is None

    def test_comparability(self, view):
        """
        C5 is the smallest graph that is not transitively orientable.

        Verifies:
        - Even cycles and complete graphs are comparability graphs
        - C5 is not
        """
        assert is_comparability(view(4, cycle_pairs(4)))
        assert is_comparability(view(4, complete_pairs(4)))
        assert not is_comparability(view(5, cycle_pairs(5)))

    def test_transitive_orientation(self, view):
        v = view(3, path_pairs(3))
        # 0 < 1 > 2: orientation toward the middle is transitive
        assert is_transitive_orientation(v, {0: 0, 1: 2, 2: 1})
        # 0 -> 1 -> 2 without 0 -> 2 is not
        assert not is_transitive_orientation(v, {0: 0, 1: 1, 2: 2})

    def test_threshold(self, view):
        assert is_threshold(view(4, [(0, 1), (0, 2), (0, 3)]))
        assert not is_threshold(view(4, path_pairs(4)))

    def test_chords_cross(self):
        assert chords_cross([0, 1, 2, 3], [(0, 2), (1, 3)]) == ((0, 2), (1, 3))
        assert chords_cross([0, 1, 2, 3], [(0, 2), (0, 3)]) is None

    def test_strongly_regular(self, view):
        assert strongly_regular_violation(view(10, PETERSEN), 3, 0, 1) is None
        assert strongly_regular_violation(view(5, cycle_pairs(5)), 2, 0, 1) is None
        message = strongly_regular_violation(view(6, cycle_pairs(6)), 2, 0, 1)
        assert message is not None and "μ=1" in message

    def test_treewidth_bound(self, view):
        assert treewidth_upper_bound(view(6, path_pairs(6))) == 1
        assert treewidth_upper_bound(view(6, cycle_pairs(6))) == 2
        assert treewidth_upper_bound(view(5, complete_pairs(5))) == 4


# =============================================================================
# INDEPENDENCE, DOMINATION, COLORING
# =============================================================================

class TestExtremalInvariants:
    """Exact and greedy extremal invariants."""

    def test_independence_number(self, view):
        assert independence_number_exact(view(5, cycle_pairs(5))) == 2
        assert independence_number_exact(view(10, PETERSEN)) == 4
        assert independence_number_exact(view(4, [])) == 4
        assert independence_number_greedy(view(6, path_pairs(6))) <= 3

    def test_domination_number(self, view):
        star = view(5, [(0, i) for i in range(1, 5)])
        assert domination_number_exact(star) == 1
        assert domination_number_exact(view(6, cycle_pairs(6))) == 2
        assert domination_number_exact(view(10, PETERSEN)) == 3
        assert domination_number_greedy(star) == 1

    def test_dominating_set(self, view):
        v = view(6, cycle_pairs(6))
        assert is_dominating_set(v, [0, 3])
        assert not is_dominating_set(v, [0, 1])

    def test_coloring(self, view):
        assert is_k_colorable(view(6, cycle_pairs(6)), 2)
        assert not is_k_colorable(view(5, cycle_pairs(5)), 2)
        assert chromatic_number_exact(view(5, cycle_pairs(5))) == 3
        assert chromatic_number_exact(view(4, complete_pairs(4))) == 4
        assert chromatic_number_exact(view(3, [])) == 1

    def test_matching(self, view):
        assert maximum_matching_size(view(6, path_pairs(6))) == 3
        assert maximum_matching_size(view(4, [(0, 1), (0, 2), (0, 3)])) == 1


# =============================================================================
# FORBIDDEN SUBGRAPHS
# =============================================================================

class TestForbiddenSubgraphs:
    """Named induced-subgraph search."""

    def test_triangle(self, view):
        v = view(4, cycle_pairs(3) + [(2, 3)])
        assert find_forbidden_subgraph(v, "K3") == [0, 1, 2]
        assert find_forbidden_subgraph(v, "triangle") == [0, 1, 2]

    def test_induced_only(self, view):
        """K4 contains C4 as a subgraph, but not as an induced one."""
        assert find_forbidden_subgraph(view(4, complete_pairs(4)), "C4") is None
        assert find_forbidden_subgraph(view(4, cycle_pairs(4)), "C4") == [0, 1, 2, 3]

    def test_containing(self, view):
        v = view(6, [(0, 1), (1, 2), (3, 4), (4, 5)])
        assert find_forbidden_subgraph(v, "P3", containing=[4]) == [4, 3, 5]

    def test_unknown_pattern(self, view):
        with pytest.raises(KeyError):
            find_forbidden_subgraph(view(3, []), "PETERSEN")
