"""
Unit tests for forge/topologist.py - Fixed-Shape Generators

Tests the families whose edge count is pinned by the shape:
- Trees, stars and binary trees (three flavours)
- Wheels, grids and tori
- Tournaments and k-regular circulants, including the
  infeasible-parameter errors
"""
from collections import Counter

import pytest

from core.graph_invariants import is_connected, is_forest
from core.schemas import GenerationError, TestNode
from core.spec import make_graph_spec
from forge.edges import EdgeSet
from forge.topologist import (
    generate_binary_tree_edges,
    generate_cubic_edges,
    generate_grid_edges,
    generate_k_regular_edges,
    generate_regular_edges,
    generate_star_edges,
    generate_toroidal_edges,
    generate_tournament_edges,
    generate_tree_edges,
    generate_wheel_edges,
)


# =============================================================================
# TREES
# =============================================================================

class TestTrees:
    """Random trees, stars and binary trees."""

    @pytest.mark.parametrize("n", [1, 2, 10, 25])
    def test_random_tree(self, run, n):
        _, edges, view = run(generate_tree_edges, n)

        assert len(edges) == n - 1
        assert is_connected(view)
        assert is_forest(view)

    def test_star(self, run):
        """
        Star on 6 nodes.

        Verifies:
        - 5 edges, all touching N0
        - Hub degree 5, leaves degree 1
        """
        _, edges, view = run(generate_star_edges, 6)

        assert len(edges) == 5
        assert all(edge.source == "N0" for edge in edges)
        assert view.degrees() == [5, 1, 1, 1, 1, 1]

    def test_complete_binary_is_heap(self, run):
        _, edges, _ = run(generate_binary_tree_edges, 7, binary_tree="complete_binary")

        pairs = {(e.source, e.target) for e in edges}
        assert len(edges) == 6
        assert pairs == {
            ("N0", "N1"), ("N0", "N2"),
            ("N1", "N3"), ("N1", "N4"),
            ("N2", "N5"), ("N2", "N6"),
        }

    def test_full_binary_degrees(self, run):
        """
        Every internal vertex of a full binary tree has exactly two children.

        Verifies:
        - n - 1 edges
        - Each parent appears as a source exactly twice
        """
        _, edges, view = run(generate_binary_tree_edges, 9, binary_tree="full_binary")

        assert len(edges) == 8
        assert is_forest(view) and is_connected(view)
        assert set(Counter(e.source for e in edges).values()) == {2}

    def test_full_binary_even_count_rejected(self, run):
        with pytest.raises(GenerationError, match="odd number of nodes, got 6"):
            run(generate_binary_tree_edges, 6, binary_tree="full_binary")

    def test_arbitrary_binary_tree(self, run):
        _, edges, view = run(generate_binary_tree_edges, 15, binary_tree="binary_tree")

        assert len(edges) == 14
        assert is_connected(view)
        assert max(Counter(e.source for e in edges).values()) <= 2


# =============================================================================
# HUB AND LATTICE SHAPES
# =============================================================================

class TestLattices:
    """Wheels, grids and tori."""

    def test_wheel(self, run):
        _, edges, view = run(generate_wheel_edges, 6)

        assert len(edges) == 10
        assert view.degree(0) == 5
        assert all(view.degree(v) == 3 for v in range(1, 6))

    def test_grid(self, run):
        _, edges, view = run(generate_grid_edges, 12, grid={"kind": "grid", "rows": 3, "cols": 4})

        assert len(edges) == 17
        assert sorted(view.degrees()) == [2] * 4 + [3] * 6 + [4] * 2

    def test_grid_smaller_than_node_count(self, run):
        """Nodes past rows x cols stay isolated."""
        _, edges, view = run(generate_grid_edges, 6, grid={"kind": "grid", "rows": 2, "cols": 2})

        assert len(edges) == 4
        assert view.degree(4) == 0 and view.degree(5) == 0

    def test_torus(self, run):
        _, edges, view = run(generate_toroidal_edges, 9, toroidal={"kind": "toroidal", "rows": 3, "cols": 3})

        assert len(edges) == 18
        assert set(view.degrees()) == {4}

    def test_torus_short_dimension_does_not_wrap(self, run):
        _, edges, _ = run(generate_toroidal_edges, 8, toroidal={"kind": "toroidal", "rows": 2, "cols": 4})
        assert len(edges) == 12


# =============================================================================
# ORIENTED AND REGULAR SHAPES
# =============================================================================

class TestTournamentAndRegular:
    """Tournaments and regular circulants."""

    def test_tournament(self, run):
        """
        One arc per unordered pair.

        Verifies:
        - n(n-1)/2 arcs
        - No pair appears in both directions
        """
        _, edges, _ = run(generate_tournament_edges, 5, directed=True, tournament="tournament")

        pairs = {(e.source, e.target) for e in edges}
        assert len(edges) == 10
        assert not any((t, s) in pairs for s, t in pairs)

    @pytest.mark.parametrize("n,k", [(8, 3), (7, 4), (6, 2), (10, 5)])
    def test_regular_degrees(self, run, n, k):
        _, edges, view = run(
            generate_k_regular_edges, n,
            specific_regular={"kind": "k_regular", "k": k},
        )

        assert set(view.degrees()) == {k}
        assert len(edges) == n * k // 2

    def test_cubic(self, run):
        _, _, view = run(generate_cubic_edges, 8, cubic="cubic")
        assert set(view.degrees()) == {3}

    def test_k_not_below_n(self, run):
        with pytest.raises(GenerationError, match="k-regular graph requires k < n"):
            run(generate_k_regular_edges, 3, specific_regular={"kind": "k_regular", "k": 5})

    def test_odd_degree_sum(self, run):
        with pytest.raises(GenerationError, match="n\\*k to be even"):
            run(generate_k_regular_edges, 5, specific_regular={"kind": "k_regular", "k": 3})

    def test_zero_regular(self, rng):
        nodes = [TestNode(id=f"N{i}") for i in range(4)]
        edges = EdgeSet(directed=False)
        generate_regular_edges(nodes, edges, make_graph_spec(), rng, 0)
        assert len(edges) == 0
