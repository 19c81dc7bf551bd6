"""
Unit tests for forge/structure_handlers.py - Standard Structure + Metadata

Tests:
- generate_standard_edges connectivity x cycles dispatch
- create_property_handler naming and composition (standard, density, attach)
- Each attach_* function's stored keys and its missing-axis error
"""
import math

import pytest

from core.analytics import moore_bound, toughness_exact
from core.graph_invariants import girth, is_connected, is_forest
from core.schemas import GenerationError
from forge.structure_handlers import (
    create_property_handler,
    generate_standard_edges,
    handle_algebraic_connectivity,
    handle_cage,
    handle_cartesian_product,
    handle_integrity,
    handle_lexicographic_product,
    handle_minor_free,
    handle_moore,
    handle_ramanujan,
    handle_spectral_radius,
    handle_spectrum,
    handle_topological_minor_free,
    handle_toughness,
)


# =============================================================================
# STANDARD EDGES
# =============================================================================

class TestStandardEdges:
    """Connectivity x cycles default structure."""

    def test_tree(self, run):
        _, edges, view = run(generate_standard_edges, 10, connectivity="connected", cycles="acyclic")

        assert len(edges) == 9
        assert is_connected(view) and is_forest(view)

    def test_connected_cyclic(self, run):
        _, _, view = run(generate_standard_edges, 10, connectivity="connected")

        assert is_connected(view)
        assert not is_forest(view)

    def test_forest(self, run):
        _, _, view = run(generate_standard_edges, 10, cycles="acyclic")
        assert is_forest(view)

    def test_disconnected(self, run):
        _, _, view = run(generate_standard_edges, 10)
        assert not is_connected(view)


# =============================================================================
# HANDLER COMPOSITION
# =============================================================================

class TestPropertyHandler:
    """Tests for create_property_handler."""

    def test_handler_name(self):
        assert handle_spectrum.__name__ == "handle_spectrum"
        assert handle_topological_minor_free.__name__ == "handle_topological_minor_free"

    def test_runs_standard_edges_first(self, run):
        """
        The attach step sees the finished standard structure.

        Verifies:
        - The attach function receives the tree edges
        """
        seen = []

        def attach_marker(nodes, edges, spec, rng):
            seen.append(len(edges))

        handler = create_property_handler(attach_marker)
        run(handler, 6, connectivity="connected", cycles="acyclic")

        assert handler.__name__ == "handle_marker"
        assert seen == [5]

    def test_dense_tier_reached_before_attach(self, run):
        """
        A dense toughness spec gets the density pass before it is measured.

        Verifies:
        - At least 60% of the 66 possible edges on 12 vertices
        - The stored toughness describes the final edge set
        """
        nodes, edges, view = run(
            handle_toughness, 12, connectivity="connected", density="dense",
            toughness={"kind": "toughness", "value": 1.0},
        )

        assert len(edges) >= 0.6 * 66
        assert nodes[0].data["toughness"] == pytest.approx(toughness_exact(view))

    def test_forbidden_triangle_minor_builds_forest(self, run):
        """K3-minor-free leaves a spanning tree even with a dense tier."""
        nodes, edges, view = run(
            handle_minor_free, 8, connectivity="connected", density="dense",
            minor_free={"kind": "minor_free", "forbidden_minors": ["K3"]},
        )

        assert len(edges) == 7
        assert is_connected(view) and is_forest(view)
        assert nodes[0].data["forbiddenMinors"] == ["K3"]

    def test_forbidden_triangle_topological_minor_builds_forest(self, run):
        _, _, view = run(
            handle_topological_minor_free, 9,
            topological_minor_free={"kind": "topological_minor_free", "forbidden_minors": ["triangle"]},
        )
        assert is_forest(view)

    @pytest.mark.parametrize("handler,label", [
        (handle_spectrum, "Spectrum"),
        (handle_toughness, "Toughness"),
        (handle_moore, "Moore graph"),
        (handle_cartesian_product, "Cartesian product"),
        (handle_minor_free, "Minor-free"),
    ])
    def test_missing_axis(self, run, handler, label):
        with pytest.raises(GenerationError, match=f"{label} computation requires {label} spec"):
            run(handler, 5)


# =============================================================================
# ATTACHED METADATA
# =============================================================================

class TestAttachedMetadata:
    """Keys written by each attach function."""

    def test_spectrum(self, run):
        nodes, _, _ = run(
            handle_spectrum, 6, connectivity="connected",
            spectrum={"kind": "spectrum", "eigenvalues": [2.0, 0.0, -2.0]},
        )

        assert nodes[0].data["targetSpectrum"] == [2.0, 0.0, -2.0]
        assert len(nodes[0].data["actualSpectrum"]) == 6

    def test_algebraic_connectivity_positive_when_connected(self, run):
        nodes, _, _ = run(
            handle_algebraic_connectivity, 6, connectivity="connected",
            algebraic_connectivity={"kind": "algebraic_connectivity", "value": 1.0},
        )

        assert nodes[0].data["algebraicConnectivity"] > 0
        assert nodes[0].data["targetAlgebraicConnectivity"] == 1.0

    def test_spectral_radius(self, run):
        nodes, _, _ = run(
            handle_spectral_radius, 6, connectivity="connected", cycles="acyclic",
            spectral_radius={"kind": "spectral_radius", "value": 2.0},
        )
        assert nodes[0].data["spectralRadius"] >= 1.0

    @pytest.mark.parametrize("n,method", [(8, "exact"), (15, "approximation")])
    def test_toughness_method(self, run, n, method):
        nodes, _, _ = run(
            handle_toughness, n, connectivity="connected",
            toughness={"kind": "toughness", "value": 1.0},
        )

        assert nodes[0].data["toughnessMethod"] == method
        assert nodes[0].data["targetToughness"] == 1.0

    def test_integrity(self, run):
        nodes, _, _ = run(
            handle_integrity, 6, connectivity="connected",
            integrity={"kind": "integrity", "value": 3.0},
        )

        assert nodes[0].data["integrityMethod"] == "exact"
        assert 1 <= nodes[0].data["integrity"] <= 6

    def test_cage_records_actual_girth(self, run):
        nodes, _, view = run(handle_cage, 8, connectivity="connected", cage={"kind": "cage", "girth": 5, "degree": 3})

        assert nodes[0].data["actualGirth"] == girth(view)
        assert nodes[0].data["actualMaxDegree"] == max(view.degrees())
        assert nodes[0].data["targetGirth"] == 5

    def test_moore_bound(self, run):
        nodes, _, _ = run(handle_moore, 10, connectivity="connected", moore={"kind": "moore", "degree": 3, "diameter": 2})
        assert nodes[0].data["mooreBound"] == moore_bound(3, 2) == 10

    def test_ramanujan_bound(self, run):
        nodes, _, _ = run(handle_ramanujan, 8, connectivity="connected", ramanujan={"kind": "ramanujan", "degree": 3})

        assert nodes[0].data["ramanujanBound"] == pytest.approx(2 * math.sqrt(2))
        assert nodes[0].data["secondEigenvalue"] is not None

    def test_products(self, run):
        nodes, _, _ = run(
            handle_lexicographic_product, 6,
            lexicographic_product={"kind": "lexicographic_product", "left_factors": 2, "right_factors": 3},
        )

        data = nodes[0].data
        assert data["productType"] == "lexicographic_product"
        assert (data["leftFactors"], data["rightFactors"]) == (2, 3)

    def test_minor_lists(self, run):
        nodes, _, _ = run(handle_minor_free, 5, minor_free={"kind": "minor_free", "forbidden_minors": ["K5", "K3,3"]})
        assert nodes[0].data["forbiddenMinors"] == ["K5", "K3,3"]
