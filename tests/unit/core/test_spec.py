"""
Unit tests for core/spec.py - The GraphSpec Type System

Tests spec composition and the helpers built on it:
- Defaults and patching (strings, dicts, structs, clearing)
- Strict decoding (unknown axes, kinds and missing parameters)
- JSON round trip of a spec with advanced axes
- Type guards and is_valid_spec rejections
- describe_spec wording
- Core permutation enumeration
"""
import msgspec
import pytest

from core.spec import (
    CORE_AXES,
    DEFAULT_SPEC,
    PRESETS,
    GraphGenError,
    GraphSpec,
    Partiteness,
    SpecError,
    StronglyRegular,
    allows_self_loops,
    axis_kind,
    describe_spec,
    forbids_triangle_minor,
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


# =============================================================================
# COMPOSITION
# =============================================================================

class TestMakeGraphSpec:
    """Tests for make_graph_spec and patch_spec."""

    def test_defaults(self):
        """
        An empty patch gives the documented defaults.

        Verifies:
        - Core axes carry the default kinds
        - Advanced axes are unset
        """
        spec = make_graph_spec()

        assert spec == DEFAULT_SPEC
        assert spec.directionality.kind == "undirected"
        assert spec.weighting.kind == "unweighted"
        assert spec.cycles.kind == "cycles_allowed"
        assert spec.connectivity.kind == "unconstrained"
        assert spec.schema.kind == "homogeneous"
        assert spec.edge_multiplicity.kind == "simple"
        assert spec.self_loops.kind == "disallowed"
        assert spec.density.kind == "unconstrained"
        assert spec.completeness.kind == "incomplete"
        assert spec.partiteness is None
        assert spec.star is None

    def test_string_and_dict_patches(self):
        """Kind strings and parameter dicts are both accepted."""
        spec = make_graph_spec(
            directionality="directed",
            specific_regular={"kind": "k_regular", "k": 3},
        )

        assert spec.directionality.kind == "directed"
        assert spec.specific_regular.k == 3

    def test_struct_patch(self):
        spec = make_graph_spec(partiteness=Partiteness(kind="k_partite", k=3))
        assert axis_kind(spec, "partiteness") == "k_partite"
        assert spec.partiteness.k == 3

    def test_patch_does_not_mutate_base(self):
        base = make_graph_spec(cycles="acyclic")
        patched = patch_spec(base, connectivity="connected")

        assert base.connectivity.kind == "unconstrained"
        assert patched.connectivity.kind == "connected"
        assert patched.cycles.kind == "acyclic"

    def test_none_clears_advanced_axis(self):
        base = make_graph_spec(star="star")
        assert patch_spec(base, star=None).star is None

    def test_core_axis_cannot_be_cleared(self):
        with pytest.raises(SpecError, match="cannot be cleared"):
            make_graph_spec(cycles=None)

    def test_unknown_axis(self):
        with pytest.raises(SpecError, match="Unknown spec axis"):
            make_graph_spec(colour="blue")

    def test_unknown_kind(self):
        """
        Kinds outside an axis's vocabulary are rejected.

        Verifies:
        - SpecError is raised
        - SpecError is both a GraphGenError and a ValueError
        """
        with pytest.raises(SpecError) as exc_info:
            make_graph_spec(cycles="sometimes")

        assert isinstance(exc_info.value, GraphGenError)
        assert isinstance(exc_info.value, ValueError)

    def test_missing_required_parameter(self):
        with pytest.raises(SpecError):
            make_graph_spec(specific_regular="k_regular")

    def test_direct_construction_checks_parameters(self):
        with pytest.raises(ValueError, match="requires parameter 'k'"):
            Partiteness(kind="k_partite")

    def test_lambda_field_is_renamed(self):
        """The SRG λ parameter is spelled 'lambda' on the wire."""
        spec = make_graph_spec(strongly_regular={"kind": "strongly_regular", "k": 2, "lambda": 0, "mu": 1})

        assert spec.strongly_regular.lambda_ == 0
        assert b'"lambda":0' in msgspec.json.encode(spec.strongly_regular)
        assert isinstance(spec.strongly_regular, StronglyRegular)


# =============================================================================
# JSON
# =============================================================================

class TestSpecJson:
    """Tests for spec_from_json / spec_to_json."""

    def test_round_trip_with_advanced_axes(self):
        spec = make_graph_spec(directionality="directed", grid={"kind": "grid", "rows": 3, "cols": 4})
        assert msgspec.json.decode(spec_to_json(spec), type=GraphSpec) == spec

    def test_from_json_is_a_patch(self):
        spec = spec_from_json(b'{"cycles": "acyclic", "connectivity": "connected"}')

        assert is_acyclic(spec)
        assert is_connected(spec)
        assert spec.directionality.kind == "undirected"

    def test_from_json_rejects_garbage(self):
        with pytest.raises(SpecError, match="could not be decoded"):
            spec_from_json(b"{not json")

    def test_from_json_rejects_non_object(self):
        with pytest.raises(SpecError, match="object of axis patches"):
            spec_from_json(b"[1, 2, 3]")


# =============================================================================
# GUARDS AND VALIDITY
# =============================================================================

class TestTypeGuards:
    """Tests for the is_* guards."""

    def test_guards_on_defaults(self):
        spec = make_graph_spec()
        assert not is_directed(spec)
        assert not is_weighted(spec)
        assert not is_acyclic(spec)
        assert not is_connected(spec)
        assert not is_heterogeneous(spec)
        assert not is_multigraph(spec)
        assert not allows_self_loops(spec)
        assert not is_complete(spec)

    def test_guards_when_set(self):
        spec = make_graph_spec(
            directionality="directed",
            weighting="weighted_numeric",
            schema="heterogeneous",
            edge_multiplicity="multi",
            self_loops="allowed",
        )
        assert is_directed(spec)
        assert is_weighted(spec)
        assert is_heterogeneous(spec)
        assert is_multigraph(spec)
        assert allows_self_loops(spec)

    def test_axis_kind_unset(self):
        assert axis_kind(make_graph_spec(), "wheel") is None

    @pytest.mark.parametrize("patch,expected", [
        ({"minor_free": {"kind": "minor_free", "forbidden_minors": ["K3"]}}, True),
        ({"topological_minor_free": {"kind": "topological_minor_free", "forbidden_minors": [" triangle "]}}, True),
        ({"minor_free": {"kind": "minor_free", "forbidden_minors": ["K5", "K3,3"]}}, False),
        ({}, False),
    ])
    def test_forbids_triangle_minor(self, patch, expected):
        assert forbids_triangle_minor(make_graph_spec(**patch)) is expected


class TestIsValidSpec:
    """
    Tests for is_valid_spec.

    Verifies:
    - Each definitional contradiction is rejected
    - Near misses are accepted
    """

    @pytest.mark.parametrize("patch", [
        {"self_loops": "allowed", "cycles": "acyclic"},
        {"completeness": "complete", "cycles": "acyclic"},
        {"completeness": "complete", "density": "sparse"},
        {"completeness": "complete", "edge_multiplicity": "multi"},
        {"cycles": "acyclic", "connectivity": "connected", "density": "dense"},
        {"cycles": "acyclic", "density": "moderate"},
    ])
    def test_contradictions_rejected(self, patch):
        assert not is_valid_spec(make_graph_spec(**patch))

    @pytest.mark.parametrize("patch", [
        {},
        {"cycles": "acyclic", "connectivity": "connected", "density": "sparse"},
        {"cycles": "acyclic", "connectivity": "connected", "density": "moderate"},
        {"completeness": "complete", "density": "dense"},
        {"self_loops": "allowed", "edge_multiplicity": "multi"},
    ])
    def test_consistent_specs_accepted(self, patch):
        assert is_valid_spec(make_graph_spec(**patch))


# =============================================================================
# DESCRIPTION AND PERMUTATIONS
# =============================================================================

def test_describe_spec():
    """
    describe_spec lists the non-default core properties in a fixed order.

    Verifies:
    - Direction always comes first
    - Density and completeness come last
    """
    assert describe_spec(make_graph_spec()) == "undirected"
    assert describe_spec(make_graph_spec(directionality="directed", cycles="acyclic")) == "directed, acyclic"

    spec = make_graph_spec(
        weighting="weighted_numeric",
        connectivity="connected",
        self_loops="allowed",
        density="dense",
        completeness="complete",
    )
    assert describe_spec(spec) == "undirected, weighted, connected, self-loops, dense, complete"


def test_core_permutations():
    """
    Permutations cover exactly the valid core combinations.

    Verifies:
    - 432 of the 2048 combinations survive the filter
    - Every survivor is valid and distinct
    - Enumeration order is stable
    """
    specs = generate_core_spec_permutations()

    assert len(specs) == 432
    assert all(is_valid_spec(spec) for spec in specs)
    assert len({spec_to_json(spec) for spec in specs}) == len(specs)
    assert specs == generate_core_spec_permutations()


def test_presets():
    assert set(PRESETS) == {
        "simple_undirected_graph",
        "simple_directed_graph",
        "dag",
        "tree",
        "weighted_directed_network",
    }
    tree = PRESETS["tree"]()
    assert is_acyclic(tree) and is_connected(tree)
    assert len(CORE_AXES) == 9
