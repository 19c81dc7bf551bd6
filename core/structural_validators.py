"""
GRAPHGEN STRUCTURAL VALIDATORS - Checks for Shapes and Graph Classes

Validators for the special structures (stars, lattices, trees, tournaments,
regular and connectivity families), the hereditary graph classes (split,
cograph, chordal, interval, ...) and the symmetry / traversal classes.

Checks follow a tiered strategy:
1. Generator metadata in node.data (interval endpoints, permutation values,
   split membership, cycle positions) is checked against the edge set
2. Small graphs get an exact combinatorial search, bounded by the
   *_exact_max_nodes limits in [validation]
3. Large graphs fall back to a necessary condition and report the result
   as inconclusive
"""
import itertools
import math
from typing import List, Optional, Set, Tuple

from core.graph_invariants import (
    bipartite_coloring,
    chords_cross,
    chromatic_number_exact,
    connected_components,
    degeneracy,
    edge_connectivity,
    find_chordless_cycle,
    find_claw,
    find_induced_p4,
    greedy_coloring,
    has_hamiltonian_cycle,
    has_hamiltonian_path,
    is_chordal,
    is_cograph,
    is_comparability,
    is_connected,
    is_forest,
    is_k_colorable,
    is_proper_coloring,
    is_split,
    is_threshold,
    is_transitive_orientation,
    maximum_matching_size,
    split_partition_holds,
    strongly_regular_violation,
    treewidth_upper_bound,
    vertex_connectivity_exact,
)
from core.schemas import PropertyValidationResult
from core.validator_base import (
    InconsistentMetadata,
    ValidationContext,
    failed,
    inconclusive,
    inconsistent,
    not_applicable,
    passed,
    trivial,
)


def _is_regular(degrees: List[int]) -> bool:
    return len(set(degrees)) <= 1


def _is_tree(ctx: ValidationContext) -> bool:
    return is_connected(ctx.view) and is_forest(ctx.view, collapse_parallel=False) and ctx.view.self_loops == 0


def _labels(ctx: ValidationContext, vertices) -> List[str]:
    return [ctx.view.ids[v] for v in vertices]


# =============================================================================
# SPECIAL STRUCTURES
# =============================================================================

def validate_complete_bipartite(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("complete_bipartite")
    if kind != "complete_bipartite":
        return not_applicable("complete_bipartite", kind)

    axis = ctx.spec.complete_bipartite
    expected = f"K_{{{axis.m},{axis.n}}}"
    view = ctx.view
    left = [i for i, node in enumerate(ctx.nodes) if node.partition == "left"]
    right = [i for i, node in enumerate(ctx.nodes) if node.partition == "right"]

    missing = sum(1 for a in left for b in right if not view.has_edge(a, b))
    if missing:
        return failed("complete_bipartite", expected, f"missing {missing} cross edges",
                      f"Complete bipartite graph is missing {missing} edge(s) between partitions")
    for side, label in ((left, "left"), (right, "right")):
        for a, b in itertools.combinations(side, 2):
            if view.has_edge(a, b):
                return failed("complete_bipartite", expected, "edge within partition",
                              f"Edge {view.ids[a]}-{view.ids[b]} joins two {label} vertices")
    return passed("complete_bipartite", expected, f"K_{{{len(left)},{len(right)}}}")


def validate_star(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("star")
    if kind != "star":
        return not_applicable("star", kind)
    n = ctx.n
    if n < 3:
        return trivial("star", "star")

    degrees = ctx.view.degrees()
    centre = max(range(n), key=lambda v: degrees[v])
    leaves_ok = all(degrees[v] == 1 for v in range(n) if v != centre)
    if degrees[centre] != n - 1 or not leaves_ok or ctx.view.simple_edge_count() != n - 1:
        return failed("star", "star", "not_star",
                      f"Star requires one centre of degree {n - 1} and {n - 1} leaves of degree 1")
    return passed("star", "star")


def validate_wheel(ctx: ValidationContext) -> PropertyValidationResult:
    """Hub of degree n-1, rim vertices of degree 3, 2(n-1) edges."""
    kind = ctx.kind("wheel")
    if kind != "wheel":
        return not_applicable("wheel", kind)
    n = ctx.n
    if n < 4:
        return trivial("wheel", "wheel")

    degrees = ctx.view.degrees()
    hub = max(range(n), key=lambda v: degrees[v])
    rim_ok = all(degrees[v] == 3 for v in range(n) if v != hub)
    edge_count = ctx.view.simple_edge_count()
    if degrees[hub] != n - 1 or not rim_ok or edge_count != 2 * (n - 1):
        return failed("wheel", "wheel", f"{edge_count} edges",
                      f"Wheel requires a hub of degree {n - 1}, rim degree 3 and {2 * (n - 1)} edges")
    return passed("wheel", "wheel")


def _lattice_edge_count(rows: int, cols: int, cells: int, wrap: bool) -> int:
    pairs: Set[Tuple[int, int]] = set()
    for r in range(rows):
        for c in range(cols):
            here = r * cols + c
            if here >= cells:
                continue
            right = r * cols + c + 1 if c + 1 < cols else (r * cols if wrap and cols >= 3 else None)
            down = (r + 1) * cols + c if r + 1 < rows else (c if wrap and rows >= 3 else None)
            for other in (right, down):
                if other is not None and other < cells and other != here:
                    pairs.add((min(here, other), max(here, other)))
    return len(pairs)


def _validate_lattice(ctx: ValidationContext, axis_name: str, wrap: bool) -> PropertyValidationResult:
    kind = ctx.kind(axis_name)
    if kind != axis_name:
        return not_applicable(axis_name, kind)
    axis = getattr(ctx.spec, axis_name)
    expected = f"{axis_name} {axis.rows}x{axis.cols}"
    cells = min(axis.rows * axis.cols, ctx.n)
    target = _lattice_edge_count(axis.rows, axis.cols, cells, wrap)
    actual_edges = ctx.view.simple_edge_count()
    if actual_edges != target:
        return failed(axis_name, expected, f"{actual_edges} edges",
                      f"{axis.rows}x{axis.cols} {axis_name} requires {target} edges, got {actual_edges}")
    top = max(ctx.view.degrees(), default=0)
    if top > 4:
        return failed(axis_name, expected, f"max_degree={top}", f"Lattice vertex has degree {top} > 4")
    return passed(axis_name, expected)


def validate_grid(ctx: ValidationContext) -> PropertyValidationResult:
    return _validate_lattice(ctx, "grid", wrap=False)


def validate_toroidal(ctx: ValidationContext) -> PropertyValidationResult:
    return _validate_lattice(ctx, "toroidal", wrap=True)


def validate_binary_tree(ctx: ValidationContext) -> PropertyValidationResult:
    """
    The first node is the root: degree <= 2 there and <= 3 elsewhere.
    full_binary: every node has 0 or 2 children.
    complete_binary: heap layout, node i hangs off node (i-1)//2.
    """
    kind = ctx.kind("binary_tree")
    if kind not in ("binary_tree", "full_binary", "complete_binary"):
        return not_applicable("binary_tree", kind)
    n = ctx.n
    if n <= 1:
        return trivial("binary_tree", kind)
    if not _is_tree(ctx):
        return failed("binary_tree", kind, "not_tree", "Binary tree must be a connected acyclic graph")

    degrees = ctx.view.degrees()
    if degrees[0] > 2 or any(d > 3 for d in degrees[1:]):
        return failed("binary_tree", kind, "too_many_children", "A node has more than two children")

    if kind == "full_binary":
        if degrees[0] not in (0, 2) or any(d not in (1, 3) for d in degrees[1:]):
            return failed("binary_tree", kind, "binary_tree", "Full binary tree nodes need 0 or 2 children")
    elif kind == "complete_binary":
        for i in range(1, n):
            if not ctx.view.has_edge(i, (i - 1) // 2):
                return failed("binary_tree", kind, "binary_tree",
                              f"Node {ctx.view.ids[i]} is not attached to heap parent {ctx.view.ids[(i - 1) // 2]}")
    return passed("binary_tree", kind)


def validate_tournament(ctx: ValidationContext) -> PropertyValidationResult:
    """Exactly one arc between every pair of distinct vertices, no loops."""
    kind = ctx.kind("tournament")
    if kind != "tournament":
        return not_applicable("tournament", kind)
    view = ctx.view
    n = ctx.n

    if not ctx.directed:
        if view.self_loops or view.duplicate_edges or view.simple_edge_count() != n * (n - 1) // 2:
            return failed("tournament", "tournament", "not_complete",
                          "Undirected tournament must be a complete simple graph")
        return passed("tournament", "tournament")

    for u, v in view.arcs:
        if u == v:
            return failed("tournament", "tournament", "self_loop",
                          f"Tournament violated: Self-loop detected at node {view.ids[u]}")
    both = 0
    neither = 0
    for u, v in itertools.combinations(range(n), 2):
        forward, backward = view.has_arc(u, v), view.has_arc(v, u)
        if forward and backward:
            both += 1
        elif not forward and not backward:
            neither += 1
    if both:
        return failed("tournament", "tournament", "bidirectional",
                      f"Tournament violated: Bidirectional edges found between {both} pair(s)")
    if neither:
        return failed("tournament", "tournament", "missing_edges",
                      f"Tournament violated: Missing edges between {neither} pair(s)")
    return passed("tournament", "tournament")


def _validate_regular_degree(ctx: ValidationContext, prop: str, k: int) -> PropertyValidationResult:
    expected = f"{k}-regular"
    off = [v for v, d in enumerate(ctx.view.endpoint_degree) if d != k]
    if off:
        return failed(prop, expected, "not_regular",
                      f"{len(off)} vertex(es) do not have degree {k}, e.g. {ctx.view.ids[off[0]]}")
    return passed(prop, expected)


def validate_cubic(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("cubic")
    if kind != "cubic":
        return not_applicable("cubic", kind)
    return _validate_regular_degree(ctx, "cubic", 3)


def validate_specific_regular(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("specific_regular")
    if kind != "k_regular":
        return not_applicable("specific_regular", kind)
    return _validate_regular_degree(ctx, "specific_regular", ctx.spec.specific_regular.k)


def validate_flow_network(ctx: ValidationContext) -> PropertyValidationResult:
    """No arc enters the source, none leaves the sink, and every node lies on a source-sink path."""
    kind = ctx.kind("flow_network")
    if kind != "flow_network":
        return not_applicable("flow_network", kind)
    axis = ctx.spec.flow_network
    view = ctx.view
    source, sink = view.index.get(axis.source), view.index.get(axis.sink)
    if source is None or sink is None:
        return failed("flow_network", "flow_network", "missing_terminals",
                      f"Source {axis.source!r} or sink {axis.sink!r} is not a node")

    if not ctx.directed:
        if is_connected(view):
            return inconclusive("flow_network", "flow_network", "connected",
                                "Undirected flow network: only connectivity checked")
        return failed("flow_network", "flow_network", "disconnected", "Flow network is disconnected")

    predecessors: List[Set[int]] = [set() for _ in range(ctx.n)]
    for u, v in view.arcs:
        predecessors[v].add(u)
    if predecessors[source]:
        return failed("flow_network", "flow_network", "source_has_inflow",
                      f"Source {axis.source} has incoming edges")
    if view.succ[sink]:
        return failed("flow_network", "flow_network", "sink_has_outflow",
                      f"Sink {axis.sink} has outgoing edges")

    def reach(start: int, step) -> Set[int]:
        seen = {start}
        stack = [start]
        while stack:
            v = stack.pop()
            for w in step(v):
                if w not in seen:
                    seen.add(w)
                    stack.append(w)
        return seen

    forward = reach(source, lambda v: view.succ[v])
    backward = reach(sink, lambda v: predecessors[v])
    stranded = [view.ids[v] for v in range(ctx.n) if v not in forward or v not in backward]
    if stranded:
        return failed("flow_network", "flow_network", "stranded_nodes",
                      f"{len(stranded)} node(s) are not on a source-sink path: {stranded[:5]}")
    return passed("flow_network", "flow_network")


def validate_eulerian(ctx: ValidationContext) -> PropertyValidationResult:
    """
    Undirected: non-isolated vertices connected, all degrees even (eulerian)
    or exactly two odd (semi_eulerian).
    Directed: in = out everywhere, or one +1 / -1 pair for semi_eulerian.
    """
    kind = ctx.kind("eulerian")
    if kind not in ("eulerian", "semi_eulerian"):
        return not_applicable("eulerian", kind)
    if ctx.n <= 1:
        return trivial("eulerian", kind)

    view = ctx.view
    active = [v for v in range(ctx.n) if view.endpoint_degree[v] > 0]
    if active and len(connected_components(view, active)) > 1:
        return failed("eulerian", kind, "disconnected", "Edges of an Eulerian graph must form one component")

    if not ctx.directed:
        odd = [v for v in range(ctx.n) if view.endpoint_degree[v] % 2 == 1]
        if kind == "eulerian" and odd:
            return failed("eulerian", kind, f"{len(odd)} odd-degree vertices",
                          f"Eulerian graphs need all degrees even, found {len(odd)} odd")
        if kind == "semi_eulerian" and len(odd) != 2:
            return failed("eulerian", kind, f"{len(odd)} odd-degree vertices",
                          f"Semi-Eulerian graphs need exactly 2 odd-degree vertices, found {len(odd)}")
        return passed("eulerian", kind)

    balance = [0] * ctx.n
    for u, v in view.arcs:
        balance[u] += 1
        balance[v] -= 1
    unbalanced = sorted(b for b in balance if b != 0)
    if kind == "eulerian" and unbalanced:
        return failed("eulerian", kind, f"{len(unbalanced)} unbalanced vertices",
                      "Eulerian digraphs need in-degree = out-degree at every vertex")
    if kind == "semi_eulerian" and unbalanced != [-1, 1]:
        return failed("eulerian", kind, f"{len(unbalanced)} unbalanced vertices",
                      "Semi-Eulerian digraphs need exactly one start (+1) and one end (-1) vertex")
    return passed("eulerian", kind)


def validate_k_vertex_connected(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("k_vertex_connected")
    if kind != "k_vertex_connected":
        return not_applicable("k_vertex_connected", kind)
    k = ctx.spec.k_vertex_connected.k
    expected = f"{k}-vertex-connected"
    view = ctx.view

    if ctx.n <= ctx.limits.connectivity_exact_max_nodes:
        kappa = vertex_connectivity_exact(view)
        if kappa >= k:
            return passed("k_vertex_connected", expected, f"κ={kappa}")
        return failed("k_vertex_connected", expected, f"κ={kappa}",
                      f"Vertex connectivity {kappa} is below {k}")

    low = min(view.degrees(), default=0)
    if low < k or not is_connected(view):
        return failed("k_vertex_connected", expected, f"min_degree={low}",
                      f"Minimum degree {low} is below {k}, so the graph is not {k}-connected")
    return inconclusive("k_vertex_connected", expected, f"min_degree={low}",
                        f"Vertex connectivity not computed for large graph (n > {ctx.limits.connectivity_exact_max_nodes})")


def validate_k_edge_connected(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("k_edge_connected")
    if kind != "k_edge_connected":
        return not_applicable("k_edge_connected", kind)
    k = ctx.spec.k_edge_connected.k
    expected = f"{k}-edge-connected"
    if ctx.n <= 1:
        return trivial("k_edge_connected", expected)
    lam = edge_connectivity(ctx.view)
    if lam >= k:
        return passed("k_edge_connected", expected, f"λ={lam}")
    return failed("k_edge_connected", expected, f"λ={lam}", f"Edge connectivity {lam} is below {k}")


def validate_treewidth(ctx: ValidationContext) -> PropertyValidationResult:
    """
    Degeneracy is a lower bound and min-fill elimination an upper bound.
    When the bounds straddle the target the result is inconclusive.
    """
    kind = ctx.kind("treewidth")
    if kind != "treewidth":
        return not_applicable("treewidth", kind)
    if ctx.n <= 1:
        return trivial("treewidth", "treewidth=0")

    target = min(ctx.spec.treewidth.width, ctx.n - 1)
    expected = f"treewidth={target}"
    upper = treewidth_upper_bound(ctx.view)
    if upper == target:
        return passed("treewidth", expected, f"treewidth={upper}")
    lower = degeneracy(ctx.view)
    if lower <= target <= upper:
        return inconclusive("treewidth", expected, f"{lower} <= treewidth <= {upper}",
                            f"Treewidth bounds [{lower}, {upper}] do not pin down {target}")
    return failed("treewidth", expected, f"{lower} <= treewidth <= {upper}",
                  f"Treewidth bounds [{lower}, {upper}] exclude {target}")


def validate_k_colorable(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("k_colorable")
    if kind not in ("k_colorable", "bipartite_colorable"):
        return not_applicable("k_colorable", kind)
    view = ctx.view

    if kind == "bipartite_colorable":
        if view.self_loops or bipartite_coloring(view) is None:
            return failed("k_colorable", kind, "not_2_colorable", "Graph has no proper 2-colouring")
        return passed("k_colorable", kind)

    k = ctx.spec.k_colorable.k
    expected = f"{k}-colorable"
    if view.self_loops:
        return failed("k_colorable", expected, "has_self_loops", "Self-loops cannot be properly coloured")

    stored = ctx.metadata("color")
    if stored is not None:
        colors = dict(enumerate(stored))
        if is_proper_coloring(view, colors) and len(set(stored)) <= k:
            return passed("k_colorable", expected, f"stored colouring with {len(set(stored))} colours")

    if ctx.n <= ctx.limits.coloring_exact_max_nodes:
        if is_k_colorable(view, k):
            return passed("k_colorable", expected)
        return failed("k_colorable", expected, f"not_{k}_colorable", f"Graph has no proper {k}-colouring")

    used = len(set(greedy_coloring(view).values()))
    if used <= k:
        return passed("k_colorable", expected, f"greedy colouring with {used} colours")
    return inconclusive("k_colorable", expected, f"greedy colouring with {used} colours",
                        f"k-colorability not decided for large graph (n > {ctx.limits.coloring_exact_max_nodes})")


def validate_chromatic_number(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("chromatic_number")
    if kind != "chromatic_number":
        return not_applicable("chromatic_number", kind)
    chi = ctx.spec.chromatic_number.chi
    expected = f"χ={chi}"
    if ctx.view.self_loops:
        return failed("chromatic_number", expected, "has_self_loops", "Self-loops cannot be properly coloured")

    if ctx.n <= ctx.limits.coloring_exact_max_nodes:
        actual = chromatic_number_exact(ctx.view)
        if actual == chi:
            return passed("chromatic_number", expected)
        return failed("chromatic_number", expected, f"χ={actual}", f"Chromatic number is {actual}, expected {chi}")

    upper = len(set(greedy_coloring(ctx.view).values()))
    if upper < chi:
        return failed("chromatic_number", expected, f"χ<={upper}",
                      f"Greedy colouring uses {upper} colours, so χ cannot be {chi}")
    return inconclusive("chromatic_number", expected, f"χ<={upper}",
                        f"Chromatic number not computed for large graph (n > {ctx.limits.coloring_exact_max_nodes})")


def validate_perfect_matching(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("perfect_matching")
    if kind not in ("perfect_matching", "near_perfect", "no_perfect_matching"):
        return not_applicable("perfect_matching", kind)
    covered = 2 * maximum_matching_size(ctx.view)
    n = ctx.n
    actual = f"matching covers {covered}/{n} vertices"
    if kind == "perfect_matching":
        ok = covered == n
    elif kind == "near_perfect":
        ok = covered == n - 1
    else:
        ok = covered < n
    if ok:
        return passed("perfect_matching", kind, actual)
    return failed("perfect_matching", kind, actual, f"Maximum matching covers {covered} of {n} vertices")


def validate_branchwidth(ctx: ValidationContext) -> PropertyValidationResult:
    """bw <= w implies tw <= floor(3w/2) - 1; degeneracy bounds tw from below."""
    kind = ctx.kind("branchwidth")
    if kind != "branchwidth":
        return not_applicable("branchwidth", kind)
    w = ctx.spec.branchwidth.width
    expected = f"branchwidth={w}"
    ceiling = max(math.floor(3 * w / 2) - 1, 0)
    lower = degeneracy(ctx.view)
    if lower > ceiling:
        return failed("branchwidth", expected, f"treewidth>={lower}",
                      f"Treewidth is at least {lower}, so branchwidth exceeds {w}")
    return inconclusive("branchwidth", expected, f"treewidth>={lower}",
                        "Branchwidth not computed; treewidth bound is consistent")


def validate_spanning_tree(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("spanning_tree")
    if kind != "spanning_tree":
        return not_applicable("spanning_tree", kind)
    if ctx.n <= 1 or _is_tree(ctx):
        return passed("spanning_tree", "spanning_tree")
    return failed("spanning_tree", "spanning_tree", "not_tree",
                  f"Spanning tree needs {ctx.n - 1} edges, connected and acyclic")


# =============================================================================
# STRUCTURAL GRAPH CLASSES
# =============================================================================

def _split_by_search(ctx: ValidationContext) -> bool:
    everyone = range(ctx.n)
    for size in range(ctx.n + 1):
        for clique in itertools.combinations(everyone, size):
            members = set(clique)
            rest = [v for v in everyone if v not in members]
            if split_partition_holds(ctx.view, clique, rest):
                return True
    return False


def validate_split(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("split")
    if kind != "split":
        return not_applicable("split", kind)
    message = "Graph cannot be partitioned into clique + independent set"

    marks = ctx.metadata("splitPartition")
    if marks is not None:
        clique = [v for v, mark in enumerate(marks) if mark == "clique"]
        independent = [v for v, mark in enumerate(marks) if mark == "independent"]
        if len(clique) + len(independent) == ctx.n and split_partition_holds(ctx.view, clique, independent):
            return passed("split", "split")
        return failed("split", "split", "not_split", "Stored split partition is not clique + independent set")

    if ctx.n <= ctx.limits.split_exact_max_nodes:
        found = _split_by_search(ctx)
    else:
        found = is_split(ctx.view)
    if found:
        return passed("split", "split")
    return failed("split", "split", "not_split", message)


def validate_cograph(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("cograph")
    if kind != "cograph":
        return not_applicable("cograph", kind)
    if is_cograph(ctx.view):
        return passed("cograph", "cograph")
    message = "Graph contains an induced P4"
    if ctx.n <= ctx.limits.hereditary_exact_max_nodes:
        witness = find_induced_p4(ctx.view)
        if witness:
            message = f"Graph contains induced P4 on vertices {_labels(ctx, witness)}"
    return failed("cograph", "cograph", "not_cograph", message)


def validate_claw_free(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("claw_free")
    if kind != "claw_free":
        return not_applicable("claw_free", kind)
    claw = find_claw(ctx.view)
    if claw is None:
        return passed("claw_free", "claw_free")
    centre, leaves = claw
    return failed("claw_free", "claw_free", "has_claw",
                  f"Graph contains induced K_{{1,3}} with center {ctx.view.ids[centre]} "
                  f"and leaves {_labels(ctx, leaves)}")


def validate_chordal(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("chordal")
    if kind != "chordal":
        return not_applicable("chordal", kind)
    if is_chordal(ctx.view):
        return passed("chordal", "chordal")
    message = "Graph has no perfect elimination ordering"
    if ctx.n <= ctx.limits.chordal_exact_max_nodes:
        cycle = find_chordless_cycle(ctx.view)
        if cycle:
            message = f"Graph contains chordless cycle of length {len(cycle)}: {_labels(ctx, cycle)}"
    return failed("chordal", "chordal", "not_chordal", message)


def validate_interval(ctx: ValidationContext) -> PropertyValidationResult:
    """Stored intervals must reproduce the edge set exactly; chordality is the fallback proxy."""
    kind = ctx.kind("interval")
    if kind != "interval":
        return not_applicable("interval", kind)
    view = ctx.view

    intervals = ctx.metadata("interval")
    if intervals is None:
        if not is_chordal(view):
            return failed("interval", "interval", "not_chordal", "Interval graphs are chordal; this graph is not")
        return inconclusive("interval", "interval", "chordal",
                            "Interval validation without interval metadata only checks chordality")

    for a, b in itertools.combinations(range(ctx.n), 2):
        ia, ib = intervals[a], intervals[b]
        overlap = ia["start"] <= ib["end"] and ib["start"] <= ia["end"]
        adjacent = view.has_edge(a, b)
        if overlap and not adjacent:
            return failed("interval", "interval", "edge_mismatch",
                          f"Edge mismatch: intervals {view.ids[a]} and {view.ids[b]} intersect but no edge")
        if adjacent and not overlap:
            return failed("interval", "interval", "edge_mismatch",
                          f"Edge mismatch: intervals {view.ids[a]} and {view.ids[b]} have edge but don't intersect")
    return passed("interval", "interval")


def validate_permutation(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("permutation")
    if kind != "permutation":
        return not_applicable("permutation", kind)
    values = ctx.metadata("permutationValue")
    if values is None:
        return inconclusive("permutation", "permutation", "unknown",
                            "Permutation validation skipped (no permutation metadata found)")

    view = ctx.view
    for i, j in itertools.combinations(range(ctx.n), 2):
        inverted = (i - j) * (values[i] - values[j]) < 0
        if inverted != view.has_edge(i, j):
            return failed("permutation", "permutation", "edge_mismatch",
                          f"Edge {view.ids[i]}-{view.ids[j]} disagrees with the stored permutation")
    return passed("permutation", "permutation")


def validate_comparability(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("comparability")
    if kind != "comparability":
        return not_applicable("comparability", kind)
    message = "Graph is not transitively orientable"

    order = ctx.metadata("topologicalOrder")
    if order is not None:
        if len(set(order)) != len(order):
            return failed("comparability", "comparability", "invalid_order",
                          "Topological order contains duplicate values")
        if is_transitive_orientation(ctx.view, dict(enumerate(order))):
            return passed("comparability", "comparability")
        return failed("comparability", "comparability", "not_comparability", message)

    limit = ctx.limits.comparability_exact_max_nodes
    if ctx.n > limit:
        return inconclusive("comparability", "comparability", "unknown",
                            f"Comparability validation skipped for large graph (n > {limit})")
    if is_comparability(ctx.view):
        return passed("comparability", "comparability")
    return failed("comparability", "comparability", "not_comparability", message)


def validate_perfect(ctx: ValidationContext) -> PropertyValidationResult:
    """A stored perfect class is verified directly; otherwise chordal, bipartite and cographs pass."""
    kind = ctx.kind("perfect")
    if kind != "perfect":
        return not_applicable("perfect", kind)
    view = ctx.view
    checks = {
        "chordal": lambda: is_chordal(view),
        "bipartite": lambda: view.self_loops == 0 and bipartite_coloring(view) is not None,
        "cograph": lambda: is_cograph(view),
    }

    try:
        recorded = ctx.shared_metadata("perfectClass")
    except InconsistentMetadata:
        return failed("perfect", "perfect", "inconsistent_metadata", "Nodes have inconsistent perfect class markers")

    if recorded is not None:
        check = checks.get(recorded)
        if check is None:
            return failed("perfect", "perfect", str(recorded), f"Unknown perfect graph class {recorded!r}")
        if check():
            return passed("perfect", "perfect", recorded)
        return failed("perfect", "perfect", f"not_{recorded}", f"Graph marked {recorded} is not {recorded}")

    for name, check in checks.items():
        if check():
            return passed("perfect", "perfect", name)
    return inconclusive("perfect", "perfect", "unknown",
                        "Graph is not chordal, bipartite or a cograph; perfection not verified")


# =============================================================================
# SYMMETRY, GEOMETRY AND TRAVERSAL CLASSES
# =============================================================================

def validate_line_graph(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("line")
    if kind != "line_graph":
        return not_applicable("line", kind)
    view = ctx.view

    base = ctx.metadata("baseEdge")
    if base is None:
        claw = find_claw(view)
        if claw is not None:
            return failed("line", "line_graph", "has_claw", "Line graphs are claw-free; this graph has a claw")
        return inconclusive("line", "line_graph", "claw_free",
                            "Line graph validation without base edges only checks claw-freeness")

    for a, b in itertools.combinations(range(ctx.n), 2):
        share = bool(set(base[a]) & set(base[b]))
        adjacent = view.has_edge(a, b)
        if adjacent and not share:
            return failed("line", "line_graph", "edge_mismatch",
                          "Adjacent vertices in L(G) don't share vertex in base graph G")
        if share and not adjacent:
            return failed("line", "line_graph", "edge_mismatch",
                          "Vertices sharing a vertex in base graph G are not adjacent in L(G)")
    return passed("line", "line_graph")


def validate_self_complementary(ctx: ValidationContext) -> PropertyValidationResult:
    """Order and size are checked; isomorphism with the complement is not."""
    kind = ctx.kind("self_complementary")
    if kind != "self_complementary":
        return not_applicable("self_complementary", kind)
    n = ctx.n
    if n % 4 not in (0, 1):
        return failed("self_complementary", kind, f"n={n}",
                      f"Self-complementary requires n ≡ 0 or 1 (mod 4), got n={n}")
    target = n * (n - 1) // 4
    edge_count = ctx.view.simple_edge_count()
    if edge_count != target:
        return failed("self_complementary", kind, f"{edge_count} edges",
                      f"Self-complementary requires exactly {target} edges, got {edge_count}")
    return inconclusive("self_complementary", kind, f"{edge_count} edges",
                        "Edge count matches; isomorphism to the complement not checked")


def validate_threshold(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("threshold")
    if kind != "threshold":
        return not_applicable("threshold", kind)
    types = ctx.metadata("thresholdType")
    if types is not None and any(t not in ("dominant", "isolated") for t in types):
        return failed("threshold", "threshold", "invalid_metadata",
                      "Not all vertices marked as dominant or isolated")
    if is_threshold(ctx.view):
        return passed("threshold", "threshold")
    return failed("threshold", "threshold", "not_threshold",
                  "Graph cannot be built by adding isolated and dominating vertices")


def validate_unit_disk(ctx: ValidationContext) -> PropertyValidationResult:
    """Edges must join exactly the pairs within unit radius of each other."""
    kind = ctx.kind("unit_disk")
    if kind != "unit_disk":
        return not_applicable("unit_disk", kind)
    xs, ys, radii = ctx.metadata("x"), ctx.metadata("y"), ctx.metadata("unitRadius")
    if xs is None or ys is None or radii is None:
        return inconclusive("unit_disk", "unit_disk", "unknown",
                            "Unit disk validation skipped (no coordinate metadata found)")

    view = ctx.view
    radius = radii[0]
    for a, b in itertools.combinations(range(ctx.n), 2):
        distance = math.hypot(xs[a] - xs[b], ys[a] - ys[b])
        within = distance <= radius + 1e-9
        adjacent = view.has_edge(a, b)
        if adjacent and not within:
            return failed("unit_disk", "unit_disk", "edge_too_long",
                          f"Edge distance {distance:.3f} exceeds unit radius {radius}")
        if within and not adjacent:
            return failed("unit_disk", "unit_disk", "missing_edge",
                          f"Vertices at distance {distance:.3f} within unit radius {radius} are not adjacent")
    return passed("unit_disk", "unit_disk")


def validate_planarity(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("planarity")
    if kind != "planar":
        return not_applicable("planarity", kind)
    n = ctx.n
    m = ctx.view.simple_edge_count()
    if n >= 3 and m > 3 * n - 6:
        return failed("planarity", "planar", f"{m} edges",
                      f"Planar graphs require m ≤ 3n-6, got m={m} for n={n}")

    positions = ctx.metadata("outerplanarPosition")
    if positions is None:
        return inconclusive("planarity", "planar", f"{m} edges",
                            "Planarity checked only against the m ≤ 3n-6 bound")
    order = sorted(range(n), key=lambda v: positions[v])
    crossing = chords_cross(order, ctx.view.simple_edges())
    if crossing is not None:
        return failed("planarity", "planar", "crossing_chords",
                      "Chords cross in the stored outerplanar embedding")
    return passed("planarity", "planar", "outerplanar")


def _follows_positions(ctx: ValidationContext, key: str, closed: bool) -> Optional[bool]:
    positions = ctx.metadata(key)
    if positions is None:
        return None
    order = sorted(range(ctx.n), key=lambda v: positions[v])
    steps = list(zip(order, order[1:]))
    if closed:
        steps.append((order[-1], order[0]))
    return all(ctx.view.has_edge(a, b) for a, b in steps)


def validate_hamiltonian(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("hamiltonian")
    if kind != "hamiltonian":
        return not_applicable("hamiltonian", kind)
    n = ctx.n
    if n < 3:
        return trivial("hamiltonian", kind)

    certified = _follows_positions(ctx, "hamiltonianPosition", closed=True)
    if certified is not None:
        if certified:
            return passed("hamiltonian", kind)
        return failed("hamiltonian", kind, "broken_cycle", "Stored Hamiltonian cycle uses a missing edge")

    if n <= ctx.limits.cycle_search_max_nodes:
        if has_hamiltonian_cycle(ctx.view):
            return passed("hamiltonian", kind)
        return failed("hamiltonian", kind, "non_hamiltonian", "Graph has no Hamiltonian cycle")

    m = ctx.view.simple_edge_count()
    if m < n:
        return failed("hamiltonian", kind, f"{m} edges", f"Hamiltonian graphs require m ≥ n, got m={m}")
    return inconclusive("hamiltonian", kind, f"{m} edges",
                        f"Hamiltonian cycle search skipped for large graph (n > {ctx.limits.cycle_search_max_nodes})")


def validate_traceable(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("traceable")
    if kind != "traceable":
        return not_applicable("traceable", kind)
    n = ctx.n
    if n <= 1:
        return trivial("traceable", kind)

    certified = _follows_positions(ctx, "traceablePosition", closed=False)
    if certified is not None:
        if certified:
            return passed("traceable", kind)
        return failed("traceable", kind, "broken_path", "Stored Hamiltonian path uses a missing edge")

    if n <= ctx.limits.cycle_search_max_nodes:
        if has_hamiltonian_path(ctx.view):
            return passed("traceable", kind)
        return failed("traceable", kind, "non_traceable", "Graph has no Hamiltonian path")

    m = ctx.view.simple_edge_count()
    if m < n - 1:
        return failed("traceable", kind, f"{m} edges", f"Traceable graphs require m ≥ n-1, got m={m}")
    return inconclusive("traceable", kind, f"{m} edges",
                        f"Hamiltonian path search skipped for large graph (n > {ctx.limits.cycle_search_max_nodes})")


def validate_strongly_regular(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("strongly_regular")
    if kind != "strongly_regular":
        return not_applicable("strongly_regular", kind)
    axis = ctx.spec.strongly_regular
    expected = f"SRG({ctx.n},{axis.k},{axis.lambda_},{axis.mu})"

    if any(d != axis.k for d in ctx.view.degrees()):
        return failed("strongly_regular", expected, "not_regular",
                      "SRG requires all vertices to have degree k")
    violation = strongly_regular_violation(ctx.view, axis.k, axis.lambda_, axis.mu)
    if violation:
        return failed("strongly_regular", expected, "parameters_violated", f"SRG violated: {violation}")
    return passed("strongly_regular", expected)


def _circulant_pairs(n: int, offsets: List[int]) -> Set[Tuple[int, int]]:
    pairs = set()
    for i in range(n):
        for offset in offsets:
            j = (i + offset) % n
            if i != j:
                pairs.add((min(i, j), max(i, j)))
    return pairs


def validate_vertex_transitive(ctx: ValidationContext) -> PropertyValidationResult:
    """Circulant metadata is checked exactly; otherwise regularity is the proxy."""
    kind = ctx.kind("vertex_transitive")
    if kind != "vertex_transitive":
        return not_applicable("vertex_transitive", kind)
    view = ctx.view

    try:
        offsets = ctx.shared_metadata("circulantOffsets")
    except InconsistentMetadata as e:
        return inconsistent("vertex_transitive", kind, e)
    if offsets is not None and ctx.n >= 2:
        if set(view.simple_edges()) == _circulant_pairs(ctx.n, offsets):
            return passed("vertex_transitive", kind, f"circulant C_{ctx.n}{tuple(offsets)}")
        return failed("vertex_transitive", kind, "not_circulant",
                      "Edges do not match the stored circulant offsets")

    if not _is_regular(view.degrees()):
        return failed("vertex_transitive", kind, "not_regular",
                      "Vertex-transitive graphs are regular; vertex degrees differ")
    return inconclusive("vertex_transitive", kind, "regular",
                        "Graph is regular; automorphism group not computed")


def validate_edge_transitive(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("edge_transitive")
    if kind != "edge_transitive":
        return not_applicable("edge_transitive", kind)
    view = ctx.view
    n = ctx.n
    marked = ctx.metadata("edgeTransitive")
    if marked is not None and all(marked) and view.simple_edge_count() == n * (n - 1) // 2:
        return passed("edge_transitive", kind, "complete")

    if is_connected(view) and not _is_regular(view.degrees()) and bipartite_coloring(view) is None:
        return failed("edge_transitive", kind, "not_edge_transitive",
                      "Connected edge-transitive graphs are regular or bipartite")
    return inconclusive("edge_transitive", kind, "unknown",
                        "Edge-transitivity not verified beyond regularity and bipartiteness")


def validate_arc_transitive(ctx: ValidationContext) -> PropertyValidationResult:
    kind = ctx.kind("arc_transitive")
    if kind != "arc_transitive":
        return not_applicable("arc_transitive", kind)
    view = ctx.view
    degrees = view.degrees()
    marked = ctx.metadata("arcTransitive")
    is_cycle = ctx.n >= 3 and is_connected(view) and all(d == 2 for d in degrees)
    if marked is not None and all(marked) and is_cycle:
        return passed("arc_transitive", kind, "cycle")

    if not _is_regular(degrees):
        return failed("arc_transitive", kind, "not_regular",
                      "Arc-transitive graphs are regular; vertex degrees differ")
    return inconclusive("arc_transitive", kind, "regular",
                        "Graph is regular; arc-transitivity not verified")
