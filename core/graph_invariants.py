"""
GRAPHGEN GRAPH INVARIANTS - Combinatorial Checks over Generated Graphs

The validator must re-derive every property from the node and edge lists,
so this module holds the graph theory: components, cycles, distances,
recognition algorithms for graph classes and exact / greedy searches for
NP-hard invariants.

Architecture:
- GraphView: index-based adjacency built once from (nodes, edges)
- rustworkx for the primitives it provides natively (components, DAG test,
  distance matrix, greedy coloring, min cut, matching, articulation points)
- Pure-Python recognition algorithms where rustworkx has none
  (chordal via maximum cardinality search, split via degree sequence,
  cograph via complement decomposition, comparability via implication classes)

Design Philosophy:
- Polynomial recognition where a known algorithm exists
- Exact exponential search only below a caller-supplied size limit
- Greedy bounds otherwise; callers decide how to report them
"""
import itertools
import rustworkx as rx
import numpy as np
from typing import List, Set, Tuple, Dict, Optional, Callable, Iterable, FrozenSet, Sequence


# =============================================================================
# GRAPH VIEW
# =============================================================================

class GraphView:
    """
    Index-based view of a generated graph.

    Attributes:
        ids: Node ids in node order
        index: Node id -> position
        adj: Undirected simple adjacency (self-loops and parallel edges collapsed)
        succ: Directed successors (same as adj for undirected graphs)
        arcs: Every edge as (u, v) positions, multiplicity kept
        endpoint_degree: Degree counting every edge endpoint (a self-loop counts twice)
    """

    def __init__(self, nodes: Sequence, edges: Sequence, directed: bool = False):
        self.directed = directed
        self.ids: List[str] = [node.id for node in nodes]
        self.index: Dict[str, int] = {node_id: i for i, node_id in enumerate(self.ids)}

        n = len(self.ids)
        self.adj: List[Set[int]] = [set() for _ in range(n)]
        self.succ: List[Set[int]] = [set() for _ in range(n)]
        self.endpoint_degree: List[int] = [0] * n
        self.arcs: List[Tuple[int, int]] = []
        self.self_loops = 0
        self.duplicate_edges = 0

        seen: Set[Tuple[int, int]] = set()
        for edge in edges:
            u = self.index.get(edge.source)
            v = self.index.get(edge.target)
            if u is None or v is None:
                raise ValueError(f"Edge {edge.source}->{edge.target} references an unknown node")

            self.arcs.append((u, v))
            key = (u, v) if directed else (min(u, v), max(u, v))
            if key in seen:
                self.duplicate_edges += 1
            seen.add(key)

            self.endpoint_degree[u] += 1
            self.endpoint_degree[v] += 1
            if u == v:
                self.self_loops += 1
                continue
            self.adj[u].add(v)
            self.adj[v].add(u)
            self.succ[u].add(v)
            if not directed:
                self.succ[v].add(u)

    @classmethod
    def from_graph(cls, graph) -> "GraphView":
        return cls(graph.nodes, graph.edges, graph.spec.directionality.kind == "directed")

    @property
    def n(self) -> int:
        return len(self.ids)

    @property
    def m(self) -> int:
        return len(self.arcs)

    def degree(self, v: int) -> int:
        return len(self.adj[v])

    def degrees(self) -> List[int]:
        return [len(a) for a in self.adj]

    def has_edge(self, u: int, v: int) -> bool:
        """Adjacency in the undirected simple view."""
        return v in self.adj[u]

    def has_arc(self, u: int, v: int) -> bool:
        return v in self.succ[u]

    def simple_edges(self) -> List[Tuple[int, int]]:
        """Undirected simple edge list as (u, v) with u < v."""
        return [(u, v) for u in range(self.n) for v in self.adj[u] if u < v]

    def simple_edge_count(self) -> int:
        return sum(len(a) for a in self.adj) // 2

    def add_edge(self, u: int, v: int) -> None:
        """Grow the view by one simple edge (generators testing candidates)."""
        self.arcs.append((u, v))
        self.endpoint_degree[u] += 1
        self.endpoint_degree[v] += 1
        self.adj[u].add(v)
        self.adj[v].add(u)
        self.succ[u].add(v)
        if not self.directed:
            self.succ[v].add(u)

    def remove_edge(self, u: int, v: int) -> None:
        self.arcs.remove((u, v))
        self.endpoint_degree[u] -= 1
        self.endpoint_degree[v] -= 1
        self.adj[u].discard(v)
        self.adj[v].discard(u)
        self.succ[u].discard(v)
        if not self.directed:
            self.succ[v].discard(u)

    def complement_neighbors(self, v: int, within: Iterable[int]) -> Set[int]:
        return {w for w in within if w != v and w not in self.adj[v]}

    # -------------------------------------------------------------------------
    # rustworkx conversion
    # -------------------------------------------------------------------------

    def to_undirected_rx(self) -> rx.PyGraph:
        """Simple undirected rustworkx graph; node payloads are node ids."""
        graph = rx.PyGraph(multigraph=False)
        graph.add_nodes_from(self.ids)
        graph.add_edges_from_no_data(self.simple_edges())
        return graph

    def to_directed_rx(self) -> rx.PyDiGraph:
        """Directed rustworkx graph with every arc, multiplicity kept."""
        graph = rx.PyDiGraph()
        graph.add_nodes_from(self.ids)
        graph.add_edges_from_no_data(self.arcs)
        return graph


def to_rustworkx(graph):
    """
    Convert a TestGraph into a rustworkx graph for downstream analysis.

    Directed specs give a PyDiGraph, undirected ones a PyGraph (multigraph).
    Node payloads are TestNode records, edge payloads TestEdge records.
    """
    directed = graph.spec.directionality.kind == "directed"
    result = rx.PyDiGraph() if directed else rx.PyGraph()
    index = {}
    for node in graph.nodes:
        index[node.id] = result.add_node(node)
    for edge in graph.edges:
        result.add_edge(index[edge.source], index[edge.target], edge)
    return result


# =============================================================================
# CONNECTIVITY
# =============================================================================

def connected_components(view: GraphView, within: Optional[Iterable[int]] = None) -> List[List[int]]:
    """
    Weakly connected components, each sorted, in order of smallest member.

    Args:
        view: Graph view
        within: Restrict to this vertex subset (induced subgraph)
    """
    if within is None:
        components = rx.connected_components(view.to_undirected_rx())
        return sorted((sorted(c) for c in components), key=lambda c: c[0] if c else -1)

    subset = set(within)
    return _components_by(subset, lambda v: view.adj[v] & subset)


def _components_by(vertices: Set[int], neighbors: Callable[[int], Set[int]]) -> List[List[int]]:
    remaining = set(vertices)
    components = []
    while remaining:
        start = min(remaining)
        stack = [start]
        remaining.discard(start)
        component = [start]
        while stack:
            v = stack.pop()
            for w in neighbors(v):
                if w in remaining:
                    remaining.discard(w)
                    stack.append(w)
                    component.append(w)
        components.append(sorted(component))
    return components


def is_connected(view: GraphView) -> bool:
    """A null graph counts as connected."""
    if view.n == 0:
        return True
    return len(connected_components(view)) == 1


def check_bipartite_with_bfs(nodes: Sequence, edges: Sequence) -> bool:
    """
    Two-colour the underlying undirected graph by BFS.

    Self-loops make a graph non-bipartite. Edge direction is ignored.
    """
    view = GraphView(nodes, edges, directed=False)
    if view.self_loops:
        return False
    return bipartite_coloring(view) is not None


def bipartite_coloring(view: GraphView) -> Optional[List[int]]:
    """Return a 0/1 colouring, or None if an odd cycle exists."""
    color = [-1] * view.n
    for start in range(view.n):
        if color[start] != -1:
            continue
        color[start] = 0
        queue = [start]
        head = 0
        while head < len(queue):
            v = queue[head]
            head += 1
            for w in view.adj[v]:
                if color[w] == -1:
                    color[w] = 1 - color[v]
                    queue.append(w)
                elif color[w] == color[v]:
                    return None
    return color


# =============================================================================
# CYCLES
# =============================================================================

def has_directed_cycle(view: GraphView) -> bool:
    if view.self_loops:
        return True
    return not rx.is_directed_acyclic_graph(view.to_directed_rx())


def is_forest(view: GraphView, collapse_parallel: bool = False) -> bool:
    """
    Undirected acyclicity.

    Args:
        collapse_parallel: Treat parallel edges and self-loops as one simple edge
                           (or none) before testing
    """
    if not collapse_parallel and (view.self_loops or view.duplicate_edges):
        return False
    components = len(connected_components(view)) if view.n else 0
    return view.simple_edge_count() == view.n - components


def girth(view: GraphView) -> Optional[int]:
    """Length of the shortest cycle in the undirected simple view, None if acyclic."""
    best: Optional[int] = None
    for source in range(view.n):
        dist = {source: 0}
        parent = {source: -1}
        queue = [source]
        head = 0
        while head < len(queue):
            v = queue[head]
            head += 1
            if best is not None and 2 * dist[v] + 1 >= best:
                break
            for w in view.adj[v]:
                if w not in dist:
                    dist[w] = dist[v] + 1
                    parent[w] = v
                    queue.append(w)
                elif parent[v] != w:
                    length = dist[v] + dist[w] + 1
                    if best is None or length < best:
                        best = length
    return best


def circumference(view: GraphView) -> Optional[int]:
    """
    Length of the longest simple cycle, None if acyclic.

    Exponential DFS; callers bound the vertex count.
    """
    best = 0
    adj = view.adj

    for start in range(view.n):
        stack: List[Tuple[int, List[int], Set[int]]] = [(start, [start], {start})]
        while stack:
            v, path, on_path = stack.pop()
            for w in adj[v]:
                if w == start and len(path) >= 3:
                    best = max(best, len(path))
                elif w > start and w not in on_path:
                    stack.append((w, path + [w], on_path | {w}))
        if best == view.n:
            break
    return best or None


def has_hamiltonian_cycle(view: GraphView) -> bool:
    """Held-Karp style bitmask DP over the undirected simple view."""
    n = view.n
    if n < 3:
        return False
    full = (1 << n) - 1
    reach = [0] * (1 << n)  # reach[mask] = bitset of end vertices of paths from 0 covering mask
    reach[1] = 1
    for mask in range(1, full + 1):
        if not mask & 1 or not reach[mask]:
            continue
        ends = reach[mask]
        for v in range(n):
            if not ends >> v & 1:
                continue
            for w in view.adj[v]:
                if not mask >> w & 1:
                    reach[mask | (1 << w)] |= 1 << w
    ends = reach[full]
    return any(ends >> v & 1 and view.has_edge(v, 0) for v in range(1, n))


def has_hamiltonian_path(view: GraphView) -> bool:
    n = view.n
    if n <= 1:
        return True
    full = (1 << n) - 1
    reach = [0] * (1 << n)
    for v in range(n):
        reach[1 << v] = 1 << v
    for mask in range(1, full + 1):
        ends = reach[mask]
        if not ends:
            continue
        for v in range(n):
            if not ends >> v & 1:
                continue
            for w in view.adj[v]:
                if not mask >> w & 1:
                    reach[mask | (1 << w)] |= 1 << w
    return reach[full] != 0


# =============================================================================
# DISTANCES
# =============================================================================

def distance_matrix(view: GraphView) -> np.ndarray:
    """
    Hop distances in the undirected simple view; -1 marks unreachable pairs.
    """
    if view.n == 0:
        return np.zeros((0, 0))
    dist = np.asarray(rx.distance_matrix(view.to_undirected_rx()), dtype=float)
    unreachable = (dist == 0) & ~np.eye(view.n, dtype=bool)
    dist[unreachable] = -1
    return dist


def eccentricities(view: GraphView) -> List[int]:
    """Eccentricity of each vertex over the vertices it can reach."""
    dist = distance_matrix(view)
    return [int(row.max()) if row.size else 0 for row in dist]


def diameter(view: GraphView) -> int:
    """Largest finite distance (0 for graphs with fewer than 2 vertices)."""
    ecc = eccentricities(view)
    return max(ecc) if ecc else 0


def radius(view: GraphView) -> int:
    """Smallest eccentricity, computed per vertex over reachable vertices."""
    ecc = eccentricities(view)
    return min(ecc) if ecc else 0


# =============================================================================
# GRAPH CLASS RECOGNITION
# =============================================================================

def is_chordal(view: GraphView) -> bool:
    """
    Maximum cardinality search followed by a perfect elimination check
    (Tarjan & Yannakakis).
    """
    n = view.n
    weight = [0] * n
    numbered = [False] * n
    order: List[int] = []
    for _ in range(n):
        v = max((i for i in range(n) if not numbered[i]), key=lambda i: weight[i])
        numbered[v] = True
        order.append(v)
        for w in view.adj[v]:
            if not numbered[w]:
                weight[w] += 1

    position = {v: i for i, v in enumerate(order)}
    for v in order:
        earlier = [w for w in view.adj[v] if position[w] < position[v]]
        if not earlier:
            continue
        parent = max(earlier, key=position.get)
        for w in earlier:
            if w != parent and w not in view.adj[parent]:
                return False
    return True


def find_chordless_cycle(view: GraphView, max_length: Optional[int] = None) -> Optional[List[int]]:
    """Search small graphs for an induced cycle of length >= 4 (witness for messages)."""
    limit = max_length or view.n
    for length in range(4, limit + 1):
        for subset in itertools.combinations(range(view.n), length):
            members = set(subset)
            if all(len(view.adj[v] & members) == 2 for v in subset):
                if len(connected_components(view, subset)) == 1:
                    return list(subset)
    return None


def is_split(view: GraphView) -> bool:
    """Hammer-Simeone degree-sequence characterisation."""
    degrees = sorted(view.degrees(), reverse=True)
    if not degrees:
        return True
    m = max(i for i in range(1, len(degrees) + 1) if degrees[i - 1] >= i - 1)
    return sum(degrees[:m]) == m * (m - 1) + sum(degrees[m:])


def split_partition_holds(view: GraphView, clique: Iterable[int], independent: Iterable[int]) -> bool:
    clique = list(clique)
    independent = list(independent)
    for a, b in itertools.combinations(clique, 2):
        if not view.has_edge(a, b):
            return False
    for a, b in itertools.combinations(independent, 2):
        if view.has_edge(a, b):
            return False
    return True


def is_cograph(view: GraphView) -> bool:
    """
    A graph is a cograph iff every induced subgraph on 2+ vertices is
    disconnected or has a disconnected complement.
    """
    def check(vertices: FrozenSet[int]) -> bool:
        if len(vertices) <= 1:
            return True
        parts = _components_by(set(vertices), lambda v: view.adj[v] & vertices)
        if len(parts) == 1:
            parts = _components_by(set(vertices), lambda v: view.complement_neighbors(v, vertices))
        if len(parts) == 1:
            return False
        return all(check(frozenset(part)) for part in parts)

    return check(frozenset(range(view.n)))


def has_induced_p4(view: GraphView, subset: Sequence[int]) -> bool:
    """Four vertices induce P4 iff they span 3 edges with degrees [1, 1, 2, 2]."""
    members = set(subset)
    degrees = sorted(len(view.adj[v] & members) for v in subset)
    return degrees == [1, 1, 2, 2] and len(connected_components(view, subset)) == 1


def find_induced_p4(view: GraphView) -> Optional[List[int]]:
    for subset in itertools.combinations(range(view.n), 4):
        if has_induced_p4(view, subset):
            return list(subset)
    return None


def find_claw(view: GraphView) -> Optional[Tuple[int, Tuple[int, int, int]]]:
    """Return (center, leaves) of an induced K_{1,3}, or None."""
    for center in range(view.n):
        neighbors = sorted(view.adj[center])
        if len(neighbors) < 3:
            continue
        for triple in itertools.combinations(neighbors, 3):
            a, b, c = triple
            if not (view.has_edge(a, b) or view.has_edge(a, c) or view.has_edge(b, c)):
                return center, triple
    return None


def is_comparability(view: GraphView) -> bool:
    """
    Golumbic's implication classes: a graph is transitively orientable iff no
    implication class contains both orientations of an edge.
    """
    parent: Dict[Tuple[int, int], Tuple[int, int]] = {}

    def find(arc):
        root = arc
        while parent.setdefault(root, root) != root:
            root = parent[root]
        while parent[arc] != root:
            parent[arc], arc = root, parent[arc]
        return root

    def union(a, b):
        ra, rb = find(a), find(b)
        if ra != rb:
            parent[ra] = rb

    for a in range(view.n):
        for b in view.adj[a]:
            for b2 in view.adj[a]:
                if b2 != b and b2 not in view.adj[b]:
                    union((a, b), (a, b2))
            for a2 in view.adj[b]:
                if a2 != a and a2 not in view.adj[a]:
                    union((a, b), (a2, b))

    return all(find((a, b)) != find((b, a)) for a, b in view.simple_edges())


def is_transitive_orientation(view: GraphView, rank: Dict[int, int]) -> bool:
    """
    Check that orienting every edge from lower to higher rank is transitive:
    u->v and v->w imply u->w.
    """
    up = [{w for w in view.adj[v] if rank[w] > rank[v]} for v in range(view.n)]
    for v in range(view.n):
        for w in up[v]:
            if not up[w] <= up[v]:
                return False
    return True


def chords_cross(order: Sequence[int], edges: Iterable[Tuple[int, int]]) -> Optional[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """
    With vertices placed on a circle in `order`, return two crossing chords,
    or None when the drawing is outerplanar.
    """
    pos = {v: i for i, v in enumerate(order)}
    chords = [tuple(sorted((pos[u], pos[v]))) for u, v in edges]
    for (a, b), (c, d) in itertools.combinations(chords, 2):
        if a < c < b < d or c < a < d < b:
            return (a, b), (c, d)
    return None


# =============================================================================
# INDEPENDENCE, DOMINATION, COLORING
# =============================================================================

def independence_number_exact(view: GraphView) -> int:
    """Branch and bound maximum independent set."""
    adj = view.adj
    best = 0

    def expand(candidates: FrozenSet[int], size: int):
        nonlocal best
        if not candidates:
            best = max(best, size)
            return
        if size + len(candidates) <= best:
            return
        v = min(candidates, key=lambda x: len(adj[x] & candidates))
        expand(candidates - adj[v] - {v}, size + 1)
        # A vertex of degree <= 1 is always in some maximum independent set
        if len(adj[v] & candidates) > 1:
            expand(candidates - {v}, size)

    expand(frozenset(range(view.n)), 0)
    return best


def independence_number_greedy(view: GraphView) -> int:
    remaining = set(range(view.n))
    size = 0
    while remaining:
        v = min(remaining, key=lambda x: (len(view.adj[x] & remaining), x))
        remaining -= view.adj[v] | {v}
        size += 1
    return size


def domination_number_exact(view: GraphView) -> int:
    """Smallest dominating set by subset search over bitmasks."""
    n = view.n
    if n == 0:
        return 0
    full = (1 << n) - 1
    closed = [(1 << v) | sum(1 << w for w in view.adj[v]) for v in range(n)]
    for size in range(1, n + 1):
        for subset in itertools.combinations(range(n), size):
            covered = 0
            for v in subset:
                covered |= closed[v]
            if covered == full:
                return size
    return n


def domination_number_greedy(view: GraphView) -> int:
    undominated = set(range(view.n))
    size = 0
    while undominated:
        v = max(range(view.n), key=lambda x: (len((view.adj[x] | {x}) & undominated), -x))
        undominated -= view.adj[v] | {v}
        size += 1
    return size


def is_dominating_set(view: GraphView, members: Iterable[int]) -> bool:
    covered: Set[int] = set()
    for v in members:
        covered |= view.adj[v] | {v}
    return len(covered) == view.n


def greedy_coloring(view: GraphView) -> Dict[int, int]:
    """rustworkx largest-first greedy colouring (upper bound on chromatic number)."""
    if view.n == 0:
        return {}
    return dict(rx.graph_greedy_color(view.to_undirected_rx()))


def is_k_colorable(view: GraphView, k: int) -> bool:
    """Backtracking k-colouring, highest degree first."""
    if view.n == 0:
        return True
    if k <= 0:
        return False
    order = sorted(range(view.n), key=lambda v: -view.degree(v))
    colors: Dict[int, int] = {}

    def assign(i: int) -> bool:
        if i == len(order):
            return True
        v = order[i]
        used = {colors[w] for w in view.adj[v] if w in colors}
        # Colour symmetry: never open more than one new colour at a time
        limit = min(k, max(colors.values(), default=-1) + 2)
        for c in range(limit):
            if c not in used:
                colors[v] = c
                if assign(i + 1):
                    return True
                del colors[v]
        return False

    return assign(0)


def chromatic_number_exact(view: GraphView) -> int:
    if view.n == 0:
        return 0
    upper = len(set(greedy_coloring(view).values()))
    for k in range(1, upper):
        if is_k_colorable(view, k):
            return k
    return upper


def is_proper_coloring(view: GraphView, colors: Dict[int, object]) -> bool:
    return all(colors[u] != colors[v] for u, v in view.simple_edges())


# =============================================================================
# CONNECTIVITY STRENGTH
# =============================================================================

def vertex_connectivity_exact(view: GraphView) -> int:
    """Smallest vertex cut by subset search; n-1 for complete graphs."""
    n = view.n
    if n <= 1:
        return 0
    if not is_connected(view):
        return 0
    if view.simple_edge_count() == n * (n - 1) // 2:
        return n - 1
    for size in range(1, n - 1):
        for removed in itertools.combinations(range(n), size):
            rest = set(range(n)) - set(removed)
            if len(connected_components(view, rest)) > 1:
                return size
    return n - 1


def edge_connectivity(view: GraphView) -> int:
    """Global minimum edge cut via Stoer-Wagner."""
    if view.n <= 1:
        return 0
    if not is_connected(view):
        return 0
    result = rx.stoer_wagner_min_cut(view.to_undirected_rx())
    if result is None:
        return 0
    return int(round(result[0]))


def articulation_points(view: GraphView) -> Set[int]:
    if view.n == 0:
        return set()
    return set(rx.articulation_points(view.to_undirected_rx()))


def maximum_matching_size(view: GraphView) -> int:
    if view.simple_edge_count() == 0:
        return 0
    matching = rx.max_weight_matching(view.to_undirected_rx(), max_cardinality=True)
    return len(matching)


# =============================================================================
# TREEWIDTH
# =============================================================================

def degeneracy(view: GraphView) -> int:
    """Largest minimum degree over all subgraphs (a treewidth lower bound)."""
    remaining = set(range(view.n))
    degree = {v: view.degree(v) for v in remaining}
    best = 0
    while remaining:
        v = min(remaining, key=lambda x: (degree[x], x))
        best = max(best, degree[v])
        remaining.discard(v)
        for w in view.adj[v]:
            if w in remaining:
                degree[w] -= 1
    return best


def treewidth_upper_bound(view: GraphView) -> int:
    """Min-fill elimination ordering (exact on chordal graphs)."""
    adj = {v: set(view.adj[v]) for v in range(view.n)}
    width = 0
    while adj:
        def fill(v):
            neighbors = list(adj[v])
            return sum(
                1 for a, b in itertools.combinations(neighbors, 2) if b not in adj[a]
            )
        v = min(adj, key=lambda x: (fill(x), len(adj[x]), x))
        neighbors = adj.pop(v)
        width = max(width, len(neighbors))
        for a in neighbors:
            adj[a].discard(v)
        for a, b in itertools.combinations(neighbors, 2):
            adj[a].add(b)
            adj[b].add(a)
    return width


# =============================================================================
# DEGREE-DRIVEN CLASSES
# =============================================================================

def is_threshold(view: GraphView) -> bool:
    """
    Threshold graphs are exactly those that can be emptied by repeatedly
    deleting an isolated or a dominating vertex.
    """
    remaining = set(range(view.n))
    degree = {v: view.degree(v) for v in remaining}
    while remaining:
        size = len(remaining)
        v = next(
            (x for x in sorted(remaining) if degree[x] == 0 or degree[x] == size - 1),
            None,
        )
        if v is None:
            return False
        remaining.discard(v)
        for w in view.adj[v]:
            if w in remaining:
                degree[w] -= 1
    return True


def strongly_regular_violation(view: GraphView, k: int, lam: int, mu: int) -> Optional[str]:
    """Return a description of the first (k, λ, μ) violation, or None."""
    for v in range(view.n):
        if view.degree(v) != k:
            return f"vertex {view.ids[v]} has degree {view.degree(v)}, expected {k}"
    for u, v in itertools.combinations(range(view.n), 2):
        common = len(view.adj[u] & view.adj[v])
        if view.has_edge(u, v) and common != lam:
            return f"adjacent pair ({view.ids[u]}, {view.ids[v]}) shares {common} neighbours, expected λ={lam}"
        if not view.has_edge(u, v) and common != mu:
            return f"non-adjacent pair ({view.ids[u]}, {view.ids[v]}) shares {common} neighbours, expected μ={mu}"
    return None


def induced_subgraph_signature(view: GraphView, subset: Sequence[int]) -> Tuple[Tuple[int, ...], int]:
    """(sorted induced degrees, induced edge count) of a vertex subset."""
    members = set(subset)
    degrees = tuple(sorted(len(view.adj[v] & members) for v in subset))
    return degrees, sum(degrees) // 2


# =============================================================================
# FORBIDDEN INDUCED SUBGRAPHS
# =============================================================================

# Each supported pattern is pinned down by its degree sequence and edge count
FORBIDDEN_SUBGRAPHS: Dict[str, Tuple[Tuple[int, ...], int]] = {
    "K3": ((2, 2, 2), 3),
    "TRIANGLE": ((2, 2, 2), 3),
    "P3": ((1, 1, 2), 2),
    "P4": ((1, 1, 2, 2), 3),
    "C4": ((2, 2, 2, 2), 4),
    "C5": ((2, 2, 2, 2, 2), 5),
    "K4": ((3, 3, 3, 3), 6),
    "K5": ((4, 4, 4, 4, 4), 10),
    "CLAW": ((1, 1, 1, 3), 3),
    "K1,3": ((1, 1, 1, 3), 3),
    "2K2": ((1, 1, 1, 1), 2),
}


def forbidden_pattern(name: str) -> Optional[Tuple[Tuple[int, ...], int]]:
    return FORBIDDEN_SUBGRAPHS.get(name.strip().upper())


def find_forbidden_subgraph(
    view: GraphView,
    name: str,
    containing: Sequence[int] = (),
) -> Optional[List[int]]:
    """
    Find an induced copy of a named pattern.

    Args:
        view: Graph view
        name: Pattern name (see FORBIDDEN_SUBGRAPHS)
        containing: Only consider vertex subsets that include these vertices

    Raises:
        KeyError: Unknown pattern name
    """
    pattern = forbidden_pattern(name)
    if pattern is None:
        raise KeyError(name)
    degrees, edge_count = pattern
    size = len(degrees)
    fixed = list(dict.fromkeys(containing))
    if len(fixed) > size:
        return None
    others = [v for v in range(view.n) if v not in fixed]
    for extra in itertools.combinations(others, size - len(fixed)):
        subset = fixed + list(extra)
        if induced_subgraph_signature(view, subset) == (degrees, edge_count):
            return subset
    return None
