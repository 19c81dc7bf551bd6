"""
GRAPHGEN ANALYTICS - Spectral, Robustness and Network Metrics

Numeric measurements over a generated graph. Generators use them to record
the actual value of a property next to its requested target; validators use
them to recompute that value independently.

This module provides read-only analytics:
- Spectral: adjacency spectrum, Laplacian λ2, spectral radius
  (numpy eigvalsh, plus scipy.sparse power iteration for large graphs)
- Robustness: toughness and integrity (exact subset search for small graphs,
  degree-based approximations otherwise)
- Network science: clustering, average path length, modularity and the
  log-log slope of the degree distribution (scipy.stats.linregress)

All functions take a GraphView and never modify it.
"""
import itertools
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
from scipy import sparse, stats

from core.graph_invariants import GraphView, connected_components, distance_matrix, is_connected


# =============================================================================
# DATA CLASSES FOR RESULTS
# =============================================================================

@dataclass
class DegreeDistributionFit:
    """Least-squares fit of log(count) against log(degree)."""
    slope: float
    r_value: float
    distinct_degrees: int

    @property
    def exponent(self) -> float:
        return -self.slope


@dataclass
class NetworkReport:
    """Small-world style summary of a graph."""
    node_count: int
    edge_count: int
    clustering: float
    average_path_length: float
    component_count: int


# =============================================================================
# MATRICES
# =============================================================================

def adjacency_matrix(view: GraphView) -> np.ndarray:
    """Symmetric 0/1 adjacency of the undirected simple view."""
    matrix = np.zeros((view.n, view.n))
    for u, v in view.simple_edges():
        matrix[u, v] = 1.0
        matrix[v, u] = 1.0
    return matrix


def sparse_adjacency(view: GraphView) -> sparse.csr_matrix:
    edges = view.simple_edges()
    if not edges:
        return sparse.csr_matrix((view.n, view.n))
    rows = [u for u, v in edges] + [v for u, v in edges]
    cols = [v for u, v in edges] + [u for u, v in edges]
    data = np.ones(len(rows))
    return sparse.csr_matrix((data, (rows, cols)), shape=(view.n, view.n))


def laplacian_matrix(view: GraphView) -> np.ndarray:
    adjacency = adjacency_matrix(view)
    return np.diag(adjacency.sum(axis=1)) - adjacency


# =============================================================================
# SPECTRAL METRICS
# =============================================================================

def adjacency_spectrum(view: GraphView) -> List[float]:
    """Adjacency eigenvalues in descending order."""
    if view.n == 0:
        return []
    values = np.linalg.eigvalsh(adjacency_matrix(view))
    return [float(v) for v in sorted(values, reverse=True)]


def algebraic_connectivity(view: GraphView) -> float:
    """Second smallest Laplacian eigenvalue (0 for disconnected graphs)."""
    if view.n < 2:
        return 0.0
    values = np.sort(np.linalg.eigvalsh(laplacian_matrix(view)))
    return max(0.0, float(values[1]))


def spectral_radius(view: GraphView) -> float:
    """Largest absolute adjacency eigenvalue, computed exactly."""
    spectrum = adjacency_spectrum(view)
    return max((abs(v) for v in spectrum), default=0.0)


def spectral_radius_power_iteration(
    view: GraphView,
    max_iterations: int = 100,
    tolerance: float = 1e-6,
) -> float:
    """
    Dominant adjacency eigenvalue by power iteration with a Rayleigh quotient.

    Args:
        view: Graph view
        max_iterations: Iteration cap
        tolerance: Stop when successive estimates differ by less than this

    Returns:
        Absolute value of the converged (or last) estimate
    """
    if view.n == 0:
        return 0.0
    matrix = sparse_adjacency(view)
    vector = np.ones(view.n)
    estimate = 0.0
    for _ in range(max_iterations):
        product = matrix @ vector
        denominator = float(vector @ vector)
        new_estimate = float(product @ vector) / denominator if denominator > 0 else 0.0
        converged = abs(new_estimate - estimate) < tolerance
        estimate = new_estimate
        if converged:
            break
        norm = float(np.linalg.norm(product))
        if norm == 0:
            break
        vector = product / norm
    return abs(estimate)


def second_largest_eigenvalue_magnitude(view: GraphView) -> float:
    """max |λ| over all adjacency eigenvalues except the largest one."""
    spectrum = adjacency_spectrum(view)
    if len(spectrum) < 2:
        return 0.0
    return max(abs(v) for v in spectrum[1:])


def spectra_match(actual: Sequence[float], expected: Sequence[float], tolerance: float) -> bool:
    if len(actual) != len(expected):
        return False
    a = np.sort(np.asarray(actual, dtype=float))
    b = np.sort(np.asarray(expected, dtype=float))
    return bool(np.all(np.abs(a - b) <= tolerance))


# =============================================================================
# ROBUSTNESS METRICS
# =============================================================================

def _remaining_components(view: GraphView, removed: Sequence[int]) -> List[List[int]]:
    rest = set(range(view.n)) - set(removed)
    return connected_components(view, rest)


def toughness_exact(view: GraphView) -> Optional[float]:
    """
    min |S| / c(G - S) over vertex cuts S.

    Returns None for complete graphs (no vertex cut exists) and 0 for
    disconnected graphs. Exponential; callers bound the vertex count.
    """
    n = view.n
    if n < 2:
        return 0.0
    if not is_connected(view):
        return 0.0
    best: Optional[float] = None
    for size in range(1, n - 1):
        for removed in itertools.combinations(range(n), size):
            parts = len(_remaining_components(view, removed))
            if parts > 1:
                ratio = size / parts
                if best is None or ratio < best:
                    best = ratio
    return best


def toughness_approximation(view: GraphView) -> float:
    """Half the minimum degree for connected graphs, 0 otherwise."""
    if view.n < 2 or not is_connected(view):
        return 0.0
    return min(view.degrees()) / 2


def integrity_exact(view: GraphView) -> float:
    """min over S of |S| + (order of the largest component of G - S)."""
    n = view.n
    if n == 0:
        return 0.0
    best = float(n)
    for size in range(0, n):
        if size >= best:
            break
        for removed in itertools.combinations(range(n), size):
            parts = _remaining_components(view, removed)
            largest = max((len(p) for p in parts), default=0)
            best = min(best, float(size + largest))
    return best


def integrity_approximation(view: GraphView) -> float:
    """Minimum degree + 1 (capped at n) for connected graphs, n otherwise."""
    n = view.n
    if n == 0:
        return 0.0
    if n == 1:
        return 1.0
    if not is_connected(view):
        return float(n)
    return float(min(min(view.degrees()) + 1, n))


# =============================================================================
# NETWORK SCIENCE METRICS
# =============================================================================

def clustering_coefficient(view: GraphView) -> float:
    """Average local clustering; vertices of degree < 2 contribute 0."""
    if view.n == 0:
        return 0.0
    total = 0.0
    for v in range(view.n):
        neighbors = list(view.adj[v])
        k = len(neighbors)
        if k < 2:
            continue
        links = sum(1 for a, b in itertools.combinations(neighbors, 2) if view.has_edge(a, b))
        total += 2.0 * links / (k * (k - 1))
    return total / view.n


def average_path_length(view: GraphView) -> float:
    """Mean hop distance over connected ordered pairs."""
    if view.n < 2:
        return 0.0
    dist = distance_matrix(view)
    finite = dist[(dist > 0)]
    return float(finite.mean()) if finite.size else 0.0


def modularity(view: GraphView, communities: Dict[int, object]) -> float:
    """Newman modularity Q of a vertex -> community assignment."""
    m = view.simple_edge_count()
    if m == 0:
        return 0.0
    degree = view.degrees()
    intra = 0
    for u, v in view.simple_edges():
        if communities.get(u) == communities.get(v):
            intra += 1
    degree_sums: Dict[object, int] = {}
    for v in range(view.n):
        label = communities.get(v)
        degree_sums[label] = degree_sums.get(label, 0) + degree[v]
    expected = sum((d / (2.0 * m)) ** 2 for d in degree_sums.values())
    return intra / m - expected


def fit_degree_distribution(degrees: Sequence[int]) -> Optional[DegreeDistributionFit]:
    """
    Fit a power law to the degree histogram on log-log axes.

    Returns None when fewer than 3 distinct positive degrees exist.
    """
    counts: Dict[int, int] = {}
    for d in degrees:
        if d > 0:
            counts[d] = counts.get(d, 0) + 1
    if len(counts) < 3:
        return None
    xs = np.log(np.array(sorted(counts), dtype=float))
    ys = np.log(np.array([counts[d] for d in sorted(counts)], dtype=float))
    result = stats.linregress(xs, ys)
    return DegreeDistributionFit(
        slope=float(result.slope),
        r_value=float(result.rvalue),
        distinct_degrees=len(counts),
    )


def network_report(view: GraphView) -> NetworkReport:
    return NetworkReport(
        node_count=view.n,
        edge_count=view.m,
        clustering=clustering_coefficient(view),
        average_path_length=average_path_length(view),
        component_count=len(connected_components(view)) if view.n else 0,
    )


def moore_bound(degree: int, diameter: int) -> int:
    """1 + d * sum_{i<D} (d-1)^i, the vertex bound for degree d and diameter D."""
    return 1 + degree * sum((degree - 1) ** i for i in range(diameter))


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """Metadata-safe float: None for missing or non-finite values."""
    if value is None or not math.isfinite(value):
        return None
    return float(value)
