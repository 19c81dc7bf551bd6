"""
GRAPHGEN.FORGE.EDGES - Edge Accumulator for Generators

Every generator appends to one EdgeSet. It keeps the TestEdge list in
insertion order (the output order is part of determinism) plus a key index
so duplicate checks are O(1).

Keys:
- directed:   (source, target)
- undirected: (min, max), so an undirected edge is stored once
"""
from typing import Iterator, List, Optional, Set, Tuple

from core.schemas import TestEdge


def edge_key(source: str, target: str, directed: bool) -> Tuple[str, str]:
    if directed or source <= target:
        return (source, target)
    return (target, source)


class EdgeSet:
    """
    Ordered edge list with duplicate tracking.

    Args:
        directed: Whether (a, b) and (b, a) are distinct edges
    """

    def __init__(self, directed: bool, edges: Optional[List[TestEdge]] = None):
        self.directed = directed
        self.edges: List[TestEdge] = []
        self._keys: Set[Tuple[str, str]] = set()
        for edge in edges or ():
            self.add_raw(edge.source, edge.target)

    def add(self, source: str, target: str) -> bool:
        """Add an edge unless it already exists. Returns True when added."""
        key = edge_key(source, target, self.directed)
        if key in self._keys:
            return False
        self._keys.add(key)
        self.edges.append(TestEdge(source=source, target=target))
        return True

    def add_raw(self, source: str, target: str) -> None:
        """Add an edge even if it duplicates an existing one (multigraphs)."""
        self._keys.add(edge_key(source, target, self.directed))
        self.edges.append(TestEdge(source=source, target=target))

    def has(self, source: str, target: str) -> bool:
        return edge_key(source, target, self.directed) in self._keys

    def has_self_loop(self) -> bool:
        return any(edge.source == edge.target for edge in self.edges)

    def clear(self) -> None:
        self.edges.clear()
        self._keys.clear()

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[TestEdge]:
        return iter(self.edges)
