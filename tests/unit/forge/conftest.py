"""
Shared fixtures for the generator tests.
"""
import pytest


@pytest.fixture
def run(rng):
    """
    Run one edge generator over n fresh nodes.

    Usage:
        nodes, edges, view = run(generate_star_edges, 6)
        nodes, edges, view = run(generate_grid_edges, 12, grid={"kind": "grid", "rows": 3, "cols": 4})
        nodes, edges, view = run(generate_bipartite_edges, 6, partitions="halves", partiteness="bipartite")
    """
    from core.graph_invariants import GraphView
    from core.ontology import Partition
    from core.schemas import TestNode
    from core.spec import make_graph_spec
    from forge.edges import EdgeSet

    def _run(generator, n, directed=False, partitions=None, **axes):
        spec = make_graph_spec(directionality="directed" if directed else "undirected", **axes)
        nodes = [TestNode(id=f"N{i}") for i in range(n)]
        if partitions == "halves":
            for i, node in enumerate(nodes):
                node.partition = Partition.LEFT.value if i < n // 2 else Partition.RIGHT.value
        edges = EdgeSet(directed=directed)
        generator(nodes, edges, spec, rng)
        return nodes, edges, GraphView(nodes, edges.edges, directed)

    return _run
