"""
Pytest configuration and shared fixtures for the GraphGen test suite.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset cached settings and the event buffer around each test."""
    from infrastructure.config_graph import reset_settings
    from infrastructure.logger import reset_generation_logger

    reset_settings()
    reset_generation_logger()

    yield

    reset_settings()
    reset_generation_logger()


@pytest.fixture
def rng():
    """A SeededRandom with a fixed seed."""
    from forge.rng import SeededRandom
    return SeededRandom(42)


@pytest.fixture
def make_graph():
    """
    Build a TestGraph by hand.

    Usage:
        graph = make_graph(4, [(0, 1), (1, 2)], directed=True)
        graph = make_graph(3, [(0, 1)], spec=make_graph_spec(cycles="acyclic"))
    """
    from core.schemas import TestEdge, TestGraph, TestNode
    from core.spec import make_graph_spec

    def _make(n, pairs, spec=None, directed=False, partitions=None, data=None):
        if spec is None:
            spec = make_graph_spec(directionality="directed" if directed else "undirected")
        nodes = [TestNode(id=f"N{i}") for i in range(n)]
        for i, node in enumerate(nodes):
            if partitions is not None:
                node.partition = partitions[i]
            if data is not None:
                node.data.update(data[i] if isinstance(data, list) else data)
        edges = [TestEdge(source=f"N{u}", target=f"N{v}") for u, v in pairs]
        return TestGraph(nodes=nodes, edges=edges, spec=spec)

    return _make
