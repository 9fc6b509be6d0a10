import random

import matplotlib
matplotlib.use('Agg')

import pytest

from graph_animator.graph import Graph, sample_graph


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def graph(rng):
    """N1-N4 (6), N4-N3 (6), N3-N2 (1), N2-N1 (10)."""
    return sample_graph(rng)


@pytest.fixture
def empty_graph(rng):
    return Graph(rng)


@pytest.fixture
def disconnected_graph(rng):
    g = Graph(rng)
    for x, y in [(100, 100), (300, 100), (100, 300), (300, 300)]:
        g.add_node(x, y)
    g.add_edge('N1', 'N2', 3)
    g.add_edge('N3', 'N4', 2)
    return g
