"""Tests for shortest paths calculator."""

import numpy as np
import pytest
from pairheap.shortestpaths import Calculator, QueueEntry


class Edge:
    """Simple edge class for testing."""

    def __init__(self, source: int, target: int, length: float = 1.0):
        self.source = source
        self.target = target
        self.length = length


def make_calculator(n: int, edges: list[Edge]) -> Calculator:
    return Calculator(
        n, edges,
        lambda e: e.source,
        lambda e: e.target,
        lambda e: e.length
    )


class TestQueueEntry:
    """Test QueueEntry ordering."""

    def test_ordered_by_distance(self):
        """Test that shorter distances come first."""
        assert QueueEntry(1.0, 5) < QueueEntry(2.0, 0)

    def test_ties_broken_by_node(self):
        """Test that equal distances fall back to node index."""
        assert QueueEntry(1.0, 0) < QueueEntry(1.0, 1)
        assert not QueueEntry(1.0, 1) < QueueEntry(1.0, 1)

    def test_equality(self):
        """Test value equality."""
        assert QueueEntry(2.0, 3) == QueueEntry(2.0, 3)
        assert QueueEntry(2.0, 3) != QueueEntry(2.0, 4)


class TestCalculator:
    """Test shortest paths calculator."""

    def test_simple_path(self):
        """Test finding path in simple graph."""
        #  0 -- 1 -- 2
        calc = make_calculator(3, [Edge(0, 1, 1.0), Edge(1, 2, 1.0)])

        distances = calc.distances_from_node(0)
        assert distances == [0.0, 1.0, 2.0]

    def test_weighted_graph(self):
        """Test with weighted edges (node 1 is first reached the long way)."""
        #  0 --(5)-- 1
        #  |         |
        # (1)       (1)
        #  |         |
        #  2 --(1)-- 3
        edges = [
            Edge(0, 1, 5.0),
            Edge(0, 2, 1.0),
            Edge(1, 3, 1.0),
            Edge(2, 3, 1.0),
        ]
        calc = make_calculator(4, edges)

        distances = calc.distances_from_node(0)
        assert distances[0] == 0.0
        assert distances[1] == 3.0  # Via 2->3 is shorter than direct (5)
        assert distances[2] == 1.0
        assert distances[3] == 2.0

    def test_distance_matrix(self):
        """Test all-pairs shortest paths."""
        #  0 -- 1
        #  |    |
        #  2 -- 3
        edges = [Edge(0, 1), Edge(0, 2), Edge(1, 3), Edge(2, 3)]
        calc = make_calculator(4, edges)

        matrix = calc.distance_matrix()

        for i in range(4):
            for j in range(4):
                assert matrix[i][j] == matrix[j][i]

        assert matrix[0] == [0.0, 1.0, 1.0, 2.0]

    def test_path_from_node_to_node(self):
        """Test finding specific path between nodes."""
        #  0 -- 1 -- 2 -- 3
        calc = make_calculator(4, [Edge(0, 1), Edge(1, 2), Edge(2, 3)])

        # Built backwards from the predecessor of the end node
        assert calc.path_from_node_to_node(0, 3) == [2, 1, 0]

    def test_path_prefers_shorter_route(self):
        """Test that the path follows relaxed distances."""
        edges = [
            Edge(0, 1, 5.0),
            Edge(0, 2, 1.0),
            Edge(1, 3, 1.0),
            Edge(2, 3, 1.0),
        ]
        calc = make_calculator(4, edges)

        assert calc.path_from_node_to_node(0, 1) == [3, 2, 0]

    def test_path_unreachable(self):
        """Test path to a node in another component."""
        calc = make_calculator(4, [Edge(0, 1), Edge(2, 3)])
        assert calc.path_from_node_to_node(0, 3) == []

    def test_path_to_self(self):
        """Test path from a node to itself."""
        calc = make_calculator(2, [Edge(0, 1)])
        assert calc.path_from_node_to_node(1, 1) == []

    def test_disconnected_graph(self):
        """Test graph with disconnected components."""
        #  0 -- 1    2 -- 3
        calc = make_calculator(4, [Edge(0, 1), Edge(2, 3)])

        distances = calc.distances_from_node(0)

        assert distances[0] == 0.0
        assert distances[1] == 1.0
        assert distances[2] == float('inf')
        assert distances[3] == float('inf')

    def test_triangle_graph(self):
        """Test graph with triangle (multiple paths)."""
        #    0
        #   / \
        #  1---2
        edges = [Edge(0, 1, 1.0), Edge(0, 2, 1.0), Edge(1, 2, 2.0)]
        calc = make_calculator(3, edges)

        assert calc.distances_from_node(0) == [0.0, 1.0, 1.0]

    def test_single_node(self):
        """Test graph with single node."""
        calc = make_calculator(1, [])
        assert calc.distances_from_node(0) == [0.0]

    def test_self_loop_ignored(self):
        """Test that self loops don't affect shortest paths."""
        calc = make_calculator(2, [Edge(0, 1, 1.0), Edge(0, 0, 5.0)])
        assert calc.distances_from_node(0) == [0.0, 1.0]

    def test_many_relaxations(self):
        """Test a star graph where every node is relaxed repeatedly."""
        # Hub 0 reaches every node directly at a high cost; the chain through
        # 1, 2, ... keeps lowering the queued entries.
        n = 50
        edges = [Edge(0, i, 100.0) for i in range(1, n)]
        edges += [Edge(i, i + 1, 1.0) for i in range(1, n - 1)]
        edges.append(Edge(0, 1, 1.0))
        calc = make_calculator(n, edges)

        distances = calc.distances_from_node(0)
        assert distances == [0.0] + [float(i) for i in range(1, n)]

    def test_negative_length(self):
        """Test that negative edge lengths are rejected."""
        with pytest.raises(ValueError):
            make_calculator(2, [Edge(0, 1, -1.0)])

    def test_bad_index(self):
        """Test that out-of-range nodes are rejected."""
        with pytest.raises(IndexError):
            make_calculator(2, [Edge(0, 2)])

        calc = make_calculator(2, [Edge(0, 1)])
        with pytest.raises(IndexError):
            calc.distances_from_node(5)

    def test_matches_scipy(self):
        """Test random graphs against scipy's Dijkstra."""
        sparse = pytest.importorskip("scipy.sparse")
        csgraph = pytest.importorskip("scipy.sparse.csgraph")

        rng = np.random.default_rng(11)
        n = 40
        pairs = {
            (int(min(u, v)), int(max(u, v)))
            for u, v in rng.integers(0, n, size=(120, 2))
            if u != v
        }
        edges = [Edge(u, v, float(rng.uniform(1.0, 10.0))) for u, v in sorted(pairs)]

        calc = make_calculator(n, edges)
        graph = sparse.csr_matrix(
            (
                [e.length for e in edges],
                ([e.source for e in edges], [e.target for e in edges]),
            ),
            shape=(n, n),
        )
        expected = csgraph.shortest_path(graph, method='D', directed=False)

        assert np.allclose(np.array(calc.distance_matrix()), expected)
