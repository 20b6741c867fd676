"""
Shortest paths calculation on top of the pairing heap.

Dijkstra's algorithm keeps one queue entry per reached node and lowers it in
place with ``PairingHeap.update_item`` whenever a shorter route is found.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar
import logging

import numpy as np

from .heap import PairingHeap
from .logger import init_logger
from .node import Node

T = TypeVar("T")

logger = init_logger(__name__)


class Neighbour:
    """Adjacency list entry: target node and edge length."""

    def __init__(self, v: int, distance: float):
        self.v = v
        self.distance = distance


class QueueEntry:
    """Tentative distance of a node, ordered by distance then node index."""

    def __init__(self, distance: float, node: int):
        self.distance = distance
        self.node = node

    def __lt__(self, other: QueueEntry) -> bool:
        return (self.distance, self.node) < (other.distance, other.node)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueueEntry):
            return NotImplemented
        return self.distance == other.distance and self.node == other.node

    def __hash__(self) -> int:
        return hash((self.distance, self.node))

    def __repr__(self) -> str:
        return f"QueueEntry({self.distance}, {self.node})"


class Calculator:
    """
    Calculator for all-pairs shortest paths or shortest paths from a single node.

    Edges are treated as undirected and must have non-negative lengths.
    """

    def __init__(
        self,
        n: int,
        edges: list[T],
        get_source_index: Callable[[T], int],
        get_target_index: Callable[[T], int],
        get_length: Callable[[T], float],
    ):
        """
        Initialize shortest path calculator.

        Args:
            n: Number of nodes
            edges: List of edges
            get_source_index: Function to get source node index from edge
            get_target_index: Function to get target node index from edge
            get_length: Function to get edge length
        """
        self.n = n
        self.neighbours: list[list[Neighbour]] = [[] for _ in range(n)]

        for edge in edges:
            u = get_source_index(edge)
            v = get_target_index(edge)
            d = get_length(edge)
            self._check_index(u)
            self._check_index(v)
            if d < 0:
                raise ValueError(f"edge {u}-{v} has negative length {d}")

            # Undirected graph - add both directions
            self.neighbours[u].append(Neighbour(v, d))
            self.neighbours[v].append(Neighbour(u, d))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.n:
            raise IndexError(f"node index {index} out of range for {self.n} nodes")

    def _dijkstra(self, start: int, dest: Optional[int] = None) -> tuple[np.ndarray, np.ndarray]:
        """
        Run Dijkstra from ``start``, stopping early once ``dest`` is settled.

        Returns:
            (distances, predecessors) arrays; unreached nodes have distance inf
            and predecessor -1
        """
        self._check_index(start)
        distances = np.full(self.n, np.inf)
        previous = np.full(self.n, -1, dtype=np.int64)
        settled = np.zeros(self.n, dtype=bool)

        distances[start] = 0.0
        queue: PairingHeap[QueueEntry] = PairingHeap()
        handles: dict[int, Node[QueueEntry]] = {start: queue.insert(QueueEntry(0.0, start))}

        while queue:
            entry = queue.extract_min()
            u = entry.node
            del handles[u]
            settled[u] = True
            if u == dest:
                break

            for neighbour in self.neighbours[u]:
                v = neighbour.v
                if settled[v]:
                    continue
                candidate = entry.distance + neighbour.distance
                if candidate < distances[v]:
                    distances[v] = candidate
                    previous[v] = u
                    relaxed = QueueEntry(candidate, v)
                    handle = handles.get(v)
                    if handle is None:
                        handles[v] = queue.insert(relaxed)
                    else:
                        handles[v] = queue.update_item(handle, relaxed)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Dijkstra from node %d settled %d of %d nodes", start, int(settled.sum()), self.n)
        return distances, previous

    def distance_matrix(self) -> list[list[float]]:
        """
        Compute all-pairs shortest paths.

        Returns:
            Matrix of shortest distances between all pairs of nodes
        """
        return [self.distances_from_node(i) for i in range(self.n)]

    def distances_from_node(self, start: int) -> list[float]:
        """
        Get shortest paths from a specified start node.

        Args:
            start: Starting node index

        Returns:
            Array of shortest distances from start to all other nodes
        """
        distances, _ = self._dijkstra(start)
        return distances.tolist()

    def path_from_node_to_node(self, start: int, end: int) -> list[int]:
        """
        Find shortest path from start to end node.

        Args:
            start: Start node index
            end: End node index

        Returns:
            Predecessors of end back to start (excluding end, including
            start); empty if end is unreachable or equal to start
        """
        self._check_index(end)
        distances, previous = self._dijkstra(start, end)
        if np.isinf(distances[end]):
            return []

        path = []
        current = end
        while current != start:
            current = int(previous[current])
            path.append(current)
        return path
