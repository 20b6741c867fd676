"""
Index-addressed node storage for the pairing heap.

Nodes live in parallel columns: the stored items in a Python list, and the
structural links (parent, sibling, child) plus a per-slot generation counter in
numpy integer arrays. A node is identified by its slot index, and ``NIL`` (-1)
stands for "no node". Released slots are recycled; bumping the generation on
release is what lets handles detect that their node is gone.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

import numpy as np

from .logger import init_logger

T = TypeVar("T")

NIL = -1

logger = init_logger(__name__)


class NodeArena(Generic[T]):
    """
    Growable pool of pairing heap nodes.

    The child/sibling edges form, for every node, a singly linked list of its
    children; ``parent`` is a non-owning back-reference used for navigation only.
    """

    def __init__(self, capacity: int = 16):
        """
        Initialize an empty arena.

        Args:
            capacity: Number of slots to preallocate (grown by doubling)
        """
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.items: list[Optional[T]] = [None] * capacity
        self.parent = np.full(capacity, NIL, dtype=np.int64)
        self.sibling = np.full(capacity, NIL, dtype=np.int64)
        self.child = np.full(capacity, NIL, dtype=np.int64)
        self.generation = np.zeros(capacity, dtype=np.int64)
        self._free: list[int] = list(range(capacity - 1, -1, -1))
        self.live = 0

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated (live or free)."""
        return len(self.items)

    def _grow(self) -> None:
        old = self.capacity
        new = old * 2
        extra = new - old
        self.parent = np.concatenate([self.parent, np.full(extra, NIL, dtype=np.int64)])
        self.sibling = np.concatenate([self.sibling, np.full(extra, NIL, dtype=np.int64)])
        self.child = np.concatenate([self.child, np.full(extra, NIL, dtype=np.int64)])
        self.generation = np.concatenate([self.generation, np.zeros(extra, dtype=np.int64)])
        self.items.extend([None] * extra)
        self._free.extend(range(new - 1, old - 1, -1))
        logger.debug(f"Node arena grown from {old} to {new} slots")

    def allocate(self, item: T) -> int:
        """
        Store ``item`` in a fresh, unlinked slot.

        Returns:
            Slot index of the new node
        """
        if not self._free:
            self._grow()
        slot = self._free.pop()
        self.items[slot] = item
        self.live += 1
        return slot

    def release(self, slot: int) -> None:
        """Drop the node in ``slot`` and invalidate every handle to it."""
        self.items[slot] = None
        self.parent[slot] = NIL
        self.sibling[slot] = NIL
        self.child[slot] = NIL
        self.generation[slot] += 1
        self._free.append(slot)
        self.live -= 1

    def is_live(self, slot: int, generation: int) -> bool:
        """Check whether ``slot`` still holds the node issued at ``generation``."""
        return 0 <= slot < self.capacity and int(self.generation[slot]) == generation

    def add_child(self, parent: int, node: int) -> None:
        """Make ``node`` the first child of ``parent``."""
        self.parent[node] = parent
        self.sibling[node] = self.child[parent]
        self.child[parent] = node

    def detach(self, slot: int) -> None:
        """Clear the parent and sibling links of ``slot``, keeping its subtree."""
        self.parent[slot] = NIL
        self.sibling[slot] = NIL

    def children(self, slot: int) -> Iterator[int]:
        """Yield the children of ``slot`` from first to last."""
        current = int(self.child[slot])
        while current != NIL:
            yield current
            current = int(self.sibling[current])

    def walk(self, start: int) -> Iterator[int]:
        """
        Yield every slot reachable from ``start`` exactly once.

        Follows child and sibling edges with an explicit stack, so arbitrarily
        deep trees do not hit the recursion limit. Nothing is yielded for ``NIL``.

        Args:
            start: Slot to begin from

        Yields:
            Slot indices in depth-first order
        """
        if start == NIL:
            return
        stack = [start]
        while stack:
            slot = stack.pop()
            yield slot

            sibling = int(self.sibling[slot])
            if sibling != NIL:
                stack.append(sibling)

            child = int(self.child[slot])
            if child != NIL:
                stack.append(child)

    def iterate(self, start: int, visitor: Callable[[int], Any]) -> None:
        """
        Call ``visitor`` on every slot reachable from ``start``.

        Args:
            start: Slot to begin from
            visitor: Called with each slot; a falsy return stops the traversal
        """
        for slot in self.walk(start):
            if not visitor(slot):
                break
