"""
Priority Queue implementation using Pairing Heap.

This module provides a pairing heap-based min priority queue with handles,
linear-time membership lookup and key update (both decrease and increase),
which is what Dijkstra-style searches and event simulations need.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, Protocol, TypeVar
import warnings

from .arena import NIL, NodeArena
from .errors import EmptyHeapError, MissingArgumentError, MissingItemError, StaleHandleError
from .logger import init_logger
from .node import Node

T = TypeVar("T")

logger = init_logger(__name__)

# Heaps larger than this warn (once) when searched with find()
FIND_SCAN_WARNING_THRESHOLD = 100_000


class PerformanceWarning(UserWarning):
    """Warning about performance-related issues."""
    pass


class SupportsLessThan(Protocol):
    """Items that can be ordered without an explicit comparator."""

    def __lt__(self, other: Any) -> bool: ...


def natural_order(a: SupportsLessThan, b: SupportsLessThan) -> int:
    """
    Three-way comparison built from ``<`` alone.

    Returns:
        Negative if a < b, positive if b < a, zero otherwise
    """
    return int(b < a) - int(a < b)


class PairingHeap(Generic[T]):
    """
    Pairing Heap data structure.

    A pairing heap is a self-adjusting multiway tree with relatively simple
    implementation and excellent practical amortized performance: O(1) insert
    and find-min, O(log n) amortized delete-min.

    Nodes are kept in a ``NodeArena``; ``insert`` and ``find`` hand out ``Node``
    handles which can later be passed to ``update_item``.
    """

    def __init__(
        self,
        comparator: Optional[Callable[[T, T], int]] = None,
        *,
        capacity: int = 16,
    ):
        """
        Initialize an empty heap.

        Args:
            comparator: Function returning negative, zero, or positive. When
                omitted, items are ordered with their own ``<`` operator.
            capacity: Initial number of node slots
        """
        if comparator is None:
            comparator = natural_order
        elif not callable(comparator):
            raise MissingArgumentError(f"comparator must be callable, got {comparator!r}")
        self._comparator = comparator
        self._arena: NodeArena[T] = NodeArena(capacity)
        self._head = NIL
        self._count = 0
        self._warned_scan = False

    @property
    def comparator(self) -> Callable[[T, T], int]:
        """The ordering used by this heap."""
        return self._comparator

    @property
    def count(self) -> int:
        """Number of items in the heap."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def empty(self) -> bool:
        """Check if the heap is empty."""
        return self._head == NIL

    @property
    def head(self) -> Optional[Node[T]]:
        """Handle of the root (minimum) node, or None when empty."""
        return None if self._head == NIL else Node(self._arena, self._head)

    def _link(self, first: int, second: int) -> int:
        """
        Meld two trees, making the larger root the first child of the smaller.

        Either argument may be NIL, in which case the other is returned. Ties
        keep the first argument on top.

        Returns:
            Root of the melded tree
        """
        if first == NIL:
            return second
        if second == NIL:
            return first

        items = self._arena.items
        if self._comparator(items[first], items[second]) > 0:
            self._arena.add_child(second, first)
            return second
        self._arena.add_child(first, second)
        return first

    def _merge_children(self, slot: int) -> int:
        """
        Detach the children of ``slot`` and merge them into a single tree.

        Two-pass pairing: first link adjacent children left to right (an odd
        last child carries over), then fold the results left to right.

        Returns:
            Root of the merged tree, or NIL if ``slot`` had no children
        """
        arena = self._arena
        pairs = []

        current = int(arena.child[slot])
        arena.child[slot] = NIL
        while current != NIL:
            partner = int(arena.sibling[current])
            arena.detach(current)
            if partner == NIL:
                pairs.append(current)
                break

            following = int(arena.sibling[partner])
            arena.detach(partner)
            pairs.append(self._link(current, partner))
            current = following

        root = NIL
        for subtree in pairs:
            root = self._link(root, subtree)
        return root

    def _replace_child(self, parent: int, old: int, new: int) -> None:
        """Put ``new`` (possibly NIL) where ``old`` sits in ``parent``'s child list."""
        arena = self._arena
        following = int(arena.sibling[old])
        if new != NIL:
            arena.parent[new] = parent
            arena.sibling[new] = following
            successor = new
        else:
            successor = following

        if int(arena.child[parent]) == old:
            arena.child[parent] = successor
            return

        previous = int(arena.child[parent])
        while int(arena.sibling[previous]) != old:
            previous = int(arena.sibling[previous])
        arena.sibling[previous] = successor

    def insert(self, item: T) -> Node[T]:
        """
        Insert an item into the heap.

        Args:
            item: Item to insert (must not be None)

        Returns:
            Handle of the new node, usable with ``update_item``
        """
        if item is None:
            raise MissingItemError("cannot insert None into a heap")

        slot = self._arena.allocate(item)
        if self._head == NIL:
            self._head = slot
        else:
            try:
                self._head = self._link(self._head, slot)
            except Exception:
                self._arena.release(slot)
                raise

        self._count += 1
        return Node(self._arena, slot)

    def examine_min(self) -> T:
        """Return the minimum item without removing it."""
        if self._head == NIL:
            raise EmptyHeapError("the heap is empty")
        return self._arena.items[self._head]

    def extract_min(self) -> T:
        """
        Remove and return the minimum item.

        Returns:
            The item that was at the root
        """
        if self._head == NIL:
            raise EmptyHeapError("the heap is empty")

        head = self._head
        item = self._arena.items[head]
        self._head = self._merge_children(head)
        self._arena.release(head)
        self._count -= 1
        return item

    def find(self, item: T) -> Optional[Node[T]]:
        """
        Search the whole heap for an item equal (``==``) to ``item``.

        This is a linear scan; keep the handle returned by ``insert`` instead
        when possible.

        Args:
            item: Value to look for

        Returns:
            Handle of the first matching node, or None if nothing matches
        """
        if self._head == NIL:
            raise EmptyHeapError("cannot search an empty heap")

        if self._count > FIND_SCAN_WARNING_THRESHOLD and not self._warned_scan:
            self._warned_scan = True
            warnings.warn(
                f"find() scans all {self._count} items of the heap; "
                "keep the handles returned by insert() to avoid repeated scans.",
                PerformanceWarning,
                stacklevel=2,
            )

        items = self._arena.items
        for slot in self._arena.walk(self._head):
            if items[slot] == item:
                return Node(self._arena, slot)
        return None

    def update_item(self, node: Node[T], item: T) -> Node[T]:
        """
        Replace the item held by ``node`` with ``item``.

        The old node is removed from the heap (its handle becomes stale) and
        ``item`` is inserted as a new node, so the new key may be smaller or
        larger than the old one.

        Args:
            node: Handle of the entry to update
            item: Replacement item (must not be None)

        Returns:
            Handle of the node now holding ``item``
        """
        if node is None:
            raise MissingArgumentError("a node handle is required to update an item")
        if not isinstance(node, Node):
            raise MissingArgumentError(f"expected a Node handle, got {type(node).__name__}")
        if item is None:
            raise MissingItemError("cannot update an item to None")
        if not node.owned_by(self._arena):
            raise StaleHandleError("node handle belongs to a different heap")
        slot = node.slot

        # The new item will be linked against the head; an incomparable item
        # must fail here, before anything is detached.
        self._comparator(self._arena.items[self._head], item)

        if slot == self._head:
            self.extract_min()
            return self.insert(item)

        parent = int(self._arena.parent[slot])
        replacement = self._merge_children(slot)
        self._replace_child(parent, slot, replacement)
        logger.debug(
            "Removed slot %d from under slot %d, spliced merged children at slot %d",
            slot, parent, replacement,
        )
        self._arena.release(slot)
        self._count -= 1
        return self.insert(item)

    def to_list(self) -> list[Node[T]]:
        """
        Collect a handle for every node in the heap.

        Returns:
            List of handles in traversal order (empty for an empty heap)
        """
        return [Node(self._arena, slot) for slot in self._arena.walk(self._head)]

    def for_each(self, f: Callable[[T, Node[T]], None]) -> None:
        """
        Apply function to each element in the heap.

        Args:
            f: Function to apply to each (element, heap_node) pair
        """
        items = self._arena.items
        for slot in self._arena.walk(self._head):
            f(items[slot], Node(self._arena, slot))

    def is_heap(self) -> bool:
        """
        Verify heap property holds (for testing).

        Returns:
            True if no child orders before its parent
        """
        arena = self._arena
        for slot in arena.walk(self._head):
            parent = int(arena.parent[slot])
            if parent != NIL and self._comparator(arena.items[parent], arena.items[slot]) > 0:
                return False
        return True

    def to_string(self, selector: Callable[[T], str] = str) -> str:
        """
        Render the tree as ``root(child,child(grandchild))``.

        Children are listed first to last in child-list order, which puts the
        most recently linked child first: inserting 5, 3, 10 gives ``3(10,5)``.

        Args:
            selector: Function to convert element to string

        Returns:
            String representation of the heap ("" when empty)
        """
        if self._head == NIL:
            return ""

        arena = self._arena
        parts = []
        stack: list[Any] = [self._head]
        while stack:
            entry = stack.pop()
            if isinstance(entry, str):
                parts.append(entry)
                continue

            parts.append(selector(arena.items[entry]))
            children = list(arena.children(entry))
            if children:
                stack.append(")")
                for index in range(len(children) - 1, -1, -1):
                    stack.append(children[index])
                    if index > 0:
                        stack.append(",")
                stack.append("(")
        return "".join(parts)

    def __str__(self) -> str:
        """String representation for debugging."""
        return self.to_string()
