"""
Handles to entries stored in a pairing heap.
"""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from .arena import NIL, NodeArena
from .errors import MissingArgumentError, StaleHandleError

T = TypeVar("T")


class Node(Generic[T]):
    """
    Opaque, generation-checked reference to one node of a pairing heap.

    A handle stays valid until its node is removed by ``extract_min`` or
    superseded by ``update_item``; after that every access raises
    ``StaleHandleError``. Handles compare equal when they point at the same
    node of the same heap.
    """

    __slots__ = ("_arena", "_slot", "_generation")

    def __init__(self, arena: NodeArena[T], slot: int):
        self._arena = arena
        self._slot = slot
        self._generation = int(arena.generation[slot])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self._arena is other._arena
            and self._slot == other._slot
            and self._generation == other._generation
        )

    def __hash__(self) -> int:
        return hash((id(self._arena), self._slot, self._generation))

    def __repr__(self) -> str:
        if not self.alive:
            return f"Node(slot={self._slot}, stale)"
        return f"Node({self._arena.items[self._slot]!r})"

    @property
    def alive(self) -> bool:
        """True while the referenced node is still in its heap."""
        return self._arena.is_live(self._slot, self._generation)

    def owned_by(self, arena: NodeArena) -> bool:
        """Check whether this handle was issued by ``arena``."""
        return self._arena is arena

    @property
    def slot(self) -> int:
        """Slot index of the node; raises ``StaleHandleError`` once removed."""
        if not self.alive:
            raise StaleHandleError(f"node in slot {self._slot} has been removed from its heap")
        return self._slot

    def _wrap(self, slot: int) -> Optional[Node[T]]:
        return None if slot == NIL else Node(self._arena, slot)

    @property
    def item(self) -> T:
        """The stored item."""
        return self._arena.items[self.slot]

    @property
    def parent(self) -> Optional[Node[T]]:
        """Structural parent, or None for the root."""
        return self._wrap(int(self._arena.parent[self.slot]))

    @property
    def sibling(self) -> Optional[Node[T]]:
        """Next node in the parent's child list, or None if last."""
        return self._wrap(int(self._arena.sibling[self.slot]))

    @property
    def child(self) -> Optional[Node[T]]:
        """First child, or None for a leaf."""
        return self._wrap(int(self._arena.child[self.slot]))

    def iterate(self, action: Callable[[Node[T]], bool]) -> None:
        """
        Visit every node reachable from this one (children and later siblings).

        Each node is visited exactly once; the order is depth first but otherwise
        unspecified.

        Args:
            action: Called with each node's handle; returning False stops early
        """
        if action is None:
            raise MissingArgumentError("a visitor is required to iterate")
        arena = self._arena
        arena.iterate(self.slot, lambda slot: action(Node(arena, slot)))
