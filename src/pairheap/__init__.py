"""
pairheap: Pairing heap priority queue with handles and key update.
"""

__version__ = "0.1.0"

from .errors import (
    PairingHeapError,
    EmptyHeapError,
    MissingItemError,
    MissingArgumentError,
    StaleHandleError,
)
from .heap import PairingHeap, PerformanceWarning, natural_order
from .node import Node

__all__ = [
    "PairingHeap",
    "Node",
    "natural_order",
    "PerformanceWarning",
    "PairingHeapError",
    "EmptyHeapError",
    "MissingItemError",
    "MissingArgumentError",
    "StaleHandleError",
]
