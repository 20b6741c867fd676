"""
Exceptions raised by the pairing heap.

Every error is a contract violation detected before the heap is mutated, so a
caught error always leaves the heap exactly as it was before the call.
"""


class PairingHeapError(Exception):
    """Base class for all pairing heap errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class EmptyHeapError(PairingHeapError, IndexError):
    """Raised when reading or searching a heap that holds no items."""
    pass


class MissingItemError(PairingHeapError, ValueError):
    """Raised when ``None`` is offered as an item."""
    pass


class MissingArgumentError(PairingHeapError, TypeError):
    """Raised when a required comparator, visitor or handle is absent."""
    pass


class StaleHandleError(PairingHeapError):
    """Raised when a handle refers to a removed node or to another heap."""
    pass
