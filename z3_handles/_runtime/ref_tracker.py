"""
Reference tracker for the linked list of live native references.
"""

from typing import Iterator, Optional

from .disposable import Disposable


class RefTracker(Disposable):
    """
    Doubly-linked list node for tracking references.

    Each context keeps a sentinel head; every live reference links itself
    after it so the context can release them all before it is deleted.
    """

    def __init__(self):
        self._next: Optional["RefTracker"] = None
        self._prev: Optional["RefTracker"] = None

    def link(self, list_head: "RefTracker") -> None:
        """Link this tracker into a list after the given head."""
        self._prev = list_head
        self._next = list_head._next
        if self._next is not None:
            self._next._prev = self
        list_head._next = self

    def unlink(self) -> None:
        """Remove this tracker from its list."""
        if self._prev is not None:
            self._prev._next = self._next
        if self._next is not None:
            self._next._prev = self._prev
        self._prev = None
        self._next = None

    def finalize(self) -> None:
        """Override in subclass to perform finalization."""
        self.unlink()

    def dispose(self) -> None:
        """Clean up this tracker."""
        self.unlink()

    @staticmethod
    def iter_list(list_head: "RefTracker") -> Iterator["RefTracker"]:
        """Iterate over the trackers linked after the head."""
        node = list_head._next
        while node is not None:
            following = node._next
            yield node
            node = following

    @staticmethod
    def count(list_head: "RefTracker") -> int:
        """Number of trackers linked after the head."""
        return sum(1 for _ in RefTracker.iter_list(list_head))

    @staticmethod
    def finalize_all(list_head: "RefTracker") -> int:
        """Finalize all trackers in the list. Returns how many were finalized."""
        finalized = 0
        while list_head._next is not None:
            list_head._next.finalize()
            finalized += 1
        return finalized
