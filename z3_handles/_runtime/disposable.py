"""
Base class for disposable native resources.
"""

from abc import ABC, abstractmethod


class Disposable(ABC):
    """Base class for resources that need explicit cleanup."""

    @abstractmethod
    def dispose(self) -> None:
        """Release the native resource. Must be safe to call repeatedly."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.dispose()
