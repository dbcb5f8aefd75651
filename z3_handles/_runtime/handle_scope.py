"""
Handle scope for multi-step native operations.

Every handle added to a scope is disposed when the scope closes, except
the one handle that was escaped. The scope also holds a context session
for its whole extent, so the intermediate objects and the result are
produced without any deferred release interleaving.
"""

from contextlib import ExitStack
from typing import List, Optional, TypeVar

from .context import Context
from .disposable import Disposable
from .errors import CrossContextError
from .handle import Handle

H = TypeVar("H", bound=Handle)


class HandleScope(Disposable):
    """
    Scope for automatic handle cleanup.

    Handles added within a scope are released when the scope is closed,
    unless escaped to the caller.
    """

    def __init__(self, ctx: Context):
        self.ctx = ctx
        self._handles: List[Handle] = []
        self._escape_called = False
        self._stack: Optional[ExitStack] = None

    def add(self, handle: H) -> H:
        """Track a handle and return it."""
        if handle.ctx is not self.ctx:
            raise CrossContextError("handle belongs to a different context than its scope")
        self._handles.append(handle)
        return handle

    def escape(self, handle: H) -> H:
        """
        Keep one handle alive past the end of the scope.

        Only one escape is allowed per scope.
        """
        if self._escape_called:
            raise RuntimeError("escape() already called on this scope")
        self._escape_called = True
        for i, tracked in enumerate(self._handles):
            if tracked is handle:
                del self._handles[i]
                break
        return handle

    def escape_called(self) -> bool:
        """Check if escape was already called."""
        return self._escape_called

    def __len__(self) -> int:
        return len(self._handles)

    def dispose(self) -> None:
        """Release all tracked handles, newest first."""
        while self._handles:
            self._handles.pop().dispose()

    def __enter__(self):
        self._stack = ExitStack()
        self._stack.enter_context(self.ctx.session())
        return self

    def __exit__(self, *args):
        stack, self._stack = self._stack, None
        try:
            self.dispose()
        finally:
            if stack is not None:
                stack.close()
