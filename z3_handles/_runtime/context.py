"""
Native Z3 context ownership.

A Context owns one reference-counted native context. Every handle keeps a
strong reference to its Context, so the native context outlives every
handle allocated from it.
"""

import threading
import weakref
from contextlib import ExitStack, contextmanager
from typing import Any, Callable, Iterator, List, Optional, Tuple, Type, TypeVar

from .errors import InvalidHandle, NativeFailure, error_from_code
from .ref_tracker import RefTracker
from .reference import Reference, ReferenceKind
from .._logging import get_logger
from .._z3.functions import decode
from .._z3.types import Z3_error_code, to_enum

logger = get_logger(__name__)

T = TypeVar("T")


class _NativeState:
    """
    Native context pointer plus the bookkeeping needed to tear it down.

    Kept separate from Context so the garbage-collector finalizer can
    destroy the native context without holding the Context alive.
    """

    def __init__(self, lib: Any, address: int):
        self.lib = lib
        self.address: Optional[int] = address
        self.lock = threading.RLock()
        self.depth = 0
        self.pending: List[Tuple[ReferenceKind, int]] = []
        self.reflist = RefTracker()

    def drain_pending(self) -> None:
        """Issue every queued decrement."""
        while self.pending:
            kind, address = self.pending.pop(0)
            if self.address is None:
                continue
            getattr(self.lib, kind.dec)(self.address, address)
            code = self.lib.Z3_get_error_code(self.address)
            if code != Z3_error_code.Z3_OK:
                logger.warning(
                    "Deferred %s on %#x reported error code %d", kind.dec, address, code
                )

    def destroy(self) -> None:
        """Release all live references, then delete the native context."""
        with self.lock:
            if self.address is None:
                return
            self.depth += 1
            try:
                live = RefTracker.finalize_all(self.reflist)
                if live:
                    logger.warning(
                        "Context %#x closed with %d live reference(s); released them",
                        self.address,
                        live,
                    )
                self.drain_pending()
            finally:
                self.depth -= 1
            logger.debug("Deleting Z3 context %#x", self.address)
            self.lib.Z3_del_context(self.address)
            self.address = None


class Context:
    """
    Owner of one native Z3 context.

    Manages:
    - The native context and its configuration parameters
    - The list of live references allocated from it
    - Serialization of native calls and deferred reference releases
    """

    def __init__(self, library: Any = None, **params: Any):
        from ..config import CONFIG
        from .._loader import load_library

        lib = library if library is not None else load_library(CONFIG.library_path)

        cfg = lib.Z3_mk_config()
        try:
            for key, value in CONFIG.merged_params(params).items():
                lib.Z3_set_param_value(cfg, key.encode("utf-8"), value.encode("utf-8"))
            address = lib.Z3_mk_context_rc(cfg)
        finally:
            lib.Z3_del_config(cfg)

        if not address:
            raise NativeFailure(
                Z3_error_code.Z3_INTERNAL_FATAL, "Z3_mk_context_rc returned NULL"
            )

        # No handler: errors only set the error code, which call() checks
        lib.Z3_set_error_handler(address, None)

        self.lib = lib
        self.params = params
        self._state = _NativeState(lib, address)
        self._finalizer = weakref.finalize(self, self._state.destroy)
        logger.debug("Created Z3 context %#x", address)

    # Native access

    @property
    def native(self) -> int:
        """Native context pointer. Raises InvalidHandle once closed."""
        address = self._state.address
        if address is None:
            raise InvalidHandle("context is closed")
        return address

    @property
    def closed(self) -> bool:
        """Check if the native context was deleted."""
        return self._state.address is None

    @property
    def reflist(self) -> RefTracker:
        """Head of the live reference list."""
        return self._state.reflist

    def live_references(self) -> int:
        """Number of references currently holding a native count."""
        with self._state.lock:
            return RefTracker.count(self._state.reflist)

    @contextmanager
    def session(self) -> Iterator["Context"]:
        """
        Critical section for a sequence of native calls.

        Re-entrant. Releases requested while a session is open are queued
        and issued when the outermost session exits.
        """
        state = self._state
        with state.lock:
            state.depth += 1
            try:
                yield self
            finally:
                if state.depth == 1:
                    state.drain_pending()
                state.depth -= 1

    @staticmethod
    @contextmanager
    def joint_session(*contexts: "Context") -> Iterator[None]:
        """
        Hold sessions on several contexts at once.

        Locks are always taken in the same global order, so two threads
        joining the same pair of contexts from opposite ends cannot
        deadlock.
        """
        unique = {id(ctx._state): ctx for ctx in contexts}
        with ExitStack() as stack:
            for key in sorted(unique):
                stack.enter_context(unique[key].session())
            yield

    def function(self, name: str) -> Callable[..., Any]:
        """Look up a native entry point."""
        try:
            return getattr(self.lib, name)
        except AttributeError:
            raise NativeFailure(
                Z3_error_code.Z3_EXCEPTION,
                f"{name} is not exported by the loaded Z3 library",
            ) from None

    def call(self, name: str, *args: Any, index: Optional[int] = None) -> Any:
        """
        Call a native entry point with this context as first argument.

        The error code is read right after the call and converted to a
        typed error before anything else can run against the context.
        """
        fn = self.function(name)
        with self.session():
            address = self.native
            result = fn(address, *args)
            code = self.lib.Z3_get_error_code(address)
            if code != Z3_error_code.Z3_OK:
                code = to_enum(Z3_error_code, code, Z3_error_code.Z3_EXCEPTION)
                message = decode(self.lib.Z3_get_error_msg(address, code))
                logger.debug("%s failed with %s: %s", name, code.name, message)
                raise error_from_code(code, message, index)
        return result

    def produce(self, cls: Type[T], name: str, *args: Any) -> T:
        """Call a native constructor and wrap the result in a new handle."""
        with self.session():
            address = self.call(name, *args)
            return cls(self, address)

    def check_bool(self, name: str, *args: Any) -> bool:
        """Call a native predicate."""
        return bool(self.call(name, *args))

    def release_reference(self, ref: Reference) -> None:
        """Decrement a reference's native count exactly once."""
        state = self._state
        with state.lock:
            if not ref.alive:
                return
            with self.session():
                address = ref.detach()
                if state.address is not None:
                    state.pending.append((ref.kind, address))

    # Lifecycle

    def close(self) -> None:
        """Release every live reference and delete the native context."""
        self._finalizer()

    dispose = close

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __repr__(self):
        address = self._state.address
        state = f"{address:#x}" if address else "closed"
        return f"<Context {state}>"


# Per-thread default context
_default = threading.local()


def get_default_context() -> Context:
    """Get or create the calling thread's default context."""
    ctx = getattr(_default, "context", None)
    if ctx is None or ctx.closed:
        ctx = Context()
        _default.context = ctx
    return ctx


def create_context(**params: Any) -> Context:
    """Create a new context."""
    return Context(**params)
