"""Shared pytest fixtures.

Every test gets a fresh context whose native library is wrapped in a
recording proxy, so tests can assert on reference-count traffic per
native pointer.
"""

from collections import Counter
from typing import Any, Callable, List, Tuple

import pytest

from z3_handles import Context, load_library

INC_SUFFIX = "_inc_ref"
DEC_SUFFIX = "_dec_ref"


class RecordingLibrary:
    """Proxy over the loaded libz3 that counts inc/dec calls per pointer."""

    def __init__(self, lib: Any):
        self._lib = lib
        self.counts: Counter = Counter()
        self.events: List[Tuple[str, int]] = []

    def __getattr__(self, name: str) -> Any:
        fn = getattr(self._lib, name)
        if name.endswith(INC_SUFFIX):
            return self._recorder(fn, name, name[: -len(INC_SUFFIX)], 1)
        if name.endswith(DEC_SUFFIX):
            return self._recorder(fn, name, name[: -len(DEC_SUFFIX)], -1)
        return fn

    def _recorder(self, fn: Callable, name: str, family: str, delta: int) -> Callable:
        def record(ctx, address):
            self.counts[(family, address)] += delta
            self.events.append((name, address))
            return fn(ctx, address)

        return record

    def net(self, address: int, family: str = "Z3") -> int:
        """Net increments issued by the wrapper for one pointer."""
        return self.counts[(family, address)]

    def mark(self) -> int:
        """Position in the event log, for checking traffic over a span."""
        return len(self.events)

    def since(self, mark: int) -> List[Tuple[str, int]]:
        return self.events[mark:]


@pytest.fixture
def recording() -> RecordingLibrary:
    return RecordingLibrary(load_library())


@pytest.fixture
def ctx(recording):
    context = Context(library=recording)
    yield context
    context.close()


@pytest.fixture
def other_ctx():
    context = Context()
    yield context
    context.close()
