"""Per-session evaluation state shared by every scope of one interpreter."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TextIO, TYPE_CHECKING

from mehl.config import get_max_depth
from mehl.errors import MehlRecursionError
from mehl.types.scope import Scope

if TYPE_CHECKING:
    from mehl.evaluation.primitives import PrimitiveRegistry

# Python frames used by one level of Mehl invocation, with some headroom.
_FRAMES_PER_LEVEL = 12


class Runtime:
    """
    Holds the primitive dispatcher, the host output stream and the
    invocation depth counter.
    """

    def __init__(
        self,
        primitives: PrimitiveRegistry | None = None,
        output: TextIO | None = None,
        max_depth: int | None = None,
    ):
        if primitives is None:
            from mehl.evaluation.primitives import default_registry
            primitives = default_registry()
        self.primitives = primitives
        self._output = output
        self.max_depth = max_depth if max_depth is not None else get_max_depth()
        self.depth = 0

    @property
    def output(self) -> TextIO:
        # Resolved late so redirected stdout is honoured
        return self._output if self._output is not None else sys.stdout

    def write(self, text: str) -> None:
        self.output.write(text)

    @contextmanager
    def nested(self):
        """
        Count one level of invocation.

        The outermost level raises the Python recursion limit far enough for
        `max_depth` levels and puts the old limit back when it returns.
        """
        if self.depth >= self.max_depth:
            raise MehlRecursionError(f"Maximum invocation depth of {self.max_depth} exceeded")
        saved_limit = None
        if self.depth == 0:
            needed = self.max_depth * _FRAMES_PER_LEVEL + sys.getrecursionlimit()
            saved_limit = sys.getrecursionlimit()
            sys.setrecursionlimit(needed)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
            if saved_limit is not None:
                sys.setrecursionlimit(saved_limit)


@dataclass(frozen=True)
class Frame:
    """What a primitive sees of its caller: the current scope and the runtime."""
    scope: Scope
    runtime: Runtime
