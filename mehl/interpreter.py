from __future__ import annotations
import logging
from pathlib import Path
from typing import Literal, TextIO

from mehl import Value
from mehl.reader.parser import parse
from mehl.evaluation.evaluator import evaluate
from mehl.evaluation.primitives import PrimitiveRegistry, root_scope
from mehl.evaluation.runtime import Runtime
from mehl.types.binding import Binding
from mehl.types.scope import Scope
from mehl.types.symbol import UNIT

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates Mehl source.

    Scopes, outermost first: the root (only `✨`), the prelude scope (sealed
    once the prelude is loaded) and the user scope, which stays writable
    for the whole session so definitions persist across `eval` calls.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        primitives: PrimitiveRegistry | None = None,
        output: TextIO | None = None,
        *,
        max_depth: int | None = None,
    ):
        self.runtime = Runtime(primitives, output, max_depth)
        self.root: Scope = root_scope()
        self.prelude_scope: Scope = self.root.child()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from mehl.prelude import load_prelude
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

        self.prelude_scope.seal()
        self.scope: Scope = self.prelude_scope.child()

    def eval_prelude(self, code: str) -> None:
        evaluate(parse(code), self.prelude_scope, UNIT, self.runtime)

    def eval(self, code: str, input: Value = UNIT) -> Value:
        """Evaluate source in the user scope and return the final value."""
        return evaluate(parse(code), self.scope, input, self.runtime)

    def eval_file(self, path: str | Path, input: Value = UNIT) -> Value:
        path = Path(path)
        logger.debug("Running %s.", path)
        return self.eval(path.read_text(encoding='utf-8'), input)

    def lookup(self, name: str) -> Binding:
        return self.scope.lookup(name)

    def resolve(self, name: str) -> Value:
        return self.scope.resolve(name)

    def names(self) -> list[str]:
        """Every name visible from the user scope, innermost definitions first."""
        seen: dict[str, None] = {}
        scope: Scope | None = self.scope
        while scope is not None:
            for binding in scope:
                seen.setdefault(binding.name, None)
            scope = scope.outer
        return list(seen)
