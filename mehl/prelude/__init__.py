from __future__ import annotations
import logging
from typing import Protocol

from mehl.config import get_prelude_files

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def load_prelude(itp: _HasEvalPrelude) -> None:
    """Evaluate the prelude files (bundled core.mehl unless MEHL_PRELUDE_PATH says otherwise)."""
    for path in get_prelude_files():
        if not path.is_file():
            raise FileNotFoundError(f"Cannot find prelude file '{path}' (MEHL_PRELUDE_PATH)")
        logger.debug("Loading prelude %s.", path)
        itp.eval_prelude(path.read_text(encoding='utf-8'))
