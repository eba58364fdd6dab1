from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (mehl package directory)
_MEHL_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_FILES = [_MEHL_DIR / 'prelude' / 'core.mehl']
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_MAX_DEPTH = 10000


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_files() -> List[Path]:
    # Each entry is a .mehl file, evaluated in order
    return paths_from_env('MEHL_PRELUDE_PATH', _DEFAULT_PRELUDE_FILES)


def get_log_level() -> str:
    return os.environ.get('MEHL_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper() or _DEFAULT_LOG_LEVEL


def get_max_depth() -> int:
    raw = os.environ.get('MEHL_MAX_DEPTH')
    if not raw:
        return _DEFAULT_MAX_DEPTH
    try:
        depth = int(raw)
    except ValueError:
        raise ValueError(f"MEHL_MAX_DEPTH must be an integer, got {raw!r}") from None
    if depth < 1:
        raise ValueError(f"MEHL_MAX_DEPTH must be positive, got {depth}")
    return depth
