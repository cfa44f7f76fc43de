from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (kappa package directory)
_KAPPA_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _KAPPA_DIR / 'prelude'
_DEFAULT_LOG_LEVEL = 'WARNING'

PRELUDE_FILE = 'library.lisp'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_root() -> Path:
    roots = paths_from_env('KAPPA_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; if a file path is set, return its parent
    p = roots[0]
    return p if p.is_dir() else p.parent


def get_prelude_file() -> Path:
    roots = paths_from_env('KAPPA_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    p = roots[0]
    if p.suffix == '.lisp' and not p.is_dir():
        return p
    return get_prelude_root() / PRELUDE_FILE


def get_log_level() -> str:
    return os.environ.get('KAPPA_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
