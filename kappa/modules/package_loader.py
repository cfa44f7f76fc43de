from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from kappa.config import get_prelude_file

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def read_source(path: Path | str) -> str:
    return Path(path).read_text(encoding='utf-8')


def load_prelude(itp: _HasEvalPrelude) -> None:
    """Evaluate the standard library (library.lisp) into the interpreter.

    Raises FileNotFoundError if the configured prelude does not exist.
    """
    path = get_prelude_file()
    if not path.is_file():
        raise FileNotFoundError(f"Cannot find prelude '{path}' (KAPPA_PRELUDE_PATH)")
    logger.debug("loading prelude from %s", path)
    itp.eval_prelude(read_source(path))
