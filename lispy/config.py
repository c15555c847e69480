from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (lispy package directory)
_LISPY_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_FILE = _LISPY_DIR / 'prelude' / 'prelude.lspy'
_DEFAULT_HISTORY_FILE = Path.home() / '.lispy_history'
_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_LOG_LEVEL = 'WARNING'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_files() -> List[Path]:
    return paths_from_env('LISPY_PRELUDE_PATH', [_DEFAULT_PRELUDE_FILE])


def get_history_file() -> Path:
    return paths_from_env('LISPY_HISTORY_FILE', [_DEFAULT_HISTORY_FILE])[0]


def get_recursion_limit() -> int:
    raw = os.environ.get('LISPY_RECURSION_LIMIT', '').strip()
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return max(int(raw), 1000)
    except ValueError:
        return _DEFAULT_RECURSION_LIMIT


def get_log_level() -> str:
    return os.environ.get('LISPY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
