from __future__ import annotations
import logging
import os
from pathlib import Path


# Resolve installation dir (mallet package directory)
_MALLET_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _MALLET_DIR / 'prelude'
_DEFAULT_LOG_LEVEL = 'WARNING'

PRELUDE_FILE = 'core.mal'


def get_prelude_root() -> Path:
    raw = os.environ.get('MALLET_PRELUDE_PATH', '').strip()
    p = Path(raw) if raw else _DEFAULT_PRELUDE_DIR
    # a file path means "the directory holding it"
    return p if p.is_dir() else p.parent


def get_prelude_file() -> Path:
    return get_prelude_root() / PRELUDE_FILE


def get_log_level() -> int:
    name = os.environ.get('MALLET_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
