from __future__ import annotations
import os
from pathlib import Path
from typing import Optional


DEFAULT_PROMPT = "lispy> "
DEFAULT_HISTORY_FILE = ".lispy_history"


def get_prompt() -> str:
    return os.environ.get('LISPY_PROMPT', DEFAULT_PROMPT)


def get_prelude_path() -> Optional[Path]:
    raw = os.environ.get('LISPY_PRELUDE_PATH')
    if not raw or not raw.strip():
        return None
    return Path(raw.strip())


def get_history_path() -> Optional[Path]:
    raw = os.environ.get('LISPY_HISTORY_FILE')
    if raw is None:
        return Path.home() / DEFAULT_HISTORY_FILE
    if not raw.strip():
        return None  # set but empty: history disabled
    return Path(raw.strip())
