"""Environment utilities for resolving docker secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"
DEFAULT_SECRET_PREFIXES = ("DB_", "EVENTS_")


def load_secret_file_variables(
    prefixes: Optional[Iterable[str]] = DEFAULT_SECRET_PREFIXES,
) -> None:
    """
    Expose ``KEY_FILE`` secrets as ``KEY`` environment variables.

    Only keys starting with one of ``prefixes`` are considered (all keys when
    ``prefixes`` is None). An explicit ``KEY`` always wins over its file.
    Unreadable files are logged and skipped.
    """

    allowed = tuple(prefixes) if prefixes is not None else None

    for key, file_path in list(os.environ.items()):
        if not key.endswith(SECRET_FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if allowed is not None and not target_key.startswith(allowed):
            continue
        if os.environ.get(target_key):
            continue
        try:
            os.environ[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.unreadable",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
