"""Environment helpers: Docker secret files and required-key lookups."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)


def load_secret_file_variables() -> None:
    """
    Expose Docker secrets referenced through ``KEY_FILE`` variables as ``KEY``.

    Values already present in the environment win. Unreadable files are
    logged and skipped.
    """

    for key, file_path in list(os.environ.items()):
        if not key.endswith("_FILE") or not file_path:
            continue
        target_key = key[: -len("_FILE")]
        if os.environ.get(target_key):
            continue
        try:
            os.environ[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )


def missing_keys(
    required: Iterable[str],
    overrides: Optional[Mapping[str, object]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Return the required keys that have no value in overrides or environ."""

    source_env = os.environ if environ is None else environ
    source_overrides = overrides or {}
    missing: List[str] = []
    for key in required:
        if source_overrides.get(key) not in (None, ""):
            continue
        if source_env.get(key):
            continue
        missing.append(key)
    return missing


load_secret_file_variables()
