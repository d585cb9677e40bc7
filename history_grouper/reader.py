"""Flat-file I/O: read the whole history file, write the grouped document atomically."""

import json
import logging
import os
import tempfile

from history_grouper.grouper import GroupedHistory

logger = logging.getLogger(__name__)


def read_lines(path: str) -> list[str]:
    """Read every line of *path* into memory.

    Bytes that are not valid UTF-8 are replaced with U+FFFD. Raises
    FileNotFoundError / OSError if the file can't be read.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        lines = [line.rstrip("\n") for line in f]
    logger.info("Read %d line(s) from %s", len(lines), path)
    return lines


def write_grouped(path: str, grouped: GroupedHistory, indent: int = 2) -> None:
    """Atomic write: dump to a temp file beside *path*, then replace."""
    out_dir = os.path.dirname(path) or "."
    os.makedirs(out_dir, exist_ok=True)

    fd, tmp = tempfile.mkstemp(dir=out_dir, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(grouped, f, indent=indent, ensure_ascii=False, allow_nan=False)
        os.replace(tmp, path)
    except Exception:
        os.unlink(tmp)
        raise
    logger.info("Wrote grouped history to %s", path)
