"""Reading and writing G-code text files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def is_gcode_file(path: str | os.PathLike) -> bool:
    """True if *path* names an existing regular file."""
    if path is None or str(path) == "":
        return False
    return Path(path).is_file()


def read_gcode_lines(path: str | os.PathLike, encoding: str = "utf-8-sig") -> list[str]:
    """Return the lines of a G-code file with their line endings kept.

    Blank lines therefore come back as ``"\\n"`` and parse as empty
    comments.  The default encoding drops a leading UTF-8 byte-order mark.

    Raises
    ------
    FileNotFoundError
        If *path* is not an existing file.
    """
    if not is_gcode_file(path):
        raise FileNotFoundError(f"G-code file not found: {path}")
    text = Path(path).read_text(encoding=encoding, errors="replace")
    lines = text.splitlines(keepends=True)
    logger.debug("Read %d lines from %s", len(lines), path)
    return lines


def write_gcode_lines(
    path: str | os.PathLike,
    lines: Iterable[str],
    encoding: str = "us-ascii",
) -> int:
    """Write *lines* to *path*, one per line, and return how many were written."""
    count = 0
    with open(path, "w", encoding=encoding, newline="\n") as fd:
        for line in lines:
            fd.write(line + "\n")
            count += 1
    logger.debug("Wrote %d lines to %s", count, path)
    return count
