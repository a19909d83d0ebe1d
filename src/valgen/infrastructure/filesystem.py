"""Generated-module output: syntax check, naming, and atomic writes.

INVARIANT: A failed run never leaves a partial file behind. The module is
assembled completely in memory and written through a temporary file that
is renamed into place.
"""

from __future__ import annotations

import ast
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = "_schema.py"


def default_output_path(directory: Path, type_name: str, *, suffix: str = DEFAULT_SUFFIX) -> Path:
    """Return ``{directory}/{type_name lowercased}{suffix}``."""
    return directory / f"{type_name.lower()}{suffix}"


def check_source(source: str, *, filename: str = "<generated>") -> str | None:
    """Return a description of the syntax error in *source*, or None if it parses."""
    try:
        ast.parse(source, filename=filename)
    except SyntaxError as exc:
        logger.warning("internal error: invalid Python generated: %s (line %s)", exc.msg, exc.lineno)
        return f"{exc.msg} (line {exc.lineno})"
    return None


def write_source(path: Path, source: str) -> None:
    """Atomically write *source* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(source)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Wrote %s (%d bytes)", path, len(source.encode("utf-8")))
