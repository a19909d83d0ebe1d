"""Config file discovery.

Walk-up finder locates the project config, similar to how git finds .git/.
Each directory is checked for ``valgen.toml`` first, then for a
``pyproject.toml`` carrying a ``[tool.valgen]`` table. The VALGEN_CONFIG
env var and the --config CLI flag name a file directly.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "valgen.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "VALGEN_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for the project config.

    Returns the path to the config file, or None if not found.
    Checks VALGEN_CONFIG env var first. A ``pyproject.toml`` without a
    ``[tool.valgen]`` table does not stop the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_config_table(path: Path) -> dict[str, Any]:
    """Return the valgen settings table of *path*.

    ``pyproject.toml`` contributes its ``[tool.valgen]`` table; any other
    file is a valgen config as a whole.

    Raises:
        tomllib.TOMLDecodeError: The file is not valid TOML.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        return dict(data.get("tool", {}).get("valgen", {}))
    return data


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        # Unparseable pyproject files are skipped, not reported.
        return False
    return "valgen" in data.get("tool", {})
