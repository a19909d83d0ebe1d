"""Shared pytest fixtures and test helpers for valgen tests."""

from __future__ import annotations

import importlib.util
import itertools
import logging
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from types import ModuleType

import pytest
import structlog
from click.testing import CliRunner

from valgen.config.settings import ValgenSettings

USER_SOURCE = '''\
from dataclasses import dataclass, field

int64 = int


@dataclass
class User:
    ID: int64 = field(
        default=0,
        metadata={"rules": "required;min=1;max=1000;regexp=^[0-9]*$;between=1,1000;different:ID2;size=2"},
    )
    ID2: int = field(default=0, metadata={"rules": "required_if:Name=John"})
    ID3: int = field(default=0, metadata={"rules": "required_with:ID"})
    ID4: int = field(default=0, metadata={"rules": "required_without:ID"})
    ID5: str = field(default="", metadata={"rules": "required_with:ID6"})
    ID6: str = field(default="", metadata={"rules": "-"})
    Name: str = field(default="", metadata={"rules": "required"})
    Email: str = field(default="", metadata={"rules": "email"})
'''

TYPES_SOURCE = '''\
from dataclasses import dataclass, field

int8 = int16 = int32 = int64 = int
uint8 = uint16 = uint32 = uint64 = int
float32 = float64 = float


@dataclass
class Types:
    Int: int = field(default=0, metadata={"rules": "required"})
    Int8: int8 = field(default=0, metadata={"rules": "required"})
    Int16: int16 = field(default=0, metadata={"rules": "required"})
    Int32: int32 = field(default=0, metadata={"rules": "required"})
    Int64: int64 = field(default=0, metadata={"rules": "required"})
    Uint8: uint8 = field(default=0, metadata={"rules": "required"})
    Uint16: uint16 = field(default=0, metadata={"rules": "required"})
    Uint32: uint32 = field(default=0, metadata={"rules": "required"})
    Uint64: uint64 = field(default=0, metadata={"rules": "required"})
    Float32: float32 = field(default=0.0, metadata={"rules": "required"})
    Float64: float64 = field(default=0.0, metadata={"rules": "required"})
    String: str = field(default="", metadata={"rules": "required"})
'''

_module_ids = itertools.count()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore logger state that the CLI root group reconfigures."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    valgen_logger = logging.getLogger("valgen")
    valgen_level = valgen_logger.level
    yield
    root.handlers = original_handlers
    structlog.contextvars.clear_contextvars()
    root.setLevel(original_level)
    valgen_logger.setLevel(valgen_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory used as CWD, isolated from config env vars."""
    for var in ("VALGEN_CONFIG", "VALGEN_QUIET", "VALGEN_VERBOSE", "VALGEN_JSON_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> ValgenSettings:
    """Default settings rooted at the temporary project."""
    return ValgenSettings.from_cli(project_root=project_root)


@pytest.fixture
def user_source(project_root: Path) -> Path:
    """``models.py`` holding the annotated ``User`` record."""
    path = project_root / "models.py"
    path.write_text(USER_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def types_source(project_root: Path) -> Path:
    """``types_models.py`` holding one required field per numeric spelling."""
    path = project_root / "types_models.py"
    path.write_text(TYPES_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def load_module() -> Generator[Callable[[Path], ModuleType]]:
    """Import a Python file under a unique module name; unregistered on teardown."""
    names: list[str] = []

    def _load(path: Path) -> ModuleType:
        name = f"_valgen_test_{path.stem}_{next(_module_ids)}"
        spec = importlib.util.spec_from_file_location(name, path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        names.append(name)
        spec.loader.exec_module(module)
        return module

    yield _load
    for name in names:
        sys.modules.pop(name, None)


@pytest.fixture
def load_source(tmp_path: Path, load_module: Callable[[Path], ModuleType]) -> Callable[[str], ModuleType]:
    """Write generated source to a file and import it."""

    def _load(source: str) -> ModuleType:
        path = tmp_path / f"generated_{next(_module_ids)}.py"
        path.write_text(source, encoding="utf-8")
        return load_module(path)

    return _load
