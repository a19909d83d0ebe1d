"""Record discovery by static analysis of Python source.

Finds classes by name and reports their annotated fields as
:class:`FieldDescriptor` objects. Rule annotations are read from dataclass
field metadata::

    @dataclass
    class User:
        ID: int = field(default=0, metadata={"rules": "required;min=1"})
        Name: str = field(default="", metadata={"rules": "required"})
        Nickname: str = ""

Nothing is imported or executed; only the syntax tree is inspected.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from valgen.domain.errors import SourceError
from valgen.domain.rules import FieldDescriptor, RecordDescriptor
from valgen.domain.types import TypeClass

logger = logging.getLogger(__name__)

DEFAULT_TAG_KEY = "rules"
GENERATED_MARKER = '# Code generated by "valgen"; DO NOT EDIT.'

# Annotation names mapped to type classifications. Dotted names such as
# ``np.uint8`` are matched on their last attribute.
TYPE_NAMES: dict[str, TypeClass] = {
    "int": TypeClass.SIGNED,
    "int8": TypeClass.SIGNED,
    "int16": TypeClass.SIGNED,
    "int32": TypeClass.SIGNED,
    "int64": TypeClass.SIGNED,
    "uint": TypeClass.UNSIGNED,
    "uint8": TypeClass.UNSIGNED,
    "uint16": TypeClass.UNSIGNED,
    "uint32": TypeClass.UNSIGNED,
    "uint64": TypeClass.UNSIGNED,
    "float": TypeClass.FLOAT,
    "float32": TypeClass.FLOAT,
    "float64": TypeClass.FLOAT,
    "str": TypeClass.STRING,
    "bool": TypeClass.BOOLEAN,
}


def collect_source_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories to their ``*.py`` files (non-recursive, sorted).

    Previously generated modules are skipped, and a file reached through
    more than one path is listed once.
    """
    files: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        candidates = sorted(path.glob("*.py")) if path.is_dir() else [path]
        for candidate in candidates:
            if candidate.is_dir():
                continue
            if _is_generated(candidate):
                logger.debug("Skipping generated module %s", candidate)
                continue
            resolved = candidate.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            files.append(candidate)
    return files


def discover_records(
    paths: Sequence[Path],
    type_names: Sequence[str],
    *,
    tag_key: str = DEFAULT_TAG_KEY,
) -> list[RecordDescriptor]:
    """Find each requested type in *paths*, in the order the types were requested.

    Types that are not found are skipped; the caller decides whether an
    empty result is an error.

    Raises:
        SourceError: A file does not parse, or a requested type is defined
            more than once across *paths*.
    """
    trees = [(path, _parse(path)) for path in collect_source_files(paths)]
    records: list[RecordDescriptor] = []
    for type_name in dict.fromkeys(type_names):
        found: tuple[Path, ast.ClassDef] | None = None
        for path, tree in trees:
            for node in ast.walk(tree):
                if not isinstance(node, ast.ClassDef) or node.name != type_name:
                    continue
                if found is not None:
                    first_path, first_node = found
                    raise SourceError(
                        f"{path}:{node.lineno}",
                        f"type {type_name} is already defined at {first_path}:{first_node.lineno}",
                    )
                found = (path, node)
        if found is None:
            continue
        path, node = found
        record = record_from_class(node, tag_key=tag_key)
        logger.debug("Found %s in %s with %d fields", type_name, path, len(record.fields))
        records.append(record)
    return records


def record_from_class(node: ast.ClassDef, *, tag_key: str = DEFAULT_TAG_KEY) -> RecordDescriptor:
    """Build a record descriptor from a class definition node.

    Every annotated attribute becomes a field; unannotated assignments and
    ``ClassVar`` attributes are ignored. Annotations outside :data:`TYPE_NAMES`
    keep their source spelling as the type, so the parser can reject them
    if the field carries rules.
    """
    fields: list[FieldDescriptor] = []
    for stmt in node.body:
        if not isinstance(stmt, ast.AnnAssign) or not isinstance(stmt.target, ast.Name):
            continue
        type_name = annotation_name(stmt.annotation)
        if type_name == "ClassVar":
            continue
        fields.append(
            FieldDescriptor(
                name=stmt.target.id,
                tag=field_tag(stmt.value, tag_key=tag_key),
                type_class=TYPE_NAMES.get(type_name, type_name),
            )
        )
    return RecordDescriptor(name=node.name, fields=tuple(fields))


def annotation_name(annotation: ast.expr) -> str:
    """Return the bare type name of an annotation node."""
    if isinstance(annotation, ast.Name):
        return annotation.id
    if isinstance(annotation, ast.Attribute):
        return annotation.attr
    if isinstance(annotation, ast.Constant) and isinstance(annotation.value, str):
        return annotation.value.rsplit(".", 1)[-1].strip()
    if isinstance(annotation, ast.Subscript):
        return annotation_name(annotation.value)
    return ast.unparse(annotation)


def field_tag(value: ast.expr | None, *, tag_key: str = DEFAULT_TAG_KEY) -> str:
    """Extract the rule annotation from a ``field(metadata={...})`` default."""
    if not isinstance(value, ast.Call):
        return ""
    func = value.func
    func_name = func.id if isinstance(func, ast.Name) else getattr(func, "attr", "")
    if func_name != "field":
        return ""
    for keyword in value.keywords:
        if keyword.arg != "metadata" or not isinstance(keyword.value, ast.Dict):
            continue
        for key, item in zip(keyword.value.keys, keyword.value.values, strict=True):
            if (
                isinstance(key, ast.Constant)
                and key.value == tag_key
                and isinstance(item, ast.Constant)
                and isinstance(item.value, str)
            ):
                return item.value
    return ""


def _parse(path: Path) -> ast.Module:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(str(path), str(exc)) from exc
    except SyntaxError as exc:
        raise SourceError(str(path), f"syntax error on line {exc.lineno}: {exc.msg}") from exc


def _is_generated(path: Path) -> bool:
    try:
        with path.open(encoding="utf-8") as fh:
            return fh.readline().rstrip("\n") == GENERATED_MARKER
    except (OSError, UnicodeDecodeError):
        return False
