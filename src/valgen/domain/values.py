"""Typed operand values and literal coercion.

Rule operands arrive as raw text from the annotation string. Coercion turns
them into Python values matching the field's type classification so the
generator can emit them as literals. Pure functions, no I/O.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from valgen.domain.errors import CoercionError, UnsupportedFieldType
from valgen.domain.types import TypeClass

# Accepted spellings for boolean literals.
_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


@dataclass(frozen=True)
class Value:
    """A rule operand: its classification, the raw literal, and the parsed value."""

    type_class: TypeClass
    raw: str
    value: Any

    def to_string(self) -> str:
        return stringify(self.value)


def resolve_type(type_class: TypeClass | str, *, field: str = "") -> TypeClass:
    """Return *type_class* as a :class:`TypeClass` or raise ``UnsupportedFieldType``."""
    if isinstance(type_class, TypeClass):
        return type_class
    try:
        return TypeClass(type_class)
    except ValueError:
        raise UnsupportedFieldType(field, str(type_class)) from None


def coerce(type_class: TypeClass | str, literal: str) -> Value:
    """Parse *literal* as a value of *type_class*.

    Numeric classes use base-10 parsing; unsigned values must not be
    negative and floats must be finite. Strings pass through unchanged.

    Raises:
        CoercionError: The literal does not parse as the requested class.
        UnsupportedFieldType: *type_class* is not one of the five classes.
    """
    tc = resolve_type(type_class)
    if tc is TypeClass.STRING:
        return Value(tc, literal, literal)

    text = literal.strip()
    if tc is TypeClass.BOOLEAN:
        if text in _TRUE_LITERALS:
            return Value(tc, literal, True)
        if text in _FALSE_LITERALS:
            return Value(tc, literal, False)
        raise CoercionError(tc.value, literal)

    try:
        parsed: int | float = float(text) if tc is TypeClass.FLOAT else int(text, 10)
    except ValueError:
        raise CoercionError(tc.value, literal) from None
    if tc is TypeClass.UNSIGNED and parsed < 0:
        raise CoercionError(tc.value, literal)
    if isinstance(parsed, float) and not math.isfinite(parsed):
        raise CoercionError(tc.value, literal)
    return Value(tc, literal, parsed)


def stringify(value: Any) -> str:
    """Render a value the way failure messages and comparisons see it.

    Booleans render as ``true``/``false`` and whole floats drop their
    ``.0`` suffix, so ``0.0`` renders as ``"0"``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
