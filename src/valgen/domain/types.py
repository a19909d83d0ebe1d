"""Type classifications and rule kinds.

A field's type classification decides how rule operands are coerced and
which specialization of a validator is emitted. Rule kinds are the four
structural families of the rule DSL.
"""

from __future__ import annotations

from enum import StrEnum


class TypeClass(StrEnum):
    """The five field type classifications understood by the compiler."""

    SIGNED = "signed"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"

    @property
    def py_name(self) -> str:
        """Short Python spelling used in generated validator names."""
        return _PY_NAMES[self]

    @property
    def annotation(self) -> str:
        """Python annotation used for values of this class in generated code."""
        return _ANNOTATIONS[self]

    @property
    def is_numeric(self) -> bool:
        return self in (TypeClass.SIGNED, TypeClass.UNSIGNED, TypeClass.FLOAT)


_PY_NAMES: dict[TypeClass, str] = {
    TypeClass.SIGNED: "int",
    TypeClass.UNSIGNED: "uint",
    TypeClass.FLOAT: "float",
    TypeClass.STRING: "str",
    TypeClass.BOOLEAN: "bool",
}

_ANNOTATIONS: dict[TypeClass, str] = {
    TypeClass.SIGNED: "int",
    TypeClass.UNSIGNED: "int",
    TypeClass.FLOAT: "float",
    TypeClass.STRING: "str",
    TypeClass.BOOLEAN: "bool",
}


class RuleKind(StrEnum):
    """Structural rule families.

    presence          required                 A rule without additional values
    value_constraint  max=1000                 A rule with a single operand
    range             between=1,1000           A rule with a (min, max) pair
    conditional       required_if:Name=John    A rule that depends on another field
    """

    PRESENCE = "presence"
    VALUE_CONSTRAINT = "value_constraint"
    RANGE = "range"
    CONDITIONAL = "conditional"
