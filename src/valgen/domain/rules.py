"""Rule data model — field descriptors, parsed rules, and schemas.

All objects are frozen: built once by the parser and consumed by the
generator within a single run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from valgen.domain.types import RuleKind, TypeClass
from valgen.domain.values import Value

# Rules whose operand is always a string, whatever the field type.
STRING_OPERAND_RULES = frozenset({"regexp"})

# Rules whose operand is a regular expression, compiled at parse time.
PATTERN_RULES = frozenset({"regexp"})

# Shorthand value constraints written without an operand.
PRESET_VALUE_CONSTRAINTS = frozenset({"email"})

# Rules that compare string fields by length rather than content.
LENGTH_RULES = frozenset({"min", "max", "between", "size"})

# Tags that mark a field as explicitly excluded.
SKIP_TAGS = frozenset({"", "-"})


@dataclass(frozen=True)
class FieldDescriptor:
    """A record field as reported by host introspection."""

    name: str
    tag: str
    type_class: TypeClass | str

    @property
    def skipped(self) -> bool:
        return self.tag.strip() in SKIP_TAGS


@dataclass(frozen=True)
class RecordDescriptor:
    """A record type with all of its declared fields, in declaration order."""

    name: str
    fields: tuple[FieldDescriptor, ...] = ()

    def get_field(self, name: str) -> FieldDescriptor | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass(frozen=True)
class SchemaRule:
    """One parsed rule token bound to a field."""

    name: str
    kind: RuleKind
    field1: str
    field_type: TypeClass
    field2: str = ""
    cond1: Value | None = None
    cond2: Value | None = None
    token: str = field(default="", compare=False)

    @property
    def resolved_type(self) -> TypeClass:
        """Type the validator is specialized for.

        Pattern and email checks always operate on the stringified value.
        """
        if self.name in STRING_OPERAND_RULES or self.name in PRESET_VALUE_CONSTRAINTS:
            return TypeClass.STRING
        return self.field_type

    @property
    def func_name(self) -> str:
        """Deterministic dedup key and generated function name.

        Conditional validators are type-erased, so they are keyed by name only.
        """
        if self.kind is RuleKind.CONDITIONAL:
            return f"_val_{self.name}"
        return f"_val_{self.name}_{self.resolved_type.py_name}"


@dataclass(frozen=True)
class Schema:
    """Parsed rules for one record type.

    Attributes:
        type_name: Record type the schema validates.
        rules: Rules in field and token declaration order.
        validators: Distinct rule names referenced, in first-seen order.
    """

    type_name: str
    rules: tuple[SchemaRule, ...] = ()
    validators: tuple[str, ...] = ()

    @property
    def class_name(self) -> str:
        return f"{self.type_name}Schema"
