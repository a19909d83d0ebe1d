"""Rule DSL parser — annotation strings to :class:`SchemaRule` lists.

Grammar: an annotation is rule tokens joined by ``;``. Each token is one of::

    name                    presence (or a shorthand value constraint)
    name=operand            value constraint
    name=min,max            range
    name:field2             conditional on another field's presence
    name:field2=literal     conditional on another field's value

Classification is purely structural and never looks at runtime values.
Any malformed token aborts the whole parse; no partial schema is returned.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence

from valgen.domain.errors import CoercionError, InvalidRuleFormat
from valgen.domain.rules import (
    LENGTH_RULES,
    PATTERN_RULES,
    PRESET_VALUE_CONSTRAINTS,
    STRING_OPERAND_RULES,
    FieldDescriptor,
    RecordDescriptor,
    Schema,
    SchemaRule,
)
from valgen.domain.types import RuleKind, TypeClass
from valgen.domain.values import Value, coerce, resolve_type

logger = logging.getLogger(__name__)

RULE_SEPARATOR = ";"

_KNOWN_TYPES = frozenset(TypeClass)


def parse_schemas(records: Iterable[RecordDescriptor]) -> list[Schema]:
    """Parse every record type, in order. The first error aborts the run."""
    return [parse_schema(record.name, record.fields) for record in records]


def parse_schema(type_name: str, fields: Sequence[FieldDescriptor]) -> Schema:
    """Parse the annotation strings of one record type's fields.

    Fields whose tag is empty or ``-`` produce no rules but remain visible
    as dependent fields for conditional rules.

    Raises:
        InvalidRuleFormat: A token is malformed or its operand does not coerce.
        UnsupportedFieldType: A tagged field has an unsupported type.
    """
    by_name = {f.name: f for f in fields}
    rules: list[SchemaRule] = []
    for f in fields:
        if f.skipped:
            continue
        for token in f.tag.split(RULE_SEPARATOR):
            rules.append(parse_rule(f, token, fields=by_name))

    validators = tuple(dict.fromkeys(rule.name for rule in rules))
    logger.debug("Parsed schema %s: %d rules, validators=%s", type_name, len(rules), validators)
    return Schema(type_name=type_name, rules=tuple(rules), validators=validators)


def parse_rule(
    f: FieldDescriptor,
    raw: str,
    *,
    fields: Mapping[str, FieldDescriptor] | None = None,
) -> SchemaRule:
    """Classify one rule token of field *f*.

    *fields* maps the record's field names to descriptors; conditional
    literals are coerced against the dependent field's type when it is known.
    """
    field_type = resolve_type(f.type_class, field=f.name)
    token = raw.strip()
    if not token:
        raise InvalidRuleFormat(f.name, raw, "empty rule token")

    separator = _find_separator(token)
    if separator is None:
        return _parse_presence(f, field_type, token)

    name, _, rhs = token.partition(separator)
    name = name.strip()
    if not name:
        raise InvalidRuleFormat(f.name, raw, "missing rule name")
    if not rhs:
        raise InvalidRuleFormat(f.name, raw, f"missing operand after {separator!r}")

    try:
        if "," in rhs:
            return _parse_range(f, field_type, name, rhs, token)
        if separator == ":":
            return _parse_conditional(f, field_type, name, rhs, token, fields or {})
        return _parse_value_constraint(f, field_type, name, rhs, token)
    except CoercionError as exc:
        raise InvalidRuleFormat(f.name, raw, str(exc)) from exc


def _find_separator(token: str) -> str | None:
    # ``:`` wins when it comes before any ``=`` (required_if:Name=John).
    colon, equals = token.find(":"), token.find("=")
    if colon != -1 and (equals == -1 or colon < equals):
        return ":"
    if equals != -1:
        return "="
    return None


def _operand_type(name: str, field_type: TypeClass) -> TypeClass:
    """Classification the operand of rule *name* is coerced against."""
    if name in STRING_OPERAND_RULES:
        return TypeClass.STRING
    if name == "size":
        return TypeClass.SIGNED
    if name in LENGTH_RULES and field_type is TypeClass.STRING:
        return TypeClass.SIGNED
    return field_type


def _parse_presence(f: FieldDescriptor, field_type: TypeClass, name: str) -> SchemaRule:
    kind = RuleKind.VALUE_CONSTRAINT if name in PRESET_VALUE_CONSTRAINTS else RuleKind.PRESENCE
    return SchemaRule(name=name, kind=kind, field1=f.name, field_type=field_type, token=name)


def _parse_range(
    f: FieldDescriptor, field_type: TypeClass, name: str, rhs: str, token: str
) -> SchemaRule:
    low, _, high = rhs.partition(",")
    if not low.strip() or not high.strip():
        raise InvalidRuleFormat(f.name, token, "range needs both a min and a max")
    if "," in high:
        raise InvalidRuleFormat(f.name, token, "range takes exactly two bounds")
    operand_type = _operand_type(name, field_type)
    return SchemaRule(
        name=name,
        kind=RuleKind.RANGE,
        field1=f.name,
        field_type=field_type,
        cond1=coerce(operand_type, low),
        cond2=coerce(operand_type, high),
        token=token,
    )


def _parse_conditional(
    f: FieldDescriptor,
    field_type: TypeClass,
    name: str,
    rhs: str,
    token: str,
    fields: Mapping[str, FieldDescriptor],
) -> SchemaRule:
    field2, has_literal, literal = rhs.partition("=")
    field2 = field2.strip()
    if not field2:
        raise InvalidRuleFormat(f.name, token, "conditional rule needs a dependent field")
    if not field2.isidentifier():
        raise InvalidRuleFormat(f.name, token, f"{field2!r} is not a field name")
    if field2 not in fields:
        logger.debug("Rule %r on %s depends on undeclared field %s", name, f.name, field2)

    cond: Value | None = None
    if has_literal:
        dependent = fields.get(field2)
        literal_type = TypeClass.STRING
        if dependent is not None and dependent.type_class in _KNOWN_TYPES:
            literal_type = TypeClass(dependent.type_class)
        cond = coerce(literal_type, literal)
    return SchemaRule(
        name=name,
        kind=RuleKind.CONDITIONAL,
        field1=f.name,
        field_type=field_type,
        field2=field2,
        cond1=cond,
        token=token,
    )


def _parse_value_constraint(
    f: FieldDescriptor, field_type: TypeClass, name: str, rhs: str, token: str
) -> SchemaRule:
    if name in PRESET_VALUE_CONSTRAINTS:
        return SchemaRule(
            name=name,
            kind=RuleKind.VALUE_CONSTRAINT,
            field1=f.name,
            field_type=field_type,
            token=token,
        )
    if name in PATTERN_RULES:
        try:
            re.compile(rhs)
        except re.error as exc:
            raise InvalidRuleFormat(f.name, token, f"invalid pattern: {exc}") from exc
    return SchemaRule(
        name=name,
        kind=RuleKind.VALUE_CONSTRAINT,
        field1=f.name,
        field_type=field_type,
        cond1=coerce(_operand_type(name, field_type), rhs),
        token=token,
    )
