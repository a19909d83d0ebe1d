"""Code generator — parsed schemas to validator functions and schema classes.

Walks every :class:`SchemaRule` of every schema, emitting each validator
exactly once per ``func_name`` (the emission set), then builds one schema
class per record type whose constructor wires every rule to its validator
and whose ``validate()`` collects failure messages in declaration order.

Dispatch is keyed on :class:`RuleKind`, one handler per kind. Each handler
resolves the rule name to a template under ``templates/codegen/validators``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from jinja2 import Environment

from valgen.codegen.renderer import render_module
from valgen.domain.errors import UnknownRuleError
from valgen.domain.rules import Schema, SchemaRule
from valgen.domain.types import RuleKind, TypeClass
from valgen.domain.values import Value
from valgen.infrastructure.templates import build_template_environment

logger = logging.getLogger(__name__)

# Emptiness test used by ``required`` for each type classification.
PRESENCE_CHECKS: dict[TypeClass, str] = {
    TypeClass.SIGNED: "value == 0",
    TypeClass.UNSIGNED: "value == 0",
    TypeClass.FLOAT: "value == 0",
    TypeClass.STRING: 'value == ""',
    TypeClass.BOOLEAN: "value is False",
}

# Rule name -> (template, comparison operator) per kind.
PRESENCE_TEMPLATES: dict[str, str] = {"required": "required.py.j2"}

VALUE_CONSTRAINT_TEMPLATES: dict[str, tuple[str, str]] = {
    "min": ("compare.py.j2", "<"),
    "max": ("compare.py.j2", ">"),
    "size": ("size.py.j2", ""),
    "regexp": ("regexp.py.j2", ""),
    "email": ("email.py.j2", ""),
}

RANGE_TEMPLATES: dict[str, str] = {"between": "between.py.j2"}

CONDITIONAL_TEMPLATES: dict[str, str] = {
    "same": "same.py.j2",
    "different": "different.py.j2",
    "required_if": "required_if.py.j2",
    "required_with": "required_with.py.j2",
    "required_without": "required_without.py.j2",
}

RULE_CLASSES: dict[RuleKind, str] = {
    RuleKind.PRESENCE: "_ValRulePresence",
    RuleKind.VALUE_CONSTRAINT: "_ValRuleValueConstraint",
    RuleKind.RANGE: "_ValRuleRange",
    RuleKind.CONDITIONAL: "_ValRuleConditional",
}


def supported_rules() -> dict[RuleKind, list[str]]:
    """Rule names the generator can emit, per kind."""
    return {
        RuleKind.PRESENCE: sorted(PRESENCE_TEMPLATES),
        RuleKind.VALUE_CONSTRAINT: sorted(VALUE_CONSTRAINT_TEMPLATES),
        RuleKind.RANGE: sorted(RANGE_TEMPLATES),
        RuleKind.CONDITIONAL: sorted(CONDITIONAL_TEMPLATES),
    }


@dataclass(frozen=True)
class _Emission:
    template: str
    context: dict[str, Any]


class Generator:
    """Emit deduplicated validators and schema classes for *schemas*.

    Usage::

        gen = Generator(schemas, catalog.templates("en"), locale="en")
        source = gen.generate()

    Attributes:
        emitted: Function names in emission order. Reset by each ``generate()``.
    """

    def __init__(
        self,
        schemas: Iterable[Schema],
        messages: Mapping[str, str],
        *,
        locale: str = "en",
        source: str = "",
        env: Environment | None = None,
    ) -> None:
        self.schemas = list(schemas)
        self.messages = dict(messages)
        self.locale = locale
        self.source = source
        self._env = env or build_template_environment("codegen")
        self._emitted: dict[str, SchemaRule] = {}
        self._handlers: dict[RuleKind, Callable[[SchemaRule], _Emission]] = {
            RuleKind.PRESENCE: self._presence,
            RuleKind.VALUE_CONSTRAINT: self._value_constraint,
            RuleKind.RANGE: self._range,
            RuleKind.CONDITIONAL: self._conditional,
        }

    @property
    def emitted(self) -> list[str]:
        return list(self._emitted)

    @property
    def rule_names(self) -> list[str]:
        """Distinct rule names referenced by any schema, in first-seen order."""
        names: dict[str, None] = {}
        for schema in self.schemas:
            names.update(dict.fromkeys(schema.validators))
        return list(names)

    def generate(self) -> str:
        """Render the complete module source.

        Raises:
            UnknownRuleError: A rule has no validator for its kind.
        """
        self._emitted = {}
        validators = self.generate_validators()
        schemas = [self.generate_schema(schema) for schema in self.schemas]
        rule_names = self.rule_names
        messages = {rule: self.messages[rule] for rule in rule_names if rule in self.messages}
        missing = [rule for rule in rule_names if rule not in self.messages]
        if missing:
            logger.warning("No %s message template for rules: %s", self.locale, ", ".join(missing))
        return render_module(
            self._env,
            source=self.source,
            locale=self.locale,
            type_names=[schema.type_name for schema in self.schemas],
            rule_names=rule_names,
            messages=messages,
            validators=validators,
            schemas=schemas,
        )

    def generate_validators(self) -> list[str]:
        """Emit each distinct validator once, in first-use order."""
        sources: list[str] = []
        for schema in self.schemas:
            for rule in schema.rules:
                first = self._emitted.get(rule.func_name)
                if first is not None:
                    if first.field_type is not rule.field_type:
                        logger.debug(
                            "Reusing %s (first seen on %s %s) for %s %s",
                            rule.func_name,
                            first.field_type,
                            first.field1,
                            rule.field_type,
                            rule.field1,
                        )
                    continue
                sources.append(self.generate_rule(rule))
                self._emitted[rule.func_name] = rule
        return sources

    def generate_rule(self, rule: SchemaRule) -> str:
        """Render the validator function for *rule*."""
        emission = self._handlers[rule.kind](rule)
        template = self._env.get_template(f"validators/{emission.template}")
        context = {"fn": rule.func_name, "rule": rule.name, **emission.context}
        return template.render(**context).rstrip("\n")

    def generate_schema(self, schema: Schema) -> str:
        """Render the schema class: constructor plus ``validate()`` dispatcher."""
        template = self._env.get_template("schema.py.j2")
        return template.render(
            class_name=schema.class_name,
            type_name=schema.type_name,
            rules=[rule_literal(rule) for rule in schema.rules],
        ).rstrip("\n")

    # --- Handlers, one per rule kind ---

    def _presence(self, rule: SchemaRule) -> _Emission:
        template = self._lookup(PRESENCE_TEMPLATES, rule)
        typ = rule.resolved_type
        return _Emission(template, {"annotation": typ.annotation, "blank": PRESENCE_CHECKS[typ]})

    def _value_constraint(self, rule: SchemaRule) -> _Emission:
        template, op = self._lookup(VALUE_CONSTRAINT_TEMPLATES, rule)
        typ = rule.resolved_type
        return _Emission(
            template,
            {
                "annotation": typ.annotation,
                "cond_annotation": _cond_annotation(typ),
                "measure": _measure(typ),
                "op": op,
            },
        )

    def _range(self, rule: SchemaRule) -> _Emission:
        template = self._lookup(RANGE_TEMPLATES, rule)
        typ = rule.resolved_type
        return _Emission(
            template,
            {
                "annotation": typ.annotation,
                "cond_annotation": _cond_annotation(typ),
                "measure": _measure(typ),
            },
        )

    def _conditional(self, rule: SchemaRule) -> _Emission:
        return _Emission(self._lookup(CONDITIONAL_TEMPLATES, rule), {})

    def _lookup(self, table: Mapping[str, Any], rule: SchemaRule) -> Any:
        try:
            return table[rule.name]
        except KeyError:
            raise UnknownRuleError(rule.name, rule.kind.value, rule.field1) from None


def rule_literal(rule: SchemaRule) -> str:
    """Python expression constructing the rule object for *rule*.

    Values are read from the ``record`` argument of the schema constructor.
    A dependent field the record does not have reads as None.
    """
    cls = RULE_CLASSES[rule.kind]
    value = _record_value(rule)
    if rule.kind is RuleKind.PRESENCE:
        args = [f"field={rule.field1!r}", f"value={value}"]
    elif rule.kind is RuleKind.VALUE_CONSTRAINT:
        args = [f"field={rule.field1!r}", f"value={value}", f"cond={_literal(rule.cond1)}"]
    elif rule.kind is RuleKind.RANGE:
        args = [
            f"field={rule.field1!r}",
            f"value={value}",
            f"min={_literal(rule.cond1)}",
            f"max={_literal(rule.cond2)}",
        ]
    else:
        args = [
            f"field1={rule.field1!r}",
            f"value1=record.{rule.field1}",
            f"field2={rule.field2!r}",
            f"value2=getattr(record, {rule.field2!r}, None)",
            f"cond={_literal(rule.cond1)}",
        ]
    args.append(f"validator={rule.func_name}")
    return f"{cls}({', '.join(args)})"


def _record_value(rule: SchemaRule) -> str:
    if rule.resolved_type is TypeClass.STRING and rule.field_type is not TypeClass.STRING:
        return f"_val_str(record.{rule.field1})"
    return f"record.{rule.field1}"


def _literal(value: Value | None) -> str:
    if value is None:
        return "None"
    return repr(value.value)


def _measure(typ: TypeClass) -> str:
    return "len(value)" if typ is TypeClass.STRING else "value"


def _cond_annotation(typ: TypeClass) -> str:
    return "int" if typ is TypeClass.STRING else typ.annotation
