"""ExplainService — inspect how annotation strings parse and what they report.

``explain`` classifies each token of one annotation string the same way
``generate`` does and previews the message a failing rule renders.
``messages`` lists a locale's templates.
"""

from __future__ import annotations

from typing import Any

from valgen.codegen.generator import supported_rules
from valgen.domain.errors import ValgenError
from valgen.domain.parser import parse_schema
from valgen.domain.rules import FieldDescriptor, SchemaRule
from valgen.domain.types import RuleKind, TypeClass
from valgen.services.base import BaseService
from valgen.services.result import ServiceResult


class ExplainService(BaseService):
    """Rule and message inspection."""

    def explain(
        self,
        tag: str,
        *,
        type_class: TypeClass | str = TypeClass.SIGNED,
        field: str = "Field",
        locale: str | None = None,
    ) -> ServiceResult:
        """Parse *tag* as if it annotated *field* of *type_class*."""
        op = "explain"
        resolved = self.locale(locale)
        try:
            schema = parse_schema("Explain", [FieldDescriptor(field, tag, type_class)])
            items = [self._describe(rule, resolved) for rule in schema.rules]
        except ValgenError as exc:
            return self._failure(op, exc)

        warnings = [
            f"Rule {item['name']!r} has no {item['kind']} validator"
            for item in items
            if not item["supported"]
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"field": field, "type": str(type_class), "locale": resolved, "items": items},
            warnings=warnings,
        )

    def messages(self, *, locale: str | None = None) -> ServiceResult:
        """List the message templates of *locale*."""
        op = "messages"
        resolved = self.locale(locale)
        try:
            catalog = self.catalog
        except ValgenError as exc:
            return self._failure(op, exc)

        templates = catalog.templates(resolved)
        warnings = [] if templates else [f"Unknown locale {resolved!r}"]
        items = [{"rule": rule, "template": templates[rule]} for rule in sorted(templates)]
        return ServiceResult(
            ok=True,
            op=op,
            data={"locale": resolved, "locales": catalog.locales, "items": items},
            warnings=warnings,
        )

    def _describe(self, rule: SchemaRule, locale: str) -> dict[str, Any]:
        return {
            "token": rule.token,
            "name": rule.name,
            "kind": rule.kind.value,
            "function": rule.func_name,
            "field2": rule.field2 or None,
            "cond1": rule.cond1.value if rule.cond1 else None,
            "cond2": rule.cond2.value if rule.cond2 else None,
            "supported": rule.name in supported_rules()[rule.kind],
            "message": self._sample_message(rule, locale),
        }

    def _sample_message(self, rule: SchemaRule, locale: str) -> str:
        """Render the message the generated validator reports when *rule* fails.

        Field values are unknown here, so value placeholders that depend on
        the record render empty.
        """
        cond1 = rule.cond1.value if rule.cond1 else ""
        cond2 = rule.cond2.value if rule.cond2 else ""
        if rule.kind is RuleKind.RANGE:
            return self.catalog.render(locale, rule.name, rule.field1, cond1, "", cond2)
        if rule.kind is RuleKind.CONDITIONAL:
            return self.catalog.render(locale, rule.name, rule.field1, "", rule.field2, cond1)
        return self.catalog.render(locale, rule.name, rule.field1, cond1)
