"""Localized failure-message templates.

A template is a sentence of whitespace-separated words. Words starting with
``:`` are placeholders::

    The :field field is required when :field2 is :value2.

``:field``/``:field1`` and ``:field2`` take field names, ``:value``/``:value1``
and ``:value2`` take stringified values. Unknown placeholders are dropped.
The rendered message always ends with exactly one ``.``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from valgen.domain.values import stringify

logger = logging.getLogger(__name__)

PLACEHOLDERS: dict[str, str] = {
    ":field": "field1",
    ":field1": "field1",
    ":value": "value1",
    ":value1": "value1",
    ":field2": "field2",
    ":value2": "value2",
}


def format_message(
    template: str,
    field1: str = "",
    value1: Any = "",
    field2: str = "",
    value2: Any = "",
) -> str:
    """Substitute placeholders in *template* and normalize the trailing period."""
    args = {
        "field1": field1,
        "value1": stringify(value1),
        "field2": field2,
        "value2": stringify(value2),
    }
    words: list[str] = []
    for word in template.split():
        if not word.startswith(":"):
            words.append(word)
            continue
        key = PLACEHOLDERS.get(word.removesuffix("."))
        if key and args[key]:
            words.append(args[key])
    message = " ".join(words).strip()
    return message.rstrip(".") + "."


class MessageCatalog:
    """Locale-keyed message templates.

    Usage::

        catalog = MessageCatalog({"en": {"required": "The :field field is required."}})
        catalog.render("en", "required", "Name")  # "The Name field is required."
    """

    def __init__(self, locales: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._locales: dict[str, dict[str, str]] = {
            locale: dict(templates) for locale, templates in (locales or {}).items()
        }

    @property
    def locales(self) -> list[str]:
        return sorted(self._locales)

    def templates(self, locale: str) -> dict[str, str]:
        """Return a copy of the templates for *locale*, empty if unknown."""
        templates = self._locales.get(locale)
        if templates is None:
            logger.warning("Unknown locale %r; messages degrade to empty templates", locale)
            return {}
        return dict(templates)

    def template(self, locale: str, rule: str) -> str:
        return self._locales.get(locale, {}).get(rule, "")

    def render(
        self,
        locale: str,
        rule: str,
        field1: str = "",
        value1: Any = "",
        field2: str = "",
        value2: Any = "",
    ) -> str:
        """Render the failure message for *rule* in *locale*.

        A missing locale or rule key renders as a lone ``"."``.
        """
        template = self.template(locale, rule)
        if not template:
            logger.debug("No %s template for rule %r", locale, rule)
        return format_message(template, field1, value1, field2, value2)

    def merged(self, other: Mapping[str, Mapping[str, str]]) -> MessageCatalog:
        """Return a new catalog with *other*'s templates layered over this one."""
        locales = {locale: dict(templates) for locale, templates in self._locales.items()}
        for locale, templates in other.items():
            locales.setdefault(locale, {}).update(templates)
        return MessageCatalog(locales)
