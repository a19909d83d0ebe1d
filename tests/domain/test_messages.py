"""Tests for message template rendering."""

from __future__ import annotations

import logging

import pytest

from valgen.domain.messages import MessageCatalog, format_message

EN = {
    "required": "The :field field is required.",
    "required_if": "The :field field is required when :field2 is :value2.",
    "between": "The :field field must be between :value1 and :value2.",
    "same": "The :field field must match the :field2 field.",
    "min": "The :field field must be at least :value.",
}


@pytest.fixture
def catalog() -> MessageCatalog:
    return MessageCatalog({"en": EN, "es": {"required": "El campo :field es obligatorio."}})


class TestFormatMessage:
    def test_substitutes_field(self) -> None:
        assert format_message(EN["required"], "Name") == "The Name field is required."

    def test_placeholder_with_trailing_period(self) -> None:
        assert format_message(EN["required_if"], "ID", "", "Name", "John") == (
            "The ID field is required when Name is John."
        )

    def test_empty_substitution_is_dropped(self) -> None:
        assert format_message(EN["between"], "", 1, "", 1000) == (
            "The field must be between 1 and 1000."
        )

    def test_unknown_placeholder_is_dropped(self) -> None:
        assert format_message("The :field field :bogus is bad.", "X") == "The X field is bad."

    def test_exactly_one_trailing_period(self) -> None:
        assert format_message("Too many...", "X") == "Too many."
        assert format_message("No period", "X") == "No period."

    def test_empty_template(self) -> None:
        assert format_message("") == "."

    def test_values_are_stringified(self) -> None:
        assert format_message("Got :value", "X", 0.0) == "Got 0."
        assert format_message("Got :value1", "X", True) == "Got true."

    def test_whitespace_is_normalized(self) -> None:
        assert format_message("  The   :field   field  ", "A") == "The A field."


class TestMessageCatalog:
    def test_render(self, catalog: MessageCatalog) -> None:
        assert catalog.render("en", "min", "ID", 1) == "The ID field must be at least 1."

    def test_render_other_locale(self, catalog: MessageCatalog) -> None:
        assert catalog.render("es", "required", "Nombre") == "El campo Nombre es obligatorio."

    def test_same_property(self, catalog: MessageCatalog) -> None:
        assert catalog.render("en", "same", "ID", "5", "ID3", "6") == (
            "The ID field must match the ID3 field."
        )

    def test_missing_rule_degrades_to_period(self, catalog: MessageCatalog) -> None:
        assert catalog.render("en", "nope", "ID") == "."

    def test_missing_locale_degrades_to_period(self, catalog: MessageCatalog) -> None:
        assert catalog.render("fr", "required", "ID") == "."

    def test_locales_sorted(self, catalog: MessageCatalog) -> None:
        assert catalog.locales == ["en", "es"]

    def test_templates_is_a_copy(self, catalog: MessageCatalog) -> None:
        templates = catalog.templates("en")
        templates["required"] = "changed"
        assert catalog.template("en", "required") == EN["required"]

    def test_unknown_locale_warns(
        self, catalog: MessageCatalog, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="valgen"):
            assert catalog.templates("fr") == {}
        assert "fr" in caplog.text

    def test_merged_layers_templates(self, catalog: MessageCatalog) -> None:
        merged = catalog.merged(
            {"en": {"required": "Please fill in :field."}, "fr": {"required": ":field requis."}}
        )
        assert merged.render("en", "required", "Name") == "Please fill in Name."
        assert merged.render("en", "min", "ID", 3) == "The ID field must be at least 3."
        assert merged.render("fr", "required", "Nom") == "Nom requis."
        # original untouched
        assert catalog.render("en", "required", "Name") == "The Name field is required."
