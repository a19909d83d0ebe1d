"""Tests for type classifications and rule kinds."""

from __future__ import annotations

import pytest

from valgen.domain.types import RuleKind, TypeClass


class TestTypeClass:
    def test_values(self) -> None:
        assert [t.value for t in TypeClass] == ["signed", "unsigned", "float", "string", "boolean"]

    @pytest.mark.parametrize(
        ("type_class", "py_name", "annotation"),
        [
            (TypeClass.SIGNED, "int", "int"),
            (TypeClass.UNSIGNED, "uint", "int"),
            (TypeClass.FLOAT, "float", "float"),
            (TypeClass.STRING, "str", "str"),
            (TypeClass.BOOLEAN, "bool", "bool"),
        ],
    )
    def test_spellings(self, type_class: TypeClass, py_name: str, annotation: str) -> None:
        assert type_class.py_name == py_name
        assert type_class.annotation == annotation

    def test_is_numeric(self) -> None:
        assert {t for t in TypeClass if t.is_numeric} == {
            TypeClass.SIGNED,
            TypeClass.UNSIGNED,
            TypeClass.FLOAT,
        }

    def test_str_enum_compares_to_plain_string(self) -> None:
        assert TypeClass.STRING == "string"
        assert TypeClass("boolean") is TypeClass.BOOLEAN


class TestRuleKind:
    def test_four_kinds(self) -> None:
        assert [k.value for k in RuleKind] == [
            "presence",
            "value_constraint",
            "range",
            "conditional",
        ]
