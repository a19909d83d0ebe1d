"""Tests for literal coercion and value stringification."""

from __future__ import annotations

import pytest

from valgen.domain.errors import CoercionError, UnsupportedFieldType
from valgen.domain.types import TypeClass
from valgen.domain.values import Value, coerce, resolve_type, stringify


class TestResolveType:
    def test_enum_passes_through(self) -> None:
        assert resolve_type(TypeClass.FLOAT) is TypeClass.FLOAT

    def test_string_value(self) -> None:
        assert resolve_type("unsigned") is TypeClass.UNSIGNED

    def test_unknown_raises(self) -> None:
        with pytest.raises(UnsupportedFieldType) as exc_info:
            resolve_type("complex", field="Z")
        assert exc_info.value.field == "Z"
        assert exc_info.value.type_name == "complex"
        assert exc_info.value.code == "UNSUPPORTED_FIELD_TYPE"


class TestCoerce:
    def test_signed(self) -> None:
        value = coerce(TypeClass.SIGNED, "-42")
        assert value == Value(TypeClass.SIGNED, "-42", -42)

    def test_unsigned(self) -> None:
        assert coerce(TypeClass.UNSIGNED, "1000").value == 1000

    def test_unsigned_rejects_negative(self) -> None:
        with pytest.raises(CoercionError):
            coerce(TypeClass.UNSIGNED, "-1")

    def test_float(self) -> None:
        assert coerce(TypeClass.FLOAT, "2.5").value == 2.5

    @pytest.mark.parametrize("literal", ["nan", "NaN", "inf", "-inf", "Infinity", "1e999"])
    def test_float_rejects_non_finite(self, literal: str) -> None:
        with pytest.raises(CoercionError) as exc_info:
            coerce(TypeClass.FLOAT, literal)
        assert exc_info.value.type_class == "float"

    def test_string_is_verbatim(self) -> None:
        assert coerce(TypeClass.STRING, " John ").value == " John "

    @pytest.mark.parametrize("literal", ["1", "t", "T", "true", "TRUE", "True"])
    def test_boolean_true(self, literal: str) -> None:
        assert coerce(TypeClass.BOOLEAN, literal).value is True

    @pytest.mark.parametrize("literal", ["0", "f", "F", "false", "FALSE", "False"])
    def test_boolean_false(self, literal: str) -> None:
        assert coerce(TypeClass.BOOLEAN, literal).value is False

    @pytest.mark.parametrize(
        ("type_class", "literal"),
        [
            (TypeClass.SIGNED, "abc"),
            (TypeClass.SIGNED, "1.5"),
            (TypeClass.SIGNED, "0x10"),
            (TypeClass.UNSIGNED, ""),
            (TypeClass.FLOAT, "one"),
            (TypeClass.BOOLEAN, "yes"),
        ],
    )
    def test_malformed_literal_is_an_error(self, type_class: TypeClass, literal: str) -> None:
        with pytest.raises(CoercionError) as exc_info:
            coerce(type_class, literal)
        assert exc_info.value.code == "INVALID_RULE_FORMAT"
        assert exc_info.value.literal == literal

    def test_value_to_string(self) -> None:
        assert coerce(TypeClass.BOOLEAN, "t").to_string() == "true"


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (-7, "-7"),
            (0.0, "0"),
            (1000.0, "1000"),
            (2.5, "2.5"),
            ("Jane", "Jane"),
        ],
    )
    def test_stringify(self, value: object, expected: str) -> None:
        assert stringify(value) == expected
