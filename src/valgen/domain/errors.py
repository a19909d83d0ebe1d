"""Compiler error taxonomy.

Every error carries a stable ``code`` so the service layer can surface it
as a structured ``ServiceError`` without string matching.
"""

from __future__ import annotations

from typing import Any


class ValgenError(Exception):
    """Base class for all compiler errors."""

    code = "VALGEN_ERROR"

    def detail(self) -> dict[str, Any]:
        return {}


class InvalidRuleFormat(ValgenError):
    """A rule token could not be classified or its operand is malformed."""

    code = "INVALID_RULE_FORMAT"

    def __init__(self, field: str, token: str, reason: str) -> None:
        self.field = field
        self.token = token
        self.reason = reason
        super().__init__(f"invalid rule format: {token!r} on field {field!r}: {reason}")

    def detail(self) -> dict[str, Any]:
        return {"field": self.field, "token": self.token, "reason": self.reason}


class CoercionError(ValgenError):
    """A literal operand does not parse as the requested type classification."""

    code = "INVALID_RULE_FORMAT"

    def __init__(self, type_class: str, literal: str) -> None:
        self.type_class = type_class
        self.literal = literal
        super().__init__(f"cannot coerce {literal!r} to {type_class}")

    def detail(self) -> dict[str, Any]:
        return {"type": self.type_class, "literal": self.literal}


class UnsupportedFieldType(ValgenError):
    """A field's type falls outside the five supported classifications."""

    code = "UNSUPPORTED_FIELD_TYPE"

    def __init__(self, field: str, type_name: str) -> None:
        self.field = field
        self.type_name = type_name
        super().__init__(f"unsupported type {type_name!r} for field {field!r}")

    def detail(self) -> dict[str, Any]:
        return {"field": self.field, "type": self.type_name}


class UnknownRuleError(ValgenError):
    """The generator has no validator for a parsed rule."""

    code = "UNKNOWN_RULE"

    def __init__(self, rule: str, kind: str, field: str) -> None:
        self.rule = rule
        self.kind = kind
        self.field = field
        super().__init__(f"unknown {kind} rule {rule!r} on field {field!r}")

    def detail(self) -> dict[str, Any]:
        return {"rule": self.rule, "kind": self.kind, "field": self.field}


class SourceError(ValgenError):
    """A host source file could not be read or parsed."""

    code = "SOURCE_ERROR"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")

    def detail(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}


class CatalogError(ValgenError):
    """A locale catalog file is unreadable or has the wrong shape."""

    code = "INVALID_CATALOG"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"invalid message catalog {path}: {reason}")

    def detail(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}
