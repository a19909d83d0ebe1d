"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
The CLI renderers and ``--json`` output consume this type.

``data`` payload per operation:

``generate``
    ``types`` (record types found, in request order), ``rules`` (total rule
    count), ``validators`` (emitted function names), ``locale``, and either
    ``output`` (path written) or ``source`` (module text for ``-o -``).
``explain``
    ``field``, ``type``, ``locale`` and ``items``: one dict per rule token
    with ``token``, ``name``, ``kind``, ``function``, ``field2``, ``cond1``,
    ``cond2``, ``supported`` and ``message``.
``messages``
    ``locale``, ``locales`` (all catalog locales) and ``items``: one
    ``{"rule", "template"}`` dict per message template.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from valgen.domain.errors import ValgenError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is one of the stable ``ValgenError`` codes
    (``INVALID_RULE_FORMAT``, ``UNSUPPORTED_FIELD_TYPE``, ``UNKNOWN_RULE``,
    ``SOURCE_ERROR``, ``INVALID_CATALOG``) or a service-level code such as
    ``NO_TYPES_FOUND``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ValgenError) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=exc.detail())


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"generate"``, ``"explain"`` or
            ``"messages"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, error: ServiceError | ValgenError) -> ServiceResult:
        """Build a failed result; compiler errors are converted by their code."""
        if not isinstance(error, ServiceError):
            error = ServiceError.from_exception(error)
        return cls(ok=False, op=op, error=error)
