"""Return types shared by every bundlestore service method.

Service methods report outcomes as values: a missing domain, an unknown
association id, or a constraint the database rejected all come back as
``ServiceResult(ok=False, error=ServiceError(...))``. Callers branch on
``ok`` and ``error.code``; they never catch persistence exceptions.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    ``code`` is a stable identifier such as ``"DOMAIN_NOT_FOUND"`` or
    ``"REFERENTIAL_INTEGRITY"``; ``detail`` carries the ids involved.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one association-store operation.

    Attributes:
        ok: True when the operation took effect (or the read found data).
        op: Service method name, e.g. ``"bundles_for_domain"``.
        data: JSON-safe payload — ids, removal counts, serialized records.
        warnings: Non-fatal notes for the caller.
        error: Populated exactly when ``ok`` is False.
        meta: Extra figures such as ``{"count": 3}`` for list reads.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
