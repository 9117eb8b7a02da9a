"""ServiceResult and ServiceError: what every service operation returns.

INVARIANT: services report bad input, out-of-range positions, date order
and reference problems through ``error``; they never raise for them.
A declined removal is ``ok=True`` with ``data["status"] == "declined"``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    ``code`` is an :class:`~ppectl.domain.errors.ErrorCode` value;
    ``detail`` names the field, position, and any fields already
    committed before the failure.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: False only when ``error`` is set.
        op: Operation name, ``{verb}_{kind}`` (e.g. ``"register_loan"``).
        data: Row payload, listing, or removal status.
        warnings: Dangling references and ignored fields.
        error: Set when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))

    @property
    def status(self) -> str | None:
        """``"removed"``/``"declined"`` for removals, None otherwise."""
        status = self.data.get("status")
        return str(status) if status is not None else None
