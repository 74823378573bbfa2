"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All public service-layer operations return ServiceResult.
The CLI renderers and any embedding host consume this type; exceptions
from collaborators are converted at the service boundary.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes shared by services and callers.
CORPUS_FAILURE = "CORPUS_FAILURE"
UNKNOWN_TEMPLATE = "UNKNOWN_TEMPLATE"
NO_TEMPLATES = "NO_TEMPLATES"
INVALID_TEMPLATE = "INVALID_TEMPLATE"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"scan"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, cache state, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for an ``ok=False`` result."""
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
