"""
Normalized result contract.

Every public client call returns a NormalizedResult. Upstream status
vocabularies (status 0 / status 2 / ok / success / HTTP status line) never
leak to callers; the raw upstream fields are only passed through in
`payload` and, for failures, summarized in `message`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .interfaces import FailureLayer

SUCCESS_STATUS = 1
FAILURE_STATUS = 0


class NormalizedResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    canonical_status: int = Field(ge=FAILURE_STATUS, le=SUCCESS_STATUS)
    message: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)
    layer: Optional[FailureLayer] = None

    @model_validator(mode="after")
    def _status_agrees_with_success(self) -> "NormalizedResult":
        if (self.canonical_status == SUCCESS_STATUS) != self.success:
            raise ValueError(
                f"canonical_status={self.canonical_status} disagrees with success={self.success}"
            )
        if self.success and self.layer is not None:
            raise ValueError("A successful result cannot carry a failure layer.")
        if not self.success and self.layer is None:
            raise ValueError("A failed result must name the layer that failed.")
        return self

    @classmethod
    def succeeded(cls, payload: Optional[Dict[str, Any]] = None, message: Optional[str] = None) -> "NormalizedResult":
        return cls(success=True, canonical_status=SUCCESS_STATUS, message=message, payload=payload or {})

    @classmethod
    def failed(
        cls,
        message: str,
        *,
        layer: FailureLayer,
        payload: Optional[Dict[str, Any]] = None,
    ) -> "NormalizedResult":
        return cls(success=False, canonical_status=FAILURE_STATUS, message=message, payload=payload or {}, layer=layer)

    def to_dict(self) -> Dict[str, Any]:
        """Caller-facing shape: {success, status, message, payload}."""
        return {
            "success": self.success,
            "status": self.canonical_status,
            "message": self.message,
            "payload": dict(self.payload),
        }
