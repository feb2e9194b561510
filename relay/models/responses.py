# ============================================================================
# API RESPONSE MODELS
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Response schemas
# PURPOSE: Pydantic V2 models for relay results, failures and health checks
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Response Models

Pydantic V2 models for API responses.
All models use V2 patterns: ConfigDict, model_validate, model_dump.

`SubmissionFailure` is the value pipeline steps return instead of raising.
It becomes a `SubmissionResult` exactly once, at the gateway boundary.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.contracts import ErrorKind, Phase


class SubmissionFailure(BaseModel):
    """Explicit failure returned by a pipeline step."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind = Field(..., description="Error taxonomy entry")
    where: Phase = Field(..., description="Phase that produced the failure")
    message: str = Field(..., description="Human-readable summary")
    detail: Optional[str] = Field(default=None, description="Diagnostic detail")
    hints: Optional[List[str]] = Field(default=None, description="Operator remediation hints")
    upstream_status: Optional[int] = Field(
        default=None,
        description="Status code returned by the record store, if it answered",
    )

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def to_result(self, trace_id: str) -> "SubmissionResult":
        """Convert to the caller-facing result."""
        return SubmissionResult(
            ok=False,
            error=self.kind.value,
            where=self.where.value,
            message=self.message,
            detail=self.detail,
            hints=list(self.hints) if self.hints else None,
            status=self.upstream_status,
            trace_id=trace_id,
        )


class SubmissionResult(BaseModel):
    """Uniform relay response body."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ok": True,
                "record": {
                    "id": "rec8116cdd76088af",
                    "createdTime": "2026-10-19T10:30:00.000Z",
                    "fields": {"Name": "Ada", "Email": "a@x.com", "Company": "Acme"},
                },
                "traceId": "3f9a0c6e2b7d4e51a8c1f0d2e4b6a8c9",
            }
        },
    )

    ok: bool = Field(..., description="Whether the record was stored")
    record: Optional[Any] = Field(default=None, description="First record created upstream")
    error: Optional[str] = Field(default=None, description="Error code (failures only)")
    where: Optional[str] = Field(default=None, description="Failing phase (failures only)")
    message: Optional[str] = Field(default=None, description="Human-readable summary")
    detail: Optional[str] = Field(default=None, description="Diagnostic detail")
    hints: Optional[List[str]] = Field(default=None, description="Remediation hints")
    status: Optional[int] = Field(default=None, description="Upstream HTTP status")
    trace_id: str = Field(..., alias="traceId", min_length=1, description="Request trace id")

    @model_validator(mode="after")
    def _check_outcome(self) -> "SubmissionResult":
        if self.ok and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if not self.ok and self.error is None:
            raise ValueError("failed result must carry an error")
        if not self.ok and self.record is not None:
            raise ValueError("failed result cannot carry a record")
        return self

    def to_body(self) -> Dict[str, Any]:
        """Serialize to the wire shape."""
        if self.ok:
            # record is always present on success, possibly null
            return {"ok": True, "record": self.record, "traceId": self.trace_id}
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"record"})


class HealthResponse(BaseModel):
    """Health/readiness check response."""

    model_config = ConfigDict()

    status: str = Field(default="healthy", description="Overall health status")
    service: str = Field(default="submission-relay", description="Service name")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Check timestamp",
    )
    version: str = Field(..., description="Service version")
    checks: Dict[str, bool] = Field(
        default_factory=dict,
        description="Individual check results",
    )
    failed_checks: List[str] = Field(default_factory=list, description="Names of failed checks")


__all__ = [
    "SubmissionFailure",
    "SubmissionResult",
    "HealthResponse",
]
