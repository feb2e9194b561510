# ============================================================================
# API REQUEST MODELS
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Request schemas
# PURPOSE: Pydantic V2 model for the inbound form submission
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Request Models

Pydantic V2 models for incoming API requests.
All models use V2 patterns: ConfigDict, model_validate, model_dump.

Validation here is presence-only: the model never rejects a payload.
Callers check `missing_fields()` so that a blank field is reported as
`missing_field` rather than as a schema error.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

REQUIRED_FIELDS = ("name", "email", "company")


class SubmissionRequest(BaseModel):
    """Form submission forwarded to the record store."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "company": "Analytical Engines Ltd",
            }
        },
    )

    name: str = Field(default="", description="Submitter name (trimmed)")
    email: str = Field(default="", description="Submitter email (trimmed, not syntax-checked)")
    company: str = Field(default="", description="Submitter company (trimmed)")

    @field_validator("name", "email", "company", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        """Absent/null -> "", scalars -> str, objects and arrays -> ""."""
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return ""

    def missing_fields(self) -> List[str]:
        """Names of required fields that are empty after trimming."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def to_airtable_fields(self) -> Dict[str, str]:
        """Map onto the record store's column names."""
        return {
            "Name": self.name,
            "Email": self.email,
            "Company": self.company,
        }


__all__ = ["SubmissionRequest", "REQUIRED_FIELDS"]
