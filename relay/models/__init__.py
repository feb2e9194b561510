# ============================================================================
# RELAY MODELS
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Pydantic models for API
# PURPOSE: Request and response models for the relay endpoints
# CREATED: 19 OCT 2026
# ============================================================================
"""
Relay Models

Pydantic V2 models for API requests and responses.
"""

from relay.models.requests import SubmissionRequest, REQUIRED_FIELDS
from relay.models.responses import (
    SubmissionFailure,
    SubmissionResult,
    HealthResponse,
)

__all__ = [
    # Requests
    "SubmissionRequest",
    "REQUIRED_FIELDS",
    # Responses
    "SubmissionFailure",
    "SubmissionResult",
    "HealthResponse",
]
