# ============================================================================
# RELAY DIAGNOSTICS
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Trace ids, masking, remediation hints
# PURPOSE: Non-secret diagnostic helpers shared by logs and responses
# CREATED: 19 OCT 2026
# ============================================================================
"""
Relay Diagnostics

Helpers that keep diagnostics useful without leaking secrets:
- new_trace_id(): per-request correlation id
- mask_secret(): show only the first and last 4 characters of a credential
- preview(): truncate request/response text before logging
- *_HINTS: operator remediation hints attached to failures
"""

import uuid
from typing import Any, List, Optional

MASK_VISIBLE_CHARS = 4
MASK_SEPARATOR = "..."
PREVIEW_LIMIT = 200


def new_trace_id() -> str:
    """Generate a collision-resistant trace id (32 hex chars)."""
    return uuid.uuid4().hex


def mask_secret(secret: Optional[str], visible: int = MASK_VISIBLE_CHARS) -> str:
    """
    Mask a secret for logging.

    "pat_1234567890" -> "pat_...7890". Secrets too short to keep both ends
    hidden are fully masked.
    """
    if not secret:
        return "<unset>"
    if len(secret) <= visible * 2:
        return "*" * len(secret)
    return f"{secret[:visible]}{MASK_SEPARATOR}{secret[-visible:]}"


def preview(value: Any, limit: int = PREVIEW_LIMIT) -> str:
    """Truncated string form of a value for log lines."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        text = value.decode("utf-8", errors="replace")
    else:
        text = str(value)
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"


# ============================================================================
# REMEDIATION HINTS
# ============================================================================

CREDENTIAL_HINTS: List[str] = [
    "Set AIRTABLE_API_KEY in the Function App settings.",
    "Use a personal access token; these start with 'pat'.",
    "Grant the token the data.records:write scope on the target base.",
]

STORE_HINTS: List[str] = [
    "Set AIRTABLE_BASE_ID in the Function App settings.",
    "Base ids start with 'app' and appear in the Airtable API URL for the base.",
]

UPSTREAM_HINTS: List[str] = [
    "Verify the table name (AIRTABLE_TABLE) exists in the base.",
    "Verify the table has fields named exactly Name, Email and Company.",
    "Verify the token has access to the base.",
    "Verify AIRTABLE_BASE_ID points at the intended base.",
]

TRANSPORT_HINTS: List[str] = [
    "Check outbound network egress from the Function App to api.airtable.com.",
    "Retry the request; transient network failures are not retried automatically.",
]


__all__ = [
    "new_trace_id",
    "mask_secret",
    "preview",
    "CREDENTIAL_HINTS",
    "STORE_HINTS",
    "UPSTREAM_HINTS",
    "TRANSPORT_HINTS",
]
