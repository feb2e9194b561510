# ============================================================================
# PIPELINE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Foundation - Phase tags and error taxonomy
# PURPOSE: Define the phase names and error kinds shared by the relay
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Phase, ErrorKind
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the submission relay.

These values cross the HTTP boundary:
- `Phase` is echoed to callers as the `where` field of a failure
- `ErrorKind` is echoed as the `error` field and decides the HTTP status

Log lines are tagged with the same phase names, so a failed response can be
matched to the exact stage that produced it.
"""

from enum import Enum


# ============================================================================
# PHASES
# ============================================================================

class Phase(str, Enum):
    """
    Named stages of the submission pipeline.

    Order:
        METHOD_GATE -> PARSE_BODY -> VALIDATE_PAYLOAD -> VALIDATE_ENV
                    -> AIRTABLE_FETCH -> AIRTABLE_RESPONSE
    """
    METHOD_GATE = "method_gate"
    PARSE_BODY = "parse_body"
    VALIDATE_PAYLOAD = "validate_payload"
    VALIDATE_ENV = "validate_env"
    AIRTABLE_FETCH = "airtable_fetch"        # Transport (network, DNS, timeout)
    AIRTABLE_RESPONSE = "airtable_response"  # Upstream answered non-2xx
    HANDLER = "handler"                      # Unexpected fault at the boundary


# ============================================================================
# ERROR TAXONOMY
# ============================================================================

class ErrorKind(str, Enum):
    """
    Failure kinds surfaced to callers.

    The enum value is the wire code placed in the response `error` field.
    """
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INVALID_BODY = "invalid_body"
    MISSING_FIELD = "missing_field"
    INVALID_CONFIG_CREDENTIAL = "invalid_config_credential"
    INVALID_CONFIG_STORE = "invalid_config_store"
    UPSTREAM_ERROR = "airtable_error"
    TRANSPORT_ERROR = "transport_error"
    INTERNAL_ERROR = "internal_error"

    @property
    def http_status(self) -> int:
        """HTTP status code returned for this kind."""
        return _HTTP_STATUS[self]

    def is_client_error(self) -> bool:
        """Check if the caller can fix this by changing the request."""
        return self.http_status < 500


_HTTP_STATUS = {
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INVALID_BODY: 400,
    ErrorKind.MISSING_FIELD: 400,
    ErrorKind.INVALID_CONFIG_CREDENTIAL: 500,
    ErrorKind.INVALID_CONFIG_STORE: 500,
    ErrorKind.UPSTREAM_ERROR: 500,
    ErrorKind.TRANSPORT_ERROR: 500,
    ErrorKind.INTERNAL_ERROR: 500,
}


__all__ = ["Phase", "ErrorKind"]
