# ============================================================================
# RELAY SERVICES
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Service layer for the submission pipeline
# PURPOSE: Outbound record-store client and the submission gateway
# CREATED: 19 OCT 2026
# ============================================================================

from relay.services.airtable_client import AirtableClient, AirtableResult
from relay.services.submission_service import GatewayResponse, SubmissionGateway

__all__ = [
    "AirtableClient",
    "AirtableResult",
    "GatewayResponse",
    "SubmissionGateway",
]
