# ============================================================================
# SUBMISSION BLUEPRINT
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Form submission endpoint
# PURPOSE: HTTP endpoint relaying form submissions to the record store
# CREATED: 19 OCT 2026
# ============================================================================
"""
Submission Blueprint

Form submission endpoint:
- OPTIONS /api/submit - CORS pre-flight (200, empty body)
- POST /api/submit - Relay {name, email, company} to Airtable
- any other method - 405

Every response carries the CORS headers and X-Trace-Id.
"""

import logging

import azure.functions as func

from relay.config import load_config
from relay.services.submission_service import GatewayResponse, SubmissionGateway

logger = logging.getLogger(__name__)
submission_bp = func.Blueprint()


def _to_http_response(response: GatewayResponse) -> func.HttpResponse:
    """Convert a GatewayResponse to a Functions HttpResponse."""
    return func.HttpResponse(
        response.body_text(),
        status_code=response.status_code,
        headers=response.headers,
    )


def handle_submission(req: func.HttpRequest) -> func.HttpResponse:
    """
    Relay one form submission.

    Configuration is read fresh per invocation. Expected failures come back
    from the gateway as structured responses; anything unexpected is caught
    here so the Functions host never sees an unhandled fault.
    """
    gateway = SubmissionGateway(load_config())
    try:
        response = gateway.handle(req.method, req.get_body())
    except Exception as e:
        logger.exception(f"[{gateway.trace_id}] Unexpected error handling submission: {e}")
        response = gateway.fail_unexpected(e)
    return _to_http_response(response)


# No methods filter: every verb reaches the gateway, which answers 405 itself
@submission_bp.route(route="submit")
def submit(req: func.HttpRequest) -> func.HttpResponse:
    """
    Submit a form.

    POST /api/submit
    Body: {"name": "...", "email": "...", "company": "..."}
    Returns: {"ok": true, "record": {...}, "traceId": "..."} (200)
    """
    return handle_submission(req)


__all__ = ["submission_bp", "handle_submission"]
