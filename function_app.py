# ============================================================================
# SUBMISSION RELAY - Azure Function App
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Form submission relay
# PURPOSE: Relay website form submissions to Airtable
# CREATED: 19 OCT 2026
# ============================================================================
"""
Submission Relay Function App

Azure Functions V2 entry point providing:
- Form submission relay to the Airtable records API
- Liveness and readiness checks

Endpoints:
- /api/livez - Liveness check (always available)
- /api/readyz - Readiness check (checks configuration)
- /api/submit - Form submission (POST, OPTIONS)
"""

import azure.functions as func
import json
import logging

from core.logging import configure_logging
from relay.config import load_config

# ============================================================================
# CREATE APP
# ============================================================================

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

_config = load_config()
if _config.log_json:
    # The Functions host owns plain-text output; JSON replaces its handler
    configure_logging(level=_config.log_level)

logger = logging.getLogger(__name__)
logger.info("=" * 60)
logger.info(f"{_config.service_name} v{_config.version} starting")
logger.info("=" * 60)

# ============================================================================
# HEALTH CHECKS
# ============================================================================


@app.route(route="livez", methods=["GET"])
def liveness_check(req: func.HttpRequest) -> func.HttpResponse:
    """
    Liveness check - always returns 200 if function is running.

    GET /api/livez
    """
    return func.HttpResponse(
        json.dumps({"alive": True, "service": load_config().service_name}),
        status_code=200,
        headers={"Content-Type": "application/json"},
    )


@app.route(route="readyz", methods=["GET"])
def readiness_check(req: func.HttpRequest) -> func.HttpResponse:
    """
    Readiness check - returns 200 if the relay is configured.

    GET /api/readyz

    Re-reads configuration on every call. Returns 503 with the failed
    check names when the credential or base id is missing or malformed.
    """
    from relay.startup import validate_startup
    from relay.models.responses import HealthResponse

    config = load_config()
    state = validate_startup(config)

    response = HealthResponse(
        status="healthy" if state.all_passed else "unconfigured",
        service=config.service_name,
        version=config.version,
        checks={check.name: check.passed for check in state.checks()},
        failed_checks=state.failed_check_names(),
    )

    return func.HttpResponse(
        json.dumps(response.model_dump(), default=str),
        status_code=200 if state.all_passed else 503,
        headers={"Content-Type": "application/json"},
    )


# ============================================================================
# STARTUP VALIDATION
# ============================================================================
# Reported only. The submission route answers configuration problems per
# request, so it is registered either way.

logger.info("Running startup validation...")

from relay.startup import validate_startup

_startup_state = validate_startup(_config)

if _startup_state.all_passed:
    logger.info("Startup validation PASSED")
else:
    logger.error("=" * 60)
    logger.error("STARTUP VALIDATION FAILED")
    logger.error("=" * 60)
    logger.error("/api/submit will answer 500 (validate_env) until configured")
    for check in _startup_state.failed_checks():
        logger.error(f"  FAILED: {check.name} - {check.error_message}")
    logger.error("=" * 60)


# ============================================================================
# BLUEPRINT REGISTRATION
# ============================================================================

from relay.blueprints.submission_bp import submission_bp

app.register_functions(submission_bp)
logger.info("  Registered: submission_bp (form submission)")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["app"]
