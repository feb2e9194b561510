# ============================================================================
# SUBMISSION GATEWAY
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Request pipeline
# PURPOSE: Validate a form submission and relay it to the record store
# CREATED: 19 OCT 2026
# ============================================================================
"""
Submission Gateway

Linear, transport-neutral pipeline:

    method_gate -> parse_body -> validate_payload -> validate_env
                -> airtable_fetch -> airtable_response

Each step returns either its value or a `SubmissionFailure`; the first
failure ends the pipeline and is converted to a response in one place
(`_fail`). The gateway never raises for an expected failure and never
retries the upstream call.

The blueprint adapts `GatewayResponse` to `func.HttpResponse`, which keeps
this module testable without the Functions runtime.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from core.contracts import ErrorKind, Phase
from core.logging import get_logger, log_context, log_phase
from relay.config import RelayConfig
from relay.diagnostics import (
    CREDENTIAL_HINTS,
    STORE_HINTS,
    TRANSPORT_HINTS,
    UPSTREAM_HINTS,
    mask_secret,
    new_trace_id,
    preview,
)
from relay.models.requests import SubmissionRequest
from relay.models.responses import SubmissionFailure, SubmissionResult
from relay.services.airtable_client import AirtableClient

logger = get_logger(__name__, component="submission")

ALLOWED_METHOD = "POST"
PREFLIGHT_METHOD = "OPTIONS"


@dataclass
class GatewayResponse:
    """Transport-neutral HTTP response."""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def body_text(self) -> str:
        if self.body is None:
            return ""
        return json.dumps(self.body, default=str)


def response_headers(config: RelayConfig, trace_id: str, json_body: bool = True) -> Dict[str, str]:
    """CORS + trace headers carried by every response."""
    headers = {
        "Access-Control-Allow-Origin": config.cors_allow_origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "X-Trace-Id": trace_id,
    }
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers


class SubmissionGateway:
    """One instance per invocation; holds no state beyond the request."""

    def __init__(
        self,
        config: RelayConfig,
        client: Optional[AirtableClient] = None,
        trace_id: Optional[str] = None,
    ):
        self.config = config
        self.trace_id = trace_id or new_trace_id()
        self._client = client

    # ------------------------------------------------------------------
    # ENTRY POINT
    # ------------------------------------------------------------------

    def handle(self, method: str, body: Union[bytes, str, None]) -> GatewayResponse:
        """Run the full pipeline for one request."""
        with log_context(trace_id=self.trace_id, component="submission"):
            method = (method or "").upper()

            if method == PREFLIGHT_METHOD:
                log_phase(Phase.METHOD_GATE.value, {"method": method, "preflight": True})
                return GatewayResponse(
                    status_code=200,
                    headers=response_headers(self.config, self.trace_id, json_body=False),
                )

            outcome = self._run(method, body)
            if isinstance(outcome, SubmissionFailure):
                return self._fail(outcome)
            return self._succeed(outcome)

    def fail_unexpected(self, exc: Exception) -> GatewayResponse:
        """Shape an unexpected exception caught at the HTTP boundary."""
        with log_context(trace_id=self.trace_id, component="submission"):
            return self._fail(SubmissionFailure(
                kind=ErrorKind.INTERNAL_ERROR,
                where=Phase.HANDLER,
                message="Unexpected error while handling the submission",
                detail=str(exc) or type(exc).__name__,
            ))

    # ------------------------------------------------------------------
    # PIPELINE
    # ------------------------------------------------------------------

    def _run(self, method: str, body: Union[bytes, str, None]) -> Union[Any, SubmissionFailure]:
        failure = self._check_method(method)
        if failure is not None:
            return failure

        payload = self._parse_body(body)
        if isinstance(payload, SubmissionFailure):
            return payload

        request = self._validate_payload(payload)
        if isinstance(request, SubmissionFailure):
            return request

        failure = self._validate_env()
        if failure is not None:
            return failure

        return self._submit(request)

    def _check_method(self, method: str) -> Optional[SubmissionFailure]:
        log_phase(Phase.METHOD_GATE.value, {"method": method})
        if method == ALLOWED_METHOD:
            return None
        return SubmissionFailure(
            kind=ErrorKind.METHOD_NOT_ALLOWED,
            where=Phase.METHOD_GATE,
            message="Use POST",
            detail=f"Method {method or '<none>'} is not allowed",
        )

    def _parse_body(self, body: Union[bytes, str, None]) -> Union[Dict[str, Any], SubmissionFailure]:
        if isinstance(body, bytes):
            try:
                text = body.decode("utf-8")
            except UnicodeDecodeError as e:
                return self._invalid_body(f"Body is not UTF-8: {e}")
        else:
            text = body or ""

        log_phase(Phase.PARSE_BODY.value, {"chars": len(text), "preview": preview(text)})

        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the parser stack
            return self._invalid_body(str(e) or type(e).__name__)

        if not isinstance(payload, dict):
            return self._invalid_body(f"Expected a JSON object, got {type(payload).__name__}")
        return payload

    @staticmethod
    def _invalid_body(detail: str) -> SubmissionFailure:
        return SubmissionFailure(
            kind=ErrorKind.INVALID_BODY,
            where=Phase.PARSE_BODY,
            message="Request body must be a JSON object",
            detail=detail,
        )

    def _validate_payload(self, payload: Dict[str, Any]) -> Union[SubmissionRequest, SubmissionFailure]:
        request = SubmissionRequest.model_validate(payload)
        missing = request.missing_fields()

        log_phase(Phase.VALIDATE_PAYLOAD.value, {
            "name": preview(request.name, 60),
            "email": preview(request.email, 60),
            "company": preview(request.company, 60),
            "missing": missing,
        })

        if missing:
            return SubmissionFailure(
                kind=ErrorKind.MISSING_FIELD,
                where=Phase.VALIDATE_PAYLOAD,
                message="Missing name, email, or company",
                detail=f"Empty after trimming: {', '.join(missing)}",
            )
        return request

    def _validate_env(self) -> Optional[SubmissionFailure]:
        config = self.config
        log_phase(Phase.VALIDATE_ENV.value, {
            "api_key": mask_secret(config.airtable_api_key),
            "base_id": config.airtable_base_id or "<unset>",
            "table": config.airtable_table,
        })

        if not config.has_credential:
            return SubmissionFailure(
                kind=ErrorKind.INVALID_CONFIG_CREDENTIAL,
                where=Phase.VALIDATE_ENV,
                message="Record store credential is not configured",
                detail="AIRTABLE_API_KEY is not set",
                hints=CREDENTIAL_HINTS,
            )
        if not config.has_valid_credential:
            return SubmissionFailure(
                kind=ErrorKind.INVALID_CONFIG_CREDENTIAL,
                where=Phase.VALIDATE_ENV,
                message="Record store credential is malformed",
                detail=f"AIRTABLE_API_KEY ({mask_secret(config.airtable_api_key)}) "
                       f"does not look like a personal access token",
                hints=CREDENTIAL_HINTS,
            )
        if not config.has_store_config:
            return SubmissionFailure(
                kind=ErrorKind.INVALID_CONFIG_STORE,
                where=Phase.VALIDATE_ENV,
                message="Record store base id is not configured",
                detail="AIRTABLE_BASE_ID is not set",
                hints=STORE_HINTS,
            )
        return None

    def _submit(self, request: SubmissionRequest) -> Union[Any, SubmissionFailure]:
        config = self.config
        client = self._client or AirtableClient(
            api_key=config.airtable_api_key,
            base_url=config.airtable_api_url,
            timeout=config.airtable_timeout_seconds,
        )

        log_phase(Phase.AIRTABLE_FETCH.value, {
            "url": client.table_url(config.airtable_base_id, config.airtable_table),
            "fields": sorted(request.to_airtable_fields()),
        })
        result = client.create_record(
            config.airtable_base_id,
            config.airtable_table,
            request.to_airtable_fields(),
        )

        if not result.reached_upstream:
            return SubmissionFailure(
                kind=ErrorKind.TRANSPORT_ERROR,
                where=Phase.AIRTABLE_FETCH,
                message="Could not reach the record store",
                detail=result.error,
                hints=TRANSPORT_HINTS,
            )

        log_phase(Phase.AIRTABLE_RESPONSE.value, {
            "status": result.status_code,
            "body": preview(result.response_text),
        })

        if not result.success:
            return SubmissionFailure(
                kind=ErrorKind.UPSTREAM_ERROR,
                where=Phase.AIRTABLE_RESPONSE,
                message=f"Record store rejected the submission ({result.status_code})",
                detail=result.response_text,
                hints=UPSTREAM_HINTS,
                upstream_status=result.status_code,
            )

        record = result.first_record()
        if record is None:
            logger.warning("Record store response had no parsable record; returning null record")
        return record

    # ------------------------------------------------------------------
    # RESPONSE SHAPING
    # ------------------------------------------------------------------

    def _fail(self, failure: SubmissionFailure) -> GatewayResponse:
        level = logging.WARNING if failure.kind.is_client_error() else logging.ERROR
        log_phase(
            failure.where.value,
            {"error": failure.kind.value, "detail": preview(failure.detail)},
            level=level,
        )
        result = failure.to_result(self.trace_id)
        return GatewayResponse(
            status_code=failure.http_status,
            headers=response_headers(self.config, self.trace_id),
            body=result.to_body(),
        )

    def _succeed(self, record: Any) -> GatewayResponse:
        result = SubmissionResult(ok=True, record=record, trace_id=self.trace_id)
        logger.info(f"[{self.trace_id}] Submission stored")
        return GatewayResponse(
            status_code=200,
            headers=response_headers(self.config, self.trace_id),
            body=result.to_body(),
        )


__all__ = ["SubmissionGateway", "GatewayResponse", "response_headers"]
