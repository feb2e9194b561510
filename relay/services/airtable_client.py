# ============================================================================
# AIRTABLE HTTP CLIENT
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Sync HTTP client for the record store
# PURPOSE: Create records through the Airtable REST API
# CREATED: 19 OCT 2026
# ============================================================================
"""
Airtable HTTP Client

Sync httpx client for the Airtable record-creation endpoint
(POST /v0/{base_id}/{table}).

Azure Functions handlers here are synchronous, so this uses the httpx sync
client. Nothing is raised for upstream or transport failures: every call
returns an `AirtableResult` and the caller decides how to shape the
response. Exactly one attempt is made per call.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from relay.config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class AirtableResult:
    """Outcome of one record-creation call."""

    success: bool
    status_code: Optional[int] = None  # None when the request never got an answer
    response_text: str = ""
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def reached_upstream(self) -> bool:
        return self.status_code is not None

    def json(self) -> Optional[Any]:
        """Parsed response body, or None if it is not JSON."""
        if not self.response_text:
            return None
        try:
            return json.loads(self.response_text)
        except ValueError:
            return None

    def first_record(self) -> Optional[Any]:
        """First record of a create response, or None."""
        payload = self.json()
        if not isinstance(payload, dict):
            return None
        records = payload.get("records")
        if isinstance(records, list) and records:
            return records[0]
        return None


def build_create_payload(fields: Dict[str, Any]) -> Dict[str, List[Dict[str, Any]]]:
    """Wrap one record's fields in the create-records envelope."""
    return {"records": [{"fields": fields}]}


class AirtableClient:
    """Sync HTTP client for the Airtable records API."""

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key
        self._base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self._timeout = httpx.Timeout(timeout or DEFAULT_TIMEOUT_SECONDS)

    def table_url(self, base_id: str, table: str) -> str:
        """Record endpoint for a base/table pair, path segments percent-encoded."""
        return f"{self._base_url}/v0/{quote(base_id, safe='')}/{quote(table, safe='')}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def create_record(self, base_id: str, table: str, fields: Dict[str, Any]) -> AirtableResult:
        """
        Create a single record.

        POST /v0/{base_id}/{table}
        Body: {"records": [{"fields": {...}}]}
        """
        url = self.table_url(base_id, table)
        payload = build_create_payload(fields)

        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.post(url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            logger.error(f"Airtable timeout: {url}: {e}")
            return AirtableResult(success=False, error=str(e) or "timeout", error_type=type(e).__name__)
        except httpx.HTTPError as e:
            logger.error(f"Cannot reach Airtable at {url}: {e}")
            return AirtableResult(success=False, error=str(e) or type(e).__name__, error_type=type(e).__name__)
        except Exception as e:
            logger.exception(f"Unexpected error calling Airtable: {e}")
            return AirtableResult(success=False, error=str(e) or type(e).__name__, error_type=type(e).__name__)

        success = 200 <= resp.status_code < 300
        if not success:
            logger.warning(f"Airtable returned {resp.status_code} for {url}")

        return AirtableResult(
            success=success,
            status_code=resp.status_code,
            response_text=resp.text,
        )


__all__ = ["AirtableClient", "AirtableResult", "build_create_payload"]
