# ============================================================================
# SUBMISSION RELAY MODULE
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Azure Function App components
# PURPOSE: Form submission relay to the Airtable record store
# CREATED: 19 OCT 2026
# ============================================================================
"""
Submission Relay Module

Contains all components of the Azure Function App deployment:
- Blueprints (HTTP endpoints)
- Models (request/response schemas)
- Services (submission pipeline, Airtable client)
- Configuration and startup validation
"""

__all__ = []
