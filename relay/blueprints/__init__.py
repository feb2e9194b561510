# ============================================================================
# RELAY BLUEPRINTS
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - HTTP endpoint blueprints
# PURPOSE: Azure Functions V2 blueprints for HTTP routes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Relay Blueprints

Azure Functions V2 blueprints organizing HTTP endpoints.
"""

from relay.blueprints.submission_bp import submission_bp

__all__ = [
    "submission_bp",
]
