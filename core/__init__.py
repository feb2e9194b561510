# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Core module initialization
# PURPOSE: Export shared contracts and structured logging helpers
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.contracts import ErrorKind, Phase
from core.logging import (
    configure_logging,
    get_logger,
    log_context,
    log_phase,
)

__all__ = [
    # Enums
    "ErrorKind",
    "Phase",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
    "log_phase",
]
