# ============================================================================
# STARTUP VALIDATION
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Startup and readiness validation
# PURPOSE: Report configuration problems at cold start and on /readyz
# CREATED: 19 OCT 2026
# ============================================================================
"""
Startup Validation

Validates configuration at cold start and logs each check. Route
registration does not depend on the result: the submission route re-checks
configuration on every request and answers `validate_env` failures itself,
so fixed app settings apply without a redeploy.

The readiness check re-runs these checks against a fresh configuration.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from relay.config import CREDENTIAL_PREFIX, RelayConfig, load_config
from relay.diagnostics import mask_secret

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a startup validation check."""

    name: str
    passed: bool
    error_type: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class StartupState:
    """Track all startup validation checks."""

    credential: ValidationResult = field(
        default_factory=lambda: ValidationResult("credential", False, "NotRun", "Validation not yet run")
    )
    store: ValidationResult = field(
        default_factory=lambda: ValidationResult("store", False, "NotRun", "Validation not yet run")
    )

    def checks(self) -> List[ValidationResult]:
        return [self.credential, self.store]

    @property
    def all_passed(self) -> bool:
        """Check if all validations passed."""
        return all(c.passed for c in self.checks())

    def failed_checks(self) -> List[ValidationResult]:
        """Get list of failed validation checks."""
        return [c for c in self.checks() if not c.passed]

    def failed_check_names(self) -> List[str]:
        """Get names of failed checks."""
        return [c.name for c in self.failed_checks()]


def validate_startup(config: Optional[RelayConfig] = None) -> StartupState:
    """
    Run all configuration checks.

    Returns a fresh StartupState; nothing is cached between calls.
    """
    config = config or load_config()
    state = StartupState(
        credential=_validate_credential(config),
        store=_validate_store(config),
    )

    for check in state.checks():
        if check.passed:
            logger.info(f"  [PASS] {check.name}")
        else:
            logger.error(f"  [FAIL] {check.name}: {check.error_message}")

    if not state.all_passed:
        logger.error(f"Validation FAILED: {state.failed_check_names()}")

    return state


def _validate_credential(config: RelayConfig) -> ValidationResult:
    """Validate the record store credential without revealing it."""
    if not config.has_credential:
        return ValidationResult(
            name="credential",
            passed=False,
            error_type="MissingEnvVar",
            error_message="AIRTABLE_API_KEY required",
        )
    if not config.has_valid_credential:
        return ValidationResult(
            name="credential",
            passed=False,
            error_type="InvalidEnvVar",
            error_message=(
                f"AIRTABLE_API_KEY ({mask_secret(config.airtable_api_key)}) "
                f"must start with '{CREDENTIAL_PREFIX}'"
            ),
        )
    return ValidationResult(name="credential", passed=True)


def _validate_store(config: RelayConfig) -> ValidationResult:
    if not config.has_store_config:
        return ValidationResult(
            name="store",
            passed=False,
            error_type="MissingEnvVar",
            error_message="AIRTABLE_BASE_ID required",
        )
    return ValidationResult(name="store", passed=True)


__all__ = ["validate_startup", "ValidationResult", "StartupState"]
