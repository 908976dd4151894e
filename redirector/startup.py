# ============================================================================
# STARTUP VALIDATION
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Startup validation
# PURPOSE: Validate environment before registering blueprints
# CREATED: 19 OCT 2026
# ============================================================================
"""
Startup Validation

Validates environment and storage credential before registering blueprints:
fail fast, log clearly, degrade gracefully.

If validation fails, only /livez and /readyz endpoints are available.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from redirector.config import get_config

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

    env_vars: ValidationResult = field(
        default_factory=lambda: ValidationResult("env_vars", False, "NotRun", "Validation not yet run")
    )
    storage: ValidationResult = field(
        default_factory=lambda: ValidationResult("storage", False, "NotRun", "Validation not yet run")
    )

    def _checks(self) -> List[ValidationResult]:
        return [self.env_vars, self.storage]

    @property
    def all_passed(self) -> bool:
        """Check if all validations passed."""
        return all(c.passed for c in self._checks())

    def failed_checks(self) -> List[ValidationResult]:
        """Get list of failed validation checks."""
        return [c for c in self._checks() if not c.passed]

    def failed_check_names(self) -> List[str]:
        """Get names of failed checks."""
        return [c.name for c in self.failed_checks()]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "all_passed": self.all_passed,
            "checks": {
                c.name: {
                    "passed": c.passed,
                    "error": c.error_message if not c.passed else None,
                }
                for c in self._checks()
            },
        }


# Global singleton
STARTUP_STATE = StartupState()


def validate_startup() -> bool:
    """
    Run all startup validation checks.

    Returns True if all checks pass.
    Updates global STARTUP_STATE with results.
    """
    logger.info("Starting validation checks...")

    # 1. Environment Variables
    STARTUP_STATE.env_vars = _validate_env_vars()
    if STARTUP_STATE.env_vars.passed:
        logger.info("  [PASS] Environment variables")
    else:
        logger.error(f"  [FAIL] Environment variables: {STARTUP_STATE.env_vars.error_message}")

    # 2. Storage credential (only if env vars passed)
    if STARTUP_STATE.env_vars.passed:
        STARTUP_STATE.storage = _validate_storage()
        if STARTUP_STATE.storage.passed:
            logger.info("  [PASS] Storage credential")
        else:
            logger.error(f"  [FAIL] Storage credential: {STARTUP_STATE.storage.error_message}")
    else:
        STARTUP_STATE.storage = ValidationResult(
            name="storage",
            passed=False,
            error_type="Skipped",
            error_message="Skipped due to env_vars failure",
        )

    if STARTUP_STATE.all_passed:
        logger.info("All validation checks PASSED")
    else:
        logger.error(f"Validation FAILED: {STARTUP_STATE.failed_check_names()}")

    return STARTUP_STATE.all_passed


def _validate_env_vars() -> ValidationResult:
    """Validate required environment variables."""
    config = get_config()

    if not config.has_storage_config:
        return ValidationResult(
            name="env_vars",
            passed=False,
            error_type="MissingEnvVar",
            error_message="ADLS_CONNECTION_String required",
        )

    return ValidationResult(name="env_vars", passed=True)


def _validate_storage() -> ValidationResult:
    """
    Validate the connection string can sign account SAS tokens.

    Note: parses the connection string only, no connectivity check.
    A round trip to storage would be too slow for cold start.
    """
    try:
        from infrastructure.storage import get_sas_signer

        get_sas_signer().validate_credential()
        return ValidationResult(name="storage", passed=True)
    except Exception as e:
        return ValidationResult(
            name="storage",
            passed=False,
            error_type=type(e).__name__,
            error_message=str(e),
        )


__all__ = ["STARTUP_STATE", "validate_startup", "ValidationResult", "StartupState"]
