# ============================================================================
# BLOB REDIRECT - Azure Function App
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Signed URL redirects for blob storage
# PURPOSE: Turn logical file paths into short-lived signed blob URLs
# CREATED: 19 OCT 2026
# ============================================================================
"""
Blob Redirect Function App

Azure Functions V2 entry point providing:
- A redirect from a logical file path to a read-only, time-limited
  SAS URL for the matching blob
- Liveness/readiness probes

Endpoints:
- /api/livez - Liveness probe (always available)
- /api/readyz - Readiness probe (checks startup validation)
- /api/OrchestraWebApp?path=... - 308 redirect to the signed blob URL
"""

import azure.functions as func
import logging
import os

from core.logging import configure_logging
from redirector.config import get_config
from redirector.models.responses import LivenessResponse, ReadinessResponse, json_response

# ============================================================================
# CREATE APP FIRST (before any imports that might fail)
# ============================================================================

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

# Logging before config: config loading logs the token timeout fallback
configure_logging(level=os.environ.get("LOG_LEVEL", "INFO"))
_config = get_config()

logger = logging.getLogger(__name__)
logger.info("=" * 60)
logger.info("Blob Redirect Function App Starting")
logger.info("=" * 60)

# ============================================================================
# EARLY PROBES (Before validation - always available)
# ============================================================================


@app.route(route="livez", methods=["GET"])
def liveness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """
    Liveness probe - always returns 200 if function is running.

    GET /api/livez
    """
    return json_response(LivenessResponse(service=_config.service_name))


@app.route(route="readyz", methods=["GET"])
def readiness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """
    Readiness probe - returns 200 if startup validation passed.

    GET /api/readyz

    Returns 503 with the failed checks otherwise.
    """
    from redirector.startup import STARTUP_STATE

    if STARTUP_STATE.all_passed:
        return json_response(
            ReadinessResponse(ready=True, service=_config.service_name, version=_config.version)
        )

    return json_response(
        ReadinessResponse(
            ready=False,
            service=_config.service_name,
            version=_config.version,
            failed_checks=STARTUP_STATE.failed_check_names(),
            details=STARTUP_STATE.to_dict(),
        ),
        status_code=503,
    )


# ============================================================================
# STARTUP VALIDATION
# ============================================================================

logger.info("Running startup validation...")

from redirector.startup import validate_startup, STARTUP_STATE

validate_startup()

if not STARTUP_STATE.all_passed:
    logger.error("=" * 60)
    logger.error("STARTUP VALIDATION FAILED")
    logger.error("=" * 60)
    logger.error("Only /api/livez and /api/readyz endpoints available")
    for check in STARTUP_STATE.failed_checks():
        logger.error(f"  FAILED: {check.name} - {check.error_message}")
    logger.error("=" * 60)
else:
    logger.info("Startup validation PASSED")


# ============================================================================
# BLUEPRINT REGISTRATION (Conditional on startup success)
# ============================================================================

if STARTUP_STATE.all_passed:
    logger.info("Registering blueprints...")

    from redirector.blueprints.redirect_bp import redirect_bp
    app.register_functions(redirect_bp)
    logger.info("  Registered: redirect_bp (signed URL redirect)")

    logger.info("=" * 60)
    logger.info("Blob Redirect Function App Ready")
    logger.info("=" * 60)
else:
    logger.warning("=" * 60)
    logger.warning("SKIPPING blueprint registration - startup validation failed")
    logger.warning("=" * 60)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["app"]
