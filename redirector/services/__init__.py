# ============================================================================
# FUNCTION APP SERVICES
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Request handling services
# PURPOSE: Path-to-signed-URL redirect logic behind the HTTP blueprint
# CREATED: 19 OCT 2026
# ============================================================================

from redirector.services.redirect_service import handle_redirect

__all__ = ["handle_redirect"]
