# ============================================================================
# REDIRECT BLUEPRINT
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Signed URL redirect endpoint
# PURPOSE: Expose the path-to-signed-URL redirect over HTTP
# CREATED: 19 OCT 2026
# ============================================================================
"""
Redirect Blueprint

- GET /api/OrchestraWebApp?path=<container>/<file> - 308 to signed blob URL

The path may also be sent as the request body:
    curl "{host}/api/OrchestraWebApp?path=orchestra-poc/reports/file.pdf"
    curl -X GET -d "orchestra-poc/reports/file.pdf" {host}/api/OrchestraWebApp
"""

import azure.functions as func

from redirector.services.redirect_service import handle_redirect

redirect_bp = func.Blueprint()


@redirect_bp.function_name(name="OrchestraWebApp")
@redirect_bp.route(route="OrchestraWebApp", methods=["GET"])
def orchestra_web_app(req: func.HttpRequest, context: func.Context) -> func.HttpResponse:
    """
    Redirect to a time-limited signed URL.

    GET /api/OrchestraWebApp?path=<container>/<prefix>/<file>
    """
    return handle_redirect(req, invocation_id=context.invocation_id)


__all__ = ["redirect_bp"]
