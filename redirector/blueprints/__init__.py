# ============================================================================
# FUNCTION APP BLUEPRINTS
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - HTTP endpoint blueprints
# PURPOSE: Azure Functions V2 blueprints for HTTP routes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Function App Blueprints

Azure Functions V2 blueprints organizing HTTP endpoints.
Registered only when startup validation passes.
"""

from redirector.blueprints.redirect_bp import redirect_bp

__all__ = [
    "redirect_bp",
]
