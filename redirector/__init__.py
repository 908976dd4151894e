# ============================================================================
# FUNCTION APP MODULE
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Azure Function App components
# PURPOSE: Function app that redirects file paths to signed blob URLs
# CREATED: 19 OCT 2026
# ============================================================================
"""
Function App Module

Contains all components specific to the Azure Function App deployment:
- Blueprints (HTTP endpoints)
- Models (response schemas)
- Services (redirect handling)
- Startup validation
"""

__all__ = []
