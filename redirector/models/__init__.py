# ============================================================================
# FUNCTION APP MODELS
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Pydantic models for API
# PURPOSE: Response models for function app endpoints
# CREATED: 19 OCT 2026
# ============================================================================
"""
Function App Models

Pydantic V2 models for API responses.
"""

from redirector.models.responses import (
    LivenessResponse,
    ReadinessResponse,
    ErrorResponse,
    json_response,
)

__all__ = [
    "LivenessResponse",
    "ReadinessResponse",
    "ErrorResponse",
    "json_response",
]
