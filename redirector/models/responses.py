# ============================================================================
# API RESPONSE MODELS
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Response schemas
# PURPOSE: Pydantic V2 models for API responses
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Response Models

Pydantic V2 models for JSON responses. The redirect itself has no body;
these cover probes and storage failures, serialized by json_response().
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import azure.functions as func
from pydantic import BaseModel, ConfigDict, Field


class LivenessResponse(BaseModel):
    """Liveness probe response."""

    model_config = ConfigDict()

    alive: bool = Field(default=True, description="Process is running")
    service: str = Field(default="blob-redirect", description="Service name")


class ReadinessResponse(BaseModel):
    """Readiness probe response."""

    model_config = ConfigDict()

    ready: bool = Field(..., description="Startup validation passed")
    service: str = Field(default="blob-redirect", description="Service name")
    version: str = Field(default="1.0.0", description="Service version")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Check timestamp",
    )
    failed_checks: List[str] = Field(
        default_factory=list,
        description="Names of failed startup checks",
    )
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Per-check results (only when not ready)",
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Storage authentication failed",
                "code": "STORAGE_AUTHENTICATION",
            }
        }
    )

    error: str = Field(..., description="Error message")
    code: Optional[str] = Field(default=None, description="Error code for programmatic handling")


def json_response(model: BaseModel, status_code: int = 200) -> func.HttpResponse:
    """Serialize a response model into a JSON HTTP response."""
    return func.HttpResponse(
        model.model_dump_json(exclude_none=True),
        status_code=status_code,
        headers={"Content-Type": "application/json"},
    )


__all__ = [
    "LivenessResponse",
    "ReadinessResponse",
    "ErrorResponse",
    "json_response",
]
