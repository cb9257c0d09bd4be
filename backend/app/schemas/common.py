"""
Task Board Backend — Shared Response Schemas
==============================================

What:  Error envelope and health probe payload used across all routers.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "title is required",
            "code": "validation_error",
            "details": {"field": "title", "errors": [{"field": "title", "message": "title is required"}]},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: Optional[str] = Field(default=None, description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
