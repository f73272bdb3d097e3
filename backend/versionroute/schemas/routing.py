"""
versionroute — Pydantic Response Schemas
==========================================

What:  Pydantic models defining the API contract of the demo, introspection
       and health endpoints.
How:   FastAPI uses these models to serialize responses and generate the
       OpenAPI documentation.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Demo Responses
# ══════════════════════════════════════════════════════════════════════════


class GreetingResponse(BaseModel):
    """Body returned by every versioned demo handler."""
    message: str = Field(description="Greeting text of the handler that served the request")
    handler: str = Field(description="Name of the handler selected by version resolution")


# ══════════════════════════════════════════════════════════════════════════
# Introspection Responses
# ══════════════════════════════════════════════════════════════════════════


class VersionedRouteInfo(BaseModel):
    """
    What:  One registered candidate route.
    Who:   Returned as list items by GET /api/routes.
    """
    path: str = Field(description="Registered path, including router prefix")
    method: str = Field(description="HTTP method")
    handler: str = Field(description="Handler name")
    constraint: str = Field(description="Effective constraint, or 'unversioned'")


class RouteListResponse(BaseModel):
    routes: List[VersionedRouteInfo] = Field(description="All registered versioned routes")
    total_count: int = Field(description="Number of registered candidates")


class ResolutionResponse(BaseModel):
    """
    What:  Outcome of resolving a path/method with the caller's headers.
    Who:   Returned by GET /api/routes/resolve.
    """
    path: str
    method: str
    requested_version: Optional[str] = Field(
        default=None, description="Raw version header value sent by the caller"
    )
    handler: str = Field(description="Handler that would serve the request")
    constraint: str = Field(description="Effective constraint of that handler")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "not_found")
        message: Human-readable description
        details: Optional extra context
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    version_header: str = Field(description="Default header used for version routing")
    versioned_routes: int = Field(description="Number of registered versioned route candidates")
    uptime_seconds: float = Field(description="Seconds since service started")
