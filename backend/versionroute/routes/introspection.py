"""
versionroute — Route Introspection
====================================

What:  Read-only view of the version routing table.
How:   Lists the app-wide RouteTable and runs RouteResolver.resolve_route() with the
       caller's own headers, without invoking the selected handler.
Who:   Operators and client developers checking which handler a given
       version header would reach.

Endpoints:
    GET /api/routes                                → every registered candidate
    GET /api/routes/resolve?path=/api/hello&method=GET
        (send the version header as usual)        → selected handler, or 404
"""

import logging

from fastapi import APIRouter, Query, Request

from versionroute.config import settings
from versionroute.routing.versioned_router import default_resolver
from versionroute.schemas.routing import (
    ErrorResponse,
    ResolutionResponse,
    RouteListResponse,
    VersionedRouteInfo,
)
from versionroute.versioning.resolver import VersionedRoute

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Routing"])


def _constraint_text(route: VersionedRoute) -> str:
    constraint = route.effective_constraint
    return str(constraint) if constraint is not None else "unversioned"


@router.get(
    "/routes",
    response_model=RouteListResponse,
    summary="List versioned routes",
)
async def list_routes() -> RouteListResponse:
    routes = [
        VersionedRouteInfo(
            path=path,
            method=method,
            handler=route.name,
            constraint=_constraint_text(route),
        )
        for path, method, route in default_resolver.table.routes()
    ]
    return RouteListResponse(routes=routes, total_count=len(routes))


@router.get(
    "/routes/resolve",
    response_model=ResolutionResponse,
    responses={404: {"description": "No versioned route matches", "model": ErrorResponse}},
    summary="Preview version resolution",
    description=(
        "Resolves the given path and method using this request's headers and "
        "reports which handler would serve it."
    ),
)
async def resolve_route(
    request: Request,
    path: str = Query(description="Registered route path, e.g. /api/hello"),
    method: str = Query(default="GET", description="HTTP method"),
) -> ResolutionResponse:
    """
    Run resolution for ``path``/``method``.

    Raises:
        NoMatchingRouteError: Handled globally → 404.
    """
    method = method.upper()
    selected = default_resolver.resolve_route(path, method, request.headers.get)
    return ResolutionResponse(
        path=path,
        method=method,
        requested_version=request.headers.get(settings.version_header),
        handler=selected.name,
        constraint=_constraint_text(selected),
    )
