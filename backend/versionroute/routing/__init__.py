"""
versionroute — FastAPI Routing Integration
============================================

What:  Connects the versioning core to FastAPI/Starlette routing.

Components:
    - VersionedRouter:   APIRouter whose decorators accept ``version=``
    - VersionedAPIRoute: APIRoute that answers only when resolution selects it
    - default_route_table / default_resolver: app-wide registration table
"""

from versionroute.routing.versioned_router import (
    VersionedAPIRoute,
    VersionedRouter,
    default_resolver,
    default_route_table,
)

__all__ = [
    "VersionedAPIRoute",
    "VersionedRouter",
    "default_resolver",
    "default_route_table",
]
