"""
versionroute — FastAPI Versioned Router
=========================================

What:  APIRouter whose routes are selected by the client's version header.
How:   Every decorator accepts a ``version=`` constraint. Each route is
       written into a RouteTable under (prefix + path, METHOD) and installed
       as a VersionedAPIRoute. When Starlette scans the app's routes, a
       VersionedAPIRoute only reports a full match if the RouteResolver picks
       it among its siblings for the current request.
Who:   Used by the route modules in ``versionroute.routes``.
When:  Registration runs at import time; create_app() freezes the table.

Usage::

    router = VersionedRouter(prefix="/api")

    @router.get("/hello", version=router.constraint(min="1.0.0", max="2.0.0"))
    async def hello_v1_to_v2(): ...

    @router.get("/hello")                       # unconstrained default
    async def hello_default(): ...

Group vs handler constraint:
    ``VersionedRouter(version=...)`` is the group-level constraint shared by
    all of the router's routes. A route's own ``version=`` replaces it
    entirely (see VersionConstraint.combine).

Binding:
    Each candidate stays a full APIRoute, so dependency injection, validation
    and OpenAPI work per handler. The binding lives on a per-route subclass,
    not on the instance: FastAPI releases that copy routes in include_router()
    pass ``route_class_override=type(route)``, and releases that mount the
    included router keep dispatching to this router's own route objects.

Misses:
    When the path and method match but no candidate accepts the version
    header, the first candidate scanned raises a 404 HTTPException. Siblings
    on other methods would otherwise turn the miss into a 405.
"""

import logging
from typing import Any, Callable, List, Optional, Type

from fastapi.routing import APIRoute, APIRouter
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException
from starlette.routing import Match
from starlette.types import Scope

from versionroute.config import settings
from versionroute.versioning.constraint import VersionConstraint
from versionroute.versioning.resolver import RouteResolver, RouteTable, VersionedRoute
from versionroute.versioning.semantic_version import DEFAULT_MIN_VERSION

logger = logging.getLogger(__name__)

# Per-request cache of resolution results, stored in the ASGI scope
_SCOPE_CACHE_KEY = "versionroute.resolved"

# Application-wide table shared by all routers unless one is passed in
default_route_table = RouteTable()
default_resolver = RouteResolver(default_route_table)


class VersionedAPIRoute(APIRoute):
    """
    APIRoute that only answers when version resolution selects it.

    Subclasses produced by ``bind_route_class`` carry the binding as class
    attributes; the base class behaves like a plain APIRoute.
    """

    versioned_route: Optional[VersionedRoute] = None
    resolver: Optional[RouteResolver] = None
    table_path: str = ""

    def matches(self, scope: Scope):
        match, child_scope = super().matches(scope)
        if match != Match.FULL or self.versioned_route is None or self.resolver is None:
            return match, child_scope

        selected = resolve_for_scope(scope, self.resolver, self.table_path)
        if selected is None:
            # Path and method are served; no candidate accepts this version
            raise HTTPException(status_code=404)
        if selected is not self.versioned_route:
            return Match.NONE, {}
        return match, child_scope


def resolve_for_scope(
    scope: Scope, resolver: RouteResolver, table_path: str
) -> Optional[VersionedRoute]:
    """Resolve once per (resolver, path, method) for this request."""
    method = scope["method"]
    cache = scope.setdefault(_SCOPE_CACHE_KEY, {})
    key = (id(resolver), table_path, method)
    if key not in cache:
        headers = Headers(scope=scope)
        cache[key] = resolver.lookup(table_path, method, headers.get)
    return cache[key]


def bind_route_class(
    versioned_route: VersionedRoute, resolver: RouteResolver, table_path: str
) -> Type[VersionedAPIRoute]:
    return type(
        "VersionedAPIRoute",
        (VersionedAPIRoute,),
        {
            "__module__": __name__,
            "versioned_route": versioned_route,
            "resolver": resolver,
            "table_path": table_path,
        },
    )


class VersionedRouter(APIRouter):
    """
    APIRouter with header-based version selection.

    Args:
        version:     Group-level constraint applied to every route that does
                     not declare its own.
        header:      Header name used by ``constraint()``; defaults to
                     ``settings.version_header``.
        route_table: Table to register into; defaults to the app-wide table.
        **kwargs:    Passed to APIRouter (prefix, tags, dependencies, ...).
    """

    def __init__(
        self,
        *,
        version: Optional[VersionConstraint] = None,
        header: Optional[str] = None,
        route_table: Optional[RouteTable] = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("route_class", VersionedAPIRoute)
        super().__init__(**kwargs)
        self.version = version
        self.header = header or settings.version_header
        self.route_table = route_table if route_table is not None else default_route_table
        self.resolver = (
            default_resolver if self.route_table is default_resolver.table
            else RouteResolver(self.route_table)
        )

    def constraint(
        self, value: str = "", min: str = str(DEFAULT_MIN_VERSION), max: str = ""
    ) -> VersionConstraint:
        """Build a constraint that reads this router's header."""
        return VersionConstraint.from_declaration(value=value, min=min, max=max, header=self.header)

    # ── Registration ──────────────────────────────────────────────────────

    def add_api_route(
        self,
        path: str,
        endpoint: Callable[..., Any],
        *,
        version: Optional[VersionConstraint] = None,
        methods: Optional[List[str]] = None,
        route_class_override: Optional[Type[APIRoute]] = None,
        **kwargs: Any,
    ) -> None:
        if route_class_override is not None:
            # Routes copied in by include_router keep their existing binding
            super().add_api_route(
                path, endpoint, methods=methods,
                route_class_override=route_class_override, **kwargs,
            )
            return

        route_methods = sorted({m.upper() for m in (methods or ["GET"])})
        table_path = self.prefix + path
        versioned = VersionedRoute(
            handler_id=endpoint,
            class_constraint=self.version,
            method_constraint=version,
            name=kwargs.get("name") or getattr(endpoint, "__name__", repr(endpoint)),
        )
        for method in route_methods:
            self.route_table.add(table_path, method, versioned)
            logger.info("Registered %s %s → %s", method, table_path, versioned)

        super().add_api_route(
            path, endpoint, methods=route_methods,
            route_class_override=bind_route_class(versioned, self.resolver, table_path),
            **kwargs,
        )

    def api_route(
        self, path: str, *, version: Optional[VersionConstraint] = None, **kwargs: Any
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_api_route(path, func, version=version, **kwargs)
            return func

        return decorator

    def get(self, path: str, *, version: Optional[VersionConstraint] = None, **kwargs: Any):
        return self.api_route(path, version=version, methods=["GET"], **kwargs)

    def post(self, path: str, *, version: Optional[VersionConstraint] = None, **kwargs: Any):
        return self.api_route(path, version=version, methods=["POST"], **kwargs)

    def put(self, path: str, *, version: Optional[VersionConstraint] = None, **kwargs: Any):
        return self.api_route(path, version=version, methods=["PUT"], **kwargs)

    def patch(self, path: str, *, version: Optional[VersionConstraint] = None, **kwargs: Any):
        return self.api_route(path, version=version, methods=["PATCH"], **kwargs)

    def delete(self, path: str, *, version: Optional[VersionConstraint] = None, **kwargs: Any):
        return self.api_route(path, version=version, methods=["DELETE"], **kwargs)
