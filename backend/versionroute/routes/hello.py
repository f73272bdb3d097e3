"""
versionroute — Versioned Demo Routes
======================================

What:  Several handlers registered on the same path, told apart only by the
       client's version header.
How:   Each handler declares a constraint through VersionedRouter; the
       resolver picks one per request.

/api/hello (no group-level constraint):
    ┌────────────────────────┬────────────────────────────────────────┐
    │ constraint             │ response message                       │
    ├────────────────────────┼────────────────────────────────────────┤
    │ 1.0.0 .. 2.0.0         │ hello v1~v2                            │
    │ 10.0.0 .. *            │ min                                    │
    │ 0.0.1 .. 20.0.0        │ max                                    │
    │ = 3.0.0                │ hello v3 only                          │
    │ 4.0.0 .. *             │ hello v4+                              │
    │ (none)                 │ hello default (header=<raw value>)     │
    └────────────────────────┴────────────────────────────────────────┘

    api-version: 3.0.0        → hello v3 only   (exact outranks ranges)
    api-version: 1.5.0        → hello v1~v2     (min 1.0.0 beats min 0.0.1)
    api-version: 15.0.0       → min             (min 10.0.0 beats 4.0.0 and 0.0.1)
    api-version: 0.5.0        → max
    missing / "not-a-version" → hello default

/api/goodbye (group-level constraint 2.0.0 .. *):
    goodbye_current inherits the group constraint;
    goodbye_legacy overrides it with exactly 1.0.0.
"""

import logging

from fastapi import Request

from versionroute.config import settings
from versionroute.routing.versioned_router import VersionedRouter
from versionroute.schemas.routing import GreetingResponse
from versionroute.versioning.constraint import VersionConstraint

logger = logging.getLogger(__name__)

router = VersionedRouter(prefix="/api", tags=["Hello"])


@router.get(
    "/hello",
    version=router.constraint(min="1.0.0", max="2.0.0"),
    response_model=GreetingResponse,
    summary="Greeting for versions 1.0.0 through 2.0.0",
)
async def hello_v1_to_v2() -> GreetingResponse:
    return GreetingResponse(message="hello v1~v2", handler="hello_v1_to_v2")


@router.get("/hello", version=router.constraint(min="10.0.0"), response_model=GreetingResponse)
async def hello_min() -> GreetingResponse:
    return GreetingResponse(message="min", handler="hello_min")


@router.get("/hello", version=router.constraint(max="20.0.0"), response_model=GreetingResponse)
async def hello_max() -> GreetingResponse:
    return GreetingResponse(message="max", handler="hello_max")


@router.get(
    "/hello",
    version=router.constraint(value="3.0.0"),
    response_model=GreetingResponse,
    summary="Greeting for version 3.0.0 only",
)
async def hello_v3() -> GreetingResponse:
    return GreetingResponse(message="hello v3 only", handler="hello_v3")


@router.get("/hello", version=router.constraint(min="4.0.0"), response_model=GreetingResponse)
async def hello_v4_plus() -> GreetingResponse:
    return GreetingResponse(message="hello v4+", handler="hello_v4_plus")


@router.get(
    "/hello",
    response_model=GreetingResponse,
    summary="Fallback greeting",
    description="Serves requests whose version header is missing, malformed or unmatched.",
)
async def hello_default(request: Request) -> GreetingResponse:
    """
    Unconstrained default handler.

    Echoes the raw version header so clients can see what the server
    received when no versioned handler applied.
    """
    raw = request.headers.get(settings.version_header)
    return GreetingResponse(message=f"hello default (header={raw})", handler="hello_default")


# ── Group-level constraint ────────────────────────────────────────────────
goodbye_router = VersionedRouter(
    prefix="/api",
    tags=["Hello"],
    version=VersionConstraint.between(min="2.0.0", header=settings.version_header),
)


@goodbye_router.get("/goodbye", response_model=GreetingResponse)
async def goodbye_current() -> GreetingResponse:
    return GreetingResponse(message="goodbye v2+", handler="goodbye_current")


@goodbye_router.get(
    "/goodbye",
    version=goodbye_router.constraint(value="1.0.0"),
    response_model=GreetingResponse,
)
async def goodbye_legacy() -> GreetingResponse:
    return GreetingResponse(message="goodbye v1", handler="goodbye_legacy")
