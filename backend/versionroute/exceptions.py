"""
versionroute — Custom Exception Hierarchy
===========================================

What:  Defines application-specific exceptions for version routing failures.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the versioning core and the routing layer; caught by global handlers.
When:  At route registration (declared constraints) or during resolution.

Exception Hierarchy:
    VersionRouteError (base)
    ├── InvalidVersionFormatError  → raised by SemanticVersion.parse
    ├── RouteRegistrationError     → declared constraint rejected at startup
    └── NoMatchingRouteError       → 404 Not Found (no versioned handler applies)

Request-time parse failures are NOT errors: a malformed version header is
simply a non-match and never reaches these handlers.
"""

from typing import Any, Dict, Optional


class VersionRouteError(Exception):
    """
    Base exception for all versionroute errors.

    Attributes:
        message:  Human-readable error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where noted)
    """

    def __init__(
        self,
        message: str = "A version routing error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidVersionFormatError(VersionRouteError, ValueError):
    """
    Raised when a string is not a valid ``major.minor.patch`` version.

    What:    The input did not split into exactly three dot-separated
             non-negative integers.
    When:    SemanticVersion.parse() called directly, e.g. while validating a
             declared ``value``/``min``/``max`` at registration time.

    Also a ValueError so generic parsing code can catch it without knowing
    about this package.
    """

    def __init__(
        self,
        version_string: str,
        reason: str = "Expected format: X.Y.Z",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["version"] = version_string
        super().__init__(
            message=f"Invalid semantic version format: {version_string!r}. {reason}",
            context=ctx,
        )
        self.version_string = version_string
        self.reason = reason


class RouteRegistrationError(VersionRouteError):
    """
    Raised when a route declares a constraint that cannot be registered.

    What:    A declared ``value``, ``min`` or ``max`` is unparsable, or the
             declared range can never match (``max`` below ``min``).
    When:    During startup, while routers are being built. The offending
             route is not registered.
    """

    def __init__(
        self,
        message: str = "Route registration failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NoMatchingRouteError(VersionRouteError):
    """
    Raised when no candidate route matches the request's version.

    What:    Resolution-level "no match": every versioned handler for the path
             rejected the request and no unconstrained default is registered.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        path: str,
        method: str,
        requested_version: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"No versioned route found for {method} {path}"
        if requested_version:
            message = f"{message} (requested version {requested_version!r})"
        ctx = context or {}
        ctx["path"] = path
        ctx["method"] = method
        if requested_version is not None:
            ctx["requested_version"] = requested_version
        super().__init__(message=message, context=ctx)
        self.path = path
        self.method = method
        self.requested_version = requested_version
