"""
versionroute — Versioning Core
================================

What:  Framework-independent version resolution.

Components:
    - SemanticVersion:  major.minor.patch value type (parse, compare, str)
    - VersionConstraint: exact-or-range requirement (matches, combine, priority)
    - RouteResolver:    picks one route per request from a RouteTable

Nothing here imports FastAPI or Starlette; any router that can read a header
by name can drive it.
"""

from versionroute.versioning.constraint import (
    DEFAULT_VERSION_HEADER,
    VersionConstraint,
    match,
    priority,
)
from versionroute.versioning.resolver import (
    HeaderReader,
    RouteResolver,
    RouteTable,
    VersionedRoute,
    compare_routes,
)
from versionroute.versioning.semantic_version import (
    DEFAULT_MIN_VERSION,
    SemanticVersion,
    compare,
)

__all__ = [
    "DEFAULT_MIN_VERSION",
    "DEFAULT_VERSION_HEADER",
    "HeaderReader",
    "RouteResolver",
    "RouteTable",
    "SemanticVersion",
    "VersionConstraint",
    "VersionedRoute",
    "compare",
    "compare_routes",
    "match",
    "priority",
]
