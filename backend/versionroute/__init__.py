"""
versionroute — Header-Based API Version Routing
=================================================

What:  Serves several handlers on one path and picks one per request from a
       semantic version sent in a request header.

Architecture:
    ┌─────────────────────────────────────┐
    │      Routes (demo, introspection)   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Routing (VersionedRouter/Route)   │  ← FastAPI/Starlette integration
    ├─────────────────────────────────────┤
    │  Versioning core (framework-free)   │  ← SemanticVersion, VersionConstraint,
    │                                     │    RouteResolver
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
