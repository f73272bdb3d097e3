# Routes package init
"""
versionroute — API Routes Package
===================================

What:  HTTP route handlers served by the application.

Route Inventory:
    - hello.py:         GET /api/hello           (six versioned handlers + default)
                        GET /api/goodbye         (group-level constraint demo)
    - introspection.py: GET /api/routes          (list versioned routes)
                        GET /api/routes/resolve  (preview resolution)
    - health.py:        GET /health              (service health check)

Versioned routes are declared on a VersionedRouter; everything else uses a
plain APIRouter.
"""
