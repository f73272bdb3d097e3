# Middleware package init
"""
versionroute — Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Router (version resolution)

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details, including the version header, with the ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

    The order is reversed for responses:
    Response ← [Request ID] ← [Logging] ← [CORS] ← Route Handler
"""
