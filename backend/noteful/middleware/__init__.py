# Middleware package init
"""
Noteful Backend: Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: generate or accept a correlation ID
    2. Access Logging: log method, path, status and duration with that ID
    3. GZip / CORS: FastAPI's stock middleware

    Responses travel the chain in reverse, so the X-Request-ID header is
    set on the way out and logging sees the final status code.
"""
