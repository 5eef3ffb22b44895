"""
Noteful Backend: Request ID Middleware
======================================

What:  Assigns each request a short correlation ID and returns it in the
       X-Request-ID response header.
How:   Reuses the client's X-Request-ID when one is sent, otherwise generates
       one; stores it in a ContextVar for loggers and exception handlers.
When:  First middleware in the chain.

The same ID appears in access log lines and in every error body
(`request_id`), so a failing API call can be matched to its log entries.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local; concurrent requests on one thread each see their own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the request if present
        2. Otherwise generate 8 hex characters from a UUID4
        3. Expose it through request_id_var and request.state.request_id
        4. Echo it in the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
