from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from sample_logger.logging import bind_request_id, reset_request_id

# Child of the `sample.api` service logger, so lines carry service="api".
logger = logging.getLogger("sample.api.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id for the duration of a request and log its outcome.

    The id comes from `X-Request-ID` when the client sends one. While the
    request runs it is on the logging context, so every JSON line written for
    the request, the access line included, carries a `request_id` field.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = bind_request_id(request_id)
        start = time.perf_counter()
        status_code = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            logger.info(
                "%s %s -> %s",
                request.method,
                request.url.path,
                status_code,
                extra={"duration_ms": round((time.perf_counter() - start) * 1000.0, 1)},
            )
            reset_request_id(token)
