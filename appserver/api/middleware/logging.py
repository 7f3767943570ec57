# 📄 File: appserver/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Writes one log line for every request the server handles and tags every log line
# written during that request with the same request number.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: request id correlation through the X-Request-ID header and a
# context variable, response timing, and slow request warnings.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, appserver.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# appserver.main (middleware registration)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from appserver.shared.utils.logging import log_context

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware for API monitoring.

    Features:
    - Request id propagation (incoming X-Request-ID is reused)
    - Request/response timing
    - Slow request warnings
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold
        self.request_id_header = "X-Request-ID"

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(self.request_id_header.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id

        with log_context(request_id):
            start_time = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as e:
                processing_time = time.perf_counter() - start_time
                logger.error(
                    f"{request.method} {request.url.path} failed after {processing_time:.3f}s: {e}"
                )
                raise

            processing_time = time.perf_counter() - start_time
            message = (
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"in {processing_time:.3f}s"
            )
            if processing_time > self.slow_request_threshold:
                logger.warning(f"Slow request: {message}")
            else:
                logger.info(message)

            response.headers[self.request_id_header] = request_id
            response.headers["X-Response-Time"] = f"{processing_time:.3f}s"
            return response
