# Copyright 2025 podhost
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
HTTP request logging middleware.

Each request gets a short request_id, bound into structlog's context
variables together with the method and path, and echoed back in the
X-Request-ID header. The completion line carries the id of the
authenticated user, which get_current_user leaves on ``request.state``.
"""

import time
import uuid
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ...logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request start and one per outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            endpoint=request.url.path,
        )

        start = time.perf_counter()
        logger.info("http_request_started", client_ip=request.client.host if request.client else "unknown")

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "http_request_failed",
                    error_type=type(e).__name__,
                    duration_ms=_elapsed_ms(start),
                    user_id=getattr(request.state, "user_id", None),
                    exc_info=True,
                )
                raise

            status = response.status_code
            level = "error" if status >= 500 else "warning" if status >= 400 else "info"
            getattr(logger, level)(
                "http_request_completed",
                status_code=status,
                duration_ms=_elapsed_ms(start),
                user_id=getattr(request.state, "user_id", None),
            )
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "method", "endpoint")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
