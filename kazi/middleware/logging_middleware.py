import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from kazi.logging_config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    One line per request and one per response, tagged with a request id.

    Bodies carry passwords and tokens, so only their size is logged.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        started = time.perf_counter()
        client = request.client.host if request.client else "unknown"

        logger.info(
            f"[{request_id}] {request.method} {request.url.path} from {client} "
            f"({request.headers.get('content-length', '0')} bytes)"
        )

        response = await call_next(request)
        elapsed = time.perf_counter() - started

        level = logger.warning if response.status_code >= 500 else logger.info
        level(
            f"[{request_id}] {request.method} {request.url.path} -> "
            f"{response.status_code} in {elapsed:.4f}s"
        )

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
