"""
Per-request tracing: request id, admin username for log context, and one
log line when the request starts and one when it finishes.
"""

import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response, JSONResponse
from jose import JWTError, jwt
from logging_config import get_logger, request_id_var, username_var
from middleware.error_handlers import error_body
from config import config

logger = get_logger("middleware")

REQUEST_ID_HEADER = "X-Request-ID"

# Fired by every page view on the public site; only logged at DEBUG
BEACON_PATHS = ("/analytics/track-visitor", "/analytics/update-page-time")


def _username_from_token(request: Request) -> str:
    """Log context only. Authorization is decided by require_admin, not here."""
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        return "-"
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        return "-"
    return str(payload.get("username", "-"))


def _request_id(request: Request) -> str:
    # Keep an upstream proxy's id so log lines can be correlated across hops
    incoming = request.headers.get(REQUEST_ID_HEADER, "")
    if incoming and len(incoming) <= 64:
        return incoming
    return uuid.uuid4().hex[:8]


class RequestLifecycleMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next) -> Response:
        req_id = _request_id(request)
        request_id_var.set(req_id)
        username_var.set(_username_from_token(request))

        method = request.method
        path = request.url.path
        is_beacon = path in BEACON_PATHS
        started = time.perf_counter()

        (logger.debug if is_beacon else logger.info)(
            f"→ {method} {path}",
            extra={"data": {
                "query": str(request.query_params) if request.query_params else None,
                "client": request.client.host if request.client else None,
            }}
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = round((time.perf_counter() - started) * 1000, 1)
            logger.error(
                f"✖ {method} {path} UNHANDLED ERROR ({duration_ms}ms): {exc}",
                exc_info=True,
                extra={"data": {"duration_ms": duration_ms}}
            )
            return JSONResponse(
                status_code=500,
                content=error_body(
                    "Internal server error",
                    request_id=req_id,
                    details=None if config.ENV == "production" else str(exc),
                ),
                headers={REQUEST_ID_HEADER: req_id}
            )

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        if response.status_code >= 400:
            log_fn = logger.warning
        elif is_beacon:
            log_fn = logger.debug
        else:
            log_fn = logger.info
        log_fn(
            f"← {method} {path} {response.status_code} ({duration_ms}ms)",
            extra={"data": {"status": response.status_code, "duration_ms": duration_ms}}
        )

        response.headers[REQUEST_ID_HEADER] = req_id
        return response
