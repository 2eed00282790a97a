"""Request logging middleware - logs method, path, status and duration."""

import logging
import time

import falcon.asgi

logger = logging.getLogger("crmrules.access")

# High-frequency probes are not logged
_SKIP_LOG = frozenset({"/v1/health", "/v1/health/ready"})


class RequestLoggingMiddleware:
    """Times each request and adds X-Request-Duration-Ms to the response."""

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        req.context.request_start = time.perf_counter()

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        start = getattr(req.context, "request_start", None)
        if start is None:
            return
        duration_ms = (time.perf_counter() - start) * 1000
        resp.set_header("X-Request-Duration-Ms", f"{duration_ms:.1f}")
        if req.path in _SKIP_LOG:
            return
        status = falcon.http_status_to_code(resp.status)
        logger.info(
            "%s %s %d %.1fms",
            req.method,
            req.path,
            status,
            duration_ms,
            extra={
                "method": req.method,
                "path": req.path,
                "status": status,
                "duration_ms": round(duration_ms, 1),
            },
        )
