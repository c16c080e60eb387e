import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

CORRELATION_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    """Middleware that extracts or generates a correlation ID for each request.

    Reads X-Request-ID header from the incoming request. If absent,
    generates a new UUID4. The ID is attached to the request as
    ``request.correlation_id`` so views can hand it explicitly to the
    service layer, and is returned to the client via the X-Request-ID
    response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        request.correlation_id = cid

        log = logger.bind(correlation_id=cid)
        log.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
        )

        response = self.get_response(request)

        log.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
        )

        response[CORRELATION_ID_HEADER] = cid
        return response
