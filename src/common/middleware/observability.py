"""Observability middleware for context enrichment."""

import typing as t
import uuid

import structlog
from django.http import HttpRequest, HttpResponse
from opentelemetry import trace

REQUEST_ID_HEADER = "X-Request-ID"


class StructlogContextMiddleware:
    """Binds request metadata to the structlog context for the request's lifetime.

    Every log event emitted while handling the request carries the request id,
    method, path and client IP. The request id is echoed in ``X-Request-ID``.
    """

    def __init__(self, get_response: t.Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()

        context: dict[str, t.Any] = {
            "request_id": request_id,
            "method": request.method,
            "path": request.path,
            "ip_address": self._get_client_ip(request),
        }

        # Correlate logs with traces when a tracer provider is installed
        span = trace.get_current_span()
        if span and span.get_span_context().is_valid:
            context["trace_id"] = format(span.get_span_context().trace_id, "032x")

        structlog.contextvars.bind_contextvars(**context)
        try:
            response = self.get_response(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response[REQUEST_ID_HEADER] = request_id
        return response

    def _get_client_ip(self, request: HttpRequest) -> str:
        """Extract the client IP, preferring the first X-Forwarded-For hop."""
        x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if x_forwarded_for:
            return str(x_forwarded_for.split(",")[0].strip())
        return str(request.META.get("REMOTE_ADDR", "unknown"))
