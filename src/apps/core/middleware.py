"""Custom middleware for the application."""

import logging
import time
import uuid

from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

SENSITIVE_PARAMS = {"password", "token", "secret", "key"}


class RequestLoggingMiddleware(MiddlewareMixin):
    """Log one line per API request.

    Logs:
    - Request id, also returned in the ``X-Request-ID`` header
    - Method, path, response status and duration
    - The query parameters of GET requests (criteria filters, paging)
    - The user id if authenticated
    """

    skip_prefixes = ("/static/", "/media/", "/favicon.ico")

    def process_request(self, request):
        request.start_time = time.monotonic()
        request.request_id = uuid.uuid4().hex[:8]
        return None

    def process_response(self, request, response):
        if not hasattr(request, "start_time"):
            return response

        response["X-Request-ID"] = request.request_id
        if request.path.startswith(self.skip_prefixes):
            return response

        log_data = {
            "request_id": request.request_id,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": round((time.monotonic() - request.start_time) * 1000, 2),
        }

        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            log_data["user_id"] = user.id

        if request.method == "GET" and request.GET:
            query_params = {
                k: v for k, v in request.GET.items() if k not in SENSITIVE_PARAMS
            }
            if query_params:
                log_data["query_params"] = query_params

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(level, "Request completed: %s %s", request.method, request.path, extra=log_data)

        return response
