# fmngr/middleware.py

import logging
import time

logger = logging.getLogger("fmngr.requests")


class RequestLoggingMiddleware:
    """Logs one line per request: method, path, status and elapsed time."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info(f'"{request.method} {request.get_full_path()}" {response.status_code} in {elapsed_ms:.1f}ms')
        return response
