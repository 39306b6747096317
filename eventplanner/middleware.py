import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

TIMING_HEADER = "X-Response-Time-Ms"


class HTTPLogMiddleware(BaseHTTPMiddleware):
    """Debug logging of every request, enabled with ``REQUEST_DEBUG=1``.

    Also reports the handler duration to the client in ``X-Response-Time-Ms``,
    which makes slow store reads easy to spot from the browser.
    """

    def __init__(self, app, logger_name: str = "eventplanner.http"):
        super().__init__(app)
        self._logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        method, path = request.method, request.url.path
        self._logger.debug("request start %s %s", method, path)
        try:
            response = await call_next(request)
        except Exception as e:
            self._logger.warning("request failed %s %s after %.1fms: %r",
                                 method, path, _elapsed_ms(start), e)
            raise
        dur_ms = _elapsed_ms(start)
        response.headers[TIMING_HEADER] = f"{dur_ms:.1f}"
        self._logger.debug("request end %s %s status=%s dur_ms=%.1f",
                           method, path, response.status_code, dur_ms)
        return response


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
