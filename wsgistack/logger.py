import logging
import time
from .handler import Handler, handler
from .wsgi import status_line


class Logger(Handler):
    """ Logs the start and end of every request that reaches it """
    def __init__(self, log=None):
        self.log = log or logging.getLogger(__name__)
        self._handler = handler(self.log_request)

    def log_request(self, rw, request):
        start = time.monotonic()
        self.log.info("Started %s %s", request.method, request.path)

        yield

        elapsed = (time.monotonic() - start) * 1000
        # Unwritten responses go out as 200
        status = rw.status or 200
        self.log.info("Completed %s in %.3fms", status_line(status), elapsed)

    def serve_http(self, rw, request, next):
        self._handler.serve_http(rw, request, next)
