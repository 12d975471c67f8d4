import logging
import traceback
from .handler import Handler


class Recovery(Handler):
    """
    Catches any exception raised further down the stack and answers 500.

    Only requests that pass through Recovery are protected, so it should
    be the first handler in the stack.  With `print_stack` the traceback
    is also written to the response body, which is only appropriate while
    debugging.
    """
    def __init__(self, log=None, print_stack=False):
        self.log = log or logging.getLogger(__name__)
        self.print_stack = print_stack

    def serve_http(self, rw, request, next):
        try:
            next(rw, request)
        except Exception:
            stack = traceback.format_exc()
            self.log.error("PANIC in %s %s\n%s",
                           request.method, request.path, stack)
            rw.write_header(500)
            if self.print_stack:
                rw.write(stack)
