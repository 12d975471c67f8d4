"""
Handlers compiled into an immutable linked chain.

    build([first, second])

is equivalent to

    Middleware(first, Middleware(second, VOID))

and each node passes `node.next.serve_http` to its handler as the
continuation.  Nodes are never mutated after construction, so a chain
that has been captured keeps working unchanged when a new one is built.
"""
import logging
from .handler import HandlerFunc
logger = logging.getLogger(__name__)


class Middleware(object):
    __slots__ = ("handler", "next")

    def __init__(self, handler, next):
        object.__setattr__(self, "handler", handler)
        object.__setattr__(self, "next", next)

    def __setattr__(self, name, value):
        raise AttributeError("Middleware is immutable")

    def __delattr__(self, name):
        raise AttributeError("Middleware is immutable")

    def serve_http(self, rw, request):
        self.handler.serve_http(rw, request, self.next.serve_http)

    def __iter__(self):
        ''' Yield the handlers from this node to the end of the chain '''
        node = self
        while node is not VOID:
            yield node.handler
            node = node.next

    def __repr__(self):
        return "Middleware({!r})".format(self.handler)


def _void(rw, request, next):
    pass


# The terminal node's continuation is itself, so calling `next`
# past the end of a chain is a no-op instead of an error.
VOID = Middleware(HandlerFunc(_void), None)
object.__setattr__(VOID, "next", VOID)


def build(handlers):
    '''
    Compile an ordered sequence of handlers into a chain.

    The chain is built back to front so every node's `next` exists before
    the node itself.  An empty sequence compiles to VOID.
    '''
    node = VOID
    for handler in reversed(handlers):
        node = Middleware(handler, node)
    logger.debug("built chain of {} handlers".format(len(handlers)))
    return node
