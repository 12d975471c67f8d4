__all__ = [
    "Stack", "Handler", "HandlerFunc", "PlainHandlerFunc", "handler", "wrap",
    "Recovery", "Logger", "Static", "Request", "Response", "ResponseWriter"
]

from .handler import Handler, HandlerFunc, PlainHandlerFunc, handler, wrap
from .logger import Logger
from .recovery import Recovery
from .response import ResponseWriter
from .stack import Stack
from .static import Static
from .wsgi import Request, Response
