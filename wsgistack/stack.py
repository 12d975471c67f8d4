from . import chain
from . import common
from . import server as servers
from . import wsgi
from .handler import HandlerFunc, PlainHandlerFunc, wrap
from .logger import Logger
from .recovery import Recovery
from .response import ResponseWriter
from .static import Static


class Stack(object):
    """
    An ordered stack of handlers that is itself a WSGI application.

    Handlers run in the order they were added.  Each one decides whether
    the rest of the stack runs by calling (or not calling) `next`:

        def hello(rw, request, next):
            rw.write("Hello, World!")

        stack = Stack.classic()
        stack.use_func(hello)
        stack.run(":3000")

    Configure the stack before serving traffic; `use` is not safe to call
    while requests are in flight.
    """
    def __init__(self, *handlers):
        self._handlers = list(handlers)
        self._middleware = chain.build(self._handlers)

    @classmethod
    def classic(cls, directory="public"):
        '''
        Stack with the default handlers already in place:

        Recovery - exception recovery
        Logger - request/response logging
        Static - static file serving from `directory`
        '''
        return cls(Recovery(), Logger(), Static(directory))

    @classmethod
    def from_config(cls, config):
        ''' Classic stack using the "static" section of a config dict '''
        config = common.load_defaults(config)
        static = config["static"]
        return cls(Recovery(), Logger(), Static(**static))

    @property
    def middleware(self):
        ''' Head of the current chain '''
        return self._middleware

    def handlers(self):
        ''' Snapshot of the handlers in the order they run '''
        return tuple(self._handlers)

    def use(self, handler):
        ''' Add a handler to the end of the stack '''
        if handler is None:
            raise ValueError("handler cannot be None")
        if not callable(getattr(handler, "serve_http", None)):
            raise TypeError(
                "handler must implement serve_http(rw, request, next): "
                "{!r}".format(handler))
        self._handlers.append(handler)
        self._middleware = chain.build(self._handlers)
        return handler

    def use_func(self, func):
        ''' Add a function taking (rw, request, next).  Usable as a decorator '''
        require_callable(func)
        self.use(HandlerFunc(func))
        return func

    def use_handler(self, plain):
        '''
        Add an object with serve_http(rw, request).
        The rest of the stack always runs after it.
        '''
        if plain is None:
            raise ValueError("handler cannot be None")
        if not callable(getattr(plain, "serve_http", None)):
            raise TypeError(
                "handler must implement serve_http(rw, request): "
                "{!r}".format(plain))
        self.use(wrap(plain))
        return plain

    def use_handler_func(self, func):
        ''' Add a function taking (rw, request).  Usable as a decorator '''
        require_callable(func)
        self.use_handler(PlainHandlerFunc(func))
        return func

    def serve_http(self, rw, request):
        if not isinstance(rw, ResponseWriter):
            rw = ResponseWriter(rw)
        self._middleware.serve_http(rw, request)

    def __call__(self, environ, start_response):
        """WSGI-interface."""
        request = wsgi.Request(environ)
        response = wsgi.Response(
            start_response, environ.get("wsgi.file_wrapper"))
        self.serve_http(response, request)
        return response.send()

    def run(self, addr=None, timeout=None):
        '''
        Serve forever on addr ("host:port").
        timeout is the per-connection socket timeout in seconds
        '''
        addr = addr or common.DEFAULT_CONFIG["addr"]
        self.run_server(servers.Server(addr, timeout=timeout))

    def run_tls(self, addr, certfile, keyfile, timeout=None):
        self.run_server_tls(
            servers.Server(addr, timeout=timeout), certfile, keyfile)

    def run_server(self, server):
        ''' Serve forever using a preconfigured wsgiref-style server '''
        servers.logger.info("listening on {}".format(server_addr(server)))
        server.set_app(self)
        server.serve_forever()

    def run_server_tls(self, server, certfile, keyfile):
        servers.logger.info(
            "listening on {}, certFile at {}, keyFile at {}".format(
                server_addr(server), certfile, keyfile))
        servers.wrap_tls(server, certfile, keyfile)
        server.set_app(self)
        server.serve_forever()


def server_addr(server):
    host, port = server.server_address[:2]
    return "{}:{}".format(host, port)


def require_callable(func):
    if func is None:
        raise ValueError("handler cannot be None")
    if not callable(func):
        raise TypeError("handler must be callable: {!r}".format(func))
