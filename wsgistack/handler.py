"""
Handlers are the units a Stack is built from.

A handler is any object with a `serve_http(rw, request, next)` method.
To hand the request to the rest of the stack, call `next(rw, request)`.
If the handler writes to `rw` it should not call `next` afterwards.
"""
import functools
import types


class Handler(object):
    def serve_http(self, rw, request, next):
        raise NotImplementedError(
            "{} must implement serve_http".format(self.__class__.__name__))


class HandlerFunc(Handler):
    """
    Adapter so an ordinary function can be used as a Handler.

    func is invoked as func(rw, request, next)
    """
    def __init__(self, func):
        self.func = func
        functools.update_wrapper(self, func)

    def serve_http(self, rw, request, next):
        self.func(rw, request, next)

    def __repr__(self):
        return "HandlerFunc({!r})".format(self.func)


class PlainHandlerFunc(object):
    """ Adapter for a function that takes (rw, request) and knows nothing
    about the rest of the stack """
    def __init__(self, func):
        self.func = func
        functools.update_wrapper(self, func)

    def serve_http(self, rw, request):
        self.func(rw, request)


def wrap(plain):
    '''
    Convert an object with `serve_http(rw, request)` into a Handler.

    The rest of the stack is always invoked after `plain` runs.
    '''
    def serve_http(rw, request, next):
        plain.serve_http(rw, request)
        next(rw, request)
    return HandlerFunc(serve_http)


def handler(func):
    '''
    Decorator for creating handlers out of generator functions
    Similar in usage to the @contextmanager decorator

    Typical usage:

        @handler
        def timer(rw, request):
            # Before the rest of the handlers execute
            start = time.monotonic()

            # Process the request
            yield

            # After the rest of the handlers execute
            elapsed = time.monotonic() - start
            logger.info("%s took %.3fs", request.path, elapsed)

    The rest of the handlers in a stack are executed when control is yielded.
    Returning without yielding stops the request at this handler.
    '''
    def serve_http(rw, request, next_handler):
        gen = func(rw, request)

        # Not a generator, so the function already ran to completion.
        # For whatever reason, the handler terminated the request
        if not isinstance(gen, types.GeneratorType):
            return

        try:
            next(gen)
        except StopIteration:
            return

        try:
            next_handler(rw, request)
        except Exception as exception:
            # Let any except/finally blocks in the handler run against
            # whatever was raised further down the stack
            try:
                gen.throw(exception)
            except StopIteration:
                return
        else:
            try:
                next(gen)
            except StopIteration:
                return

        # Found another yield, which doesn't make sense
        raise RuntimeError("handler didn't stop")

    functools.update_wrapper(serve_http, func)
    return HandlerFunc(serve_http)
