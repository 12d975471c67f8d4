"""
Threaded reference server for running a Stack.

wsgiref's server handles one request at a time; mixing in ThreadingMixIn
gives every request its own thread, which is the model the Stack expects.
"""
import logging
import socketserver
import ssl
import wsgiref.simple_server
from . import common
logger = logging.getLogger(__name__)


class RequestHandler(wsgiref.simple_server.WSGIRequestHandler):
    # Applied to the connection socket, covers both reads and writes
    timeout = common.DEFAULT_CONFIG["timeout"]

    def setup(self):
        # TLS handshakes happen here, on the request's own thread, so a
        # slow or idle peer can't hold up accept()
        if isinstance(self.request, ssl.SSLSocket):
            self.request.settimeout(self.timeout)
            self.request.do_handshake()
        super().setup()

    def log_message(self, format, *args):
        # wsgiref writes its access log to stderr
        logger.debug("%s - %s", self.address_string(), format % args)


class Server(socketserver.ThreadingMixIn, wsgiref.simple_server.WSGIServer):
    daemon_threads = True

    def __init__(self, addr, app=None, timeout=None,
                 handler_class=RequestHandler):
        if timeout is not None:
            handler_class = type(handler_class.__name__, (handler_class,),
                                 {"timeout": timeout})
        host, port = common.split_addr(addr)
        super().__init__((host, port), handler_class)
        if app is not None:
            self.set_app(app)

    def handle_error(self, request, client_address):
        # socketserver prints these to stderr
        logger.debug("error handling connection from {}".format(
            client_address), exc_info=True)


def wrap_tls(server, certfile, keyfile):
    '''
    Swap the listening socket for a TLS socket using the given pair.

    Accepted connections are handed off before the handshake; RequestHandler
    completes it on the connection's own thread.
    '''
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(certfile, keyfile)
    server.socket = context.wrap_socket(
        server.socket, server_side=True, do_handshake_on_connect=False)
    return server
