import http.client
import logging
import wsgiref.headers
import wsgiref.util
from .common import Container
logger = logging.getLogger(__name__)

HTTP_CODES = {i[0]: "{} {}".format(*i) for i in http.client.responses.items()}
DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"
FILE_BLOCK_SIZE = 64 * 1024


def status_line(status):
    """ 200 -> '200 OK', falling back to the bare code for unknown statuses """
    return HTTP_CODES.get(status, "{} Unknown".format(status))


def content_length(environ):
    """ Returns the content length, or -1 if none is provided """
    try:
        return int(environ.get('CONTENT_LENGTH') or -1)
    except ValueError:
        return -1


class Request(object):
    """
    Read-only view over a WSGI environ.

    `context` is a per-request Container that handlers can use to pass
    values further down the stack:

        def auth(rw, request, next):
            request.context.user = lookup(request.header("Authorization"))
            next(rw, request)
    """
    def __init__(self, environ):
        self.environ = environ
        self.context = Container()
        self._body = None

    @property
    def method(self):
        return self.environ.get("REQUEST_METHOD", "GET").upper()

    @property
    def path(self):
        return self.environ.get("PATH_INFO") or "/"

    @property
    def query_string(self):
        return self.environ.get("QUERY_STRING", "")

    @property
    def remote_addr(self):
        return self.environ.get("REMOTE_ADDR", "")

    def header(self, name, default=None):
        key = name.upper().replace("-", "_")
        if key in ("CONTENT_TYPE", "CONTENT_LENGTH"):
            return self.environ.get(key) or default
        return self.environ.get("HTTP_" + key, default)

    @property
    def body(self):
        ''' Raw request body as bytes.  Safe to read more than once. '''
        if self._body is None:
            stream = self.environ.get("wsgi.input")
            length = content_length(self.environ)
            if stream is None or length <= 0:
                self._body = b""
            else:
                self._body = stream.read(length)
        return self._body

    def __repr__(self):
        return "Request({} {})".format(self.method, self.path)


class Response(object):
    """
    Buffered response sink for a single WSGI call.

    Nothing reaches the server until `send`, which starts the response
    and returns the WSGI body iterable:

        def application(environ, start_response):
            response = Response(start_response)
            response.write("Hello, World!")
            return response.send()

    The status can only be set once.  Headers changed after the status
    is written are not sent.

    Files passed to `write_file` are not buffered; `send` hands them to
    the server through `file_wrapper` (the environ's wsgi.file_wrapper)
    so they're streamed after the response starts.
    """
    def __init__(self, start_response, file_wrapper=None):
        self.start_response = start_response
        self.file_wrapper = file_wrapper or wsgiref.util.FileWrapper
        self._file = None
        self._file_length = 0
        self.headers = wsgiref.headers.Headers([])
        self.status = None
        self._sent_headers = None
        self._body = []

    def write_header(self, status):
        if self.status is not None:
            logger.debug(
                "superfluous write_header({}), status already {}".format(
                    status, self.status))
            return
        self.status = status
        self._sent_headers = wsgiref.headers.Headers(self.headers.items())

    def write(self, data):
        '''str is encoded as UTF-8.  Returns the number of bytes written'''
        if isinstance(data, str):
            data = data.encode("UTF-8")
        if self.status is None:
            self.write_header(200)
        if data:
            self._buffer_file()
            self._body.append(data)
        return len(data)

    def write_file(self, file, length):
        '''
        Use the rest of an open binary file as the body.  The response owns
        `file` from here on and closes it.  Returns length
        '''
        if self.status is None:
            self.write_header(200)
        if self._body or self._file is not None:
            # Something is already queued, keep the body in order
            self._buffer_file()
            with file:
                self._body.append(file.read())
            return length
        self._file = file
        self._file_length = length
        return length

    def _buffer_file(self):
        if self._file is None:
            return
        with self._file as file:
            self._body.append(file.read())
        self._file = None
        self._file_length = 0

    def send(self):
        ''' Start the response and return the raw body '''
        if self.status is None:
            self.write_header(200)
        headers = self._sent_headers
        length = sum(len(part) for part in self._body) + self._file_length
        if length and "Content-Type" not in headers:
            headers["Content-Type"] = DEFAULT_CONTENT_TYPE
        if "Content-Length" not in headers:
            headers["Content-Length"] = str(length)
        self.start_response(status_line(self.status), headers.items())
        if self._file is not None:
            return self.file_wrapper(self._file, FILE_BLOCK_SIZE)
        return self._body
