import io
import pytest
from wsgistack import wsgi
from wsgistack.handler import Handler


@pytest.fixture
def start_response():
    ''' Function that stores status, headers on itself '''
    def func(status, headers):
        self.status = status
        self.headers = headers
    self = func
    self.status = None
    self.headers = None
    return func


@pytest.fixture
def environment():
    '''
    Function that returns an environ for the given method and path

    Usage:

    def test_foo(environment):
        environ = environment("POST", "/foo", body="Hello")
        assert environ["CONTENT_LENGTH"] == "5"
    '''
    def make(method="GET", path="/", body="", **extra):
        data = bytes(body, "utf8")
        environ = {
            "REQUEST_METHOD": method,
            "PATH_INFO": path,
            "QUERY_STRING": "",
            "REMOTE_ADDR": "127.0.0.1",
            "CONTENT_LENGTH": str(len(data)),
            "wsgi.input": io.BytesIO(data)
        }
        environ.update(extra)
        return environ
    return make


@pytest.fixture
def request_for(environment):
    ''' Build a wsgistack Request, same arguments as `environment` '''
    return lambda *args, **kwargs: wsgi.Request(environment(*args, **kwargs))


@pytest.fixture
def record():
    '''
    Factory for handlers that note their name in a shared list, optionally
    write something, and then optionally continue the chain.

    Usage:

    def test_foo(record):
        calls = []
        first = record("first", calls, write="1")
        last = record("last", calls, proceed=False)
    '''
    class Recorder(Handler):
        def __init__(self, name, calls, write=None, proceed=True):
            self.name = name
            self.calls = calls
            self.output = write
            self.proceed = proceed

        def serve_http(self, rw, request, next):
            self.calls.append(self.name)
            if self.output is not None:
                rw.write(self.output)
            if self.proceed:
                next(rw, request)

        def __repr__(self):
            return "Recorder({})".format(self.name)
    return Recorder


@pytest.fixture
def response(start_response):
    ''' Raw response sink bound to the start_response fixture '''
    return wsgi.Response(start_response)
