import email.utils
import os
import pytest
from wsgistack import wsgi
from wsgistack.response import ResponseWriter
from wsgistack.static import Static, clean_path, modified_since


@pytest.fixture
def public(tmp_path):
    '''
    public/
        index.html
        app.js
        docs/
            index.html
        empty/
    '''
    (tmp_path / "index.html").write_text("<h1>home</h1>")
    (tmp_path / "app.js").write_text("console.log(1);")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "index.html").write_text("<h1>docs</h1>")
    (tmp_path / "empty").mkdir()
    return tmp_path


@pytest.fixture
def serve(public, start_response, request_for):
    '''
    Run a request through Static and report what happened.

    Returns (rw, body, continued)
    '''
    def run(path, method="GET", static=None, **environ):
        static = static or Static(str(public))
        response = wsgi.Response(start_response)
        rw = ResponseWriter(response)
        continued = []
        static.serve_http(rw, request_for(method, path, **environ),
                          lambda rw, request: continued.append(True))
        result = response.send()
        body = b"".join(result)
        if hasattr(result, "close"):
            result.close()
        return rw, body, bool(continued)
    return run


def test_serves_file(serve, start_response):
    rw, body, continued = serve("/app.js")
    assert not continued
    assert rw.status == 200
    assert body == b"console.log(1);"
    headers = dict(start_response.headers)
    assert headers["Content-Length"] == "15"
    assert "javascript" in headers["Content-Type"]
    assert "Last-Modified" in headers


def test_serves_index(serve):
    rw, body, continued = serve("/")
    assert body == b"<h1>home</h1>"
    rw, body, continued = serve("/docs/")
    assert body == b"<h1>docs</h1>"


def test_directory_redirect(serve, start_response):
    rw, body, continued = serve("/docs")
    assert rw.status == 302
    assert ("Location", "/docs/") in start_response.headers
    assert not continued


def test_directory_without_index_continues(serve):
    rw, body, continued = serve("/empty/")
    assert continued
    assert not rw.written()


def test_missing_continues(serve):
    rw, body, continued = serve("/nope.css")
    assert continued
    assert not rw.written()


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
def test_other_methods_continue(serve, method):
    rw, body, continued = serve("/app.js", method=method)
    assert continued
    assert not rw.written()


def test_head_has_no_body(serve, start_response):
    rw, body, continued = serve("/app.js", method="HEAD")
    assert rw.status == 200
    assert body == b""
    assert ("Content-Length", "15") in start_response.headers


def test_cannot_escape_directory(public, serve):
    (public / "secret.txt").write_text("secret")
    static = Static(str(public / "docs"))
    rw, body, continued = serve("/../secret.txt", static=static)
    assert continued
    assert body == b""


def test_prefix(public, serve):
    static = Static(str(public), prefix="/static/")
    rw, body, continued = serve("/static/app.js", static=static)
    assert body == b"console.log(1);"


@pytest.mark.parametrize("path", ["/app.js", "/staticfoo/app.js"])
def test_prefix_mismatch_continues(public, serve, path):
    static = Static(str(public), prefix="/static")
    rw, body, continued = serve(path, static=static)
    assert continued


def test_not_modified(public, serve):
    mtime = os.stat(public / "app.js").st_mtime
    since = email.utils.formatdate(mtime + 60, usegmt=True)
    rw, body, continued = serve("/app.js", HTTP_IF_MODIFIED_SINCE=since)
    assert rw.status == 304
    assert body == b""


def test_modified(public, serve):
    mtime = os.stat(public / "app.js").st_mtime
    since = email.utils.formatdate(mtime - 60, usegmt=True)
    rw, body, continued = serve("/app.js", HTTP_IF_MODIFIED_SINCE=since)
    assert rw.status == 200


def test_clean_path():
    assert clean_path("") == "/"
    assert clean_path("/a/./b/../c") == "/a/c"
    assert clean_path("/../../etc/passwd") == "/etc/passwd"
    assert clean_path("//double") == "/double"


def test_modified_since_bad_header():
    assert modified_since(None, 0)
    assert modified_since("not a date", 0)


def test_file_is_streamed(public, start_response, request_for):
    ''' Files go out through the file wrapper instead of being buffered '''
    wrapped = []

    def file_wrapper(file, block_size):
        wrapped.append(file)
        return iter(lambda: file.read(block_size), b"")

    response = wsgi.Response(start_response, file_wrapper)
    rw = ResponseWriter(response)
    Static(str(public)).serve_http(rw, request_for("GET", "/app.js"),
                                   lambda rw, request: None)
    assert response._body == []
    assert rw.size == 15

    body = b"".join(response.send())
    assert body == b"console.log(1);"
    assert len(wrapped) == 1
    wrapped[0].close()
