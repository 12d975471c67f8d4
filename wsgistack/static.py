import email.utils
import logging
import mimetypes
import os
import posixpath
from .handler import Handler
logger = logging.getLogger(__name__)


def clean_path(path):
    """
    Collapse `.` and `..` segments so the result can't climb above "/"

    >>> clean_path("/css/../../etc/passwd")
    '/etc/passwd'
    """
    cleaned = posixpath.normpath("/" + path)
    # normpath keeps a leading "//"
    return "/" + cleaned.lstrip("/")


class Static(Handler):
    """
    Serves files under `directory` for GET and HEAD requests.

    Anything that doesn't map to a file is handed to the rest of the stack,
    so Static can sit in front of an application without hiding its routes.

    `prefix` restricts Static to paths under a url prefix, which is stripped
    before looking up the file:

        Static("assets", prefix="/static")   # /static/app.js -> assets/app.js
    """
    def __init__(self, directory="public", prefix="", index_file="index.html"):
        self.directory = directory
        self.prefix = prefix.rstrip("/")
        self.index_file = index_file

    def serve_http(self, rw, request, next):
        if request.method not in ("GET", "HEAD"):
            next(rw, request)
            return

        path = request.path
        if self.prefix:
            if not path.startswith(self.prefix):
                next(rw, request)
                return
            path = path[len(self.prefix):]
            if path and not path.startswith("/"):
                next(rw, request)
                return

        filename = self.resolve(path)
        if not os.path.exists(filename):
            next(rw, request)
            return

        if os.path.isdir(filename):
            # Redirect so relative links inside the index resolve correctly
            if not request.path.endswith("/"):
                rw.headers["Location"] = request.path + "/"
                rw.write_header(302)
                return
            filename = os.path.join(filename, self.index_file)
            if not os.path.isfile(filename):
                next(rw, request)
                return

        self.serve_file(rw, request, filename)

    def resolve(self, path):
        ''' url path -> filesystem path under self.directory '''
        parts = [part for part in clean_path(path).split("/") if part]
        return os.path.join(self.directory, *parts)

    def serve_file(self, rw, request, filename):
        stat = os.stat(filename)
        last_modified = email.utils.formatdate(stat.st_mtime, usegmt=True)
        if not modified_since(request.header("If-Modified-Since"),
                              stat.st_mtime):
            rw.write_header(304)
            return

        content_type, encoding = mimetypes.guess_type(filename)
        rw.headers["Content-Type"] = content_type or "application/octet-stream"
        if encoding:
            rw.headers["Content-Encoding"] = encoding
        rw.headers["Content-Length"] = str(stat.st_size)
        rw.headers["Last-Modified"] = last_modified
        logger.debug("serving {}".format(filename))

        rw.write_header(200)
        if request.method == "HEAD":
            return
        # The response streams and closes the file
        rw.write_file(open(filename, "rb"), stat.st_size)


def modified_since(header, mtime):
    ''' False only when the header parses and is no older than mtime '''
    if not header:
        return True
    try:
        since = email.utils.parsedate_to_datetime(header)
    except (TypeError, ValueError):
        return True
    if since is None:
        return True
    # Last-Modified has one second resolution
    return int(mtime) > since.timestamp()
