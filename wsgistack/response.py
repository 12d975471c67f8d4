class ResponseWriter(object):
    """
    Wraps a response sink and records what was written to it.

    Every request runs through the stack with one of these in place of
    the raw response, so handlers further up (such as Logger) can inspect
    the outcome once the rest of the stack returns.

    `status` is 0 until something has been written.
    """
    def __init__(self, rw):
        self.rw = rw
        self.status = 0
        self.size = 0

    @property
    def headers(self):
        return self.rw.headers

    def write_header(self, status):
        if not self.written():
            self.status = status
        self.rw.write_header(status)

    def write(self, data):
        if not self.written():
            # No explicit status means 200
            self.write_header(200)
        size = self.rw.write(data)
        self.size += size
        return size

    def write_file(self, file, length):
        if not self.written():
            self.write_header(200)
        size = self.rw.write_file(file, length)
        self.size += size
        return size

    def written(self):
        return self.status != 0

    def __repr__(self):
        return "ResponseWriter(status={}, size={})".format(
            self.status, self.size)
