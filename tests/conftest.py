import socketserver
import threading

import pytest

import beanstalk
from beanstalk.transport import Transport, TransportConnectionError


class Scripted(Transport):
    """ In-memory transport: replies are queued up front, everything written
        is recorded, and reading past the end of the script behaves like a
        server hanging up.
    """

    def __init__(self, *replies):
        self.incoming = bytearray(b''.join(replies))
        self.written = list()
        self.closed = False
        self.consumed = 0

    def open(self):
        pass

    def close(self):
        self.closed = True

    @property
    def is_open(self):
        return not self.closed

    def write(self, data):
        if self.closed:
            raise TransportConnectionError('closed')
        self.written.append(bytes(data))

    def readline(self, timeout=None):
        end = self.incoming.find(b'\r\n')
        if self.closed or end < 0:
            raise TransportConnectionError('end of stream')
        line = bytes(self.incoming[:end])
        del self.incoming[:end + 2]
        self.consumed += end + 2
        return line

    def read(self, count, timeout=None):
        if self.closed or len(self.incoming) < count:
            raise TransportConnectionError('end of stream')
        data = bytes(self.incoming[:count])
        del self.incoming[:count]
        self.consumed += count
        return data


@pytest.fixture
def scripted():
    return Scripted


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """ Keep the developer's own configuration file and environment out of
        every test.
    """

    for variable in ('BEANSTALK_HOST', 'BEANSTALK_PORT', 'BEANSTALK_PER_THREAD'):
        monkeypatch.delenv(variable, raising=False)

    monkeypatch.setenv('BEANSTALK_HOME', str(tmp_path))
    monkeypatch.setattr(beanstalk.config.directory, 'found', None)

    yield tmp_path


class FakeBeanstalkd(socketserver.ThreadingMixIn, socketserver.TCPServer):
    """ Just enough of a beanstalkd server to exercise a real connection:
        a single tube, put, reserve, delete, peek, and list-tubes.
    """

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self):
        socketserver.TCPServer.__init__(self, ('127.0.0.1', 0), _FakeHandler)
        self.jobs = dict()
        self.ready = list()
        self.next_id = 1
        self.lock = threading.Condition()


class _FakeHandler(socketserver.StreamRequestHandler):

    def handle(self):
        while True:
            line = self.rfile.readline()
            if line == b'':
                return

            words = line.decode().split()
            if not words:
                continue

            if words[0] == 'quit':
                return

            reply = self.dispatch(words)
            self.wfile.write(reply)
            self.wfile.flush()

    def dispatch(self, words):
        server = self.server
        verb = words[0]

        if verb == 'put':
            size = int(words[4])
            body = self.rfile.read(size + 2)[:size]
            with server.lock:
                job_id = server.next_id
                server.next_id += 1
                server.jobs[job_id] = body
                server.ready.append(job_id)
                server.lock.notify_all()
            return b'INSERTED %d\r\n' % (job_id)

        if verb in ('reserve', 'reserve-with-timeout'):
            timeout = None
            if verb == 'reserve-with-timeout':
                timeout = int(words[1])
            with server.lock:
                if not server.lock.wait_for(lambda: server.ready, timeout):
                    return b'TIMED_OUT\r\n'
                job_id = server.ready.pop(0)
                body = server.jobs[job_id]
            return b'RESERVED %d %d\r\n' % (job_id, len(body)) + body + b'\r\n'

        if verb == 'peek':
            job_id = int(words[1])
            with server.lock:
                body = server.jobs.get(job_id)
            if body is None:
                return b'NOT_FOUND\r\n'
            return b'FOUND %d %d\r\n' % (job_id, len(body)) + body + b'\r\n'

        if verb == 'delete':
            job_id = int(words[1])
            with server.lock:
                body = server.jobs.pop(job_id, None)
                if job_id in server.ready:
                    server.ready.remove(job_id)
            if body is None:
                return b'NOT_FOUND\r\n'
            return b'DELETED\r\n'

        if verb == 'list-tubes':
            block = b'---\n- default\n'
            return b'OK %d\r\n' % (len(block)) + block + b'\r\n'

        return b'UNKNOWN_COMMAND\r\n'


@pytest.fixture
def beanstalkd():
    server = FakeBeanstalkd()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield server

    server.shutdown()
    server.server_close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
