"""ZeroMQ STREAM transport.

A STREAM socket exchanges raw TCP data with a peer that does not speak the
ZeroMQ wire protocol, which is what a beanstalkd server is. Every message on
the socket carries two frames: the routing id of the peer, and the data.
A zero-length data frame announces that the connection was established, and
a second one announces that it was lost.

ZeroMQ sockets are not thread-safe. A :class:`Stream` serializes its own I/O
with a lock, and :meth:`Stream.close` called from another thread never
touches the socket directly while a read is in progress: the reading thread
notices the request within :attr:`Stream.poll_interval` seconds and closes
the socket itself.
"""

from __future__ import annotations

import atexit
import contextlib
import logging
import threading
import time
from typing import Iterator, Optional, Tuple

import zmq

from ...protocol.fields import CRLF
from ..base import Transport, TransportConnectionError, TransportTimeout


logger = logging.getLogger(__name__)

zmq_context = zmq.Context()


class Stream(Transport):
    """Buffered byte stream to a single server at *address* and *port*."""

    connect_timeout = 5.0
    poll_interval = 0.1

    def __init__(self, address: str, port: int):
        self.address = address
        self.port = int(port)

        self.socket: Optional[zmq.Socket] = None
        self._poller: Optional[zmq.Poller] = None
        self._peer: Optional[bytes] = None
        self._buffer = bytearray()
        self._lock = threading.Lock()
        self._closing = threading.Event()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<Stream {self.address}:{self.port} {state}>"

    @property
    def is_open(self) -> bool:
        return self.socket is not None and not self._closing.is_set()

    # --- connection management ---
    def open(self) -> None:
        if self._closing.is_set():
            raise TransportConnectionError("transport has been closed")
        if self.socket is not None:
            return

        server = f"tcp://{self.address}:{self.port}"

        socket = zmq_context.socket(zmq.STREAM)
        socket.setsockopt(zmq.LINGER, 0)

        try:
            socket.connect(server)
        except zmq.ZMQError as exc:
            socket.close(linger=0)
            raise TransportConnectionError(f"cannot connect to {server}: {exc}") from exc

        poller = zmq.Poller()
        poller.register(socket, zmq.POLLIN)

        with self._lock:
            self.socket = socket
            self._poller = poller

            # ZeroMQ retries refused connections quietly in the background;
            # the only evidence of success is the connection notification.

            deadline = time.monotonic() + self.connect_timeout
            try:
                peer, data = self._receive(deadline)
            except TransportTimeout as exc:
                self._shutdown()
                raise TransportConnectionError(
                    f"no connection to {server} in {self.connect_timeout:.2f} sec"
                ) from exc

            self._peer = peer
            self._buffer += data

        logger.debug("connected to %s", server)

    def close(self) -> None:
        self._closing.set()

        if self._lock.acquire(blocking=False):
            try:
                self._shutdown()
            finally:
                self._lock.release()

    # --- byte primitives ---
    def write(self, data: bytes) -> None:
        with self._io() as socket:
            try:
                socket.send_multipart((self._peer, data))
            except zmq.ZMQError as exc:
                self._shutdown()
                raise TransportConnectionError(
                    f"write to {self.address}:{self.port} failed: {exc}"
                ) from exc

    def readline(self, timeout: Optional[float] = None) -> bytes:
        deadline = _deadline(timeout)

        with self._io():
            while True:
                end = self._buffer.find(CRLF)
                if end >= 0:
                    line = bytes(self._buffer[:end])
                    del self._buffer[:end + len(CRLF)]
                    return line
                self._fill(deadline)

    def read(self, count: int, timeout: Optional[float] = None) -> bytes:
        if count < 0:
            raise ValueError(f"cannot read a negative byte count: {count}")

        deadline = _deadline(timeout)

        with self._io():
            while len(self._buffer) < count:
                self._fill(deadline)

            data = bytes(self._buffer[:count])
            del self._buffer[:count]
            return data

    # --- internal ---
    @contextlib.contextmanager
    def _io(self) -> Iterator[zmq.Socket]:
        with self._lock:
            try:
                if self._closing.is_set():
                    self._shutdown()
                    raise TransportConnectionError("transport has been closed")
                if self.socket is None:
                    raise TransportConnectionError("transport is not open")
                yield self.socket
            finally:
                if self._closing.is_set():
                    self._shutdown()

    def _fill(self, deadline: Optional[float]) -> None:
        _peer, data = self._receive(deadline)

        if data == b"":
            self._shutdown()
            raise TransportConnectionError(
                f"connection to {self.address}:{self.port} closed by server"
            )

        self._buffer += data

    def _receive(self, deadline: Optional[float]) -> Tuple[bytes, bytes]:
        """Wait for the next message on the socket. The caller holds the lock."""

        while True:
            if self._closing.is_set():
                self._shutdown()
                raise TransportConnectionError("transport has been closed")

            wait = self.poll_interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TransportTimeout(
                        f"no data from {self.address}:{self.port} before the deadline"
                    )
                wait = min(wait, remaining)

            try:
                ready = dict(self._poller.poll(wait * 1000))
                if self.socket in ready:
                    parts = self.socket.recv_multipart(zmq.NOBLOCK)
                    break
            except zmq.Again:
                continue
            except zmq.ZMQError as exc:
                self._shutdown()
                raise TransportConnectionError(
                    f"read from {self.address}:{self.port} failed: {exc}"
                ) from exc

        if len(parts) != 2:
            self._shutdown()
            raise TransportConnectionError(f"expected a 2-part message, received {len(parts)} parts")

        return parts[0], parts[1]

    def _shutdown(self) -> None:
        socket = self.socket
        if socket is None:
            return

        self.socket = None
        self._poller = None
        self._buffer.clear()
        socket.close(linger=0)

        logger.debug("closed connection to %s:%d", self.address, self.port)


def _deadline(timeout: Optional[float]) -> Optional[float]:
    if timeout is None:
        return None
    return time.monotonic() + timeout


def _cleanup() -> None:
    try:
        zmq_context.destroy(linger=0)
    except zmq.ZMQError:
        pass


atexit.register(_cleanup)
