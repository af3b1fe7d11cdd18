"""Transport-agnostic session layer.

A :class:`ProtocolHandler` runs one request/response transaction at a time
over a :class:`~beanstalk.transport.base.Transport` it owns.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional, Tuple

from ..protocol import fields
from ..protocol.errors import ProtocolError, ServerError, UnexpectedResponse
from ..protocol.request import Request
from ..protocol.response import Response
from . import codec
from .base import Transport, TransportError


logger = logging.getLogger(__name__)


class ProtocolHandler:
    """Client-side request/response logic for a single connection.

    Every transaction writes the request in full, reads the status line, and
    reads the data block if, and only if, the status is a success status and
    the request expects one. Nothing is left unread in between transactions,
    so the next status line always starts at the next byte on the wire.

    A transport or framing failure leaves the byte stream in an unknown
    position: the transport is closed and the handler is marked unusable.
    It never reconnects on its own; the owning connection policy replaces it.
    """

    def __init__(self, transport: Transport):
        self.transport = transport
        self.usable = True
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        state = "usable" if self.usable else "unusable"
        return f"<ProtocolHandler {self.transport!r} {state}>"

    def close(self) -> None:
        self.usable = False
        self.transport.close()

    def process_request(self, request: Request) -> Response:
        with self._lock:
            if not self.usable:
                raise ProtocolError("connection is no longer usable; a new handler is required")

            try:
                return self._transact(request)
            except ServerError:
                # A complete, recognized reply; the stream is still in sync.
                raise
            except (TransportError, ProtocolError) as exc:
                logger.warning("invalidating connection after %r failed: %s", request.command, exc)
                self.close()
                raise

    # --- internal ---
    def _transact(self, request: Request) -> Response:
        self.transport.write(request.encode())

        status, tokens = self._status_line()
        logger.debug("%s -> %s %s", request.command, status, " ".join(tokens))

        if status not in request.ok:
            if status in request.error:
                return Response(request, status, tokens)
            if status in fields.SERVER_ERRORS:
                raise ServerError(status, request.command)
            raise UnexpectedResponse(status, request.command)

        if request.shape == fields.NONE:
            return Response(request, status, tokens)

        length = self._length(request, tokens)
        block = self.transport.read(length)

        terminator = self.transport.read(len(fields.CRLF))
        if terminator != fields.CRLF:
            raise ProtocolError(f"data block of {length} bytes not followed by CRLF: {terminator!r}")

        data = codec.decode(request.shape, block)
        return Response(request, status, tokens, data)

    def _status_line(self) -> Tuple[str, Tuple[str, ...]]:
        line = self.transport.readline()

        try:
            line = line.decode("ascii")
        except UnicodeDecodeError as exc:
            raise ProtocolError(f"status line is not ASCII: {line!r}") from exc

        parts = line.split()
        if len(parts) == 0:
            raise ProtocolError("empty status line")

        return parts[0], tuple(parts[1:])

    def _length(self, request: Request, tokens: Tuple[str, ...]) -> int:
        index: Optional[int] = request.length_field

        try:
            if index is None:
                field = tokens[-1]
            else:
                field = tokens[index]
        except IndexError:
            raise ProtocolError(
                f"{request.command!r} reply has no byte count field: {tokens!r}"
            ) from None

        if not field.isdigit():
            raise ProtocolError(f"{request.command!r} reply has an invalid byte count: {field!r}")

        return int(field)
