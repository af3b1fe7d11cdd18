"""Transport interface.

This is the (small) contract that transport implementations should follow.
A transport moves bytes and nothing else; all parsing happens in
:mod:`beanstalk.transport.session`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A read or connection attempt did not complete in time."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class Transport(ABC):
    """Minimal contract for a byte-stream transport."""

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection. Calling this more than once,
        or from a thread other than the one blocked in a read, is allowed.
        """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Send *data* in full."""

    @abstractmethod
    def readline(self, timeout: Optional[float] = None) -> bytes:
        """Return the next CRLF-terminated line, without the terminator."""

    @abstractmethod
    def read(self, count: int, timeout: Optional[float] = None) -> bytes:
        """Return exactly *count* bytes."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
