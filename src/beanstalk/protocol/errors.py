"""Protocol-level exceptions.

Defined negative outcomes (a ``NOT_FOUND`` for a ``delete``, for example)
are never raised here; they come back as a :class:`Response` whose
``is_match_error`` is True. These classes cover everything else.
"""


class BeanstalkError(Exception):
    """Base class for all protocol and server errors."""


class ProtocolError(BeanstalkError):
    """A reply could not be parsed; the connection is out of sync."""


class UnexpectedResponse(ProtocolError):
    """The status keyword is not one this client knows about."""

    def __init__(self, status, command=None):
        self.status = status
        self.command = command

        if command is None:
            message = 'unexpected response: ' + repr(status)
        else:
            message = 'unexpected response to %r: %r' % (command, status)

        ProtocolError.__init__(self, message)


class ServerError(ProtocolError):
    """The server answered with a known error keyword the request does not
        accept as an outcome. The reply was read in full, so the connection
        remains usable.
    """

    def __init__(self, status, command=None):
        self.status = status
        self.command = command

        if command is None:
            message = status
        else:
            message = '%s: %s' % (command, status)

        ProtocolError.__init__(self, message)


class JobTooBig(ServerError):
    """The job body is larger than the server's ``max-job-size``."""


class Draining(ServerError):
    """The server is in drain mode and is no longer accepting new jobs."""


class DeadlineSoon(ServerError):
    """A job reserved by this connection is about to exceed its TTR."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
