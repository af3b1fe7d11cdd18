""" The :class:`Request` describes a single protocol transaction: what to
    send, which status keywords to expect back, and how to interpret any
    block of data following the status line.
"""

from . import fields


def _statuses(statuses):
    """ Normalize the *statuses* argument to a frozenset. A single string is
        accepted as shorthand for a one-element set; None is the empty set.
    """

    if statuses is None:
        return frozenset()

    if isinstance(statuses, str):
        statuses = (statuses,)

    statuses = frozenset(statuses)

    for status in statuses:
        if status == '' or status != status.upper():
            raise ValueError('status keywords are upper case: ' + repr(status))

    return statuses



class Request:
    """ A :class:`Request` is an immutable description of one transaction.
        The *command* is the fully formatted command line, without the line
        terminator. The *ok* statuses are those signifying success; *error*
        statuses are defined, non-exceptional failures for this particular
        command. Any other status is either a server error or a protocol
        violation, see :class:`beanstalk.transport.session.ProtocolHandler`.

        A *payload* is sent verbatim after the command line; its length must
        already be encoded in the command, as it is for ``put``. Commands
        that send a payload never expect a block in return.

        The *shape* is one of the shapes defined in :mod:`fields`, and
        controls how a block following a successful status line is read.
        The byte count of that block is found in the status line tokens
        following the status keyword; *length_field* is the index into
        those tokens, and defaults to the last token.

        :ivar command: The command line, as a string.
        :ivar ok: A frozenset of success status keywords.
        :ivar error: A frozenset of defined failure status keywords.
        :ivar payload: The bytes to send after the command line, or None.
        :ivar shape: The expected shape of the reply.
        :ivar length_field: Index of the byte count token, or None.
    """

    __slots__ = ('command', 'ok', 'error', 'payload', 'shape', 'length_field')

    def __init__(self, command, ok, error=None, payload=None, shape=fields.NONE, length_field=None):

        if not command:
            raise ValueError('the command line must not be empty')

        if '\r' in command or '\n' in command:
            raise ValueError('the command line must not contain a line terminator')

        ok = _statuses(ok)
        error = _statuses(error)

        if len(ok) == 0:
            raise ValueError('at least one success status is required')

        overlap = ok & error
        if overlap:
            raise ValueError('statuses cannot be both success and error: ' + ', '.join(sorted(overlap)))

        if shape not in fields.SHAPES:
            raise ValueError('invalid reply shape: ' + repr(shape))

        if payload is not None:
            if shape != fields.NONE:
                raise ValueError('a request with a payload cannot expect a data block')
            payload = bytes(payload)

        if length_field is not None:
            if shape == fields.NONE:
                raise ValueError('length_field requires a reply shape with a data block')
            length_field = int(length_field)
            if length_field < 0:
                raise ValueError('length_field must be non-negative')

        object.__setattr__(self, 'command', command)
        object.__setattr__(self, 'ok', ok)
        object.__setattr__(self, 'error', error)
        object.__setattr__(self, 'payload', payload)
        object.__setattr__(self, 'shape', shape)
        object.__setattr__(self, 'length_field', length_field)


    def __setattr__(self, name, value):
        raise AttributeError('Request instances are immutable')


    def __delattr__(self, name):
        raise AttributeError('Request instances are immutable')


    def __repr__(self):
        return 'Request(%r, ok=%s, error=%s, shape=%s)' % (self.command, sorted(self.ok), sorted(self.error), self.shape)


    def encode(self):
        """ Return the bytes to put on the wire for this request: the command
            line, its terminator, and the payload (with its own terminator)
            if there is one.
        """

        encoded = self.command.encode() + fields.CRLF

        if self.payload is not None:
            encoded += self.payload + fields.CRLF

        return encoded


# end of class Request


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
