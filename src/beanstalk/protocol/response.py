""" The :class:`Response` is the parsed form of a server reply.
"""


class Response:
    """ A :class:`Response` holds the status keyword of a reply, the
        remaining whitespace-separated *tokens* of the status line, and the
        decoded *data* block, if any. The *request* that produced the reply
        is retained so that the status can be interpreted against it.

        The *data* is None unless the status is a success status and the
        request expected a block; otherwise it is bytes, a list of strings,
        or a dictionary of strings, according to the request shape.
    """

    __slots__ = ('request', 'status', 'tokens', 'data')

    def __init__(self, request, status, tokens=(), data=None):

        object.__setattr__(self, 'request', request)
        object.__setattr__(self, 'status', status)
        object.__setattr__(self, 'tokens', tuple(tokens))
        object.__setattr__(self, 'data', data)


    def __setattr__(self, name, value):
        raise AttributeError('Response instances are immutable')


    def __delattr__(self, name):
        raise AttributeError('Response instances are immutable')


    def __repr__(self):
        line = ' '.join((self.status,) + self.tokens)

        if self.data is None:
            return 'Response(%r)' % (line)
        else:
            return 'Response(%r, data=%r)' % (line, self.data)


    @property
    def is_match_ok(self):
        """ True if the status is one of the request's success statuses.
        """

        return self.status in self.request.ok


    @property
    def is_match_error(self):
        """ True if the status is one of the request's defined failures.
        """

        return self.status in self.request.error


    @property
    def response(self):
        """ The first token after the status keyword, typically a job id,
            a count, or a tube name; None if the status line has no tokens.
        """

        try:
            return self.tokens[0]
        except IndexError:
            return None


# end of class Response


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
