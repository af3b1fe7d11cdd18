""" A class representation of a job reserved or peeked from a server.
"""


class Job:
    """ A :class:`Job` pairs a server-assigned *id* with the job body,
        *data*, as bytes. If the job was retrieved through a
        :class:`beanstalk.Client` the *client* is retained, so that the
        usual follow-up commands can be issued directly on the job.
    """

    def __init__(self, id, data, client=None):

        self.id = int(id)
        self.data = data
        self.client = client


    def __eq__(self, other):
        if isinstance(other, Job):
            return self.id == other.id and self.data == other.data
        return NotImplemented


    def __hash__(self):
        return hash((self.id, self.data))


    def __repr__(self):
        return 'Job(%d, %r)' % (self.id, self.data)


    def _client(self):
        if self.client is None:
            raise RuntimeError('job %d is not associated with a client' % (self.id))
        return self.client


    def delete(self):
        return self._client().delete(self.id)


    def release(self, *args, **kwargs):
        return self._client().release(self.id, *args, **kwargs)


    def bury(self, *args, **kwargs):
        return self._client().bury(self.id, *args, **kwargs)


    def touch(self):
        return self._client().touch(self.id)


    def kick(self):
        return self._client().kick_job(self.id)


    def stats(self):
        return self._client().stats_job(self.id)


# end of class Job


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
