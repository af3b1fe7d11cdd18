""" The :class:`Client` is the principal entry point: one method per queue
    command, each of which builds a request, hands it to the connection
    serving the calling thread, and reshapes the reply.

    Negative outcomes the protocol defines as normal, such as deleting a job
    that does not exist, are returned as False or None. Everything else is
    raised.
"""

from . import config
from . import policy
from .job import Job
from .protocol import errors
from .protocol import factory
from .protocol import fields


version = '1.0.0'


class Client:
    """ A client for a single beanstalkd server. The *host* and *port*
        default to the values resolved by :func:`beanstalk.config.settings`.
        If *per_thread* is True, the default, every thread using this client
        gets its own connection; if False, all threads share one connection
        and their commands are serialized.

        The *connect* argument is passed through to the connection
        :class:`beanstalk.policy.Policy`.
    """

    def __init__(self, host=None, port=None, per_thread=None, connect=None):

        settings = config.settings(host=host, port=port, per_thread=per_thread)

        self.host = settings['host']
        self.port = settings['port']
        self._connect = connect
        self.policy = self._policy(settings['per_thread'])


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def __repr__(self):
        return '<Client %s:%d %r>' % (self.host, self.port, self.policy)


    def _policy(self, per_thread):
        if per_thread:
            policy_class = policy.PerThread
        else:
            policy_class = policy.Shared

        return policy_class(self.host, self.port, self._connect)


    @property
    def unique_connection_per_thread(self):
        return isinstance(self.policy, policy.PerThread)


    @unique_connection_per_thread.setter
    def unique_connection_per_thread(self, per_thread):

        per_thread = config.boolean(per_thread)

        if per_thread == self.unique_connection_per_thread:
            return

        if self.policy.handlers():
            raise RuntimeError('the connection policy cannot change once connections exist')

        self.policy = self._policy(per_thread)


    def _process(self, request):
        return self.policy.handler().process_request(request)


    def _job(self, response):
        if response.is_match_ok:
            return Job(response.response, response.data, self)
        return None


    # Producer commands

    def put(self, data, priority=fields.DEFAULT_PRIORITY, delay=fields.DEFAULT_DELAY, ttr=fields.DEFAULT_TTR):
        """ Insert a job with the given *data* into the tube currently in
            use, and return its id. The job id is returned even if the server
            was out of memory and buried the job immediately.
        """

        request = factory.put(data, priority, delay, ttr)
        response = self._process(request)

        if response.status == fields.JOB_TOO_BIG:
            raise errors.JobTooBig(response.status, request.command)
        if response.status == fields.DRAINING:
            raise errors.Draining(response.status, request.command)
        if response.is_match_error:
            raise errors.ServerError(response.status, request.command)

        return int(response.response)


    def use(self, tube):
        """ Put subsequent jobs into *tube*; returns the tube name.
        """

        response = self._process(factory.use(tube))
        return response.response


    # Consumer commands

    def reserve(self, timeout=None):
        """ Return the next available :class:`Job` from the watched tubes,
            blocking until one is available. If *timeout* is specified, in
            seconds, return None if no job became available in that time.

            If a job reserved by this connection is within a second of its
            time-to-run, :class:`beanstalk.protocol.errors.DeadlineSoon` is
            raised instead.
        """

        request = factory.reserve(timeout)
        response = self._process(request)

        if response.status == fields.DEADLINE_SOON:
            raise errors.DeadlineSoon(response.status, request.command)

        return self._job(response)


    def reserve_job(self, job_id):
        """ Reserve the specific job *job_id*; None if there is no such job.
        """

        return self._job(self._process(factory.reserve_job(job_id)))


    def delete(self, job_id):
        return self._process(factory.delete(job_id)).is_match_ok


    def release(self, job_id, priority=fields.DEFAULT_PRIORITY, delay=fields.DEFAULT_DELAY):
        return self._process(factory.release(job_id, priority, delay)).is_match_ok


    def bury(self, job_id, priority=fields.DEFAULT_PRIORITY):
        return self._process(factory.bury(job_id, priority)).is_match_ok


    def touch(self, job_id):
        return self._process(factory.touch(job_id)).is_match_ok


    def watch(self, tube):
        """ Add *tube* to the watch list; returns the number of tubes watched.
        """

        response = self._process(factory.watch(tube))
        return int(response.response)


    def ignore(self, tube):
        """ Remove *tube* from the watch list; returns the number of tubes
            still watched, or -1 if *tube* is the last one being watched.
        """

        response = self._process(factory.ignore(tube))

        if response.is_match_ok:
            return int(response.response)
        return -1


    # Other commands

    def peek(self, job_id):
        return self._job(self._process(factory.peek(job_id)))


    def peek_ready(self):
        return self._job(self._process(factory.peek_ready()))


    def peek_delayed(self):
        return self._job(self._process(factory.peek_delayed()))


    def peek_buried(self):
        return self._job(self._process(factory.peek_buried()))


    def kick(self, bound):
        """ Move up to *bound* buried (or, if there are none, delayed) jobs
            in the tube in use into the ready queue; returns the number moved.
        """

        response = self._process(factory.kick(bound))
        return int(response.response)


    def kick_job(self, job_id):
        return self._process(factory.kick_job(job_id)).is_match_ok


    def stats(self):
        return self._process(factory.stats()).data


    def stats_job(self, job_id):
        return self._process(factory.stats_job(job_id)).data


    def stats_tube(self, tube):
        return self._process(factory.stats_tube(tube)).data


    def list_tubes(self):
        return self._process(factory.list_tubes()).data


    def list_tube_used(self):
        return self._process(factory.list_tube_used()).response


    def list_tubes_watched(self):
        return self._process(factory.list_tubes_watched()).data


    def pause_tube(self, tube, delay):
        return self._process(factory.pause_tube(tube, delay)).is_match_ok


    def server_version(self):
        return self.stats()['version'].strip('"')


    def client_version(self):
        return version


    def close(self):
        """ Close every connection held by this client. This is also how a
            reservation blocked in another thread is abandoned; that call
            raises :class:`beanstalk.transport.TransportConnectionError`.
            Using the client again afterwards opens a new connection.
        """

        self.policy.close()


# end of class Client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
