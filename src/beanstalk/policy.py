""" Connection policies decide which :class:`ProtocolHandler` serves a
    caller. Each handler owns exactly one connection, and a policy owns
    every handler it creates; handlers are never shared across policies.

    A handler that became unusable, after a transport failure or a
    :func:`close`, is discarded and replaced the next time it is needed.
"""

import logging
import threading

from . import transport
from .transport.session import ProtocolHandler


logger = logging.getLogger(__name__)


class Policy:
    """ Base class for connection policies. The *connect* argument is a
        callable accepting an address and a port and returning an open
        :class:`beanstalk.transport.Transport`; it defaults to
        :func:`beanstalk.transport.connect`.
    """

    def __init__(self, address, port, connect=None):

        if connect is None:
            connect = transport.connect

        self.address = address
        self.port = int(port)
        self.connect = connect
        self.lock = threading.Lock()


    def __repr__(self):
        return '<%s %s:%d>' % (self.__class__.__name__, self.address, self.port)


    def create(self):
        """ Open a new connection and return a handler that owns it.
        """

        connection = self.connect(self.address, self.port)
        logger.debug('new connection to %s:%d', self.address, self.port)
        return ProtocolHandler(connection)


    def handler(self):
        """ Return the handler serving the calling context.
        """

        raise NotImplementedError('handler() must be implemented by subclasses')


    def handlers(self):
        """ Return a list of every handler currently owned by this policy.
        """

        raise NotImplementedError('handlers() must be implemented by subclasses')


    def close(self):
        """ Close every connection owned by this policy. A subsequent call to
            :func:`handler` will establish a new connection.
        """

        raise NotImplementedError('close() must be implemented by subclasses')


# end of class Policy



class Shared(Policy):
    """ One handler for every caller. Transactions from concurrent callers are
        serialized by the handler; a caller blocked in a reservation holds up
        everyone else using the same client.
    """

    def __init__(self, *args, **kwargs):

        Policy.__init__(self, *args, **kwargs)
        self._handler = None


    def handler(self):

        self.lock.acquire()

        try:
            handler = self._handler

            if handler is None or handler.usable == False:
                handler = self.create()
                self._handler = handler
        finally:
            self.lock.release()

        return handler


    def handlers(self):

        handler = self._handler

        if handler is None:
            return list()
        else:
            return [handler]


    def close(self):

        self.lock.acquire()
        handler = self._handler
        self._handler = None
        self.lock.release()

        if handler is not None:
            handler.close()


# end of class Shared



class PerThread(Policy):
    """ One handler per calling thread, created on first use in that thread.
        Threads never share a connection, so no thread can disturb the byte
        stream of another. Connections belonging to threads that have exited
        are closed the next time a new connection is established.
    """

    def __init__(self, *args, **kwargs):

        Policy.__init__(self, *args, **kwargs)
        self._by_thread = dict()


    def handler(self):

        ident = threading.get_ident()

        try:
            thread, handler = self._by_thread[ident]
        except KeyError:
            handler = None
        else:
            if thread is not threading.current_thread():
                # Thread identifiers are recycled once a thread exits.
                handler.close()
                handler = None

        if handler is not None and handler.usable == True:
            return handler

        # Only the calling thread ever creates or replaces its own entry;
        # the lock protects the dictionary, not the connection.

        handler = self.create()

        self.lock.acquire()
        try:
            self._by_thread[ident] = (threading.current_thread(), handler)
            stale = self._prune()
        finally:
            self.lock.release()

        for old in stale:
            old.close()

        return handler


    def handlers(self):

        self.lock.acquire()
        handlers = [handler for thread,handler in self._by_thread.values()]
        self.lock.release()

        return handlers


    def close(self):

        self.lock.acquire()
        handlers = [handler for thread,handler in self._by_thread.values()]
        self._by_thread.clear()
        self.lock.release()

        for handler in handlers:
            handler.close()


    def _prune(self):
        """ Remove the entries for threads that are no longer running, and
            return their handlers. The caller holds the lock.
        """

        stale = list()

        for ident,entry in tuple(self._by_thread.items()):
            thread, handler = entry
            if thread.is_alive():
                continue
            del self._by_thread[ident]
            stale.append(handler)

        return stale


# end of class PerThread


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
