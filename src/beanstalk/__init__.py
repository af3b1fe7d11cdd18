""" Python client for the beanstalkd work queue. The :class:`Client` is the
    primary interface; the protocol and transport layers underneath it are
    usable on their own for anyone who needs to issue raw requests.
"""

# Submodules used by multiple other components.

from . import config
from . import protocol
from . import transport

# Primary public-facing interfaces.

from . import policy
from .client import Client, version
from .job import Job
from .protocol.errors import (
    BeanstalkError,
    DeadlineSoon,
    Draining,
    JobTooBig,
    ProtocolError,
    ServerError,
    UnexpectedResponse,
)
from .transport import TransportError, TransportConnectionError, TransportTimeout

__version__ = version

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
