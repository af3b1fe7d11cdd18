from . import fields
from . import errors
from . import request
from . import response
from . import factory

from .errors import BeanstalkError, ProtocolError, ServerError, UnexpectedResponse
from .request import Request
from .response import Response


"""
beanstalk Protocol Layer
========================

This package describes the beanstalkd protocol: which command lines exist,
what replies they accept, and what the replies look like. It performs no I/O
and MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Client (client.py)
    One method per queue verb
    - put(), reserve(), delete(), ...
    Reshapes Response instances into ids, Job instances, dicts

    │
    ▼
Request Factory (factory.py)
    One constructor per command
    - Validates arguments before any I/O
    - Formats the command line

    │
    ▼
Request / Response (request.py, response.py)
    Immutable transaction descriptors and parsed replies

    │
    ▼
Field Vocabulary (fields.py)
    Status keywords, reply shapes, protocol limits

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Session Layer (transport/session.py)
    Executes one Request at a time, returns a Response

Codec Layer (transport/codec.py)
    Decodes list and map blocks

Transport Layer
    Moves bytes
    - ZeroMQ STREAM socket

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
