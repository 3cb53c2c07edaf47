""" Handler protocol layer.

    This package holds the pure encoding and decoding logic for the messages
    exchanged between a Mongrel2 front end and a handler process. It does
    not depend on any transport; see :mod:`mongrel2.transport` for the
    ZeroMQ sockets that move these bytes around.

    tnetstring
        The typed, length-prefixed serialization used for request headers
        and bodies, and for the connection ids of a reply.

    request
        Decoding of an inbound message into a :class:`Request`.

    reply
        Encoding of outbound messages, raw or as a full HTTP response.
"""

from . import errors
from . import tnetstring
from . import request
from . import reply

from .errors import FormatError
from .request import Request, parse

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
