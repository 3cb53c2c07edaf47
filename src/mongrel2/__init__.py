""" Python implementation of the Mongrel2 handler protocol. This includes
    the codec for inbound requests and outbound replies, and a ZeroMQ
    connection that pulls requests from a front end and publishes replies
    back to it.
"""

# Utility components.

from . import json

# The protocol layer is transport-agnostic.

from . import protocol
from .protocol import FormatError, Request

# Primary public-facing interfaces.

from . import config
from .config import Configuration

from . import transport
from .transport import (
    ConfigurationError,
    Connection,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
