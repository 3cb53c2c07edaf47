"""Transport layer implementations."""

from .base import (
    ConfigurationError,
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
)

from .zmq import Connection
