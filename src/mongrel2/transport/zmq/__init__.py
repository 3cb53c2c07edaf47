"""ZeroMQ transport."""

from .connection import Connection, zmq_context
