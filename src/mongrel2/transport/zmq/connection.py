"""ZeroMQ handler connection.

A handler pulls requests from the front end over a PULL socket, and
publishes replies over a PUB socket; the front end subscribes to the
replies and routes them by sender uuid and connection id.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Union

import zmq

from ...config import Configuration
from ...protocol import reply as encode
from ...protocol.request import Request, parse
from ..base import (
    ConfigurationError,
    Transport,
    TransportConnectionError,
    TransportTimeout,
)


logger = logging.getLogger(__name__)
zmq_context = zmq.Context()


class Connection(Transport):
    """Request/reply endpoint for one handler.

    The *sender_id*, if provided, is set as the identity of the PUB socket.
    *pull_addresses* and *pub_addresses* are connected to in order; either
    may be a single address or a list. A *context* may be supplied, otherwise
    the module-level context is used; the connection never terminates the
    context.
    """

    # Milliseconds to hold unsent replies when the connection is closed.
    linger = 1000

    def __init__(
        self,
        sender_id: Optional[str] = None,
        pull_addresses: Union[str, Iterable[str]] = (),
        pub_addresses: Union[str, Iterable[str]] = (),
        context: Optional[zmq.Context] = None,
    ):
        self.config = Configuration(sender_id, pull_addresses, pub_addresses)
        self.context = context if context is not None else zmq_context

        self._pull: Optional[zmq.Socket] = None
        self._pub: Optional[zmq.Socket] = None

        try:
            self._open()
        except ConfigurationError:
            self.close()
            raise
        except zmq.ZMQError as exc:
            self.close()
            raise TransportConnectionError(f"cannot open sockets: {exc}") from exc

    @classmethod
    def from_config(cls, config: Configuration, context: Optional[zmq.Context] = None) -> "Connection":
        return cls(config.sender_id, config.pull_addresses, config.pub_addresses, context)

    def _open(self) -> None:
        self._pull = self.context.socket(zmq.PULL)
        self._pull.setsockopt(zmq.LINGER, 0)

        for address in self.config.pull_addresses:
            self._connect(self._pull, address)

        self._pub = self.context.socket(zmq.PUB)
        self._pub.setsockopt(zmq.LINGER, self.linger)

        sender_id = self.config.sender_id
        if sender_id is not None:
            try:
                self._pub.setsockopt(zmq.IDENTITY, sender_id.encode())
            except zmq.ZMQError as exc:
                raise ConfigurationError(f"invalid sender id {sender_id!r}: {exc}") from exc

        for address in self.config.pub_addresses:
            self._connect(self._pub, address)

    @staticmethod
    def _connect(socket: zmq.Socket, address: str) -> None:
        try:
            socket.connect(address)
        except zmq.ZMQError as exc:
            raise ConfigurationError(f"cannot connect to {address!r}: {exc}") from exc
        logger.debug("connected %s socket to %s", socket.type, address)

    @property
    def sender_id(self) -> Optional[str]:
        return self.config.sender_id

    @property
    def pull_addresses(self) -> List[str]:
        return list(self.config.pull_addresses)

    @property
    def pub_addresses(self) -> List[str]:
        return list(self.config.pub_addresses)

    @property
    def is_open(self) -> bool:
        return self._pull is not None and self._pub is not None

    def _check_open(self) -> None:
        if not self.is_open:
            raise TransportConnectionError("connection is closed")

    def recv_raw(self, timeout: Optional[float] = None) -> bytes:
        """Block until the next raw message arrives and return it.

        If *timeout* is given (in seconds) and no message arrives in that
        time, :class:`TransportTimeout` is raised.
        """

        self._check_open()

        try:
            if timeout is not None:
                poller = zmq.Poller()
                poller.register(self._pull, zmq.POLLIN)
                if not poller.poll(timeout * 1000):
                    raise TransportTimeout(f"no request received within {timeout} seconds")

            raw = self._pull.recv()
        except zmq.ZMQError as exc:
            raise TransportConnectionError(f"receive failed: {exc}") from exc

        logger.debug("received %d bytes", len(raw))
        return raw

    def recv(self, timeout: Optional[float] = None) -> Request:
        """Receive and decode the next request.

        A malformed message raises :class:`mongrel2.protocol.FormatError`;
        the connection itself remains usable.
        """

        return parse(self.recv_raw(timeout))

    def send(self, uuid: str, ids: Union[str, Iterable[str]], body: Union[str, bytes]) -> None:
        """Send *body* to every connection in *ids* on front end *uuid*."""

        self._publish(encode.send(uuid, ids, body))

    def reply(self, req: Request, body: Union[str, bytes]) -> None:
        """Send *body* back to the client that issued *req*."""

        self._publish(encode.reply(req, body))

    def reply_http(
        self,
        req: Request,
        body: Union[str, bytes],
        code: int = 200,
        status: str = "OK",
        headers: Optional[Mapping[str, Union[str, List[str]]]] = None,
    ) -> None:
        """Send a complete HTTP response back to the client that issued *req*."""

        self._publish(encode.reply_http(req, body, code, status, headers))

    def _publish(self, msg: bytes) -> None:
        self._check_open()

        try:
            self._pub.send(msg)
        except zmq.ZMQError as exc:
            raise TransportConnectionError(f"send failed: {exc}") from exc

        logger.debug("sent %d bytes", len(msg))

    def close(self) -> None:
        """Close both sockets. Closing more than once is harmless."""

        for socket in (self._pull, self._pub):
            if socket is not None:
                socket.close()

        if self._pull is not None or self._pub is not None:
            logger.debug("closed connection for sender %s", self.config.sender_id)

        self._pull = None
        self._pub = None

    term = close

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
