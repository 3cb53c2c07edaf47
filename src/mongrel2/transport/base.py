"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`mongrel2.protocol` so the protocol remains
transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Union

from ..errors import (
    ConfigurationError,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
)
from ..protocol.request import Request


class Transport(ABC):
    """Minimal contract for a handler connection."""

    @abstractmethod
    def recv(self, timeout: Optional[float] = None) -> Request:
        """Receive and decode the next request."""

    @abstractmethod
    def send(self, uuid: str, ids: Union[str, Iterable[str]], body: bytes) -> None:
        """Send *body* to the connection *ids* on front end *uuid*."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying sockets."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
