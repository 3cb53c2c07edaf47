""" Exceptions raised by the transport layer and by connection setup. These
    live apart from :mod:`mongrel2.transport` so that configuration can be
    validated without loading any transport implementation.
"""


class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A receive did not complete within the requested time."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class ConfigurationError(TransportError):
    """An address or identity supplied at connection setup is invalid."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
