""" Connection configuration for a handler process. A handler needs three
    pieces of information: the addresses of the front end(s) it pulls
    requests from, the addresses it publishes replies to, and optionally a
    sender id that identifies this handler to the front end.

    These are always construction parameters of a :class:`Configuration`;
    :func:`Configuration.from_environ` is a convenience for handler processes
    that are launched with the values in their environment.
"""

import os
import re

from .errors import ConfigurationError


_address = re.compile(r'(tcp|ipc|inproc|pgm|epgm|udp|ws|wss)://\S+\Z')

# Upper limit imposed by ZeroMQ on a socket identity.
_identity_max = 255


class Configuration:
    """ The *sender_id* is a string, or None if the front end does not need
        to know which handler a reply came from. *pull_addresses* and
        *pub_addresses* are ZeroMQ endpoints, such as ``tcp://127.0.0.1:9997``;
        either may be a single address or a list of them. Invalid values
        raise a :class:`ConfigurationError`.
    """

    def __init__(self, sender_id=None, pull_addresses=(), pub_addresses=()):

        self.sender_id = _check_identity(sender_id)
        self.pull_addresses = _check_addresses(pull_addresses, 'pull')
        self.pub_addresses = _check_addresses(pub_addresses, 'pub')


    def __repr__(self):
        return '%s(sender_id=%r, pull_addresses=%r, pub_addresses=%r)' % (
                type(self).__name__, self.sender_id,
                self.pull_addresses, self.pub_addresses)


    def __eq__(self, other):
        if not isinstance(other, Configuration):
            return NotImplemented

        mine = (self.sender_id, self.pull_addresses, self.pub_addresses)
        theirs = (other.sender_id, other.pull_addresses, other.pub_addresses)
        return mine == theirs


    @classmethod
    def from_environ(cls, environ=None):
        """ Build a :class:`Configuration` from the ``MONGREL2_SENDER_ID``,
            ``MONGREL2_PULL``, and ``MONGREL2_PUB`` environment variables.
            The address variables may contain several whitespace-separated
            addresses; the sender id is optional.
        """

        if environ is None:
            environ = os.environ

        sender_id = environ.get('MONGREL2_SENDER_ID')
        if sender_id == '':
            sender_id = None

        try:
            pull = environ['MONGREL2_PULL']
        except KeyError:
            raise ConfigurationError('MONGREL2_PULL environment variable not set') from None

        try:
            pub = environ['MONGREL2_PUB']
        except KeyError:
            raise ConfigurationError('MONGREL2_PUB environment variable not set') from None

        return cls(sender_id, pull.split(), pub.split())


# end of class Configuration



def _check_identity(sender_id):

    if sender_id is None:
        return None

    if not isinstance(sender_id, str):
        raise ConfigurationError('sender id must be a string, not ' + type(sender_id).__name__)

    if sender_id == '':
        raise ConfigurationError('sender id cannot be an empty string')

    if any(character.isspace() for character in sender_id):
        raise ConfigurationError('sender id cannot contain whitespace: ' + repr(sender_id))

    # ZeroMQ reserves identities beginning with a zero byte.

    encoded = sender_id.encode('utf-8')
    if encoded[0] == 0 or len(encoded) > _identity_max:
        raise ConfigurationError('invalid sender id: ' + repr(sender_id))

    return sender_id


def _check_addresses(addresses, kind):

    if isinstance(addresses, str):
        addresses = [addresses]

    addresses = list(addresses)

    if not addresses:
        raise ConfigurationError('at least one %s address is required' % (kind))

    for address in addresses:
        if not isinstance(address, str) or _address.match(address) is None:
            raise ConfigurationError('invalid %s address: %r' % (kind, address))

    return addresses


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
