""" Exceptions raised while decoding or encoding handler protocol messages.
"""


class FormatError(ValueError):
    """ A message, or some piece of a message, does not conform to the
        handler protocol: a malformed tnetstring length or tag, a truncated
        payload, or a value of the wrong variant where a specific one is
        required. There is no partial result when this is raised.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
