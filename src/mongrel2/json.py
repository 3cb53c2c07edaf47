''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads`. Only decoding is needed here: JSON
    arrives in request headers and bodies, and replies are raw bytes supplied
    by the caller.
'''

# The business about conditionally importing the libraries is intended to
# avoid importing less efficient libraries if they are not available.

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


# Each library raises its own exception on malformed input; DecodeError is
# the one to catch regardless of which library is in use.

if msgspec is not None:
    loads = msgspec.json.Decoder().decode
    DecodeError = (msgspec.DecodeError, UnicodeDecodeError)
elif orjson is not None:
    loads = orjson.loads
    DecodeError = (orjson.JSONDecodeError, UnicodeDecodeError)
else:
    loads = json.loads
    DecodeError = (json.JSONDecodeError, UnicodeDecodeError)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
