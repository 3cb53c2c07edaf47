""" Encoding and decoding of tnetstrings, the typed, length-prefixed
    serialization used for the headers and body of a handler protocol
    request.

    Each value on the wire is self-describing::

        <length>:<payload><tag>

    where *length* is the ASCII decimal byte count of *payload*, and *tag* is
    a single character selecting the variant. Lists and dictionaries carry a
    payload that is itself a concatenation of encoded values; dictionaries
    alternate key and value, and every key is a string.

    Decoded values are instances of the :class:`TypedValue` subclasses defined
    here, one per variant, rather than native Python values; this keeps a
    string distinct from a list of one string, and keeps dictionary entries in
    the order they arrived, duplicate keys included.
"""

from __future__ import annotations

import dataclasses
import re
from typing import ClassVar, Optional, Tuple

from .errors import FormatError


# The length prefix is limited to nine digits; anything longer cannot be
# a legitimate message, and refusing it early avoids a pointless scan.

_max_digits = 9
_integer = re.compile(rb'-?[0-9]+\Z')
_float = re.compile(rb'-?([0-9]+(\.[0-9]+)?([eE][-+]?[0-9]+)?|inf|nan)\Z')

# Lists and dictionaries nested deeper than this are refused.

max_depth = 100


class TypedValue:
    """ Base class for all decoded tnetstring values. The set of subclasses
        is closed: :class:`String`, :class:`List`, :class:`Dict`,
        :class:`Integer`, :class:`Float`, :class:`Boolean`, and :class:`Null`.
    """

    tag: ClassVar[bytes] = b''

    def payload(self) -> bytes:
        raise NotImplementedError

    def to_python(self):
        """ Return the equivalent native Python value.
        """
        raise NotImplementedError


@dataclasses.dataclass(frozen=True)
class String(TypedValue):
    value: bytes
    tag: ClassVar[bytes] = b','

    def payload(self) -> bytes:
        return self.value

    def to_python(self):
        return self.value


@dataclasses.dataclass(frozen=True)
class List(TypedValue):
    values: Tuple[TypedValue, ...] = ()
    tag: ClassVar[bytes] = b']'

    def __post_init__(self):
        object.__setattr__(self, 'values', tuple(self.values))

    def __iter__(self):
        return iter(self.values)

    def __len__(self):
        return len(self.values)

    def payload(self) -> bytes:
        return b''.join(dump(value) for value in self.values)

    def to_python(self):
        return [value.to_python() for value in self.values]


@dataclasses.dataclass(frozen=True)
class Dict(TypedValue):
    """ An ordered sequence of (key, value) pairs. Keys are raw bytes; a key
        may legitimately appear more than once, which is why this is not a
        mapping.
    """

    items: Tuple[Tuple[bytes, TypedValue], ...] = ()
    tag: ClassVar[bytes] = b'}'

    def __post_init__(self):
        object.__setattr__(self, 'items', tuple(self.items))

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def payload(self) -> bytes:
        chunks = list()
        for key, value in self.items:
            chunks.append(dump(String(key)))
            chunks.append(dump(value))
        return b''.join(chunks)

    def to_python(self):
        return dict((key, value.to_python()) for key, value in self.items)


@dataclasses.dataclass(frozen=True)
class Integer(TypedValue):
    value: int
    tag: ClassVar[bytes] = b'#'

    def payload(self) -> bytes:
        return str(int(self.value)).encode()

    def to_python(self):
        return self.value


@dataclasses.dataclass(frozen=True)
class Float(TypedValue):
    value: float
    tag: ClassVar[bytes] = b'^'

    def payload(self) -> bytes:
        return repr(float(self.value)).encode()

    def to_python(self):
        return self.value


@dataclasses.dataclass(frozen=True)
class Boolean(TypedValue):
    value: bool
    tag: ClassVar[bytes] = b'!'

    def payload(self) -> bytes:
        if self.value:
            return b'true'
        return b'false'

    def to_python(self):
        return self.value


@dataclasses.dataclass(frozen=True)
class Null(TypedValue):
    tag: ClassVar[bytes] = b'~'

    def payload(self) -> bytes:
        return b''

    def to_python(self):
        return None



def dump(value: TypedValue) -> bytes:
    """ Encode a single :class:`TypedValue` as a tnetstring.
    """

    if not isinstance(value, TypedValue) or type(value) is TypedValue:
        raise TypeError('cannot encode as a tnetstring: ' + repr(value))

    payload = value.payload()
    length = str(len(payload)).encode()
    return length + b':' + payload + value.tag

dumps = dump



def parse(data: bytes) -> Tuple[Optional[TypedValue], bytes]:
    """ Decode the first tnetstring found at the front of *data*. The return
        value is a tuple: the decoded :class:`TypedValue`, and whatever bytes
        remain after it. If *data* is empty the decoded value is None.

        A :class:`FormatError` is raised if the length prefix is malformed,
        if the declared length runs past the end of *data*, if the tag
        character is not recognized, or if lists and dictionaries are nested
        more than :data:`max_depth` levels deep.
    """

    data = bytes(data)

    if data == b'':
        return None, b''

    value, offset = _parse(data, 0, len(data), 0)
    return value, data[offset:]



def loads(data: bytes) -> TypedValue:
    """ Decode exactly one tnetstring; trailing bytes, or no bytes at all,
        are a :class:`FormatError`.
    """

    value, remaining = parse(data)

    if value is None:
        raise FormatError('no tnetstring to decode')
    if remaining:
        raise FormatError('%d trailing bytes after tnetstring' % (len(remaining)))

    return value



def _parse(data, start, end, depth):
    """ Decode the tnetstring beginning at *start*, never looking at or past
        *end*. Returns the decoded value and the offset just beyond its tag.
        The buffer is not copied; only string and number payloads are
        sliced out of it.
    """

    colon = data.find(b':', start, min(start + _max_digits + 1, end))
    if colon == -1:
        raise FormatError('tnetstring length prefix is missing or too long')

    length = data[start:colon]
    if length == b'' or not length.isdigit():
        raise FormatError('invalid tnetstring length: ' + repr(length))

    length = int(length)
    begin = colon + 1
    stop = begin + length

    # The tag byte immediately follows the payload, so the buffer must hold
    # at least one byte beyond the declared length.

    if stop >= end:
        raise FormatError('tnetstring length %d exceeds the remaining %d bytes' % (length, end - begin))

    tag = data[stop:stop + 1]

    try:
        decoder = _decoders[tag]
    except KeyError:
        raise FormatError('invalid tnetstring tag: ' + repr(tag)) from None

    return decoder(data, begin, stop, depth), stop + 1



def _parse_string(data, start, end, depth):
    return String(data[start:end])


def _parse_list(data, start, end, depth):
    if depth >= max_depth:
        raise FormatError('tnetstring nested more than %d levels deep' % (max_depth))

    values = list()

    while start < end:
        value, start = _parse(data, start, end, depth + 1)
        values.append(value)

    return List(tuple(values))


def _parse_dict(data, start, end, depth):
    if depth >= max_depth:
        raise FormatError('tnetstring nested more than %d levels deep' % (max_depth))

    items = list()

    while start < end:
        key, start = _parse(data, start, end, depth + 1)
        if not isinstance(key, String):
            raise FormatError('tnetstring dict key is not a string')

        if start == end:
            raise FormatError('tnetstring dict key has no value: ' + repr(key.value))

        value, start = _parse(data, start, end, depth + 1)
        items.append((key.value, value))

    return Dict(tuple(items))


def _parse_integer(data, start, end, depth):
    payload = data[start:end]
    if _integer.match(payload) is None:
        raise FormatError('invalid tnetstring integer: ' + repr(payload))
    return Integer(int(payload))


def _parse_float(data, start, end, depth):
    payload = data[start:end]
    if _float.match(payload) is None:
        raise FormatError('invalid tnetstring float: ' + repr(payload))
    return Float(float(payload))


def _parse_boolean(data, start, end, depth):
    payload = data[start:end]
    if payload == b'true':
        return Boolean(True)
    if payload == b'false':
        return Boolean(False)
    raise FormatError('invalid tnetstring boolean: ' + repr(payload))


def _parse_null(data, start, end, depth):
    if start != end:
        raise FormatError('tnetstring null has a non-empty payload')
    return Null()


_decoders = {
    String.tag: _parse_string,
    List.tag: _parse_list,
    Dict.tag: _parse_dict,
    Integer.tag: _parse_integer,
    Float.tag: _parse_float,
    Boolean.tag: _parse_boolean,
    Null.tag: _parse_null,
}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
