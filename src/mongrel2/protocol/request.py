""" Decoding of inbound handler protocol messages. A raw message pulled from
    the front end looks like::

        UUID ID PATH HEADERS BODY

    where *UUID*, *ID*, and *PATH* are space-terminated tokens, and *HEADERS*
    and *BODY* are two consecutive tnetstrings. The headers are normally a
    tnetstring dictionary, but older front ends send a tnetstring string
    containing a JSON object instead; both shapes are accepted.
"""

from __future__ import annotations

import dataclasses
from typing import Dict, List, Optional

from .. import json
from . import tnetstring
from .errors import FormatError


@dataclasses.dataclass(frozen=True)
class Request:
    """ A single decoded request. The *uuid* identifies the front end that
        sent it, *id* identifies the client connection on that front end,
        and *path* is the matched request path. *headers* maps each header
        name to the list of values received for it, in the order received;
        a header that was not sent is absent, never an empty list.

        *json_body* is only populated when the METHOD header is exactly
        ``JSON``, in which case the *body* is required to be a JSON object;
        for every other request it is None.
    """

    uuid: str
    id: str
    path: str
    headers: Dict[str, List[str]]
    body: bytes
    json_body: Optional[dict] = None


    def is_disconnect(self) -> bool:
        """ Return True if this is the front end notifying us that the
            client connection *id* has gone away.
        """

        if self.json_body is None:
            return False

        kind = self.json_body.get('type')
        return isinstance(kind, str) and kind == 'disconnect'


    def should_close(self) -> bool:
        """ Return True if the client expects the connection to be closed
            once the response is sent. An explicit ``connection: close``
            header is checked first; failing that, an HTTP/1.0 request
            closes by default. Any other value of the connection header
            does not prevent the HTTP/1.0 check.
        """

        if self.headers.get('connection') == ['close']:
            return True

        return self.headers.get('VERSION') == ['HTTP/1.0']


# end of class Request



def parse(raw: bytes) -> Request:
    """ Decode one raw message into a :class:`Request`. Any deviation from
        the expected format raises a :class:`FormatError`; there is no
        partial result.
    """

    raw = bytes(raw)
    end = len(raw)

    start, uuid = _token(raw, 0, end, 'invalid sender uuid')
    start, id = _token(raw, start, end, 'invalid connection id')
    start, path = _token(raw, start, end, 'invalid path', empty=True)

    headers, body = _parse_rest(raw[start:])

    json_body = None
    if headers.get('METHOD') == ['JSON']:
        json_body = _parse_json_body(body)

    return Request(uuid, id, path, headers, body, json_body)



def parse_headers(value: tnetstring.TypedValue) -> Dict[str, List[str]]:
    """ Normalize the decoded headers tnetstring into a dictionary mapping
        header names to lists of string values. A tnetstring dictionary is
        the usual case; a tnetstring string is taken to be a JSON object.
        If a header name occurs more than once the values are appended to
        the existing list, in the order encountered. A header with an empty
        list of values is omitted.
    """

    if isinstance(value, tnetstring.Dict):
        pairs = _dict_pairs(value)
    elif isinstance(value, tnetstring.String):
        pairs = _json_pairs(value.value)
    else:
        raise FormatError('invalid header')

    headers = dict()

    # A header sent as an empty list carries no values, and is treated
    # as not sent at all.

    for key, values in pairs:
        if not values:
            continue

        try:
            existing = headers[key]
        except KeyError:
            headers[key] = values
        else:
            existing.extend(values)

    return headers



def _token(raw, start, end, error, empty=False):
    """ Return the space-terminated token beginning at *start*, along with
        the index immediately following the terminating space. The token
        may only be empty if *empty* is True.
    """

    space = raw.find(b' ', start, end)
    if space == -1:
        raise FormatError(error)
    if space == start and not empty:
        raise FormatError(error)

    return space + 1, _decode(raw[start:space])


def _decode(value):
    try:
        return value.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise FormatError('invalid UTF-8 in message: ' + str(exc)) from exc


def _parse_rest(rest):

    headers, rest = tnetstring.parse(rest)
    if headers is None:
        raise FormatError('empty headers')
    headers = parse_headers(headers)

    # Anything following the body tnetstring is ignored.

    body, _ = tnetstring.parse(rest)
    if body is None:
        raise FormatError('empty body')
    if not isinstance(body, tnetstring.String):
        raise FormatError('invalid body')

    return headers, body.value


def _parse_json_body(body):

    try:
        decoded = json.loads(body)
    except json.DecodeError as exc:
        raise FormatError('invalid JSON string: ' + str(exc)) from exc

    if not isinstance(decoded, dict):
        raise FormatError('json body is not a dictionary')

    return decoded


def _dict_pairs(value):

    for key, item in value:
        key = _decode(key)

        if isinstance(item, tnetstring.String):
            values = [_decode(item.value)]
        elif isinstance(item, tnetstring.List):
            values = list()
            for element in item:
                if not isinstance(element, tnetstring.String):
                    raise FormatError('header value is not a string')
                values.append(_decode(element.value))
        else:
            raise FormatError('header value is not a string')

        yield key, values


def _json_pairs(text):

    try:
        decoded = json.loads(text)
    except json.DecodeError as exc:
        raise FormatError('invalid JSON string') from exc

    if not isinstance(decoded, dict):
        raise FormatError('header is not a dictionary')

    for key, item in decoded.items():
        if isinstance(item, str):
            values = [item]
        elif isinstance(item, list):
            for element in item:
                if not isinstance(element, str):
                    raise FormatError('header value is not a string')
            values = list(item)
        else:
            raise FormatError('header value is not a string')

        yield key, values


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
