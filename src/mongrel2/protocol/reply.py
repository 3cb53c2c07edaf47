""" Encoding of outbound handler protocol messages. A reply published back
    to the front end looks like::

        UUID IDS BODY

    where *IDS* is a tnetstring string holding one or more space-separated
    connection ids, and *BODY* is appended as-is. Unlike the inbound
    direction the body is not tnetstring-encoded.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Union

from . import tnetstring


StrOrBytes = Union[str, bytes]


def send(uuid: StrOrBytes, ids: Union[StrOrBytes, Iterable[StrOrBytes]], body: StrOrBytes) -> bytes:
    """ Return the raw message that delivers *body* to each of the connection
        *ids* on the front end identified by *uuid*. A single id may be
        passed in place of a list.
    """

    if isinstance(ids, (str, bytes)):
        ids = (ids,)

    ids = [_bytes(id) for id in ids]
    if not ids:
        raise ValueError('at least one connection id is required')

    joined = tnetstring.dump(tnetstring.String(b' '.join(ids)))
    return b' '.join((_bytes(uuid), joined, _bytes(body)))



def http(status_code: int, status_text: str, headers: Mapping, body: StrOrBytes) -> bytes:
    """ Return a complete HTTP/1.1 response: the status line, a
        Content-Length header computed from *body*, one line per value of
        each header in *headers*, a blank line, and the *body*. The values
        in *headers* are lists of strings; a bare string is treated as a
        list of one. No other headers are added.
    """

    body = _bytes(body)

    lines = list()
    lines.append('HTTP/1.1 %d %s' % (status_code, status_text))
    lines.append('Content-Length: %d' % (len(body)))

    if headers:
        for key, values in headers.items():
            if isinstance(values, str):
                values = (values,)
            for value in values:
                lines.append('%s: %s' % (key, value))

    lines.append('')
    lines.append('')

    head = '\r\n'.join(lines)
    return head.encode('utf-8') + body



def reply(request, body: StrOrBytes) -> bytes:
    """ Return the raw message delivering *body* to the sender of *request*.
    """

    return send(request.uuid, (request.id,), body)



def reply_http(request, body: StrOrBytes, code: int = 200, status: str = 'OK', headers: Mapping = None) -> bytes:
    """ Return the raw message delivering a complete HTTP response to the
        sender of *request*.
    """

    return reply(request, http(code, status, headers, body))



def _bytes(value):
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError('expected str or bytes, not ' + type(value).__name__)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
