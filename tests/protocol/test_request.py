import mongrel2
import pytest

from mongrel2.protocol import request, tnetstring
from mongrel2.protocol.tnetstring import String, List, Dict, Integer


def message(headers, body=b'', prefix=b'abCD-123 56 /path '):
    """ Assemble a raw inbound message from a headers :class:`TypedValue`
        and a body.
    """

    if isinstance(body, bytes):
        body = String(body)

    return prefix + tnetstring.dump(headers) + tnetstring.dump(body)


def dict_headers(**headers):

    items = list()
    for key, value in headers.items():
        if isinstance(value, list):
            value = List(tuple(String(v.encode()) for v in value))
        else:
            value = String(value.encode())
        items.append((key.encode(), value))

    return Dict(tuple(items))


def test_parse_json_headers():

    req = request.parse(b'abCD-123 56 / 13:{"foo":"bar"},11:hello world,')

    assert req.uuid == 'abCD-123'
    assert req.id == '56'
    assert req.path == '/'
    assert req.headers == {'foo': ['bar']}
    assert req.body == b'hello world'
    assert req.json_body is None


def test_parse_dict_headers():

    headers = dict_headers(PATH='/path', METHOD='GET', accept=['text/html', 'text/plain'])
    req = request.parse(message(headers, b'body'))

    assert req.uuid == 'abCD-123'
    assert req.id == '56'
    assert req.path == '/path'
    assert req.headers == {'PATH': ['/path'], 'METHOD': ['GET'], 'accept': ['text/html', 'text/plain']}
    assert req.body == b'body'
    assert req.json_body is None


def test_repeated_headers_are_merged():

    headers = Dict((
        (b'cookie', String(b'a=1')),
        (b'host', String(b'example.com')),
        (b'cookie', List((String(b'b=2'), String(b'c=3')))),
    ))

    req = request.parse(message(headers))
    assert req.headers['cookie'] == ['a=1', 'b=2', 'c=3']
    assert list(req.headers) == ['cookie', 'host']


def test_json_headers_with_lists():

    headers = String(b'{"accept": ["a", "b"], "host": "example.com"}')
    req = request.parse(message(headers))
    assert req.headers == {'accept': ['a', 'b'], 'host': ['example.com']}


def test_bad_header_values():

    bad = (
        Dict(((b'count', Integer(3)),)),
        Dict(((b'accept', List((String(b'a'), Integer(1)))),)),
        String(b'{"count": 3}'),
        String(b'{"accept": ["a", 1]}'),
        String(b'["not", "an", "object"]'),
        String(b'{not json'),
        List((String(b'a'),)),
    )

    for headers in bad:
        with pytest.raises(mongrel2.FormatError):
            request.parse(message(headers))


def test_json_body():

    headers = dict_headers(METHOD='JSON')
    req = request.parse(message(headers, b'{"type": "disconnect"}'))
    assert req.json_body == {'type': 'disconnect'}
    assert req.body == b'{"type": "disconnect"}'


def test_json_body_must_be_an_object():

    headers = dict_headers(METHOD='JSON')

    for body in (b'[1, 2, 3]', b'"string"', b'42', b'{broken', b''):
        with pytest.raises(mongrel2.FormatError):
            request.parse(message(headers, body))


def test_json_body_only_for_json_method():

    # A JSON-looking body is left alone unless the method is exactly JSON.

    for method in ('GET', 'json', ['JSON', 'JSON']):
        headers = dict_headers(METHOD=method)
        req = request.parse(message(headers, b'{"type": "disconnect"}'))
        assert req.json_body is None
        assert req.is_disconnect() == False


def test_body_must_be_a_string():

    headers = dict_headers(METHOD='GET')

    with pytest.raises(mongrel2.FormatError):
        request.parse(message(headers, List((String(b'a'),))))


def test_missing_pieces():

    valid = message(dict_headers(METHOD='GET'), b'body')

    bad = (
        b'',
        b'no-spaces-at-all',
        b'uuid-only ',
        b'uuid id-only ',
        b' 56 / 2:{},0:,',
        b'abc  / 2:{},0:,',
        b'abc 56 / ',
        b'abc 56 / 2:{},',
        valid[:-1],
    )

    for raw in bad:
        with pytest.raises(mongrel2.FormatError):
            request.parse(raw)


def test_truncated_body():

    with pytest.raises(mongrel2.FormatError):
        request.parse(b'abc 56 / 2:{},100:short,')


def test_invalid_utf8():

    with pytest.raises(mongrel2.FormatError):
        request.parse(b'\xff\xfe 56 / 2:{},0:,')


def test_trailing_bytes_ignored():

    req = request.parse(b'abc 56 / 2:{},5:hello,trailing')
    assert req.body == b'hello'
    assert req.headers == {}


def test_is_disconnect():

    def decoded(json_body):
        return request.Request('abc', '1', '/', {'METHOD': ['JSON']}, b'', json_body)

    assert decoded({'type': 'disconnect'}).is_disconnect() == True
    assert decoded({'type': 'disconnect', 'extra': 1}).is_disconnect() == True
    assert decoded({'type': 'connect'}).is_disconnect() == False
    assert decoded({'type': ['disconnect']}).is_disconnect() == False
    assert decoded({'kind': 'disconnect'}).is_disconnect() == False
    assert decoded({}).is_disconnect() == False
    assert decoded(None).is_disconnect() == False


def test_should_close():

    def headers(headers):
        return request.Request('abc', '1', '/', headers, b'')

    assert headers({'connection': ['close']}).should_close() == True
    assert headers({'connection': ['close'], 'VERSION': ['HTTP/1.1']}).should_close() == True
    assert headers({'VERSION': ['HTTP/1.0']}).should_close() == True
    assert headers({'VERSION': ['HTTP/1.1']}).should_close() == False
    assert headers({}).should_close() == False

    # A connection header other than 'close' does not override the version.

    assert headers({'connection': ['keep-alive'], 'VERSION': ['HTTP/1.0']}).should_close() == True
    assert headers({'connection': ['keep-alive'], 'VERSION': ['HTTP/1.1']}).should_close() == False
    assert headers({'connection': ['close', 'close']}).should_close() == False


def test_request_is_frozen():

    req = request.parse(b'abc 56 / 2:{},0:,')

    with pytest.raises(AttributeError):
        req.uuid = 'other'




def test_empty_header_lists_are_omitted():

    headers = Dict(((b'accept', List(())), (b'host', String(b'example.com'))))
    req = request.parse(message(headers))
    assert req.headers == {'host': ['example.com']}
    assert 'accept' not in req.headers

    headers = String(b'{"accept": [], "host": "example.com"}')
    req = request.parse(message(headers))
    assert req.headers == {'host': ['example.com']}

    # An empty repeat does not disturb values already received.

    headers = Dict(((b'accept', String(b'a')), (b'accept', List(()))))
    req = request.parse(message(headers))
    assert req.headers == {'accept': ['a']}

    for values in req.headers.values():
        assert values != []


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
