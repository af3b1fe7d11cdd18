import pytest

from beanstalk.protocol import factory, fields
from beanstalk.protocol.errors import ProtocolError, ServerError, UnexpectedResponse
from beanstalk.protocol.request import Request
from beanstalk.transport import TransportConnectionError
from beanstalk.transport.session import ProtocolHandler


def test_put(scripted):
    """ A put writes the command line and the payload, and reads nothing
        beyond the status line.
    """

    transport = scripted(b'INSERTED 42\r\n')
    handler = ProtocolHandler(transport)

    request = Request('put 10 0 60 5', ok=('INSERTED', 'BURIED'), error='JOB_TOO_BIG', payload=b'hello')
    response = handler.process_request(request)

    assert transport.written == [b'put 10 0 60 5\r\nhello\r\n']
    assert response.is_match_ok == True
    assert int(response.response) == 42
    assert response.data is None
    assert transport.consumed == len(b'INSERTED 42\r\n')


def test_reserve(scripted):

    transport = scripted(b'RESERVED 7 3\r\nabc\r\n')
    handler = ProtocolHandler(transport)

    response = handler.process_request(factory.reserve())

    assert transport.written == [b'reserve\r\n']
    assert response.status == 'RESERVED'
    assert response.response == '7'
    assert response.data == b'abc'
    assert transport.incoming == b''


def test_binary_body(scripted):
    """ Job bodies are opaque bytes: CRLF inside a body is not a terminator.
    """

    body = b'\r\n\x00\xff\r\n'
    transport = scripted(b'FOUND 3 %d\r\n' % (len(body)) + body + b'\r\n')
    handler = ProtocolHandler(transport)

    response = handler.process_request(factory.peek(3))
    assert response.data == body


def test_zero_length(scripted):

    transport = scripted(b'RESERVED 8 0\r\n\r\n', b'DELETED\r\n')
    handler = ProtocolHandler(transport)

    response = handler.process_request(factory.reserve())
    assert response.data == b''
    assert transport.incoming == b'DELETED\r\n'

    response = handler.process_request(factory.delete(8))
    assert response.is_match_ok == True


def test_not_found(scripted):

    transport = scripted(b'NOT_FOUND\r\n', b'DELETED\r\n')
    handler = ProtocolHandler(transport)

    response = handler.process_request(factory.delete(99))

    assert transport.written == [b'delete 99\r\n']
    assert response.is_match_error == True
    assert response.is_match_ok == False
    assert response.data is None
    assert transport.incoming == b'DELETED\r\n'
    assert handler.usable == True


def test_error_status_reads_no_block(scripted):

    transport = scripted(b'NOT_FOUND\r\n')
    handler = ProtocolHandler(transport)

    response = handler.process_request(factory.stats_tube('missing'))

    assert transport.written == [b'stats-tube missing\r\n']
    assert response.is_match_error == True
    assert response.data is None
    assert transport.incoming == b''


def test_list_tubes(scripted):

    block = b'---\n- default\n- jobs\n'
    transport = scripted(b'OK %d\r\n' % (len(block)) + block + b'\r\n')
    handler = ProtocolHandler(transport)

    response = handler.process_request(factory.list_tubes())

    assert transport.written == [b'list-tubes\r\n']
    assert response.data == ['default', 'jobs']


def test_stats(scripted):

    block = b'---\ncurrent-jobs-ready: 0\nversion: 1.13\n'
    transport = scripted(b'OK %d\r\n' % (len(block)) + block + b'\r\n')
    handler = ProtocolHandler(transport)

    response = handler.process_request(factory.stats())
    assert response.data == {'current-jobs-ready': '0', 'version': '1.13'}


def test_sequential(scripted):
    """ The second transaction starts reading exactly where the first one
        stopped, terminator included.
    """

    transport = scripted(
        b'RESERVED 1 5\r\nfirst\r\n',
        b'RESERVED 2 6\r\nsecond\r\n',
        b'USING jobs\r\n',
    )
    handler = ProtocolHandler(transport)

    first = handler.process_request(factory.reserve())
    second = handler.process_request(factory.reserve())
    third = handler.process_request(factory.use('jobs'))

    assert (first.response, first.data) == ('1', b'first')
    assert (second.response, second.data) == ('2', b'second')
    assert third.response == 'jobs'
    assert transport.incoming == b''


def test_length_field(scripted):

    request = Request('peek 5', ok='FOUND', shape=fields.BYTES, length_field=1)
    transport = scripted(b'FOUND 5 2\r\nhi\r\n')
    handler = ProtocolHandler(transport)

    response = handler.process_request(request)
    assert response.data == b'hi'


def test_server_error(scripted):
    """ A known error keyword the request does not accept is raised, but the
        reply was complete: the connection remains usable.
    """

    transport = scripted(b'OUT_OF_MEMORY\r\n', b'USING default\r\n')
    handler = ProtocolHandler(transport)

    with pytest.raises(ServerError) as caught:
        handler.process_request(factory.watch('default'))

    assert caught.value.status == 'OUT_OF_MEMORY'
    assert handler.usable == True
    assert transport.closed == False

    response = handler.process_request(factory.use('default'))
    assert response.response == 'default'


def test_unexpected(scripted):

    transport = scripted(b'WHATEVER 1\r\n')
    handler = ProtocolHandler(transport)

    with pytest.raises(UnexpectedResponse) as caught:
        handler.process_request(factory.delete(1))

    assert caught.value.status == 'WHATEVER'
    assert handler.usable == False
    assert transport.closed == True

    with pytest.raises(ProtocolError):
        handler.process_request(factory.delete(1))


def test_empty_status_line(scripted):

    transport = scripted(b'\r\n')
    handler = ProtocolHandler(transport)

    with pytest.raises(ProtocolError):
        handler.process_request(factory.stats())

    assert handler.usable == False


def test_truncated_block(scripted):

    transport = scripted(b'RESERVED 1 10\r\nshort')
    handler = ProtocolHandler(transport)

    with pytest.raises(TransportConnectionError):
        handler.process_request(factory.reserve())

    assert handler.usable == False
    assert transport.closed == True


def test_missing_terminator(scripted):

    transport = scripted(b'RESERVED 1 3\r\nabcXY')
    handler = ProtocolHandler(transport)

    with pytest.raises(ProtocolError):
        handler.process_request(factory.reserve())

    assert handler.usable == False


def test_bad_length(scripted):

    transport = scripted(b'OK many\r\n')
    handler = ProtocolHandler(transport)

    with pytest.raises(ProtocolError):
        handler.process_request(factory.list_tubes())

    transport = scripted(b'OK\r\n')
    handler = ProtocolHandler(transport)

    with pytest.raises(ProtocolError):
        handler.process_request(factory.list_tubes())


def test_close(scripted):

    transport = scripted()
    handler = ProtocolHandler(transport)

    handler.close()
    handler.close()

    assert transport.closed == True
    assert handler.usable == False


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
