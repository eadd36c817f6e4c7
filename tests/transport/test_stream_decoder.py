from __future__ import annotations

from typing import Iterator, List

import httpx
import pytest
from pydantic import BaseModel

from ollamakit.domain.errors import Cancelled, NetworkError, UnexpectedStatusCode
from ollamakit.transport.http import TransportHttpClient
from ollamakit.transport.stream import NDJSONDecoder


class Rec(BaseModel):
    a: int


class ChunkStream(httpx.SyncByteStream):
    """Byte stream that yields fixed chunks, optionally failing after them."""

    def __init__(self, chunks: List[bytes], fail_with: Exception = None) -> None:
        self.chunks = chunks
        self.fail_with = fail_with
        self.served = 0
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self.chunks:
            self.served += 1
            yield chunk
        if self.fail_with is not None:
            raise self.fail_with

    def close(self) -> None:
        self.closed = True


def _client(handler) -> TransportHttpClient:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return TransportHttpClient("http://ollama.test", http_client=http)


def _decode_all(chunks: List[bytes], **kwargs) -> List[Rec]:
    decoder = NDJSONDecoder(Rec, **kwargs)
    out: List[Rec] = []
    for chunk in chunks:
        out.extend(decoder.feed(chunk))
    return out


# ---------------- NDJSONDecoder ----------------

def test_malformed_line_is_skipped():
    records = _decode_all([b'{"a":1}\n{bad json}\n{"a":2}\n'])
    assert [r.a for r in records] == [1, 2]


def test_records_split_across_chunks():
    records = _decode_all([b'{"a"', b':1}\n{"a":', b'2}', b'\n'])
    assert [r.a for r in records] == [1, 2]


def test_one_byte_chunks():
    payload = b'{"a":7}\n{"a":8}\n'
    records = _decode_all([payload[i:i + 1] for i in range(len(payload))])
    assert [r.a for r in records] == [7, 8]


def test_trailing_fragment_is_never_emitted():
    decoder = NDJSONDecoder(Rec)
    records = list(decoder.feed(b'{"a":1}\n{"a":2}'))
    assert [r.a for r in records] == [1]
    assert decoder.pending == b'{"a":2}'


def test_blank_and_wrong_shape_lines_are_dropped():
    records = _decode_all([b'\n{"b":1}\n{"a":"x"}\n{"a":3}\r\n'])
    assert [r.a for r in records] == [3]


def test_discard_hook_sees_dropped_lines():
    dropped = []
    records = _decode_all([b'{"a":1}\nnope\n'], on_discard=lambda line, err: dropped.append(line))
    assert [r.a for r in records] == [1]
    assert dropped == [b"nope\n"]


# ---------------- TransportHttpClient.stream ----------------

def test_stream_yields_records_in_order():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=ChunkStream([b'{"a":1}\n{"a"', b':2}\n{bad}\n{"a":3}\n']))

    records = list(_client(handler).stream("pull", b"{}", Rec))
    assert [r.a for r in records] == [1, 2, 3]


def test_stream_sends_post_with_json_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["ct"] = request.headers.get("content-type")
        seen["body"] = request.content
        return httpx.Response(200, content=b"")

    assert list(_client(handler).stream("chat", b'{"stream":true}', Rec)) == []
    assert seen == {
        "method": "POST",
        "url": "http://ollama.test/api/chat",
        "ct": "application/json",
        "body": b'{"stream":true}',
    }


def test_stream_is_lazy():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200, content=b'{"a":1}\n')

    it = _client(handler).stream("generate", b"{}", Rec)
    assert calls == []
    assert next(it).a == 1
    assert calls == [1]


@pytest.mark.parametrize("status", [404, 400, 500])
def test_stream_non_2xx_raises_unexpected_status(status):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=b'{"a":1}\n')

    it = _client(handler).stream("pull", b"{}", Rec)
    with pytest.raises(UnexpectedStatusCode) as ei:
        next(it)
    assert ei.value.status_code == status


def test_stream_connect_failure_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NetworkError) as ei:
        list(_client(handler).stream("pull", b"{}", Rec))
    assert isinstance(ei.value.underlying, httpx.ConnectError)


def test_stream_failure_mid_body_ends_with_network_error_after_records():
    body = ChunkStream([b'{"a":1}\n'], fail_with=httpx.ReadError("reset"))
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200, stream=body)

    it = _client(handler).stream("pull", b"{}", Rec)
    assert next(it).a == 1
    with pytest.raises(NetworkError):
        next(it)
    # No retry for streams.
    assert calls == [1]


def test_closing_stream_releases_response_and_stops_emission():
    body = ChunkStream([b'{"a":1}\n', b'{"a":2}\n', b'{"a":3}\n'])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=body)

    it = _client(handler).stream("generate", b"{}", Rec)
    assert next(it).a == 1
    it.close()
    assert body.closed
    assert body.served == 1
    with pytest.raises(StopIteration):
        next(it)


def test_cancel_event_between_chunks():
    import threading

    event = threading.Event()
    body = ChunkStream([b'{"a":1}\n', b'{"a":2}\n'])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=body)

    it = _client(handler).stream("generate", b"{}", Rec, cancel_event=event)
    assert next(it).a == 1
    event.set()
    with pytest.raises(Cancelled):
        next(it)
    assert body.closed
