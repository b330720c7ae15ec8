import threading
from urllib.parse import parse_qsl

import httpx
import pytest

import httputil
from httputil.exceptions import RequestBuildError, ResponseError


class Recorder:
    """MockTransport handler that records every request it sees."""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.requests = []
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        return httpx.Response(self.status_code, content=request.url.path.encode())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def test_get_sends_query_and_headers() -> None:
    recorder = Recorder()
    response = httputil.get(
        "http://svc/items", {"b": "2", "a": "1"}, ["Token: 123"], {"timeout": 5},
        transport=recorder.transport,
    )

    assert httputil.read_body(response) == b"/items"
    sent = recorder.requests[0]
    assert sent.method == "GET"
    assert str(sent.url) == "http://svc/items?a=1&b=2"
    assert sent.headers["Token"] == "123"
    assert sent.extensions["timeout"]["read"] == 5


def test_timeout_option_falls_back_to_default() -> None:
    recorder = Recorder()
    httputil.get("http://svc/", None, None, {"timeout": -3}, transport=recorder.transport)
    assert recorder.requests[0].extensions["timeout"]["read"] == 30


def test_post_sends_form_body() -> None:
    recorder = Recorder()
    httputil.post("http://svc/form", {"name": "a b"}, transport=recorder.transport)

    sent = recorder.requests[0]
    assert sent.method == "POST"
    assert sent.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert dict(parse_qsl(sent.content.decode())) == {"name": "a b"}


def test_post_json_sends_json_body() -> None:
    recorder = Recorder()
    httputil.post_json("http://svc/json", {"a": 1}, {"X-Trace": "t"}, transport=recorder.transport)

    sent = recorder.requests[0]
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.headers["X-Trace"] == "t"
    assert sent.content == b'{"a":1}'


def test_request_post_json_matches_post_json() -> None:
    via_request = Recorder()
    via_helper = Recorder()
    httputil.request("post/json", "http://svc/j", {"a": [1, 2]}, transport=via_request.transport)
    httputil.post_json("http://svc/j", {"a": [1, 2]}, transport=via_helper.transport)

    a, b = via_request.requests[0], via_helper.requests[0]
    assert (a.method, str(a.url), a.content) == (b.method, str(b.url), b.content)
    assert a.headers["Content-Type"] == b.headers["Content-Type"]


def test_request_post_is_form() -> None:
    recorder = Recorder()
    httputil.request("Post", "http://svc/f", {"a": "1"}, transport=recorder.transport)
    assert recorder.requests[0].headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_request_unknown_method_falls_back_to_get() -> None:
    recorder = Recorder()
    httputil.request("PATCH", "http://svc/p", {"a": "1"}, transport=recorder.transport)
    sent = recorder.requests[0]
    assert sent.method == "GET"
    assert sent.url.query == b"a=1"


def test_non_200_raises_with_response_attached() -> None:
    recorder = Recorder(status_code=201)
    with pytest.raises(ResponseError) as exc_info:
        httputil.post_json("http://svc/create", {"a": 1}, transport=recorder.transport)

    assert exc_info.value.status_code == 201
    assert httputil.read_body(exc_info.value.response) == b"/create"


def test_bad_url_sends_nothing() -> None:
    recorder = Recorder()
    with pytest.raises(RequestBuildError):
        httputil.get("svc/no-scheme", {"a": "1"}, transport=recorder.transport)
    assert recorder.requests == []


def test_concurrent_gets_do_not_interfere() -> None:
    recorder = Recorder()
    results = {}
    errors = []

    def worker(i: int) -> None:
        try:
            response = httputil.get(
                f"http://svc/item/{i}", {"i": str(i)}, {"X-Caller": str(i)}, {"timeout": i + 1},
                transport=recorder.transport,
            )
            results[i] = httputil.read_body(response)
        except Exception as e:  # collected and asserted below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert results == {i: f"/item/{i}".encode() for i in range(10)}
    for sent in recorder.requests:
        i = int(sent.headers["X-Caller"])
        assert sent.url.path == f"/item/{i}"
        assert sent.url.params["i"] == str(i)
        assert sent.extensions["timeout"]["read"] == i + 1


class ExplodingResponse(httpx.Response):
    def read(self) -> bytes:
        raise httpx.ReadError("stream broke")


def test_read_body_closes_on_failure() -> None:
    response = ExplodingResponse(200, stream=httpx.ByteStream(b"data"))
    assert not response.is_closed
    with pytest.raises(httpx.ReadError):
        httputil.read_body(response)
    assert response.is_closed


def test_read_body_returns_content_and_closes() -> None:
    response = httpx.Response(200, stream=httpx.ByteStream(b'{"a":1}'))
    assert httputil.read_body(response) == b'{"a":1}'
    assert response.is_closed
    # already released, a second call just returns the cached body
    assert httputil.read_body(response) == b'{"a":1}'
