from typing import Any

import orjson
import pytest
from pyexchange import delete, get, post, put, request
from pyexchange.exceptions import ArgumentError

from .servers.echo_server import EchoServer
from .utils import CallbackRecorder


def test_get_url_only(echo_server: EchoServer) -> None:
    exchange = get(echo_server.url, transport=echo_server.transport)
    assert exchange.status == 200
    assert orjson.loads(exchange.content)["method"] == "GET"


def test_get_success(echo_server: EchoServer) -> None:
    recorder = CallbackRecorder()
    exchange = get(echo_server.url, recorder.success, transport=echo_server.transport)
    assert recorder.names == ["success"]
    assert recorder.args("success")[3] is exchange


def test_get_success_error(echo_server: EchoServer) -> None:
    recorder = CallbackRecorder()
    get(f"{echo_server.url}?status=500", recorder.success, recorder.error, transport=echo_server.transport)
    assert recorder.names == ["error"]
    assert recorder.args("error")[:2] == ("Internal Server Error", 500)


def test_get_data_success(echo_server: EchoServer) -> None:
    recorder = CallbackRecorder()
    get(echo_server.url, {"a": "1"}, recorder.success, transport=echo_server.transport)
    assert orjson.loads(recorder.args("success")[0])["query"] == [["a", "1"]]


def test_get_data(echo_server: EchoServer) -> None:
    exchange = get(echo_server.url, "a=1&b=2", transport=echo_server.transport)
    assert orjson.loads(exchange.content)["query"] == [["a", "1"], ["b", "2"]]


def test_post_data_success_error(echo_server: EchoServer) -> None:
    recorder = CallbackRecorder()
    post(echo_server.url, b"body", recorder.success, recorder.error, transport=echo_server.transport)
    resp = orjson.loads(recorder.args("success")[0])
    assert resp["method"] == "POST"
    assert resp["body"] == "body"


def test_put(echo_server: EchoServer) -> None:
    exchange = put(echo_server.url, "x=1", content_type="text/plain", transport=echo_server.transport)
    resp = orjson.loads(exchange.content)
    assert resp["method"] == "PUT"
    assert resp["body"] == "x=1"
    assert ["content-type", "text/plain"] in resp["headers"]


def test_delete(echo_server: EchoServer) -> None:
    recorder = CallbackRecorder()
    delete(echo_server.url, {"id": 5}, recorder.success, transport=echo_server.transport)
    resp = orjson.loads(recorder.args("success")[0])
    assert resp["method"] == "DELETE"
    assert resp["query"] == [["id", "5"]]


def test_convenience_options(echo_server: EchoServer) -> None:
    recorder = CallbackRecorder()
    get(echo_server.url, headers={"X-Test": "1"}, complete=recorder.complete, transport=echo_server.transport)
    assert recorder.names == ["complete"]
    assert echo_server.last_request.headers["x-test"] == "1"


def test_request_options_mapping(echo_server: EchoServer) -> None:
    exchange = request({"url": echo_server.url, "method": "put"}, transport=echo_server.transport)
    assert exchange.options.method == "PUT"
    assert orjson.loads(exchange.content)["method"] == "PUT"


@pytest.mark.parametrize("call", [get, post, put, delete])
def test_url_must_be_string(call: Any) -> None:
    with pytest.raises(ArgumentError, match=r"first argument \(url\) must be string"):
        call(123)
    with pytest.raises(ArgumentError, match=r"first argument \(url\) must be string"):
        call()


def test_method_is_fixed(echo_server: EchoServer) -> None:
    with pytest.raises(ArgumentError, match="method is fixed to POST"):
        post(echo_server.url, method="GET", transport=echo_server.transport)
    assert echo_server.calls == 0


def test_positional_and_keyword_conflict(echo_server: EchoServer) -> None:
    with pytest.raises(ArgumentError, match="data given both positionally and as keyword"):
        post(echo_server.url, b"a", data=b"b", transport=echo_server.transport)


def test_bad_three_argument_form(echo_server: EchoServer) -> None:
    with pytest.raises(ArgumentError, match="three argument form"):
        get(echo_server.url, lambda *args: None, {"a": "1"})
    assert echo_server.calls == 0


def test_too_many_arguments(echo_server: EchoServer) -> None:
    cb = CallbackRecorder()
    with pytest.raises(ArgumentError, match="unknown arguments"):
        get(echo_server.url, {}, cb.success, cb.error, cb.complete)


def test_class_is_not_a_callback(echo_server: EchoServer) -> None:
    with pytest.raises(ArgumentError, match="GET data must be a string or a mapping, got type"):
        get(echo_server.url, dict, transport=echo_server.transport)


def test_argument_error_is_type_error() -> None:
    with pytest.raises(TypeError):
        request(url=None)
