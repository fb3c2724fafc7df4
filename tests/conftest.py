import pytest

from .servers.echo_body_parts_server import EchoBodyPartsServer
from .servers.echo_server import EchoServer


@pytest.fixture
def echo_server() -> EchoServer:
    server = EchoServer()
    assert server.url.startswith("http://")
    return server


@pytest.fixture
def echo_body_parts_server() -> EchoBodyPartsServer:
    return EchoBodyPartsServer()
