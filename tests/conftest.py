"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Callable, Generator

import pytest

from minihttp.config import Config
from minihttp.context import Context
from minihttp.server import Server


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample GET request head."""
    return (
        b"GET /api/users?page=1 HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample POST request with a body left for the handler."""
    return (
        b"POST /api/users HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Length: 13\r\n"
        b"\r\n"
        b'{"name":"Jo"}'
    )


class RunningServer:
    """Server running its accept loop in a background thread."""

    def __init__(self, server: Server):
        self.server = server
        self.error: BaseException = None
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self):
        try:
            self.server.listen()
        except BaseException as e:
            self.error = e

    def start(self):
        self._thread.start()
        if not self.server.ready.wait(5.0):
            raise RuntimeError("Server failed to start")
        self.port = self.server.address[1]

    def stop(self):
        self.server.stop()
        self._thread.join(timeout=5.0)
        if self.server.pool is not None:
            self.server.pool.join(timeout=5.0)

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def request(self, raw: bytes) -> bytes:
        """Send raw bytes, half-close, and read until the server closes."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(raw)
            s.shutdown(socket.SHUT_WR)
            return recv_all(s)


def recv_all(s: socket.socket) -> bytes:
    """Read until EOF; a reset counts as EOF since dropped requests close abruptly."""
    chunks = []
    while True:
        try:
            chunk = s.recv(4096)
        except ConnectionResetError:
            return b"".join(chunks)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


@pytest.fixture
def run_server() -> Generator[Callable[..., RunningServer], None, None]:
    """Factory starting a server on a free port with the given handler."""
    started = []

    def factory(handler: Callable[[Context], None], **overrides) -> RunningServer:
        config = Config(port=0, accept_timeout=0.1, **overrides)
        running = RunningServer(Server(config, handler))
        running.start()
        started.append(running)
        return running

    yield factory

    for running in started:
        running.stop()
