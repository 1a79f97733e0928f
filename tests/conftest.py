import io
import json
import logging
import socket
import threading

import pytest

from logdispatch.logger import make_console_logger


class TCPReceiver:
    """Accepts one connection and keeps everything written to it."""

    def __init__(self):
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(1)
        self._sock.settimeout(5.0)
        self.address = self._sock.getsockname()
        self.data = b""
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        try:
            conn, _ = self._sock.accept()
        except OSError:
            self._done.set()
            return
        with conn:
            conn.settimeout(5.0)
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                self.data += chunk
        self._done.set()

    def wait(self, timeout=5.0) -> bytes:
        self._done.wait(timeout)
        return self.data

    def close(self):
        self._sock.close()
        self._thread.join(timeout=5)


@pytest.fixture
def udp_receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5.0)
    yield sock
    sock.close()


@pytest.fixture
def tcp_receiver():
    receiver = TCPReceiver()
    yield receiver
    receiver.close()


@pytest.fixture
def closed_port():
    """A localhost port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def console_stream():
    return io.StringIO()


@pytest.fixture
def console(console_stream):
    return make_console_logger("test-console", level=logging.DEBUG, stream=console_stream)


@pytest.fixture
def console_lines(console_stream):
    """Callable returning the console output parsed as JSON lines."""
    def read():
        return [json.loads(line) for line in console_stream.getvalue().splitlines() if line.strip()]
    return read


@pytest.fixture
def udp6_receiver():
    if not socket.has_ipv6:
        pytest.skip("IPv6 not available")
    sock = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
    try:
        sock.bind(("::1", 0))
    except OSError:
        sock.close()
        pytest.skip("cannot bind ::1")
    sock.settimeout(5.0)
    yield sock
    sock.close()
