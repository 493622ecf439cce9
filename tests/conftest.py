"""Shared fixtures for PortProbe tests."""

import socket
import sys
import threading
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from prober.models import HostStatus  # noqa: E402


class StubLiveness:
    """Liveness check returning a fixed answer and recording calls."""

    def __init__(self, status: HostStatus = HostStatus.UNKNOWN) -> None:
        self.status = status
        self.calls = []

    def check(self, target: str, timeout_ms: int) -> HostStatus:
        self.calls.append((target, timeout_ms))
        return self.status


class BrokenLiveness:
    def check(self, target: str, timeout_ms: int) -> HostStatus:
        raise RuntimeError("icmp socket unavailable")


@pytest.fixture
def listener():
    """A loopback TCP listener that accepts and drops connections; yields its port."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("127.0.0.1", 0))
    server.listen(128)
    server.settimeout(0.05)
    stop = threading.Event()

    def accept_loop():
        while not stop.is_set():
            try:
                conn, _ = server.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            conn.close()

    thread = threading.Thread(target=accept_loop, daemon=True)
    thread.start()
    try:
        yield server.getsockname()[1]
    finally:
        stop.set()
        thread.join(timeout=1)
        server.close()


@pytest.fixture
def closed_port():
    """A loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def stub_liveness():
    return StubLiveness


@pytest.fixture
def broken_liveness():
    return BrokenLiveness()
