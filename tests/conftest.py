"""
Pytest configuration for pyncat tests.

This module contains fixtures and fake pipeline endpoints shared by the tests.
"""

import socket
from typing import List, Optional

import pytest

from pyncat.config import CmdLineArgs
from pyncat.telemetry import configure_logging


class FakeSource:
    """In-memory pipeline source yielding a fixed list of chunks."""

    def __init__(self, chunks: Optional[List[bytes]] = None):
        self.chunks = list(chunks or [])
        self.closed = False
        self.close_count = 0

    async def receive(self, max_bytes: int = 1024) -> bytes:
        if self.closed or not self.chunks:
            return b""
        return self.chunks.pop(0)

    async def read_all(self) -> bytes:
        data = b"".join(self.chunks)
        self.chunks = []
        return data

    async def aclose(self) -> None:
        self.close_count += 1
        self.closed = True


class FakeSink:
    """In-memory pipeline destination recording every write."""

    def __init__(self):
        self.writes: List[bytes] = []
        self.closed = False
        self.close_count = 0

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)

    async def send(self, data: bytes) -> None:
        self.writes.append(data)

    async def aclose(self) -> None:
        self.close_count += 1
        self.closed = True


class FakeClient(FakeSink):
    """Stand-in for ``TcpClient`` with a controllable connected state."""

    def __init__(self, chunks: Optional[List[bytes]] = None):
        super().__init__()
        self.source = FakeSource(chunks)

    @property
    def connected(self) -> bool:
        return not self.closed

    async def receive(self, max_bytes: int = 1024) -> bytes:
        return await self.source.receive(max_bytes)

    async def read_all(self) -> bytes:
        return await self.source.read_all()


# Anyio Backend Selection - only use asyncio
@pytest.fixture(params=["asyncio"])
def anyio_backend(request):
    """Fixture to run tests with the asyncio anyio backend."""
    return request.param


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep diagnostic logging at warning level for every test."""
    configure_logging(debug=False)


@pytest.fixture
def free_port() -> int:
    """Fixture providing a loopback port that is currently unused."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def make_args():
    """Fixture building ``CmdLineArgs`` aimed at the loopback address."""

    def _make(**kwargs) -> CmdLineArgs:
        kwargs.setdefault("address", "127.0.0.1")
        return CmdLineArgs(**kwargs)

    return _make
