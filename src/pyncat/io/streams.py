"""
Byte stream endpoints used by the pipelines.

A pipeline source exposes ``receive``, ``read_all`` and ``aclose``; a pipeline
destination exposes ``send`` and ``aclose``. ``TcpClient`` satisfies both
protocols; this module provides the local endpoints: console, process pipes,
files and in-memory payloads.
"""

import io
import os
import stat
import sys
from typing import BinaryIO, Optional, Protocol, runtime_checkable

import anyio
from anyio import to_thread
from anyio.abc import ByteReceiveStream, ByteSendStream
from anyio.lowlevel import checkpoint

from pyncat.config import BUFFER_SIZE

# Stream failures that end a relay without being reported as errors
STREAM_ERRORS = (
    anyio.BrokenResourceError,
    anyio.ClosedResourceError,
    anyio.EndOfStream,
    OSError,
)


@runtime_checkable
class ByteSource(Protocol):
    """Readable end of a pipeline."""

    async def receive(self, max_bytes: int = BUFFER_SIZE) -> bytes:
        """Read up to ``max_bytes``; an empty result means end of stream."""
        ...

    async def read_all(self) -> bytes:
        """Read until end of stream."""
        ...

    async def aclose(self) -> None:
        ...


@runtime_checkable
class ByteSink(Protocol):
    """Writable end of a pipeline."""

    async def send(self, data: bytes) -> None:
        ...

    async def aclose(self) -> None:
        ...


class _ReadAllMixin:
    async def read_all(self) -> bytes:
        chunks = []
        while chunk := await self.receive():
            chunks.append(chunk)
        return b"".join(chunks)


class ReceiveStreamSource(_ReadAllMixin):
    """Source reading from an anyio byte receive stream (e.g. process stdout)."""

    def __init__(self, stream: ByteReceiveStream):
        self._stream = stream
        self._closed = False

    async def receive(self, max_bytes: int = BUFFER_SIZE) -> bytes:
        if self._closed:
            return b""
        try:
            return await self._stream.receive(max_bytes)
        except STREAM_ERRORS:
            return b""

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            with anyio.CancelScope(shield=True):
                try:
                    await self._stream.aclose()
                except STREAM_ERRORS:
                    pass


class SendStreamSink:
    """Destination writing to an anyio byte send stream (e.g. process stdin)."""

    def __init__(self, stream: ByteSendStream):
        self._stream = stream
        self._closed = False

    async def send(self, data: bytes) -> None:
        if self._closed:
            raise anyio.ClosedResourceError
        await self._stream.send(data)

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            with anyio.CancelScope(shield=True):
                try:
                    await self._stream.aclose()
                except STREAM_ERRORS:
                    pass


class ConsoleSource(_ReadAllMixin):
    """Source reading raw bytes from the local console input.

    Pipes, sockets and terminals are awaited on the event loop. Regular files
    and Windows consoles cannot be polled, so reads are delegated to a worker
    thread which is abandoned if the pipeline is cancelled.
    """

    def __init__(self, fd: Optional[int] = None):
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._closed = False

    def _pollable(self) -> bool:
        if os.name == "nt":
            return False
        return not stat.S_ISREG(os.fstat(self._fd).st_mode)

    async def receive(self, max_bytes: int = BUFFER_SIZE) -> bytes:
        if self._closed:
            return b""
        try:
            if self._pollable():
                await anyio.wait_readable(self._fd)
                return os.read(self._fd, max_bytes)
            return await to_thread.run_sync(
                os.read, self._fd, max_bytes, abandon_on_cancel=True
            )
        except OSError:
            return b""

    async def aclose(self) -> None:
        # The process-wide console input stays open
        self._closed = True


class ConsoleSink:
    """Destination writing raw bytes to the local console output."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self._stream = stream if stream is not None else sys.stdout.buffer
        self._closed = False

    async def send(self, data: bytes) -> None:
        if self._closed:
            raise anyio.ClosedResourceError
        await checkpoint()
        self._stream.write(data)
        self._stream.flush()

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            try:
                self._stream.flush()
            except (OSError, ValueError):
                pass


class FileSource(_ReadAllMixin):
    """Source reading an existing local file."""

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[anyio.AsyncFile] = None
        self._closed = False

    async def receive(self, max_bytes: int = BUFFER_SIZE) -> bytes:
        if self._closed:
            return b""
        if self._file is None:
            self._file = await anyio.open_file(self.path, "rb")
        return await self._file.read(max_bytes)

    async def read_all(self) -> bytes:
        if self._closed:
            return b""
        if self._file is None:
            self._file = await anyio.open_file(self.path, "rb")
        return await self._file.read()

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            if self._file is not None:
                with anyio.CancelScope(shield=True):
                    await self._file.aclose()


class FileSink:
    """Destination creating or truncating a local file."""

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[anyio.AsyncFile] = None
        self._closed = False

    async def send(self, data: bytes) -> None:
        if self._closed:
            raise anyio.ClosedResourceError
        if self._file is None:
            self._file = await anyio.open_file(self.path, "wb")
        await self._file.write(data)
        await self._file.flush()

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            if self._file is not None:
                with anyio.CancelScope(shield=True):
                    await self._file.aclose()


class MemorySource(_ReadAllMixin):
    """Source reading a pre-materialized in-memory buffer."""

    def __init__(self, data: bytes = b""):
        self._buffer = io.BytesIO(data)

    async def receive(self, max_bytes: int = BUFFER_SIZE) -> bytes:
        await checkpoint()
        if self._buffer.closed:
            return b""
        return self._buffer.read(max_bytes)

    async def aclose(self) -> None:
        self._buffer.close()
