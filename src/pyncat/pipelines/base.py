"""
Pipeline base class.

A pipeline is a unidirectional byte pump between a source and a destination.
``connect`` schedules the pump on a task group and returns immediately; the
pump runs inside the pipeline's own cancel scope so ``disconnect`` stops it at
its next checkpoint without touching sibling pipelines.
"""

from typing import Optional

import anyio
from anyio.abc import TaskGroup

from pyncat.config import BUFFER_SIZE, CmdLineArgs
from pyncat.io.output import clear_screen
from pyncat.io.streams import STREAM_ERRORS, ByteSink, ByteSource
from pyncat.network.tcp import TcpClient
from pyncat.shell.command import is_clear_command, normalize_line_endings
from pyncat.shell.platform import Platform
from pyncat.telemetry import get_logger

logger = get_logger(__name__)


class Pipeline:
    """Unidirectional pipeline sharing the node's socket client."""

    # Whether clear-screen commands are handled locally instead of forwarded
    intercepts_clear = False

    def __init__(
        self,
        client: TcpClient,
        args: CmdLineArgs,
        source: Optional[ByteSource] = None,
        dest: Optional[ByteSink] = None,
        platform: Optional[Platform] = None,
    ):
        """Initialize the pipeline.

        Args:
            client: The socket client shared by every pipeline of a node.
            args: The command-line configuration.
            source: The data source.
            dest: The data destination.
            platform: Local platform used for line-ending normalization.
        """
        self.client = client
        self.args = args
        self.source = source
        self.dest = dest
        self.platform = platform or Platform.current()
        self.buffer_size = BUFFER_SIZE

        self._connected = False
        self._disposed = False
        self._scope: Optional[anyio.CancelScope] = None

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def disposed(self) -> bool:
        return self._disposed

    def connect(self, task_group: TaskGroup) -> None:
        """Start relaying data between the source and the destination.

        Args:
            task_group: Task group the pump is scheduled on.

        Raises:
            ValueError: If the source or destination is not set.
            RuntimeError: If the pipeline was already connected.
        """
        if self.source is None:
            raise ValueError(f"{self.name} has no source stream")
        if self.dest is None:
            raise ValueError(f"{self.name} has no destination stream")
        if self._scope is not None:
            raise RuntimeError(f"{self.name} can only be connected once")

        self._scope = anyio.CancelScope()
        self._connected = True
        task_group.start_soon(self._run, name=self.name)

    def disconnect(self) -> None:
        """Stop the pump at its next checkpoint."""
        self._connected = False
        if self._scope is not None:
            self._scope.cancel()

    async def dispose(self) -> None:
        """Release the source, the destination and the shared socket client.

        Safe to call more than once.
        """
        if self._disposed:
            return
        self._disposed = True
        self._connected = False

        with anyio.CancelScope(shield=True):
            for stream in (self.source, self.dest, self.client):
                if stream is None:
                    continue
                try:
                    await stream.aclose()
                except STREAM_ERRORS as exc:
                    logger.debug("pipeline.dispose_error", pipeline=self.name, error=str(exc))

        logger.debug("pipeline.disposed", pipeline=self.name)

    async def _run(self) -> None:
        logger.debug("pipeline.connected", pipeline=self.name)
        try:
            with self._scope:
                await self._pump()
        except STREAM_ERRORS as exc:
            logger.debug("pipeline.stream_error", pipeline=self.name, error=str(exc))
        finally:
            self._connected = False
            await self.dispose()
            logger.debug("pipeline.disconnected", pipeline=self.name)

    async def _pump(self) -> None:
        """Relay chunks until the socket or the source is exhausted."""
        while self.client.connected:
            if self._scope.cancel_called:
                self.disconnect()
                break

            data = await self.source.receive(self.buffer_size)

            if not self.client.connected or not data:
                self.disconnect()
                break

            await self._forward(normalize_line_endings(data, self.platform))

    async def _forward(self, data: bytes) -> None:
        if self.intercepts_clear and is_clear_command(data):
            clear_screen()
            await self.dest.send(self.platform.eol)
        else:
            await self.dest.send(data)

    async def _transfer_once(self) -> int:
        """Read the whole source and write it to the destination in one go.

        Returns:
            The number of bytes written.
        """
        data = await self.source.read_all()
        await self.dest.send(data)
        return len(data)

    def __repr__(self) -> str:
        return f"<{self.name} connected={self._connected} disposed={self._disposed}>"
