"""
Connection node base class.

A node owns the socket client, the optional child process and the pipelines
that relay data between them. Subclasses only differ in how the socket stream
is acquired (``_open_transport``).
"""

import subprocess
from types import TracebackType
from typing import Any, Dict, List, Optional, Type

import anyio
from anyio.abc import Process

from pyncat.config import CmdLineArgs, PipeType, get_seconds
from pyncat.errors import Except, ProcessError, UsageError
from pyncat.io.output import info, newline
from pyncat.io.streams import ByteSink, ByteSource
from pyncat.network.endpoint import HostEndPoint
from pyncat.network.tcp import TcpClient
from pyncat.pipelines.base import Pipeline
from pyncat.pipelines.context import PipeContext
from pyncat.pipelines.registry import PipelineFactoryRegistry, get_pipeline_factory_registry
from pyncat.shell.command import exists_on_path
from pyncat.shell.platform import Platform, user_home
from pyncat.telemetry import get_logger

logger = get_logger(__name__)

# Seconds a terminated child process is given before it is killed
PROCESS_EXIT_GRACE = 1.0


class Node:
    """Base class for the client and server socket nodes."""

    # Whether this node accepts the connection instead of initiating it
    listening = False

    def __init__(
        self,
        args: CmdLineArgs,
        config: Optional[Dict[str, Any]] = None,
        registry: Optional[PipelineFactoryRegistry] = None,
        platform: Optional[Platform] = None,
        console_in: Optional[ByteSource] = None,
        console_out: Optional[ByteSink] = None,
    ):
        """Initialize the node.

        Args:
            args: The validated command-line configuration.
            config: Optional runtime tunables (``connect_timeout``,
                ``poll_interval``) overriding the environment and defaults.
            registry: Pipeline factory registry. Defaults to the built-in one.
            platform: Local platform. Defaults to the running platform.
            console_in: Console source for stream mode. Defaults to stdin.
            console_out: Console sink for stream mode. Defaults to stdout.

        Raises:
            ConfigurationError: If a runtime tunable is invalid.
        """
        self.args = args
        self.endpoint = HostEndPoint(args.host_name, args.port, args.address)
        self.client = TcpClient()
        self.process: Optional[Process] = None
        self.pipelines: List[Pipeline] = []

        self.connect_timeout = get_seconds("connect_timeout", config)
        self.poll_interval = get_seconds("poll_interval", config)

        self._registry = registry or get_pipeline_factory_registry()
        self._platform = platform or Platform.current()
        self._console_in = console_in
        self._console_out = console_out
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def __aenter__(self) -> "Node":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.dispose()

    async def connect(self) -> None:
        """Establish the connection and relay data until it ends.

        The argument combinations are validated before any socket or process
        is created. Every resource is disposed before this method returns.

        Raises:
            UsageError: If the configuration combines exclusive modes.
            NetworkError: If the connection cannot be established.
            ProcessError: If the executable cannot be launched.
            PipelineError: If a pipeline endpoint cannot be opened.
        """
        self.validate_mode_combinations()
        try:
            peer = await self._open_transport()
            logger.debug("node.transport_ready", peer=str(peer), listening=self.listening)

            if self.args.using_exe:
                await self.start_process(self.args.exe_path)

            if self.listening or self.args.pipe_variant is not PipeType.STATUS:
                info(f"Connected to {peer}")

            self.pipelines = self._make_pipelines(peer)

            async with anyio.create_task_group() as tg:
                for pipe in self.pipelines:
                    pipe.connect(tg)

                await self.wait_for_exit()
                tg.cancel_scope.cancel()

            if self.listening:
                newline()
            info(f"Connection to {peer} closed")
        finally:
            await self.dispose()

    async def _open_transport(self) -> HostEndPoint:
        """Acquire the socket stream and attach it to the client.

        Returns:
            The endpoint of the connected peer, used for status output.
        """
        raise NotImplementedError

    def _make_pipelines(self, peer: HostEndPoint) -> List[Pipeline]:
        context = PipeContext(
            client=self.client,
            args=self.args,
            target=peer,
            process=self.process,
            platform=self._platform,
            console_in=self._console_in,
            console_out=self._console_out,
        )
        return self._registry.create_pipelines(self.args.pipe_variant, context)

    def validate_mode_combinations(self) -> None:
        """Reject configurations that enable more than one relay mode.

        Raises:
            UsageError: Naming the first conflicting option pair.
        """
        args = self.args

        if args.using_exe and args.transfer:
            raise UsageError(Except.ARGS_COMBO, "--exec, --output/--send")

        if args.using_exe and args.using_payload:
            raise UsageError(Except.ARGS_COMBO, "--exec, --text")

        if args.using_payload and args.transfer:
            raise UsageError(Except.ARGS_COMBO, "--text, --output/--send")

        if args.zero_io:
            if self.listening:
                raise UsageError(Except.ARGS_COMBO, "--listen, --zero-io")
            if args.using_payload:
                raise UsageError(Except.ARGS_COMBO, "--zero-io, --text")
            if args.transfer:
                raise UsageError(Except.ARGS_COMBO, "--zero-io, --output/--send")
            if args.using_exe:
                raise UsageError(Except.ARGS_COMBO, "--exec, --zero-io")

    async def start_process(self, exe: Optional[str]) -> Process:
        """Launch the given executable with its standard streams piped.

        The process runs in the user's home directory, without a console
        window on Windows.

        Args:
            exe: Executable name or path.

        Returns:
            The running process.

        Raises:
            ProcessError: If the executable cannot be located or launched.
        """
        if not exe:
            raise ProcessError(Except.NAMED_ARGS, "-e/--exec", show_usage=True)

        path = exists_on_path(exe)
        if path is None:
            raise ProcessError(Except.EXE_PATH, exe, show_usage=True)

        kwargs = {}
        if self._platform is Platform.WIN:
            kwargs["creationflags"] = getattr(subprocess, "CREATE_NO_WINDOW", 0)

        try:
            self.process = await anyio.open_process(
                [path],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=user_home(),
                **kwargs,
            )
        except OSError as exc:
            raise ProcessError(Except.EXE_PROCESS, path) from exc

        logger.debug("node.process_started", path=path, pid=self.process.pid)
        return self.process

    async def wait_for_exit(self, poll_interval: Optional[float] = None) -> None:
        """Block until the pipelines stop, the process exits or the socket closes.

        Args:
            poll_interval: Seconds between checks. Defaults to the configured
                poll interval.
        """
        interval = poll_interval or self.poll_interval

        while self.client.connected:
            await anyio.sleep(interval)

            if self._process_exited() or not self._pipelines_connected():
                break

    def _process_exited(self) -> bool:
        return (
            self.args.using_exe
            and self.process is not None
            and self.process.returncode is not None
        )

    def _pipelines_connected(self) -> bool:
        return any(pipe.connected for pipe in self.pipelines)

    async def dispose(self) -> None:
        """Release the pipelines, the child process and the socket client.

        Safe to call more than once.
        """
        if self._disposed:
            return
        self._disposed = True

        with anyio.CancelScope(shield=True):
            for pipe in self.pipelines:
                await pipe.dispose()

            if self.process is not None:
                await self._close_process(self.process)

            await self.client.aclose()

        logger.debug("node.disposed", node=type(self).__name__)

    @staticmethod
    async def _close_process(process: Process) -> None:
        if process.returncode is None:
            try:
                process.terminate()
            except ProcessLookupError:
                pass

        # Process.aclose kills the child if the wait is cancelled
        with anyio.move_on_after(PROCESS_EXIT_GRACE):
            await process.aclose()

