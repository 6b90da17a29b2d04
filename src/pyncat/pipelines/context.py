"""Collaborators handed to pipeline factories."""

from dataclasses import dataclass, field
from typing import Optional

from anyio.abc import Process

from pyncat.config import CmdLineArgs
from pyncat.io.streams import ByteSink, ByteSource
from pyncat.network.endpoint import HostEndPoint
from pyncat.network.tcp import TcpClient
from pyncat.shell.platform import Platform


@dataclass
class PipeContext:
    """Everything a node shares with the pipelines it builds."""

    client: TcpClient
    args: CmdLineArgs
    target: HostEndPoint
    process: Optional[Process] = None
    platform: Platform = field(default_factory=Platform.current)
    console_in: Optional[ByteSource] = None
    console_out: Optional[ByteSink] = None
