"""Zero-I/O connection status pipeline."""

from typing import List, Optional

from pyncat.config import CmdLineArgs
from pyncat.io.output import status
from pyncat.io.streams import MemorySource
from pyncat.network.endpoint import HostEndPoint
from pyncat.network.tcp import TcpClient
from pyncat.pipelines.base import Pipeline
from pyncat.pipelines.context import PipeContext
from pyncat.shell.platform import Platform


class StatusPipe(Pipeline):
    """Probes connectivity: writes nothing meaningful, reports and disconnects."""

    def __init__(
        self,
        client: TcpClient,
        args: CmdLineArgs,
        target: HostEndPoint,
        platform: Optional[Platform] = None,
    ):
        super().__init__(client, args, source=MemorySource(), dest=client, platform=platform)
        self.target = target

    async def _pump(self) -> None:
        await self._transfer_once()
        status(f"Connection accepted by {self.target}")
        self.disconnect()


class StatusPipeFactory:
    def create_pipelines(self, context: PipeContext) -> List[Pipeline]:
        return [StatusPipe(context.client, context.args, context.target, context.platform)]
