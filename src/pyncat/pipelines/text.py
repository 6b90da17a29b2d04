"""In-memory payload pipeline."""

from typing import List, Optional

from pyncat.config import CmdLineArgs
from pyncat.errors import Except, PipelineError
from pyncat.io.output import status
from pyncat.io.streams import MemorySource
from pyncat.network.tcp import TcpClient
from pyncat.pipelines.base import Pipeline
from pyncat.pipelines.context import PipeContext
from pyncat.shell.platform import Platform


class TextPipe(Pipeline):
    """Sends the configured payload to the socket once, then disconnects."""

    def __init__(self, client: TcpClient, args: CmdLineArgs, platform: Optional[Platform] = None):
        if not args.payload:
            raise PipelineError(Except.PAYLOAD, "-t/--text")

        super().__init__(
            client,
            args,
            source=MemorySource(args.payload.encode("utf-8")),
            dest=client,
            platform=platform,
        )

    async def _pump(self) -> None:
        await self._transfer_once()

        if self.args.verbose:
            status("Payload successfully transmitted")

        self.disconnect()


class TextPipeFactory:
    def create_pipelines(self, context: PipeContext) -> List[Pipeline]:
        return [TextPipe(context.client, context.args, context.platform)]
