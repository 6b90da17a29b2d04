"""Executable process pipelines."""

from typing import List

from pyncat.io.output import newline
from pyncat.io.streams import ReceiveStreamSource, SendStreamSink
from pyncat.pipelines.base import Pipeline
from pyncat.pipelines.context import PipeContext


class ProcessPipe(Pipeline):
    """Relays data between the socket and one standard stream of a child process."""

    async def _pump(self) -> None:
        await super()._pump()

        if not self.args.using_exe:
            newline()


class ProcessPipeFactory:
    """Builds the three pipelines wired to a child process's standard streams."""

    def create_pipelines(self, context: PipeContext) -> List[Pipeline]:
        process = context.process
        if process is None:
            raise ValueError("Process pipelines require a running process")

        client, args, platform = context.client, context.args, context.platform
        return [
            ProcessPipe(client, args, client, SendStreamSink(process.stdin), platform),
            ProcessPipe(client, args, ReceiveStreamSource(process.stdout), client, platform),
            ProcessPipe(client, args, ReceiveStreamSource(process.stderr), client, platform),
        ]
