"""Console stream pipelines."""

from typing import List

from pyncat.io.streams import ConsoleSink, ConsoleSource
from pyncat.pipelines.base import Pipeline
from pyncat.pipelines.context import PipeContext


class StreamPipe(Pipeline):
    """Relays the local console to the socket, or the socket to the console.

    Clear-screen commands are handled locally: the console is cleared and a
    single newline is sent instead of the command.
    """

    intercepts_clear = True


class StreamPipeFactory:
    """Builds the two console pipelines of an interactive session."""

    def create_pipelines(self, context: PipeContext) -> List[Pipeline]:
        console_out = context.console_out or ConsoleSink()
        console_in = context.console_in or ConsoleSource()

        return [
            StreamPipe(context.client, context.args, context.client, console_out, context.platform),
            StreamPipe(context.client, context.args, console_in, context.client, context.platform),
        ]
