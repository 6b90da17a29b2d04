"""File transfer pipeline."""

import os
from typing import List, Optional

from pyncat.config import CmdLineArgs, TransferOpt
from pyncat.errors import Except, PipelineError
from pyncat.io.output import info, status
from pyncat.io.streams import FileSink, FileSource
from pyncat.network.tcp import TcpClient
from pyncat.pipelines.base import Pipeline
from pyncat.pipelines.context import PipeContext
from pyncat.shell.platform import Platform


def check_output_path(path: Optional[str]) -> str:
    """Resolve the path a collected file is written to.

    Raises:
        PipelineError: If the path is empty or its parent directory is missing.
    """
    if not path:
        raise PipelineError(Except.EMPTY_PATH, "-o/--output")

    path = os.path.abspath(os.path.expanduser(path))
    parent = os.path.dirname(path)

    if not os.path.isdir(parent):
        raise PipelineError(Except.DIRECTORY_PATH, parent)
    return path


def check_input_path(path: Optional[str]) -> str:
    """Resolve the path of a file to transmit.

    Raises:
        PipelineError: If the path is empty or the file does not exist.
    """
    if not path:
        raise PipelineError(Except.EMPTY_PATH, "-s/--send")

    path = os.path.abspath(os.path.expanduser(path))
    if not os.path.isfile(path):
        raise PipelineError(Except.FILE_PATH, path)
    return path


class FilePipe(Pipeline):
    """Transfers a whole file to the socket, or the whole socket stream to a file.

    The transfer is one-shot: the source is read to the end and written to the
    destination once, then the pipeline disconnects.
    """

    def __init__(
        self,
        client: TcpClient,
        args: CmdLineArgs,
        transfer: Optional[TransferOpt] = None,
        platform: Optional[Platform] = None,
    ):
        """Initialize the file pipeline.

        Args:
            client: The shared socket client.
            args: The command-line configuration; ``file_path`` is required.
            transfer: Transfer direction. Defaults to ``args.transfer_opt``.
            platform: Local platform.

        Raises:
            PipelineError: If the file path is empty, its parent directory is
                missing, or the file to transmit does not exist.
        """
        super().__init__(client, args, platform=platform)
        self.transfer = transfer or args.transfer_opt

        if self.transfer is TransferOpt.COLLECT:
            self.file_path = check_output_path(args.file_path)
            self.source = client
            self.dest = FileSink(self.file_path)
        elif self.transfer is TransferOpt.TRANSMIT:
            self.file_path = check_input_path(args.file_path)
            self.source = FileSource(self.file_path)
            self.dest = client
        else:
            raise ValueError("A file transfer option is required")

    async def _pump(self) -> None:
        collect = self.transfer is TransferOpt.COLLECT

        if self.args.verbose:
            if collect:
                info(f"Downloading socket data to '{self.file_path}'...")
            else:
                info(f"Transmitting '{self.file_path}' data...")

        await self._transfer_once()

        if self.args.verbose:
            if collect:
                status(f"File successfully downloaded to '{self.file_path}'")
            else:
                status("File successfully transmitted")

        self.disconnect()


class FilePipeFactory:
    def create_pipelines(self, context: PipeContext) -> List[Pipeline]:
        return [FilePipe(context.client, context.args, platform=context.platform)]
