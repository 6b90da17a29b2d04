"""
Command-line entry point for pyncat.

Parses the arguments into a validated ``CmdLineArgs``, runs the matching node
on an anyio event loop and reports domain errors through ``handle_error``.
"""

import sys
from typing import List, Optional, Sequence

import anyio
import click
import typer

from pyncat.config import (
    DEFAULT_ADDRESS,
    DEFAULT_PORT,
    CmdLineArgs,
    PipeType,
    TransferOpt,
    valid_port,
)
from pyncat.errors import Except, NetworkError, PipelineError, PyncatError, UsageError, handle_error
from pyncat.io.output import newline
from pyncat.network.net import resolve_name
from pyncat.network.nodes import make_node
from pyncat.pipelines.file import check_input_path, check_output_path
from pyncat.shell.command import exists_on_path
from pyncat.telemetry import configure_logging, get_logger

PROG = "pyncat"

QUOTES = ("'", '"')

logger = get_logger(__name__)

# Recent typer releases raise parser errors from their bundled copy of click
click_exceptions = getattr(typer.main, "_click", click).exceptions

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def parse(
    target: Optional[List[str]] = typer.Argument(
        None, metavar="TARGET", help="Remote or local IPv4 address or host name", show_default=False
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable verbose console output"),
    debug: bool = typer.Option(False, "-d", "--debug", help="Output verbose error information"),
    listen: bool = typer.Option(False, "-l", "--listen", help="Listen for incoming connections"),
    zero_io: bool = typer.Option(False, "-z", "--zero-io", help="Report connection status only"),
    port: Optional[str] = typer.Option(
        None, "-p", "--port", metavar="PORT", help=f"Port to use for the endpoint (default: {DEFAULT_PORT})"
    ),
    exe: Optional[str] = typer.Option(None, "-e", "--exec", metavar="EXEC", help="Executable process file path"),
    output: Optional[str] = typer.Option(None, "-o", "--output", metavar="PATH", help="Receive file from remote host"),
    send: Optional[str] = typer.Option(None, "-s", "--send", metavar="PATH", help="Send local file to remote host"),
    text: Optional[str] = typer.Option(None, "-t", "--text", metavar="DATA", help="Send string to remote host"),
) -> CmdLineArgs:
    """Netcat-style TCP relay for remote command shells and file transfers."""
    pipe_variant = PipeType.STREAM
    transfer_opt = TransferOpt.NONE
    file_path = None
    exe_path = None

    if port is None:
        port_num = DEFAULT_PORT
    elif not port:
        raise UsageError(Except.NAMED_ARGS, "-p/--port")
    else:
        try:
            port_num = int(port)
        except ValueError:
            port_num = 0
        if not valid_port(port_num):
            raise UsageError(Except.INVALID_PORT, port)

    if exe is not None:
        if not exe:
            raise UsageError(Except.NAMED_ARGS, "-e/--exec")
        exe_path = exists_on_path(exe)
        if exe_path is None:
            raise UsageError(Except.EXE_PATH, exe)
        pipe_variant = PipeType.PROCESS

    if output is not None and send is not None:
        raise UsageError(Except.ARGS_COMBO, "--output, --send")

    try:
        if output is not None:
            file_path = check_output_path(output)
            transfer_opt = TransferOpt.COLLECT
            pipe_variant = PipeType.FILE

        if send is not None:
            file_path = check_input_path(send)
            transfer_opt = TransferOpt.TRANSMIT
            pipe_variant = PipeType.FILE
    except PipelineError as exc:
        raise UsageError(exc.kind, exc.arg) from exc

    if text is not None:
        if not text:
            raise UsageError(Except.PAYLOAD, "-t/--text")
        pipe_variant = PipeType.TEXT

    # Zero-I/O wins so conflicting modes are still detected by the node
    if zero_io:
        pipe_variant = PipeType.STATUS

    address, host_name = _parse_target(target or [], listen)

    return CmdLineArgs(
        listen=listen,
        verbose=verbose or debug,
        debug=debug,
        pipe_variant=pipe_variant,
        transfer_opt=transfer_opt,
        port=port_num,
        exe_path=exe_path,
        file_path=file_path,
        payload=text,
        address=address,
        host_name=host_name,
    )


def _parse_target(target: List[str], listen: bool):
    if not target:
        if not listen:
            raise UsageError(Except.REQUIRED_ARGS, "TARGET")
        return DEFAULT_ADDRESS, None

    if len(target) > 1:
        joined = ", ".join(target)
        if target[0].startswith("-"):
            raise UsageError(Except.UNKNOWN_ARGS, joined)
        raise UsageError(Except.INVALID_ARGS, joined)

    name = target[0]
    if not name:
        raise UsageError(Except.REQUIRED_ARGS, "TARGET")
    if name.startswith("-"):
        raise UsageError(Except.UNKNOWN_ARGS, name)

    try:
        return resolve_name(name), name
    except NetworkError as exc:
        raise UsageError(Except.HOST_NOT_FOUND, name) from exc


def _join_quoted(argv: List[str]) -> List[str]:
    """Rejoin quoted values that were split into several arguments.

    Shells that do not understand a quote character pass it through, so
    ``-t 'hello world'`` arrives as ``'hello`` and ``world'``. Quotes around
    a complete value are stripped.

    Raises:
        UsageError: If a quoted value is never closed.
    """
    args = []
    pos = 0

    while pos < len(argv):
        arg = argv[pos]
        quote = arg[:1]

        if quote not in QUOTES:
            args.append(arg)
            pos += 1
        elif len(arg) > 1 and arg.endswith(quote):
            args.append(arg[1:-1])
            pos += 1
        else:
            end = next(
                (i for i in range(pos + 1, len(argv)) if argv[i].endswith(quote)),
                None,
            )
            if end is None:
                raise UsageError(Except.STRING_EOL, ", ".join(argv[pos:]))

            args.append(" ".join(argv[pos : end + 1])[1:-1])
            pos = end + 1

    return args


def parse_args(argv: Sequence[str]) -> Optional[CmdLineArgs]:
    """Parse and validate command-line arguments.

    Args:
        argv: Arguments without the program name. Help is shown when empty.

    Returns:
        The validated configuration, or None if help was displayed.

    Raises:
        UsageError: If the arguments are invalid.
    """
    argv = _join_quoted(list(argv)) or ["--help"]

    for malformed in ("-", "--"):
        if malformed in argv:
            raise UsageError(Except.INVALID_ARGS, malformed)

    command = typer.main.get_command(app)
    try:
        result = command.main(argv, prog_name=PROG, standalone_mode=False)
    except click_exceptions.NoSuchOption as exc:
        raise UsageError(Except.UNKNOWN_ARGS, exc.option_name) from exc
    except click_exceptions.BadOptionUsage as exc:
        raise UsageError(Except.NAMED_ARGS, exc.option_name) from exc
    except click_exceptions.ClickException as exc:
        raise UsageError(Except.INVALID_ARGS, exc.format_message()) from exc

    if isinstance(result, CmdLineArgs):
        return result
    return None


async def run_node(args: CmdLineArgs) -> None:
    """Connect a node for the given configuration and relay until it closes."""
    node = make_node(args)
    async with node:
        await node.connect()


def run(argv: Sequence[str]) -> int:
    """Run pyncat with the given arguments.

    Returns:
        The process exit status: 0 on a clean shutdown, 1 on error.
    """
    debug = False
    try:
        args = parse_args(argv)
        if args is None:
            return 0

        debug = args.debug
        configure_logging(debug)
        logger.debug("cli.parsed", mode=args.pipe_variant.value, listen=args.listen)

        anyio.run(run_node, args)
    except PyncatError as exc:
        return handle_error(exc, debug)
    except KeyboardInterrupt:
        newline()
        return 1
    except Exception as exc:
        error = PyncatError(Except.UNHANDLED, type(exc).__name__)
        error.__cause__ = exc
        return handle_error(error, debug)

    newline()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console script entry point."""
    sys.exit(run(sys.argv[1:] if argv is None else argv))
