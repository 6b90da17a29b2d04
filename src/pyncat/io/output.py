"""
Prefixed console status output.

Informational and status lines are written to standard output, warnings and
errors to standard error. Each line starts with a colored symbol.
"""

import sys
from enum import Enum

from rich.console import Console
from rich.text import Text

CLEAR_SCREEN = "\x1b[H\x1b[2J\x1b[3J"


class Level(Enum):
    """Console output level."""

    INFO = ("[*]", "bold cyan")
    STATUS = ("[+]", "bold green")
    WARN = ("[!]", "bold yellow")
    ERROR = ("[x]", "bold red")

    @property
    def prefix(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]

    @property
    def is_error(self) -> bool:
        return self in (Level.WARN, Level.ERROR)


def _console(level: Level) -> Console:
    # Resolve the stream on every call so redirected/captured streams are honored
    stream = sys.stderr if level.is_error else sys.stdout
    return Console(file=stream, highlight=False, soft_wrap=True)


def log(msg: str, level: Level = Level.INFO) -> None:
    """Write a prefixed message to the console stream of the given level.

    Args:
        msg: The message to write.
        level: The output level.

    Raises:
        ValueError: If the message is empty.
    """
    if not msg:
        raise ValueError("Message cannot be empty")
    _console(level).print(Text.assemble((level.prefix, level.style), " ", msg))


def info(msg: str) -> None:
    log(msg, Level.INFO)


def status(msg: str) -> None:
    log(msg, Level.STATUS)


def warn(msg: str) -> None:
    log(msg, Level.WARN)


def error(msg: str) -> None:
    log(msg, Level.ERROR)


def clear_screen() -> None:
    """Clear the local console screen and scrollback buffer."""
    sys.stdout.write(CLEAR_SCREEN)
    sys.stdout.flush()


def newline() -> None:
    print(file=sys.stdout, flush=True)
