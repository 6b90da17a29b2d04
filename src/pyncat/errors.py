"""
Error taxonomy and reporting for pyncat.

Every failure that reaches a node or a pipeline is expressed as a member of the
closed ``Except`` enumeration. Each member maps to a single-slot message
template which is rendered by ``ErrorMessage``. The exception classes in this
module carry the kind and its argument up to the program entry point, where
``handle_error`` reports them.
"""

import sys
import traceback
from enum import Enum
from typing import Optional, TextIO

from pyncat.io.output import Level, log

USAGE = "Usage: pyncat [OPTIONS] TARGET"


class Except(Enum):
    """Domain error kinds."""

    UNHANDLED = "Unhandled exception occurred: %"
    ARGS_COMBO = "Invalid argument combination: %"
    ADDRESS_IN_USE = "The endpoint is already in use: %"
    CONNECTION_ABORTED = "Local software aborted connection to %"
    CONNECTION_REFUSED = "Connection was actively refused by %"
    CONNECTION_RESET = "Connection was reset by %"
    DIRECTORY_PATH = "Unable to locate parent directory '%'"
    EMPTY_PATH = "A value is required for option(s): %"
    EXE_PATH = "Unable to locate executable file '%'"
    EXE_PROCESS = "Unable to launch executable process: %"
    FILE_PATH = "Unable to locate file path '%'"
    HOST_NOT_FOUND = "Unable to resolve hostname: '%'"
    HOST_UNREACHABLE = "Unable to reach host %"
    INVALID_ARGS = "Unable to validate argument(s): %"
    INVALID_PORT = "'%' is not a valid port number"
    NAMED_ARGS = "Missing value for named argument(s): %"
    NETWORK_DOWN = "The network is down: %"
    NETWORK_RESET = "Connection to % was lost in network reset"
    NETWORK_UNREACHABLE = "The network is unreachable: %"
    PAYLOAD = "Invalid payload for argument(s): %"
    REQUIRED_ARGS = "Missing required argument(s): %"
    SOCKET_ERROR = "Unspecified socket error occurred: %"
    STRING_EOL = "Missing EOL in argument(s): %"
    TIMED_OUT = "Socket timeout occurred: %"
    UNKNOWN_ARGS = "Received unknown argument(s): %"

    @property
    def template(self) -> str:
        return self.value

    def message(self, arg: str) -> str:
        """Render the message of this kind with the given argument."""
        return ErrorMessage(self.template).build(arg)


class ErrorMessage:
    """A message template with one substitution slot (``%`` or ``{}``)."""

    def __init__(self, template: str):
        """Initialize a new error message.

        Args:
            template: The unbuilt message template.

        Raises:
            ValueError: If the template is blank or has no substitution slot.
        """
        if template is None or not template.strip():
            raise ValueError("Message template cannot be empty")
        if not self._has_slot(template):
            raise ValueError("Message template has no substitution slot")
        self.message = template
        self._built = False

    @property
    def built(self) -> bool:
        return self._built

    def build(self, arg: str) -> str:
        """Substitute the argument into the template.

        Args:
            arg: The value to substitute.

        Returns:
            The built message.

        Raises:
            ValueError: If the argument is None or empty.
            RuntimeError: If the message has already been built.
        """
        if self.built:
            raise RuntimeError("The message has already been built")
        if arg is None or arg == "":
            raise ValueError("A message argument is required")

        slot = "%" if "%" in self.message else "{}"
        self.message = self.message.replace(slot, arg, 1)
        self._built = True
        return self.message

    @staticmethod
    def _has_slot(text: str) -> bool:
        return "%" in text or "{}" in text


class PyncatError(Exception):
    """Base class for all pyncat errors."""

    default_level = Level.ERROR

    def __init__(
        self,
        kind: Except,
        arg: str,
        show_usage: bool = False,
        level: Optional[Level] = None,
    ):
        self.kind = kind
        self.arg = arg
        self.show_usage = show_usage
        self.level = level or self.default_level
        super().__init__(kind.message(arg))


class UsageError(PyncatError):
    """Error raised for invalid command-line arguments or argument combinations."""

    def __init__(self, kind: Except, arg: str, level: Optional[Level] = None):
        super().__init__(kind, arg, show_usage=True, level=level)


class ConfigurationError(PyncatError):
    """Error raised for invalid runtime configuration values."""

    def __init__(self, arg: str):
        super().__init__(Except.INVALID_ARGS, arg)


class NetworkError(PyncatError):
    """Error raised when a socket operation fails."""


class SocketTimeoutError(NetworkError):
    """Error raised when a connection attempt exceeds its timeout."""

    default_level = Level.WARN

    def __init__(self, arg: str):
        super().__init__(Except.TIMED_OUT, arg)


class PipelineError(PyncatError):
    """Error raised when a pipeline endpoint cannot be opened."""


class ProcessError(PyncatError):
    """Error raised when an executable cannot be located or launched."""


def handle_error(
    error: PyncatError,
    debug: bool = False,
    stream: Optional[TextIO] = None,
) -> int:
    """Report a domain error on the console.

    Args:
        error: The error to report.
        debug: Whether to dump the underlying exception details.
        stream: Stream used for the usage line and debug dump. Defaults to stdout.

    Returns:
        The process exit code to use.
    """
    out = stream or sys.stdout

    if error.show_usage:
        print(USAGE, file=out)

    log(str(error), error.level)

    cause = error.__cause__ or error.__context__
    if debug and cause is not None:
        if isinstance(cause, BaseExceptionGroup) and cause.exceptions:
            cause = cause.exceptions[0]

        header = f"----[ {type(cause).__module__}.{type(cause).__qualname__} ]----"
        detail = "".join(traceback.format_exception(cause)).rstrip()
        print("\n".join([header, detail, "-" * len(header)]), file=out)

    print(file=out)
    return 1
