"""
Network and socket utilities.

Maps platform socket error codes to the ``Except`` taxonomy and resolves
target host names.
"""

import errno
import ipaddress
import socket
from typing import Dict, Optional

from pyncat.errors import Except, NetworkError

# Windows Sockets error codes (WSAE*)
_WSA_CODES: Dict[int, Except] = {
    10048: Except.ADDRESS_IN_USE,
    10050: Except.NETWORK_DOWN,
    10051: Except.NETWORK_UNREACHABLE,
    10052: Except.NETWORK_RESET,
    10053: Except.CONNECTION_ABORTED,
    10054: Except.CONNECTION_RESET,
    10060: Except.TIMED_OUT,
    10061: Except.CONNECTION_REFUSED,
    10065: Except.HOST_UNREACHABLE,
    11001: Except.HOST_NOT_FOUND,
}

_ERRNO_CODES: Dict[int, Except] = {
    errno.EADDRINUSE: Except.ADDRESS_IN_USE,
    errno.ENETDOWN: Except.NETWORK_DOWN,
    errno.ENETUNREACH: Except.NETWORK_UNREACHABLE,
    errno.ENETRESET: Except.NETWORK_RESET,
    errno.ECONNABORTED: Except.CONNECTION_ABORTED,
    errno.ECONNRESET: Except.CONNECTION_RESET,
    errno.ETIMEDOUT: Except.TIMED_OUT,
    errno.ECONNREFUSED: Except.CONNECTION_REFUSED,
    errno.EHOSTUNREACH: Except.HOST_UNREACHABLE,
}


def get_except(exc: Optional[BaseException]) -> Except:
    """Get the error kind that corresponds to the given exception.

    Exception groups and chained exceptions are searched for the first
    socket-specific cause before classification.

    Args:
        exc: A socket exception, or an exception wrapping one.

    Returns:
        The matching ``Except`` member, ``Except.SOCKET_ERROR`` if the cause
        is not recognized.
    """
    cause = get_exception(exc) if exc is not None else None

    if cause is None:
        if isinstance(exc, TimeoutError):
            return Except.TIMED_OUT
        return Except.SOCKET_ERROR

    if isinstance(cause, socket.gaierror):
        return Except.HOST_NOT_FOUND

    code = getattr(cause, "winerror", None)
    if code in _WSA_CODES:
        return _WSA_CODES[code]

    return _ERRNO_CODES.get(cause.errno, Except.SOCKET_ERROR)


def get_exception(exc: BaseException) -> Optional[OSError]:
    """Get the first socket-specific exception nested within the given one.

    Args:
        exc: The exception to search. May be an exception group.

    Returns:
        The first ``OSError`` with an error code, or None.
    """
    seen = set()
    pending = [exc]

    while pending:
        current = pending.pop(0)
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, OSError) and (
            current.errno is not None or isinstance(current, socket.gaierror)
        ):
            return current

        if isinstance(current, BaseExceptionGroup):
            pending.extend(current.exceptions)
        pending.append(current.__cause__)
        pending.append(current.__context__)
    return None


def is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def resolve_name(host_name: str) -> str:
    """Resolve the IPv4 address associated with the given host name.

    The loopback address is preferred when the name maps to it.

    Args:
        host_name: Host name or IPv4 address text.

    Returns:
        The IPv4 address text.

    Raises:
        NetworkError: If no IPv4 address can be found.
    """
    if is_ipv4(host_name):
        return host_name

    try:
        infos = socket.getaddrinfo(host_name, None, socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        raise NetworkError(Except.HOST_NOT_FOUND, host_name) from exc

    addresses = [info[4][0] for info in infos]
    if not addresses:
        raise NetworkError(Except.HOST_NOT_FOUND, host_name)

    if "127.0.0.1" in addresses:
        return "127.0.0.1"
    return addresses[0]
