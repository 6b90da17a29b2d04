"""
Shell command helpers.

Clear-screen command detection, line-ending normalization and executable
lookup used by the pipelines and the command-line parser.
"""

import os
import shutil
from typing import Optional

from pyncat.shell.platform import Platform

CLEAR_COMMANDS = frozenset({"cls", "clear", "clear-host"})

# Extensions tried when an executable is given without one
EXE_EXTENSIONS = ("exe", "bat", "ps1", "py", "sh")


def is_clear_command(data: bytes) -> bool:
    """Determine whether the given chunk is a clear-screen command.

    Args:
        data: Raw chunk read from a pipeline source.

    Returns:
        True if the stripped, case-folded chunk is one of ``cls``, ``clear``
        or ``clear-host``.
    """
    text = data.decode("utf-8", errors="ignore").strip().lower()
    return text in CLEAR_COMMANDS


def normalize_line_endings(data: bytes, platform: Platform) -> bytes:
    """Normalize line endings for the given local platform.

    On non-Windows platforms ``\\r\\n`` becomes ``\\n`` so that commands typed
    on Windows are interpreted correctly by Unix shells. Windows data passes
    through unmodified.
    """
    if platform is Platform.WIN:
        return data
    return data.replace(b"\r\n", b"\n")


def exists_on_path(exe: str) -> Optional[str]:
    """Locate an executable on disk or in the ``PATH`` environment variable.

    Args:
        exe: Executable name or path.

    Returns:
        The absolute executable path, or None if it cannot be found.
    """
    if not exe:
        return None

    if os.path.isfile(exe):
        return os.path.abspath(exe)

    path = shutil.which(exe)
    if path is not None:
        return os.path.abspath(path)

    if not os.path.splitext(exe)[1]:
        for ext in EXE_EXTENSIONS:
            path = shutil.which(f"{exe}.{ext}")
            if path is not None:
                return os.path.abspath(path)
    return None
