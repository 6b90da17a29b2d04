"""
Local shell helpers for pyncat.
"""

from pyncat.shell.command import (
    CLEAR_COMMANDS,
    exists_on_path,
    is_clear_command,
    normalize_line_endings,
)
from pyncat.shell.platform import Platform, user_home

__all__ = [
    "CLEAR_COMMANDS",
    "Platform",
    "exists_on_path",
    "is_clear_command",
    "normalize_line_endings",
    "user_home",
]
