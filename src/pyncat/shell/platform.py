"""Local operating system detection."""

import os
import sys
from enum import Enum


class Platform(Enum):
    """Operating system family of the local machine."""

    NIX = "nix"
    WIN = "win"

    @property
    def eol(self) -> bytes:
        return b"\r\n" if self is Platform.WIN else b"\n"

    @classmethod
    def current(cls) -> "Platform":
        return cls.WIN if sys.platform.startswith("win") else cls.NIX


def user_home() -> str:
    """Get the absolute path of the current user's home directory."""
    return os.path.expanduser("~")
