"""
Local I/O for pyncat.

``pyncat.io.output`` renders prefixed console lines; ``pyncat.io.streams``
provides the byte endpoints the pipelines read from and write to.
"""

from pyncat.io.output import Level, clear_screen, error, info, log, status, warn

__all__ = ["Level", "clear_screen", "error", "info", "log", "status", "warn"]
