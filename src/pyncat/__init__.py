"""
pyncat: a netcat-style TCP relay built on anyio.
"""

__version__ = "0.1.0"
