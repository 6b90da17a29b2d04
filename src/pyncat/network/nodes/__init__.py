"""
Connection nodes for pyncat.
"""

from typing import Any

from pyncat.config import CmdLineArgs
from pyncat.network.nodes.client import ClientNode
from pyncat.network.nodes.node import Node
from pyncat.network.nodes.server import ServerNode


def make_node(args: CmdLineArgs, **kwargs: Any) -> Node:
    """Create a server node when listening, a client node otherwise.

    Args:
        args: The validated command-line configuration.
        **kwargs: Passed through to the node constructor.
    """
    if args.listen:
        return ServerNode(args, **kwargs)
    return ClientNode(args, **kwargs)


__all__ = ["ClientNode", "Node", "ServerNode", "make_node"]
