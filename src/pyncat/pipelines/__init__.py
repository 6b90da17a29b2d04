"""
Pipeline engine for pyncat.

Each pipeline relays bytes in one direction between a source and a
destination, sharing the node's socket client with its siblings.
"""

from pyncat.pipelines.base import Pipeline
from pyncat.pipelines.context import PipeContext
from pyncat.pipelines.file import FilePipe, FilePipeFactory
from pyncat.pipelines.process import ProcessPipe, ProcessPipeFactory
from pyncat.pipelines.registry import (
    PipelineFactory,
    PipelineFactoryRegistry,
    get_pipeline_factory_registry,
)
from pyncat.pipelines.status import StatusPipe, StatusPipeFactory
from pyncat.pipelines.stream import StreamPipe, StreamPipeFactory
from pyncat.pipelines.text import TextPipe, TextPipeFactory

__all__ = [
    "FilePipe",
    "FilePipeFactory",
    "PipeContext",
    "Pipeline",
    "PipelineFactory",
    "PipelineFactoryRegistry",
    "ProcessPipe",
    "ProcessPipeFactory",
    "StatusPipe",
    "StatusPipeFactory",
    "StreamPipe",
    "StreamPipeFactory",
    "TextPipe",
    "TextPipeFactory",
    "get_pipeline_factory_registry",
]
