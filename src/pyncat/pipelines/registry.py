"""
Registry for pipeline factories.

This module maps each ``PipeType`` to the factory that builds the pipelines of
that relay mode.
"""

from typing import List, Optional, Protocol

from pyncat.config import PipeType
from pyncat.pipelines.base import Pipeline
from pyncat.pipelines.context import PipeContext


class PipelineFactory(Protocol):
    """Protocol for pipeline factories."""

    def create_pipelines(self, context: PipeContext) -> List[Pipeline]:
        """Create the pipelines of one relay mode.

        Args:
            context: The collaborators shared by the new pipelines.

        Returns:
            The unconnected pipelines.
        """
        ...


class PipelineFactoryRegistry:
    """Registry for pipeline factories."""

    def __init__(self):
        self._factories = {}

    def register(self, pipe_type: PipeType, factory: PipelineFactory) -> None:
        """Register a pipeline factory.

        Args:
            pipe_type: The relay mode to register the factory under.
            factory: The factory instance.
        """
        self._factories[pipe_type] = factory

    def get(self, pipe_type: PipeType) -> PipelineFactory:
        """Get a pipeline factory by relay mode.

        Raises:
            KeyError: If no factory is registered for the relay mode.
        """
        return self._factories[pipe_type]

    def get_registered_types(self) -> List[PipeType]:
        return list(self._factories)

    def create_pipelines(self, pipe_type: PipeType, context: PipeContext) -> List[Pipeline]:
        """Create pipelines using a registered factory.

        Args:
            pipe_type: The relay mode.
            context: The collaborators shared by the new pipelines.

        Returns:
            The unconnected pipelines.

        Raises:
            KeyError: If no factory is registered for the relay mode.
        """
        return self.get(pipe_type).create_pipelines(context)


_registry: Optional[PipelineFactoryRegistry] = None


def get_pipeline_factory_registry() -> PipelineFactoryRegistry:
    """Get the process-wide registry, populated with the built-in factories."""
    global _registry
    if _registry is None:
        from pyncat.pipelines.file import FilePipeFactory
        from pyncat.pipelines.process import ProcessPipeFactory
        from pyncat.pipelines.status import StatusPipeFactory
        from pyncat.pipelines.stream import StreamPipeFactory
        from pyncat.pipelines.text import TextPipeFactory

        registry = PipelineFactoryRegistry()
        registry.register(PipeType.STREAM, StreamPipeFactory())
        registry.register(PipeType.PROCESS, ProcessPipeFactory())
        registry.register(PipeType.FILE, FilePipeFactory())
        registry.register(PipeType.TEXT, TextPipeFactory())
        registry.register(PipeType.STATUS, StatusPipeFactory())
        _registry = registry
    return _registry
