"""Standard output platform.

This platform provides the ``stdout`` sink, which prints one JSON
document per discovered fileset. It needs no extra dependencies.
"""

from .sink import StdoutSink

# Auto-register with the registry
from ...registry import PlatformRegistry


def _create_stdout_sink(**kwargs) -> StdoutSink:
    """Factory function for creating stdout sinks.

    Args:
        **kwargs: ``indent`` is honoured; other parameters are ignored

    Returns:
        StdoutSink instance
    """
    return StdoutSink(indent=kwargs.get("indent"))


PlatformRegistry.register_sink("stdout", _create_stdout_sink)

__all__ = ["StdoutSink"]
