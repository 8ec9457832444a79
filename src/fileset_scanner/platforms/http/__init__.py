"""HTTP webhook platform.

This platform provides the ``http`` sink, which triggers the downstream
workflow through an HTTP endpoint using httpx.
"""

from .sink import HttpSink

# Auto-register with the registry
from ...registry import PlatformRegistry


def _create_http_sink(endpoint: str | None = None, **kwargs) -> HttpSink:
    """Factory function for creating HTTP sinks.

    Args:
        endpoint: URL the documents are POSTed to
        **kwargs: ``token`` and ``timeout`` are passed through

    Returns:
        HttpSink instance
    """
    return HttpSink(
        endpoint or "",
        token=kwargs.get("token"),
        timeout=kwargs.get("timeout", 30.0),
    )


PlatformRegistry.register_sink("http", _create_http_sink)

__all__ = ["HttpSink"]
