"""Platform registry for factory-based scanner creation.

This module provides a central registry for prober and sink factories,
enabling scanner creation by name and automatic platform discovery.
"""

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from .core.errors import ConfigurationError

if TYPE_CHECKING:
    from .core.config import ScanConfig
    from .probers.base import Prober
    from .scanner import Scanner
    from .sinks.base import Sink

logger = logging.getLogger(__name__)


class PlatformRegistry:
    """Central registry for prober and sink factories.

    Platforms register themselves when imported, and the registry can
    automatically discover all available platforms. Platforms whose
    optional dependencies are missing simply do not register.
    """

    _probers: dict[str, Callable[..., "Prober"]] = {}
    _sinks: dict[str, Callable[..., "Sink"]] = {}

    @classmethod
    def register_prober(cls, name: str, factory: Callable[..., "Prober"]) -> None:
        """Register a factory function for creating probers.

        Args:
            name: Name of the prober (e.g., 'ome-tiff')
            factory: Callable that creates a Prober instance
        """
        cls._probers[name] = factory

    @classmethod
    def register_sink(cls, name: str, factory: Callable[..., "Sink"]) -> None:
        """Register a factory function for creating sinks.

        Args:
            name: Name of the sink (e.g., 'stdout', 'http')
            factory: Callable that creates a Sink instance
        """
        cls._sinks[name] = factory

    @classmethod
    def create_prober(cls, name: str, **kwargs: Any) -> "Prober":
        """Create a registered prober.

        Raises:
            ConfigurationError: If no prober is registered under ``name``
        """
        return cls._create("prober", cls._probers, name, kwargs)

    @classmethod
    def create_sink(cls, name: str, **kwargs: Any) -> "Sink":
        """Create a registered sink.

        Raises:
            ConfigurationError: If no sink is registered under ``name``
        """
        return cls._create("sink", cls._sinks, name, kwargs)

    @classmethod
    def create_scanner(
        cls,
        prober_name: str,
        sink_name: str,
        config: "ScanConfig | None" = None,
        prober_options: dict[str, Any] | None = None,
        sink_options: dict[str, Any] | None = None,
    ) -> "Scanner":
        """Create a scanner from registered platforms.

        Args:
            prober_name: Name of the registered prober
            sink_name: Name of the registered sink
            config: Scan settings passed to the scanner
            prober_options: Keyword arguments for the prober factory
            sink_options: Keyword arguments for the sink factory

        Returns:
            Scanner wired to the requested prober and sink

        Raises:
            ConfigurationError: If either name is not registered

        Example:
            >>> scanner = PlatformRegistry.create_scanner(
            ...     'ome-tiff',
            ...     'http',
            ...     sink_options={'endpoint': 'https://workflow.example/start'},
            ... )
        """
        # Import here to avoid circular dependency
        from .scanner import Scanner

        prober = cls.create_prober(prober_name, **(prober_options or {}))
        sink = cls.create_sink(sink_name, **(sink_options or {}))
        return Scanner(prober, sink, config=config)

    @classmethod
    def list_probers(cls) -> list[str]:
        """List all registered prober names."""
        return sorted(cls._probers)

    @classmethod
    def list_sinks(cls) -> list[str]:
        """List all registered sink names."""
        return sorted(cls._sinks)

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        This method iterates through the platforms/ directory and
        attempts to import each platform module. Platforms register
        themselves from their __init__.py files.
        """
        platforms_dir = Path(__file__).parent / "platforms"

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir()):
            if not platform_path.is_dir():
                continue

            if not (platform_path / "__init__.py").exists():
                continue

            platform_name = platform_path.name

            try:
                importlib.import_module(
                    f".platforms.{platform_name}",
                    package="fileset_scanner",
                )
            except ImportError as e:
                logger.debug("Platform %s unavailable: %s", platform_name, e)

    @staticmethod
    def _create(kind: str, factories: dict[str, Callable[..., Any]], name: str, kwargs: dict) -> Any:
        if name not in factories:
            available = ", ".join(sorted(factories)) or "none"
            raise ConfigurationError(f"Unknown {kind}: '{name}'. Available {kind}s: {available}")
        try:
            return factories[name](**kwargs)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Cannot create {kind} '{name}': {e}") from e
