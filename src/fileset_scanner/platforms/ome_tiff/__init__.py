"""OME-TIFF platform integration.

This module provides the ``ome-tiff`` prober. It automatically registers
with PlatformRegistry if tifffile is available (``pip install
fileset-scanner[tiff]``).

Usage:
    >>> from fileset_scanner import PlatformRegistry
    >>>
    >>> if 'ome-tiff' in PlatformRegistry.list_probers():
    ...     prober = PlatformRegistry.create_prober('ome-tiff')
    ...     result = prober.probe('/data/imports/1234/plate.companion.ome')
"""

# Gated import: Only load if tifffile is installed
try:
    import tifffile  # noqa: F401

    from .prober import OmeTiffProber

    # Import registry for auto-registration
    from ...registry import PlatformRegistry

    def _create_ome_tiff_prober(**kwargs) -> OmeTiffProber:
        """Factory function for creating OmeTiffProber.

        Args:
            **kwargs: Additional arguments (currently unused)

        Returns:
            OmeTiffProber instance
        """
        return OmeTiffProber()

    PlatformRegistry.register_prober("ome-tiff", _create_ome_tiff_prober)

    OME_TIFF_AVAILABLE = True

    __all__ = ["OmeTiffProber", "OME_TIFF_AVAILABLE"]

except ImportError:
    # tifffile not installed
    OME_TIFF_AVAILABLE = False
    OmeTiffProber = None  # type: ignore[assignment,misc]

    __all__ = ["OME_TIFF_AVAILABLE"]
