"""Platform implementations for the scanner.

This package contains self-contained platform modules that provide
prober and sink implementations (OME-TIFF probing, stdout, HTTP and
AWS Step Functions triggers).

Each platform module auto-registers itself with the PlatformRegistry
when imported.
"""

# Platform modules are imported dynamically by PlatformRegistry.discover_platforms()
# to handle missing dependencies gracefully
