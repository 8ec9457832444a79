"""Format probers.

This package contains the prober interface. Concrete probers live in
the platforms/ directory.
"""

from .base import Prober, ProbeResult, Readable, Unreadable

__all__ = ["Prober", "ProbeResult", "Readable", "Unreadable"]
