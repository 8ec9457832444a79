"""Workflow trigger sinks.

This package contains the sink interface. Concrete sinks live in the
platforms/ directory.
"""

from .base import Sink

__all__ = ["Sink"]
