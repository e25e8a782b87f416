"""
Testing utilities module.

Provides helpers for testing applications built on fallwire.
"""

from .utilities import TestBringUpContext, create_wired_context

__all__ = [
    "TestBringUpContext",
    "create_wired_context",
]
