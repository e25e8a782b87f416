"""
Application layer - Registration, wiring and lifecycle orchestration.

This layer contains the use cases that drive a bring-up pass.
It depends only on the Domain layer.
"""

from .context import BringUpContext
from .lifecycle import LifecycleDriver
from .registry import ComponentRegistry
from .resolver import DependencyResolver
from .value_store import ValueStore
from .wiring_stack import WiringStack

__all__ = [
    "BringUpContext",
    "ComponentRegistry",
    "DependencyResolver",
    "LifecycleDriver",
    "ValueStore",
    "WiringStack",
]
