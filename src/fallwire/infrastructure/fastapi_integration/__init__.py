"""
FastAPI integration module.

Provides helpers for running bring-up at application startup and handing
wired components to endpoints.
"""

from .integration import bring_up_lifespan, create_component_dependency

__all__ = [
    "bring_up_lifespan",
    "create_component_dependency",
]
