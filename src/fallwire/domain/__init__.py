"""
Domain layer - Core wiring concepts and models.

This layer contains the states, bindings, errors and lifecycle contracts of
the bring-up engine. It has no dependencies on other layers.
"""

from .bindings import BindingDeclaration, Bindings, collect_bindings, named, value, wire
from .enums import BindingKind, ComponentState, ValueKind
from .exceptions import (
    AmbiguousDependencyError,
    BringUpError,
    CircularDependencyError,
    ConversionError,
    InvalidRegistrationError,
    LifecycleError,
    MalformedPropertiesError,
    RegistrationConflictError,
    UnresolvableError,
)
from .interfaces import IBringUpContext, IInitializable, ILateInitializable, ILifecycleDriver, IResolver
from .models import Component, FieldBinding

__all__ = [
    # Enums
    "BindingKind",
    "ComponentState",
    "ValueKind",
    # Exceptions
    "BringUpError",
    "RegistrationConflictError",
    "InvalidRegistrationError",
    "UnresolvableError",
    "AmbiguousDependencyError",
    "ConversionError",
    "CircularDependencyError",
    "LifecycleError",
    "MalformedPropertiesError",
    # Interfaces
    "IBringUpContext",
    "IResolver",
    "ILifecycleDriver",
    "IInitializable",
    "ILateInitializable",
    # Models
    "Component",
    "FieldBinding",
    # Binding declarations
    "BindingDeclaration",
    "Bindings",
    "collect_bindings",
    "value",
    "named",
    "wire",
]
