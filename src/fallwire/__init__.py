"""
fallwire: Process bring-up engine that autowires registered components.

Public API exports for the fallwire package.
"""

# Application exports
from fallwire.application.context import BringUpContext

# Domain exports
from fallwire.domain.bindings import Bindings, named, value, wire
from fallwire.domain.enums import ComponentState, ValueKind
from fallwire.domain.exceptions import (
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
from fallwire.domain.interfaces import IInitializable, ILateInitializable

__version__ = "0.1.0"

__all__ = [
    # Context
    "BringUpContext",
    # Bindings
    "Bindings",
    "value",
    "named",
    "wire",
    # Enums
    "ComponentState",
    "ValueKind",
    # Lifecycle hooks
    "IInitializable",
    "ILateInitializable",
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
]
