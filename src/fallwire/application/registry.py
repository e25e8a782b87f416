import inspect
import logging
from abc import ABC
from typing import Dict, FrozenSet, Iterable, List, Optional, Protocol, Set, Type

from fallwire.domain import Component, InvalidRegistrationError, RegistrationConflictError

logger = logging.getLogger(__name__)

_NEVER_CAPABILITIES = (object, ABC, Protocol)


def is_capability_type(candidate: object) -> bool:
    """Whether a type is an abstract contract rather than a concrete class.

    Abstract classes, classes deriving directly from ``ABC`` and Protocol
    classes count as capabilities.
    """
    if not isinstance(candidate, type) or candidate in _NEVER_CAPABILITIES:
        return False
    if getattr(candidate, "_is_protocol", False):
        return True
    return inspect.isabstract(candidate) or ABC in candidate.__bases__


def advertised_capabilities(component_type: type, explicit: Iterable[type] = ()) -> FrozenSet[type]:
    """Capabilities a component of ``component_type`` satisfies.

    Every capability type in the MRO is advertised, plus the explicit ones
    (structural Protocols and virtual subclasses are only known that way).
    """
    found: Set[type] = {klass for klass in component_type.__mro__ if is_capability_type(klass)}
    found.update(explicit)
    return frozenset(found)


class ComponentRegistry:
    """Indexes registered components by concrete type and by unique name.

    Attributes:
        _by_type: Concrete type to the components registered with it.
        _by_name: Unique name to component.
        _ordered: Components in registration order.
        _declared_capabilities: Types explicitly advertised at registration.
    """

    def __init__(self) -> None:
        self._by_type: Dict[type, List[Component]] = {}
        self._by_name: Dict[str, Component] = {}
        self._ordered: List[Component] = []
        self._declared_capabilities: Set[type] = set()

    def register(self, component: Component, explicit_capabilities: Iterable[type] = ()) -> None:
        """Index a component under its type and name.

        Args:
            component: The component to index.
            explicit_capabilities: Capabilities passed by the caller, remembered
                so they are treated as capability types during lookup.

        Raises:
            RegistrationConflictError: If the name is already taken.
        """
        if component.name in self._by_name:
            raise RegistrationConflictError(component.name)
        self._by_type.setdefault(component.component_type, []).append(component)
        self._by_name[component.name] = component
        self._ordered.append(component)
        self._declared_capabilities.update(explicit_capabilities)
        logger.debug("Registered component %s as %s", component.name, component.component_type.__qualname__)

    @staticmethod
    def derive_name(component_type: type) -> str:
        """Build a name from the fully-qualified name of a type.

        Raises:
            InvalidRegistrationError: If the type has no name.
        """
        type_name = getattr(component_type, "__qualname__", "") or getattr(component_type, "__name__", "")
        if not type_name:
            raise InvalidRegistrationError(f"Cannot register type with no name: {component_type!r}")
        module = getattr(component_type, "__module__", "")
        return f"{module}.{type_name}" if module else type_name

    def lookup_by_name(self, name: str) -> Optional[Component]:
        return self._by_name.get(name)

    def lookup_by_type(self, component_type: type) -> List[Component]:
        """Components whose concrete type is exactly ``component_type``."""
        return list(self._by_type.get(component_type, ()))

    def lookup_by_capability(self, capabilities: Iterable[Type]) -> List[Component]:
        """Components advertising every capability in ``capabilities``.

        Scans every registered component, which is fine for a one-time
        bring-up pass.
        """
        required = frozenset(capabilities)
        return [component for component in self._ordered if required <= component.capabilities]

    def is_capability(self, candidate: object) -> bool:
        return is_capability_type(candidate) or candidate in self._declared_capabilities

    def components(self) -> List[Component]:
        """All components in registration order."""
        return list(self._ordered)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._ordered)
