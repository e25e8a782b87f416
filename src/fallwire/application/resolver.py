import copy
import logging
from types import UnionType
from typing import Any, Union, get_args, get_origin

from fallwire.application.converters import convert_value
from fallwire.application.registry import ComponentRegistry
from fallwire.application.value_store import ValueStore
from fallwire.application.wiring_stack import WiringStack
from fallwire.domain import (
    AmbiguousDependencyError,
    BindingKind,
    Component,
    ComponentState,
    ConversionError,
    FieldBinding,
    IInitializable,
    InvalidRegistrationError,
    IResolver,
    UnresolvableError,
)

logger = logging.getLogger(__name__)

_UNION_ORIGINS = (Union, UnionType)


def unwrap_optional(target_type: Any) -> Any:
    """Strip one level of ``Optional[...]`` from a requested type."""
    if get_origin(target_type) in _UNION_ORIGINS:
        members = [arg for arg in get_args(target_type) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return target_type


class DependencyResolver(IResolver):
    """Wires components by resolving their field bindings.

    Each binding is resolved to a named value, a named component, a component
    of the exact requested type, or the single component advertising the
    requested capability. Component dependencies are wired before they are
    assigned, so their fields are populated and their ``init`` hook has run.

    Attributes:
        _registry: Registered components.
        _values: Named configuration values.
        _stack: Names of the components currently being wired.
    """

    def __init__(self, registry: ComponentRegistry, values: ValueStore, stack: WiringStack) -> None:
        self._registry = registry
        self._values = values
        self._stack = stack

    def wire(self, component: Component) -> None:
        """Resolve and assign every binding of ``component``, then run its ``init`` hook.

        Args:
            component: A component that is not wired yet.

        Raises:
            CircularDependencyError: If ``component`` is already being wired.
            UnresolvableError: If a binding has no match.
            AmbiguousDependencyError: If a binding has more than one match.
            ConversionError: If a value cannot be converted for its field.

        Example:
            >>> class Server:
            ...     port = value("port", ValueKind.INT)
            ...     store = wire(Store)
            >>>
            >>> resolver.wire(registry.lookup_by_name("server"))
            >>> server.store  # the registered Store, already wired
        """
        self._stack.push(component.name)
        component.state = ComponentState.WIRING
        logger.debug("Wiring %s (depth %d)", component.name, len(self._stack))

        for binding in component.bindings:
            resolved = self._resolve(component, binding)
            try:
                setattr(component.instance, binding.field_name, resolved)
            except AttributeError as e:
                raise InvalidRegistrationError(
                    f"Cannot assign field '{binding.field_name}' in '{component.name}': {e}"
                ) from e

        self._stack.pop()
        instance = component.instance
        if component.run_hooks and isinstance(instance, IInitializable) and callable(instance.init):
            logger.debug("Calling init on %s", component.name)
            instance.init()
        component.state = ComponentState.WIRED
        logger.debug("Wired %s", component.name)

    def _resolve(self, component: Component, binding: FieldBinding) -> Any:
        if binding.kind == BindingKind.VALUE:
            return self._resolve_value(component, binding)

        if binding.kind == BindingKind.NAME:
            target = self._registry.lookup_by_name(binding.target_name)
            if target is None:
                raise UnresolvableError(
                    component.name,
                    binding.field_name,
                    f"'{binding.target_name}' has not been registered",
                )
        else:
            target = self._resolve_by_type(component, binding)

        # Dependencies are fully wired before they are handed out
        if not target.is_wired:
            self.wire(target)

        logger.debug("Injecting %s into %s.%s", target.name, component.name, binding.field_name)
        if binding.by_reference:
            return target.instance
        return copy.copy(target.instance)

    def _resolve_value(self, component: Component, binding: FieldBinding) -> Any:
        if binding.value_name not in self._values:
            raise UnresolvableError(
                component.name,
                binding.field_name,
                f"there is no value named '{binding.value_name}'",
            )
        raw = self._values.get(binding.value_name)
        try:
            converted = convert_value(raw, binding.value_kind)
        except ValueError as e:
            raise ConversionError(component.name, binding.field_name, raw, binding.value_kind, str(e)) from e
        logger.debug("Injecting value %s into %s.%s", binding.value_name, component.name, binding.field_name)
        return converted

    def _resolve_by_type(self, component: Component, binding: FieldBinding) -> Component:
        target_type = unwrap_optional(binding.target_type)
        if not isinstance(target_type, type):
            raise UnresolvableError(component.name, binding.field_name, f"{target_type!r} is not a type")

        matches = self._registry.lookup_by_type(target_type)
        if len(matches) > 1:
            raise AmbiguousDependencyError(
                component.name, binding.field_name, target_type, [match.name for match in matches]
            )
        if matches:
            return matches[0]

        if not self._registry.is_capability(target_type):
            raise UnresolvableError(
                component.name,
                binding.field_name,
                f"there is nothing registered of type {target_type.__qualname__}",
            )

        matches = self._registry.lookup_by_capability([target_type])
        if not matches:
            raise UnresolvableError(
                component.name,
                binding.field_name,
                f"there is nothing registered of type {target_type.__qualname__}",
            )
        if len(matches) > 1:
            raise AmbiguousDependencyError(
                component.name, binding.field_name, target_type, [match.name for match in matches]
            )
        return matches[0]
