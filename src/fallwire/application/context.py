import logging
import os
from typing import Any, Iterable, Mapping, Optional, Union

from fallwire.application.lifecycle import LifecycleDriver
from fallwire.application.properties import parse_properties
from fallwire.application.registry import ComponentRegistry, advertised_capabilities
from fallwire.application.resolver import DependencyResolver
from fallwire.application.value_store import ValueStore
from fallwire.application.wiring_stack import WiringStack
from fallwire.domain import (
    Component,
    ComponentState,
    FieldBinding,
    IBringUpContext,
    ILifecycleDriver,
    InvalidRegistrationError,
    IResolver,
    LifecycleError,
    collect_bindings,
)

logger = logging.getLogger(__name__)

_IMMUTABLE_TYPES = (bool, int, float, complex, str, bytes, tuple, frozenset, range, type(None))


class BringUpContext(IBringUpContext):
    """Registers components and values, then wires them in one bring-up pass.

    Every piece of state a pass needs lives on the context, so independent
    contexts can coexist (for example one per test).

    Attributes:
        _registry: Registered components indexed by type and name.
        _values: Named configuration values.
        _stack: Names of the components currently being wired.
        _resolver: Component responsible for wiring fields.
        _driver: Component running the two bring-up phases.
    """

    def __init__(self) -> None:
        """Initialize an empty context."""
        self._registry = ComponentRegistry()
        self._values = ValueStore()
        self._stack = WiringStack()
        self._resolver: IResolver = DependencyResolver(self._registry, self._values, self._stack)
        self._driver: ILifecycleDriver = LifecycleDriver(self._registry, self._resolver)
        self._started = False
        self._complete = False
        self._failed = False

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def is_complete(self) -> bool:
        """Whether a bring-up pass ran to completion."""
        return self._complete

    def register(
        self,
        instance: Any,
        *,
        bindings: Optional[Iterable[FieldBinding]] = None,
        capabilities: Iterable[type] = (),
    ) -> str:
        """Register an instance under a name derived from its type.

        The name is ``"<module>.<qualified class name>"``.

        Args:
            instance: The object to wire. It is kept by reference.
            bindings: Bindings overriding or adding to the class declarations.
            capabilities: Capability types the instance satisfies without inheriting them.

        Returns:
            The derived name.

        Raises:
            RegistrationConflictError: If an instance of the same type is already registered.
            InvalidRegistrationError: If the instance cannot be wired.
            LifecycleError: If bring-up already started.

        Example:
            >>> name = context.register(UserRepository())
            >>> name
            'myapp.repositories.UserRepository'
        """
        self._check_instance(instance)
        name = self._registry.derive_name(type(instance))
        self.register_named(instance, name, bindings=bindings, capabilities=capabilities)
        return name

    def register_named(
        self,
        instance: Any,
        name: str,
        *,
        bindings: Optional[Iterable[FieldBinding]] = None,
        capabilities: Iterable[type] = (),
    ) -> None:
        """Register an instance under an explicit name.

        Args:
            instance: The object to wire. It is kept by reference.
            name: Globally unique component name.
            bindings: Bindings overriding or adding to the class declarations.
            capabilities: Capability types the instance satisfies without inheriting them.

        Raises:
            RegistrationConflictError: If the name is already taken.
            InvalidRegistrationError: If the instance cannot be wired.
            LifecycleError: If bring-up already started.

        Example:
            >>> context.register_named(PostgresDatabase(), "primary-db")
            >>> context.register_named(PostgresDatabase(), "replica-db")
        """
        self._check_open()
        self._check_instance(instance)
        explicit = tuple(capabilities)
        component_type = type(instance)
        component = Component(
            name=name,
            instance=instance,
            component_type=component_type,
            capabilities=advertised_capabilities(component_type, explicit),
            bindings=tuple(collect_bindings(component_type, bindings)),
        )
        self._registry.register(component, explicit)

    def register_value(self, name: str, value: Any) -> None:
        """Register a named configuration value.

        Raises:
            RegistrationConflictError: If the name is already present.
            LifecycleError: If bring-up already started.
        """
        self._check_open()
        self._values.put(name, value)

    def register_values(self, values: Mapping[str, Any]) -> None:
        """Register several named values at once.

        Example:
            >>> context.register_values({"http.port": "8080", "debug": True})
        """
        for name, value in values.items():
            self.register_value(name, value)

    def load_values_from_text(self, text: str) -> int:
        """Register every ``key=value`` line of properties text as a value.

        Returns:
            Number of values registered.

        Raises:
            MalformedPropertiesError: For a line that is not exactly ``key=value``.
            RegistrationConflictError: For a key registered twice.
        """
        count = 0
        for name, value in parse_properties(text):
            self.register_value(name, value)
            count += 1
        return count

    def load_values_from_file(self, path: Union[str, "os.PathLike[str]"], encoding: str = "utf-8") -> int:
        """Register every ``key=value`` line of a properties file as a value.

        Returns:
            Number of values registered.
        """
        with open(path, encoding=encoding) as source:
            text = source.read()
        count = self.load_values_from_text(text)
        logger.info("Loaded %d values from %s", count, os.fspath(path))
        return count

    def start(self) -> None:
        """Run the bring-up pass.

        Wires every registered component, calling each ``init`` hook as soon
        as that component's fields are populated, then calls every
        ``init_last`` hook.

        Raises:
            LifecycleError: If a pass already ran on this context.
            BringUpError: Any wiring error; the context is unusable afterwards.
        """
        if self._failed:
            raise LifecycleError("A previous bring-up pass failed; this context cannot be started again")
        if self._started:
            raise LifecycleError("Bring-up already started")
        self._started = True
        logger.info("Starting bring-up of %d components", len(self._registry))
        try:
            self._driver.run()
        except Exception:
            self._failed = True
            logger.info("Bring-up aborted while wiring %s", self._stack.snapshot())
            raise
        self._complete = True
        logger.info("Bring-up complete")

    def get(self, name: str) -> Any:
        """Return the live instance registered under ``name``, or ``None``."""
        component = self._registry.lookup_by_name(name)
        if component is None:
            return None
        return component.instance

    def state_of(self, name: str) -> Optional[ComponentState]:
        """Return the resolution state of a component, or ``None`` if unknown."""
        component = self._registry.lookup_by_name(name)
        if component is None:
            return None
        return component.state

    def _check_open(self) -> None:
        if self._started:
            raise LifecycleError("Cannot register after bring-up started")

    @staticmethod
    def _check_instance(instance: Any) -> None:
        if isinstance(instance, type):
            raise InvalidRegistrationError(f"Can only register instances, not classes: {instance!r}")
        if isinstance(instance, _IMMUTABLE_TYPES):
            raise InvalidRegistrationError(
                f"Can only register mutable instances, got {type(instance).__name__}: {instance!r}"
            )
