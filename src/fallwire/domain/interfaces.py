from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from fallwire.domain.models import Component, FieldBinding


@runtime_checkable
class IInitializable(Protocol):
    """Component with an early completion hook.

    ``init`` runs exactly once, right after the component's own fields are
    populated and after every dependency's ``init`` has run.
    """

    def init(self) -> None:
        """Finish setting up the component once its fields are wired."""


@runtime_checkable
class ILateInitializable(Protocol):
    """Component with a late completion hook.

    ``init_last`` runs after every registered component is wired, so the
    whole graph is formed and initialized by the time it is called.
    """

    def init_last(self) -> None:
        """Run work that needs the complete, initialized component graph."""


class IResolver(ABC):
    """Abstract interface for wiring a single component."""

    @abstractmethod
    def wire(self, component: Component) -> None:
        """Resolve every binding of the component and assign the results.

        Dependencies that are not wired yet are wired first.

        Args:
            component: The component to wire.

        Raises:
            UnresolvableError: If a binding has no match.
            AmbiguousDependencyError: If a binding has more than one match.
            ConversionError: If a value cannot be converted.
            CircularDependencyError: If the component depends on itself.
        """


class ILifecycleDriver(ABC):
    """Abstract interface for running a bring-up pass."""

    @abstractmethod
    def run(self) -> None:
        """Wire every component, then run late completion hooks."""


class IBringUpContext(ABC):
    """Abstract interface for registration, bring-up and lookup."""

    @abstractmethod
    def register(self, instance: Any, *, bindings: Optional[Iterable[FieldBinding]] = None,
                 capabilities: Iterable[type] = ()) -> str:
        """Register an instance under a name derived from its type.

        Returns:
            The derived name.
        """

    @abstractmethod
    def register_named(self, instance: Any, name: str, *, bindings: Optional[Iterable[FieldBinding]] = None,
                       capabilities: Iterable[type] = ()) -> None:
        """Register an instance under an explicit name."""

    @abstractmethod
    def register_value(self, name: str, value: Any) -> None:
        """Register a named configuration value."""

    @abstractmethod
    def start(self) -> None:
        """Run the bring-up pass."""

    @abstractmethod
    def get(self, name: str) -> Any:
        """Return the instance registered under ``name``, or ``None``."""
