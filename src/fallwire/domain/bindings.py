"""Declarative binding helpers.

Bindings can be declared on the class::

    class Server:
        port = value("port", ValueKind.INT32)
        store = wire(Store)
        audit = named("audit-log")

or listed with a builder passed at registration time::

    Bindings().value("port", "port", ValueKind.INT32).wire("store", Store)

Attributes without a binding are never touched by the resolver.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

from fallwire.domain.enums import BindingKind, ValueKind
from fallwire.domain.models import FieldBinding


class BindingDeclaration:
    """Class attribute placeholder that becomes a FieldBinding once named.

    The field name is only known when the owning class body finishes, so the
    binding is built in ``__set_name__``. Assigning the attribute on an
    instance shadows the placeholder.
    """

    def __init__(self, kind: BindingKind, **spec: Any) -> None:
        self._kind = kind
        self._spec = spec
        self.binding: Optional[FieldBinding] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.binding = FieldBinding(field_name=name, kind=self._kind, **self._spec)

    def __repr__(self) -> str:
        return f"BindingDeclaration({self._kind.value}, {self._spec!r})"


def value(value_name: str, value_kind: ValueKind = ValueKind.ANY) -> Any:
    """Declare a field that receives the named configuration value."""
    return BindingDeclaration(BindingKind.VALUE, value_name=value_name, value_kind=value_kind)


def named(target_name: str, by_reference: bool = True) -> Any:
    """Declare a field that receives the component registered under ``target_name``."""
    return BindingDeclaration(BindingKind.NAME, target_name=target_name, by_reference=by_reference)


def wire(target_type: Any, by_reference: bool = True) -> Any:
    """Declare a field that receives the single component of ``target_type``.

    ``target_type`` may be a concrete class or a capability (ABC or Protocol);
    ``Optional[X]`` is unwrapped to ``X``.
    """
    return BindingDeclaration(BindingKind.TYPE, target_type=target_type, by_reference=by_reference)


class Bindings:
    """Fluent builder for the bindings of one component.

    Example:
        >>> bindings = (
        ...     Bindings()
        ...     .value("port", "http.port", ValueKind.UINT16)
        ...     .named("cache", "redis-cache")
        ...     .wire("log", Logger)
        ... )
        >>> context.register(Server(), bindings=bindings)
    """

    def __init__(self) -> None:
        self._bindings: List[FieldBinding] = []

    def value(self, field_name: str, value_name: str, value_kind: ValueKind = ValueKind.ANY) -> "Bindings":
        self._bindings.append(
            FieldBinding(field_name=field_name, kind=BindingKind.VALUE, value_name=value_name, value_kind=value_kind)
        )
        return self

    def named(self, field_name: str, target_name: str, by_reference: bool = True) -> "Bindings":
        self._bindings.append(
            FieldBinding(
                field_name=field_name,
                kind=BindingKind.NAME,
                target_name=target_name,
                by_reference=by_reference,
            )
        )
        return self

    def wire(self, field_name: str, target_type: Any, by_reference: bool = True) -> "Bindings":
        self._bindings.append(
            FieldBinding(
                field_name=field_name,
                kind=BindingKind.TYPE,
                target_type=target_type,
                by_reference=by_reference,
            )
        )
        return self

    def __iter__(self) -> Iterator[FieldBinding]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)


def collect_bindings(component_type: type, explicit: Optional[Iterable[FieldBinding]] = None) -> List[FieldBinding]:
    """Gather the bindings of a type.

    Declarations are read from the class and its bases (base classes first,
    subclasses overriding), then explicit bindings replace declarations for
    the same field. A subclass attribute that is not a declaration removes
    the inherited binding of that name.

    Args:
        component_type: The concrete type of the instance being registered.
        explicit: Bindings supplied at registration time.

    Returns:
        The bindings in declaration order.
    """
    merged: Dict[str, FieldBinding] = {}
    for klass in reversed(component_type.__mro__):
        for name, attribute in vars(klass).items():
            if isinstance(attribute, BindingDeclaration) and attribute.binding is not None:
                merged[attribute.binding.field_name] = attribute.binding
            else:
                merged.pop(name, None)
    for binding in explicit or ():
        merged[binding.field_name] = binding
    return list(merged.values())
