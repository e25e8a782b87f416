from typing import Any, List, Optional, Sequence


class BringUpError(Exception):
    """Base exception for registration and wiring errors."""


class RegistrationConflictError(BringUpError):
    """Raised when a component or value name is registered twice.

    Attributes:
        name: The name that is already taken.
        kind: What the name identifies, ``"component"`` or ``"value"``.
    """

    def __init__(self, name: str, kind: str = "component") -> None:
        self.name = name
        self.kind = kind
        super().__init__(f"Cannot register {kind} '{name}' because that name is already registered")


class InvalidRegistrationError(BringUpError):
    """Raised for instances that cannot take part in wiring.

    This occurs when:
    - The instance is an immutable value (int, str, tuple, None, ...).
    - The instance is a class rather than an object.
    - No name can be derived from the instance's type.
    """


class UnresolvableError(BringUpError):
    """Raised when nothing satisfies a field binding.

    Attributes:
        component: Name of the component being wired, or being looked up.
        field: Name of the field that could not be resolved, if any.
        reason: Why resolution failed.
    """

    def __init__(self, component: str, field: Optional[str] = None, reason: Optional[str] = None) -> None:
        self.component = component
        self.field = field
        self.reason = reason
        if field is None:
            message = f"Cannot resolve component '{component}'"
        else:
            message = f"Cannot wire field '{field}' in '{component}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class AmbiguousDependencyError(BringUpError):
    """Raised when more than one component satisfies a type or capability binding.

    Attributes:
        component: Name of the component being wired.
        field: Name of the field being wired.
        target: The requested type.
        candidates: Names of every matching component.
    """

    def __init__(self, component: str, field: str, target: type, candidates: Sequence[str]) -> None:
        self.component = component
        self.field = field
        self.target = target
        self.candidates = list(candidates)
        super().__init__(
            f"Cannot wire field '{field}' in '{component}' because there is more than one "
            f"registered {_type_label(target)}: {', '.join(self.candidates)}"
        )


class ConversionError(BringUpError):
    """Raised when a named value cannot be converted for its destination field.

    Attributes:
        component: Name of the component being wired.
        field: Name of the destination field.
        value: The offending value.
        target_kind: The kind the value had to be converted to.
    """

    def __init__(self, component: str, field: str, value: Any, target_kind: Any, reason: Optional[str] = None) -> None:
        self.component = component
        self.field = field
        self.value = value
        self.target_kind = target_kind
        self.reason = reason
        message = (
            f"Cannot inject value {value!r} into field '{field}' in '{component}' "
            f"because it is not convertible to {target_kind}"
        )
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CircularDependencyError(BringUpError):
    """Raised when a component transitively depends on itself.

    Attributes:
        dependency_chain: The wiring stack at detection time followed by the re-entered name.
    """

    def __init__(self, dependency_chain: List[str]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(dependency_chain)}"
        super().__init__(message)


class LifecycleError(BringUpError):
    """Raised for operations out of bring-up order.

    This occurs when:
    - ``start()`` is called a second time, or after a failed pass.
    - A component or value is registered after ``start()`` began.
    - A component is requested before bring-up completed.
    """


class MalformedPropertiesError(BringUpError):
    """Raised for a properties line that is not exactly ``key=value``.

    Attributes:
        line_number: One-based line number in the source.
        line: The offending line.
    """

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(f"Invalid properties line {line_number}: {line!r}")


def _type_label(target: type) -> str:
    module = getattr(target, "__module__", "")
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", repr(target))
    return f"{module}.{name}" if module else name
