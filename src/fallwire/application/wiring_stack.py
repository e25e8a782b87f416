"""Application layer - Cycle detection during wiring."""

from typing import List, Set

from fallwire.domain import CircularDependencyError


class WiringStack:
    """Names of the components currently being wired.

    A component is pushed before its fields are resolved and popped once
    they are all assigned. Pushing a name that is already on the stack means
    the component depends on itself.

    Attributes:
        _names: Names in push order.
        _members: The same names, for membership checks.
    """

    def __init__(self) -> None:
        self._names: List[str] = []
        self._members: Set[str] = set()

    def push(self, name: str) -> None:
        """Add a component name to the stack.

        Args:
            name: The component about to be wired.

        Raises:
            CircularDependencyError: If the name is already on the stack. The
                reported chain is the whole stack followed by ``name``.

        Example:
            >>> stack = WiringStack()
            >>> stack.push("x")
            >>> stack.push("y")
            >>> stack.push("x")  # Raises CircularDependencyError: x -> y -> x
        """
        if name in self._members:
            raise CircularDependencyError(self._names + [name])
        self._names.append(name)
        self._members.add(name)

    def pop(self) -> str:
        """Remove and return the most recently pushed name."""
        name = self._names.pop()
        self._members.discard(name)
        return name

    def clear(self) -> None:
        self._names.clear()
        self._members.clear()

    def snapshot(self) -> List[str]:
        """Copy of the names currently on the stack, oldest first."""
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __len__(self) -> int:
        return len(self._names)
