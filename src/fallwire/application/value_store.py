import logging
from typing import Any, Dict, List

from fallwire.domain import RegistrationConflictError

logger = logging.getLogger(__name__)


class ValueStore:
    """Named configuration values supplied before bring-up.

    Values are stored exactly as given; conversion to a field's kind is the
    resolver's job since only it knows the destination.

    Attributes:
        _values: Mapping from value name to value.
    """

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}

    def put(self, name: str, value: Any) -> None:
        """Store a value under a new name.

        Args:
            name: Name the value is looked up by.
            value: The value, commonly a string.

        Raises:
            RegistrationConflictError: If the name is already present.
        """
        if name in self._values:
            raise RegistrationConflictError(name, kind="value")
        self._values[name] = value
        logger.debug("Registered value %s", name)

    def get(self, name: str) -> Any:
        """Return the value stored under ``name``, or ``None`` if absent."""
        return self._values.get(name)

    def contains(self, name: str) -> bool:
        return name in self._values

    def names(self) -> List[str]:
        return list(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)
