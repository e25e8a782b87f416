from enum import Enum
from typing import Optional


class ComponentState(str, Enum):
    """Resolution state of a registered component.

    Attributes:
        REGISTERED: Known to the registry, not yet processed.
        WIRING: On the wiring stack, fields being resolved.
        WIRED: Fields populated and early hook invoked.
    """

    REGISTERED = "registered"
    WIRING = "wiring"
    WIRED = "wired"

    def __str__(self) -> str:
        return self.value


class BindingKind(str, Enum):
    """How a field finds the thing injected into it.

    Attributes:
        VALUE: A named configuration value from the value store.
        NAME: A component looked up by its unique name.
        TYPE: A component looked up by concrete type, then by capability.
    """

    VALUE = "value"
    NAME = "name"
    TYPE = "type"

    def __str__(self) -> str:
        return self.value


class ValueKind(str, Enum):
    """Destination kind of a value binding, including bit width."""

    ANY = "any"
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    def __str__(self) -> str:
        return self.value

    @property
    def bits(self) -> Optional[int]:
        """Bit width of numeric kinds, ``None`` for the rest."""
        return _BITS.get(self)

    @property
    def is_signed_integer(self) -> bool:
        return self in (ValueKind.INT, ValueKind.INT8, ValueKind.INT16, ValueKind.INT32, ValueKind.INT64)

    @property
    def is_unsigned_integer(self) -> bool:
        return self in (ValueKind.UINT, ValueKind.UINT8, ValueKind.UINT16, ValueKind.UINT32, ValueKind.UINT64)

    @property
    def is_float(self) -> bool:
        return self in (ValueKind.FLOAT32, ValueKind.FLOAT64)


_BITS = {
    ValueKind.INT: 64,
    ValueKind.INT8: 8,
    ValueKind.INT16: 16,
    ValueKind.INT32: 32,
    ValueKind.INT64: 64,
    ValueKind.UINT: 64,
    ValueKind.UINT8: 8,
    ValueKind.UINT16: 16,
    ValueKind.UINT32: 32,
    ValueKind.UINT64: 64,
    ValueKind.FLOAT32: 32,
    ValueKind.FLOAT64: 64,
}
