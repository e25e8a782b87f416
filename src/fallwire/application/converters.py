"""Application layer - Conversion of named values to their destination kind.

String values are parsed with the table in ``PARSERS``; other values go
through ``CONVERTERS``. Every function raises ``ValueError`` on failure and
the resolver turns that into a ``ConversionError`` naming the field.
"""

import math
import re
import struct
from typing import Any, Callable, Dict

from fallwire.domain import ValueKind

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")
_FLOAT32_MAX = 3.4028234663852886e38

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _check_signed(number: int, bits: int) -> int:
    limit = 1 << (bits - 1)
    if not -limit <= number < limit:
        raise ValueError(f"{number} out of range for {bits}-bit signed integer")
    return number


def _check_unsigned(number: int, bits: int) -> int:
    if not 0 <= number < (1 << bits):
        raise ValueError(f"{number} out of range for {bits}-bit unsigned integer")
    return number


def _to_float32(number: float) -> float:
    if math.isfinite(number) and abs(number) > _FLOAT32_MAX:
        raise ValueError(f"{number} out of range for float32")
    return struct.unpack("f", struct.pack("f", number))[0]


def _parse_signed(bits: int) -> Callable[[str], int]:
    def parse(text: str) -> int:
        if not _SIGNED.fullmatch(text):
            raise ValueError(f"invalid syntax for integer: {text!r}")
        return _check_signed(int(text), bits)

    return parse


def _parse_unsigned(bits: int) -> Callable[[str], int]:
    def parse(text: str) -> int:
        if not _UNSIGNED.fullmatch(text):
            raise ValueError(f"invalid syntax for unsigned integer: {text!r}")
        return _check_unsigned(int(text), bits)

    return parse


def _parse_float(text: str) -> float:
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid syntax for float: {text!r}")
    number = float(text)
    if math.isinf(number) and "inf" not in text.lower():
        raise ValueError(f"{text} out of range for float64")
    return number


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid syntax for bool: {text!r}")


PARSERS: Dict[ValueKind, Callable[[str], Any]] = {
    ValueKind.ANY: lambda text: text,
    ValueKind.STRING: lambda text: text,
    ValueKind.BOOL: _parse_bool,
    ValueKind.FLOAT32: lambda text: _to_float32(_parse_float(text)),
    ValueKind.FLOAT64: _parse_float,
}
PARSERS.update({kind: _parse_signed(kind.bits) for kind in ValueKind if kind.is_signed_integer})
PARSERS.update({kind: _parse_unsigned(kind.bits) for kind in ValueKind if kind.is_unsigned_integer})


def _integral(candidate: Any) -> int:
    if isinstance(candidate, bool) or not isinstance(candidate, (int, float)):
        raise ValueError(f"{type(candidate).__name__} is not convertible to an integer")
    if isinstance(candidate, float) and not math.isfinite(candidate):
        raise ValueError(f"{candidate} is not convertible to an integer")
    return int(candidate)


def _convert_string(candidate: Any) -> str:
    if not isinstance(candidate, str):
        raise ValueError(f"{type(candidate).__name__} is not convertible to a string")
    return candidate


def _convert_bool(candidate: Any) -> bool:
    if not isinstance(candidate, bool):
        raise ValueError(f"{type(candidate).__name__} is not convertible to a bool")
    return candidate


def _convert_float(candidate: Any) -> float:
    if isinstance(candidate, bool) or not isinstance(candidate, (int, float)):
        raise ValueError(f"{type(candidate).__name__} is not convertible to a float")
    return float(candidate)


def _convert_signed(bits: int) -> Callable[[Any], int]:
    def convert(candidate: Any) -> int:
        return _check_signed(_integral(candidate), bits)

    return convert


def _convert_unsigned(bits: int) -> Callable[[Any], int]:
    def convert(candidate: Any) -> int:
        return _check_unsigned(_integral(candidate), bits)

    return convert


CONVERTERS: Dict[ValueKind, Callable[[Any], Any]] = {
    ValueKind.ANY: lambda candidate: candidate,
    ValueKind.STRING: _convert_string,
    ValueKind.BOOL: _convert_bool,
    ValueKind.FLOAT32: lambda candidate: _to_float32(_convert_float(candidate)),
    ValueKind.FLOAT64: _convert_float,
}
CONVERTERS.update({kind: _convert_signed(kind.bits) for kind in ValueKind if kind.is_signed_integer})
CONVERTERS.update({kind: _convert_unsigned(kind.bits) for kind in ValueKind if kind.is_unsigned_integer})


def convert_value(raw: Any, kind: ValueKind) -> Any:
    """Convert a stored value to ``kind``.

    Strings are parsed, anything else must be directly convertible.

    Raises:
        ValueError: If the value cannot be converted.
    """
    if isinstance(raw, str):
        return PARSERS[kind](raw)
    return CONVERTERS[kind](raw)
