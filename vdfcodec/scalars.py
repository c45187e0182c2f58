"""Primitive scalar kinds and their text encoding.

Python has one ``int`` and one ``float``, so fixed widths are spelled with
``typing.Annotated`` markers::

    @dataclass
    class Inner:
        bonus_content: U8
        coolness: F64

A plain ``int`` is treated as ``I64`` and a plain ``float`` as ``F64``.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Annotated, Any


class ScalarKind(Enum):
    BOOL = "bool"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    CHAR = "char"
    STR = "str"

    @property
    def is_integer(self) -> bool:
        return self in INTEGER_RANGES

    @property
    def is_float(self) -> bool:
        return self in (ScalarKind.F32, ScalarKind.F64)


INTEGER_RANGES: dict[ScalarKind, tuple[int, int]] = {
    ScalarKind.I8: (-(2**7), 2**7 - 1),
    ScalarKind.I16: (-(2**15), 2**15 - 1),
    ScalarKind.I32: (-(2**31), 2**31 - 1),
    ScalarKind.I64: (-(2**63), 2**63 - 1),
    ScalarKind.U8: (0, 2**8 - 1),
    ScalarKind.U16: (0, 2**16 - 1),
    ScalarKind.U32: (0, 2**32 - 1),
    ScalarKind.U64: (0, 2**64 - 1),
}

F32_MAX = 3.4028234663852886e38

I8 = Annotated[int, ScalarKind.I8]
I16 = Annotated[int, ScalarKind.I16]
I32 = Annotated[int, ScalarKind.I32]
I64 = Annotated[int, ScalarKind.I64]
U8 = Annotated[int, ScalarKind.U8]
U16 = Annotated[int, ScalarKind.U16]
U32 = Annotated[int, ScalarKind.U32]
U64 = Annotated[int, ScalarKind.U64]
F32 = Annotated[float, ScalarKind.F32]
F64 = Annotated[float, ScalarKind.F64]
Char = Annotated[str, ScalarKind.CHAR]

PLAIN_SCALARS: dict[type, ScalarKind] = {
    bool: ScalarKind.BOOL,
    int: ScalarKind.I64,
    float: ScalarKind.F64,
    str: ScalarKind.STR,
}

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def render_scalar(kind: ScalarKind, value: Any) -> str:
    """Encode ``value`` as the leaf text for ``kind``; ValueError if it doesn't fit."""
    if kind is ScalarKind.BOOL:
        if not isinstance(value, bool):
            raise ValueError(f"expected a bool, got {type(value).__name__}")
        return "1" if value else "0"
    if kind.is_integer:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected an int, got {type(value).__name__}")
        _check_range(kind, value)
        return str(value)
    if kind.is_float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected a float, got {type(value).__name__}")
        try:
            value = float(value)
        except OverflowError as exc:
            raise ValueError(f"{value} is out of range for {kind.value}") from exc
        _check_float_range(kind, value)
        return repr(value)
    if not isinstance(value, str):
        raise ValueError(f"expected a str, got {type(value).__name__}")
    if kind is ScalarKind.CHAR and len(value) != 1:
        raise ValueError(f"expected a single character, got {len(value)}")
    return value


def parse_scalar(kind: ScalarKind, text: str) -> Any:
    """Strictly decode leaf ``text`` as ``kind``; ValueError with the reason otherwise."""
    if kind is ScalarKind.BOOL:
        if text == "1":
            return True
        if text == "0":
            return False
        raise ValueError('booleans must be "0" or "1"')
    if kind.is_integer:
        if not _INTEGER_RE.fullmatch(text):
            raise ValueError("not a base-10 integer")
        value = int(text)
        _check_range(kind, value)
        return value
    if kind.is_float:
        if not _FLOAT_RE.fullmatch(text):
            raise ValueError("not a decimal number")
        value = float(text)
        _check_float_range(kind, value)
        return value
    if kind is ScalarKind.CHAR and len(text) != 1:
        raise ValueError(f"expected a single character, got {len(text)}")
    return text


def _check_range(kind: ScalarKind, value: int) -> None:
    low, high = INTEGER_RANGES[kind]
    if not low <= value <= high:
        raise ValueError(f"{value} is out of range for {kind.value}")


def _check_float_range(kind: ScalarKind, value: float) -> None:
    if kind is ScalarKind.F32 and math.isfinite(value) and abs(value) > F32_MAX:
        raise ValueError(f"{value!r} is out of range for f32")


__all__ = [
    "ScalarKind",
    "I8",
    "I16",
    "I32",
    "I64",
    "U8",
    "U16",
    "U32",
    "U64",
    "F32",
    "F64",
    "Char",
    "render_scalar",
    "parse_scalar",
]
