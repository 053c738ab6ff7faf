"""Runtime values and the coercion rules that define Azalea semantics."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, Mapping, Optional, Tuple

if TYPE_CHECKING:
    from ..ast.nodes import Block

__all__ = [
    "ValueKind",
    "Closure",
    "Value",
    "VOID",
    "NUMBER_WORDS",
    "EQUALITY_TOLERANCE",
    "word_to_number",
    "text_to_number",
    "format_number",
    "values_equal",
]

NUMBER_WORDS: Dict[str, float] = {
    "zero": 0.0, "one": 1.0, "two": 2.0, "three": 3.0, "four": 4.0,
    "five": 5.0, "six": 6.0, "seven": 7.0, "eight": 8.0, "nine": 9.0,
    "ten": 10.0, "eleven": 11.0, "twelve": 12.0, "thirteen": 13.0,
    "fourteen": 14.0, "fifteen": 15.0, "sixteen": 16.0, "seventeen": 17.0,
    "eighteen": 18.0, "nineteen": 19.0, "twenty": 20.0, "thirty": 30.0,
    "forty": 40.0, "fifty": 50.0, "sixty": 60.0, "seventy": 70.0,
    "eighty": 80.0, "ninety": 90.0, "hundred": 100.0, "thousand": 1000.0,
    "million": 1000000.0,
    "four_zero_zero_zero": 4000.0,
    "four_g": float(4 * 1024 ** 3),
}

EQUALITY_TOLERANCE = 0.0001

_NUMERIC_PREFIX = re.compile(
    r"[+-]?(?:"
    r"0x(?:[0-9a-f]+(?:\.[0-9a-f]*)?|\.[0-9a-f]+)(?:p[+-]?\d+)?"
    r"|(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?"
    r"|inf(?:inity)?"
    r"|nan"
    r")",
    re.IGNORECASE,
)

_LEADING_SPACE = " \t\n\v\f\r"


def word_to_number(word: str) -> Optional[float]:
    """Look ``word`` up in the number-word table (exact, case-sensitive)."""
    return NUMBER_WORDS.get(word)


def _parse_numeric_prefix(text: str) -> Optional[float]:
    """Read the longest numeric prefix of ``text`` after leading whitespace.

    Returns ``None`` when there is no prefix or its magnitude is out of
    range for a float.
    """
    match = _NUMERIC_PREFIX.match(text.lstrip(_LEADING_SPACE))
    if match is None:
        return None
    literal = match.group()
    unsigned = literal.lstrip("+-").lower()
    if unsigned.startswith(("inf", "nan")):
        return float(literal)
    try:
        number = float.fromhex(literal) if unsigned.startswith("0x") else float(literal)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def text_to_number(text: str) -> float:
    """Numeric prefix, else exact number word, else ``0.0``.

    >>> text_to_number("2.5")
    2.5
    >>> text_to_number("3 apples")
    3.0
    >>> text_to_number("twelve")
    12.0
    >>> text_to_number("Twelve")
    0.0
    """
    number = _parse_numeric_prefix(text)
    if number is None:
        number = word_to_number(text)
    return number if number is not None else 0.0


def format_number(number: float) -> str:
    """Render integral numbers without a fractional part: 7.0 -> "7"."""
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number)


class ValueKind(Enum):
    NUMBER = "num"
    TEXT = "text"
    BOOL = "bool"
    LIST = "list"
    MAP = "map"
    VOID = "void"
    FUNCTION = "func"


@dataclass(frozen=True)
class Closure:
    """A function value.

    Only the parameter names and the body are kept.  Free variables in the
    body are looked up in the caller's scope chain when the function runs.
    """

    params: Tuple[str, ...]
    body: "Block"
    name: str = ""


@dataclass(frozen=True)
class Value:
    """Tagged runtime value.

    ``data`` holds a ``float``, ``str``, ``bool``, ``list`` of values,
    ``dict`` of name to value, :class:`Closure`, or ``None`` for void.
    Lists and maps are shared by reference.
    """

    kind: ValueKind
    data: Any = None

    # ---- constructors ----

    @classmethod
    def number(cls, number: float) -> "Value":
        return cls(ValueKind.NUMBER, float(number))

    @classmethod
    def text(cls, text: str) -> "Value":
        return cls(ValueKind.TEXT, text)

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls(ValueKind.BOOL, bool(flag))

    @classmethod
    def list_of(cls, items: Iterable["Value"]) -> "Value":
        return cls(ValueKind.LIST, list(items))

    @classmethod
    def map_of(cls, entries: Mapping[str, "Value"]) -> "Value":
        return cls(ValueKind.MAP, dict(entries))

    @classmethod
    def function(cls, closure: Closure) -> "Value":
        return cls(ValueKind.FUNCTION, closure)

    @classmethod
    def from_python(cls, obj: Any) -> "Value":
        """Wrap a plain Python object, as returned by host code."""
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return VOID
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, (int, float)):
            return cls.number(obj)
        if isinstance(obj, str):
            return cls.text(obj)
        if isinstance(obj, Closure):
            return cls.function(obj)
        if isinstance(obj, Mapping):
            return cls.map_of({str(key): cls.from_python(item) for key, item in obj.items()})
        if isinstance(obj, (list, tuple)):
            return cls.list_of(cls.from_python(item) for item in obj)
        return cls.text(str(obj))

    # ---- predicates ----

    @property
    def is_void(self) -> bool:
        return self.kind is ValueKind.VOID

    # ---- coercions ----

    def to_number(self) -> float:
        if self.kind is ValueKind.NUMBER:
            return self.data
        if self.kind is ValueKind.BOOL:
            return 1.0 if self.data else 0.0
        if self.kind is ValueKind.TEXT:
            return text_to_number(self.data)
        return 0.0

    def to_bool(self) -> bool:
        if self.kind is ValueKind.BOOL:
            return self.data
        if self.kind is ValueKind.NUMBER:
            return self.data != 0.0
        if self.kind is ValueKind.TEXT:
            return self.data != ""
        return False

    def to_string(self) -> str:
        if self.kind is ValueKind.NUMBER:
            return format_number(self.data)
        if self.kind is ValueKind.TEXT:
            return self.data
        if self.kind is ValueKind.BOOL:
            return "true" if self.data else "false"
        if self.kind is ValueKind.LIST:
            return "[" + ", ".join(item.to_string() for item in self.data) + "]"
        if self.kind is ValueKind.MAP:
            return "{" + ", ".join(f"{key}: {item.to_string()}" for key, item in self.data.items()) + "}"
        if self.kind is ValueKind.FUNCTION:
            return "function"
        return "void"

    def __str__(self) -> str:
        return self.to_string()


VOID = Value(ValueKind.VOID)


def values_equal(left: Value, right: Value) -> bool:
    """Text compares exactly; everything else numerically within a tolerance."""
    if left.kind is ValueKind.TEXT and right.kind is ValueKind.TEXT:
        return left.data == right.data
    return abs(left.to_number() - right.to_number()) < EQUALITY_TOLERANCE
