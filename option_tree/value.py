"""
The value held by an option: unset, or one of boolean / integer / real / text / opaque.

Reading a value as another type goes through the coercion table spelled out in
the `to_*` methods below. Opaque values (e.g. NumPy arrays carrying a field)
travel through the tree untouched and are only handed back to a reader asking
for exactly that.
"""

import copy
import dataclasses as dc
import math
import numbers
import operator
import typing as t_
from enum import StrEnum

import numpy as np

from option_tree.errors import ConversionError


class Tag(StrEnum):
    unset = "unset"
    boolean = "bool"
    integer = "int"
    real = "real"
    text = "text"
    opaque = "opaque"


# a real is read as an integer only when it is this close to one
int_tolerance = 1e-3

_true_initials = "yt1"
_false_initials = "nf0"


def parse_bool(text: str) -> bool:
    """Read a boolean from text by its first character, case-insensitive.

    y / t / 1 mean true, n / f / 0 mean false. Anything else is an error.
    """
    if not len(text):
        raise ConversionError("Cannot read an empty text as a bool")
    initial = text[0].lower()
    if initial in _true_initials:
        return True
    if initial in _false_initials:
        return False
    raise ConversionError(f"Cannot read '{text}' as a bool")


def _real_to_int(real: float) -> int:
    if not math.isfinite(real):
        raise ConversionError(f"Cannot read {real} as an int")
    rounded = round(real)
    if abs(real - rounded) > int_tolerance:
        raise ConversionError(f"Cannot read {real} as an int, it is not integral")
    return int(rounded)


def _text_to_real(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ConversionError(f"Cannot read '{text}' as a real") from None


@dc.dataclass(frozen=True, eq=False)
class Value:
    """A tagged union. Exactly one tag is active, `payload` is None when unset."""

    tag: Tag = Tag.unset
    payload: t_.Any = None

    @classmethod
    def of(cls, obj) -> "Value":
        """Wrap a Python object with the matching tag."""
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls()
        # bool before int, since bool is a subclass of int
        if isinstance(obj, (bool, np.bool_)):
            return cls(Tag.boolean, bool(obj))
        if isinstance(obj, numbers.Integral):
            return cls(Tag.integer, int(obj))
        if isinstance(obj, numbers.Real):
            return cls(Tag.real, float(obj))
        if isinstance(obj, str):
            return cls(Tag.text, obj)
        return cls(Tag.opaque, obj)

    @property
    def is_set(self) -> bool:
        return self.tag != Tag.unset

    def clone(self) -> "Value":
        if self.tag == Tag.opaque:
            return Value(self.tag, copy.deepcopy(self.payload))
        return self

    def _fail(self, type_name: str):
        if not self.is_set:
            return ConversionError(f"Cannot read an unset value as {type_name}")
        return ConversionError(f"Cannot read a {self.tag} value {self} as {type_name}")

    def to_bool(self) -> bool:
        match self.tag:
            case Tag.boolean:
                return self.payload
            case Tag.integer if self.payload in (0, 1):
                return bool(self.payload)
            case Tag.text:
                return parse_bool(self.payload)
        raise self._fail("a bool")

    def to_int(self) -> int:
        match self.tag:
            case Tag.integer:
                return self.payload
            case Tag.real:
                return _real_to_int(self.payload)
            case Tag.text:
                try:
                    return int(self.payload)
                except ValueError:
                    return _real_to_int(_text_to_real(self.payload))
        raise self._fail("an int")

    def to_real(self) -> float:
        match self.tag:
            case Tag.real:
                return self.payload
            case Tag.integer:
                return float(self.payload)
            case Tag.text:
                return _text_to_real(self.payload)
        raise self._fail("a real")

    def to_text(self) -> str:
        match self.tag:
            case Tag.text:
                return self.payload
            case Tag.boolean:
                return "true" if self.payload else "false"
            case Tag.integer | Tag.real:
                # repr of a float is the shortest text that reads back to the same bits
                return repr(self.payload)
            case Tag.opaque:
                return str(self.payload)
        raise self._fail("text")

    def to_opaque(self, kind: type | None = None):
        if self.tag == Tag.opaque and (kind is None or isinstance(self.payload, kind)):
            return self.payload
        raise self._fail("an opaque value" if kind is None else kind.__name__)

    def to_native(self):
        if not self.is_set:
            raise self._fail("anything")
        return self.payload

    def convert(self, kind: type | None = None):
        """Read the value as `kind`; None gives back the payload as stored."""
        if kind is None:
            return self.to_native()
        if kind is bool:
            return self.to_bool()
        if kind is int:
            return self.to_int()
        if kind is float:
            return self.to_real()
        if kind is str:
            return self.to_text()
        return self.to_opaque(kind)

    def coerce_to(self, tag: Tag) -> "Value":
        """The same value under another tag, or ConversionError."""
        match tag:
            case Tag.boolean:
                return Value(tag, self.to_bool())
            case Tag.integer:
                return Value(tag, self.to_int())
            case Tag.real:
                return Value(tag, self.to_real())
            case Tag.text:
                return Value(tag, self.to_text())
            case Tag.opaque:
                return Value(tag, self.to_opaque())
        raise ConversionError("Cannot coerce a value to unset")

    def __eq__(self, other) -> bool:
        other = Value.of(other)
        # unset equals nothing, not even another unset value
        if not self.is_set or not other.is_set:
            return False
        try:
            other = other.coerce_to(self.tag)
        except ConversionError:
            return False
        if isinstance(self.payload, np.ndarray) or isinstance(other.payload, np.ndarray):
            return np.array_equal(self.payload, other.payload)
        return bool(self.payload == other.payload)

    def __ne__(self, other) -> bool:
        return not self == other

    def compare(self, other, op: t_.Callable[[t_.Any, t_.Any], bool]) -> bool:
        """Order against `other` after coercing it to the tag held here."""
        if self.tag in (Tag.unset, Tag.opaque):
            raise ConversionError(f"A {self.tag} value has no ordering")
        other = Value.of(other).coerce_to(self.tag)
        return op(self.payload, other.payload)

    def __lt__(self, other):
        return self.compare(other, operator.lt)

    def __le__(self, other):
        return self.compare(other, operator.le)

    def __gt__(self, other):
        return self.compare(other, operator.gt)

    def __ge__(self, other):
        return self.compare(other, operator.ge)

    def __str__(self) -> str:
        if not self.is_set:
            return "(unset)"
        return self.to_text()
