"""
Attributes: metadata attached to an option, kept apart from the option's own value.
"""

import typing as t_

from option_tree.errors import ConversionError
from option_tree.value import Tag, Value


# what a reader gets for a missing attribute; text has no sensible zero
_zero_values = {
    bool: False,
    int: 0,
    float: 0.0,
}


class AttributeProxy:
    """A handle on one attribute, whether it exists yet or not."""

    def __init__(self, store: "AttributeStore", name: str):
        self._store = store
        self.name = name

    @property
    def value(self) -> Value:
        return self._store.get_value(self.name)

    def exists(self) -> bool:
        return self.name in self._store

    def as_(self, kind: type | None = None):
        if not self.exists():
            if kind in _zero_values:
                return _zero_values[kind]
            raise ConversionError(f"Attribute '{self.name}' is not set")
        return self.value.convert(kind)

    def as_bool(self) -> bool:
        return self.as_(bool)

    def as_int(self) -> int:
        return self.as_(int)

    def as_real(self) -> float:
        return self.as_(float)

    def as_text(self) -> str:
        return self.as_(str)

    def __bool__(self):
        return self.as_bool()

    def __int__(self):
        return self.as_int()

    def __float__(self):
        return self.as_real()

    def __str__(self):
        return self.as_text()

    def __repr__(self):
        return f"AttributeProxy({self.name!r}, {self.value!s})"

    def __eq__(self, other):
        if isinstance(other, AttributeProxy):
            other = other.value
        return self.value == other

    def __ne__(self, other):
        return not self == other


class AttributeStore(t_.MutableMapping[str, t_.Any]):
    """Mapping from attribute name to its own Value.

    Indexing always hands back an `AttributeProxy`, so reading a missing
    attribute as a bool / int / real yields its zero instead of failing.
    """

    def __init__(self, other: "AttributeStore | None" = None):
        self._values: dict[str, Value] = {}
        if other is not None:
            self._values = {name: value.clone() for [name, value] in other._values.items()}

    def get_value(self, name: str) -> Value:
        return self._values.get(name, Value())

    def __getitem__(self, name: str) -> AttributeProxy:
        return AttributeProxy(self, name)

    def __setitem__(self, name: str, value):
        if isinstance(value, AttributeProxy):
            value = value.value
        value = Value.of(value)
        if value.tag == Tag.unset:
            self._values.pop(name, None)
        else:
            self._values[name] = value

    def __delitem__(self, name: str):
        del self._values[name]

    # Indexing never fails, so the mapping methods relying on a KeyError go
    # through the stored values instead.

    def get(self, name: str, default=None):
        """The proxy of an existing attribute, `default` otherwise."""
        if name not in self._values:
            return default
        return self[name]

    def pop(self, name: str, *default):
        """Remove an attribute and return its Value; `default` if there is none."""
        if name not in self._values and len(default):
            return default[0]
        return self._values.pop(name)

    def popitem(self) -> tuple[str, Value]:
        return self._values.popitem()

    def setdefault(self, name: str, default=None):
        if name not in self._values:
            self[name] = default
        return self.get(name)

    def __contains__(self, name) -> bool:
        return name in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def copy(self) -> "AttributeStore":
        return AttributeStore(self)

    def __repr__(self):
        content = ", ".join(f"{name}={value!s}" for [name, value] in self._values.items())
        return f"AttributeStore({content})"
