"""
The option tree.

Every node of the tree is an `Options`: it may hold a value, it may have
children (then it acts as a section), or both. Children are looked up by name
regardless of case and created on first request, so

    options = Options()
    options["mesh"]["nx"] = 64
    nx = options["mesh"].get("nx", 32)

builds and reads a small tree. Nodes own their children; a child only keeps a
weak reference back to its parent, needed for its qualified name.
"""

import logging
import operator
import types
import typing as t_
import weakref

from option_tree import audit
from option_tree.attributes import AttributeStore
from option_tree.copying import assign_tree, clone_tree
from option_tree.errors import ConsistencyError, ConversionError, DuplicateSetError
from option_tree.sections import canonical_name, get_root, join_path, split_path
from option_tree.value import Tag, Value


logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "default"

_kind_by_tag = {
    Tag.boolean: bool,
    Tag.integer: int,
    Tag.real: float,
    Tag.text: str,
}


def _kind_of(default) -> type | None:
    """The type a value is read as, so that it matches the type of `default`."""
    value = Value.of(default)
    if value.tag == Tag.opaque:
        return type(default)
    return _kind_by_tag.get(value.tag)


def _identical(a: Value, b: Value) -> bool:
    return a.tag == b.tag and a == b


def _same_default(a: Value, b: Value) -> bool:
    """Exact agreement of two defaults; only an int and a real of equal value may differ in tag."""
    numeric = (Tag.integer, Tag.real)
    if a.tag in numeric and b.tag in numeric:
        return float(a.payload) == float(b.payload)
    return _identical(a, b)


class Options:
    """A node of the option tree."""

    name: str
    attributes: AttributeStore
    value_source: str
    used: bool
    has_default: bool
    default_value: Value
    default_source: str

    def __init__(self, name: str = "", parent: "Options | None" = None):
        self.name = name
        self._parent = None
        # qualified name of the node a detached copy was taken from
        self._origin_path = ""
        self._set_parent(parent)
        self._value = Value()
        self._children: dict[str, Options] = {}
        self.attributes = AttributeStore()
        self.value_source = ""
        self.used = False
        self.has_default = False
        self.default_value = Value()
        self.default_source = ""

    # -------------------------------------------------------------------------
    # Position in the tree
    # -------------------------------------------------------------------------

    def _set_parent(self, parent: "Options | None"):
        self._parent = None if parent is None else weakref.ref(parent)

    def parent(self) -> "Options | None":
        """The node this one hangs under, None for a root."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def full_name(self) -> str:
        """The ':'-joined names from the root down to here; empty for the root.

        A copy hangs nowhere but keeps the name of the node it was taken from.
        """
        parent = self.parent()
        if parent is None:
            return self._origin_path
        return join_path(parent.full_name, self.name)

    def _label(self) -> str:
        return self.full_name or "(root)"

    def __str__(self):
        return self.full_name

    def __repr__(self):
        children = ", ".join(child.name for child in self._children.values())
        return f"Options({self._label()!r}, value={self._value}, children=[{children}])"

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _child(self, name: str) -> "Options":
        key = canonical_name(name)
        child = self._children.get(key)
        if child is None:
            child = Options(name, self)
            self._children[key] = child
        return child

    def get_section(self, name: str) -> "Options":
        """Return the child called `name`, creating it if needed.

        The lookup ignores case. An empty name gives this very node, and a
        qualified name such as "mesh:ddx" walks down through the sections.
        """
        node = self
        for part in split_path(name):
            node = node._child(part)
        return node

    def _find(self, name: str) -> "Options | None":
        node = self
        for part in split_path(name):
            node = node._children.get(canonical_name(part))
            if node is None:
                return None
        return node

    def __getitem__(self, name: str) -> "Options":
        return self.get_section(name)

    def __setitem__(self, name: str, value):
        self.get_section(name).assign(value)

    def __contains__(self, name: str) -> bool:
        return self._find(name) is not None

    def __iter__(self) -> t_.Iterator["Options"]:
        return iter(list(self._children.values()))

    @property
    def children(self) -> t_.Mapping[str, "Options"]:
        """Read-only view of the children, keyed by their lowercase names."""
        return types.MappingProxyType(self._children)

    def keys(self) -> list[str]:
        return [child.name for child in self._children.values()]

    def subsections(self) -> list["Options"]:
        return [child for child in self._children.values() if child.is_section()]

    def is_section(self, name: str = "") -> bool:
        node = self._find(name)
        return node is not None and len(node._children) > 0

    def is_value(self) -> bool:
        return self._value.is_set

    def is_set(self, key: str | None = None) -> bool:
        """Whether this node (or the child `key`) holds a value set explicitly.

        A default handed out by `get` / `with_default` does not count.
        """
        if key is None:
            return self._value.is_set
        node = self._find(key)
        return node is not None and node._value.is_set

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Value:
        """The value held here, looked at without marking it used."""
        return self._value

    def _set(self, value, source: str, force: bool):
        if isinstance(value, Options):
            raise TypeError(f"Use assign() to copy a section into option {self._label()!r}")
        new = Value.of(value)
        if self._value.is_set and not _identical(self._value, new):
            if force or source != self.value_source:
                logger.warning(
                    f"\tOption {self._label()} = {self._value} ({self.value_source}) "
                    f"overwritten with {new} ({source})")
            else:
                raise DuplicateSetError(
                    f"Option {self._label()!r}: setting a new value {new} from the same "
                    f"source ({source}), the old value was {self._value}")
        self._value = new
        self.value_source = source
        self.used = False

    def set(self, key: str, value, source: str = "", force: bool = False):
        """Set the option `key` below this node.

        Parameters
        ----------
        key : str
            Name of the option, may be qualified with ':'.
        value :
            A bool, int, real, text or any other (opaque) object.
        source : str
            Where the value comes from, e.g. a file name or "command line".
        force : bool
            Overwrite even a different value from the same source.

        Raises
        ------
        DuplicateSetError
            If the option already holds a different value set from the same
            source and `force` is not given.
        """
        self.get_section(key)._set(value, source, force)

    def force_set(self, key: str, value, source: str = ""):
        self.set(key, value, source, force=True)

    def force(self, value, source: str = ""):
        """Overwrite the value held by this node."""
        self._set(value, source, force=True)

    def assign(self, value, source: str = ""):
        """Overwrite this node with `value`.

        Assigning another `Options` copies its value, attributes and children
        in, while this node stays where it is in its tree. Any other value only
        replaces the value held here.
        """
        if isinstance(value, Options):
            assign_tree(self, value)
            return
        self._value = Value.of(value)
        self.value_source = source
        self.used = False

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def _read(self, kind: type | None, mark_used: bool = True):
        try:
            result = self._value.convert(kind)
        except ConversionError as err:
            raise ConversionError(f"Option {self._label()!r}: {err}") from None
        if mark_used:
            self.used = True
        return result

    def as_(self, kind: type | None = None):
        """Read the value as `kind` (bool, int, float, str or an opaque type).

        Without `kind` the value comes back as stored. Reading marks the
        option used.
        """
        return self._read(kind)

    def as_bool(self) -> bool:
        return self._read(bool)

    def as_int(self) -> int:
        return self._read(int)

    def as_real(self) -> float:
        return self._read(float)

    def as_text(self) -> str:
        return self._read(str)

    def as_opaque(self, kind: type = object):
        """The opaque object held here, optionally checked to be a `kind`."""
        return self._read(kind)

    def __int__(self):
        return self.as_int()

    def __float__(self):
        return self.as_real()

    def _record_default(self, default):
        new = Value.of(default)
        if self.has_default:
            if not _same_default(self.default_value, new):
                raise ConsistencyError(
                    f"Option {self._label()!r}: inconsistent default values, "
                    f"{self.default_value} and then {new}")
            return
        self.has_default = True
        self.default_value = new.clone()
        self.default_source = DEFAULT_SOURCE

    def _value_or_default(self, default, log: bool, mark_used: bool):
        if self._value.is_set:
            result = self._read(_kind_of(default), mark_used)
            if log:
                logger.info(f"\tOption {self._label()} = {self._value} ({self.value_source})")
            return result

        if default is None:
            return None
        self._record_default(default)
        if log:
            logger.info(f"\tOption {self._label()} = {Value.of(default)} ({DEFAULT_SOURCE})")
        return default

    def with_default(self, default, log: bool = False):
        """The value held here, read as the type of `default`; `default` if unset.

        Every caller asking for a default of the same unset option has to
        agree on it, otherwise a ConsistencyError is raised.
        """
        return self._value_or_default(default, log, mark_used=True)

    def get(self, key: str, default, log: bool = True, *, mark_used: bool = True):
        """Read the option `key`, falling back on `default` if it is not set.

        Parameters
        ----------
        key : str
            Name of the option, may be qualified with ':'.
        default :
            Returned when the option is not set. Its type decides how a set
            value is read, e.g. a set real is read as int for an int default.
        log : bool
            Log the value and where it comes from.
        mark_used : bool
            Count this read for the usage audit.

        Raises
        ------
        ConversionError
            If the set value cannot be read as the type of `default`.
        ConsistencyError
            If the option is unset and was already read with another default.
        """
        return self.get_section(key)._value_or_default(default, log, mark_used)

    # -------------------------------------------------------------------------
    # Comparison against plain values
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if isinstance(other, Options):
            return self is other
        result = self._value == other
        if result and self._value.is_set:
            self.used = True
        return result

    def __ne__(self, other):
        return not self == other

    __hash__ = object.__hash__

    def _compare(self, other, op):
        if isinstance(other, Options):
            return NotImplemented
        try:
            result = self._value.compare(other, op)
        except ConversionError as err:
            raise ConversionError(f"Option {self._label()!r}: {err}") from None
        self.used = True
        return result

    def __lt__(self, other):
        return self._compare(other, operator.lt)

    def __le__(self, other):
        return self._compare(other, operator.le)

    def __gt__(self, other):
        return self._compare(other, operator.gt)

    def __ge__(self, other):
        return self._compare(other, operator.ge)

    # -------------------------------------------------------------------------
    # Copies and audit
    # -------------------------------------------------------------------------

    def copy(self) -> "Options":
        """A deep copy of this node and everything under it.

        The copy hangs nowhere, yet it and its children keep their qualified
        names, so that e.g. the usage audit of a copied section reports
        "mesh:nx" rather than "nx".
        """
        return clone_tree(self)

    def __copy__(self):
        return clone_tree(self)

    def __deepcopy__(self, memo):
        return clone_tree(self)

    def get_unused(self) -> list[str]:
        """Qualified names of the options below here that were set but never read."""
        return list(audit.iter_unused(self))

    def print_unused(self) -> list[str]:
        return audit.print_unused(self)

    @classmethod
    def root(cls) -> "Options":
        return get_root()
