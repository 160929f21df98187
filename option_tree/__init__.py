"""
A hierarchical, typed tree of options for configuring numerical runs.

Provides:
- Options: a node of the tree, both a value and a section
- Value: the typed value held by a node, with its coercion rules
- the root of the tree shared by the whole process
- auditing of options that were set but never read
"""

from .errors import OptionError, ConversionError, ConsistencyError, DuplicateSetError
from .value import Tag, Value
from .attributes import AttributeStore, AttributeProxy
from .options import Options, DEFAULT_SOURCE
from .sections import get_root, cleanup_root, canonical_name
from .audit import iter_unused, print_unused
from .helpers import option, read_options

__all__ = [
    # Errors
    "OptionError",
    "ConversionError",
    "ConsistencyError",
    "DuplicateSetError",
    # Values and attributes
    "Tag",
    "Value",
    "AttributeStore",
    "AttributeProxy",
    # The tree
    "Options",
    "DEFAULT_SOURCE",
    "get_root",
    "cleanup_root",
    "canonical_name",
    # Audit
    "iter_unused",
    "print_unused",
    # Shorthands
    "option",
    "read_options",
]
