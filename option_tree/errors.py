"""
Errors raised by the option tree.

All of them are raised at the point of violation and leave the tree as it was.
"""


class OptionError(ValueError):
    """Base class for every error raised by the option tree."""


class ConversionError(OptionError, TypeError):
    """The stored value cannot be coerced to the requested type."""


class ConsistencyError(OptionError):
    """Two call sites disagree on the default value of an unset option."""


class DuplicateSetError(OptionError):
    """An option was set twice to different values from the same source."""
