"""
Usage audit: which options were set but never read?

Options nobody reads are usually typos in an input file, or settings of a
component that is not even switched on.
"""

import logging
import typing as t_

from option_tree.sections import get_root

if t_.TYPE_CHECKING:
    from option_tree.options import Options


logger = logging.getLogger(__name__)


def _iter_unused_nodes(options: "Options") -> t_.Iterator["Options"]:
    if options.is_value() and not options.used:
        yield options
    for child in options:
        yield from _iter_unused_nodes(child)


def iter_unused(options: "Options") -> t_.Iterator[str]:
    """Walk the tree depth-first, yielding the qualified names of unread values."""
    for node in _iter_unused_nodes(options):
        yield node.full_name or node.name


def print_unused(options: "Options | None" = None) -> list[str]:
    """Log the unread options below `options` (the root by default) and return their names."""
    if options is None:
        options = get_root()

    unused = list(_iter_unused_nodes(options))
    if not len(unused):
        logger.info("All options used")
        return []

    logger.info("Unused options:")
    names = []
    for node in unused:
        name = node.full_name or node.name
        # `value` does not count as a read
        logger.info(f"\t{name} = {node.value}")
        names.append(name)
    return names
