"""
Naming of sections: case-insensitive keys, qualified paths and the root of the tree.

A qualified path joins the names from the root down with ':', e.g.
"mesh:ddx". The root itself has an empty path.
"""

import logging


logger = logging.getLogger(__name__)

separator = ":"

_root = None


def canonical_name(name: str) -> str:
    """The key used to look a child up: names only differing in case are the same."""
    return name.lower()


def join_path(parent_path: str, name: str) -> str:
    if not len(parent_path):
        return name
    return f"{parent_path}{separator}{name}"


def split_path(path: str) -> list[str]:
    """Split a qualified path into its names, dropping empty ones."""
    return [name for name in path.split(separator) if len(name)]


def get_root():
    """Return the root of the configuration tree.

    It is built on the first call and the very same instance is returned for
    the rest of the process, unless `cleanup_root` is called.
    """
    global _root
    if _root is None:
        from option_tree.options import Options
        _root = Options()
        logger.debug("Created the root of the option tree")
    return _root


def cleanup_root():
    """Drop the root with everything under it; the next `get_root` starts afresh."""
    global _root
    _root = None
