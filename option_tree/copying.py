"""
Deep copy and deep assignment of option subtrees.

A copy is a new tree with its own nodes. An assignment keeps the target node
itself (and where it hangs in its tree) but swaps in copies of the source's
value, attributes and children, the latter re-parented onto the target.
"""

import typing as t_

if t_.TYPE_CHECKING:
    from option_tree.options import Options


def _copy_state(target: "Options", source: "Options"):
    target._value = source._value.clone()
    target.attributes = source.attributes.copy()
    target.value_source = source.value_source
    target.used = source.used
    target.has_default = source.has_default
    target.default_value = source.default_value.clone()
    target.default_source = source.default_source


def clone_tree(source: "Options", parent: "Options | None" = None) -> "Options":
    """Copy `source` and everything under it. The copy hangs under `parent`, if any.

    Without a parent, the copy keeps the qualified name of `source`.
    """
    from option_tree.options import Options

    copied = Options(source.name, parent)
    if parent is None:
        copied._origin_path = source.full_name
    _copy_state(copied, source)
    for [key, child] in source._children.items():
        copied._children[key] = clone_tree(child, copied)
    return copied


def assign_tree(target: "Options", source: "Options"):
    """Replace the contents of `target` by a copy of those of `source`.

    The name and parent of `target` are left as they are.
    """
    if target is source:
        return

    # Copy first: the source may well live somewhere below the target
    snapshot = clone_tree(source)

    _copy_state(target, snapshot)
    target._children = snapshot._children
    for child in target._children.values():
        child._set_parent(target)
