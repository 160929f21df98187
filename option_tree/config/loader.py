"""
TOML configuration loading and saving.

Uses tomllib for reading and tomli_w for writing. Tables become sections of
the option tree, arrays are kept as NumPy arrays. The tree is only touched
through `get_section` and `set`, so every value remembers the file it came from.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

import numpy as np
import tomli_w

from option_tree.options import Options


logger = logging.getLogger(__name__)


def populate(options: Options, data: dict[str, Any], source: str = "") -> Options:
    """Set the content of a nested dict below `options`."""
    for [key, value] in data.items():
        if isinstance(value, dict):
            populate(options.get_section(key), value, source)
        elif isinstance(value, list):
            options.set(key, np.asarray(value), source)
        else:
            options.set(key, value, source)
    return options


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_options(*paths: str | Path, into: Options | None = None) -> Options:
    """
    Load TOML files, one after the other, into an option tree.

    A value in a later file overrides the one from an earlier file.

    Parameters
    ----------
    paths : str or Path
        The files to read.
    into : Options, optional
        The tree to fill, a new one by default. Pass the root to make the
        options visible everywhere.

    Returns
    -------
    Options
        The filled tree.
    """
    if into is None:
        into = Options()
    for path in paths:
        path = Path(path)
        logger.info(f"Reading options from {path}")
        populate(into, _read_toml(path), source=str(path))
    return into


def _to_toml_value(value):
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value


def to_dict(options: Options) -> dict[str, Any]:
    """The content below `options` as a nested dict. Nothing is marked used."""
    data: dict[str, Any] = {}
    for child in options:
        if child.is_section():
            if child.is_value():
                raise ValueError(
                    f"Option '{child.full_name}' holds a value and has sub-options, "
                    "which TOML cannot represent")
            data[child.name] = to_dict(child)
        elif child.is_value():
            data[child.name] = _to_toml_value(child.value.payload)
    return data


def save_options(options: Options, path: str | Path) -> None:
    """Save an option tree to a TOML file."""
    path = Path(path)
    data = to_dict(options)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)
