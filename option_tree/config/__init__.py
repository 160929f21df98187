"""
Configuration files in and out of the option tree.

Provides:
- TOML loading and saving
- The nested-dict bridge both rely on
"""

from .loader import load_options, save_options, populate, to_dict

__all__ = [
    # Loader functions
    "load_options",
    "save_options",
    "populate",
    "to_dict",
]
