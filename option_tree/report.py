"""
Show what an option tree holds.

Usage:
    python -m option_tree.report config.toml [override.toml ...] [--log report.log]

The first config file provides base parameters. Additional config files
override specific values; each option is listed with the file it came from.
"""

import logging
import sys

from option_tree.config import load_options
from option_tree.options import Options
from option_tree.runtime import reset_logging, switch_log_file
from option_tree.sections import get_root


logger = logging.getLogger(__name__)

usage = "Usage: python -m option_tree.report config.toml [override.toml ...] [--log report.log]"


def _format_lines(options: Options, depth: int, indent: str):
    pad = indent * depth
    for child in options:
        if child.is_value():
            flag = "" if child.used else "  [unused]"
            yield f"{pad}{child.name} = {child.value}  ({child.value_source}){flag}"
        elif child.has_default:
            yield f"{pad}{child.name} = {child.default_value}  ({child.default_source})"
        if child.is_section():
            if not child.is_value():
                yield f"{pad}[{child.name}]"
            yield from _format_lines(child, depth + 1, indent)


def format_tree(options: Options, indent: str = "  ") -> str:
    """A human-readable listing of the tree, without marking anything used."""
    return "\n".join(_format_lines(options, 0, indent))


def main(argv: list[str] | None = None) -> int:
    reset_logging()

    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    if "--log" in argv:
        position = argv.index("--log")
        try:
            log_file = argv[position + 1]
        except IndexError:
            print(usage)
            return 1
        del argv[position:position + 2]
        switch_log_file(log_file)

    if not len(argv):
        print(usage)
        return 1

    root = load_options(*argv, into=get_root())
    logger.info(format_tree(root))
    return 0


if __name__ == "__main__":
    sys.exit(main())
