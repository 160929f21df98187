"""
Logging set-up for scripts that build and inspect option trees.

The tree reports in plain lines such as "\tmesh:nx = 64 (input.toml)", so the
console shows the bare message, the way print(...) would.
"""

import sys
import logging


console_format = "%(message)s"
file_format = "%(name)s %(levelname)s %(message)s"


def reset_logging(level=logging.INFO) -> logging.Handler:
    """Drop every handler of the root logger and log to stdout only."""
    root_logger = logging.getLogger()

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(console_format))
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)
    return console_handler


def switch_log_file(log_file, level=None) -> logging.FileHandler:
    """Also log into `log_file`, in place of any log file used so far."""
    root_logger = logging.getLogger()

    for handler in list(root_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(file_format))
    if level is not None:
        file_handler.setLevel(level)
    root_logger.addHandler(file_handler)
    return file_handler
