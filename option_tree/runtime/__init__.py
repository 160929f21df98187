from .logging import reset_logging, switch_log_file
