# app/notes_core/config.py
import logging
import os

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# "uniform": every failure is a 500 (the deployed behavior).
# "typed": each NotesError answers with its own status_code.
ERROR_STATUS_MODES = ("uniform", "typed")


def _choice(name, value, choices, default):
    if value in choices:
        return value
    logger.warning("Invalid %s %r, using %r (expected one of %s)",
                   name, value, default, ", ".join(choices))
    return default


def parse_log_level(value):
    return _choice("LOG_LEVEL", (value or "INFO").upper(), LOG_LEVELS, "INFO")


def parse_error_status_mode(value):
    return _choice("ERROR_STATUS_MODE", (value or "uniform").lower(), ERROR_STATUS_MODES, "uniform")


LOG_LEVEL = parse_log_level(os.environ.get("LOG_LEVEL"))
ERROR_STATUS_MODE = parse_error_status_mode(os.environ.get("ERROR_STATUS_MODE"))


def table_name():
    """Read at client creation so each Lambda picks up its own environment."""
    return os.environ.get("TABLE_NAME", "notes")
