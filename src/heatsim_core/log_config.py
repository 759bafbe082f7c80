# --- src/heatsim_core/log_config.py ---
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level=logging.INFO, stream=None):
    """
    Routes all package loggers through one root handler. Progress (step counts,
    snapshot writes) is logged at INFO, unmatched plot times at WARNING.

    `stream` defaults to the current `sys.stdout`; the handler keeps the stream
    it was given, so rebinding `sys.stdout` later does not redirect it.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.debug("Logging configured.")


def set_quiet(quiet: bool):
    """`--quiet`: drop INFO progress but keep warnings. Fatal reports go to stderr regardless."""
    logging.getLogger().setLevel(logging.WARNING if quiet else logging.INFO)
