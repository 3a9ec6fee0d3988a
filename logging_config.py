import logging
import sys

from config import LOG_LEVEL


def setup_logging(level=None):
    """Configure application-wide logging.

    Log records go to stderr; stdout is reserved for the validation report.
    """
    log_level = level if level is not None else logging.getLevelName(LOG_LEVEL.upper())
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Repeated calls (tests, embedding) replace our handler instead of stacking
    for handler in list(root_logger.handlers):
        if getattr(handler, "_timvalidate", False):
            root_logger.removeHandler(handler)
    console_handler._timvalidate = True
    root_logger.addHandler(console_handler)

    return root_logger
