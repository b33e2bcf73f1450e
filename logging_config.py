"""
Log output of the mapoverlay command line.

Library modules only create `logging.getLogger(__name__)` loggers; the CLI
calls setup_logging once per run so grid, arc and globe messages reach
stdout and, with --log-file, a file next to the rendered overlay.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Chatty dependencies: texture download (requests) and plotting
THIRD_PARTY_LOGGERS = ("urllib3", "pyvista")


def verbosity_to_level(verbose: int) -> int:
    """Map the count of -v flags to a level: none warns, -v informs, -vv debugs."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route every overlay logger through the root logger.

    Args:
        level: Threshold for the overlay modules
        log_file: Also write the log here, replacing an older file
    """
    root = logging.getLogger()
    root.setLevel(level)
    # a second CLI run in the same process must not print twice
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).debug(
        "Overlay logging at %s%s", logging.getLevelName(level),
        f", copied to {log_file}" if log_file else "")
