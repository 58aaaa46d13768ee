"""Logging setup for the walkthrough scripts.

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``graphlap`` namespace; nothing is configured on import. Scripts call
:func:`setup_logging` once to attach handlers to the package logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

PACKAGE_LOGGER = "graphlap"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    *,
    debug_modules: Iterable[str] = (),
) -> logging.Logger:
    """Attach stdout (and optionally file) handlers to the ``graphlap`` logger.

    Args:
        level: level for the package logger.
        log_file: optional path; the file is truncated on every call.
        debug_modules: subpackages (e.g. ``"pca"``, ``"graph.spectral"``)
            logged at DEBUG while the rest of the package stays at ``level``.

    Calling it again replaces the handlers installed by the previous call.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    package.setLevel(level)
    for handler in list(package.handlers):
        handler.close()
        package.removeHandler(handler)

    debug_modules = tuple(debug_modules)
    for name in debug_modules:
        logging.getLogger(f"{PACKAGE_LOGGER}.{name}").setLevel(logging.DEBUG)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handler_level = min(level, logging.DEBUG) if debug_modules else level
    for handler in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        package.addHandler(handler)

    package.debug("graphlap logging ready (debug modules: %s)", ", ".join(debug_modules) or "none")
    return package
