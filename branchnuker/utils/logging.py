# The MIT License (MIT)
# Copyright © 2025 Entrius

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = 'branchnuker'

log = logging.getLogger(LOGGER_NAME)


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Safe to call more than once; an existing Rich handler is replaced so
    repeated CLI invocations (tests) do not duplicate output.
    """
    level = logging.DEBUG if verbose else logging.INFO

    for handler in list(log.handlers):
        if isinstance(handler, RichHandler):
            log.removeHandler(handler)

    handler = RichHandler(
        console=console,
        show_path=False,
        show_time=True,
        markup=False,
        rich_tracebacks=False,
        log_time_format='%Y-%m-%d %H:%M:%S',
    )
    handler.setFormatter(logging.Formatter('%(message)s'))
    handler.setLevel(level)

    log.addHandler(handler)
    log.setLevel(level)
    log.propagate = False
    return log
