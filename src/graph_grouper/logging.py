"""Logging utilities with Rich-based colored output."""

import contextlib
import functools
import logging
import os
import time

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.traceback import Traceback

PACKAGE = "graph_grouper"

_console = Console(stderr=True, highlight=False)


def _level_from_env(value: str | None) -> int:
    level = getattr(logging, str(value).upper(), None)
    return level if isinstance(level, int) else logging.INFO


_level = _level_from_env(os.getenv("GRAPH_GROUPER_LOG_LEVEL"))


def get_logger(name: str) -> logging.Logger:
    """Get a logger with RichHandler for colored output."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(_level)

        # show time, hide path
        handler = RichHandler(
            console=_console,
            rich_tracebacks=True,
            markup=True,
            show_time=True,
            show_path=False,
        )

        formatter = logging.Formatter(
            fmt="%(message)s",
            datefmt="[%X]",
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        logger.propagate = False

    return logger


def set_level(level: int) -> None:
    """Change the level of every graph_grouper logger created so far and of those created later."""
    global _level
    _level = level

    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (name == PACKAGE or name.startswith(PACKAGE + ".")):
            logger.setLevel(level)


def timer(logger=None, name=None):
    """Decorator to log the execution time of a function."""

    def decorator(func):
        log = logger or logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed = (time.perf_counter() - start) * 1000
                log.debug("[dim]%s took %.2f ms[/]", name or func.__name__, elapsed)

        return wrapper

    return decorator


@contextlib.contextmanager
def timed_execution(name: str, logger=None):
    """Log when a block starts and how long it took, e.g. `with timed_execution("grouping", logger):`."""
    log = logger or logging.getLogger()
    log.info("[cyan]Starting[/] %s", name)
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = (time.perf_counter() - start) * 1000
        log.info("[green]Completed[/] %s [dim]in %.2f ms[/]", name, elapsed)


def log_exception(exc: Exception) -> None:
    """Print an exception inside a Rich-styled box with traceback."""
    tb = Traceback.from_exception(
        type(exc),
        exc,
        exc.__traceback__,
        width=100,
    )

    panel = Panel(
        tb,
        title=f"[bold red]{type(exc).__name__}",
        border_style="red",
        padding=(1, 2),
    )
    _console.print(panel)
