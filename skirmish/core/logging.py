"""
Logging configuration module for the skirmish engine.

Two loggers are used: `skirmish` for engine diagnostics and `skirmish.combat`
for the event stream of a running combat. The event stream is very chatty at
DEBUG level, so it can be given its own level when setting up the handlers.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Default logger for the engine.
logger = logging.getLogger("skirmish")

# Logger receiving one record per combat event.
event_logger = logging.getLogger("skirmish.combat")


def setup_logging(
    level: int = logging.INFO,
    event_level: int | None = None,
    width: int = 120,
) -> None:
    """
    Installs a rich handler on the root logger.

    Args:
        level (int): Level of the engine loggers.
        event_level (int | None): Level of the combat event stream, same as
            `level` when omitted.
        width (int): Width of the console the records are printed to.

    """
    rich_handler = RichHandler(
        console=Console(width=width, force_jupyter=False),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )
    logger.setLevel(level)
    event_logger.setLevel(level if event_level is None else event_level)


def _log(
    target: logging.Logger,
    level: int,
    message: str,
    context: dict[str, Any] | None,
) -> None:
    if not target.isEnabledFor(level):
        return
    if context:
        # Context is appended as key=value pairs.
        context_str = " ".join(f"{k}={v}" for k, v in context.items())
        message = f"{message} [{context_str}]"
    target.log(level, message)


def log_info(message: str, context: dict[str, Any] | None = None) -> None:
    _log(logger, logging.INFO, message, context)


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs a debug message with optional context.

    The message is only formatted when debug output is enabled, attacks and
    item uses call this on every turn.

    Args:
        message (str): The debug message.
        context (dict[str, Any] | None): Optional context dictionary.

    """
    _log(logger, logging.DEBUG, message, context)


def log_event(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs one entry of the combat event stream."""
    _log(event_logger, logging.DEBUG, message, context)
