"""
Loguru logging for the vvsml compiler

Two entry points:
    LOG()  - progress and debug trace, gated by the verbosity of the
             ProgramState connected to the current context
    WARN() - non-fatal source diagnostics, printed at every verbosity

Library code (preprocessor, parser, code generator) never receives the
state explicitly; the driver connects it once and every LOG() call in that
context picks it up.

Usage:
    from vvsml.lib.log import LOG, WARN, state_connectToLogger

    state_connectToLogger(state)
    LOG("Preprocessing pass 1", level=2)
    WARN("format specifier b is redundant", "notes.vvsml", 12)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# ProgramState of the running compilation, if any
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# One stderr sink, vvsml layout
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Call this at the start of the pipeline to make the state's verbosity
    setting available to LOG() calls throughout that context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit message at DEBUG when the connected state's verbosity is at least level.

    Nothing is logged when no state is connected (library use, tests).
    Levels: 1 = stage progress, 2 = per-pass detail (-v), 3 = per-directive trace (-vv).
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)


def WARN(message: str, file: Optional[str] = None, line: Optional[int] = None) -> None:
    """
    Emit a non-fatal diagnostic regardless of verbosity.

    Args:
        message: Warning text
        file: Source path the warning refers to
        line: 1-based source line, if known
    """
    location = ""
    if file is not None:
        location = f"{file}:{line} - " if line is not None else f"{file} - "
    logger.opt(depth=1).warning(f"{location}{message}")
