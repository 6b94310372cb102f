"""
Run-scoped logging on top of Loguru.

LOG() checks the verbosity of the ProgramState bound to the current context,
so loader and engine code can log without having the state passed in.
Everything goes to stderr; stdout is reserved for the rendered HTML.

Usage:
    from .log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Loaded 12 rules", level=1)
    LOG("Line 40 shorter than rule 'Amount'", level=2)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Bind a ProgramState to the logging context.

    Args:
        state: Object carrying a ``verbosity`` attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the bound state's verbosity allows it.

    Args:
        message: Text to log
        level: Minimum verbosity (1=normal, 2=verbose, 3=debug)
        **kwargs: Passed through to loguru

    Nothing is logged when no state has been bound, which keeps library use
    (and the test suite) quiet.
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
