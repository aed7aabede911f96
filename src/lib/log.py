"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of the ProgramState connected to the current
context, so the tokenizer and renderer can trace their decisions without
being handed the state explicitly. Library callers that never connect a
state get no output at all.

Usage:
    from lib.log import LOG, state_connectToLogger

    # At start of pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Rendered 12 lines", level=1)
    LOG("Tag table overlay: tags.yaml", level=2)
    LOG("ITALIC close @5 in 'b_c' paired", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when none is connected"""
    state = _program_state.get()
    if state is None or not hasattr(state, 'verbosity'):
        return 0
    return state.verbosity


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Read 512 characters", level=2)
        LOG("BOLD open @0 in '__bold__' pushed", level=3)
    """
    if verbosity_get() >= level:
        # depth=1 reports the caller, not this wrapper
        logger.opt(depth=1).debug(message, **kwargs)
