"""
fixedfile-highlighter - highlight fields of fixed-width flat files

Reads a CSV syntax file describing where each field sits on a line and
produces color-coded HTML of the input file.
"""

from .lib import (
    RuleSetLoader,
    Highlighter,
    ColorAssignment,
    Renderer,
    LoadError,
    LOG,
    state_connectToLogger,
    __version__,
)

__all__ = [
    "RuleSetLoader",
    "Highlighter",
    "ColorAssignment",
    "Renderer",
    "LoadError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
