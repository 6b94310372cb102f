"""
fixedfile-highlighter - highlight fixed-column fields of flat files as HTML
"""

__version__ = "0.3.0"

from .loader import RuleSetLoader, LoadError, MissingHeader, InvalidField, InvalidRegex, rules_load
from .engine import Highlighter, HighlightError, lines_highlight
from .palette import ColorAssignment, PaletteError, palette_resolve, palettes_listAvailable
from .renderer import Renderer
from .log import LOG, state_connectToLogger

__all__ = [
    "RuleSetLoader",
    "LoadError",
    "MissingHeader",
    "InvalidField",
    "InvalidRegex",
    "rules_load",
    "Highlighter",
    "HighlightError",
    "lines_highlight",
    "ColorAssignment",
    "PaletteError",
    "palette_resolve",
    "palettes_listAvailable",
    "Renderer",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
