"""
Models package for fixedfile-highlighter

Contains data structures and type definitions for the highlighting pipeline.
"""

from .state import ProgramState, pipeline
from .rules import Rule, RuleSet, Segment, HighlightedLine

__all__ = [
    "ProgramState",
    "pipeline",
    "Rule",
    "RuleSet",
    "Segment",
    "HighlightedLine",
]
