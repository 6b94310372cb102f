"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing run stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field, fields


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for one highlighting run (state bus pattern).

    Each pipeline stage copies the state, adds its results and hands it on.

    Pipeline stages and their state additions:
        - Initial: inputFile, syntaxFile, colors, delimiter, snippet, verbosity
        - env_check: inputPath, syntaxPath, envOK
        - syntax_load: syntaxSource, ruleSet
        - palette_resolve: colorAssignment
        - input_read: lines
        - lines_highlight: highlighted
        - html_render: html

    Attributes:
        inputFile: Path of the file to highlight, as given on the command line
        syntaxFile: Path of the CSV syntax file, as given on the command line
        colors: Palette preset name or comma-separated hex list (None = default)
        delimiter: Input field delimiter; None selects fixed-width mode
        snippet: Render an HTML fragment instead of a full document
        verbosity: Logging verbosity level (0-3)
        envOK: Both files exist and are readable
        inputPath: Resolved input file path
        syntaxPath: Resolved syntax file path
        syntaxSource: Raw syntax file text
        ruleSet: Loaded RuleSet
        colorAssignment: ColorAssignment for the rule set
        lines: Input lines without terminators
        highlighted: List[HighlightedLine] from the engine
        html: Rendered output
    """

    # CLI arguments
    inputFile: str = field(default="")
    syntaxFile: str = field(default="")
    colors: Optional[str] = field(default=None)
    delimiter: Optional[str] = field(default=None)
    snippet: bool = field(default=False)
    verbosity: int = field(default=0)

    # Pipeline state
    envOK: bool = field(default=False)
    inputPath: Path = field(default=Path("/"))
    syntaxPath: Path = field(default=Path("/"))
    syntaxSource: str = field(default="")
    ruleSet: Optional[Any] = field(default=None)  # RuleSet at runtime
    colorAssignment: Optional[Any] = field(default=None)  # ColorAssignment at runtime
    lines: List[str] = field(default_factory=list)
    highlighted: Optional[List[Any]] = field(default=None)  # List[HighlightedLine] at runtime
    html: str = field(default="")

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Options without a matching field are ignored.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(initial_state, env_check, syntax_load, html_render)

    is equivalent to html_render(syntax_load(env_check(initial_state))).
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
