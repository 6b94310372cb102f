"""
Rule and segment data models

Type-safe structures shared by the rule loader, the highlighting engine and
the renderer.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Rule:
    """
    A named column range with an optional line condition

    Fixed-width rules address columns directly through ``start`` and
    ``length``. Delimited rules leave those unset and address a 1-based
    ``field`` of a line split on the rule set's delimiter.

    Attributes:
        name: Human readable field name (shown as the hover title)
        start: 1-based first column (fixed-width mode)
        length: Number of columns (fixed-width mode)
        field: 1-based field number (delimited mode)
        condition: Compiled pattern restricting the lines this rule applies to;
                   None means the rule applies to every line

    Example:
        Rule(name="Record type", start=1, length=2)
        covers columns 1-2 of every line
    """
    name: str
    start: Optional[int] = None
    length: Optional[int] = None
    field: Optional[int] = None
    condition: Optional[re.Pattern] = None

    def applies_to(self, line: str) -> bool:
        """Check the condition (if any) against the full line text"""
        if self.condition is None:
            return True
        return self.condition.search(line) is not None

    def span_resolve(self, line: str, delimiter: Optional[str] = None) -> Optional[Tuple[int, int]]:
        """
        Resolve the columns this rule asks for on a given line

        Returns a 0-based, half-open ``(begin, end)`` pair. The pair is not
        clipped to the line; callers decide what to do with columns past the
        end of the text. Returns None when the rule addresses nothing on this
        line (a delimited field that does not exist).
        """
        if delimiter is None:
            begin = self.start - 1
            return begin, begin + self.length

        fields = line.split(delimiter)
        if self.field > len(fields):
            return None
        begin = sum(len(f) + len(delimiter) for f in fields[: self.field - 1])
        return begin, begin + len(fields[self.field - 1])


@dataclass(frozen=True)
class RuleSet:
    """
    Ordered, precedence-significant collection of rules

    Earlier rules win overlapping columns. Built once per run and never
    modified afterwards.

    Attributes:
        rules: Rules in syntax file order
        delimiter: Field delimiter for delimited mode, None for fixed-width
    """
    rules: Tuple[Rule, ...] = ()
    delimiter: Optional[str] = None

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)


@dataclass(frozen=True)
class Segment:
    """
    A contiguous run of columns in one line

    Columns are 1-based and half-open, so ``Segment(1, 4, ...)`` covers
    columns 1, 2 and 3. Gaps have neither a rule name nor a color index.
    """
    start: int
    end: int
    rule_name: Optional[str] = None
    color_index: Optional[int] = None

    @property
    def is_gap(self) -> bool:
        return self.rule_name is None

    def text_slice(self, line: str) -> str:
        """Characters of ``line`` covered by this segment"""
        return line[self.start - 1 : self.end - 1]


@dataclass
class HighlightedLine:
    """
    One input line together with its segment decomposition

    Attributes:
        number: 1-based line number in the input file
        text: Raw line text (without line terminator)
        segments: Ordered segments covering the whole line
    """
    number: int
    text: str
    segments: List[Segment] = field(default_factory=list)
