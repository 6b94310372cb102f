"""
Highlighting engine

Splits every input line into an ordered list of Segments according to a
RuleSet.

For each line:
1. Every column starts unclaimed
2. Rules run in rule set order; a rule whose condition fails is skipped
3. A matching rule claims the columns of its span that are still free
   (first claim wins, so later rules may end up with several pieces or none)
4. Columns nobody claimed become gap segments

Columns a rule asks for past the end of the line are ignored.

Example:
    >>> rules = RuleSetLoader("start,length,name\\n1,5,A\\n3,4,B\\n").load()
    >>> colors = ColorAssignment(["fff", "ccc"], rules)
    >>> [(s.start, s.end, s.rule_name) for s in Highlighter(rules, colors).line_highlight("ABCDEFG")]
    [(1, 6, 'A'), (6, 7, 'B'), (7, 8, None)]
"""

from typing import Iterable, List, Optional

from ..models.rules import HighlightedLine, RuleSet, Segment
from .palette import ColorAssignment
from .log import LOG


class HighlightError(RuntimeError):
    """Segments produced for a line do not cover it exactly once"""
    pass


class Highlighter:
    """
    Applies a RuleSet to lines of text

    The rule set and color assignment are only read, never modified, so one
    Highlighter can be reused for any number of lines.
    """

    def __init__(self, rule_set: RuleSet, colors: ColorAssignment):
        self.rule_set = rule_set
        self.colors = colors

    def highlight(self, lines: Iterable[str]) -> List[HighlightedLine]:
        """
        Highlight every line

        Args:
            lines: Line texts without terminators, in file order

        Returns:
            One HighlightedLine per input line, numbered from 1
        """
        return [
            HighlightedLine(number=number, text=line, segments=self.line_highlight(line, number))
            for number, line in enumerate(lines, start=1)
        ]

    def line_highlight(self, line: str, number: int = 0) -> List[Segment]:
        """
        Decompose one line into segments

        Args:
            line: Line text
            number: Line number, only used for log messages

        Returns:
            Segments ordered left to right, covering columns 1..len(line)
        """
        owners = self.columns_claim(line, number)
        segments = self.segments_build(owners)
        self.segments_verify(segments, len(line), number)
        return segments

    def columns_claim(self, line: str, number: int = 0) -> List[Optional[int]]:
        """
        Work out which rule owns each column

        Returns:
            List with one entry per column: the position of the owning rule
            in the rule set, or None for an unclaimed column
        """
        owners: List[Optional[int]] = [None] * len(line)

        for position, rule in enumerate(self.rule_set):
            if not rule.applies_to(line):
                continue

            span = rule.span_resolve(line, self.rule_set.delimiter)
            if span is None:
                LOG(f"Line {number}: no field {rule.field} for rule '{rule.name}'", level=2)
                continue

            begin, end = span
            if end > len(line):
                LOG(
                    f"Line {number} was not long enough to fit rule '{rule.name}' "
                    f"(needs {end} columns, has {len(line)})",
                    level=2,
                )
                end = len(line)

            for column in range(begin, end):
                if owners[column] is None:
                    owners[column] = position

        return owners

    def segments_build(self, owners: List[Optional[int]]) -> List[Segment]:
        """Group runs of columns with the same owner into segments"""
        segments: List[Segment] = []
        run_start = 0

        for column in range(1, len(owners) + 1):
            if column < len(owners) and owners[column] == owners[run_start]:
                continue
            segments.append(self.segment_make(run_start, column, owners[run_start]))
            run_start = column

        return segments

    def segment_make(self, begin: int, end: int, owner: Optional[int]) -> Segment:
        """Build a Segment from a 0-based run and its owning rule position"""
        if owner is None:
            return Segment(start=begin + 1, end=end + 1)
        return Segment(
            start=begin + 1,
            end=end + 1,
            rule_name=self.rule_set.rules[owner].name,
            color_index=self.colors.index_for(owner),
        )

    def segments_verify(self, segments: List[Segment], length: int, number: int = 0) -> None:
        """
        Check that segments tile columns 1..length with no gap or overlap

        Raises:
            HighlightError: if they do not; this points at an engine bug,
                            never at bad input
        """
        expected = 1
        for segment in segments:
            if segment.start != expected or segment.end <= segment.start:
                raise HighlightError(
                    f"Line {number}: segment [{segment.start}, {segment.end}) "
                    f"does not continue from column {expected}"
                )
            expected = segment.end

        if expected != length + 1:
            raise HighlightError(
                f"Line {number}: segments end at column {expected}, line ends at {length + 1}"
            )


def lines_highlight(
    rule_set: RuleSet, lines: Iterable[str], colors: ColorAssignment
) -> List[HighlightedLine]:
    """Convenience wrapper: ``Highlighter(rule_set, colors).highlight(lines)``"""
    return Highlighter(rule_set, colors).highlight(lines)
