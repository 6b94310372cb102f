"""
Rule set loader for CSV syntax files

Turns the text of a syntax file into an ordered, immutable RuleSet.

Fixed-width syntax files carry the header ``start,length,name[,condition]``;
delimited syntax files carry ``field,name[,condition]``. Columns are found by
header name, so their order in the file does not matter.

Loading is all-or-nothing: the first bad row aborts the load with a LoadError
naming the row (the header is row 1), the column and the offending value.

Example:
    >>> rules = RuleSetLoader("start,length,name\\n1,3,Code\\n").load()
    >>> rules.rules[0].name
    'Code'
"""

import csv
import io
import re
from typing import Dict, List, Optional, Tuple

from ..models.rules import Rule, RuleSet
from .log import LOG


FIXED_WIDTH_COLUMNS: Tuple[str, ...] = ("start", "length", "name")
DELIMITED_COLUMNS: Tuple[str, ...] = ("field", "name")
CONDITION_COLUMN = "condition"


class LoadError(Exception):
    """Raised when a syntax file cannot be turned into a rule set"""
    pass


class MissingHeader(LoadError):
    """A required column is absent from the header row"""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Syntax file header is missing the required column '{column}'")


class InvalidField(LoadError):
    """A cell that must hold a positive integer does not"""

    def __init__(self, row: int, column: str, reason: str, value: Optional[str] = None):
        self.row = row
        self.column = column
        self.reason = reason
        self.value = value
        message = f"Row {row}, column '{column}': {reason}"
        if value is not None:
            message += f" (got {value!r})"
        super().__init__(message)


class InvalidRegex(LoadError):
    """A condition cell does not compile as a regular expression"""

    def __init__(self, row: int, pattern: str, reason: str):
        self.row = row
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Row {row}: condition {pattern!r} is not a valid regular expression: {reason}")


class RuleSetLoader:
    """
    Loader for syntax file text

    Attributes:
        source: Raw syntax file text
        delimiter: Field delimiter of the *input* file. When set, rules are
                   read in delimited mode (``field`` instead of ``start`` and
                   ``length``).
    """

    def __init__(self, source: str, delimiter: Optional[str] = None):
        self.source = source
        self.delimiter = delimiter

    @property
    def columns_required(self) -> Tuple[str, ...]:
        return DELIMITED_COLUMNS if self.delimiter is not None else FIXED_WIDTH_COLUMNS

    def load(self) -> RuleSet:
        """
        Parse the syntax text into a RuleSet

        Returns:
            RuleSet whose rule order equals row order. A header with no rows
            gives an empty RuleSet.

        Raises:
            MissingHeader: required column absent (or no header at all)
            InvalidField: non-integer or non-positive number, or a row whose
                          cell count differs from the header
            InvalidRegex: condition that does not compile
        """
        # spreadsheet exports often start with a BOM
        reader = csv.reader(io.StringIO(self.source.removeprefix("\ufeff")))

        try:
            header = next(reader, None)
        except csv.Error as e:
            raise InvalidField(reader.line_num, "*", f"malformed CSV: {e}")
        if header is None:
            raise MissingHeader(self.columns_required[0])
        positions = self.header_resolve(header)
        LOG(f"Syntax header: {', '.join(header)}", level=3)

        rules: List[Rule] = []
        try:
            for cells in reader:
                if not cells:
                    continue
                # row numbers are file line numbers (header = 1)
                row = reader.line_num
                if len(cells) != len(header):
                    raise InvalidField(
                        row, "*", f"expected {len(header)} cells, found {len(cells)}"
                    )
                rules.append(self.row_parse(row, cells, positions))
        except csv.Error as e:
            raise InvalidField(reader.line_num, "*", f"malformed CSV: {e}")

        LOG(f"Loaded {len(rules)} rule(s)", level=2)
        return RuleSet(rules=tuple(rules), delimiter=self.delimiter)

    def header_resolve(self, header: List[str]) -> Dict[str, int]:
        """
        Map column names to their cell position

        Header names are matched exactly (case-sensitive). The optional
        ``condition`` column is included when present.
        """
        positions = {name: index for index, name in enumerate(header)}
        for column in self.columns_required:
            if column not in positions:
                raise MissingHeader(column)

        wanted = self.columns_required + (CONDITION_COLUMN,)
        return {name: positions[name] for name in wanted if name in positions}

    def row_parse(self, row: int, cells: List[str], positions: Dict[str, int]) -> Rule:
        """Build one Rule from a data row"""
        name = cells[positions["name"]]

        if self.delimiter is not None:
            field = self.positiveInt_parse(row, "field", cells[positions["field"]])
            return Rule(name=name, field=field, condition=self.condition_compile(row, cells, positions))

        start = self.positiveInt_parse(row, "start", cells[positions["start"]])
        length = self.positiveInt_parse(row, "length", cells[positions["length"]])
        return Rule(
            name=name,
            start=start,
            length=length,
            condition=self.condition_compile(row, cells, positions),
        )

    def positiveInt_parse(self, row: int, column: str, value: str) -> int:
        """Parse a cell that must hold an integer >= 1"""
        text = value.strip()
        if not text:
            raise InvalidField(row, column, "value is empty", value)
        try:
            number = int(text)
        except ValueError:
            raise InvalidField(row, column, "not an integer", value)
        if number < 1:
            raise InvalidField(row, column, "must be a positive integer", value)
        return number

    def condition_compile(
        self, row: int, cells: List[str], positions: Dict[str, int]
    ) -> Optional[re.Pattern]:
        """
        Compile the condition cell, if the column exists and is non-empty

        An empty cell means the rule is unconditional, which is different
        from a pattern that happens to match everything.
        """
        if CONDITION_COLUMN not in positions:
            return None
        pattern = cells[positions[CONDITION_COLUMN]]
        if not pattern:
            return None
        try:
            return re.compile(pattern)
        except re.error as e:
            raise InvalidRegex(row, pattern, str(e))


def rules_load(source: str, delimiter: Optional[str] = None) -> RuleSet:
    """Convenience wrapper: ``RuleSetLoader(source, delimiter).load()``"""
    return RuleSetLoader(source, delimiter=delimiter).load()
