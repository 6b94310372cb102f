"""
Rule set loader error tests

Every malformed syntax file aborts the whole load with the first error,
carrying the row, column and value needed to fix it.
"""

import csv

import pytest

from fixedfile_highlighter.lib.loader import (
    RuleSetLoader,
    LoadError,
    MissingHeader,
    InvalidField,
    InvalidRegex,
)


class TestMissingHeader:
    """Test required header columns"""

    def test_missing_length(self):
        """Header without 'length' is rejected"""
        with pytest.raises(MissingHeader) as excinfo:
            RuleSetLoader("start,name\n1,A\n").load()

        assert excinfo.value.column == "length"

    def test_header_names_are_case_sensitive(self):
        """'Start' does not satisfy 'start'"""
        with pytest.raises(MissingHeader) as excinfo:
            RuleSetLoader("Start,length,name\n1,1,A\n").load()

        assert excinfo.value.column == "start"

    def test_empty_source(self):
        """No header at all reports the first required column"""
        with pytest.raises(MissingHeader) as excinfo:
            RuleSetLoader("").load()

        assert excinfo.value.column == "start"

    def test_delimited_requires_field(self):
        """Delimited mode needs a 'field' column"""
        with pytest.raises(MissingHeader) as excinfo:
            RuleSetLoader("start,length,name\n1,1,A\n", delimiter=",").load()

        assert excinfo.value.column == "field"

    def test_is_a_load_error(self):
        with pytest.raises(LoadError, match="missing the required column 'name'"):
            RuleSetLoader("start,length\n1,1\n").load()


class TestInvalidField:
    """Test numeric cell validation"""

    def test_non_numeric_start(self):
        """start = 'abc' on the first data row"""
        with pytest.raises(InvalidField) as excinfo:
            RuleSetLoader("start,length,name\nabc,3,A\n").load()

        error = excinfo.value
        assert error.row == 2
        assert error.column == "start"
        assert error.value == "abc"
        assert "Row 2" in str(error)

    @pytest.mark.parametrize("value", ["0", "-1"])
    def test_non_positive_length(self, value):
        """length must be at least 1"""
        with pytest.raises(InvalidField) as excinfo:
            RuleSetLoader(f"start,length,name\n1,{value},A\n").load()

        assert excinfo.value.column == "length"
        assert "positive" in excinfo.value.reason

    def test_empty_start(self):
        """An empty numeric cell is invalid"""
        with pytest.raises(InvalidField) as excinfo:
            RuleSetLoader("start,length,name\n,3,A\n").load()

        assert excinfo.value.column == "start"
        assert excinfo.value.reason == "value is empty"

    def test_decimal_rejected(self):
        with pytest.raises(InvalidField):
            RuleSetLoader("start,length,name\n1.5,3,A\n").load()

    def test_first_error_reported(self):
        """Later bad rows are never reached; row number of the first one wins"""
        source = "start,length,name\n1,1,A\n2,x,B\ny,1,C\n"
        with pytest.raises(InvalidField) as excinfo:
            RuleSetLoader(source).load()

        assert excinfo.value.row == 3
        assert excinfo.value.column == "length"

    def test_wrong_cell_count(self):
        """A row with too few cells is a shape error"""
        with pytest.raises(InvalidField) as excinfo:
            RuleSetLoader("start,length,name\n1,2\n").load()

        assert excinfo.value.row == 2
        assert excinfo.value.column == "*"

    def test_invalid_field_number(self):
        """Delimited 'field' must be a positive integer"""
        with pytest.raises(InvalidField) as excinfo:
            RuleSetLoader("field,name\nsecond,B\n", delimiter=";").load()

        assert excinfo.value.column == "field"

    def test_oversized_cell(self):
        """A cell the CSV reader refuses is reported as a shape error on its row"""
        limit = csv.field_size_limit(10)
        try:
            with pytest.raises(InvalidField) as excinfo:
                RuleSetLoader("start,length,name\n1,2," + "x" * 50 + "\n").load()
        finally:
            csv.field_size_limit(limit)

        assert excinfo.value.row == 2
        assert excinfo.value.column == "*"
        assert "malformed CSV" in str(excinfo.value)


class TestInvalidRegex:
    """Test condition compilation"""

    def test_unbalanced_bracket(self):
        """Malformed condition aborts the load"""
        with pytest.raises(InvalidRegex) as excinfo:
            RuleSetLoader("start,length,name,condition\n1,1,A,\n1,1,B,[abc\n").load()

        error = excinfo.value
        assert error.row == 3
        assert error.pattern == "[abc"
        assert error.reason

    def test_regex_checked_after_empty_conditions(self):
        """Empty conditions never fail"""
        rule_set = RuleSetLoader("start,length,name,condition\n1,1,A,\n").load()
        assert rule_set.rules[0].condition is None
