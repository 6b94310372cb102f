"""
End-to-end CLI tests

Runs the full pipeline: files on disk -> syntax load -> highlight -> HTML on
stdout, and checks the failure paths exit non-zero without output.
"""

import pytest

from fixedfile_highlighter.__main__ import main, lines_split


INPUT = "01ACCOUNT0042\n# comment\n02REFERENCE99\n"
SYNTAX = (
    "start,length,name,condition\n"
    "1,2,Type,^0\n"
    "3,7,Account,^01\n"
    "3,9,Reference,^02\n"
)


@pytest.fixture
def files(tmp_path):
    """Write an input file and a syntax file, return their paths as strings"""
    input_file = tmp_path / "records.txt"
    syntax_file = tmp_path / "records.csv"
    input_file.write_text(INPUT)
    syntax_file.write_text(SYNTAX)
    return str(input_file), str(syntax_file)


class TestSuccessfulRun:
    """Test complete runs"""

    def test_full_document_on_stdout(self, files, capsys):
        assert main(list(files)) == 0
        out = capsys.readouterr().out

        assert out.startswith("<!doctype html>")
        assert "<title>Analysis of records.txt</title>" in out
        assert '<abbr title="Account" style="background: #ccc; color: #020202;">ACCOUNT</abbr>' in out
        assert '<abbr title="Reference" style="background: #fff; color: #020202;">REFERENCE</abbr>' in out
        assert "# comment\n" in out

    def test_snippet_flag(self, files, capsys):
        main([*files, "--snippet"])
        out = capsys.readouterr().out

        assert out.startswith("<pre>")
        assert "<html>" not in out

    def test_rainbow_colors(self, files, capsys):
        main([*files, "-c", "rainbow"])
        out = capsys.readouterr().out

        assert "background: #f88;" in out
        assert "background: #ffc088;" in out

    def test_explicit_colors(self, files, capsys):
        main([*files, "--colors", "111,222,333"])
        out = capsys.readouterr().out

        assert '<abbr title="Type" style="background: #111;' in out
        assert '<abbr title="Account" style="background: #222;' in out

    def test_delimited_input(self, tmp_path, capsys):
        input_file = tmp_path / "people.csv"
        syntax_file = tmp_path / "people-syntax.csv"
        input_file.write_text("Ada,Lovelace,1815\n")
        syntax_file.write_text("field,name\n2,Surname\n")

        main([str(input_file), str(syntax_file), "-d", ",", "-s"])
        out = capsys.readouterr().out

        assert 'Ada,<abbr title="Surname" style="background: #fff; color: #020202;">Lovelace</abbr>,1815' in out

    def test_nothing_on_stderr_by_default(self, files, capsys):
        main(list(files))
        assert capsys.readouterr().err == ""


class TestFailures:
    """Every failure exits 1 with a message and no output"""

    def test_missing_input_file(self, files, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "missing.txt"), files[1]])

        captured = capsys.readouterr()
        assert excinfo.value.code == 1
        assert "Input file not found" in captured.err
        assert captured.out == ""

    def test_missing_file_at_high_verbosity(self, files, tmp_path, capsys):
        """-vvv with no exception in flight prints no empty traceback"""
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "missing.txt"), files[1], "-vvv"])

        err = capsys.readouterr().err
        assert excinfo.value.code == 1
        assert "Input file not found" in err
        assert "NoneType: None" not in err

    def test_load_error_traceback_at_high_verbosity(self, files, tmp_path, capsys):
        """-vvv shows the traceback of the error being reported"""
        bad = tmp_path / "bad.csv"
        bad.write_text("start,name\n1,A\n")

        with pytest.raises(SystemExit):
            main([files[0], str(bad), "-vvv"])

        assert "Traceback" in capsys.readouterr().err

    def test_missing_header(self, files, tmp_path, capsys):
        bad = tmp_path / "bad.csv"
        bad.write_text("start,name\n1,A\n")

        with pytest.raises(SystemExit) as excinfo:
            main([files[0], str(bad)])

        captured = capsys.readouterr()
        assert excinfo.value.code == 1
        assert "missing the required column 'length'" in captured.err
        assert captured.out == ""

    def test_invalid_field(self, files, tmp_path, capsys):
        bad = tmp_path / "bad.csv"
        bad.write_text("start,length,name\nabc,1,A\n")

        with pytest.raises(SystemExit):
            main([files[0], str(bad)])

        assert "Row 2, column 'start'" in capsys.readouterr().err

    def test_invalid_regex(self, files, tmp_path, capsys):
        bad = tmp_path / "bad.csv"
        bad.write_text("start,length,name,condition\n1,1,A,(\n")

        with pytest.raises(SystemExit):
            main([files[0], str(bad)])

        assert "not a valid regular expression" in capsys.readouterr().err

    def test_invalid_color(self, files, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([*files, "-c", "purple"])

        captured = capsys.readouterr()
        assert excinfo.value.code == 1
        assert "'purple' is not a hex color" in captured.err
        assert captured.out == ""

    def test_multi_character_delimiter_rejected(self, files):
        with pytest.raises(SystemExit) as excinfo:
            main([*files, "-d", "::"])

        assert excinfo.value.code == 2


class TestLineSplitting:
    """Test how file text becomes lines"""

    def test_trailing_newline(self):
        assert lines_split("a\nb\n") == ["a", "b"]

    def test_no_trailing_newline(self):
        assert lines_split("a\nb") == ["a", "b"]

    def test_crlf(self):
        assert lines_split("a\r\nb\r\n") == ["a", "b"]

    def test_blank_lines_kept(self):
        assert lines_split("a\n\nb\n") == ["a", "", "b"]

    def test_form_feed_is_a_column(self):
        assert lines_split("a\x0cb\n") == ["a\x0cb"]

    def test_empty_file(self):
        assert lines_split("") == []
