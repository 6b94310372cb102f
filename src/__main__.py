#!/usr/bin/env python3
"""
fixedfile-highlighter - Highlight the fields of a flat file

Reads a CSV syntax file describing where each field of a fixed-width (or
delimited) record sits, and writes color-coded HTML of the input file to
standard output. Hovering a highlighted field shows its name.

Syntax file (fixed-width):
    start,length,name,condition
    1,2,Record type,
    3,8,Account,^01
    3,10,Reference,^02

    start     1-based first column of the field
    length    number of columns of the field
    name      human readable field name
    condition optional regex; the rule only applies to matching lines

With --delimiter the header is ``field,name,condition`` instead, where
``field`` is the 1-based field number. Rules are applied top-to-bottom and
earlier rules win overlapping columns.

Examples:
    # Full HTML document with the default greyscale palette
    fixedfile-highlighter payments.txt payments.csv > payments.html

    # Rainbow palette, fragment for embedding
    fixedfile-highlighter payments.txt payments.csv -c rainbow -s

    # Explicit colors, comma-delimited input
    fixedfile-highlighter data.csv fields.csv -d , -c "fff,f88,88f9ff"
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, ArgumentTypeError, Namespace, RawDescriptionHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import (
    RuleSetLoader,
    Highlighter,
    HighlightError,
    ColorAssignment,
    Renderer,
    LoadError,
    PaletteError,
    palette_resolve,
    __version__,
    LOG,
    state_connectToLogger,
)
from .models import ProgramState, pipeline


def delimiter_type(value: str) -> str:
    """argparse type for --delimiter: exactly one character"""
    if len(value) != 1:
        raise ArgumentTypeError(f"delimiter must be a single character, got {value!r}")
    return value


# Define CLI arguments
parser = ArgumentParser(
    prog="fixedfile-highlighter",
    description="Highlight parts of a file given a syntax.",
    formatter_class=RawDescriptionHelpFormatter,
)

parser.add_argument("inputFile", type=str, help="The input file to process")

parser.add_argument("syntaxFile", type=str, help="The syntax file to use")

parser.add_argument(
    "-c",
    "--colors",
    default=None,
    type=str,
    help="A palette preset (greyscale [default], rainbow) or a comma separated list of hex colors",
)

parser.add_argument(
    "-d",
    "--delimiter",
    default=None,
    type=delimiter_type,
    help="Treat the input file as delimited by this character; the syntax file then uses 'field,name,condition'",
)

parser.add_argument(
    "-s",
    "--snippet",
    action="store_true",
    help="Output an HTML snippet, rather than a full document",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=0,
    help="Increase logging on stderr (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def fail(state: ProgramState, message: str) -> None:
    """Report a fatal error on stderr and exit non-zero"""
    print(f"Error: {message}", file=sys.stderr)
    if state.verbosity >= 3 and sys.exc_info()[0] is not None:
        import traceback

        traceback.print_exc()
    sys.exit(1)


def text_read(path: Path) -> str:
    """Read a whole file using the configured encoding"""
    return path.read_text(encoding=appsettings.input_encoding)


def lines_split(text: str) -> List[str]:
    """
    Split file text into lines without terminators

    Only '\\n' (optionally preceded by '\\r') ends a line; other characters
    that str.splitlines() would split on are ordinary columns here.
    """
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate that the input and syntax files exist.

    Returns:
        ProgramState with inputPath, syntaxPath and envOK set

    Exits:
        1 if either file is missing or not a regular file
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    for label, name in (("Input", state.inputFile), ("Syntax", state.syntaxFile)):
        path = Path(name)
        if not path.is_file():
            state.envOK = False
            fail(state, f"{label} file not found: {path}")
        LOG(f"{label} file: {path}", level=2)

    state.inputPath = Path(state.inputFile)
    state.syntaxPath = Path(state.syntaxFile)
    state.envOK = True
    return state


def syntax_load(inputstate: ProgramState) -> ProgramState:
    """
    Read the syntax file and load it into a RuleSet.

    Returns:
        ProgramState with syntaxSource and ruleSet set

    Exits:
        1 if the file cannot be read or any row is invalid
    """
    state = inputstate.copy()

    LOG("Parsing syntax file", level=1)
    try:
        state.syntaxSource = text_read(state.syntaxPath)
    except (OSError, UnicodeDecodeError) as e:
        fail(state, f"Failed to open syntax file: {e}")

    try:
        state.ruleSet = RuleSetLoader(state.syntaxSource, delimiter=state.delimiter).load()
    except LoadError as e:
        fail(state, f"{state.syntaxPath.name}: {e}")

    LOG(f"Loaded {len(state.ruleSet)} rules from {state.syntaxPath.name}", level=2)
    return state


def palette_resolve_stage(inputstate: ProgramState) -> ProgramState:
    """
    Resolve the --colors option into a ColorAssignment for the rule set.

    Exits:
        1 if the preset is unknown or a color is malformed
    """
    state = inputstate.copy()

    spec = state.colors if state.colors is not None else appsettings.default_palette
    try:
        palette = palette_resolve(spec, appsettings.palettes_file)
        state.colorAssignment = ColorAssignment(palette, state.ruleSet)
    except PaletteError as e:
        fail(state, str(e))

    LOG(f"Colors: {', '.join(state.colorAssignment.palette)}", level=2)
    return state


def input_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the input file into lines.

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Parsing input file", level=1)
    try:
        state.lines = lines_split(text_read(state.inputPath))
    except (OSError, UnicodeDecodeError) as e:
        fail(state, f"Failed to open input file: {e}")

    LOG(f"Read {len(state.lines)} lines from {state.inputPath.name}", level=2)
    return state


def lines_highlight(inputstate: ProgramState) -> ProgramState:
    """
    Run the highlighting engine over every input line.

    Exits:
        1 on an internal coverage violation (an engine bug, not bad input)
    """
    state = inputstate.copy()

    LOG("Creating regions", level=1)
    try:
        state.highlighted = Highlighter(state.ruleSet, state.colorAssignment).highlight(state.lines)
    except HighlightError as e:
        fail(state, f"Internal highlighting error: {e}")
    return state


def html_render(inputstate: ProgramState) -> ProgramState:
    """Render the highlighted lines to HTML."""
    state = inputstate.copy()

    renderer = Renderer(
        colors=state.colorAssignment,
        input_name=state.inputPath.name,
        syntax_source=state.syntaxSource,
        text_color=appsettings.text_color,
        snippet=state.snippet,
        footer=appsettings.footer_enabled,
        project_url=appsettings.project_url,
    )
    state.html = renderer.render(state.highlighted)
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """Write the rendered HTML to standard output (terminal stage)."""
    state = inputstate.copy()
    sys.stdout.write(state.html)
    LOG("Done!", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - highlight INPUT_FILE according to SYNTAX_FILE.

    Orchestrates the pipeline:
        1. env_check: Validate paths
        2. syntax_load: Read and load the syntax file
        3. palette_resolve_stage: Build the color assignment
        4. input_read: Read the input lines
        5. lines_highlight: Segment every line
        6. html_render: Render HTML
        7. output_write: Write to stdout

    Nothing is written to stdout unless every earlier stage succeeded.
    """
    options: Namespace = parser.parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(
        state,
        env_check,
        syntax_load,
        palette_resolve_stage,
        input_read,
        lines_highlight,
        html_render,
        output_write,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
