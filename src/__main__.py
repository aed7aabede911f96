#!/usr/bin/env python3
"""
emphdown - restricted markdown to HTML converter

Renders a markdown file that uses a small emphasis dialect into an HTML
fragment:

    # Title          -> <h1> Title
    __bold__         -> <b>bold</b>
    _italic_         -> <i>italic</i>
    every line       -> wrapped in <span> ... </span>

Unmatched or crossing delimiters are left as literal text.

As with other ChRIS plugins, the program reads from an input directory
and writes to an output directory.

Usage:
    emphdown inputdir/ outputdir/ --inputFile notes.md

    The rendered fragment is written to outputdir/ as notes.html.

Examples:
    # Basic conversion
    emphdown . output/ --inputFile notes.md

    # Alternate element names and a token dump
    emphdown . output/ --inputFile notes.md --tagTable tags.yaml --dumpTokens -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    TokensParser,
    HtmlRenderer,
    TagTableError,
    tagTable_default,
    tagTable_load,
    __version__,
    LOG,
    state_connectToLogger,
)
from .models import ProgramState, Token, pipeline


DISPLAY_TITLE = r"""
                      _         _
   ___ _ __ ___  _ __ | |__   __| | _____      ___ __
  / _ \ '_ ` _ \| '_ \| '_ \ / _` |/ _ \ \ /\ / / '_ \
 |  __/ | | | | | |_) | | | | (_| | (_) \ V  V /| | | |
  \___|_| |_| |_| .__/|_| |_|\__,_|\___/ \_/\_/ |_| |_|
                |_|
  Restricted markdown to HTML converter
"""

# Define CLI arguments
parser = ArgumentParser(
    description="emphdown - restricted markdown (headers, bold, italic) to HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input markdown file (relative to inputdir)"
)

parser.add_argument(
    "--tagTable",
    default=None,
    type=str,
    help="YAML file mapping tag kinds to HTML elements (relative to inputdir)",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the rendered file",
)

parser.add_argument(
    "--dumpTokens",
    default=False,
    action="store_true",
    help="Log every token and its tag markers after parsing",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the markdown file
            - tagTableFile: Resolved path to the tag table (or None)
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if input file or tag table file not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if state.tagTable:
        state.tagTableFile = state.inputdir / state.tagTable
        if not state.tagTableFile.exists():
            print(f"Error: Tag table not found: {state.tagTableFile}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"Tag table: {state.tagTableFile}", level=2)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def token_describe(token: Token) -> str:
    """One-line description of a token and its markers for --dumpTokens"""
    markers = ", ".join(
        f"{marker.kind.name} {marker.state.name} @{marker.offset}" for marker in token.markers
    )
    return f"{token.content!r}" + (f" [{markers}]" if markers else "")


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read the markdown file and tokenize it.

    Returns:
        ProgramState with added field:
            - parsedTokens: List[Token] for the whole document

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        source = state.inputSourceFile.read_text(encoding=appsettings.input_encoding)
        LOG(f"Read {len(source)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG("Tokenizing source...", level=1)
    state.parsedTokens = TokensParser().parse(source)
    LOG(f"Produced {len(state.parsedTokens)} tokens", level=2)

    if state.dumpTokens:
        for token in state.parsedTokens:
            LOG(token_describe(token), level=1)

    return state


def html_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the token stream and write the HTML fragment.

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing:
                - status: bool (render success)
                - output_file: str (path to the written file)
                - line_count: int (number of source lines)
                - token_count: int (number of tokens rendered)

    Exits:
        1 if parsedTokens is None, the tag table is invalid, or writing fails
    """

    state = inputstate.copy()

    LOG("Rendering tokens to HTML...", level=1)

    if state.parsedTokens is None:
        print("Error: No parsed tokens available", file=sys.stderr)
        sys.exit(1)

    try:
        if state.tagTableFile:
            tags = tagTable_load(state.tagTableFile)
        else:
            tags = tagTable_default()
    except TagTableError as e:
        print(f"Tag table error: {e}", file=sys.stderr)
        sys.exit(1)

    html = HtmlRenderer(tags).render(state.parsedTokens)

    output_file = state.htmlOutputdir / appsettings.outputName_make(state.inputSourceFile.name)
    try:
        output_file.write_text(html + "\n", encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Wrote {output_file}", level=2)

    state.renderResult = {
        "status": True,
        "output_file": str(output_file),
        "line_count": sum(1 for token in state.parsedTokens if token.is_lineBreak),
        "token_count": len(state.parsedTokens),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display conversion results to the user.

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("\n✓ Conversion successful!", level=1)
        LOG(f"  Output: {state.renderResult['output_file']}", level=1)
        LOG(f"  Lines:  {state.renderResult['line_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="emphdown - restricted markdown to HTML converter",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - convert one markdown file to an HTML fragment.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. source_parse: Read and tokenize the markdown file
        3. html_render: Render tokens and write the HTML file
        4. results_report: Display results to user
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_parse, html_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
