"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field
from functools import reduce

from .tokens import Token


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the conversion pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the conversion progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, tagTable, outputSubdir, dumpTokens
        - env_check: inputSourceFile, tagTableFile, htmlOutputdir, envOK
        - source_parse: parsedTokens
        - html_render: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the markdown source file
        outputdir: Base output directory for rendered files
        verbosity: Logging verbosity level (1-3)
        inputFile: Input markdown filename (relative to inputdir)
        tagTable: Optional YAML tag table path (relative to inputdir)
        outputSubdir: Subdirectory within outputdir for output
        dumpTokens: Log every token and its markers after parsing
        envOK: Environment validation passed
        inputSourceFile: Resolved path to input markdown file
        tagTableFile: Resolved path to the tag table, if one was given
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        parsedTokens: Token stream produced by the tokenizer
        renderResult: Render results (output_file, line_count, token_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    tagTable: Optional[str] = field(default=None)
    outputSubdir: str = field(default=".")
    dumpTokens: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    tagTableFile: Optional[Path] = field(default=None)
    htmlOutputdir: Path = field(default=Path("/"))
    parsedTokens: Optional[List[Token]] = field(default=None)
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, tagTable, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

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
        final_state = pipeline(
            initial_state,
            env_check,
            source_parse,
            html_render,
            results_report
        )

    This is equivalent to:
        results_report(html_render(source_parse(env_check(initial_state))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
