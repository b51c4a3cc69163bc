"""Input source selection for CLI commands.

Responsibilities:
- Map a user-provided input argument to a file path or standard input.
- Delegate line parsing to `LineParser`.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from ..table import ConfigTable
from .line_parser import LineParser


STDIN_MARKER = "-"


def is_stdin_source(source: str) -> bool:
    """Return whether the input argument selects standard input."""

    return source == STDIN_MARKER


def _raw_newline_stdin() -> TextIO:
    """Return standard input with newline translation turned off."""

    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(newline="")
    return sys.stdin


def load_table(source: str, stdin: TextIO | None = None) -> ConfigTable:
    """Parse the table from a file path, or from stdin when `source` is `-`."""

    parser = LineParser()
    if is_stdin_source(source):
        return parser.parse_stream(stdin or _raw_newline_stdin(), source="<stdin>")
    return parser.parse_file(Path(source))
