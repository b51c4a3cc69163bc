"""Line parser for sysctl-style `key=value` text.

Responsibilities:
- Turn an iterable of text lines into a `ConfigTable`.
- Report the first malformed line with its 1-based line number.
- Keep read failures distinct from parse failures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, TextIO

from loguru import logger

from ..errors import ParseError, SysctlIOError
from ..table import ConfigTable


_COMMENT_PREFIX = "#"
_ASSIGNMENT = "="
_INVALID_FORMAT_MESSAGE = "invalid format, expected 'key=value'"
_EMPTY_KEY_MESSAGE = "empty key not allowed"
_LINE_FEED = "\n"
_CARRIAGE_RETURN = "\r"


def split_lines(text: str) -> list[str]:
    """Split text on `\\n` and `\\r\\n` line endings only.

    Other Unicode line boundaries (form feed, `\\u2028`, a lone `\\r`) stay
    inside the line they appear in.
    """

    lines = text.split(_LINE_FEED)
    if lines and not lines[-1]:
        lines.pop()
    return [line[:-1] if line.endswith(_CARRIAGE_RETURN) else line for line in lines]


class LineParser:
    """Parse `key=value` lines into a flat table."""

    def parse(self, lines: Iterable[str]) -> ConfigTable:
        """Parse all lines into a fresh table.

        Blank lines and lines starting with `#` are skipped. The first
        malformed line aborts the parse, so callers never see a partial table.

        Raises:
            ParseError: On a line without `=` or with an empty key.
        """

        settings: dict[str, str] = {}
        for line_number, raw_line in enumerate(lines, start=1):
            line = raw_line.strip()
            if self._should_skip_line(line):
                continue
            key, value = self._parse_line(line, line_number)
            if key in settings:
                logger.debug("Line {} overrides earlier value for key `{}`.", line_number, key)
            settings[key] = value
        return ConfigTable(settings)

    def parse_text(self, text: str) -> ConfigTable:
        """Parse a complete text payload."""

        return self.parse(split_lines(text))

    def parse_stream(self, stream: TextIO, source: str = "<stream>") -> ConfigTable:
        """Parse lines read from an open text stream.

        Raises:
            SysctlIOError: If reading or decoding the stream fails.
            ParseError: On the first malformed line.
        """

        try:
            text = stream.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise SysctlIOError(source, exc) from exc
        return self.parse_text(text)

    def parse_file(self, path: Path) -> ConfigTable:
        """Parse a UTF-8 file from disk.

        Raises:
            SysctlIOError: If the file cannot be opened or decoded.
            ParseError: On the first malformed line.
        """

        try:
            with path.open("r", encoding="utf-8", newline="") as stream:
                text = stream.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise SysctlIOError(str(path), exc) from exc
        return self.parse_text(text)

    @staticmethod
    def _should_skip_line(line: str) -> bool:
        """Return whether a trimmed line is blank or a full-line comment."""

        return not line or line.startswith(_COMMENT_PREFIX)

    @staticmethod
    def _parse_line(line: str, line_number: int) -> tuple[str, str]:
        """Split one trimmed line on its first `=` and validate the key."""

        if _ASSIGNMENT not in line:
            raise ParseError(line_number, _INVALID_FORMAT_MESSAGE)
        key_part, value_part = line.split(_ASSIGNMENT, 1)
        key = key_part.strip()
        if not key:
            raise ParseError(line_number, _EMPTY_KEY_MESSAGE)
        return key, value_part.strip()
