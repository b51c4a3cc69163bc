"""Domain exceptions for parsing, schema loading, validation, and CLI diagnostics.

Responsibilities:
- Keep every failure kind distinct so callers can tell I/O, parse, schema,
  and validation problems apart.
- Render messages in one stable format for CLI output and tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .schema.model import Violation


VALIDATION_JOIN_DELIMITER = "; "


class SysctlError(Exception):
    """Base class for all sysctlconf errors."""


class SysctlIOError(SysctlError):
    """Raised when reading an input stream or schema document fails."""

    def __init__(self, source: str, cause: BaseException) -> None:
        """Initialize an I/O error wrapping the underlying platform error."""

        super().__init__(f"IO error: {cause}")
        self.source = source
        self.cause = cause


class ParseError(SysctlError):
    """Raised for the first malformed line of a `key=value` input."""

    def __init__(self, line: int, message: str) -> None:
        """Initialize a parse error tagged with its 1-based line number."""

        super().__init__(f"Parse error at line {line}: {message}")
        self.line = line
        self.message = message


class SchemaError(SysctlError):
    """Base class for schema document failures."""


class SchemaLoadError(SchemaError):
    """Raised when a schema document cannot be deserialized."""

    def __init__(self, detail: str) -> None:
        """Initialize a load error with a short diagnostic."""

        super().__init__(detail)
        self.detail = detail


class UnknownSchemaTypeError(SchemaError):
    """Raised when a schema field names an unsupported type tag."""

    def __init__(self, type_name: str) -> None:
        """Initialize an unknown-type error naming the offending tag."""

        super().__init__(f"Unknown type '{type_name}' in schema")
        self.type_name = type_name


class SchemaValidationError(SysctlError):
    """Raised when a table fails schema validation.

    Carries every violation found in one pass, not only the first one.
    """

    def __init__(self, violations: Sequence[Violation]) -> None:
        """Initialize an aggregate error from a non-empty violation sequence."""

        self.violations = tuple(violations)
        joined = VALIDATION_JOIN_DELIMITER.join(
            violation.render() for violation in self.violations
        )
        super().__init__(f"Multiple schema validation errors: {joined}")


class CommandStageError(RuntimeError):
    """Raised when a specific CLI command stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
