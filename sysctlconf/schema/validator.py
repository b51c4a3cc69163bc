"""Schema validation for parsed setting tables.

Responsibilities:
- Check every declared schema field against a table in one pass.
- Accumulate all violations instead of stopping at the first one.

Keys present in the table but absent from the schema are never reported.
"""

from __future__ import annotations

from ..parsing import is_boolean_literal, is_float_literal, is_int64_literal
from ..table import ConfigTable
from .model import (
    MissingRequiredKey,
    OptionalType,
    ScalarKind,
    Schema,
    SchemaType,
    TypeMismatch,
    ValidationReport,
    Violation,
)


_SCALAR_CHECKS = {
    ScalarKind.STRING: lambda value: True,
    ScalarKind.BOOL: is_boolean_literal,
    ScalarKind.INT: is_int64_literal,
    ScalarKind.FLOAT: is_float_literal,
}


class Validator:
    """Validate tables against schemas without side effects."""

    def validate(self, table: ConfigTable, schema: Schema) -> ValidationReport:
        """Return a report holding every violation found.

        Violations follow the schema's declaration order.
        """

        violations: list[Violation] = []
        for key, field in schema.items():
            value = table.get(key)
            if value is None:
                if field.required:
                    violations.append(MissingRequiredKey(key=key))
                continue
            if not self.matches_type(value, field.field_type):
                violations.append(
                    TypeMismatch(key=key, expected_type=field.field_type, actual_value=value)
                )
        return ValidationReport(violations=tuple(violations))

    def matches_type(self, value: str, schema_type: SchemaType) -> bool:
        """Return whether a raw string value satisfies a schema type."""

        if isinstance(schema_type, OptionalType):
            return self.matches_type(value, schema_type.inner)
        return _SCALAR_CHECKS[schema_type](value)
