"""Schema datatypes and validation records.

Responsibilities:
- Represent the closed, recursive set of schema value types.
- Represent declared fields and the immutable schema mapping.
- Represent validation violations and the aggregated report.

Key types:
- `ScalarKind`, `OptionalType`, `SchemaType`: schema value types.
- `SchemaField`, `Schema`: declared expectations.
- `MissingRequiredKey`, `TypeMismatch`, `ValidationReport`: validation results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Union

from ..errors import SchemaValidationError


class ScalarKind(Enum):
    """Scalar value types supported by schema fields."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"


@dataclass(frozen=True, slots=True)
class OptionalType:
    """Documentation-only wrapper that validates exactly like its inner type.

    Attributes:
        inner: Wrapped schema type.
    """

    inner: SchemaType


SchemaType = Union[ScalarKind, OptionalType]

OPTIONAL_TAG = "optional"


def describe_type(schema_type: SchemaType) -> str:
    """Return the schema document tag for a type, e.g. `optional<int>`."""

    if isinstance(schema_type, OptionalType):
        return f"{OPTIONAL_TAG}<{describe_type(schema_type.inner)}>"
    return schema_type.value


@dataclass(frozen=True, slots=True)
class SchemaField:
    """Expectations declared for one setting key.

    Attributes:
        field_type: Expected value type.
        required: Whether the key must be present in the table.
        description: Optional human-readable description.
    """

    field_type: SchemaType
    required: bool = False
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Schema:
    """Immutable mapping of setting keys to their declared fields."""

    fields: Mapping[str, SchemaField] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def items(self) -> list[tuple[str, SchemaField]]:
        """Return `(key, field)` pairs in declaration order."""

        return list(self.fields.items())


@dataclass(frozen=True, slots=True)
class MissingRequiredKey:
    """A required key was absent from the table."""

    key: str

    def render(self) -> str:
        """Return the user-facing message for this violation."""

        return f"Required key '{self.key}' is missing"


@dataclass(frozen=True, slots=True)
class TypeMismatch:
    """A present value did not satisfy the declared type.

    Attributes:
        key: Setting key.
        expected_type: Declared schema type.
        actual_value: Raw string value from the table.
    """

    key: str
    expected_type: SchemaType
    actual_value: str

    def render(self) -> str:
        """Return the user-facing message for this violation."""

        return (
            f"Validation error for key '{self.key}': "
            f"expected {_expected_label(self.expected_type)} value, got '{self.actual_value}'"
        )


Violation = Union[MissingRequiredKey, TypeMismatch]


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Outcome of validating one table against one schema.

    Attributes:
        violations: Every violation found, in schema declaration order.
    """

    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        """Return whether validation found no violations."""

        return not self.violations

    def messages(self) -> list[str]:
        """Return rendered messages for all violations."""

        return [violation.render() for violation in self.violations]

    def raise_for_violations(self) -> None:
        """Raise one aggregate error when the report holds any violation."""

        if self.violations:
            raise SchemaValidationError(self.violations)


_EXPECTED_LABELS = {
    ScalarKind.STRING: "string",
    ScalarKind.BOOL: "boolean",
    ScalarKind.INT: "integer",
    ScalarKind.FLOAT: "float",
}


def _expected_label(schema_type: SchemaType) -> str:
    """Return a readable expected-type label, unwrapping optional wrappers."""

    while isinstance(schema_type, OptionalType):
        schema_type = schema_type.inner
    return _EXPECTED_LABELS[schema_type]
