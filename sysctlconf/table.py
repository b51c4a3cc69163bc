"""Flat key/value table produced by parsing sysctl-style input.

Responsibilities:
- Store trimmed string keys and values with last-write-wins semantics.
- Expose read helpers used by rendering, tree building, and validation.

Key types:
- `ConfigTable`: mutable mapping of setting key to setting value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from .schema.model import Schema


class ConfigTable:
    """Flat mapping of sysctl keys to their string values."""

    def __init__(self, settings: dict[str, str] | None = None) -> None:
        """Initialize the table, optionally seeded with existing settings."""

        self._settings: dict[str, str] = {}
        for key, value in (settings or {}).items():
            self.set(key, value)

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite one setting after trimming key and value.

        Raises:
            ValueError: If the key is empty after trimming.
        """

        normalized_key = key.strip()
        if not normalized_key:
            raise ValueError("Setting key must be a non-empty string.")
        self._settings[normalized_key] = value.strip()

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value stored for `key`, or `default` when absent."""

        return self._settings.get(key, default)

    def keys(self) -> list[str]:
        """Return all setting keys in insertion order."""

        return list(self._settings.keys())

    def values(self) -> list[str]:
        """Return all setting values in insertion order."""

        return list(self._settings.values())

    def items(self) -> list[tuple[str, str]]:
        """Return `(key, value)` pairs in insertion order."""

        return list(self._settings.items())

    def as_dict(self) -> dict[str, str]:
        """Return a detached copy of the underlying settings."""

        return dict(self._settings)

    def is_empty(self) -> bool:
        """Return whether the table holds no settings."""

        return not self._settings

    def to_tree(self, separator: str = ".") -> dict[str, Any]:
        """Build the nested tree view of this table."""

        from .tree.builder import TreeBuilder

        return TreeBuilder(separator=separator).build(self)

    def validate_with_schema(self, schema: Schema) -> None:
        """Validate this table and raise one aggregate error on any violation.

        Raises:
            SchemaValidationError: If at least one violation was found.
        """

        from .schema.validator import Validator

        Validator().validate(self, schema).raise_for_violations()

    def __len__(self) -> int:
        return len(self._settings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._settings)

    def __contains__(self, key: object) -> bool:
        return key in self._settings

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigTable):
            return NotImplemented
        return self._settings == other._settings

    def __repr__(self) -> str:
        return f"ConfigTable({self._settings!r})"
