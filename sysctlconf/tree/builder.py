"""Hierarchical tree construction from dot-separated table keys.

Responsibilities:
- Expand flat keys such as `net.ipv4.ip_forward` into nested mappings.
- Flatten nested mappings back into a `ConfigTable`.

Collision policy: keys are applied in table order and the later key wins a
contested node. A non-mapping value found at an intermediate position is
replaced by a fresh mapping, and a leaf assignment replaces whatever was
stored at that position.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..table import ConfigTable


TreeNode = dict[str, Any]


class TreeBuilder:
    """Convert between flat tables and nested string-leaf trees."""

    def __init__(self, separator: str = ".") -> None:
        """Initialize the builder with the key path separator."""

        if not separator:
            raise ValueError("Tree separator must be a non-empty string.")
        self.separator = separator

    def build(self, table: ConfigTable) -> TreeNode:
        """Return a nested tree whose leaves are the table's string values."""

        root: TreeNode = {}
        for key, value in table.items():
            self._set_nested_value(root, key.split(self.separator), value)
        return root

    def flatten(self, tree: Mapping[str, Any]) -> ConfigTable:
        """Join nested tree paths back into a flat table.

        Raises:
            TypeError: If a leaf is not a string.
        """

        table = ConfigTable()
        self._flatten_into(table, tree, prefix=None)
        return table

    @staticmethod
    def _set_nested_value(root: TreeNode, segments: list[str], value: str) -> None:
        """Walk or create interior nodes, then assign the leaf segment."""

        current = root
        for segment in segments[:-1]:
            child = current.get(segment)
            if not isinstance(child, dict):
                child = {}
                current[segment] = child
            current = child
        current[segments[-1]] = value

    def _flatten_into(
        self,
        table: ConfigTable,
        node: Mapping[str, Any],
        prefix: str | None,
    ) -> None:
        """Recursively add every leaf below `node` to `table`."""

        for segment, child in node.items():
            path = segment if prefix is None else f"{prefix}{self.separator}{segment}"
            if isinstance(child, Mapping):
                self._flatten_into(table, child, path)
            elif isinstance(child, str):
                table.set(path, child)
            else:
                raise TypeError(
                    f"Tree leaf `{path}` must be a string, got {type(child).__name__}."
                )
