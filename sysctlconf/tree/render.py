"""Text rendering for nested setting trees."""

from __future__ import annotations

import json
from typing import Any, Mapping

import yaml


SUPPORTED_OUTPUT_FORMATS = ("json", "yaml")


def render_tree(tree: Mapping[str, Any], output_format: str = "json", indent: int = 2) -> str:
    """Render a tree as pretty JSON or block-style YAML.

    Raises:
        ValueError: If `output_format` is not supported.
    """

    if output_format == "json":
        return json.dumps(tree, ensure_ascii=False, indent=indent)
    if output_format == "yaml":
        return yaml.safe_dump(
            dict(tree),
            allow_unicode=True,
            default_flow_style=False,
            indent=indent or None,
            sort_keys=False,
        ).rstrip("\n")
    supported = ", ".join(SUPPORTED_OUTPUT_FORMATS)
    raise ValueError(f"Unsupported output format `{output_format}`; supported: {supported}.")
