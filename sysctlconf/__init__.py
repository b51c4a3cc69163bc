"""Top-level package for sysctlconf.

This package parses sysctl-style `key=value` text into a flat table, expands
dot-separated keys into a nested tree, and validates values against a YAML
schema. The main entry points are `LineParser`, `ConfigTable`, and
`Validator`.
"""

from loguru import logger

from .io.line_parser import LineParser
from .schema.loader import SchemaLoader
from .schema.validator import Validator
from .table import ConfigTable
from .tree.builder import TreeBuilder

__all__ = [
    "ConfigTable",
    "LineParser",
    "SchemaLoader",
    "TreeBuilder",
    "Validator",
    "__version__",
]

__version__ = "0.1.0"

logger.disable("sysctlconf")
