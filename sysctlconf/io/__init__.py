"""Input components for sysctlconf.

This package contains the `key=value` line parser and input source selection.
"""

from .line_parser import LineParser
from .source import load_table

__all__ = ["LineParser", "load_table"]
