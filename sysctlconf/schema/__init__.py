"""Schema model, loading, and validation.

This package describes expected setting types and checks parsed tables
against them.
"""

from .loader import SchemaLoader
from .model import (
    MissingRequiredKey,
    OptionalType,
    ScalarKind,
    Schema,
    SchemaField,
    TypeMismatch,
    ValidationReport,
)
from .validator import Validator

__all__ = [
    "MissingRequiredKey",
    "OptionalType",
    "ScalarKind",
    "Schema",
    "SchemaField",
    "SchemaLoader",
    "TypeMismatch",
    "ValidationReport",
    "Validator",
]
