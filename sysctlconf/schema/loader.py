"""Schema document loading.

Responsibilities:
- Read YAML schema documents from disk or text.
- Convert the `schema` mapping into immutable `Schema` objects.
- Report unknown type tags separately from other document problems.

Accepted document shape:

    schema:
      net.ipv4.ip_forward:
        type: bool
        required: true
        description: Enable IPv4 forwarding
      vm.swappiness:
        type: {optional: int}
      kernel.hostname:
        type: !optional string
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from loguru import logger

from ..errors import SchemaLoadError, SysctlIOError, UnknownSchemaTypeError
from .model import (
    OPTIONAL_TAG,
    OptionalType,
    ScalarKind,
    Schema,
    SchemaField,
    SchemaType,
    describe_type,
)


_SCHEMA_ROOT_KEY = "schema"
_SUPPORTED_FIELD_KEYS = frozenset({"type", "required", "description"})


class SchemaYamlLoader(yaml.SafeLoader):
    """Safe YAML loader that understands the `!optional <type>` tag."""


def _construct_optional(loader: yaml.SafeLoader, node: yaml.Node) -> dict[str, Any]:
    """Represent `!optional <type>` the same way as `{optional: <type>}`."""

    if isinstance(node, yaml.MappingNode):
        inner: Any = loader.construct_mapping(node, deep=True)
    elif isinstance(node, yaml.SequenceNode):
        inner = loader.construct_sequence(node, deep=True)
    else:
        inner = loader.construct_scalar(node)
    return {OPTIONAL_TAG: inner}


SchemaYamlLoader.add_constructor(f"!{OPTIONAL_TAG}", _construct_optional)


class SchemaLoader:
    """Factory methods for creating `Schema` objects from external documents."""

    @staticmethod
    def from_yaml(path: Path) -> Schema:
        """Load a schema from a YAML file.

        Raises:
            SysctlIOError: If the file cannot be read.
            SchemaLoadError: If the document is malformed.
            UnknownSchemaTypeError: If a field names an unsupported type.
        """

        try:
            raw_text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SysctlIOError(str(path), exc) from exc
        return SchemaLoader.from_text(raw_text)

    @staticmethod
    def from_text(raw_text: str) -> Schema:
        """Load a schema from YAML text."""

        try:
            payload = yaml.load(raw_text, Loader=SchemaYamlLoader)
        except yaml.YAMLError as exc:
            raise SchemaLoadError(f"YAML parse error: {exc}") from exc
        return SchemaLoader.from_mapping(payload)

    @staticmethod
    def from_mapping(payload: object) -> Schema:
        """Build a schema from an already-deserialized document."""

        if not isinstance(payload, Mapping):
            raise SchemaLoadError("Schema document must contain a top-level mapping/object.")

        unknown = sorted(str(key) for key in payload if key != _SCHEMA_ROOT_KEY)
        if unknown:
            key_list = ", ".join(unknown)
            raise SchemaLoadError(f"Schema document includes unsupported key(s): {key_list}.")
        if _SCHEMA_ROOT_KEY not in payload:
            raise SchemaLoadError(f"Schema document is missing required key `{_SCHEMA_ROOT_KEY}`.")

        raw_fields = payload[_SCHEMA_ROOT_KEY]
        if not isinstance(raw_fields, Mapping):
            raise SchemaLoadError(f"Schema key `{_SCHEMA_ROOT_KEY}` must be a mapping/object.")

        fields: dict[str, SchemaField] = {}
        for raw_name, raw_field in raw_fields.items():
            if not isinstance(raw_name, str) or not raw_name.strip():
                raise SchemaLoadError(f"Schema field name `{raw_name}` must be a non-empty string.")
            schema_field = SchemaLoader._parse_field(raw_name, raw_field)
            logger.debug(
                "Schema field `{}` expects {}.", raw_name, describe_type(schema_field.field_type)
            )
            fields[raw_name] = schema_field

        logger.debug("Loaded schema with {} field(s).", len(fields))
        return Schema(fields)

    @staticmethod
    def _parse_field(name: str, raw_field: object) -> SchemaField:
        """Parse one field specification."""

        if not isinstance(raw_field, Mapping):
            raise SchemaLoadError(f"Schema field `{name}` must be a mapping/object.")

        unknown = sorted(str(key) for key in raw_field if key not in _SUPPORTED_FIELD_KEYS)
        if unknown:
            key_list = ", ".join(unknown)
            raise SchemaLoadError(f"Schema field `{name}` includes unsupported key(s): {key_list}.")
        if "type" not in raw_field:
            raise SchemaLoadError(f"Schema field `{name}` is missing required key `type`.")

        required = raw_field.get("required", False)
        if required is None:
            required = False
        if not isinstance(required, bool):
            raise SchemaLoadError(f"Schema field `{name}` key `required` must be a boolean.")

        description = raw_field.get("description")
        if description is not None and not isinstance(description, str):
            raise SchemaLoadError(f"Schema field `{name}` key `description` must be a string.")

        return SchemaField(
            field_type=SchemaLoader._parse_type(name, raw_field["type"]),
            required=required,
            description=description,
        )

    @staticmethod
    def _parse_type(name: str, raw_type: object) -> SchemaType:
        """Parse a type tag, unwrapping nested optional wrappers recursively."""

        if isinstance(raw_type, str):
            if raw_type == OPTIONAL_TAG:
                raise SchemaLoadError(
                    f"Schema field `{name}` type `{OPTIONAL_TAG}` must wrap an inner type."
                )
            try:
                return ScalarKind(raw_type)
            except ValueError as exc:
                raise UnknownSchemaTypeError(raw_type) from exc

        if isinstance(raw_type, Mapping):
            if len(raw_type) != 1:
                raise SchemaLoadError(
                    f"Schema field `{name}` type mapping must have exactly one tag."
                )
            tag, inner = next(iter(raw_type.items()))
            if tag != OPTIONAL_TAG:
                raise UnknownSchemaTypeError(str(tag))
            return OptionalType(SchemaLoader._parse_type(name, inner))

        raise UnknownSchemaTypeError(str(raw_type))
