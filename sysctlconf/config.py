"""Runtime configuration model and loaders for sysctlconf commands.

Responsibilities:
- Define per-run command settings as a typed dataclass.
- Provide deterministic precedence resolution across CLI and environment values.

Key types:
- `RunConfig`: normalized settings for one command invocation.
- `RuntimeConfigSources`: optional value sources for precedence resolution.
- `ConfigLoader`: static construction helpers for `RunConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .parsing import normalize_optional_string
from .tree.render import SUPPORTED_OUTPUT_FORMATS


_DEFAULT_OUTPUT_FORMAT = "json"
_DEFAULT_SEPARATOR = "."
_DEFAULT_JSON_INDENT = 2
_DEFAULT_LOG_LEVEL = "WARNING"
_SUPPORTED_LOG_LEVELS = frozenset(
    {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
)

_ENV_KEYS = {
    "schema_path": "SYSCTLCONF_SCHEMA",
    "output_format": "SYSCTLCONF_FORMAT",
    "separator": "SYSCTLCONF_SEPARATOR",
    "json_indent": "SYSCTLCONF_JSON_INDENT",
    "log_level": "SYSCTLCONF_LOG_LEVEL",
}


@dataclass(frozen=True, slots=True)
class RuntimeConfigSources:
    """Source mappings used for deterministic runtime value precedence.

    Attributes:
        cli: Values explicitly provided by CLI arguments.
        env: Values loaded from environment variables.
    """

    cli: Mapping[str, str] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Settings for one command invocation.

    Attributes:
        schema_path: Optional path to a YAML schema document.
        output_format: Tree rendering format (`json` or `yaml`).
        separator: Key path separator used for tree building.
        json_indent: Indentation width for rendered output.
        log_level: Minimum level for phase logs written to stderr.
    """

    schema_path: Path | None = None
    output_format: str = _DEFAULT_OUTPUT_FORMAT
    separator: str = _DEFAULT_SEPARATOR
    json_indent: int = _DEFAULT_JSON_INDENT
    log_level: str = _DEFAULT_LOG_LEVEL

    def validate(self) -> None:
        """Validate settings before command execution."""

        if self.output_format not in SUPPORTED_OUTPUT_FORMATS:
            supported = ", ".join(SUPPORTED_OUTPUT_FORMATS)
            raise ValueError(
                f"Unsupported `output_format` value `{self.output_format}`; supported: {supported}."
            )
        if not self.separator:
            raise ValueError("`separator` must be a non-empty string.")
        if self.json_indent < 0:
            raise ValueError("`json_indent` must be a non-negative integer.")
        if self.log_level not in _SUPPORTED_LOG_LEVELS:
            supported = ", ".join(sorted(_SUPPORTED_LOG_LEVELS))
            raise ValueError(
                f"Unsupported `log_level` value `{self.log_level}`; supported: {supported}."
            )


class ConfigLoader:
    """Factory methods for creating `RunConfig` from runtime sources."""

    @staticmethod
    def resolve(sources: RuntimeConfigSources | None = None) -> RunConfig:
        """Resolve a validated config with precedence `cli` > `env` > defaults."""

        resolved_sources = sources if sources is not None else RuntimeConfigSources()

        schema_value = ConfigLoader._resolve_value("schema_path", resolved_sources)
        output_format = ConfigLoader._resolve_value("output_format", resolved_sources)
        separator = ConfigLoader._resolve_separator(resolved_sources)
        json_indent = ConfigLoader._resolve_value("json_indent", resolved_sources)
        log_level = ConfigLoader._resolve_value("log_level", resolved_sources)

        config = RunConfig(
            schema_path=Path(schema_value) if schema_value is not None else None,
            output_format=(output_format or _DEFAULT_OUTPUT_FORMAT).lower(),
            separator=separator,
            json_indent=ConfigLoader._parse_non_negative_int(json_indent, "json_indent"),
            log_level=(log_level or _DEFAULT_LOG_LEVEL).upper(),
        )
        config.validate()
        return config

    @staticmethod
    def _resolve_value(key: str, sources: RuntimeConfigSources) -> str | None:
        """Resolve one optional value from sources in deterministic order."""

        cli_value = ConfigLoader._normalized_lookup(sources.cli, key)
        if cli_value is not None:
            return cli_value
        return ConfigLoader._normalized_lookup(sources.env, _ENV_KEYS[key])

    @staticmethod
    def _resolve_separator(sources: RuntimeConfigSources) -> str:
        """Resolve the separator without stripping, so whitespace separators survive."""

        for mapping, key in ((sources.cli, "separator"), (sources.env, _ENV_KEYS["separator"])):
            value = mapping.get(key)
            if value:
                return value
        return _DEFAULT_SEPARATOR

    @staticmethod
    def _normalized_lookup(mapping: Mapping[str, str], key: str) -> str | None:
        """Return a stripped mapping value for a key or `None` when missing/blank."""

        if key not in mapping:
            return None
        return normalize_optional_string(mapping.get(key))

    @staticmethod
    def _parse_non_negative_int(value: str | None, field_name: str) -> int:
        """Parse an optional non-negative integer setting."""

        if value is None:
            return _DEFAULT_JSON_INDENT
        try:
            parsed = int(value)
        except ValueError as exc:
            raise ValueError(f"`{field_name}` must be a non-negative integer.") from exc
        if parsed < 0:
            raise ValueError(f"`{field_name}` must be a non-negative integer.")
        return parsed
