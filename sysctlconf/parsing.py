"""Shared parsing helpers for runtime settings and schema value checks."""

from __future__ import annotations

import re


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MAX_DIGITS = len(str(_INT64_MAX))
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def is_boolean_literal(value: str) -> bool:
    """Return whether `value` is exactly one accepted boolean token, any case."""

    token = value.lower()
    return token in _TRUE_BOOLEAN_TOKENS or token in _FALSE_BOOLEAN_TOKENS


def is_int64_literal(value: str) -> bool:
    """Return whether `value` is a signed 64-bit integer literal.

    Only ASCII digits with an optional sign are accepted. Surrounding
    whitespace, underscores, and thousands separators are rejected even
    though `int()` would tolerate some of them.
    """

    if _INT_PATTERN.fullmatch(value) is None:
        return False
    if len(value.lstrip("+-").lstrip("0")) > _INT64_MAX_DIGITS:
        return False
    return _INT64_MIN <= int(value) <= _INT64_MAX


def is_float_literal(value: str) -> bool:
    """Return whether `value` is a decimal or exponent float literal.

    `inf`, `infinity`, and `nan` are accepted case-insensitively. Surrounding
    whitespace and underscores are rejected.
    """

    return _FLOAT_PATTERN.fullmatch(value) is not None
