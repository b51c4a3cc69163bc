"""Unit tests for schema validation of parsed tables."""

from __future__ import annotations

import pytest

from sysctlconf.errors import SchemaValidationError
from sysctlconf.schema.model import (
    MissingRequiredKey,
    OptionalType,
    ScalarKind,
    Schema,
    SchemaField,
    TypeMismatch,
)
from sysctlconf.schema.validator import Validator
from sysctlconf.table import ConfigTable


_FORWARD_SCHEMA = Schema(
    {"net.ipv4.forward": SchemaField(field_type=ScalarKind.BOOL, required=True)}
)


def test_bool_field_accepts_yes() -> None:
    """A valid boolean token should pass validation."""

    report = Validator().validate(ConfigTable({"net.ipv4.forward": "yes"}), _FORWARD_SCHEMA)

    assert report.ok
    assert report.violations == ()


def test_bool_field_rejects_maybe_with_one_mismatch() -> None:
    """An invalid boolean token should yield exactly one type mismatch."""

    report = Validator().validate(ConfigTable({"net.ipv4.forward": "maybe"}), _FORWARD_SCHEMA)

    assert report.violations == (
        TypeMismatch(
            key="net.ipv4.forward",
            expected_type=ScalarKind.BOOL,
            actual_value="maybe",
        ),
    )
    assert report.messages() == [
        "Validation error for key 'net.ipv4.forward': expected boolean value, got 'maybe'"
    ]


def test_missing_required_key_is_reported_once() -> None:
    """An absent required key should yield exactly one missing-key violation."""

    report = Validator().validate(ConfigTable(), _FORWARD_SCHEMA)

    assert report.violations == (MissingRequiredKey(key="net.ipv4.forward"),)
    assert report.messages() == ["Required key 'net.ipv4.forward' is missing"]


def test_absent_optional_key_passes() -> None:
    """Absent keys that are not required should never be reported."""

    schema = Schema({"vm.swappiness": SchemaField(field_type=ScalarKind.INT)})

    assert Validator().validate(ConfigTable(), schema).ok


def test_all_violations_are_collected_in_declaration_order() -> None:
    """Validation should report every problem instead of failing fast."""

    schema = Schema(
        {
            "a": SchemaField(field_type=ScalarKind.STRING, required=True),
            "b": SchemaField(field_type=ScalarKind.INT, required=True),
            "c": SchemaField(field_type=ScalarKind.FLOAT),
            "d": SchemaField(field_type=ScalarKind.BOOL),
        }
    )
    table = ConfigTable({"c": "abc", "d": "true"})

    report = Validator().validate(table, schema)

    assert not report.ok
    assert [type(violation) for violation in report.violations] == [
        MissingRequiredKey,
        MissingRequiredKey,
        TypeMismatch,
    ]
    assert [violation.key for violation in report.violations] == ["a", "b", "c"]


def test_unknown_table_keys_are_ignored() -> None:
    """Keys outside the schema should never produce violations."""

    table = ConfigTable({"net.ipv4.forward": "on", "anything.else": "!!not-a-number!!"})

    assert Validator().validate(table, _FORWARD_SCHEMA).ok


def test_string_field_accepts_any_value() -> None:
    """String fields should accept every value, including empty strings."""

    schema = Schema({"kernel.hostname": SchemaField(field_type=ScalarKind.STRING)})

    assert Validator().validate(ConfigTable({"kernel.hostname": ""}), schema).ok


@pytest.mark.parametrize(
    "value",
    ["true", "FALSE", "1", "0", "On", "off", "YES", "no"],
)
def test_bool_tokens_are_case_insensitive(value: str) -> None:
    """All accepted boolean tokens should pass in any letter case."""

    assert Validator().matches_type(value, ScalarKind.BOOL)


@pytest.mark.parametrize("value", ["maybe", "2", "", "y", "truee"])
def test_bool_rejects_other_tokens(value: str) -> None:
    """Values outside the boolean token set should fail."""

    assert not Validator().matches_type(value, ScalarKind.BOOL)


@pytest.mark.parametrize("value", ["-42", "0", "+7", "9223372036854775807", "-9223372036854775808"])
def test_int_accepts_signed_64_bit_literals(value: str) -> None:
    """Signed 64-bit integer literals should pass."""

    assert Validator().matches_type(value, ScalarKind.INT)


@pytest.mark.parametrize(
    "value",
    ["4.2", "forty-two", "", "1_000", "1,000", " 1", "9223372036854775808", "0x10", "١٢"],
)
def test_int_rejects_non_integer_literals(value: str) -> None:
    """Decimals, words, separators, whitespace, and out-of-range values should fail."""

    assert not Validator().matches_type(value, ScalarKind.INT)


def test_int_rejects_overlong_digit_strings_with_mismatch() -> None:
    """Digit strings far beyond the 64-bit range should be reported, not raise."""

    schema = Schema({"kernel.pid_max": SchemaField(field_type=ScalarKind.INT)})

    report = Validator().validate(ConfigTable({"kernel.pid_max": "9" * 5000}), schema)

    assert [violation.key for violation in report.violations] == ["kernel.pid_max"]
    assert isinstance(report.violations[0], TypeMismatch)


def test_int_accepts_leading_zeros_within_range() -> None:
    """Zero padding should not count against the 64-bit digit limit."""

    assert Validator().matches_type("0" * 30 + "42", ScalarKind.INT)


@pytest.mark.parametrize("value", ["3.14", "-2", "1e10", "2.5E-3", ".5", "5.", "inf", "-Infinity", "NaN"])
def test_float_accepts_decimal_and_exponent_literals(value: str) -> None:
    """Decimal, exponent, and special float literals should pass."""

    assert Validator().matches_type(value, ScalarKind.FLOAT)


@pytest.mark.parametrize("value", ["abc", "", "1_0", " 1.0", "1e", ".", "1.2.3"])
def test_float_rejects_invalid_literals(value: str) -> None:
    """Non-numeric and malformed float text should fail."""

    assert not Validator().matches_type(value, ScalarKind.FLOAT)


def test_optional_delegates_to_inner_type() -> None:
    """Optional wrappers, nested or not, should validate like their inner type."""

    validator = Validator()
    nested = OptionalType(OptionalType(ScalarKind.INT))

    assert validator.matches_type("5", OptionalType(ScalarKind.INT))
    assert not validator.matches_type("five", OptionalType(ScalarKind.INT))
    assert validator.matches_type("-1", nested)
    assert not validator.matches_type("x", nested)


def test_optional_mismatch_message_uses_inner_label() -> None:
    """Mismatch messages should describe the unwrapped expected type."""

    schema = Schema({"vm.dirty_ratio": SchemaField(field_type=OptionalType(ScalarKind.INT))})

    report = Validator().validate(ConfigTable({"vm.dirty_ratio": "lots"}), schema)

    assert report.messages() == [
        "Validation error for key 'vm.dirty_ratio': expected integer value, got 'lots'"
    ]


def test_raise_for_violations_joins_messages() -> None:
    """The aggregate error should join every violation with `; `."""

    schema = Schema(
        {
            "a": SchemaField(field_type=ScalarKind.INT, required=True),
            "b": SchemaField(field_type=ScalarKind.INT, required=True),
        }
    )
    report = Validator().validate(ConfigTable(), schema)

    with pytest.raises(SchemaValidationError) as exc_info:
        report.raise_for_violations()

    assert len(exc_info.value.violations) == 2
    assert str(exc_info.value) == (
        "Multiple schema validation errors: "
        "Required key 'a' is missing; Required key 'b' is missing"
    )


def test_validation_is_repeatable_and_pure() -> None:
    """Running validation twice should give equal reports and keep the table unchanged."""

    table = ConfigTable({"net.ipv4.forward": "maybe", "extra": "1"})
    validator = Validator()

    first = validator.validate(table, _FORWARD_SCHEMA)
    second = validator.validate(table, _FORWARD_SCHEMA)

    assert first == second
    assert table.as_dict() == {"net.ipv4.forward": "maybe", "extra": "1"}
