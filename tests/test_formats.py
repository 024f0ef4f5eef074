import pytest

from kubefield.config import get_settings
from kubefield.validators import (
    CronExpressionValidator,
    ErrorCode,
    ErrorKind,
    validate_base64,
    validate_cron_expression,
    validate_mode_bits,
    validate_path,
)
from kubefield.validators.formats import format_octal
from tests.conftest import codes


class TestModeBits:
    @pytest.mark.parametrize("mode", ["0755", "0644", "0", "0777", "00"])
    def test_valid(self, mode):
        assert validate_mode_bits(mode, "default_mode").ok

    def test_missing_leading_zero_only(self):
        result = validate_mode_bits("755", "default_mode")
        assert codes(result) == [ErrorCode.MODE_MISSING_OCTAL_PREFIX]
        assert result.errors[0].message == "value 755 should start with '0' (octal numeral)"

    def test_out_of_range_rendered_in_octal(self):
        result = validate_mode_bits("01000", "default_mode")
        assert codes(result) == [ErrorCode.MODE_OUT_OF_RANGE]
        assert result.errors[0].message == "(01000) expects octal notation (a value between 0 and 0777)"

    def test_not_octal(self):
        result = validate_mode_bits("0789", "default_mode")
        assert codes(result) == [ErrorCode.MODE_PARSE_FAILED]

    def test_errors_stack(self):
        result = validate_mode_bits("abc", "default_mode")
        assert codes(result) == [ErrorCode.MODE_MISSING_OCTAL_PREFIX, ErrorCode.MODE_PARSE_FAILED]

    def test_negative(self):
        result = validate_mode_bits("-01", "default_mode")
        assert codes(result) == [ErrorCode.MODE_MISSING_OCTAL_PREFIX, ErrorCode.MODE_OUT_OF_RANGE]
        assert result.errors[1].message.startswith("(-01)")

    def test_beyond_int32(self):
        result = validate_mode_bits("040000000000", "default_mode")
        assert codes(result) == [ErrorCode.MODE_PARSE_FAILED, ErrorCode.MODE_OUT_OF_RANGE]

    def test_integer_input_is_shape_error(self):
        result = validate_mode_bits(0o644, "default_mode")
        assert result.errors[0].kind == ErrorKind.SHAPE_MISMATCH

    @pytest.mark.parametrize("value, rendered", [(0, "0"), (0o755, "0755"), (512, "01000"), (-1, "-01")])
    def test_format_octal(self, value, rendered):
        assert format_octal(value) == rendered


class TestPath:
    @pytest.mark.parametrize("path", ["config/app.yaml", "app.yaml", "a/..b/c", "a/b..", "./x", ""])
    def test_valid(self, path):
        assert validate_path(path, "items.path").ok

    def test_absolute(self):
        result = validate_path("/etc/app.yaml", "items.path")
        assert [e.message for e in result.errors] == ["must be a relative path"]

    def test_leading_parent(self):
        result = validate_path("../secret", "items.path")
        assert [e.message for e in result.errors] == ['must not start with ".."']

    def test_leading_dots_without_separator(self):
        assert codes(validate_path("..hidden", "items.path")) == [ErrorCode.PATH_STARTS_WITH_PARENT]

    def test_parent_segment(self):
        result = validate_path("a/../b", "items.path")
        assert [e.message for e in result.errors] == ['must not contain ".."']

    def test_backslash_separators(self):
        assert codes(validate_path("a\\..\\b", "items.path")) == [ErrorCode.PATH_CONTAINS_PARENT]

    def test_trailing_parent(self):
        assert codes(validate_path("a/b/..", "items.path")) == [ErrorCode.PATH_CONTAINS_PARENT]


class TestCronExpression:
    @pytest.mark.parametrize("spec", [
        "*/5 * * * *",
        "0 0 1 1 *",
        "0 9-17 * * MON-FRI",
        "15,45 * ? JAN,jul *",
        "@daily",
        "@every 1h30m",
    ])
    def test_valid(self, spec):
        assert validate_cron_expression(spec, "schedule").ok

    def test_detail_preserved_by_default(self):
        result = validate_cron_expression("60 * * * *", "schedule")
        assert result.errors[0].message == (
            "should be a valid Cron expression: end of range (60) above maximum (59): 60"
        )

    def test_detail_free_message(self):
        validator = CronExpressionValidator(detailed=False)
        result = validator("* * * *", "schedule")
        assert [e.message for e in result.errors] == ["should be a valid Cron expression"]

    def test_setting_controls_default(self, monkeypatch):
        monkeypatch.setenv("KUBEFIELD_CRON_DETAILED_ERRORS", "false")
        result = CronExpressionValidator()("nope", "schedule")
        assert result.errors[0].message == "should be a valid Cron expression"

    def test_non_string(self):
        result = validate_cron_expression(5, "schedule")
        assert result.errors[0].kind == ErrorKind.SHAPE_MISMATCH

    @pytest.mark.parametrize("spec", [
        "1" * 5000 + " * * * *",
        "*/" + "9" * 5000 + " * * * *",
        "@every 99999999999h",
        "@every " + "9" * 400 + "h",
    ])
    def test_oversized_values_are_errors(self, spec):
        result = validate_cron_expression(spec, "schedule")
        assert codes(result) == [ErrorCode.CRON_INVALID]

    def test_shared_instance_follows_setting_changes(self, monkeypatch):
        assert validate_cron_expression("nope", "schedule").errors[0].message != "should be a valid Cron expression"
        monkeypatch.setenv("KUBEFIELD_CRON_DETAILED_ERRORS", "false")
        get_settings.cache_clear()
        result = validate_cron_expression("nope", "schedule")
        assert result.errors[0].message == "should be a valid Cron expression"


class TestBase64:
    @pytest.mark.parametrize("value", ["aGVsbG8=", "", "Zm9vYmFy", "Zm9v\r\nYmFy"])
    def test_valid(self, value):
        assert validate_base64(value, "data").ok

    @pytest.mark.parametrize("value", ["not-base64!", "abc", "aGVsbG8", "aGVs bG8="])
    def test_invalid(self, value):
        result = validate_base64(value, "data")
        assert [e.message for e in result.errors] == ["must be a base64-encoded string"]

    def test_non_string(self):
        result = validate_base64(None, "data")
        assert [e.message for e in result.errors] == ["must be a non-nil base64-encoded string"]
        assert result.errors[0].kind == ErrorKind.SHAPE_MISMATCH
