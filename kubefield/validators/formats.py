"""Textual format validators — file mode bits, relative paths, cron schedules, base64."""

import base64
import binascii
from typing import Any, Optional

from kubefield.config import get_settings
from kubefield.validators.base import BaseValidator, ValueShape, classify
from kubefield.validators.cron import CronParseError, parse_cron
from kubefield.validators.intparse import NumericParseError, parse_int
from kubefield.validators.models import ErrorCode, ValidationResult

MODE_BITS_MAX = 0o777


def format_octal(value: int) -> str:
    """Render an int in C-style octal notation: 0 -> "0", 493 -> "0755", -1 -> "-01"."""
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    return f"{sign}0{abs(value):o}"


class ModeBitsValidator(BaseValidator):
    """File permission bits written as an octal string, e.g. "0644".

    A missing leading zero is reported but parsing continues, so one pass can
    report both the notation problem and a parse or range problem.
    """

    @property
    def name(self) -> str:
        return "mode_bits"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, "must be an octal string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])

        errors = []
        if not value.startswith("0"):
            errors.append(self._error(
                field,
                f"value {value} should start with '0' (octal numeral)",
                ErrorCode.MODE_MISSING_OCTAL_PREFIX,
            ))

        mode: Optional[int]
        try:
            mode = parse_int(value, base=8, bits=32)
        except NumericParseError as exc:
            errors.append(self._error(
                field,
                f"cannot parse octal numeral ({self._quote(value)}): {exc}",
                ErrorCode.MODE_PARSE_FAILED,
            ))
            mode = exc.clamped

        if mode is not None and not 0 <= mode <= MODE_BITS_MAX:
            errors.append(self._error(
                field,
                f"({format_octal(mode)}) expects octal notation (a value between 0 and 0777)",
                ErrorCode.MODE_OUT_OF_RANGE,
            ))
        return self._result(errors)


class PathValidator(BaseValidator):
    """Relative paths that cannot escape their base directory.

    Stops at the first problem: absolute path, leading "..", or a ".." segment.
    """

    @property
    def name(self) -> str:
        return "path"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, "must be a string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])

        if value.startswith("/"):
            return self._result([self._error(field, "must be a relative path", ErrorCode.PATH_ABSOLUTE)])

        if value.startswith(".."):
            return self._result([
                self._error(field, 'must not start with ".."', ErrorCode.PATH_STARTS_WITH_PARENT)
            ])

        if ".." in value.replace("\\", "/").split("/"):
            return self._result([
                self._error(field, 'must not contain ".."', ErrorCode.PATH_CONTAINS_PARENT)
            ])

        return self._result()


class CronExpressionValidator(BaseValidator):
    """Standard five-field cron schedules and @-descriptors.

    With ``detailed=False`` the parser's reason is dropped and a fixed
    message is returned instead. Left as None, the CRON_DETAILED_ERRORS
    setting decides on every call.
    """

    def __init__(self, detailed: Optional[bool] = None):
        self._detailed = detailed

    @property
    def name(self) -> str:
        return "cron_expression"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, "must be a cron expression string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])

        try:
            parse_cron(value)
        except CronParseError as exc:
            message = "should be a valid Cron expression"
            detailed = get_settings().CRON_DETAILED_ERRORS if self._detailed is None else self._detailed
            if detailed:
                message = f"{message}: {exc}"
            return self._result([self._error(field, message, ErrorCode.CRON_INVALID)])
        return self._result()


def is_base64(text: str) -> bool:
    """Standard alphabet with padding; CR and LF are ignored."""
    cleaned = text.replace("\r", "").replace("\n", "")
    try:
        base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


class Base64Validator(BaseValidator):
    @property
    def name(self) -> str:
        return "base64"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, "must be a non-nil base64-encoded string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])
        if not is_base64(value):
            return self._result([self._error(field, "must be a base64-encoded string", ErrorCode.BASE64_INVALID)])
        return self._result()


validate_mode_bits = ModeBitsValidator()
validate_path = PathValidator()
validate_base64 = Base64Validator()
validate_cron_expression = CronExpressionValidator()
