"""Numeric validators — integer bounds, ports, resource quantities and string-encoded ints."""

from typing import Any

from kubefield.validators.base import BaseValidator, ValueShape, classify
from kubefield.validators.intparse import NumericParseError, parse_int
from kubefield.validators.k8s_rules import is_valid_port_name, is_valid_port_num
from kubefield.validators.models import ErrorCode, ValidationResult
from kubefield.validators.quantity import QuantityError, parse_quantity


class IntGreaterThanOrEqual(BaseValidator):
    """Integers no smaller than a bound fixed at construction."""

    def __init__(self, min_value: int, rule_name: str = ""):
        self._min_value = min_value
        self._rule_name = rule_name or f"int_gte_{min_value}"

    @property
    def min_value(self) -> int:
        return self._min_value

    @property
    def name(self) -> str:
        return self._rule_name

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.INTEGER:
            return self._result([
                self._shape_error(field, "must be an integer", ErrorCode.SHAPE_EXPECTED_INTEGER)
            ])
        if value < self._min_value:
            return self._result([self._error(
                field,
                f"must be greater than or equal to {self._min_value}",
                ErrorCode.INT_BELOW_MINIMUM,
            )])
        return self._result()


class NonNegativeIntegerValidator(IntGreaterThanOrEqual):
    def __init__(self):
        super().__init__(0, rule_name="non_negative_integer")


class TerminationGracePeriodSecondsValidator(IntGreaterThanOrEqual):
    """Same bound as non-negative integers; kept separate so the rule reads as the field it guards."""

    def __init__(self):
        super().__init__(0, rule_name="termination_grace_period_seconds")


class PositiveIntegerValidator(BaseValidator):
    @property
    def name(self) -> str:
        return "positive_integer"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.INTEGER:
            return self._result([
                self._shape_error(field, "must be an integer", ErrorCode.SHAPE_EXPECTED_INTEGER)
            ])
        if value <= 0:
            return self._result([self._error(field, "must be greater than 0", ErrorCode.INT_NOT_POSITIVE)])
        return self._result()


class PortNumberValidator(BaseValidator):
    @property
    def name(self) -> str:
        return "port_number"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.INTEGER:
            return self._result([
                self._shape_error(field, "must be an integer", ErrorCode.SHAPE_EXPECTED_INTEGER)
            ])
        return self._result(self._rule_errors(field, is_valid_port_num(value), ErrorCode.PORT_NUMBER_INVALID))


class PortNameValidator(BaseValidator):
    @property
    def name(self) -> str:
        return "port_name"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, "must be a string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])
        return self._result(self._rule_errors(field, is_valid_port_name(value), ErrorCode.PORT_NAME_INVALID))


class PortNumberOrNameValidator(BaseValidator):
    """Ports given either as a number or as a named port.

    Strings that parse as a base-10 integer are checked as port numbers,
    all other strings as port names.
    """

    def __init__(self):
        self._number = PortNumberValidator()
        self._port_name = PortNameValidator()

    @property
    def name(self) -> str:
        return "port_number_or_name"

    def validate(self, value: Any, field: str) -> ValidationResult:
        shape = classify(value)
        if shape is ValueShape.INTEGER:
            return self._number.validate(value, field)
        if shape is ValueShape.STRING:
            try:
                number = parse_int(value)
            except NumericParseError:
                return self._port_name.validate(value, field)
            return self._number.validate(number, field)
        return self._result([self._shape_error(
            field,
            "must be defined of type string or int on the schema",
            ErrorCode.SHAPE_EXPECTED_STRING_OR_INTEGER,
        )])


class ResourceQuantityValidator(BaseValidator):
    """Resource quantities such as "500m" or "2Gi"; plain integers are always accepted."""

    @property
    def name(self) -> str:
        return "resource_quantity"

    def validate(self, value: Any, field: str) -> ValidationResult:
        shape = classify(value)
        if shape is ValueShape.INTEGER:
            return self._result()
        if shape is not ValueShape.STRING:
            return self._result([self._shape_error(
                field,
                "must be a quantity string or an integer",
                ErrorCode.SHAPE_EXPECTED_STRING_OR_INTEGER,
            )])
        try:
            parse_quantity(value)
        except QuantityError as exc:
            return self._result([
                self._error(field, f"({self._quote(value)}) {exc}", ErrorCode.QUANTITY_INVALID)
            ])
        return self._result()


class NullableStringIntValidator(BaseValidator):
    """Integers carried in a string field; "" means unset."""

    @property
    def name(self) -> str:
        return "nullable_string_int"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, f"expected type of {field} to be string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])
        if value == "":
            return self._result()
        try:
            parse_int(value, bits=64)
        except NumericParseError as exc:
            return self._result([
                self._error(field, f"cannot parse '{value}' as int: {exc}", ErrorCode.INT_PARSE_FAILED)
            ])
        return self._result()


class NullableStringIntOrPercentValidator(BaseValidator):
    """A 32-bit integer or a percentage between 0% and 100%, in a string field; "" means unset."""

    @property
    def name(self) -> str:
        return "nullable_string_int_or_percent"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, f"expected type of {field} to be string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])
        if value == "":
            return self._result()

        if value.endswith("%"):
            try:
                percent = parse_int(value[:-1], bits=32)
            except NumericParseError as exc:
                return self._result([self._error(
                    field,
                    f"cannot parse '{value}' as percent: {exc}",
                    ErrorCode.PERCENT_PARSE_FAILED,
                )])
            if not 0 <= percent <= 100:
                return self._result([self._error(
                    field,
                    f"'{value}' is not between 0% and 100%",
                    ErrorCode.PERCENT_OUT_OF_RANGE,
                )])
            return self._result()

        try:
            parse_int(value, bits=32)
        except NumericParseError as exc:
            return self._result([self._error(
                field,
                f"cannot parse '{value}' as int or percent: {exc}",
                ErrorCode.INT_PARSE_FAILED,
            )])
        return self._result()


def validate_int_greater_than_or_equal(min_value: int) -> IntGreaterThanOrEqual:
    """Build a validator enforcing ``value >= min_value``."""
    return IntGreaterThanOrEqual(min_value)


validate_non_negative_integer = NonNegativeIntegerValidator()
validate_positive_integer = PositiveIntegerValidator()
validate_termination_grace_period_seconds = TerminationGracePeriodSecondsValidator()
validate_port_number = PortNumberValidator()
validate_port_name = PortNameValidator()
validate_port_number_or_name = PortNumberOrNameValidator()
validate_resource_quantity = ResourceQuantityValidator()
validate_nullable_string_int = NullableStringIntValidator()
validate_nullable_string_int_or_percent = NullableStringIntOrPercentValidator()
