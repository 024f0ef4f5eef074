"""Identity validators — object names, generateName prefixes and qualified keys."""

from typing import Any

from kubefield.validators.base import BaseValidator, ValueShape, classify
from kubefield.validators.k8s_rules import is_qualified_name, name_is_dns_label, name_is_dns_subdomain
from kubefield.validators.models import ErrorCode, ValidationResult


class NameValidator(BaseValidator):
    """Object names must be lowercase RFC 1123 subdomains."""

    @property
    def name(self) -> str:
        return "name"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, "must be a string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])
        return self._result(self._rule_errors(field, name_is_dns_subdomain(value), ErrorCode.NAME_INVALID))


class GenerateNameValidator(BaseValidator):
    """generateName prefixes must form an RFC 1123 label once the random suffix is appended.

    The suffix itself is not part of the value, so a trailing '-' is allowed.
    """

    @property
    def name(self) -> str:
        return "generate_name"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, "must be a string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])
        errors = self._rule_errors(field, name_is_dns_label(value, prefix=True), ErrorCode.GENERATE_NAME_INVALID)
        return self._result(errors)


class QualifiedKeyValidator(BaseValidator):
    """Label and annotation keys: ``[prefix/]name``.

    Annotation keys are lower-cased before the check (``fold_case=True``).
    The API server treats annotation keys as case-sensitive, but this
    mirrors how annotation keys have always been checked here, so mixed-case
    prefixes such as ``Example.com/Key`` are accepted for annotations and
    rejected for labels.
    """

    def __init__(self, fold_case: bool = False):
        self._fold_case = fold_case

    @property
    def fold_case(self) -> bool:
        return self._fold_case

    @property
    def name(self) -> str:
        return "annotation_key" if self._fold_case else "label_key"

    def key_errors(self, key: str) -> list[str]:
        """Rule messages for one key, empty if the key is valid."""
        return is_qualified_name(key.lower() if self._fold_case else key)

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.STRING:
            return self._result([
                self._shape_error(field, "must be a string", ErrorCode.SHAPE_EXPECTED_STRING)
            ])
        return self._result(
            self._rule_errors(field, self.key_errors(value), ErrorCode.QUALIFIED_KEY_INVALID, prefix=f"({self._quote(value)}) ")
        )


validate_name = NameValidator()
validate_generate_name = GenerateNameValidator()
validate_qualified_key = QualifiedKeyValidator(fold_case=True)
validate_label_key = QualifiedKeyValidator(fold_case=False)
