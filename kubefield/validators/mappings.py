"""Mapping validators — annotations, labels, base64 data maps and resource lists.

Every entry is visited and each violation is reported on its own, tagged
with the entry key, so a single pass surfaces all problems in the map.
"""

from abc import abstractmethod
from typing import Any

from kubefield.validators.base import BaseValidator, ValueShape, classify
from kubefield.validators.formats import Base64Validator
from kubefield.validators.identity import QualifiedKeyValidator
from kubefield.validators.k8s_rules import is_valid_label_value
from kubefield.validators.models import ErrorCode, ErrorDetail, ValidationResult
from kubefield.validators.quantity import QuantityError, parse_quantity


class MappingValidator(BaseValidator):
    """Shared shape check; subclasses implement ``_entry_errors``."""

    shape_message = "must be a map of strings"

    def validate(self, value: Any, field: str) -> ValidationResult:
        if classify(value) is not ValueShape.MAPPING:
            return self._result([
                self._shape_error(field, self.shape_message, ErrorCode.SHAPE_EXPECTED_MAPPING)
            ])

        errors: list[ErrorDetail] = []
        for key, entry in value.items():
            errors.extend(self._entry_errors(field, key, entry))
        return self._result(errors)

    @abstractmethod
    def _entry_errors(self, field: str, key: str, entry: Any) -> list[ErrorDetail]:
        """Errors for one map entry (empty if the entry is valid)."""
        ...


class AnnotationsValidator(MappingValidator):
    """Annotation keys must be qualified names (checked lower-cased); values are free-form."""

    def __init__(self):
        self._keys = QualifiedKeyValidator(fold_case=True)

    @property
    def name(self) -> str:
        return "annotations"

    def _entry_errors(self, field: str, key: str, entry: Any) -> list[ErrorDetail]:
        return self._rule_errors(
            field,
            self._keys.key_errors(key),
            ErrorCode.ANNOTATION_KEY_INVALID,
            prefix=f"({self._quote(key)}) ",
            entry=key,
        )


class LabelsValidator(MappingValidator):
    """Label keys must be qualified names and values valid label values."""

    def __init__(self):
        self._keys = QualifiedKeyValidator(fold_case=False)

    @property
    def name(self) -> str:
        return "labels"

    def _entry_errors(self, field: str, key: str, entry: Any) -> list[ErrorDetail]:
        errors = self._rule_errors(
            field,
            self._keys.key_errors(key),
            ErrorCode.LABEL_KEY_INVALID,
            prefix=f"({self._quote(key)}) ",
            entry=key,
        )

        if classify(entry) is not ValueShape.STRING:
            errors.append(self._shape_error(
                f"{field}.{key}",
                f"({self._quote(entry)}) expected value to be string",
                ErrorCode.LABEL_VALUE_NOT_STRING,
                entry=key,
            ))
            return errors

        errors.extend(self._rule_errors(
            field,
            is_valid_label_value(entry),
            ErrorCode.LABEL_VALUE_INVALID,
            prefix=f"({self._quote(entry)}) ",
            entry=key,
        ))
        return errors


class Base64MapValidator(MappingValidator):
    """Every value must be a base64-encoded string (e.g. Secret data)."""

    shape_message = "must be a map of strings to base64 encoded strings"

    def __init__(self):
        self._base64 = Base64Validator()

    @property
    def name(self) -> str:
        return "base64_map"

    def _entry_errors(self, field: str, key: str, entry: Any) -> list[ErrorDetail]:
        result = self._base64.validate(entry, f"{field}.{key}")
        return [err.model_copy(update={"entry": key}) for err in result.errors]


class ResourceListValidator(MappingValidator):
    """Resource name → quantity; values are integers or quantity strings."""

    shape_message = "must be a map of resource names to quantities"

    @property
    def name(self) -> str:
        return "resource_list"

    def _entry_errors(self, field: str, key: str, entry: Any) -> list[ErrorDetail]:
        shape = classify(entry)
        if shape is ValueShape.INTEGER:
            return []

        entry_field = f"{field}.{key}"
        if shape is ValueShape.STRING:
            try:
                parse_quantity(entry)
            except QuantityError as exc:
                return [self._error(
                    entry_field, f"({self._quote(entry)}) {exc}", ErrorCode.QUANTITY_INVALID, entry=key
                )]
            return []

        return [self._shape_error(
            entry_field,
            f"({self._quote(entry)}) value can be either string or int",
            ErrorCode.RESOURCE_VALUE_INVALID_TYPE,
            entry=key,
        )]


validate_annotations = AnnotationsValidator()
validate_labels = LabelsValidator()
validate_base64_map = Base64MapValidator()
validate_resource_list = ResourceListValidator()
