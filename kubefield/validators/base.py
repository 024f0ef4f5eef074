"""Base validator — abstract class implementing the Strategy Pattern.

Each validator is a standalone, independently testable unit with the
contract ``validate(value, field) -> ValidationResult``. Instances are
callable, so a validator can be handed to a host framework wherever a
plain ``(value, field)`` function is expected.
"""

import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Iterable, Optional

from kubefield.validators.models import ErrorCode, ErrorDetail, ErrorKind, ValidationResult


class ValueShape(str, Enum):
    """Classification of an untyped input value, decided once at the boundary."""

    STRING = "string"
    INTEGER = "integer"
    MAPPING = "mapping"
    OTHER = "other"


def classify(value: Any) -> ValueShape:
    """Classify a raw configuration value.

    ``bool`` is an ``int`` subclass in Python but never counts as an integer
    here. A mapping must have string keys throughout.
    """
    if isinstance(value, str):
        return ValueShape.STRING
    if isinstance(value, int) and not isinstance(value, bool):
        return ValueShape.INTEGER
    if isinstance(value, dict) and all(isinstance(k, str) for k in value):
        return ValueShape.MAPPING
    return ValueShape.OTHER


class BaseValidator(ABC):
    """Abstract base for all field validators.

    Contract:
        - validate() is deterministic: same input → same output
        - validate() never raises for any input shape
        - validate() returns a ValidationResult (no errors = value accepted)
        - No I/O, no shared mutable state
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name used by the registry and in logs."""
        ...

    @abstractmethod
    def validate(self, value: Any, field: str) -> ValidationResult:
        """Validate one value.

        Args:
            value: Raw value handed over by the configuration framework
            field: Human-readable field label, used only in messages

        Returns:
            ValidationResult with warnings and errors (empty errors if valid)
        """
        ...

    def __call__(self, value: Any, field: str) -> ValidationResult:
        return self.validate(value, field)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    # ── Helper Methods ──

    def _error(
        self,
        field: str,
        message: str,
        code: ErrorCode,
        kind: ErrorKind = ErrorKind.GRAMMAR_VIOLATION,
        entry: Optional[str] = None,
    ) -> ErrorDetail:
        """Convenience method to create an ErrorDetail."""
        return ErrorDetail(field=field, message=message, code=code, kind=kind, entry=entry)

    def _shape_error(
        self,
        field: str,
        message: str,
        code: ErrorCode,
        entry: Optional[str] = None,
    ) -> ErrorDetail:
        return self._error(field, message, code, kind=ErrorKind.SHAPE_MISMATCH, entry=entry)

    def _rule_errors(
        self,
        field: str,
        messages: Iterable[str],
        code: ErrorCode,
        prefix: str = "",
        entry: Optional[str] = None,
    ) -> list[ErrorDetail]:
        """Wrap each rule-library message into an ErrorDetail."""
        return [self._error(field, f"{prefix}{msg}", code, entry=entry) for msg in messages]

    def _result(self, errors: Optional[list[ErrorDetail]] = None) -> ValidationResult:
        return ValidationResult(errors=errors or [])

    def _quote(self, value: Any) -> str:
        """Quote a value for messages: strings in double quotes, others via JSON or repr."""
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            return repr(value)
