"""Validation Engine — runs field validators, isolates failures, produces a report.

This is the entry point for hosts that validate several fields at once.
Each field is validated independently; a report collects every result.

Usage:
    engine = ValidationEngine()
    report = engine.validate({
        "metadata.name": ("my-app", "name"),
        "metadata.labels": ({"app": "web"}, validate_labels),
    })
    if not report.passed:
        # Show report.errors to the user
"""

import time
from typing import Any, Callable, Mapping, Optional, Union

import structlog

from kubefield.config import get_settings
from kubefield.validators.base import BaseValidator
from kubefield.validators.models import (
    ErrorCode,
    ErrorDetail,
    ErrorKind,
    ValidationReport,
    ValidationResult,
)
from kubefield.validators.registry import ValidatorRegistry, default_registry

logger = structlog.get_logger()

ValidatorLike = Union[BaseValidator, Callable[[Any, str], Any], str]


class ValidationEngine:
    """Runs validators over many fields and produces a unified report.

    Design principles:
        - Deterministic: same input → same output
        - Total: a crashing validator becomes an error, never an exception
        - Observable: logs every validation run with timing
    """

    def __init__(self, registry: Optional[ValidatorRegistry] = None):
        """Initialize with the default registry or a custom one.

        Args:
            registry: Registry used to resolve validators given by name.
        """
        self.registry = registry or default_registry

    def resolve(self, validator: ValidatorLike) -> Callable[[Any, str], Any]:
        """Turn a rule name into its validator; validators and callables pass through."""
        if isinstance(validator, str):
            return self.registry.get(validator)
        return validator

    def validate_field(self, value: Any, field: str, validator: ValidatorLike) -> ValidationResult:
        """Run one validator, converting any failure into an error result.

        Plain callables may return a ValidationResult or a
        ``(warnings, errors)`` pair whose errors are ErrorDetails or strings.
        """
        check = self.resolve(validator)
        rule = getattr(check, "name", getattr(check, "__name__", type(check).__name__))
        try:
            outcome = check(value, field)
            return self._coerce(outcome, field)
        except Exception as e:
            logger.error(
                "validator_failed",
                validator=rule,
                field=field,
                error=str(e),
            )
            # Don't let one broken validator kill the whole pass
            return ValidationResult(errors=[ErrorDetail(
                field=field,
                message=f"validator '{rule}' crashed: {e}",
                code=ErrorCode.VALIDATOR_CRASHED,
                kind=ErrorKind.GRAMMAR_VIOLATION,
            )])

    def validate(self, fields: Mapping[str, tuple[Any, ValidatorLike]]) -> ValidationReport:
        """Validate every field and produce a report.

        Args:
            fields: field label → (value, validator or rule name)

        Returns:
            ValidationReport with pass/fail and all errors, in field order
        """
        start_time = time.perf_counter()

        results: dict[str, ValidationResult] = {}
        field_timings: dict[str, float] = {}

        for field, (value, validator) in fields.items():
            f_start = time.perf_counter()
            try:
                results[field] = self.validate_field(value, field, validator)
            finally:
                field_timings[field] = round((time.perf_counter() - f_start) * 1000, 3)

        report = ValidationReport.build(results)

        total_duration = (time.perf_counter() - start_time) * 1000
        extra = {"field_timings": field_timings} if get_settings().LOG_FIELD_TIMINGS else {}

        logger.info(
            "validation_complete",
            passed=report.passed,
            fields=len(results),
            summary=report.summary,
            total_errors=len(report.errors),
            duration_ms=round(total_duration, 2),
            **extra,
        )

        return report

    @staticmethod
    def _coerce(outcome: Any, field: str) -> ValidationResult:
        if isinstance(outcome, ValidationResult):
            return outcome

        warnings, errors = outcome
        details = []
        for err in errors or []:
            if isinstance(err, ErrorDetail):
                details.append(err)
            else:
                details.append(ErrorDetail(
                    field=field,
                    message=str(err),
                    code=ErrorCode.CUSTOM_RULE_FAILED,
                ))
        return ValidationResult(warnings=[str(w) for w in warnings or []], errors=details)


# Module-level singleton
validation_engine = ValidationEngine()
