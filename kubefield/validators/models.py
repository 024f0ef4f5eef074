"""Validation models — error kinds, error codes, per-field results and the engine report.

All validation is deterministic: same input → same output, no I/O, no shared state.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """What went wrong with a value."""

    SHAPE_MISMATCH = "shape_mismatch"        # Wrong type for this validator
    GRAMMAR_VIOLATION = "grammar_violation"  # Right type, fails a named rule


class ErrorCode(str, Enum):
    """Deterministic error codes for every validation rule.

    Naming convention: CATEGORY_SPECIFIC_ISSUE
    """

    # Shape errors
    SHAPE_EXPECTED_STRING = "SHAPE_EXPECTED_STRING"
    SHAPE_EXPECTED_INTEGER = "SHAPE_EXPECTED_INTEGER"
    SHAPE_EXPECTED_MAPPING = "SHAPE_EXPECTED_MAPPING"
    SHAPE_EXPECTED_STRING_OR_INTEGER = "SHAPE_EXPECTED_STRING_OR_INTEGER"

    # Identity errors
    NAME_INVALID = "NAME_INVALID"
    GENERATE_NAME_INVALID = "GENERATE_NAME_INVALID"
    QUALIFIED_KEY_INVALID = "QUALIFIED_KEY_INVALID"

    # Mapping errors
    ANNOTATION_KEY_INVALID = "ANNOTATION_KEY_INVALID"
    LABEL_KEY_INVALID = "LABEL_KEY_INVALID"
    LABEL_VALUE_NOT_STRING = "LABEL_VALUE_NOT_STRING"
    LABEL_VALUE_INVALID = "LABEL_VALUE_INVALID"
    RESOURCE_VALUE_INVALID_TYPE = "RESOURCE_VALUE_INVALID_TYPE"

    # Numeric errors
    INT_BELOW_MINIMUM = "INT_BELOW_MINIMUM"
    INT_NOT_POSITIVE = "INT_NOT_POSITIVE"
    INT_PARSE_FAILED = "INT_PARSE_FAILED"
    PERCENT_PARSE_FAILED = "PERCENT_PARSE_FAILED"
    PERCENT_OUT_OF_RANGE = "PERCENT_OUT_OF_RANGE"
    PORT_NUMBER_INVALID = "PORT_NUMBER_INVALID"
    PORT_NAME_INVALID = "PORT_NAME_INVALID"
    QUANTITY_INVALID = "QUANTITY_INVALID"

    # Format errors
    MODE_MISSING_OCTAL_PREFIX = "MODE_MISSING_OCTAL_PREFIX"
    MODE_PARSE_FAILED = "MODE_PARSE_FAILED"
    MODE_OUT_OF_RANGE = "MODE_OUT_OF_RANGE"
    PATH_ABSOLUTE = "PATH_ABSOLUTE"
    PATH_STARTS_WITH_PARENT = "PATH_STARTS_WITH_PARENT"
    PATH_CONTAINS_PARENT = "PATH_CONTAINS_PARENT"
    CRON_INVALID = "CRON_INVALID"
    BASE64_INVALID = "BASE64_INVALID"

    # Engine errors
    VALIDATOR_CRASHED = "VALIDATOR_CRASHED"
    CUSTOM_RULE_FAILED = "CUSTOM_RULE_FAILED"  # Plain-string error from a host-supplied callable


class ErrorDetail(BaseModel):
    """A single validation finding for one field."""

    field: str
    message: str
    code: ErrorCode
    kind: ErrorKind = ErrorKind.GRAMMAR_VIOLATION
    entry: Optional[str] = None  # Map key of the offending entry, for mapping validators

    model_config = {"use_enum_values": True, "frozen": True}

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationResult(BaseModel):
    """Outcome of validating one value. No errors means the value is acceptable."""

    warnings: list[str] = Field(default_factory=list)
    errors: list[ErrorDetail] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def entries_in_error(self) -> list[str]:
        """Map keys with at least one error, in the order they were reported."""
        seen: list[str] = []
        for err in self.errors:
            if err.entry is not None and err.entry not in seen:
                seen.append(err.entry)
        return seen

    def as_tuple(self) -> tuple[list[str], list[ErrorDetail]]:
        """The (warnings, errors) pair handed back to the host framework."""
        return list(self.warnings), list(self.errors)

    def messages(self) -> list[str]:
        return [str(err) for err in self.errors]


class ValidationReport(BaseModel):
    """Combined outcome of validating several fields — the output of the engine."""

    passed: bool = Field(description="True if no field produced an error")
    results: dict[str, ValidationResult] = Field(default_factory=dict)
    errors: list[ErrorDetail] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    summary: dict = Field(
        description="Count of errors by kind",
        default_factory=lambda: {kind.value: 0 for kind in ErrorKind},
    )
    verdict: str = Field(default="", description="Human-readable verdict")

    @classmethod
    def build(cls, results: dict[str, ValidationResult]) -> "ValidationReport":
        """Build a report from per-field results, keeping field order."""
        errors: list[ErrorDetail] = []
        warnings: list[str] = []
        for result in results.values():
            errors.extend(result.errors)
            warnings.extend(result.warnings)

        summary = {kind.value: 0 for kind in ErrorKind}
        for err in errors:
            summary[ErrorKind(err.kind).value] += 1

        failed_fields = [label for label, result in results.items() if not result.ok]
        passed = not failed_fields

        if passed:
            verdict = f"PASS — {len(results)} field(s) valid."
        else:
            verdict = (
                f"FAIL — {len(errors)} error(s) in {len(failed_fields)} of {len(results)} field(s): "
                f"{', '.join(failed_fields)}"
            )

        return cls(
            passed=passed,
            results=results,
            errors=errors,
            warnings=warnings,
            summary=summary,
            verdict=verdict,
        )
