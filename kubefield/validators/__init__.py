"""Field validators — Kubernetes-style checks for single configuration values.

Usage:
    from kubefield.validators import validate_labels

    result = validate_labels({"app": "web"}, "metadata.labels")
    if not result.ok:
        # Show result.errors to the user
"""

from kubefield.validators.base import BaseValidator, ValueShape, classify
from kubefield.validators.engine import ValidationEngine, validation_engine
from kubefield.validators.formats import (
    Base64Validator,
    CronExpressionValidator,
    ModeBitsValidator,
    PathValidator,
    validate_base64,
    validate_cron_expression,
    validate_mode_bits,
    validate_path,
)
from kubefield.validators.identity import (
    GenerateNameValidator,
    NameValidator,
    QualifiedKeyValidator,
    validate_generate_name,
    validate_label_key,
    validate_name,
    validate_qualified_key,
)
from kubefield.validators.mappings import (
    AnnotationsValidator,
    Base64MapValidator,
    LabelsValidator,
    ResourceListValidator,
    validate_annotations,
    validate_base64_map,
    validate_labels,
    validate_resource_list,
)
from kubefield.validators.models import (
    ErrorCode,
    ErrorDetail,
    ErrorKind,
    ValidationReport,
    ValidationResult,
)
from kubefield.validators.numeric import (
    IntGreaterThanOrEqual,
    NonNegativeIntegerValidator,
    NullableStringIntOrPercentValidator,
    NullableStringIntValidator,
    PortNameValidator,
    PortNumberOrNameValidator,
    PortNumberValidator,
    PositiveIntegerValidator,
    ResourceQuantityValidator,
    TerminationGracePeriodSecondsValidator,
    validate_int_greater_than_or_equal,
    validate_non_negative_integer,
    validate_nullable_string_int,
    validate_nullable_string_int_or_percent,
    validate_port_name,
    validate_port_number,
    validate_port_number_or_name,
    validate_positive_integer,
    validate_resource_quantity,
    validate_termination_grace_period_seconds,
)
from kubefield.validators.registry import (
    ValidatorRegistry,
    available_validators,
    get_validator,
    register_validator,
)

__all__ = [
    "BaseValidator",
    "ValueShape",
    "classify",
    "ValidationEngine",
    "validation_engine",
    "ValidatorRegistry",
    "available_validators",
    "get_validator",
    "register_validator",
    "ErrorCode",
    "ErrorDetail",
    "ErrorKind",
    "ValidationReport",
    "ValidationResult",
    # Identity
    "NameValidator",
    "GenerateNameValidator",
    "QualifiedKeyValidator",
    "validate_name",
    "validate_generate_name",
    "validate_qualified_key",
    "validate_label_key",
    # Mappings
    "AnnotationsValidator",
    "LabelsValidator",
    "Base64MapValidator",
    "ResourceListValidator",
    "validate_annotations",
    "validate_labels",
    "validate_base64_map",
    "validate_resource_list",
    # Numeric
    "IntGreaterThanOrEqual",
    "NonNegativeIntegerValidator",
    "PositiveIntegerValidator",
    "TerminationGracePeriodSecondsValidator",
    "PortNumberValidator",
    "PortNameValidator",
    "PortNumberOrNameValidator",
    "ResourceQuantityValidator",
    "NullableStringIntValidator",
    "NullableStringIntOrPercentValidator",
    "validate_int_greater_than_or_equal",
    "validate_non_negative_integer",
    "validate_positive_integer",
    "validate_termination_grace_period_seconds",
    "validate_port_number",
    "validate_port_name",
    "validate_port_number_or_name",
    "validate_resource_quantity",
    "validate_nullable_string_int",
    "validate_nullable_string_int_or_percent",
    # Formats
    "ModeBitsValidator",
    "PathValidator",
    "CronExpressionValidator",
    "Base64Validator",
    "validate_mode_bits",
    "validate_path",
    "validate_cron_expression",
    "validate_base64",
]
