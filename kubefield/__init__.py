"""kubefield — field-level validation of Kubernetes-style configuration values."""

from kubefield.log_config import configure_logging
from kubefield.validators import ValidationEngine, ValidationReport, ValidationResult, validation_engine

__version__ = "0.1.0"

__all__ = [
    "ValidationEngine",
    "ValidationReport",
    "ValidationResult",
    "configure_logging",
    "validation_engine",
    "__version__",
]
