"""Validator registry — look up validators by rule name.

Host frameworks usually wire validators into a schema by name; the
registry maps each rule name to a ready-to-use validator instance.
"""

from typing import Optional

from kubefield.validators.base import BaseValidator
from kubefield.validators.formats import (
    validate_base64,
    validate_cron_expression,
    validate_mode_bits,
    validate_path,
)
from kubefield.validators.identity import (
    validate_generate_name,
    validate_label_key,
    validate_name,
    validate_qualified_key,
)
from kubefield.validators.mappings import (
    validate_annotations,
    validate_base64_map,
    validate_labels,
    validate_resource_list,
)
from kubefield.validators.numeric import (
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


class ValidatorRegistry:
    """Name → validator lookup with the built-in rules preloaded."""

    def __init__(self, validators: Optional[list[BaseValidator]] = None):
        self._validators: dict[str, BaseValidator] = {}
        for validator in validators if validators is not None else self._default_validators():
            self.register(validator)

    @staticmethod
    def _default_validators() -> list[BaseValidator]:
        return [
            # Identity
            validate_name,
            validate_generate_name,
            validate_qualified_key,
            validate_label_key,
            # Mappings
            validate_annotations,
            validate_labels,
            validate_base64_map,
            validate_resource_list,
            # Numeric
            validate_non_negative_integer,
            validate_positive_integer,
            validate_termination_grace_period_seconds,
            validate_port_number,
            validate_port_name,
            validate_port_number_or_name,
            validate_resource_quantity,
            validate_nullable_string_int,
            validate_nullable_string_int_or_percent,
            # Formats
            validate_mode_bits,
            validate_path,
            validate_cron_expression,
            validate_base64,
        ]

    def register(self, validator: BaseValidator, name: Optional[str] = None) -> None:
        """Add or replace a validator under its own name or an alias."""
        self._validators[name or validator.name] = validator

    def get(self, name: str) -> BaseValidator:
        """Return the validator for a rule name.

        Raises:
            KeyError: if no validator is registered under that name
        """
        try:
            return self._validators[name]
        except KeyError:
            raise KeyError(f"unknown validator '{name}'; available: {', '.join(self.names())}") from None

    def names(self) -> list[str]:
        return sorted(self._validators)

    def __contains__(self, name: str) -> bool:
        return name in self._validators


# Module-level singleton
default_registry = ValidatorRegistry()


def get_validator(name: str) -> BaseValidator:
    return default_registry.get(name)


def register_validator(name: str, validator: BaseValidator) -> None:
    default_registry.register(validator, name=name)


def available_validators() -> list[str]:
    return default_registry.names()
