import json

import pytest
import structlog
from structlog.testing import capture_logs

from kubefield import configure_logging
from kubefield.config import get_settings
from kubefield.validators import (
    ErrorCode,
    ErrorKind,
    ValidationEngine,
    ValidatorRegistry,
    available_validators,
    get_validator,
    register_validator,
    validate_labels,
    validate_name,
    validate_port_number_or_name,
)
from kubefield.validators.models import ErrorDetail, ValidationResult
from kubefield.validators.registry import default_registry


def _boom(value, field):
    raise RuntimeError("boom")


class TestValidationResult:
    def test_host_contract_tuple(self):
        warnings, errors = validate_name("Bad", "metadata.name").as_tuple()
        assert warnings == []
        assert all(isinstance(err, ErrorDetail) for err in errors)
        assert errors[0].field == "metadata.name"

    def test_idempotent(self):
        value = {"Bad Key": 1, "ok": "-x"}
        first = validate_labels(value, "metadata.labels")
        second = validate_labels(value, "metadata.labels")
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_error_detail_serializes_codes_as_strings(self):
        detail = validate_name(1, "metadata.name").errors[0]
        data = json.loads(detail.model_dump_json())
        assert data["code"] == "SHAPE_EXPECTED_STRING"
        assert data["kind"] == "shape_mismatch"
        assert data["entry"] is None

    def test_messages(self):
        result = ValidationResult(errors=[ErrorDetail(field="f", message="bad", code=ErrorCode.PATH_ABSOLUTE)])
        assert result.messages() == ["f: bad"]
        assert not result.ok


class TestValidationEngine:
    def test_all_fields_valid(self):
        engine = ValidationEngine()
        report = engine.validate({
            "metadata.name": ("my-app", "name"),
            "metadata.labels": ({"app": "web"}, validate_labels),
            "spec.port": ("https", validate_port_number_or_name),
        })
        assert report.passed
        assert report.errors == []
        assert list(report.results) == ["metadata.name", "metadata.labels", "spec.port"]
        assert report.verdict.startswith("PASS")

    def test_errors_from_every_field_surface_together(self):
        report = ValidationEngine().validate({
            "metadata.name": ("Bad_Name", "name"),
            "spec.schedule": ("* * *", "cron_expression"),
            "spec.replicas": (3, "non_negative_integer"),
        })
        assert not report.passed
        assert [e.field for e in report.errors] == ["metadata.name", "spec.schedule"]
        assert report.results["spec.replicas"].ok
        assert report.summary == {"shape_mismatch": 0, "grammar_violation": 2}
        assert "metadata.name, spec.schedule" in report.verdict

    def test_crashing_validator_is_contained(self):
        with capture_logs() as logs:
            report = ValidationEngine().validate({
                "custom": ("x", _boom),
                "metadata.name": ("ok", "name"),
            })
        crash = report.results["custom"].errors[0]
        assert crash.code == ErrorCode.VALIDATOR_CRASHED
        assert "boom" in crash.message
        assert report.results["metadata.name"].ok
        events = [entry["event"] for entry in logs]
        assert "validator_failed" in events
        assert "validation_complete" in events

    def test_plain_callable_pairs_are_accepted(self):
        def legacy(value, field):
            return ["deprecated"], [f"{field} is wrong"]

        result = ValidationEngine().validate_field("v", "spec.x", legacy)
        assert result.warnings == ["deprecated"]
        assert result.errors[0].code == ErrorCode.CUSTOM_RULE_FAILED
        assert result.errors[0].message == "spec.x is wrong"

    def test_shape_errors_counted(self):
        report = ValidationEngine().validate({"metadata.labels": ("app=web", "labels")})
        assert report.summary[ErrorKind.SHAPE_MISMATCH.value] == 1

    def test_unknown_rule_name(self):
        with pytest.raises(KeyError, match="unknown validator 'nope'"):
            ValidationEngine().validate_field("x", "f", "nope")

    def test_completion_log_includes_timings(self):
        with capture_logs() as logs:
            ValidationEngine().validate({"metadata.name": ("ok", "name")})
        complete = [entry for entry in logs if entry["event"] == "validation_complete"][0]
        assert complete["passed"] is True
        assert "metadata.name" in complete["field_timings"]

    def test_timings_can_be_disabled(self, monkeypatch):
        monkeypatch.setenv("KUBEFIELD_LOG_FIELD_TIMINGS", "false")
        with capture_logs() as logs:
            ValidationEngine().validate({"metadata.name": ("ok", "name")})
        complete = [entry for entry in logs if entry["event"] == "validation_complete"][0]
        assert "field_timings" not in complete


class TestRegistry:
    def test_builtin_rules(self):
        names = available_validators()
        for rule in ("name", "labels", "mode_bits", "path", "cron_expression", "resource_list", "port_number_or_name"):
            assert rule in names
        assert get_validator("name") is validate_name

    def test_register_alias_on_default_registry(self, monkeypatch):
        monkeypatch.setattr(default_registry, "_validators", dict(default_registry._validators))
        register_validator("object_name_alias", validate_name)
        assert "object_name_alias" in available_validators()
        result = ValidationEngine().validate_field("Bad", "metadata.name", "object_name_alias")
        assert not result.ok

    def test_custom_registry(self):
        registry = ValidatorRegistry(validators=[])
        registry.register(validate_name, name="object_name")
        assert "object_name" in registry
        assert "name" not in registry
        report = ValidationEngine(registry=registry).validate({"metadata.name": ("ok", "object_name")})
        assert report.passed


class TestLoggingConfig:
    def test_configure_logging(self, monkeypatch, reset_structlog):
        monkeypatch.setenv("KUBEFIELD_DEBUG", "true")
        monkeypatch.setenv("KUBEFIELD_LOG_LEVEL", "warning")
        settings = get_settings()
        configure_logging(settings)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


class TestRegistryIsolation:
    def test_alias_does_not_outlive_its_test(self):
        assert "object_name_alias" not in available_validators()
