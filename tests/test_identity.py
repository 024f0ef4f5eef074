import pytest

from kubefield.validators import (
    ErrorCode,
    ErrorKind,
    validate_generate_name,
    validate_label_key,
    validate_name,
    validate_qualified_key,
)
from tests.conftest import codes


class TestName:
    @pytest.mark.parametrize("name", ["my-app", "a", "web.example.com", "0abc", "a" * 63, "x" * 63 + "." + "y" * 63])
    def test_valid_subdomains(self, name):
        assert validate_name(name, "metadata.name").ok

    @pytest.mark.parametrize("name", ["MyApp", "-app", "app-", "my_app", "", "a..b", ".app"])
    def test_invalid_subdomains(self, name):
        result = validate_name(name, "metadata.name")
        assert len(result.errors) >= 1
        assert set(codes(result)) == {ErrorCode.NAME_INVALID}

    def test_too_long(self):
        result = validate_name("a" * 254, "metadata.name")
        assert any("must be no more than 253 characters" in e.message for e in result.errors)

    def test_label_longer_than_63(self):
        result = validate_name("a" * 64 + ".example.com", "metadata.name")
        assert len(result.errors) == 1
        assert "must be no more than 63 characters" in result.errors[0].message

    def test_message_uses_upstream_wording(self):
        result = validate_name("Bad", "metadata.name")
        assert result.errors[0].message.startswith("a lowercase RFC 1123 subdomain must consist of")
        assert "'example.com'" in result.errors[0].message
        assert str(result.errors[0]).startswith("metadata.name: ")

    def test_non_string_is_shape_error(self):
        result = validate_name(42, "metadata.name")
        assert len(result.errors) == 1
        assert result.errors[0].kind == ErrorKind.SHAPE_MISMATCH


class TestGenerateName:
    @pytest.mark.parametrize("prefix", ["my-app-", "job-", "web", "a-"])
    def test_valid_prefixes(self, prefix):
        assert validate_generate_name(prefix, "metadata.generate_name").ok

    @pytest.mark.parametrize("prefix", ["My-", "-", "my.app-", "a" * 64])
    def test_invalid_prefixes(self, prefix):
        result = validate_generate_name(prefix, "metadata.generate_name")
        assert not result.ok
        assert set(codes(result)) == {ErrorCode.GENERATE_NAME_INVALID}

    def test_label_rules_not_subdomain_rules(self):
        assert validate_name("my.app", "metadata.name").ok
        assert not validate_generate_name("my.app", "metadata.generate_name").ok


class TestQualifiedKey:
    @pytest.mark.parametrize("key", ["app", "app.kubernetes.io/name", "MyKey", "my_key.v1", "a"])
    def test_valid_keys(self, key):
        assert validate_label_key(key, "key").ok

    def test_empty_prefix(self):
        result = validate_label_key("/name", "key")
        assert [e.message for e in result.errors] == ['("/name") prefix part must be non-empty']

    def test_too_many_slashes(self):
        result = validate_label_key("a/b/c", "key")
        assert len(result.errors) == 1
        assert "a qualified name must consist of" in result.errors[0].message

    def test_empty_key_reports_both_rules(self):
        result = validate_label_key("", "key")
        assert len(result.errors) == 2
        assert "name part must be non-empty" in result.errors[0].message

    def test_name_part_too_long(self):
        result = validate_label_key("example.com/" + "n" * 64, "key")
        assert [e.message for e in result.errors][0].endswith("name part must be no more than 63 characters")

    def test_annotation_flavour_folds_case(self):
        assert validate_qualified_key("Example.com/Key", "key").ok
        result = validate_label_key("Example.com/Key", "key")
        assert len(result.errors) == 1
        assert "prefix part" in result.errors[0].message

    def test_rule_names(self):
        assert validate_qualified_key.name == "annotation_key"
        assert validate_label_key.name == "label_key"
