"""Tests for configuration management."""

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    is_production,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("TYPEPROPS_MAX_DEPTH", raising=False)
        assert get_environment(EnvVar.TYPEPROPS_MAX_DEPTH) == 10

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("TYPEPROPS_MAX_DEPTH", "7")
        assert get_environment(EnvVar.TYPEPROPS_MAX_DEPTH, override=3) == 3

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("TYPEPROPS_VALIDATOR_PROPERTY", "validators")
        assert get_environment(EnvVar.TYPEPROPS_VALIDATOR_PROPERTY) == "validators"

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("TYPEPROPS_MAX_DEPTH", "25")
        result = get_environment(EnvVar.TYPEPROPS_MAX_DEPTH)
        assert result == 25
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Unparseable integers fall back to the default."""
        monkeypatch.setenv("TYPEPROPS_MAX_DEPTH", "deep")
        assert get_environment(EnvVar.TYPEPROPS_MAX_DEPTH) == 10

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("TYPEPROPS_PRODUCTION", value)
            assert get_environment(EnvVar.TYPEPROPS_PRODUCTION) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("TYPEPROPS_PRODUCTION", value)
            assert get_environment(EnvVar.TYPEPROPS_PRODUCTION) is False

    @pytest.mark.unit
    def test_unrecognized_bool_uses_default(self, monkeypatch):
        """Unrecognized boolean strings use the default."""
        monkeypatch.setenv("TYPEPROPS_PRODUCTION", "maybe")
        assert get_environment(EnvVar.TYPEPROPS_PRODUCTION) is False


class TestIsProduction:
    """Tests for the production build switch."""

    @pytest.mark.unit
    def test_defaults_to_false(self, monkeypatch):
        """Development builds are the default."""
        monkeypatch.delenv("TYPEPROPS_PRODUCTION", raising=False)
        assert is_production() is False

    @pytest.mark.unit
    def test_reads_environment(self, monkeypatch):
        """Environment switches the build to production."""
        monkeypatch.setenv("TYPEPROPS_PRODUCTION", "1")
        assert is_production() is True

    @pytest.mark.unit
    def test_explicit_false_override(self, monkeypatch):
        """An explicit False override beats the environment."""
        monkeypatch.setenv("TYPEPROPS_PRODUCTION", "1")
        assert is_production(override=False) is False


class TestIntrospection:
    """Tests for metadata and listing helpers."""

    @pytest.mark.unit
    def test_environment_info(self):
        """Info returns the EnvConfig for a variable."""
        info = get_environment_info(EnvVar.TYPEPROPS_DEFAULTS_PROPERTY)
        assert isinstance(info, EnvConfig)
        assert info.default == "defaultProps"
        assert info.var_type is str

    @pytest.mark.unit
    def test_list_all(self):
        """All variables are listed without a category."""
        assert list_environment_variables() == list(EnvVar)

    @pytest.mark.unit
    def test_list_by_category(self):
        """Category filter returns only matching variables."""
        transform = list_environment_variables("transform")
        assert EnvVar.TYPEPROPS_MAX_DEPTH in transform
        assert EnvVar.TYPEPROPS_PRODUCTION not in transform

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every EnvConfig name matches its enum member name."""
        for var in EnvVar:
            assert var.value.name == var.name
