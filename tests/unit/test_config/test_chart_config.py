"""
Unit tests for configuration loading and validation.

Tests the validation of the [charter] table and its subtables, the TOML
loader and the cached configuration manager.
"""

import dataclasses

import pytest

from kubecharter.config import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_main_config,
    load_toml_file,
    set_config_path,
    validate_chart_config,
    validate_cluster_config,
)
from kubecharter.validation import (
    ConfigError,
    ValidationError,
    validate_enum_choice,
    validate_group_names,
    validate_positive_integer,
)


@pytest.mark.unit
class TestChartConfigValidation:
    """Test cases for validate_chart_config()."""

    def test_valid_config(self, sample_charter_data):
        config = validate_chart_config(sample_charter_data)

        assert config.namespace == "prod"
        assert config.interval_seconds == 15
        assert config.groups == ["web", "worker"]
        assert config.max_ticks == 10
        assert config.report_layout == "split"
        assert config.snapshot_format == "json"
        assert config.cluster.group_label == "app.kubernetes.io/name"
        assert config.cluster.request_timeout_seconds is None
        assert not config.unbounded

    def test_defaults_for_optional_settings(self):
        config = validate_chart_config(
            {
                "interval_seconds": 30,
                "groups": ["web"],
                "html_output_path": "a.html",
                "snapshot_output_path": "a.json",
            }
        )

        assert config.namespace == ""
        assert config.max_ticks == -1
        assert config.unbounded
        assert config.report_layout == "split"
        assert config.cluster.in_cluster is False

    @pytest.mark.parametrize(
        "key", ["interval_seconds", "groups", "html_output_path", "snapshot_output_path"]
    )
    def test_missing_required_key(self, sample_charter_data, key):
        del sample_charter_data[key]

        with pytest.raises(ConfigError) as exc_info:
            validate_chart_config(sample_charter_data)

        assert key in str(exc_info.value)

    @pytest.mark.parametrize("interval", [0, -1, 1.5, "thirty", True])
    def test_invalid_interval(self, sample_charter_data, interval):
        sample_charter_data["interval_seconds"] = interval

        with pytest.raises(ConfigError) as exc_info:
            validate_chart_config(sample_charter_data)

        assert exc_info.value.field_name == "charter.interval_seconds"

    @pytest.mark.parametrize("groups", [[], "web", ["web", "web"], ["web", ""], ["web", 3]])
    def test_invalid_groups(self, sample_charter_data, groups):
        sample_charter_data["groups"] = groups

        with pytest.raises(ConfigError):
            validate_chart_config(sample_charter_data)

    def test_identical_output_paths_rejected(self, sample_charter_data):
        sample_charter_data["snapshot_output_path"] = sample_charter_data["html_output_path"]

        with pytest.raises(ConfigError, match="must differ"):
            validate_chart_config(sample_charter_data)

    def test_unknown_layout_rejected(self, sample_charter_data):
        sample_charter_data["report"]["layout"] = "grid"

        with pytest.raises(ConfigError) as exc_info:
            validate_chart_config(sample_charter_data)

        assert exc_info.value.field_name == "charter.report.layout"

    @pytest.mark.parametrize(
        "table,value", [("report", "combined"), ("snapshot", "parquet"), ("cluster", "")]
    )
    def test_scalar_in_place_of_subtable_rejected(self, sample_charter_data, table, value):
        sample_charter_data[table] = value

        with pytest.raises(ConfigError) as exc_info:
            validate_chart_config(sample_charter_data)

        assert exc_info.value.field_name == f"charter.{table}"

    def test_snapshot_format_is_case_insensitive(self, sample_charter_data):
        sample_charter_data["snapshot"]["format"] = "Parquet"

        assert validate_chart_config(sample_charter_data).snapshot_format == "parquet"

    def test_zero_max_ticks_warns(self, sample_charter_data, caplog):
        sample_charter_data["max_ticks"] = 0

        config = validate_chart_config(sample_charter_data)

        assert config.max_ticks == 0
        assert "max_ticks is 0" in caplog.text

    def test_config_error_is_validation_error(self, sample_charter_data):
        sample_charter_data["interval_seconds"] = 0

        with pytest.raises(ValidationError):
            validate_chart_config(sample_charter_data)


@pytest.mark.unit
class TestClusterConfigValidation:
    """Test cases for the [charter.cluster] table."""

    def test_timeout(self):
        assert validate_cluster_config({"request_timeout_seconds": 10}).request_timeout_seconds == 10

    def test_zero_timeout_disables(self):
        assert validate_cluster_config({}).request_timeout_seconds is None

    def test_empty_group_label_rejected(self):
        with pytest.raises(ValidationError):
            validate_cluster_config({"group_label": " "})

    def test_in_cluster_must_be_bool(self):
        with pytest.raises(ValidationError):
            validate_cluster_config({"in_cluster": "yes"})


@pytest.mark.unit
class TestValueValidators:
    """Test cases for the generic value validators."""

    def test_positive_integer_accepts_integral_float(self):
        assert validate_positive_integer(30.0) == 30

    def test_positive_integer_without_lower_bound(self):
        assert validate_positive_integer(-1, min_value=None) == -1

    def test_positive_integer_upper_bound(self):
        with pytest.raises(ValidationError, match="<= 10"):
            validate_positive_integer(11, max_value=10, field_name="n")

    def test_enum_choice_returns_canonical_spelling(self):
        assert validate_enum_choice("JSON", ["json", "parquet"], case_sensitive=False) == "json"

    def test_group_names_are_stripped_and_ordered(self):
        assert validate_group_names([" worker ", "web"]) == ["worker", "web"]


@pytest.mark.unit
class TestLoader:
    """Test cases for TOML loading."""

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError, match="not found"):
            load_toml_file(temp_dir / "missing.toml")

    def test_invalid_toml(self, temp_dir):
        path = temp_dir / "broken.toml"
        path.write_text("[charter\ninterval_seconds = ")

        with pytest.raises(ConfigError, match="not valid TOML"):
            load_toml_file(path)

    def test_missing_charter_section(self, temp_dir):
        path = temp_dir / "other.toml"
        path.write_text("[other]\nkey = 1\n")

        with pytest.raises(ConfigError, match=r"\[charter\]"):
            load_main_config(path)

    def test_returns_charter_table(self, config_file):
        charter = load_main_config(config_file)

        assert charter["groups"] == ["web", "worker"]
        assert charter["html_output_path"] == "out/{{date}}.html"


@pytest.mark.unit
class TestConfigManager:
    """Test cases for the cached configuration."""

    def test_get_config_loads_once(self, config_file):
        set_config_path(config_file)
        assert not is_config_loaded()

        first = get_config()
        second = get_config()

        assert first is second
        assert is_config_loaded()
        assert first.max_ticks == 3

    def test_clear_cache_forces_reload(self, config_file):
        set_config_path(config_file)
        first = get_config()

        clear_config_cache()

        assert get_config() is not first

    def test_config_info(self, config_file):
        set_config_path(config_file)
        get_config()

        info = get_config_info()

        assert info["config_loaded"] is True
        assert info["config_path"] == str(config_file)
        assert info["groups_count"] == 2

    def test_invalid_file_raises_config_error(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("[charter]\ninterval_seconds = 0\n")
        set_config_path(path)

        with pytest.raises(ConfigError):
            get_config()

    def test_repository_sample_config_is_valid(self):
        config = get_config()

        assert config.groups == ["web", "worker"]
        assert config.unbounded

    def test_resolve_output_paths(self, config_file):
        set_config_path(config_file)

        resolved = get_config().resolve_output_paths("2024-01-01T10-00-00")

        assert resolved.html_output_path == "out/2024-01-01T10-00-00.html"
        assert resolved.snapshot_output_path == "out/2024-01-01T10-00-00.json"
        assert get_config().html_output_path == "out/{{date}}.html"

    def test_resolve_output_paths_keeps_every_other_setting(self, sample_charter_data):
        sample_charter_data["report"]["layout"] = "combined"
        sample_charter_data["snapshot"]["format"] = "parquet"
        sample_charter_data["cluster"]["request_timeout_seconds"] = 5
        config = validate_chart_config(sample_charter_data)

        resolved = config.resolve_output_paths("run")

        assert resolved == dataclasses.replace(
            config, html_output_path="out/run.html", snapshot_output_path="out/run.json"
        )
