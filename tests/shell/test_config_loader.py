"""Tests for the Configuration Loader module.

Tests configuration loading from YAML files and environment variables.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from quakefeed.core.config import Config
from quakefeed.core.query import USGS_API_BASE, QueryFilter
from quakefeed.shell.config_loader import (
    QUERY_ENV_VARS,
    _parse_query,
    _resolve_value,
    load_config,
    load_config_from_dict,
    load_config_from_env,
)


class TestResolveValue:
    """Tests for _resolve_value function."""

    def test_returns_non_string_unchanged(self):
        """Non-string values are returned unchanged."""
        assert _resolve_value(123) == 123
        assert _resolve_value(None) is None

    def test_returns_plain_string_unchanged(self):
        assert _resolve_value("time") == "time"

    def test_resolves_env_var_placeholder(self):
        with patch.dict(os.environ, {"TEST_MINMAG": "4.5"}):
            assert _resolve_value("${TEST_MINMAG}") == "4.5"

    def test_returns_placeholder_if_env_var_not_set(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _resolve_value("${UNDEFINED_VAR}") == "${UNDEFINED_VAR}"


class TestParseQuery:
    """Tests for _parse_query function."""

    def test_empty_section_uses_defaults(self):
        assert _parse_query({}) == QueryFilter()

    def test_partial_section_keeps_other_defaults(self):
        query = _parse_query({"min_magnitude": 3})
        assert query.min_magnitude == "3"
        assert query.max_magnitude == QueryFilter().max_magnitude

    def test_values_become_strings(self):
        query = _parse_query({"max_magnitude": 9.5, "start_time": "2023-06-01"})
        assert query.max_magnitude == "9.5"
        assert query.start_time == "2023-06-01"


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_full_config(self):
        config = load_config_from_dict({
            "base_url": "http://localhost:8080/query",
            "timeout_seconds": 5,
            "display_timezone": "UTC",
            "query": {
                "order_by": "magnitude",
                "min_magnitude": "2",
                "max_magnitude": "5",
                "start_time": "2024-05-01",
                "end_time": "2024-05-31",
            },
        })

        assert config.base_url == "http://localhost:8080/query"
        assert config.timeout_seconds == 5
        assert config.display_timezone == "UTC"
        assert config.query == QueryFilter("magnitude", "2", "5", "2024-05-01", "2024-05-31")

    def test_empty_dict_uses_defaults(self):
        config = load_config_from_dict({})
        assert config == Config()

    def test_null_query_section(self):
        config = load_config_from_dict({"query": None})
        assert config.query == QueryFilter()

    def test_invalid_timezone_raises(self):
        with pytest.raises(ValueError, match="Unknown timezone"):
            load_config_from_dict({"display_timezone": "Not/AZone"})

    def test_timezone_from_env_placeholder(self):
        with patch.dict(os.environ, {"TZ_NAME": "Asia/Tokyo"}):
            config = load_config_from_dict({"display_timezone": "${TZ_NAME}"})
        assert config.display_timezone == "Asia/Tokyo"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_yaml_file(self):
        data = {
            "timeout_seconds": 10,
            "query": {"order_by": "time-asc", "min_magnitude": "4"},
        }
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
            yaml.safe_dump(data, f)
            path = f.name

        try:
            config = load_config(path)
        finally:
            os.unlink(path)

        assert config.timeout_seconds == 10
        assert config.query.order_by == "time-asc"
        assert config.query.min_magnitude == "4"

    def test_missing_file_returns_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")
        assert config == Config()

    def test_empty_file_returns_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == Config()

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("query: [unclosed")

        with pytest.raises(yaml.YAMLError):
            load_config(path)

    def test_uses_config_path_env_var(self, tmp_path):
        path = tmp_path / "env.yaml"
        path.write_text("query:\n  min_magnitude: '7'\n")

        with patch.dict(os.environ, {"CONFIG_PATH": str(path)}):
            config = load_config()

        assert config.query.min_magnitude == "7"

    def test_shipped_config_file_loads(self):
        path = Path(__file__).parents[2] / "config" / "config.yaml"

        config = load_config(path)

        assert config.base_url == USGS_API_BASE
        assert config.query == QueryFilter()


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    def test_no_env_vars_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert load_config_from_env() == Config()

    def test_reads_all_settings(self):
        env = {
            "USGS_BASE_URL": "http://localhost/query",
            "REQUEST_TIMEOUT": "12",
            "QUAKEFEED_TIMEZONE": "Europe/Berlin",
            "QUAKEFEED_ORDER_BY": "magnitude",
            "QUAKEFEED_MIN_MAGNITUDE": "3",
            "QUAKEFEED_MAX_MAGNITUDE": "6",
            "QUAKEFEED_START_TIME": "2022-01-01",
            "QUAKEFEED_END_TIME": "2022-02-01",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config_from_env()

        assert config.base_url == "http://localhost/query"
        assert config.timeout_seconds == 12
        assert config.display_timezone == "Europe/Berlin"
        assert config.query == QueryFilter("magnitude", "3", "6", "2022-01-01", "2022-02-01")

    def test_env_var_names(self):
        assert set(QUERY_ENV_VARS) == {
            "order_by", "min_magnitude", "max_magnitude", "start_time", "end_time",
        }
