"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.book_catalog.runtime.config.config_data import ConfigData
from src.book_catalog.runtime.config.config_template import (
    apply_environment_overrides,
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)

CONFIG_YAML = """
config:
  app:
    environment: ${APP_ENVIRONMENT:-development}
    port: ${APP_PORT:-3000}
  mongo:
    url: ${MONGO_URL:-mongodb://localhost:27017}
    database: ${MONGO_DATABASE:-sample}
    username: ${MONGO_USERNAME:-}
  logging:
    file: ${LOG_FILE:-}
"""


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "27017"}):
            result = substitute_env_vars("mongodb://${HOST}:${PORT}/sample")
            assert result == "mongodb://localhost:27017/sample"

    def test_default_used_when_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-fallback}") == "fallback"

    def test_default_ignored_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual"}):
            assert substitute_env_vars("${PRESENT_VAR:-fallback}") == "actual"

    def test_empty_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-}") == ""

    def test_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_custom_error_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError,
                match="Required environment variable MONGO_URL: point at the catalog db",
            ):
                substitute_env_vars("${MONGO_URL:?point at the catalog db}")

    def test_text_without_placeholders_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"


class TestEnvironmentOverrides:
    def test_prefixed_variable_replaces_plain_one(self):
        env = {"MONGO_URL": "mongodb://local", "PRODUCTION_MONGO_URL": "mongodb://prod"}
        with patch.dict(os.environ, env, clear=True):
            promoted = apply_environment_overrides("production")
            assert os.environ["MONGO_URL"] == "mongodb://prod"
        assert promoted == {"MONGO_URL": "PRODUCTION_MONGO_URL"}

    def test_other_environments_untouched(self):
        env = {"MONGO_URL": "mongodb://local", "PRODUCTION_MONGO_URL": "mongodb://prod"}
        with patch.dict(os.environ, env, clear=True):
            assert apply_environment_overrides("development") == {}
            assert os.environ["MONGO_URL"] == "mongodb://local"


class TestLoadTemplatedYaml:
    def test_defaults_applied(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML)

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path)

        assert config.app.port == 3000
        assert config.mongo.url == "mongodb://localhost:27017"
        assert config.mongo.database == "sample"
        assert config.mongo.username is None
        assert config.logging.file is None

    def test_environment_values_applied(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML)
        env = {
            "APP_PORT": "3002",
            "MONGO_URL": "mongodb://cluster.example:27017",
            "MONGO_DATABASE": "library",
            "MONGO_USERNAME": "catalog",
        }

        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(path)

        assert config.app.port == 3002
        assert config.mongo.url == "mongodb://cluster.example:27017"
        assert config.mongo.database == "library"
        assert config.mongo.username == "catalog"

    def test_invalid_value_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML)

        with patch.dict(os.environ, {"APP_PORT": "not-a-port"}, clear=True):
            with pytest.raises(ValueError, match="Invalid configuration"):
                load_templated_yaml(path)

    def test_empty_file_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path)

    def test_malformed_yaml_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config: [unclosed")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(path)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "absent.yaml")


class TestLoadConfig:
    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "absent.yaml")
        assert config == ConfigData()

    def test_path_taken_from_environment(self, tmp_path: Path):
        path = tmp_path / "custom.yaml"
        path.write_text(CONFIG_YAML)

        with patch.dict(
            os.environ, {"APP_CONFIG_FILE": str(path), "MONGO_DATABASE": "custom"}, clear=True
        ):
            config = load_config()

        assert config.mongo.database == "custom"
