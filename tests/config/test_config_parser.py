"""Unit tests for configuration parser."""

import pytest
import yaml

from workflowkit.config.parser import (
    PipelineConfig,
    config_to_data,
    load_config,
    parse_config,
    parse_config_data,
)
from workflowkit.core.exceptions import ConfigError


@pytest.mark.unit
def test_defaults_match_databases_monorepo():
    """Test the default configuration describes the standard pipeline."""
    config = PipelineConfig()

    assert config.workflow.name == "Test"
    assert config.workflow.branches == ["master"]
    assert config.node.versions == ["12.x", "14.x"]
    assert [db.key for db in config.databases] == ["pg", "mysql"]
    assert len(config.databases[0].versions) == 4
    assert len(config.databases[1].versions) == 3
    assert config.databases[0].env == {"PG_TEST_DEBUG": "TRUE"}
    assert config.website.enabled is True


@pytest.mark.unit
def test_load_config_without_file(tmp_path):
    """Test a project without workflowkit.yaml gets defaults."""
    config = load_config(tmp_path)
    assert config == PipelineConfig()


@pytest.mark.unit
def test_parse_partial_config(tmp_path):
    """Test unspecified sections keep their defaults."""
    # Arrange
    config_file = tmp_path / "workflowkit.yaml"
    config_file.write_text(
        """
version: 1
workflow:
  name: CI
  branches: [main]
node:
  versions: [14.x, 16.x]
"""
    )

    # Act
    config = parse_config(config_file)

    # Assert
    assert config.workflow.name == "CI"
    assert config.workflow.file == "test.yml"
    assert config.workflow.branches == ["main"]
    assert config.node.versions == ["14.x", "16.x"]
    assert config.node.default == "14.x"
    assert [db.key for db in config.databases] == ["pg", "mysql"]


@pytest.mark.unit
def test_parse_databases(tmp_path):
    """Test a custom database list replaces the defaults."""
    config_file = tmp_path / "workflowkit.yaml"
    config_file.write_text(
        """
version: 1
databases:
  mysql:
    image: mysql
    versions: [8.0]
    image_env: MYSQL_TEST_IMAGE
    command: yarn test:mysql
    env:
      MYSQL_DEBUG: true
"""
    )

    config = parse_config(config_file)

    assert len(config.databases) == 1
    db = config.databases[0]
    assert db.key == "mysql"
    # Unquoted YAML numbers become strings
    assert db.versions == ["8.0"]
    assert db.env == {"MYSQL_DEBUG": "true"}


@pytest.mark.unit
def test_explicit_config_path_must_exist(tmp_path):
    """Test --config pointing at a missing file fails."""
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "missing.yaml")


@pytest.mark.unit
@pytest.mark.parametrize(
    "content,message",
    [
        ("", "empty"),
        ("version: [1\n", "Invalid YAML"),
        ("- a\n- b\n", "must be a mapping"),
        ("version: 2\n", "Unsupported version"),
        ("set_output_style: env\n", "set_output_style"),
        ("builtin_pipeline: maybe\n", "builtin_pipeline"),
        ("node: [14.x]\n", "node must be a mapping"),
        ("node:\n  versions: 14.x\n", "node.versions must be a list"),
        ("databases:\n  pg:\n    image: postgres\n", "missing required field"),
        ("website:\n  enabled: yes please\n", "website.enabled"),
    ],
)
def test_invalid_configs(tmp_path, content, message):
    """Test malformed configuration files raise ConfigError."""
    config_file = tmp_path / "workflowkit.yaml"
    config_file.write_text(content)

    with pytest.raises(ConfigError, match=message):
        parse_config(config_file)


@pytest.mark.unit
def test_config_to_data_round_trips():
    """Test the dict form written by init parses back to the same config."""
    config = PipelineConfig()
    data = yaml.safe_load(yaml.safe_dump(config_to_data(config), sort_keys=False))
    assert parse_config_data(data) == config
