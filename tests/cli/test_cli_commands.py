"""
Tests for the init, generate, check and validate commands.
"""

from unittest.mock import Mock

import yaml

from workflowkit.cli.commands import check, generate, init, validate
from workflowkit.config.parser import PipelineConfig, parse_config


def create_mock_args(project_root, **kwargs):
    """Create mock args with the attributes every command reads."""
    defaults = {
        "project_root": project_root,
        "config": None,
        "verbose": False,
        "quiet": False,
        "force": False,
        "dry_run": False,
        "only": None,
    }
    defaults.update(kwargs)
    return Mock(**defaults)


class TestInitCommand:
    """Test wfgen init."""

    def test_writes_default_config(self, tmp_path, capsys):
        """Test init writes a parsable workflowkit.yaml."""
        result = init.run(create_mock_args(tmp_path))

        assert result == 0
        config_file = tmp_path / "workflowkit.yaml"
        assert parse_config(config_file) == PipelineConfig()
        assert "WorkflowKit initialized" in capsys.readouterr().out

    def test_refuses_to_overwrite(self, tmp_path, capsys):
        """Test an existing config is kept without --force."""
        (tmp_path / "workflowkit.yaml").write_text("version: 1\n")

        result = init.run(create_mock_args(tmp_path))

        assert result == 1
        assert (tmp_path / "workflowkit.yaml").read_text() == "version: 1\n"
        assert "already initialized" in capsys.readouterr().err

    def test_force_overwrites(self, tmp_path):
        """Test --force replaces the config."""
        (tmp_path / "workflowkit.yaml").write_text("version: 1\n")

        assert init.run(create_mock_args(tmp_path, force=True)) == 0
        assert "databases" in yaml.safe_load((tmp_path / "workflowkit.yaml").read_text())

    def test_custom_config_path(self, tmp_path):
        """Test --config selects the written file."""
        target = tmp_path / "ci" / "workflows.yaml"
        assert init.run(create_mock_args(tmp_path, config=target)) == 0
        assert target.exists()

    def test_missing_project_root(self, tmp_path):
        """Test a non-existent project root fails."""
        assert init.run(create_mock_args(tmp_path / "missing")) == 1


class TestGenerateCommand:
    """Test wfgen generate."""

    def test_generate(self, monorepo_project, capsys):
        """Test workflows are written and listed."""
        result = generate.run(create_mock_args(monorepo_project))

        assert result == 0
        assert (monorepo_project / ".github" / "workflows" / "test.yml").exists()
        assert "Wrote .github/workflows/test.yml" in capsys.readouterr().out

    def test_dry_run(self, monorepo_project, capsys):
        """Test --dry-run prints without writing."""
        result = generate.run(create_mock_args(monorepo_project, dry_run=True))

        assert result == 0
        assert not (monorepo_project / ".github" / "workflows").exists()
        out = capsys.readouterr().out
        assert "--- .github/workflows/test.yml" in out
        assert "name: Test" in out

    def test_only(self, monorepo_project_with_sources):
        """Test --only writes the named workflow alone."""
        result = generate.run(create_mock_args(monorepo_project_with_sources, only=["release"]))

        assert result == 0
        workflows = monorepo_project_with_sources / ".github" / "workflows"
        assert sorted(p.name for p in workflows.iterdir()) == ["release.yml"]

    def test_missing_packages(self, tmp_path, capsys):
        """Test errors are reported with exit code 1."""
        result = generate.run(create_mock_args(tmp_path))

        assert result == 1
        err = capsys.readouterr().err
        assert "ERROR: Failed to generate workflows" in err
        assert "Packages directory not found" in err

    def test_invalid_config(self, monorepo_project, capsys):
        """Test configuration errors are reported."""
        (monorepo_project / "workflowkit.yaml").write_text("version: 7\n")

        assert generate.run(create_mock_args(monorepo_project)) == 1
        assert "Unsupported version" in capsys.readouterr().err


class TestCheckCommand:
    """Test wfgen check."""

    def test_missing_files_fail(self, monorepo_project, capsys):
        """Test check fails before generate."""
        assert check.run(create_mock_args(monorepo_project)) == 1
        assert ".github/workflows/test.yml is missing" in capsys.readouterr().err

    def test_up_to_date(self, monorepo_project, capsys):
        """Test check passes after generate."""
        generate.run(create_mock_args(monorepo_project))
        capsys.readouterr()

        assert check.run(create_mock_args(monorepo_project)) == 0
        assert "up to date" in capsys.readouterr().out


class TestValidateCommand:
    """Test wfgen validate."""

    def test_valid(self, monorepo_project_with_config, capsys):
        """Test a valid configuration exits 0."""
        assert validate.run(create_mock_args(monorepo_project_with_config)) == 0
        assert "Configuration is valid" in capsys.readouterr().out

    def test_errors_exit_one(self, monorepo_project, capsys):
        """Test semantic errors give exit code 1 and a report."""
        (monorepo_project / "workflowkit.yaml").write_text(
            "version: 1\nworkflow:\n  branches: []\n"
        )

        assert validate.run(create_mock_args(monorepo_project)) == 1
        assert "workflow.branches" in capsys.readouterr().out

    def test_unparsable_config(self, monorepo_project, capsys):
        """Test parse errors are reported as errors."""
        (monorepo_project / "workflowkit.yaml").write_text("version: [1\n")

        assert validate.run(create_mock_args(monorepo_project)) == 1
        assert "ERROR: Invalid configuration" in capsys.readouterr().err

    def test_defaults_without_config_file(self, monorepo_project, capsys):
        """Test a project without workflowkit.yaml validates the defaults."""
        assert validate.run(create_mock_args(monorepo_project)) == 0
        captured = capsys.readouterr()
        assert "No workflowkit.yaml found" in captured.err
        assert "Configuration is valid" in captured.out
