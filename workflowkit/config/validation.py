"""Configuration validation module for WorkflowKit.

Parsing (``parser``) guarantees the shape of the configuration; this module
checks semantics that would otherwise surface only as CI provider validation
errors or as a failing run: empty matrix axes, duplicated versions, names that
are not valid identifiers, a missing packages directory.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from workflowkit.config.parser import PipelineConfig

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
ENV_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class ValidationIssue:
    """A single validation issue."""

    level: str  # 'error', 'warning', 'info'
    field: str  # Configuration field path
    message: str  # Human-readable message
    suggestion: str  # How to fix it


@dataclass
class ValidationResult:
    """Result of configuration validation."""

    valid: bool
    issues: List[ValidationIssue]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]


class ConfigValidator:
    """Validates WorkflowKit configuration."""

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize validator.

        Args:
            project_root: Project root; enables checks against the file system
        """
        self.project_root = Path(project_root) if project_root is not None else None
        self.issues: List[ValidationIssue] = []

    def validate(self, config: PipelineConfig) -> ValidationResult:
        """
        Perform comprehensive validation.

        Args:
            config: Parsed configuration to validate

        Returns:
            ValidationResult with any issues found
        """
        self.issues = []

        self._validate_workflow(config)
        self._validate_node(config)
        self._validate_databases(config)
        self._validate_build(config)
        self._validate_website(config)
        self._validate_workspace(config)

        has_errors = any(issue.level == "error" for issue in self.issues)
        return ValidationResult(valid=not has_errors, issues=self.issues)

    def _validate_workflow(self, config: PipelineConfig):
        if not config.workflow.file.endswith((".yml", ".yaml")):
            self._add_error(
                "workflow.file",
                f"Workflow file must be a YAML file: {config.workflow.file}",
                "Use a name ending in .yml, e.g. test.yml",
            )
        if "/" in config.workflow.file or "\\" in config.workflow.file:
            self._add_error(
                "workflow.file",
                "Workflow file must be a bare file name",
                "Set output_dir to change where workflows are written",
            )
        if not config.workflow.branches:
            self._add_error(
                "workflow.branches",
                "No branches configured; the workflow would never run",
                "List at least one branch, e.g. [master]",
            )

    def _validate_node(self, config: PipelineConfig):
        self._validate_axis("node.versions", config.node.versions)
        if config.node.versions and config.node.default not in config.node.versions:
            self._add_warning(
                "node.default",
                f"Default Node.js version {config.node.default} is not in the test matrix",
                f"Add {config.node.default} to node.versions or pick one of {config.node.versions}",
            )

    def _validate_databases(self, config: PipelineConfig):
        for db in config.databases:
            where = f"databases.{db.key}"
            if not IDENTIFIER.match(db.key):
                self._add_error(
                    where,
                    f"'{db.key}' is not a valid matrix axis / job id",
                    "Use letters, digits, '_' and '-' only, starting with a letter",
                )
            if db.key == "node":
                self._add_error(
                    where,
                    "Database key 'node' collides with the Node.js matrix axis",
                    "Rename the database entry, e.g. to the engine name",
                )
            self._validate_axis(f"{where}.versions", db.versions)
            if not ENV_NAME.match(db.image_env):
                self._add_error(
                    f"{where}.image_env",
                    f"Invalid environment variable name: {db.image_env!r}",
                    "Use letters, digits and '_' only",
                )
            for name in db.env:
                if not ENV_NAME.match(name):
                    self._add_error(
                        f"{where}.env",
                        f"Invalid environment variable name: {name!r}",
                        "Use letters, digits and '_' only",
                    )

    def _validate_build(self, config: PipelineConfig):
        if not config.build.artifact_paths:
            self._add_error(
                "build.artifact_paths",
                "Build artifact has no paths; dependent jobs would receive nothing",
                "List the build output directories, e.g. packages/*/lib",
            )
        if not config.build.artifact:
            self._add_error(
                "build.artifact",
                "Build artifact name is empty",
                "Set build.artifact, e.g. build",
            )
        if config.build.load_path.rstrip("/") != config.packages_dir.rstrip("/"):
            self._add_warning(
                "build.load_path",
                f"Build output is loaded into {config.build.load_path}, not {config.packages_dir}/",
                "Point build.load_path and build.artifact_paths at packages_dir",
            )

    def _validate_website(self, config: PipelineConfig):
        if not config.website.enabled:
            return
        for field_name in ("site_id_secret", "auth_token_secret"):
            value = getattr(config.website, field_name)
            if not ENV_NAME.match(value):
                self._add_error(
                    f"website.{field_name}",
                    f"Invalid secret name: {value!r}",
                    "Secret names use letters, digits and '_' only",
                )
        if config.website.site_id_secret == config.website.auth_token_secret:
            self._add_warning(
                "website",
                "Site id and auth token read the same secret",
                "Point site_id_secret and auth_token_secret at different secrets",
            )

    def _validate_workspace(self, config: PipelineConfig):
        if self.project_root is None:
            return
        packages_dir = self.project_root / config.packages_dir
        if not packages_dir.is_dir():
            self._add_warning(
                "packages_dir",
                f"Packages directory not found: {packages_dir}",
                "Generation of the build cache step will fail until it exists",
            )

    def _validate_axis(self, field: str, values: Sequence[str]):
        if not values:
            self._add_error(
                field,
                "Matrix axis is empty; the job would never run",
                "List at least one version",
            )
            return
        duplicates = sorted({v for v in values if list(values).count(v) > 1})
        if duplicates:
            self._add_error(
                field,
                f"Duplicate versions: {', '.join(duplicates)}",
                "Remove the repeated entries",
            )

    def _add_error(self, field: str, message: str, suggestion: str):
        self.issues.append(ValidationIssue("error", field, message, suggestion))

    def _add_warning(self, field: str, message: str, suggestion: str):
        self.issues.append(ValidationIssue("warning", field, message, suggestion))


def format_validation_results(result: ValidationResult) -> str:
    """
    Format validation results for display.

    Args:
        result: Validation result to format

    Returns:
        Formatted string for display
    """
    if result.valid and not result.issues:
        return "✓ Configuration is valid"

    lines = []
    for title, level in (("Errors:", "error"), ("Warnings:", "warning"), ("Info:", "info")):
        issues = [i for i in result.issues if i.level == level]
        if not issues:
            continue
        lines.append(title)
        for issue in issues:
            lines.append(f"  {issue.field}: {issue.message}")
            lines.append(f"    → {issue.suggestion}")
        lines.append("")

    return "\n".join(lines).rstrip()
