"""YAML configuration parser for WorkflowKit.

This module provides parsing for workflowkit.yaml configuration files. Every
field has a default, so a project without a configuration file gets the
standard monorepo pipeline.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from workflowkit.core.exceptions import ConfigError

CONFIG_FILE_NAME = "workflowkit.yaml"
SUPPORTED_VERSION = 1
SET_OUTPUT_STYLES = ["legacy", "file"]


@dataclass
class WorkflowSettings:
    """Name, output file and trigger branches of the generated workflow."""

    name: str = "Test"
    file: str = "test.yml"
    branches: List[str] = field(default_factory=lambda: ["master"])


@dataclass
class NodeConfig:
    """Node.js versions used for setup and the runtime test matrix."""

    default: str = "14.x"
    versions: List[str] = field(default_factory=lambda: ["12.x", "14.x"])
    registry_url: str = "https://registry.npmjs.org"


@dataclass
class CacheConfig:
    """Cache key tuning; bump a value to invalidate existing caches."""

    install_suffix: str = "2"
    build_prefix: str = "v2-build-output-"


@dataclass
class BuildConfig:
    """The build job and the artifact it hands to dependent jobs."""

    command: str = "yarn build"
    artifact: str = "build"
    artifact_paths: List[str] = field(
        default_factory=lambda: ["packages/*/lib", "packages/*/.last_build"]
    )
    load_path: str = "packages/"


@dataclass
class DatabaseConfig:
    """A database test job: one instance per (node version, image tag) pair."""

    key: str
    image: str
    versions: List[str]
    image_env: str
    command: str
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class WebsiteConfig:
    """Website build and Netlify deployment."""

    enabled: bool = True
    workspace: str = "@databases/website"
    deploy_dir: str = "packages/website/out"
    site_id_secret: str = "NETLIFY_SITE_ID"
    auth_token_secret: str = "NETLIFY_AUTH_TOKEN"


@dataclass
class ChecksConfig:
    """Commands of the jobs that need no matrix beyond the runtime."""

    node_tests: str = "yarn test:node"
    format: str = "yarn prettier:check"
    lint: str = "yarn tslint"


def default_databases() -> List[DatabaseConfig]:
    return [
        DatabaseConfig(
            key="pg",
            image="postgres",
            # 9.6.19-alpine is unsupported by pg-migrations
            versions=["10.14-alpine", "11.9-alpine", "12.4-alpine", "13.0-alpine"],
            image_env="PG_TEST_IMAGE",
            command="yarn test:pg",
            env={"PG_TEST_DEBUG": "TRUE"},
        ),
        DatabaseConfig(
            key="mysql",
            image="mysql",
            versions=["5.6.51", "5.7.33", "8.0.23"],
            image_env="MYSQL_TEST_IMAGE",
            command="yarn test:mysql",
        ),
    ]


@dataclass
class PipelineConfig:
    """Complete WorkflowKit configuration."""

    version: int = SUPPORTED_VERSION
    workflow: WorkflowSettings = field(default_factory=WorkflowSettings)
    packages_dir: str = "packages"
    set_output_style: str = "legacy"
    node: NodeConfig = field(default_factory=NodeConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    databases: List[DatabaseConfig] = field(default_factory=default_databases)
    website: WebsiteConfig = field(default_factory=WebsiteConfig)
    checks: ChecksConfig = field(default_factory=ChecksConfig)
    builtin_pipeline: bool = True
    workflows_src: str = ".github/workflows-src"
    output_dir: str = ".github/workflows"


def load_config(project_root: Path, config_path: Optional[Path] = None) -> PipelineConfig:
    """
    Load the project configuration, falling back to defaults.

    Args:
        project_root: Project root directory
        config_path: Explicit configuration file (must exist when given)

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the configuration is invalid
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    default_path = Path(project_root) / CONFIG_FILE_NAME
    if not default_path.exists():
        return PipelineConfig()
    return parse_config(default_path)


def parse_config(config_path: Path) -> PipelineConfig:
    """
    Parse workflowkit.yaml configuration file.

    Args:
        config_path: Path to workflowkit.yaml

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    return parse_config_data(data)


def parse_config_data(data: Any) -> PipelineConfig:
    """Parse an already-loaded configuration mapping."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    version = data.get("version", SUPPORTED_VERSION)
    if version != SUPPORTED_VERSION:
        raise ConfigError(f"Unsupported version: {version} (expected {SUPPORTED_VERSION})")

    set_output_style = data.get("set_output_style", "legacy")
    if set_output_style not in SET_OUTPUT_STYLES:
        raise ConfigError(
            f"Invalid set_output_style: {set_output_style} (expected one of {SET_OUTPUT_STYLES})"
        )

    builtin_pipeline = data.get("builtin_pipeline", True)
    if not isinstance(builtin_pipeline, bool):
        raise ConfigError("builtin_pipeline must be true or false")

    defaults = PipelineConfig()
    return PipelineConfig(
        version=version,
        workflow=_parse_workflow(_section(data, "workflow")),
        packages_dir=_string(data, "packages_dir", defaults.packages_dir),
        set_output_style=set_output_style,
        node=_parse_node(_section(data, "node")),
        cache=_parse_cache(_section(data, "cache")),
        build=_parse_build(_section(data, "build")),
        databases=_parse_databases(data.get("databases")),
        website=_parse_website(_section(data, "website")),
        checks=_parse_checks(_section(data, "checks")),
        builtin_pipeline=builtin_pipeline,
        workflows_src=_string(data, "workflows_src", defaults.workflows_src),
        output_dir=_string(data, "output_dir", defaults.output_dir),
    )


# ============================================================================
# Field helpers
# ============================================================================


def _section(data: dict, name: str) -> dict:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"{name} must be a mapping")
    return section


def _string(data: dict, key: str, default: str, where: str = "") -> str:
    value = data.get(key, default)
    # YAML reads unquoted 8.0 or 14 as numbers; versions are strings
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise ConfigError(f"{where}{key} must be a string")
    return value


def _string_list(data: dict, key: str, default: List[str], where: str = "") -> List[str]:
    value = data.get(key, default)
    if not isinstance(value, list):
        raise ConfigError(f"{where}{key} must be a list")
    result = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            raise ConfigError(f"{where}{key} entries must be strings, got {item!r}")
        result.append(str(item))
    return result


def _string_map(data: dict, key: str, where: str = "") -> Dict[str, str]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where}{key} must be a mapping")
    result = {}
    for k, v in value.items():
        if isinstance(v, bool):
            v = "true" if v else "false"
        result[str(k)] = str(v)
    return result


# ============================================================================
# Section parsers
# ============================================================================


def _parse_workflow(data: dict) -> WorkflowSettings:
    d = WorkflowSettings()
    return WorkflowSettings(
        name=_string(data, "name", d.name, "workflow."),
        file=_string(data, "file", d.file, "workflow."),
        branches=_string_list(data, "branches", d.branches, "workflow."),
    )


def _parse_node(data: dict) -> NodeConfig:
    d = NodeConfig()
    return NodeConfig(
        default=_string(data, "default", d.default, "node."),
        versions=_string_list(data, "versions", d.versions, "node."),
        registry_url=_string(data, "registry_url", d.registry_url, "node."),
    )


def _parse_cache(data: dict) -> CacheConfig:
    d = CacheConfig()
    return CacheConfig(
        install_suffix=_string(data, "install_suffix", d.install_suffix, "cache."),
        build_prefix=_string(data, "build_prefix", d.build_prefix, "cache."),
    )


def _parse_build(data: dict) -> BuildConfig:
    d = BuildConfig()
    return BuildConfig(
        command=_string(data, "command", d.command, "build."),
        artifact=_string(data, "artifact", d.artifact, "build."),
        artifact_paths=_string_list(data, "artifact_paths", d.artifact_paths, "build."),
        load_path=_string(data, "load_path", d.load_path, "build."),
    )


def _parse_databases(data: Any) -> List[DatabaseConfig]:
    if data is None:
        return default_databases()
    if not isinstance(data, dict):
        raise ConfigError("databases must be a mapping of matrix axis name to settings")

    databases = []
    for key, entry in data.items():
        where = f"databases.{key}."
        if not isinstance(entry, dict):
            raise ConfigError(f"databases.{key} must be a mapping")
        for required in ("image", "versions", "image_env", "command"):
            if required not in entry:
                raise ConfigError(f"databases.{key} missing required field: {required}")
        databases.append(
            DatabaseConfig(
                key=str(key),
                image=_string(entry, "image", "", where),
                versions=_string_list(entry, "versions", [], where),
                image_env=_string(entry, "image_env", "", where),
                command=_string(entry, "command", "", where),
                env=_string_map(entry, "env", where),
            )
        )
    return databases


def _parse_website(data: dict) -> WebsiteConfig:
    d = WebsiteConfig()
    enabled = data.get("enabled", d.enabled)
    if not isinstance(enabled, bool):
        raise ConfigError("website.enabled must be true or false")
    return WebsiteConfig(
        enabled=enabled,
        workspace=_string(data, "workspace", d.workspace, "website."),
        deploy_dir=_string(data, "deploy_dir", d.deploy_dir, "website."),
        site_id_secret=_string(data, "site_id_secret", d.site_id_secret, "website."),
        auth_token_secret=_string(data, "auth_token_secret", d.auth_token_secret, "website."),
    )


def _parse_checks(data: dict) -> ChecksConfig:
    d = ChecksConfig()
    return ChecksConfig(
        node_tests=_string(data, "node_tests", d.node_tests, "checks."),
        format=_string(data, "format", d.format, "checks."),
        lint=_string(data, "lint", d.lint, "checks."),
    )


def config_to_data(config: PipelineConfig) -> Dict[str, Any]:
    """Inverse of :func:`parse_config_data`, used by ``wfgen init``."""
    return {
        "version": config.version,
        "workflow": {
            "name": config.workflow.name,
            "file": config.workflow.file,
            "branches": list(config.workflow.branches),
        },
        "packages_dir": config.packages_dir,
        "set_output_style": config.set_output_style,
        "node": {
            "default": config.node.default,
            "versions": list(config.node.versions),
            "registry_url": config.node.registry_url,
        },
        "cache": {
            "install_suffix": config.cache.install_suffix,
            "build_prefix": config.cache.build_prefix,
        },
        "build": {
            "command": config.build.command,
            "artifact": config.build.artifact,
            "artifact_paths": list(config.build.artifact_paths),
            "load_path": config.build.load_path,
        },
        "databases": {
            db.key: {
                "image": db.image,
                "versions": list(db.versions),
                "image_env": db.image_env,
                "command": db.command,
                **({"env": dict(db.env)} if db.env else {}),
            }
            for db in config.databases
        },
        "website": {
            "enabled": config.website.enabled,
            "workspace": config.website.workspace,
            "deploy_dir": config.website.deploy_dir,
            "site_id_secret": config.website.site_id_secret,
            "auth_token_secret": config.website.auth_token_secret,
        },
        "checks": {
            "node_tests": config.checks.node_tests,
            "format": config.checks.format,
            "lint": config.checks.lint,
        },
        "builtin_pipeline": config.builtin_pipeline,
        "workflows_src": config.workflows_src,
        "output_dir": config.output_dir,
    }
