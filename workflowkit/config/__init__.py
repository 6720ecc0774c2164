"""Configuration module for WorkflowKit.

This module provides YAML configuration parsing and validation for
workflowkit.yaml.
"""

from workflowkit.config.parser import (
    CONFIG_FILE_NAME,
    WorkflowSettings,
    NodeConfig,
    CacheConfig,
    BuildConfig,
    DatabaseConfig,
    WebsiteConfig,
    ChecksConfig,
    PipelineConfig,
    load_config,
    parse_config,
    parse_config_data,
    config_to_data,
)
from workflowkit.config.validation import (
    ValidationIssue,
    ValidationResult,
    ConfigValidator,
    format_validation_results,
)
from workflowkit.core.exceptions import ConfigError

__all__ = [
    "CONFIG_FILE_NAME",
    "WorkflowSettings",
    "NodeConfig",
    "CacheConfig",
    "BuildConfig",
    "DatabaseConfig",
    "WebsiteConfig",
    "ChecksConfig",
    "PipelineConfig",
    "ConfigError",
    "load_config",
    "parse_config",
    "parse_config_data",
    "config_to_data",
    "ValidationIssue",
    "ValidationResult",
    "ConfigValidator",
    "format_validation_results",
]
