"""
Core utilities shared across WorkflowKit: exceptions, file writes and locking.
"""

from workflowkit.core.exceptions import (
    WorkflowKitError,
    ConfigError,
    ExpressionError,
    WorkflowDefinitionError,
    DuplicateJobError,
    UnknownDependencyError,
    WorkflowLoadError,
    WorkspaceError,
    RenderError,
    LockTimeout,
)

__all__ = [
    "WorkflowKitError",
    "ConfigError",
    "ExpressionError",
    "WorkflowDefinitionError",
    "DuplicateJobError",
    "UnknownDependencyError",
    "WorkflowLoadError",
    "WorkspaceError",
    "RenderError",
    "LockTimeout",
]
