"""
Centralized exception hierarchy for WorkflowKit.

This module defines all custom exceptions used across the codebase
to provide clear exception semantics at the CLI boundary.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class WorkflowKitError(Exception):
    """Base exception for all WorkflowKit errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(WorkflowKitError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Expression Exceptions
# ============================================================================


class ExpressionError(WorkflowKitError):
    """Raised when an expression cannot be built from the given operands."""

    pass


# ============================================================================
# Workflow Definition Exceptions
# ============================================================================


class WorkflowDefinitionError(WorkflowKitError):
    """Raised when a workflow definition callback builds an invalid tree."""

    pass


class DuplicateJobError(WorkflowDefinitionError):
    """Raised when two jobs in one workflow share an id."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Duplicate job id: {job_id}")


class UnknownDependencyError(WorkflowDefinitionError):
    """Raised when a job depends on a job outside of its workflow."""

    def __init__(self, job_id: str, dependency: str):
        self.job_id = job_id
        self.dependency = dependency
        super().__init__(
            f"Job '{job_id}' depends on '{dependency}', "
            f"which is not defined earlier in the same workflow"
        )


class WorkflowLoadError(WorkflowKitError):
    """Raised when a workflow source file cannot be loaded."""

    pass


# ============================================================================
# Workspace / Output Exceptions
# ============================================================================


class WorkspaceError(WorkflowKitError):
    """Raised when the monorepo layout cannot be read."""

    pass


class RenderError(WorkflowKitError):
    """Raised when a workflow tree cannot be serialized."""

    pass


class LockTimeout(WorkflowKitError):
    """Raised when the project lock cannot be acquired within timeout."""

    pass
