"""
CI integration for WorkflowKit.

This module writes the rendered workflows into the project and verifies that
committed workflow files are up to date.
"""

from .generator import GeneratedWorkflow, StaleWorkflow, WorkflowGenerator

__all__ = ["GeneratedWorkflow", "StaleWorkflow", "WorkflowGenerator"]
