"""Test fixtures for WorkflowKit tests.

- projects: Yarn-workspace monorepo layouts (packages, config, workflow sources)

Import fixtures in your tests using:
    from tests.fixtures.projects import monorepo_project
"""

__all__ = [
    "projects",
]
