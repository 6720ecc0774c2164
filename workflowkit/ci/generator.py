"""
Workflow file generation for WorkflowKit.

This module turns the configured pipeline and every workflow source into the
files under ``.github/workflows``, and checks that committed files match what
would be generated.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from workflowkit.builder.loader import discover_workflow_sources, load_workflow_file
from workflowkit.config.parser import PipelineConfig
from workflowkit.core.exceptions import WorkflowLoadError
from workflowkit.core.filesystem import atomic_write, read_text_if_exists
from workflowkit.core.locking import project_lock
from workflowkit.pipelines.monorepo import SOURCE as MONOREPO_SOURCE
from workflowkit.pipelines.monorepo import build_test_workflow
from workflowkit.render.yaml_renderer import render_workflow

logger = logging.getLogger(__name__)


@dataclass
class GeneratedWorkflow:
    """A rendered workflow and where it belongs."""

    name: str  # Output file stem, e.g. "test"
    path: Path
    source: str
    content: str


@dataclass
class StaleWorkflow:
    """A generated file that is missing or differs from its source."""

    path: Path
    reason: str  # 'missing', 'outdated'


class WorkflowGenerator:
    """Generate and check the GitHub Actions workflow files of a project."""

    def __init__(self, project_root: Path, config: Optional[PipelineConfig] = None):
        """
        Initialize the workflow generator.

        Args:
            project_root: Root directory of the project
            config: Pipeline configuration (defaults when None)
        """
        self.project_root = Path(project_root)
        self.config = config or PipelineConfig()
        logger.debug(f"Initialized WorkflowGenerator for {project_root}")

    @property
    def output_dir(self) -> Path:
        return self.project_root / self.config.output_dir

    @property
    def source_dir(self) -> Path:
        return self.project_root / self.config.workflows_src

    def _relative(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.project_root.resolve()).as_posix()
        except ValueError:
            return str(path)

    def plan(self, only: Optional[List[str]] = None) -> List[GeneratedWorkflow]:
        """
        Render every workflow without writing anything.

        Args:
            only: Restrict to these output names (file stems)

        Returns:
            Rendered workflows, built-in pipeline first, then sources by name

        Raises:
            WorkflowLoadError: If two workflows render to the same file
        """
        planned: Dict[str, GeneratedWorkflow] = {}

        def wanted(name: str) -> bool:
            return not only or name in only

        if self.config.builtin_pipeline:
            file_name = self.config.workflow.file
            name = Path(file_name).stem
            if wanted(name):
                logger.debug(f"Rendering built-in pipeline as {file_name}")
                workflow = build_test_workflow(self.project_root, self.config)
                planned[name] = GeneratedWorkflow(
                    name=name,
                    path=self.output_dir / file_name,
                    source=MONOREPO_SOURCE,
                    content=render_workflow(workflow, source=MONOREPO_SOURCE),
                )

        for source_path in discover_workflow_sources(self.source_dir):
            name = source_path.stem
            if not wanted(name):
                continue
            if name in planned:
                raise WorkflowLoadError(
                    f"{self._relative(source_path)} and {planned[name].source} "
                    f"both render to {name}.yml"
                )
            logger.debug(f"Rendering {source_path.name}")
            source = self._relative(source_path)
            workflow = load_workflow_file(source_path)
            planned[name] = GeneratedWorkflow(
                name=name,
                path=self.output_dir / f"{name}.yml",
                source=source,
                content=render_workflow(workflow, source=source),
            )

        if only:
            unknown = sorted(set(only) - set(planned))
            if unknown:
                raise WorkflowLoadError(f"Unknown workflow(s): {', '.join(unknown)}")

        return list(planned.values())

    def generate(self, only: Optional[List[str]] = None, lock_timeout: float = 10) -> Dict[str, Path]:
        """
        Render and write workflow files.

        Args:
            only: Restrict to these output names (file stems)
            lock_timeout: Seconds to wait for another generator to finish

        Returns:
            Dictionary mapping workflow name to written file path
        """
        logger.info("Generating GitHub Actions workflows")
        planned = self.plan(only)

        results = {}
        with project_lock(self.project_root, timeout=lock_timeout):
            for item in planned:
                atomic_write(item.path, item.content)
                logger.info(f"Workflow {item.name} written to {self._relative(item.path)}")
                results[item.name] = item.path

        logger.info(f"Generated {len(results)} workflow file(s)")
        return results

    def check(self, only: Optional[List[str]] = None) -> List[StaleWorkflow]:
        """
        Compare generated output with the files on disk.

        Returns:
            Files that are missing or outdated (empty when up to date)
        """
        stale = []
        for item in self.plan(only):
            current = read_text_if_exists(item.path)
            if current is None:
                stale.append(StaleWorkflow(path=item.path, reason="missing"))
            elif current != item.content:
                stale.append(StaleWorkflow(path=item.path, reason="outdated"))
        return stale
