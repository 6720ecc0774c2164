"""
The monorepo "Test" workflow.

Job graph (arrows point at dependencies):

    build ◄── publish_website
          ◄── test_node            (node)
          ◄── test_<db>            (node × db image tag), one per database
          ◄── lint
    prettier                       (independent)

``build`` compiles every package once and hands the output to its dependents
as an artifact, so the test matrices never rebuild.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from workflowkit.builder import JobContext, JobRef, Workflow, WorkflowContext, create_workflow
from workflowkit.config.parser import DatabaseConfig, PipelineConfig
from workflowkit.expression import ExpressionLike, eq, github, neq, secrets
from workflowkit.pipelines.steps import build_cache, load_output, save_output, setup
from workflowkit.pipelines.workspace import discover_packages

logger = logging.getLogger(__name__)

SOURCE = "workflowkit.pipelines.monorepo"


class MonorepoPipeline:
    """Builds the Test workflow for one project from its configuration."""

    def __init__(self, config: PipelineConfig, package_names: List[str]):
        self.config = config
        self.package_names = list(package_names)

    @classmethod
    def for_project(cls, project_root: Path, config: Optional[PipelineConfig] = None):
        """Read the project's package listing and create the pipeline."""
        config = config or PipelineConfig()
        packages = discover_packages(Path(project_root) / config.packages_dir)
        logger.info(f"Found {len(packages)} buildable package(s)")
        return cls(config, packages)

    def setup(self, node_version: Optional[ExpressionLike] = None):
        """Setup fragment bound to this project's Node.js and cache settings."""
        return setup(
            node_version if node_version is not None else self.config.node.default,
            registry_url=self.config.node.registry_url,
            cache_suffix=self.config.cache.install_suffix,
            set_output_style=self.config.set_output_style,
            packages_dir=self.config.packages_dir,
        )

    def build(self) -> Workflow:
        return create_workflow(self.define)

    def define(self, ctx: WorkflowContext) -> None:
        cfg = self.config
        ctx.set_workflow_name(cfg.workflow.name)
        ctx.add_trigger("push", branches=list(cfg.workflow.branches))
        ctx.add_trigger("pull_request", branches=list(cfg.workflow.branches))

        build = ctx.add_job("build", self.build_job)

        if cfg.website.enabled:
            ctx.add_job("publish_website", lambda job: self.publish_website_job(job, build))

        ctx.add_job("test_node", lambda job: self.node_test_job(job, build))
        for db in cfg.databases:
            ctx.add_job(f"test_{db.key}", lambda job, db=db: self.database_test_job(job, build, db))

        ctx.add_job("prettier", self.prettier_job)
        ctx.add_job("lint", lambda job: self.lint_job(job, build))

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def build_job(self, job: JobContext) -> Dict[str, str]:
        job.add(self.setup())
        cfg = self.config
        job.add(build_cache(self.package_names, packages_dir=cfg.packages_dir, prefix=cfg.cache.build_prefix))
        job.run(self.config.build.command)
        output = job.add(save_output(self.config.build.artifact, self.config.build.artifact_paths))
        return {"output": output}

    def _prepare(self, job: JobContext, build: JobRef, node_version: Optional[ExpressionLike] = None) -> None:
        """Depend on the build job, set up, then fetch its output."""
        build_output = job.add_dependencies(build).output
        job.add(self.setup(node_version))
        job.add(load_output(build_output, self.config.build.load_path))

    def publish_website_job(self, job: JobContext, build: JobRef) -> None:
        website = self.config.website
        self._prepare(job, build)
        job.run(f"yarn workspace {website.workspace} build")

        deploy_env = {
            "NETLIFY_SITE_ID": secrets[website.site_id_secret],
            "NETLIFY_AUTH_TOKEN": secrets[website.auth_token_secret],
        }
        job.when(
            eq(github.event_name, "push"),
            lambda ctx: ctx.run(f"netlify deploy --prod --dir={website.deploy_dir}", env=deploy_env),
        )
        job.when(
            neq(github.event_name, "push"),
            lambda ctx: ctx.run(f"netlify deploy --dir={website.deploy_dir}", env=deploy_env),
        )

    def node_test_job(self, job: JobContext, build: JobRef) -> None:
        matrix = job.set_build_matrix({"node": list(self.config.node.versions)}, fail_fast=False)
        self._prepare(job, build, matrix.node)
        job.run(self.config.checks.node_tests)

    def database_test_job(self, job: JobContext, build: JobRef, db: DatabaseConfig) -> None:
        matrix = job.set_build_matrix(
            {"node": list(self.config.node.versions), db.key: list(db.versions)},
            fail_fast=False,
        )
        self._prepare(job, build, matrix.node)

        env = {db.image_env: f"{db.image}:{matrix[db.key]}"}
        env.update(db.env)
        job.run(db.command, env=env)

    def prettier_job(self, job: JobContext) -> None:
        job.add(self.setup())
        job.run(self.config.checks.format)

    def lint_job(self, job: JobContext, build: JobRef) -> None:
        self._prepare(job, build)
        job.run(self.config.checks.lint)


def build_test_workflow(project_root: Path, config: Optional[PipelineConfig] = None) -> Workflow:
    """
    Build the Test workflow for the monorepo at ``project_root``.

    Args:
        project_root: Repository root (containing the packages directory)
        config: Pipeline configuration (defaults when None)

    Returns:
        The Workflow tree

    Raises:
        WorkspaceError: If the packages directory is missing
    """
    return MonorepoPipeline.for_project(project_root, config).build()
