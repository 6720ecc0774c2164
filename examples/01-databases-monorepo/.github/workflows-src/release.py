"""Publish every package to npm when a release is created."""

import sys
from pathlib import Path

from workflowkit import create_workflow
from workflowkit.expression import github, secrets
from workflowkit.pipelines import build_cache, discover_packages

sys.path.insert(0, str(Path(__file__).parent))
from _shared import project_setup  # noqa: E402

ROOT = Path(__file__).resolve().parents[2]


def define(ctx):
    ctx.set_workflow_name("Release")
    ctx.add_trigger("release", types=["published"])

    def publish(job):
        job.add(project_setup())
        job.add(build_cache(discover_packages(ROOT / "packages")))
        job.run("yarn build")
        job.run(
            f"yarn publish-all --tag {github.event.release.tag_name}",
            env={"NODE_AUTH_TOKEN": secrets.NPM_TOKEN},
        )

    ctx.add_job("publish", publish)


workflow = create_workflow(define)
