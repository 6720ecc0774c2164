"""
Ready-made pipelines and the step fragments they are assembled from.
"""

from workflowkit.pipelines.workspace import discover_packages
from workflowkit.pipelines.steps import (
    build_cache,
    build_cache_key_inputs,
    build_cache_paths,
    load_output,
    save_output,
    set_output_command,
    setup,
    yarn_install_with_cache,
)
from workflowkit.pipelines.monorepo import MonorepoPipeline, build_test_workflow

__all__ = [
    "discover_packages",
    "build_cache",
    "build_cache_key_inputs",
    "build_cache_paths",
    "load_output",
    "save_output",
    "set_output_command",
    "setup",
    "yarn_install_with_cache",
    "MonorepoPipeline",
    "build_test_workflow",
]
