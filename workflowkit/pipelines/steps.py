"""
Reusable step fragments for Yarn-workspace monorepos.

Each function returns a fragment to pass to ``ctx.add(...)``. Fragments that
produce something (an artifact name) return it from ``add``.
"""

from typing import List, Sequence

from workflowkit.builder import Steps, StepsContext
from workflowkit.expression import ExpressionLike, hash_files, runner

CHECKOUT_ACTION = "actions/checkout@v2"
SETUP_NODE_ACTION = "actions/setup-node@v1"
CACHE_ACTION = "actions/cache@v2"
UPLOAD_ARTIFACT_ACTION = "actions/upload-artifact@v2"
DOWNLOAD_ARTIFACT_ACTION = "actions/download-artifact@v2"

DEFAULT_NODE_VERSION = "14.x"
DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"


def set_output_command(name: str, value: str, style: str = "legacy") -> str:
    """
    Shell command publishing a step output.

    ``legacy`` uses the ``::set-output`` workflow command; ``file`` appends to
    ``$GITHUB_OUTPUT``, which replaced it.
    """
    if style == "file":
        return f'echo "{name}={value}" >> "$GITHUB_OUTPUT"'
    return f'echo "::set-output name={name}::{value}"'


def yarn_install_with_cache(
    node_version: ExpressionLike,
    cache_suffix: str = "2",
    set_output_style: str = "legacy",
    packages_dir: str = "packages",
) -> Steps:
    """Install dependencies, caching Yarn's cache dir and every node_modules."""

    def steps(ctx: StepsContext) -> None:
        cache_dir_step = ctx.run(
            set_output_command("dir", "$(yarn cache dir)", set_output_style),
            name="Get yarn cache directory path",
        )
        yarn_cache_dir = cache_dir_step.outputs.dir
        ctx.use(
            CACHE_ACTION,
            name="Enable Cache",
            with_={
                "path": "\n".join(
                    [
                        str(yarn_cache_dir),
                        "node_modules",
                        f"{packages_dir.rstrip('/')}/*/node_modules",
                    ]
                ),
                "key": f"{runner.os}-{node_version}-{hash_files('yarn.lock')}-{cache_suffix}",
            },
        )
        ctx.run("yarn install --prefer-offline")

    return steps


def setup(
    node_version: ExpressionLike = DEFAULT_NODE_VERSION,
    registry_url: str = DEFAULT_REGISTRY_URL,
    cache_suffix: str = "2",
    set_output_style: str = "legacy",
    packages_dir: str = "packages",
) -> Steps:
    """Check out the repository, install Node.js and install dependencies."""

    def steps(ctx: StepsContext) -> None:
        ctx.use(CHECKOUT_ACTION)
        ctx.use(
            SETUP_NODE_ACTION,
            with_={"node-version": node_version, "registry-url": registry_url},
        )
        ctx.add(
            yarn_install_with_cache(node_version, cache_suffix, set_output_style, packages_dir)
        )

    return steps


def build_cache_paths(package_names: Sequence[str], packages_dir: str = "packages") -> List[str]:
    """Build outputs of every package: all ``lib`` dirs, then all ``.last_build`` markers."""
    base = packages_dir.rstrip("/")
    return [f"{base}/{name}/lib" for name in package_names] + [
        f"{base}/{name}/.last_build" for name in package_names
    ]


def build_cache_key_inputs(package_names: Sequence[str], packages_dir: str = "packages") -> List[str]:
    """Files whose contents decide whether cached build output is still valid."""
    base = packages_dir.rstrip("/")
    return ["yarn.lock"] + [f"{base}/{name}/src" for name in package_names]


def build_cache(
    package_names: Sequence[str],
    packages_dir: str = "packages",
    prefix: str = "v2-build-output-",
) -> Steps:
    """Restore/save compiled package output keyed on the lock file and all sources."""
    package_names = sorted(package_names)

    def steps(ctx: StepsContext) -> None:
        ctx.use(
            CACHE_ACTION,
            name="Enable Cache",
            with_={
                "path": "\n".join(build_cache_paths(package_names, packages_dir)),
                "key": f"{prefix}{hash_files(*build_cache_key_inputs(package_names, packages_dir))}",
                "restore-keys": prefix,
            },
        )

    return steps


def save_output(name: str, paths: Sequence[str]) -> Steps:
    """Upload paths as a named artifact; ``add`` returns the artifact name."""

    def steps(ctx: StepsContext) -> str:
        ctx.use(
            UPLOAD_ARTIFACT_ACTION,
            name=f"Save output: {name}",
            with_={"name": name, "path": "\n".join(paths)},
        )
        return name

    return steps


def load_output(name: ExpressionLike, path: str) -> Steps:
    """Download a named artifact produced by an upstream job into ``path``."""

    def steps(ctx: StepsContext) -> None:
        ctx.use(
            DOWNLOAD_ARTIFACT_ACTION,
            name=f"Load output: {name}",
            with_={"name": name, "path": path},
        )

    return steps
