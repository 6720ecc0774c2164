"""
Configuration tree produced by the workflow builder.

These dataclasses mirror the GitHub Actions workflow schema closely enough
that rendering is a field-by-field mapping (see ``workflowkit.render``).
Values typed ``Value`` may be plain strings or expressions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from workflowkit.expression import Expression

Value = Union[str, int, float, bool, Expression]


@dataclass
class Step:
    """A single step: either an action (``uses``) or a shell command (``run``)."""

    name: Optional[str] = None
    id: Optional[str] = None
    condition: Optional[Expression] = None
    uses: Optional[str] = None
    with_: Dict[str, Value] = field(default_factory=dict)
    run: Optional[str] = None
    shell: Optional[str] = None
    env: Dict[str, Value] = field(default_factory=dict)
    continue_on_error: Optional[bool] = None

    @property
    def is_action(self) -> bool:
        return self.uses is not None


@dataclass
class Strategy:
    """Build matrix and the flags the runner uses to expand it."""

    matrix: Dict[str, List[Any]] = field(default_factory=dict)
    fail_fast: Optional[bool] = None
    max_parallel: Optional[int] = None

    def combinations(self) -> int:
        """Number of job instances the runner will create."""
        count = 1
        for values in self.matrix.values():
            count *= len(values)
        return count


@dataclass
class Job:
    """A job: ordered steps run on one runner, optionally expanded by a matrix."""

    id: str
    name: Optional[str] = None
    runs_on: str = "ubuntu-latest"
    needs: List[str] = field(default_factory=list)
    condition: Optional[Expression] = None
    timeout_minutes: Optional[int] = None
    strategy: Optional[Strategy] = None
    env: Dict[str, Value] = field(default_factory=dict)
    outputs: Dict[str, Value] = field(default_factory=dict)
    steps: List[Step] = field(default_factory=list)


@dataclass
class Workflow:
    """A named collection of jobs and the events that trigger them."""

    name: Optional[str] = None
    triggers: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    env: Dict[str, Value] = field(default_factory=dict)
    jobs: Dict[str, Job] = field(default_factory=dict)
