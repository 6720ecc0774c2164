"""
Step-level building blocks.

A *step fragment* is any callable taking a :class:`StepsContext`; fragments
compose through :meth:`StepsContext.add`, which is how reusable setup and cache
sequences are shared between jobs:

    def checkout() -> Steps:
        def steps(ctx: StepsContext) -> None:
            ctx.use("actions/checkout@v2")
        return steps

    ctx.add(checkout())
"""

import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Set

from workflowkit.builder.model import Step, Value
from workflowkit.core.exceptions import WorkflowDefinitionError
from workflowkit.expression import Expression, and_
from workflowkit.expression.expression import IDENTIFIER, property_path

logger = logging.getLogger(__name__)

Steps = Callable[["StepsContext"], Any]


def slugify(text: str) -> str:
    """Turn a step label into a step id candidate."""
    slug = re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")
    if not slug:
        return "step"
    if slug[0].isdigit():
        slug = f"step_{slug}"
    return slug


class StepOutputs:
    """Outputs of a step, as ``steps.<id>.outputs.<name>`` expressions."""

    def __init__(self, ref: "StepRef"):
        self._ref = ref

    def __getattr__(self, name: str) -> Expression:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, name: str) -> Expression:
        base = f"steps.{self._ref.id}.outputs"
        return Expression(property_path(base, name))


class StepRef:
    """Handle to a step added to a job."""

    def __init__(self, step: Step, context: "StepsContext"):
        self.step = step
        self._context = context

    @property
    def id(self) -> str:
        """Step id, assigned on first use so unreferenced steps stay id-less."""
        if self.step.id is None:
            self.step.id = self._context._allocate_id(self.step)
        return self.step.id

    @property
    def outputs(self) -> StepOutputs:
        return StepOutputs(self)

    @property
    def outcome(self) -> Expression:
        return Expression(f"steps.{self.id}.outcome")

    @property
    def conclusion(self) -> Expression:
        return Expression(f"steps.{self.id}.conclusion")


class StepsContext:
    """Collects the steps of one job."""

    def __init__(self, owner: str):
        self.owner = owner
        self._steps: List[Step] = []
        self._conditions: List[Expression] = []
        self._used_ids: Set[str] = set()

    @property
    def steps(self) -> List[Step]:
        return list(self._steps)

    def use(
        self,
        action: str,
        name: Optional[str] = None,
        with_: Optional[Mapping[str, Value]] = None,
        env: Optional[Mapping[str, Value]] = None,
        id: Optional[str] = None,
    ) -> StepRef:
        """
        Add a step that runs an action.

        Args:
            action: Action reference, e.g. ``actions/checkout@v2``
            name: Optional display name
            with_: Action inputs
            env: Step environment variables
            id: Explicit step id (otherwise derived on demand)

        Returns:
            StepRef for the new step
        """
        if not action or not isinstance(action, str):
            raise WorkflowDefinitionError(f"[{self.owner}] use() requires an action reference")
        step = Step(name=name, uses=action, with_=dict(with_ or {}), env=collect_env(env))
        return self._append(step, id)

    def run(
        self,
        command: str,
        name: Optional[str] = None,
        env: Optional[Mapping[str, Value]] = None,
        shell: Optional[str] = None,
        continue_on_error: Optional[bool] = None,
        id: Optional[str] = None,
    ) -> StepRef:
        """
        Add a step that runs a shell command.

        Args:
            command: Command line (may span several lines)
            name: Optional display name
            env: Step environment variables
            shell: Shell override (``bash``, ``pwsh``, ...)
            continue_on_error: Let the job continue when this step fails
            id: Explicit step id (otherwise derived on demand)

        Returns:
            StepRef for the new step
        """
        if not command or not isinstance(command, str):
            raise WorkflowDefinitionError(f"[{self.owner}] run() requires a command")
        step = Step(
            name=name,
            run=command,
            shell=shell,
            env=collect_env(env),
            continue_on_error=continue_on_error,
        )
        return self._append(step, id)

    def add(self, fragment: Steps) -> Any:
        """Run a step fragment against this context and return its result."""
        return fragment(self)

    def when(self, condition: Expression, fragment: Steps) -> Any:
        """Add a fragment whose steps only run when ``condition`` holds."""
        if not isinstance(condition, Expression):
            raise WorkflowDefinitionError(
                f"[{self.owner}] when() requires an Expression condition, got {condition!r}"
            )
        self._conditions.append(condition)
        try:
            return fragment(self)
        finally:
            self._conditions.pop()

    def _current_condition(self) -> Optional[Expression]:
        if not self._conditions:
            return None
        return and_(*self._conditions)

    def _append(self, step: Step, step_id: Optional[str]) -> StepRef:
        step.condition = self._current_condition()
        if step_id is not None:
            self._claim_id(step_id)
            step.id = step_id
        self._steps.append(step)
        logger.debug(f"[{self.owner}] added step {step.name or step.uses or step.run!r}")
        return StepRef(step, self)

    def _claim_id(self, step_id: str) -> None:
        if not IDENTIFIER.match(step_id):
            raise WorkflowDefinitionError(f"[{self.owner}] invalid step id: {step_id!r}")
        if step_id in self._used_ids:
            raise WorkflowDefinitionError(f"[{self.owner}] duplicate step id: {step_id}")
        self._used_ids.add(step_id)

    def _allocate_id(self, step: Step) -> str:
        base = slugify(step.name or step.uses or step.run or "step")
        candidate = base
        suffix = 2
        while candidate in self._used_ids:
            candidate = f"{base}_{suffix}"
            suffix += 1
        self._claim_id(candidate)
        return candidate


def collect_env(values: Optional[Mapping[str, Value]]) -> Dict[str, Value]:
    """Copy an env mapping, rejecting keys that are not valid variable names."""
    result: Dict[str, Value] = {}
    for key, value in (values or {}).items():
        if not re.match(r"^[A-Za-z_][A-Za-z0-9_]*$", key):
            raise WorkflowDefinitionError(f"Invalid environment variable name: {key!r}")
        result[key] = value
    return result
