"""
Job-level building blocks: dependencies, build matrices and job outputs.
"""

import logging
from collections.abc import Sequence as SequenceABC
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from workflowkit.builder.model import Job, Strategy, Value
from workflowkit.builder.steps import IDENTIFIER, StepsContext, collect_env, property_path
from workflowkit.core.exceptions import UnknownDependencyError, WorkflowDefinitionError
from workflowkit.expression import Expression

logger = logging.getLogger(__name__)


class JobOutputs:
    """Outputs of an upstream job, as ``needs.<id>.outputs.<name>`` expressions."""

    def __init__(self, ref: "JobRef"):
        self._ref = ref

    def __getattr__(self, name: str) -> Expression:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, name: str) -> Expression:
        if name not in self._ref.output_names:
            raise WorkflowDefinitionError(
                f"Job '{self._ref.id}' has no output '{name}' "
                f"(declared: {sorted(self._ref.output_names)})"
            )
        return Expression(property_path(f"needs.{self._ref.id}.outputs", name))

    def __iter__(self):
        return iter(sorted(self._ref.output_names))


class JobRef:
    """Handle to a job added to a workflow, used to declare dependencies."""

    def __init__(self, job: Job, owner: object):
        self.job = job
        self._owner = owner

    @property
    def id(self) -> str:
        return self.job.id

    @property
    def output_names(self) -> List[str]:
        return list(self.job.outputs)

    @property
    def outputs(self) -> JobOutputs:
        return JobOutputs(self)

    @property
    def result(self) -> Expression:
        return Expression(f"needs.{self.id}.result")

    def __repr__(self) -> str:
        return f"JobRef({self.id!r})"


class MatrixValues:
    """Current matrix values of a job, as ``matrix.<axis>`` expressions."""

    def __init__(self, axes: Sequence[str]):
        self._axes = list(axes)

    def __getattr__(self, name: str) -> Expression:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, axis: str) -> Expression:
        if axis not in self._axes:
            raise WorkflowDefinitionError(
                f"Matrix has no axis '{axis}' (axes: {self._axes})"
            )
        return Expression(property_path("matrix", axis))

    def __iter__(self):
        return iter(self[axis] for axis in self._axes)


class JobContext(StepsContext):
    """Context passed to a job definition callback."""

    def __init__(self, job: Job, owner: object):
        super().__init__(job.id)
        self.job = job
        self._owner = owner

    def add_dependencies(self, *refs: JobRef) -> Union[JobOutputs, Tuple[JobOutputs, ...]]:
        """
        Declare that this job needs other jobs to finish first.

        Args:
            *refs: JobRef handles returned by ``add_job`` in the same workflow

        Returns:
            The dependencies' outputs; a single JobOutputs when one ref is given

        Raises:
            UnknownDependencyError: If a ref belongs to another workflow
        """
        if not refs:
            raise WorkflowDefinitionError(f"[{self.owner}] add_dependencies() requires a job")

        outputs = []
        for ref in refs:
            if not isinstance(ref, JobRef) or ref._owner is not self._owner:
                raise UnknownDependencyError(self.job.id, getattr(ref, "id", repr(ref)))
            if ref.id not in self.job.needs:
                self.job.needs.append(ref.id)
                logger.debug(f"[{self.owner}] needs {ref.id}")
            outputs.append(ref.outputs)

        if len(outputs) == 1:
            return outputs[0]
        return tuple(outputs)

    def set_build_matrix(
        self,
        axes: Mapping[str, Sequence[Any]],
        fail_fast: Optional[bool] = None,
        max_parallel: Optional[int] = None,
    ) -> MatrixValues:
        """
        Expand this job over the combinations of the given axes.

        Args:
            axes: Axis name -> ordered, non-empty list of values
            fail_fast: Cancel sibling instances when one fails (runner default if None)
            max_parallel: Limit on concurrently running instances

        Returns:
            MatrixValues giving ``matrix.<axis>`` expressions
        """
        if self.job.strategy is not None:
            raise WorkflowDefinitionError(f"[{self.owner}] build matrix already set")
        if not axes:
            raise WorkflowDefinitionError(f"[{self.owner}] build matrix needs at least one axis")

        matrix = {}
        for axis, values in axes.items():
            if not IDENTIFIER.match(axis):
                raise WorkflowDefinitionError(f"[{self.owner}] invalid matrix axis name: {axis!r}")
            if isinstance(values, (str, bytes)) or not isinstance(values, SequenceABC):
                raise WorkflowDefinitionError(
                    f"[{self.owner}] matrix axis '{axis}' must be a list of values"
                )
            if not values:
                raise WorkflowDefinitionError(f"[{self.owner}] matrix axis '{axis}' is empty")
            matrix[axis] = list(values)

        if max_parallel is not None and max_parallel < 1:
            raise WorkflowDefinitionError(f"[{self.owner}] max_parallel must be positive")

        self.job.strategy = Strategy(matrix=matrix, fail_fast=fail_fast, max_parallel=max_parallel)
        logger.debug(
            f"[{self.owner}] matrix {list(matrix)} -> "
            f"{self.job.strategy.combinations()} combination(s)"
        )
        return MatrixValues(list(matrix))

    def set_name(self, name: str) -> None:
        self.job.name = name

    def set_runs_on(self, runner_label: str) -> None:
        self.job.runs_on = runner_label

    def set_env(self, env: Mapping[str, Value]) -> None:
        self.job.env.update(collect_env(env))

    def set_timeout(self, minutes: int) -> None:
        if minutes < 1:
            raise WorkflowDefinitionError(f"[{self.owner}] timeout must be positive")
        self.job.timeout_minutes = minutes

    def set_condition(self, condition: Expression) -> None:
        self.job.condition = condition
