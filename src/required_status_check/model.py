# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator


FAILURE = "failure"


class JobOutcome(BaseModel):
    """
    One entry of the `needs` context, e.g. {"result": "success", "outputs": {}}.

    Only `result` is read. Anything other than "failure" (success, skipped,
    cancelled) does not fail the gate.
    """
    model_config = ConfigDict(frozen=True)

    result: str

    @property
    def failed(self) -> bool:
        return self.result == FAILURE


class Job(BaseModel):
    """A workflow job. Only the dependency field matters here."""
    needs: Optional[Union[str, List[str]]] = None


class Workflow(BaseModel):
    """
    A decoded workflow file:

        jobs:
          job1:
            needs: [job2]
    """
    jobs: Dict[str, Job]

    @field_validator("jobs", mode="before")
    @classmethod
    def _job_ids_as_strings(cls, value: Any) -> Any:
        # `1:` is a valid YAML key; job ids are always compared as text.
        if isinstance(value, dict):
            return {str(k): v for k, v in value.items()}
        return value


@dataclass(frozen=True)
class WorkflowRef:
    """Where to read the workflow file from (GET /repos/{owner}/{repo}/contents/{path}?ref={ref})."""
    owner: str
    repo: str
    path: str
    ref: str


@dataclass(frozen=True)
class GateInput:
    """Everything a run needs, resolved once from inputs and environment."""
    github_token: str
    needs: Mapping[str, JobOutcome]
    check_workflow: bool
    job: str                      # GITHUB_JOB of the gate itself
    workflow_ref: str             # GITHUB_WORKFLOW_REF
    workflow_sha: str             # GITHUB_WORKFLOW_SHA
    ignored_jobs: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "needs", MappingProxyType(dict(self.needs)))
        object.__setattr__(self, "ignored_jobs", tuple(self.ignored_jobs))
