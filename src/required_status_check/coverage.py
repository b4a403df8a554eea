# coverage.py
from __future__ import annotations

from .errors import ConfigurationError, UncoveredJobs
from .model import GateInput, Workflow


def validate_input(gate: GateInput) -> None:
    """Check the values reading the workflow file depends on, in a fixed order."""
    if gate.job == "":
        raise ConfigurationError("GITHUB_JOB is required")
    if gate.workflow_ref == "":
        raise ConfigurationError("GITHUB_WORKFLOW_REF is required")
    if gate.workflow_sha == "":
        raise ConfigurationError("GITHUB_WORKFLOW_SHA is required")
    if gate.github_token == "":
        raise ConfigurationError("github_token is required")


def validate_workflow(gate: GateInput, workflow: Workflow) -> None:
    """
    Fail if the workflow defines a job the gate does not account for.

    A job is accounted for when it is one of the gate's needs, is listed in
    ignored_jobs, or is the gate job itself. Only direct membership counts:
    a job reached through another job's needs still has to be listed.
    """
    covered = set(gate.needs) | set(gate.ignored_jobs) | {gate.job}
    missing = [name for name in workflow.jobs if name not in covered]
    if missing:
        raise UncoveredJobs(gate.job, missing)
