# config.py
from __future__ import annotations

from typing import Optional, Tuple

from .decode import parse_needs
from .errors import ConfigurationError
from .model import GateInput

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


def parse_boolean_input(name: str, value: Optional[str], default: bool = False) -> bool:
    """
    Parse a boolean action input.

    Accepts the YAML 1.2 core schema spellings only, like
    core.getBooleanInput. Unset or empty falls back to `default`.
    """
    if value is None or value == "":
        return default
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean (true | True | TRUE | false | False | FALSE): {value!r}"
    )


def parse_ignored_jobs(raw: Optional[str]) -> Tuple[str, ...]:
    """One job name per line; lines are trimmed and blank ones dropped."""
    if not raw:
        return ()
    return tuple(line.strip() for line in raw.splitlines() if line.strip())


def build_gate_input(
    *,
    needs: str,
    github_token: Optional[str] = None,
    check_workflow: Optional[str] = None,
    job: Optional[str] = None,
    workflow_ref: Optional[str] = None,
    workflow_sha: Optional[str] = None,
    ignored_jobs: Optional[str] = None,
) -> GateInput:
    """Turn raw input strings into a GateInput. Raises ConfigurationError."""
    if needs is None or needs.strip() == "":
        raise ConfigurationError("needs is required")

    return GateInput(
        github_token=github_token or "",
        needs=parse_needs(needs),
        check_workflow=parse_boolean_input("check_workflow", check_workflow),
        job=(job or "").strip(),
        workflow_ref=workflow_ref or "",
        workflow_sha=workflow_sha or "",
        ignored_jobs=parse_ignored_jobs(ignored_jobs),
    )
