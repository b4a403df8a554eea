# runner.py
from __future__ import annotations

from typing import Callable, Optional

from .coverage import validate_input, validate_workflow
from .decode import parse_workflow_data
from .github.api_client import DEFAULT_API_URL, GitHubClient, fetch_workflow_content
from .model import GateInput, Workflow, WorkflowRef
from .outcomes import validate_outcomes
from .ui.console import get_console
from .workflow_ref import parse_workflow_ref

# Returns the base64 content of the workflow file.
Fetcher = Callable[[WorkflowRef], str]


def github_fetcher(token: str, api_url: str = DEFAULT_API_URL, timeout: float = 30.0) -> Fetcher:
    client = GitHubClient(token, api_url=api_url, timeout=timeout)
    return lambda ref: fetch_workflow_content(client, ref)


def get_workflow(gate: GateInput, fetch: Fetcher) -> Workflow:
    ref = parse_workflow_ref(gate.workflow_ref, gate.workflow_sha)
    get_console().print_info(
        f"fetching workflow file {ref.path} ({ref.ref}) from {ref.owner}/{ref.repo}"
    )
    return parse_workflow_data(fetch(ref))


def run(gate: GateInput, fetch: Optional[Fetcher] = None) -> None:
    """
    Run the status check.

    1. fail if any job in `needs` failed
    2. stop here unless check_workflow is set
    3. require GITHUB_JOB / GITHUB_WORKFLOW_REF / GITHUB_WORKFLOW_SHA
    4. read the workflow file at the pinned SHA
    5. fail if a workflow job is neither needed nor ignored

    Every failure is raised as a GateError; nothing is retried.
    """
    console = get_console()
    console.print_parameters(gate)

    validate_outcomes(gate.needs)
    if not gate.check_workflow:
        console.print_debug("check_workflow is disabled, skipping the workflow check")
        return

    validate_input(gate)
    if fetch is None:
        fetch = github_fetcher(gate.github_token)
    workflow = get_workflow(gate, fetch)
    console.print_debug(f"workflow jobs: {', '.join(sorted(workflow.jobs))}")
    validate_workflow(gate, workflow)
