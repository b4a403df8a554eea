# cli.py
from __future__ import annotations

import sys
import traceback

import click

from required_status_check.config import build_gate_input
from required_status_check.errors import GateError
from required_status_check.github.api_client import DEFAULT_API_URL
from required_status_check.runner import github_fetcher, run
from required_status_check.ui.console import Console, set_console


@click.command()
@click.option("--needs", envvar="INPUT_NEEDS", default=None, help="JSON of the needs context (toJSON(needs))")
@click.option(
    "--github-token",
    envvar=["INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"],
    default="",
    show_default=False,
    help="Token used to read the workflow file",
)
@click.option(
    "--check-workflow",
    envvar="INPUT_CHECK_WORKFLOW",
    default=None,
    help="Also check that every workflow job is needed or ignored (true/false)",
)
@click.option("--job", envvar=["INPUT_JOB", "GITHUB_JOB"], default="", help="Job id of the status check job")
@click.option("--workflow-ref", envvar="GITHUB_WORKFLOW_REF", default="", help="<owner>/<repo>/<path>@<ref>")
@click.option("--workflow-sha", envvar="GITHUB_WORKFLOW_SHA", default="", help="Commit SHA of the workflow file")
@click.option("--ignored-jobs", envvar="INPUT_IGNORED_JOBS", default="", help="Newline separated job ids to ignore")
@click.option("--api-url", envvar="GITHUB_API_URL", default=DEFAULT_API_URL, show_default=True, help="GitHub REST API URL")
@click.option("--timeout", default=30.0, type=float, show_default=True, help="HTTP timeout in seconds")
@click.option(
    "--debug",
    envvar="RUNNER_DEBUG",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and debug output)",
)
def main(needs, github_token, check_workflow, job, workflow_ref, workflow_sha, ignored_jobs, api_url, timeout, debug):
    """Fail if any needed job failed or the workflow has jobs the status check does not wait for."""
    console = Console(debug=debug)
    set_console(console)

    try:
        gate = build_gate_input(
            needs=needs,
            github_token=github_token,
            check_workflow=check_workflow,
            job=job,
            workflow_ref=workflow_ref,
            workflow_sha=workflow_sha,
            ignored_jobs=ignored_jobs,
        )
        run(gate, fetch=github_fetcher(gate.github_token, api_url=api_url, timeout=timeout))
    except GateError as e:
        console.print_error(str(e))
        if debug:
            traceback.print_exc()
        sys.exit(1)
    except Exception as e:
        console.print_error(f"unexpected error: {e}")
        if debug:
            traceback.print_exc()
        sys.exit(1)

    console.print_info("status check passed")


if __name__ == "__main__":
    main()
