# workflow_ref.py
from __future__ import annotations

from .model import WorkflowRef


def parse_workflow_ref(workflow_ref: str, workflow_sha: str) -> WorkflowRef:
    """
    Parse GITHUB_WORKFLOW_REF (<owner>/<repo>/<path>@<ref>).

    The ref suffix of the locator is dropped; the file is always read at
    `workflow_sha`. Missing segments come back as empty strings.
    """
    parts = workflow_ref.split("@", 1)[0].split("/")
    return WorkflowRef(
        owner=parts[0],
        repo=parts[1] if len(parts) > 1 else "",
        path="/".join(parts[2:]),
        ref=workflow_sha,
    )
