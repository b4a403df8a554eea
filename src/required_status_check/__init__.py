from .coverage import validate_input, validate_workflow
from .decode import parse_needs, parse_workflow_data
from .errors import GateError
from .model import GateInput, Job, JobOutcome, Workflow, WorkflowRef
from .outcomes import validate_outcomes
from .runner import run
from .workflow_ref import parse_workflow_ref

__all__ = [
    "validate_input",
    "validate_workflow",
    "parse_needs",
    "parse_workflow_data",
    "GateError",
    "GateInput",
    "Job",
    "JobOutcome",
    "Workflow",
    "WorkflowRef",
    "validate_outcomes",
    "run",
    "parse_workflow_ref",
]
