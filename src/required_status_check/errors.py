# errors.py
from __future__ import annotations

from typing import Iterable, List, Optional


class GateError(Exception):
    """
    Base class for every failure that makes the status check fail.

    The CLI only ever reports str(error); `kind` is there so callers and
    tests can tell the stages apart without matching on message text.
    """
    kind = "gate"


class ConfigurationError(GateError):
    """Malformed or missing input (needs JSON, boolean inputs, required env)."""
    kind = "configuration"


class AggregationFailure(GateError):
    """One or more upstream jobs failed."""
    kind = "aggregation"

    def __init__(self, jobs: Iterable[str]):
        self.jobs: List[str] = sorted(set(jobs))
        super().__init__(f"Jobs ({', '.join(self.jobs)}) failed")


class FetchFailure(GateError):
    """The workflow file could not be read from the repository."""
    kind = "fetch"

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class DecodeFailure(GateError):
    """The fetched content is not a usable workflow document."""
    kind = "decode"


class EmptyDocument(DecodeFailure):
    pass


class MalformedDocument(DecodeFailure):
    pass


class MalformedYAML(DecodeFailure):
    pass


class SchemaMismatch(DecodeFailure):
    pass


class CoverageFailure(GateError):
    """The gate does not account for every job in the workflow."""
    kind = "coverage"


class UncoveredJobs(CoverageFailure):
    def __init__(self, gate_job: str, jobs: Iterable[str]):
        self.gate_job = gate_job
        self.jobs: List[str] = sorted(set(jobs))
        super().__init__(
            f"Jobs ({', '.join(self.jobs)}) must be added to "
            f"{gate_job}'s needs or ignored_jobs"
        )
