# outcomes.py
from __future__ import annotations

from typing import Mapping

from .errors import AggregationFailure
from .model import JobOutcome


def validate_outcomes(outcomes: Mapping[str, JobOutcome]) -> None:
    """
    Fail if any upstream job failed.

    Every entry is checked before raising so the error names all failed
    jobs at once, sorted.
    """
    failed = {name for name, outcome in outcomes.items() if outcome.failed}
    if failed:
        raise AggregationFailure(failed)
