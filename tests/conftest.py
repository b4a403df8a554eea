from __future__ import annotations

import base64

import pytest

from required_status_check.model import GateInput, JobOutcome
from required_status_check.ui.console import Console, set_console

WORKFLOW_YAML = """\
name: pull request
on: pull_request
jobs:
  test:
    runs-on: ubuntu-24.04
    permissions: {}
    steps:
      - run: test -n "$FOO"
  build:
    runs-on: ubuntu-24.04
    steps:
      - run: make build
  check:
    runs-on: ubuntu-24.04
    steps:
      - run: make check
  status-check:
    runs-on: ubuntu-24.04
    needs:
      - test
      - build
      - check
    if: always()
    permissions:
      contents: read
    steps:
      - uses: ./
        with:
          needs: ${{ toJSON(needs) }}
          ignored_jobs: |
            merge
  merge:
    runs-on: ubuntu-24.04
    needs: status-check
    steps:
      - run: echo merge
"""


def encode(text: str) -> str:
    """Base64 the way the contents API does it: wrapped lines."""
    return base64.encodebytes(text.encode("utf-8")).decode("ascii")


@pytest.fixture(autouse=True)
def console():
    c = Console()
    set_console(c)
    return c


@pytest.fixture
def make_gate():
    def _make(**overrides) -> GateInput:
        values = dict(
            github_token="xxx",
            needs={"test": JobOutcome(result="success")},
            check_workflow=True,
            job="status-check",
            workflow_ref="suzuki-shunsuke/required-status-check-action/.github/workflows/pull_request.yaml@refs/pull/1/merge",
            workflow_sha="xxx",
            ignored_jobs=(),
        )
        values.update(overrides)
        return GateInput(**values)

    return _make
