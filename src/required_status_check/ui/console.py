"""Console output for the status check, written as GitHub Actions workflow commands."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from required_status_check.model import GateInput


def escape_data(message: str) -> str:
    """Escape a workflow command message the way @actions/core does."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, stream: Optional[TextIO] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, echo debug lines as plain text too (not only as ::debug::)
            stream: Where to write; defaults to sys.stdout at call time
        """
        self.debug = debug
        self.stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self.stream or sys.stdout)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._write(message)

    def print_debug(self, message: str) -> None:
        """
        Print debug message.

        The runner only shows ::debug:: lines when step debug logging is
        enabled, so with --debug the message is also printed plainly.
        """
        self._write(f"::debug::{escape_data(message)}")
        if self.debug:
            self._write(f"[DEBUG] {message}")

    def print_error(self, message: str) -> None:
        """Print an error annotation. The job is marked failed by the exit code."""
        self._write(f"::error::{escape_data(message)}")

    def print_parameters(self, gate: GateInput) -> None:
        """Echo the resolved inputs. The token is never printed."""
        needs = ", ".join(f"{name}={outcome.result}" for name, outcome in sorted(gate.needs.items()))
        self._write("parameters:")
        self._write(f"  needs: {needs}")
        self._write(f"  check_workflow: {str(gate.check_workflow).lower()}")
        self._write(f"  job: {gate.job}")
        self._write(f"  ignored_jobs: {', '.join(gate.ignored_jobs)}")
        self._write(f"  workflow_ref: {gate.workflow_ref}")
        self._write(f"  workflow_sha: {gate.workflow_sha}")


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
