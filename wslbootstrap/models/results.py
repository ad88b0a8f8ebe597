"""
Result Models

Dataclass models for command outputs and component results.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from wslbootstrap.exceptions import ExecError, WSLBootstrapError

T = TypeVar("T")


@dataclass
class CommandResult:
    """Result of one external command invocation."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.exit_code == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.exit_code != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def __repr__(self) -> str:
        return f"CommandResult(exit_code={self.exit_code}, command='{self.command[:50]}')"


@dataclass
class Result(Generic[T]):
    """Value-or-error returned across every component boundary."""

    value: Optional[T] = None
    error: Optional[WSLBootstrapError] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: WSLBootstrapError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None


@dataclass
class RetryOutcome:
    """Final outcome of a bounded-retry execution."""

    result: CommandResult
    attempts: int
    error: Optional[ExecError] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        kind = self.error.kind.value if self.error else "success"
        return f"RetryOutcome({kind}, attempts={self.attempts})"
