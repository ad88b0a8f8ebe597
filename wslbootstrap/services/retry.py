"""
Bounded-Retry Command Executor

Retries exactly one recognised transient failure (the error text matching the
policy's signature) with a fixed delay, up to policy.max_attempts. Any other
failure stops immediately.
"""

import time
from typing import Callable, List, Optional

from wslbootstrap.exceptions import ExecError, ExecErrorKind
from wslbootstrap.logger import RunLogger
from wslbootstrap.models.instance import RetryPolicy
from wslbootstrap.models.results import CommandResult, RetryOutcome
from wslbootstrap.services.runner import CommandRunner, format_command


def classify_failure(result: CommandResult, policy: RetryPolicy) -> ExecErrorKind:
    """Classify a failed result as transient or not by its diagnostic text."""
    if policy.transient_signature in result.output:
        return ExecErrorKind.TRANSIENT
    return ExecErrorKind.NON_TRANSIENT


class RetryExecutor:
    """Executes a command under a RetryPolicy."""

    def __init__(
        self,
        runner: CommandRunner,
        logger: Optional[RunLogger] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.runner = runner
        self.logger = logger
        self.sleep = sleep

    def execute_with_retry(
        self,
        argv: List[str],
        policy: RetryPolicy,
        description: Optional[str] = None,
    ) -> RetryOutcome:
        """
        Run argv until it succeeds, fails non-transiently, or runs out of attempts.

        Args:
            argv: Command to run
            policy: Attempt ceiling, delay and transient signature
            description: Progress text

        Returns:
            RetryOutcome; error is None on success, otherwise an ExecError of
            kind NON_TRANSIENT or RETRIES_EXHAUSTED
        """
        command = format_command(argv)
        attempt = 1

        while True:
            result = self.runner.run(argv, description=description)

            if result.is_success:
                return RetryOutcome(result=result, attempts=attempt)

            kind = classify_failure(result, policy)

            if kind is ExecErrorKind.NON_TRANSIENT:
                return RetryOutcome(
                    result=result,
                    attempts=attempt,
                    error=ExecError(
                        ExecErrorKind.NON_TRANSIENT,
                        command,
                        f"'{command}' failed with exit code {result.exit_code}",
                        context=result.output or None,
                        attempts=attempt,
                    ),
                )

            if attempt >= policy.max_attempts:
                return RetryOutcome(
                    result=result,
                    attempts=attempt,
                    error=ExecError(
                        ExecErrorKind.RETRIES_EXHAUSTED,
                        command,
                        f"'{command}' still failing after {attempt} attempts",
                        context=result.output or None,
                        attempts=attempt,
                    ),
                )

            if self.logger:
                self.logger.warning(
                    f"Attempt {attempt}/{policy.max_attempts} hit "
                    f"{policy.transient_signature}, retrying in {policy.delay_seconds}s"
                )
            self.sleep(policy.delay_seconds)
            attempt += 1
