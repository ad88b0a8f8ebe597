"""
Command Runner

The single subprocess boundary: every external tool invocation goes through
CommandRunner.run() and comes back as a CommandResult. Nothing here raises on
a non-zero exit code; callers decide what a failure means.
"""

import os
import subprocess
from typing import Dict, List, Optional, Union

from rich.console import Console
from rich.live import Live
from rich.padding import Padding
from rich.spinner import Spinner
from rich.text import Text

from wslbootstrap.constants import EXIT_COMMAND_NOT_FOUND
from wslbootstrap.logger import RunLogger
from wslbootstrap.models.results import CommandResult


def decode_console_output(raw: bytes) -> str:
    """
    Decode tool output to text.

    wsl.exe writes UTF-16LE unless WSL_UTF8 is honoured, so NUL-interleaved
    output is decoded as UTF-16LE; everything else as UTF-8.
    """
    if not raw:
        return ""

    if raw.startswith(b"\xff\xfe") or (b"\x00" in raw and len(raw) % 2 == 0):
        text = raw.decode("utf-16-le", errors="replace")
    else:
        text = raw.decode("utf-8", errors="replace")

    return text.lstrip("\ufeff").replace("\x00", "").replace("\r\n", "\n")


def format_command(argv: List[str]) -> str:
    """Render argv as a single command line for logs and error messages."""
    return subprocess.list2cmdline(argv)


class CommandRunner:
    """Runs external commands and captures their output."""

    def __init__(
        self,
        logger: Optional[RunLogger] = None,
        console: Optional[Console] = None,
        env: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize command runner.

        Args:
            logger: Run logger receiving every command and its output
            console: Rich console for the progress spinner
            env: Extra environment variables for every command
        """
        self.logger = logger
        self.console = console or Console()
        self.env = {"WSL_UTF8": "1"}
        if env:
            self.env.update(env)

    def run(
        self,
        argv: List[str],
        description: Optional[str] = None,
        stdin: Optional[Union[bytes, bytearray]] = None,
    ) -> CommandResult:
        """
        Run a command to completion.

        Args:
            argv: Program and arguments
            description: Progress text; shows a spinner when set
            stdin: Bytes fed to the command's standard input. Never logged.

        Returns:
            CommandResult (exit code 127 if the program cannot be launched)
        """
        command = format_command(argv)
        if self.logger:
            self.logger.log_command(command)

        show_spinner = description is not None and not (
            self.logger and self.logger.verbose
        )

        if not show_spinner:
            result = self._execute(argv, command, stdin)
            self._log_result(result)
            return result

        spinner = Spinner("dots", text=f"[cyan]{description}...[/cyan]")
        with Live(
            Padding(spinner, (0, 0, 0, 2)),
            console=self.console,
            refresh_per_second=10,
        ) as live:
            result = self._execute(argv, command, stdin)

            if result.is_success:
                checkmark = Text("  ✓ ", style="dim")
                checkmark.append(description, style="dim")
                live.update(checkmark)
            else:
                x_mark = Text("  ✗ ", style="red")
                x_mark.append(description, style="dim")
                live.update(x_mark)

        self._log_result(result)
        return result

    def _execute(
        self,
        argv: List[str],
        command: str,
        stdin: Optional[Union[bytes, bytearray]],
    ) -> CommandResult:
        env = dict(os.environ)
        env.update(self.env)

        try:
            completed = subprocess.run(
                argv,
                input=stdin,
                capture_output=True,
                env=env,
            )
        except FileNotFoundError as e:
            return CommandResult(
                exit_code=EXIT_COMMAND_NOT_FOUND,
                stderr=f"Command not found: {argv[0]} ({e})",
                command=command,
            )
        except OSError as e:
            return CommandResult(
                exit_code=1,
                stderr=f"Failed to launch {argv[0]}: {e}",
                command=command,
            )

        return CommandResult(
            exit_code=completed.returncode,
            stdout=decode_console_output(completed.stdout),
            stderr=decode_console_output(completed.stderr),
            command=command,
        )

    def _log_result(self, result: CommandResult) -> None:
        if not self.logger:
            return
        self.logger.log_output(result.stdout, "stdout")
        self.logger.log_output(result.stderr, "stderr")
        if result.is_failure:
            self.logger.log(f"Exit code {result.exit_code}", "WARNING")
