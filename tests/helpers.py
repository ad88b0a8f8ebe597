"""Scripted runner and canned tool output shared by the tests."""

from dataclasses import dataclass
from typing import List, Optional

from wslbootstrap.models import CommandResult
from wslbootstrap.services.runner import format_command

TRANSIENT = (
    "There is no distribution with the supplied name.\n"
    "Error code: Wsl/Service/WSL_E_DISTRO_NOT_FOUND"
)

CATALOG_LISTING = """The following is a list of valid distributions that can be installed.
Install using 'wsl.exe --install <Distro>'.

NAME                            FRIENDLY NAME
Ubuntu                          Ubuntu
Debian                          Debian GNU/Linux
kali-linux                      Kali Linux Rolling
Ubuntu-24.04                    Ubuntu 24.04 LTS
"""

INSTANCE_LISTING = """  NAME              STATE           VERSION
* Ubuntu            Stopped         2
  control-node      Running         2
"""

DISM_ENABLED = """Deployment Image Servicing and Management tool
Version: 10.0.22621.2792

Feature Name : Microsoft-Windows-Subsystem-Linux
Display Name : Windows Subsystem for Linux
State : Enabled

The operation completed successfully.
"""

DISM_DISABLED = DISM_ENABLED.replace("State : Enabled", "State : Disabled")


def ok(stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(exit_code=0, stdout=stdout, stderr=stderr)


def fail(exit_code: int = 1, stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(exit_code=exit_code, stdout=stdout, stderr=stderr)


@dataclass
class Call:
    """One recorded FakeRunner invocation."""

    argv: List[str]
    description: Optional[str]
    stdin: Optional[bytes]
    stdin_buffer: Optional[bytearray]

    @property
    def command(self) -> str:
        return " ".join(self.argv)


class FakeRunner:
    """
    Scripted stand-in for CommandRunner.

    Handlers match on a substring of the space-joined argv; the first
    matching handler answers. Each handler replays its responses in order and
    keeps repeating the last one. Unmatched commands succeed with no output.
    """

    def __init__(self):
        self.calls: List[Call] = []
        self._handlers = []
        self.logger = None

    def on(self, pattern: str, *responses: CommandResult) -> "FakeRunner":
        self._handlers.append((pattern, list(responses)))
        return self

    def run(self, argv, description=None, stdin=None) -> CommandResult:
        self.calls.append(
            Call(
                argv=list(argv),
                description=description,
                stdin=bytes(stdin) if stdin is not None else None,
                stdin_buffer=stdin,
            )
        )
        command = " ".join(argv)
        for pattern, responses in self._handlers:
            if pattern in command:
                response = responses.pop(0) if len(responses) > 1 else responses[0]
                return CommandResult(
                    exit_code=response.exit_code,
                    stdout=response.stdout,
                    stderr=response.stderr,
                    command=format_command(argv),
                )
        return CommandResult(exit_code=0, command=format_command(argv))

    def commands(self, pattern: str = "") -> List[str]:
        return [call.command for call in self.calls if pattern in call.command]
