"""
WSL Service

Thin facade over the wsl command-line tool. Every method is a single
invocation and returns the CommandResult untouched.
"""

from typing import List, Optional, Union

from wslbootstrap.constants import WSL_EXECUTABLE
from wslbootstrap.models.results import CommandResult
from wslbootstrap.services.runner import CommandRunner


class WSLService:
    """
    WSL command facade.

    Responsibilities:
    - Instance listing and the existence check
    - Distribution install / default selection / unregister
    - Running commands inside an instance
    """

    def __init__(self, runner: CommandRunner, executable: str = WSL_EXECUTABLE):
        self.runner = runner
        self.executable = executable

    def _wsl(self, *args: str) -> List[str]:
        return [self.executable, *args]

    def list_instances(self, verbose: bool = True) -> CommandResult:
        """List registered instances ('wsl --list --verbose')."""
        args = ["--list", "--verbose"] if verbose else ["--list"]
        return self.runner.run(self._wsl(*args))

    def list_online(self) -> CommandResult:
        """List installable distributions ('wsl --list --online')."""
        return self.runner.run(
            self._wsl("--list", "--online"), description="Fetching distribution catalog"
        )

    def status(self) -> CommandResult:
        return self.runner.run(self._wsl("--status"))

    def install_tool(self) -> CommandResult:
        """Install the WSL platform itself without a distribution."""
        return self.runner.run(
            self._wsl("--install", "--no-distribution"), description="Installing WSL"
        )

    def install_distribution(self, distribution: str, instance_name: str) -> CommandResult:
        return self.runner.run(
            self._wsl(
                "--install", "-d", distribution, "--name", instance_name, "--no-launch"
            ),
            description=f"Installing {distribution} as '{instance_name}'",
        )

    def set_default_command(self, instance_name: str) -> List[str]:
        """argv for 'wsl --set-default'; executed through the retry executor."""
        return self._wsl("--set-default", instance_name)

    def unregister(self, instance_name: str) -> CommandResult:
        return self.runner.run(
            self._wsl("--unregister", instance_name),
            description=f"Unregistering '{instance_name}'",
        )

    def exec_in_instance(
        self,
        instance_name: str,
        command: List[str],
        user: Optional[str] = None,
        description: Optional[str] = None,
        stdin: Optional[Union[bytes, bytearray]] = None,
    ) -> CommandResult:
        """
        Run a command inside an instance ('wsl -d NAME [-u USER] -- CMD...').

        Args:
            instance_name: Target instance
            command: Command and arguments run in the guest
            user: Guest user to run as (instance default user if None)
            description: Progress text
            stdin: Bytes for the guest command's stdin (not logged)
        """
        argv = self._wsl("-d", instance_name)
        if user:
            argv += ["-u", user]
        argv += ["--", *command]
        return self.runner.run(argv, description=description, stdin=stdin)

    def instance_exists(self, instance_name: str) -> bool:
        """
        Check whether an instance is registered.

        Case-sensitive substring search over the listing text, so a name that
        is part of a longer registered name also reports True (see
        parse_instance_names() for token-exact names).
        """
        result = self.list_instances()
        if result.is_failure:
            return False
        return instance_name in result.stdout


def parse_instance_names(listing: str) -> List[str]:
    """
    Extract names from a 'wsl --list --verbose' table.

    Rows look like '* Ubuntu    Running    2'; the first row is the
    'NAME STATE VERSION' header.
    """
    names = []
    for line in listing.splitlines():
        tokens = line.split()
        if not tokens:
            continue
        if tokens[0] == "*":
            tokens = tokens[1:]
        if not tokens or tokens[0] == "NAME":
            continue
        names.append(tokens[0])
    return names
