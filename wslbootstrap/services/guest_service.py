"""
Guest Service

Configures the Linux side of an instance: the operator's account, sudo
membership, Python and Ansible. Commands are passed as argv lists so no
operator input is ever interpolated into a shell string.
"""

from typing import List, Optional, Tuple

from wslbootstrap.constants import (
    GUEST_ADMIN_USER,
    GUEST_APT_PACKAGES,
    GUEST_PIP_PACKAGES,
    GUEST_SHELL,
    GUEST_SUDO_GROUP,
)
from wslbootstrap.exceptions import ExecError, ExecErrorKind
from wslbootstrap.logger import RunLogger
from wslbootstrap.models.instance import Credential, wipe
from wslbootstrap.models.results import CommandResult, Result
from wslbootstrap.services.wsl_service import WSLService

# (description, guest argv, guest user)
GuestStep = Tuple[str, List[str], str]


def _step_error(description: str, result: CommandResult) -> ExecError:
    return ExecError(
        ExecErrorKind.NON_TRANSIENT,
        result.command,
        f"{description} failed (exit code {result.exit_code})",
        context=result.output or None,
    )


class GuestService:
    """Runs the guest-side bootstrap steps."""

    def __init__(self, wsl: WSLService, logger: Optional[RunLogger] = None):
        self.wsl = wsl
        self.logger = logger

    def _run_steps(self, instance_name: str, steps: List[GuestStep]) -> Result[None]:
        for description, command, user in steps:
            result = self.wsl.exec_in_instance(
                instance_name, command, user=user, description=description
            )
            if result.is_failure:
                return Result.fail(_step_error(description, result))
            if self.logger:
                self.logger.success(description)
        return Result.ok()

    def create_user(self, instance_name: str, credential: Credential) -> Result[None]:
        """
        Create the account (if missing), set its password and add it to sudo.

        The password goes to chpasswd on stdin; the stdin buffer is zeroed
        once the command returns. Clearing the credential itself is the
        caller's job.
        """
        username = credential.username

        exists = self.wsl.exec_in_instance(
            instance_name, ["id", "-u", username], user=GUEST_ADMIN_USER
        )
        if exists.is_success:
            if self.logger:
                self.logger.success(f"User '{username}' already exists")
        else:
            create = self.wsl.exec_in_instance(
                instance_name,
                ["useradd", "-m", "-s", GUEST_SHELL, username],
                user=GUEST_ADMIN_USER,
                description=f"Creating user '{username}'",
            )
            if create.is_failure:
                return Result.fail(_step_error(f"Creating user '{username}'", create))
            if self.logger:
                self.logger.success(f"Created user '{username}'")

        payload = credential.chpasswd_payload()
        try:
            password = self.wsl.exec_in_instance(
                instance_name,
                ["chpasswd"],
                user=GUEST_ADMIN_USER,
                description=f"Setting password for '{username}'",
                stdin=payload,
            )
        finally:
            wipe(payload)

        if password.is_failure:
            return Result.fail(
                _step_error(f"Setting password for '{username}'", password)
            )
        if self.logger:
            self.logger.success(f"Password set for '{username}'")

        return self._run_steps(
            instance_name,
            [
                (
                    f"Adding '{username}' to {GUEST_SUDO_GROUP} group",
                    ["usermod", "-aG", GUEST_SUDO_GROUP, username],
                    GUEST_ADMIN_USER,
                ),
            ],
        )

    def install_packages(self, instance_name: str, username: str) -> Result[str]:
        """
        Install Python, pip and Ansible; Ansible goes into the user's ~/.local.

        Returns:
            Result holding the first line of 'ansible --version'
        """
        steps: List[GuestStep] = [
            (
                "Updating package index",
                ["env", "DEBIAN_FRONTEND=noninteractive", "apt-get", "update"],
                GUEST_ADMIN_USER,
            ),
            (
                f"Installing {', '.join(GUEST_APT_PACKAGES)}",
                ["env", "DEBIAN_FRONTEND=noninteractive", "apt-get", "install", "-y"]
                + GUEST_APT_PACKAGES,
                GUEST_ADMIN_USER,
            ),
            (
                f"Installing {', '.join(GUEST_PIP_PACKAGES)} for '{username}'",
                ["env", "PIP_BREAK_SYSTEM_PACKAGES=1", "python3", "-m", "pip",
                 "install", "--user"] + GUEST_PIP_PACKAGES,
                username,
            ),
        ]

        installed = self._run_steps(instance_name, steps)
        if installed.is_failure:
            return Result.fail(installed.error)

        version = self.wsl.exec_in_instance(
            instance_name,
            ["bash", "-lc", "ansible --version"],
            user=username,
            description="Verifying Ansible installation",
        )
        if version.is_failure:
            return Result.fail(_step_error("Verifying Ansible installation", version))

        first_line = version.stdout.strip().splitlines()[0] if version.stdout.strip() else ""
        return Result.ok(first_line)
