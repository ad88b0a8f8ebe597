"""
Provision Command

Create (or reuse) a WSL instance and bootstrap an Ansible control node in it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import click
import inquirer
from rich.prompt import Prompt

from wslbootstrap.base import BaseCommand
from wslbootstrap.constants import (
    DEFAULT_INSTANCE_NAME,
    DEFAULT_USERNAME,
    SET_DEFAULT_DELAY_SECONDS,
    SET_DEFAULT_MAX_ATTEMPTS,
    SET_DEFAULT_TRANSIENT_SIGNATURE,
)
from wslbootstrap.core import Provisioner, ProvisionRequest, require_value
from wslbootstrap.exceptions import UserDeclined
from wslbootstrap.models import (
    Credential,
    DistributionEntry,
    Result,
    RetryPolicy,
    VMIdentity,
)
from wslbootstrap.services import (
    CatalogService,
    FeatureService,
    GuestService,
    RetryExecutor,
)
from wslbootstrap.ui_components import distribution_table


@dataclass
class ProvisionOptions:
    """Options for provision command."""

    name: Optional[str] = None
    username: Optional[str] = None
    distribution: Optional[str] = None
    max_attempts: int = SET_DEFAULT_MAX_ATTEMPTS
    retry_delay: float = SET_DEFAULT_DELAY_SECONDS


class ProvisionCommand(BaseCommand):
    """Interactive provisioning of one instance."""

    def __init__(
        self,
        options: ProvisionOptions,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
    ):
        super().__init__(verbose=verbose, log_dir=log_dir)
        self.options = options

    def execute(self) -> None:
        """Execute provision command."""
        name = self._collect_instance_name()
        username = self._collect_username()
        password = require_value(
            Prompt.ask("[?] Password", password=True, console=self.console), "Password"
        )
        if password.is_failure:
            raise password.error

        credential = Credential(username, password.value)
        del password

        # Cleared on every exit, including failures before the provisioner starts
        with credential:
            identity = VMIdentity(name=name, distribution=self.options.distribution)
            policy = RetryPolicy(
                max_attempts=self.options.max_attempts,
                delay_seconds=self.options.retry_delay,
                transient_signature=SET_DEFAULT_TRANSIENT_SIGNATURE,
            )

            self.console.print()
            self.show_header(
                title="Provision Instance",
                subtitle="Ansible control node on WSL",
                instance=name,
                details={"User": credential.username},
            )

            logger = self.init_logger(name, "provision")
            provisioner = Provisioner(
                wsl=self.wsl,
                features=FeatureService(self.runner),
                guest=GuestService(self.wsl, logger),
                retry=RetryExecutor(self.runner, logger),
                choose_distribution=self._choose_distribution,
                logger=logger,
            )

            report = provisioner.run(
                ProvisionRequest(
                    identity=identity, credential=credential, set_default_policy=policy
                )
            )

        if report.completed:
            self.console.print()
            if report.warnings:
                self.print_warning(f"Completed with {len(report.warnings)} warning(s)")
            self.print_success(
                f"Instance '{name}' is ready; log in as '{credential.username}' with: "
                f"wsl -d {name} -u {credential.username}"
            )
            self.print_log_location()
            return

        if report.declined:
            raise report.error

        self.console.print()
        self.print_dim(f"Last completed state: {report.last_successful.value}")
        self.print_dim(f"Failed step: {report.failed_step}")
        self.print_dim("Nothing was rolled back; fix the cause and re-run provision.")
        raise report.error

    def _collect_instance_name(self) -> str:
        answer = self.options.name
        if answer is None:
            answer = Prompt.ask(
                "[?] Instance name", default=DEFAULT_INSTANCE_NAME, console=self.console
            )
        name = require_value(answer, "Instance name", default=DEFAULT_INSTANCE_NAME)
        if name.is_failure:
            raise name.error
        return name.value

    def _collect_username(self) -> str:
        answer = self.options.username
        if answer is None:
            answer = Prompt.ask(
                "[?] Username", default=DEFAULT_USERNAME, console=self.console
            )
        username = require_value(answer, "Username", default=DEFAULT_USERNAME)
        if username.is_failure:
            raise username.error
        return username.value

    def _choose_distribution(self) -> Result[str]:
        """Fetch the catalog and let the operator pick an entry."""
        catalog = CatalogService(self.wsl).fetch_available_distributions()
        if catalog.is_failure:
            return Result.fail(catalog.error)

        entries: List[DistributionEntry] = catalog.value
        self.console.print()
        self.console.print(distribution_table(entries))

        default = next((e for e in entries if e.is_default), entries[0])
        questions = [
            inquirer.List(
                "distribution",
                message="Distribution",
                choices=[
                    (f"{index}. {entry.display_name}", entry.name)
                    for index, entry in enumerate(entries, start=1)
                ],
                default=default.name,
                carousel=True,
            )
        ]
        answers = inquirer.prompt(questions, raise_keyboard_interrupt=True)
        if not answers:
            return Result.fail(UserDeclined("No distribution selected"))
        return Result.ok(answers["distribution"])


@click.command()
@click.option("--name", "-n", help="Instance name (prompted for when omitted)")
@click.option("--username", "-u", help="Guest account name (prompted for when omitted)")
@click.option(
    "--distribution",
    "-d",
    help="Distribution to install (chosen from the catalog when omitted)",
)
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    default=SET_DEFAULT_MAX_ATTEMPTS,
    show_default=True,
    help="Attempts for setting the default instance",
)
@click.option(
    "--retry-delay",
    type=click.FloatRange(min=0),
    default=SET_DEFAULT_DELAY_SECONDS,
    show_default=True,
    help="Seconds between set-default attempts",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for run logs (default: ~/.wslbootstrap)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def provision(name, username, distribution, max_attempts, retry_delay, log_dir, verbose):
    """
    Provision a WSL instance as an Ansible control node

    This command will:
    - Enable the Windows features WSL needs
    - Install WSL if missing
    - Install a distribution under the chosen name (skipped if it exists)
    - Make it the default instance
    - Create your user with sudo rights
    - Install Python, pip and Ansible

    Run from an elevated terminal. Nothing is rolled back on failure.

    Examples:
        # Fully interactive
        wslbootstrap provision

        # Preset name and distribution
        wslbootstrap provision -n control-node -d Ubuntu-24.04
    """
    options = ProvisionOptions(
        name=name,
        username=username,
        distribution=distribution,
        max_attempts=max_attempts,
        retry_delay=retry_delay,
    )
    cmd = ProvisionCommand(options, verbose=verbose, log_dir=log_dir)
    cmd.run()
