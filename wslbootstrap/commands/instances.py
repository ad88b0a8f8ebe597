"""
Instances Command - show registered WSL instances
"""

from pathlib import Path
from typing import Optional

import click

from wslbootstrap.base import BaseCommand
from wslbootstrap.exceptions import ExecError, ExecErrorKind
from wslbootstrap.services.wsl_service import parse_instance_names


class InstancesCommand(BaseCommand):
    """List registered instances verbatim."""

    def execute(self) -> None:
        self.init_logger("global", "instances")

        result = self.wsl.list_instances()
        if result.is_failure:
            raise ExecError(
                ExecErrorKind.NON_TRANSIENT,
                result.command,
                "Could not list WSL instances",
                context=result.output or None,
            )

        self.console.print(result.stdout.rstrip(), markup=False, highlight=False)
        count = len(parse_instance_names(result.stdout))
        self.print_dim(f"\n{count} instance(s) registered")


@click.command()
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for run logs (default: ~/.wslbootstrap)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def instances(log_dir: Optional[Path], verbose: bool):
    """📋 List registered WSL instances"""
    InstancesCommand(verbose=verbose, log_dir=log_dir).run()
