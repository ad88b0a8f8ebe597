"""
Distributions Command - show the installable distribution catalog
"""

from pathlib import Path
from typing import Optional

import click

from wslbootstrap.base import BaseCommand
from wslbootstrap.services import CatalogService
from wslbootstrap.ui_components import distribution_table


class DistributionsCommand(BaseCommand):
    """Print the parsed catalog as a numbered table."""

    def execute(self) -> None:
        self.init_logger("global", "distributions")

        catalog = CatalogService(self.wsl).fetch_available_distributions()
        if catalog.is_failure:
            raise catalog.error

        self.console.print(distribution_table(catalog.value))


@click.command()
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for run logs (default: ~/.wslbootstrap)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def distributions(log_dir: Optional[Path], verbose: bool):
    """📦 List distributions available for installation"""
    DistributionsCommand(verbose=verbose, log_dir=log_dir).run()
