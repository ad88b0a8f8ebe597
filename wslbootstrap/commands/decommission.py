"""
Decommission Command

Unregister a WSL instance after a typed confirmation.
"""

from pathlib import Path
from typing import Optional

import click
from rich.prompt import Prompt

from wslbootstrap.base import BaseCommand
from wslbootstrap.core import Decommissioner, confirm_destructive_action


class DecommissionCommand(BaseCommand):
    """Interactive removal of one instance."""

    def __init__(
        self,
        instance_name: Optional[str] = None,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
    ):
        super().__init__(verbose=verbose, log_dir=log_dir)
        self.instance_name = instance_name

    def execute(self) -> None:
        """Execute decommission command."""
        self.show_header(
            title="Decommission Instance",
            subtitle="[bold red]The instance and all its data will be deleted![/bold red]",
            instance=self.instance_name,
        )

        logger = self.init_logger(self.instance_name or "global", "decommission")
        decommissioner = Decommissioner(
            wsl=self.wsl,
            show_listing=self._show_listing,
            ask_name=self._ask_name,
            confirm=self._confirm,
            logger=logger,
        )

        report = decommissioner.run(self.instance_name)

        if report.completed:
            self.console.print()
            self.print_success(f"Instance '{report.instance_name}' unregistered")
            return

        raise report.error

    def _show_listing(self, listing: str) -> None:
        self.console.print("Registered instances:")
        self.console.print(listing or "(no output)", markup=False, highlight=False)
        self.console.print()

    def _ask_name(self) -> str:
        return Prompt.ask(
            "[?] Instance to delete",
            default="",
            show_default=False,
            console=self.console,
        )

    def _confirm(self, literal: str) -> bool:
        return confirm_destructive_action(
            literal,
            read_line=lambda: self.console.input(
                f"Type [bold red]{literal}[/bold red] to confirm deletion: "
            ),
        )


@click.command()
@click.option("--name", "-n", help="Instance to delete (prompted for when omitted)")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for run logs (default: ~/.wslbootstrap)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def decommission(name, log_dir, verbose):
    """
    Delete a WSL instance (like 'wsl --unregister')

    The registered instances are listed first. Deletion only happens after
    you type DELETE exactly.

    Warning: All data inside the instance will be lost.

    Examples:
        wslbootstrap decommission
        wslbootstrap decommission -n control-node
    """
    cmd = DecommissionCommand(name, verbose=verbose, log_dir=log_dir)
    cmd.run()
