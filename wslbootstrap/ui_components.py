"""
wslbootstrap - UI Components & Branding
Standardized headers and listing tables
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wslbootstrap.models.instance import DistributionEntry

LOGO = "wslbootstrap"

# Color scheme
BRAND_COLOR = "cyan"
SUCCESS_COLOR = "green"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    instance: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Provision Instance")
        subtitle: Optional subtitle line
        instance: Instance name (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Provision Instance",
            instance="ansible-control",
            details={"User": "ansible"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]")

    if instance:
        console.print(f"{prefix} Instance: [cyan]{escape(instance)}[/cyan]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [cyan]{escape(str(value))}[/cyan]")

    console.print()


def distribution_table(entries: List[DistributionEntry]) -> Table:
    """Numbered table of catalog entries, default marked."""
    table = Table(title="Available Distributions", title_justify="left")
    table.add_column("#", style="bold yellow", justify="right")
    table.add_column("Name", style=BRAND_COLOR)
    table.add_column("Friendly Name", style="white")
    table.add_column("Default", style=SUCCESS_COLOR)

    for index, entry in enumerate(entries, start=1):
        table.add_row(
            str(index),
            entry.name,
            entry.friendly_name,
            "✓" if entry.is_default else "",
        )

    return table
