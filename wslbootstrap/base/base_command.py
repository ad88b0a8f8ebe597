"""
Base Command Class

Abstract base for all wslbootstrap CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from wslbootstrap.exceptions import UserDeclined, WSLBootstrapError
from wslbootstrap.logger import RunLogger
from wslbootstrap.services import CommandRunner, WSLService
from wslbootstrap.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger and service initialization
    - Header display
    - Error handling
    - Consistent structure
    """

    def __init__(
        self,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.log_dir = log_dir
        self.console = console or Console()
        self.logger: Optional[RunLogger] = None
        self.runner: Optional[CommandRunner] = None
        self.wsl: Optional[WSLService] = None

    def init_logger(self, instance_name: str, command_name: str) -> RunLogger:
        """
        Initialize command logger and the services that log through it.

        Args:
            instance_name: Instance name (use "global" for listing commands)
            command_name: Command name

        Returns:
            RunLogger instance
        """
        self.logger = RunLogger(
            instance_name,
            command_name,
            log_dir=self.log_dir,
            verbose=self.verbose,
            console=self.console,
        )
        self.runner = CommandRunner(logger=self.logger, console=self.console)
        self.wsl = WSLService(self.runner)
        return self.logger

    def close_logger(self) -> None:
        if self.logger:
            self.logger.close()

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        instance: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(
                title=title,
                subtitle=subtitle,
                instance=instance,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_log_location(self) -> None:
        if self.logger and self.logger.log_path:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    def handle_error(self, error: Exception, context: Optional[str] = None) -> None:
        """
        Handle error with consistent formatting.

        Args:
            error: Exception object
            context: Optional context message
        """
        if isinstance(error, WSLBootstrapError):
            message, context = error.message, context or error.context
        else:
            message = str(error)

        if self.logger:
            self.logger.log_error(message, context=context)
        else:
            self.print_error(message)
            if context:
                self.print_dim(f"Context: {context}")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            self.print_log_location()
            raise SystemExit(130)
        except SystemExit:
            raise
        except UserDeclined as e:
            self.print_warning(e.message)
            raise SystemExit(0)
        except WSLBootstrapError as e:
            self.handle_error(e)
            self.print_log_location()
            raise SystemExit(1)
        except PermissionError as e:
            self.console.print(f"\n[bold red]✗ Permission denied:[/bold red] {e}\n")
            self.console.print(
                "[dim]Run from an elevated (Administrator) terminal[/dim]\n"
            )
            if self.logger:
                self.logger.log_error(f"Permission error: {e}")
                self.print_log_location()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
                self.print_log_location()
            raise SystemExit(1)
        finally:
            self.close_logger()
