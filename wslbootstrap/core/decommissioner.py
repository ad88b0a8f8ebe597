"""
Decommission Sequencer

    INIT -> LISTED -> NAME_CHOSEN -> CONFIRMED -> REMOVED

ABORTED is reached on an empty name or when the operator does not type the
confirmation literal. There is no existence pre-check: the
unregister command reports unknown names itself.
"""

from typing import Callable, Optional

from wslbootstrap.constants import DELETE_CONFIRMATION
from wslbootstrap.core.prompts import require_value
from wslbootstrap.exceptions import ExecError, ExecErrorKind, UserDeclined
from wslbootstrap.logger import RunLogger
from wslbootstrap.models.state import DecommissionReport, DecommissionState
from wslbootstrap.services.wsl_service import WSLService


class Decommissioner:
    """Decommission state machine."""

    def __init__(
        self,
        wsl: WSLService,
        show_listing: Callable[[str], None],
        ask_name: Callable[[], str],
        confirm: Callable[[str], bool],
        logger: Optional[RunLogger] = None,
    ):
        """
        Args:
            wsl: WSL facade
            show_listing: Displays the raw instance listing to the operator
            ask_name: Returns the instance name typed by the operator
            confirm: Confirmation gate, called with the literal to type
            logger: Run logger
        """
        self.wsl = wsl
        self.show_listing = show_listing
        self.ask_name = ask_name
        self.confirm = confirm
        self.logger = logger

    def run(self, instance_name: Optional[str] = None) -> DecommissionReport:
        """
        Unregister an instance.

        Args:
            instance_name: Name chosen up front; prompted for when None
        """
        report = DecommissionReport()

        listing = self.wsl.list_instances()
        report.listing = listing.stdout if listing.is_success else listing.output
        self.show_listing(report.listing)
        if listing.is_failure and self.logger:
            self.logger.warning(f"Instance listing failed (exit code {listing.exit_code})")
        report.advance(DecommissionState.LISTED)

        if instance_name is None:
            instance_name = self.ask_name()
        name = require_value(instance_name, "Instance name")
        if name.is_failure:
            return report.abort(name.error)
        report.instance_name = name.value
        report.advance(DecommissionState.NAME_CHOSEN)

        if not self.confirm(DELETE_CONFIRMATION):
            return report.abort(
                UserDeclined(f"Deletion of '{report.instance_name}' cancelled")
            )
        report.advance(DecommissionState.CONFIRMED)

        result = self.wsl.unregister(report.instance_name)
        if result.is_failure:
            return report.abort(
                ExecError(
                    ExecErrorKind.NON_TRANSIENT,
                    result.command,
                    f"Unregistering '{report.instance_name}' failed",
                    context=result.output or None,
                )
            )
        if self.logger:
            self.logger.success(f"Instance '{report.instance_name}' removed")
        report.advance(DecommissionState.REMOVED)
        return report
