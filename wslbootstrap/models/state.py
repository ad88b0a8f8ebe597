"""
Sequencer State Models

States and run reports for the provisioning and decommission workflows.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from wslbootstrap.exceptions import UserDeclined, WSLBootstrapError


class ProvisionState(Enum):
    """Provisioning states, in transition order."""

    INIT = "init"
    FEATURES_CHECKED = "features_checked"
    TOOL_INSTALLED = "tool_installed"
    INSTANCE_READY = "instance_ready"
    DEFAULT_SET = "default_set"
    USER_CREATED = "user_created"
    PACKAGES_INSTALLED = "packages_installed"
    DONE = "done"
    ABORTED = "aborted"


class DecommissionState(Enum):
    """Decommission states, in transition order."""

    INIT = "init"
    LISTED = "listed"
    NAME_CHOSEN = "name_chosen"
    CONFIRMED = "confirmed"
    REMOVED = "removed"
    ABORTED = "aborted"


@dataclass
class ProvisionReport:
    """What a provisioning run reached and why it stopped."""

    instance_name: str
    state: ProvisionState = ProvisionState.INIT
    last_successful: ProvisionState = ProvisionState.INIT
    failed_step: Optional[str] = None
    error: Optional[WSLBootstrapError] = None
    created_instance: bool = False
    warnings: List[str] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.state == ProvisionState.DONE

    @property
    def declined(self) -> bool:
        return isinstance(self.error, UserDeclined)

    def advance(self, state: ProvisionState) -> None:
        self.state = state
        self.last_successful = state

    def abort(self, step: str, error: WSLBootstrapError) -> "ProvisionReport":
        self.state = ProvisionState.ABORTED
        self.failed_step = step
        self.error = error
        return self


@dataclass
class DecommissionReport:
    """What a decommission run reached and why it stopped."""

    state: DecommissionState = DecommissionState.INIT
    last_successful: DecommissionState = DecommissionState.INIT
    instance_name: Optional[str] = None
    listing: str = ""
    error: Optional[WSLBootstrapError] = None

    @property
    def completed(self) -> bool:
        return self.state == DecommissionState.REMOVED

    @property
    def declined(self) -> bool:
        return isinstance(self.error, UserDeclined)

    def advance(self, state: DecommissionState) -> None:
        self.state = state
        self.last_successful = state

    def abort(self, error: WSLBootstrapError) -> "DecommissionReport":
        self.state = DecommissionState.ABORTED
        self.error = error
        return self
