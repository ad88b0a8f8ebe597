"""
Provisioning Sequencer

Runs the provisioning steps strictly in order:

    INIT -> FEATURES_CHECKED -> TOOL_INSTALLED -> INSTANCE_READY
         -> DEFAULT_SET -> USER_CREATED -> PACKAGES_INSTALLED -> DONE

Any unrecoverable step moves the run to ABORTED. Nothing is rolled back: a
partially provisioned instance stays registered for manual inspection.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from wslbootstrap.constants import (
    REQUIRED_FEATURES,
    SET_DEFAULT_DELAY_SECONDS,
    SET_DEFAULT_MAX_ATTEMPTS,
    SET_DEFAULT_TRANSIENT_SIGNATURE,
)
from wslbootstrap.exceptions import ExecError, ExecErrorKind
from wslbootstrap.logger import RunLogger
from wslbootstrap.models.instance import Credential, RetryPolicy, VMIdentity
from wslbootstrap.models.results import Result
from wslbootstrap.models.state import ProvisionReport, ProvisionState
from wslbootstrap.services.feature_service import FeatureService, FeatureState
from wslbootstrap.services.guest_service import GuestService
from wslbootstrap.services.retry import RetryExecutor
from wslbootstrap.services.wsl_service import WSLService

TOTAL_STEPS = 6

# Returns the distribution to install, or an error (CatalogError, UserDeclined)
DistributionChooser = Callable[[], Result[str]]


def default_set_policy() -> RetryPolicy:
    return RetryPolicy(
        max_attempts=SET_DEFAULT_MAX_ATTEMPTS,
        delay_seconds=SET_DEFAULT_DELAY_SECONDS,
        transient_signature=SET_DEFAULT_TRANSIENT_SIGNATURE,
    )


@dataclass
class ProvisionRequest:
    """Everything one provisioning run needs."""

    identity: VMIdentity
    credential: Credential
    set_default_policy: RetryPolicy = field(default_factory=default_set_policy)
    features: List[Tuple[str, bool]] = field(
        default_factory=lambda: list(REQUIRED_FEATURES)
    )


class Provisioner:
    """Provisioning state machine."""

    def __init__(
        self,
        wsl: WSLService,
        features: FeatureService,
        guest: GuestService,
        retry: RetryExecutor,
        choose_distribution: DistributionChooser,
        logger: Optional[RunLogger] = None,
    ):
        self.wsl = wsl
        self.features = features
        self.guest = guest
        self.retry = retry
        self.choose_distribution = choose_distribution
        self.logger = logger

    def _step(self, number: int, name: str) -> None:
        if self.logger:
            self.logger.step(f"[{number}/{TOTAL_STEPS}] {name}")

    def _success(self, message: str) -> None:
        if self.logger:
            self.logger.success(message)

    def _warning(self, report: ProvisionReport, message: str) -> None:
        report.warnings.append(message)
        if self.logger:
            self.logger.warning(message)

    def run(self, request: ProvisionRequest) -> ProvisionReport:
        """
        Provision request.identity.

        The credential is cleared when the run ends, whatever the outcome.
        """
        report = ProvisionReport(instance_name=request.identity.name)
        with request.credential:
            return self._run(request, report)

    def _run(self, request: ProvisionRequest, report: ProvisionReport) -> ProvisionReport:
        identity = request.identity

        # 1. Optional OS features
        self._step(1, "Windows Features")
        for feature_id, required in request.features:
            probe = self.features.ensure_feature_enabled(feature_id)
            if probe.is_failure:
                if required:
                    return report.abort("Windows Features", probe.error)
                self._warning(report, f"{probe.error.message}, continuing without it")
            elif probe.value is FeatureState.ENABLED:
                self._success(f"{feature_id} enabled")
            elif probe.value is FeatureState.ENABLE_PENDING:
                self._warning(report, f"{feature_id} pending (reboot required)")
            else:
                self._warning(report, f"Enabled {feature_id} (reboot required)")
        report.advance(ProvisionState.FEATURES_CHECKED)

        # 2. WSL itself
        self._step(2, "WSL Platform")
        tool = self._ensure_tool()
        if tool.is_failure:
            return report.abort("WSL Platform", tool.error)
        report.advance(ProvisionState.TOOL_INSTALLED)

        # 3. Instance (never recreated)
        self._step(3, f"Instance '{identity.name}'")
        if self.wsl.instance_exists(identity.name):
            self._warning(report, f"Instance '{identity.name}' already exists, skipping creation")
        else:
            created = self._create_instance(identity)
            if created.is_failure:
                return report.abort(f"Instance '{identity.name}'", created.error)
            report.created_instance = True
            self._success(f"Installed {identity.distribution} as '{identity.name}'")
        report.advance(ProvisionState.INSTANCE_READY)

        # 4. Default instance (freshly created instances may not be registered yet)
        self._step(4, "Default Instance")
        outcome = self.retry.execute_with_retry(
            self.wsl.set_default_command(identity.name),
            request.set_default_policy,
            description=f"Setting '{identity.name}' as default",
        )
        if not outcome.is_success:
            return report.abort("Default Instance", outcome.error)
        self._success(f"'{identity.name}' is the default instance")
        report.advance(ProvisionState.DEFAULT_SET)

        # 5. Operator account
        credential = request.credential
        self._step(5, f"User '{credential.username}'")
        try:
            user = self.guest.create_user(identity.name, credential)
        finally:
            credential.clear()
        if user.is_failure:
            return report.abort(f"User '{credential.username}'", user.error)
        report.advance(ProvisionState.USER_CREATED)

        # 6. Python + Ansible
        self._step(6, "Python & Ansible")
        packages = self.guest.install_packages(identity.name, credential.username)
        if packages.is_failure:
            return report.abort("Python & Ansible", packages.error)
        if packages.value:
            self._success(packages.value)
        report.advance(ProvisionState.PACKAGES_INSTALLED)

        report.advance(ProvisionState.DONE)
        return report

    def _ensure_tool(self) -> Result[None]:
        if self.wsl.status().is_success:
            self._success("WSL is installed")
            return Result.ok()

        install = self.wsl.install_tool()
        if install.is_failure:
            return Result.fail(
                ExecError(
                    ExecErrorKind.NON_TRANSIENT,
                    install.command,
                    "WSL installation failed",
                    context=install.output or None,
                )
            )

        status = self.wsl.status()
        if status.is_failure:
            return Result.fail(
                ExecError(
                    ExecErrorKind.NON_TRANSIENT,
                    status.command,
                    "WSL is still unavailable after installation",
                    context="A reboot is probably required; re-run afterwards",
                )
            )

        self._success("WSL installed")
        return Result.ok()

    def _create_instance(self, identity: VMIdentity) -> Result[None]:
        if not identity.distribution:
            chosen = self.choose_distribution()
            if chosen.is_failure:
                return Result.fail(chosen.error)
            identity.distribution = chosen.value

        install = self.wsl.install_distribution(identity.distribution, identity.name)
        if install.is_failure:
            return Result.fail(
                ExecError(
                    ExecErrorKind.NON_TRANSIENT,
                    install.command,
                    f"Installing {identity.distribution} as '{identity.name}' failed",
                    context=install.output or None,
                )
            )
        return Result.ok()
