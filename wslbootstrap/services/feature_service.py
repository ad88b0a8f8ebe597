"""
Windows Optional Feature Service

Queries and enables the optional features WSL depends on, through dism.exe.
Enabling a feature usually needs a reboot, so the result of an enable is not
verified.
"""

import re
from enum import Enum
from typing import List, Optional

from wslbootstrap.constants import DISM_EXECUTABLE, DISM_REBOOT_REQUIRED
from wslbootstrap.exceptions import ProbeError
from wslbootstrap.models.results import CommandResult, Result
from wslbootstrap.services.runner import CommandRunner

STATE_PATTERN = re.compile(r"^\s*State\s*:\s*(.+?)\s*$", re.MULTILINE)


class FeatureState(Enum):
    """Optional feature states as reported by dism."""

    ENABLED = "Enabled"
    DISABLED = "Disabled"
    ENABLE_PENDING = "Enable Pending"
    DISABLE_PENDING = "Disable Pending"


def parse_feature_state(output: str) -> Optional[FeatureState]:
    """Extract the 'State : X' value from dism /get-featureinfo output."""
    match = STATE_PATTERN.search(output)
    if not match:
        return None
    try:
        return FeatureState(match.group(1))
    except ValueError:
        return None


class FeatureService:
    """Feature prober."""

    def __init__(self, runner: CommandRunner, executable: str = DISM_EXECUTABLE):
        self.runner = runner
        self.executable = executable

    def _dism(self, *args: str) -> List[str]:
        return [self.executable, "/online", *args]

    def query(self, feature_id: str) -> CommandResult:
        return self.runner.run(
            self._dism("/get-featureinfo", f"/featurename:{feature_id}")
        )

    def enable(self, feature_id: str) -> CommandResult:
        return self.runner.run(
            self._dism(
                "/enable-feature", f"/featurename:{feature_id}", "/all", "/norestart"
            ),
            description=f"Enabling {feature_id}",
        )

    def ensure_feature_enabled(self, feature_id: str) -> Result[FeatureState]:
        """
        Make sure an optional feature is enabled.

        Args:
            feature_id: dism feature name

        Returns:
            Result holding the state the feature was found in, or a ProbeError
            when it cannot be queried or enabled
        """
        query = self.query(feature_id)
        if query.is_failure:
            return Result.fail(
                ProbeError(
                    feature_id,
                    f"Could not query feature {feature_id}",
                    context=query.output or f"exit code {query.exit_code}",
                )
            )

        state = parse_feature_state(query.stdout)
        if state is None:
            return Result.fail(
                ProbeError(
                    feature_id,
                    f"Could not read state of feature {feature_id}",
                    context=query.stdout.strip() or None,
                )
            )

        if state in (FeatureState.ENABLED, FeatureState.ENABLE_PENDING):
            return Result.ok(state)

        enable = self.enable(feature_id)
        if enable.exit_code not in (0, DISM_REBOOT_REQUIRED):
            return Result.fail(
                ProbeError(
                    feature_id,
                    f"Could not enable feature {feature_id}",
                    context=enable.output or f"exit code {enable.exit_code}",
                )
            )

        return Result.ok(state)
