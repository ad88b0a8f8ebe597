"""
wslbootstrap Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    CommandResult,
    Result,
    RetryOutcome,
)
from .instance import (
    VMIdentity,
    DistributionEntry,
    RetryPolicy,
    Credential,
)
from .state import (
    ProvisionState,
    DecommissionState,
    ProvisionReport,
    DecommissionReport,
)

__all__ = [
    # Results
    "CommandResult",
    "Result",
    "RetryOutcome",
    # Instance
    "VMIdentity",
    "DistributionEntry",
    "RetryPolicy",
    "Credential",
    # State
    "ProvisionState",
    "DecommissionState",
    "ProvisionReport",
    "DecommissionReport",
]
