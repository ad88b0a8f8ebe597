"""
wslbootstrap Core

Provisioning and decommission workflows plus operator input checks.
"""

from .prompts import confirm_destructive_action, require_value
from .provisioner import Provisioner, ProvisionRequest, default_set_policy
from .decommissioner import Decommissioner

__all__ = [
    "confirm_destructive_action",
    "require_value",
    "Provisioner",
    "ProvisionRequest",
    "default_set_policy",
    "Decommissioner",
]
