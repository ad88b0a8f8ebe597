"""
wslbootstrap Services Layer

Wrappers around the external tools the workflows drive.
"""

from .runner import CommandRunner
from .wsl_service import WSLService
from .feature_service import FeatureService, FeatureState
from .catalog_service import CatalogService, CatalogParserV1
from .retry import RetryExecutor
from .guest_service import GuestService

__all__ = [
    "CommandRunner",
    "WSLService",
    "FeatureService",
    "FeatureState",
    "CatalogService",
    "CatalogParserV1",
    "RetryExecutor",
    "GuestService",
]
