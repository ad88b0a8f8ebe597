"""
wslbootstrap Exception Hierarchy

Error values for every failure a provisioning or decommission run can hit.
Component boundaries return these inside a Result instead of raising them;
the CLI layer is the only place they are raised and caught.
"""

from enum import Enum
from typing import Optional


class WSLBootstrapError(Exception):
    """Base exception for all wslbootstrap errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ProbeError(WSLBootstrapError):
    """Raised when an optional OS feature cannot be queried or enabled."""

    def __init__(self, feature_id: str, message: str, context: Optional[str] = None):
        self.feature_id = feature_id
        super().__init__(message, context)


class CatalogErrorKind(Enum):
    """Why the distribution catalog is unusable."""

    EMPTY = "empty"
    NO_ENTRIES = "no_entries"


class CatalogError(WSLBootstrapError):
    """Raised when the distribution listing cannot be used."""

    def __init__(
        self, kind: CatalogErrorKind, message: str, context: Optional[str] = None
    ):
        self.kind = kind
        super().__init__(message, context)


class ExecErrorKind(Enum):
    """Outcome classes of an external command execution."""

    TRANSIENT = "transient"
    NON_TRANSIENT = "non_transient"
    RETRIES_EXHAUSTED = "retries_exhausted"


class ExecError(WSLBootstrapError):
    """Raised when an external command fails."""

    def __init__(
        self,
        kind: ExecErrorKind,
        command: str,
        message: str,
        context: Optional[str] = None,
        attempts: int = 1,
    ):
        self.kind = kind
        self.command = command
        self.attempts = attempts
        super().__init__(message, context)


class ValidationError(WSLBootstrapError):
    """Raised when operator input is invalid."""

    pass


class EmptyInputError(ValidationError):
    """Raised when a required field was left blank."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"{field_name} cannot be empty")


class UserDeclined(WSLBootstrapError):
    """Operator cancelled a confirmation. A normal exit path, not a failure."""

    def __init__(self, message: str = "Operation cancelled by operator"):
        super().__init__(message)
