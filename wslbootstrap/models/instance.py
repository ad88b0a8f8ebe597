"""
Instance Models

Dataclass models for the instance being provisioned and the values that
drive it.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class VMIdentity:
    """Name of the instance to provision and the distribution it is built from."""

    name: str
    distribution: Optional[str] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Instance name cannot be empty")
        self.name = self.name.strip()


@dataclass
class DistributionEntry:
    """One installable distribution from the catalog listing."""

    name: str
    friendly_name: str = ""
    is_default: bool = False

    @property
    def display_name(self) -> str:
        """Name shown to the operator."""
        if self.friendly_name and self.friendly_name != self.name:
            return f"{self.name} ({self.friendly_name})"
        return self.name


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded-retry configuration for one command. Not mutated during a run."""

    max_attempts: int
    delay_seconds: float
    transient_signature: str

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds cannot be negative")
        if not self.transient_signature:
            raise ValueError("transient_signature cannot be empty")


class Credential:
    """
    Guest account credential.

    The secret lives in a mutable buffer so it can be overwritten once the
    user-creation step has consumed it. Use as a context manager; leaving the
    block always clears the secret.
    """

    def __init__(self, username: str, secret: str):
        if not username or not username.strip():
            raise ValueError("Username cannot be empty")
        if not secret:
            raise ValueError("Password cannot be empty")
        self.username = username.strip()
        self._secret = bytearray(secret.encode("utf-8"))

    @property
    def is_cleared(self) -> bool:
        return len(self._secret) == 0

    def chpasswd_payload(self) -> bytearray:
        """
        Build the 'user:secret' line fed to chpasswd on stdin.

        The caller owns the returned buffer and must zero it after use
        (see wipe()).
        """
        if self.is_cleared:
            raise RuntimeError("Credential has already been consumed")
        payload = bytearray(self.username.encode("utf-8"))
        payload += b":"
        payload += self._secret
        payload += b"\n"
        return payload

    def clear(self) -> None:
        """Overwrite and drop the secret."""
        wipe(self._secret)
        self._secret = bytearray()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.clear()
        return False

    def __repr__(self) -> str:
        state = "cleared" if self.is_cleared else "set"
        return f"Credential(username={self.username!r}, secret=<{state}>)"


def wipe(buffer: bytearray) -> None:
    """Zero a byte buffer in place."""
    for i in range(len(buffer)):
        buffer[i] = 0
