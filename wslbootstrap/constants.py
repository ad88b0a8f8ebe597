"""
wslbootstrap Constants

Centralized constants for magic values, defaults, and configuration.
"""

from pathlib import Path

# Default instance / account values (substituted when the operator leaves a prompt empty)
DEFAULT_INSTANCE_NAME = "ansible-control"
DEFAULT_USERNAME = "ansible"

# WSL executable (resolved through PATH, wsl.exe on Windows hosts)
WSL_EXECUTABLE = "wsl"
DISM_EXECUTABLE = "dism.exe"

# Optional Windows features: (feature id, required)
FEATURE_WSL = "Microsoft-Windows-Subsystem-Linux"
FEATURE_VM_PLATFORM = "VirtualMachinePlatform"
REQUIRED_FEATURES = [
    (FEATURE_WSL, True),
    (FEATURE_VM_PLATFORM, False),
]

# dism exit code meaning "succeeded, reboot required"
DISM_REBOOT_REQUIRED = 3010

# Catalog parsing ('wsl --list --online' output format, version 1)
# Intro sentence, install hint, blank line, "NAME  FRIENDLY NAME" column row
CATALOG_HEADER_LINES = 4
CATALOG_DEFAULT_MARKER = "*"

# set-default retry policy
SET_DEFAULT_MAX_ATTEMPTS = 5
SET_DEFAULT_DELAY_SECONDS = 3
SET_DEFAULT_TRANSIENT_SIGNATURE = "WSL_E_DISTRO_NOT_FOUND"

# Confirmation literal for destructive actions
DELETE_CONFIRMATION = "DELETE"

# Guest configuration
GUEST_ADMIN_USER = "root"
GUEST_SUDO_GROUP = "sudo"
GUEST_SHELL = "/bin/bash"
GUEST_APT_PACKAGES = ["python3", "python3-pip"]
GUEST_PIP_PACKAGES = ["ansible"]

# Exit codes used when a tool cannot be launched
EXIT_COMMAND_NOT_FOUND = 127

# Log Configuration
DEFAULT_LOG_DIR = Path.home() / ".wslbootstrap"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"
