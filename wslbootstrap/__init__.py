"""wslbootstrap - provision WSL instances as Ansible control nodes."""

__version__ = "1.0.0"
