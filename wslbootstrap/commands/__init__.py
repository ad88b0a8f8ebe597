"""wslbootstrap CLI commands."""
