"""CLI commands for astnamer."""
