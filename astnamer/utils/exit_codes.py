"""Centralized exit codes for the astnamer CLI."""


class ExitCodes:
    """Standard exit codes for astnamer CLI commands."""

    SUCCESS = 0

    # click.ClickException exits with 1
    FAILURE = 1

    NO_MATCH = 3

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success",
            cls.FAILURE: "Command failed - see error log",
            cls.NO_MATCH: "No node found at the requested position",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")
