"""astnamer - name resolution helpers for ESTree syntax trees."""

__version__ = "0.1.0"
