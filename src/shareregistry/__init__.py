"""Share registry holdings, compliance lookups and audit export."""

__version__ = "0.3.0"
