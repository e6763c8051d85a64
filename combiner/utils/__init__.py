"""Utility modules for the combiner."""

from combiner.utils.logging import setup_logging
from combiner.utils.text import normalize_column_name, normalize_identity, to_text

__all__ = [
    # Logging
    "setup_logging",
    # Text utilities
    "normalize_column_name",
    "normalize_identity",
    "to_text",
]
