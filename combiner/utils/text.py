"""Text coercion and normalization helpers shared by the pipeline stages."""

from typing import Any


def normalize_column_name(name: Any) -> str:
    """Canonical key for matching column names (case-insensitive, no trimming)."""
    if name is None:
        return ""
    return str(name).lower()


def to_text(value: Any) -> str:
    """Render a cell value as text.

    Applies the following rules:
    - None becomes an empty string
    - Booleans become "true" / "false"
    - Integral floats drop the trailing ".0" (1.0 -> "1")
    - Everything else goes through str()

    Args:
        value: Cell value from a parsed table

    Returns:
        Canonical textual representation
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_identity(value: Any) -> str:
    """Normalize an identity value for duplicate matching.

    Args:
        value: Raw identity value (e.g. a Name cell)

    Returns:
        Trimmed, lowercased text; empty string for blank values
    """
    return to_text(value).strip().lower()
