"""
Deduplication components.

These modules find records from different source files that refer to the
same directory entry.
"""

from combiner.deduplication.detector import (
    DuplicateGroup,
    DuplicateMember,
    find_duplicates,
    has_identity_values,
)

__all__ = [
    "DuplicateGroup",
    "DuplicateMember",
    "find_duplicates",
    "has_identity_values",
]
