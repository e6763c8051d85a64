"""
Record kind filtering.

A table that carries a Type column keeps only rows of the target kind; a table
without one passes every row through.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from combiner.config import TARGET_TYPE, TYPE_COLUMN
from combiner.utils.text import normalize_column_name, to_text


@dataclass
class KindFilterResult:
    """Rows retained from one table."""
    rows: list[Mapping[str, Any]]
    has_type_field: bool
    type_column: Optional[str] = None


def find_kind_column(columns: Iterable[str], kind_column: str = TYPE_COLUMN) -> Optional[str]:
    """Return the first column matching kind_column case-insensitively."""
    wanted = normalize_column_name(kind_column)
    for column in columns:
        if normalize_column_name(column) == wanted:
            return column
    return None


def is_target_kind(value: Any, target: str = TARGET_TYPE) -> bool:
    """Check a discriminator value against the target kind (case-insensitive)."""
    return to_text(value).lower() == target.lower()


def filter_rows(
    rows: Iterable[Mapping[str, Any]],
    columns: Iterable[str],
    kind_column: str = TYPE_COLUMN,
    target: str = TARGET_TYPE,
) -> KindFilterResult:
    """
    Keep the rows of the target kind, preserving order.

    Args:
        rows: Parsed rows of a single table
        columns: That table's column names
        kind_column: Canonical discriminator column name
        target: Discriminator value to keep

    Returns:
        KindFilterResult; has_type_field is False when the table has no
        discriminator column, in which case every row is kept
    """
    column = find_kind_column(columns, kind_column)
    if column is None:
        return KindFilterResult(rows=list(rows), has_type_field=False)

    kept = [row for row in rows if is_target_kind(row.get(column), target)]
    return KindFilterResult(rows=kept, has_type_field=True, type_column=column)
