"""
CSV exports of a run.

The combined export lists every retained record; the duplicates export lists
each member of each duplicate group, prefixed with the group's name. Target
fields are always written in their fixed order; provenance columns are left
out unless asked for.
"""

import csv
import io
from collections.abc import Iterable, Sequence
from pathlib import Path

from loguru import logger

from combiner.config import (
    DUPLICATE_NAME_COLUMN,
    DUPLICATE_TYPE_COLUMN,
    FILE_INDEX_KEY,
    ORIGINAL_INDEX_KEY,
    SOURCE_FILE_KEY,
    TARGET_FIELDS,
    settings,
)
from combiner.deduplication import DuplicateGroup
from combiner.normalizers import NormalizedRecord
from combiner.utils.text import to_text


def _write_csv(header: Sequence[str], rows: Iterable[Sequence]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([to_text(value) for value in row])
    return buffer.getvalue()


def records_to_csv(records: Sequence[NormalizedRecord], include_provenance: bool = False) -> str:
    """Serialize combined records as CSV text."""
    header = list(TARGET_FIELDS)
    if include_provenance:
        header += [SOURCE_FILE_KEY, FILE_INDEX_KEY]

    def rows():
        for record in records:
            row = [record.get(f, "") for f in TARGET_FIELDS]
            if include_provenance:
                row += [record.source_file, record.file_index]
            yield row

    return _write_csv(header, rows())


def duplicates_to_csv(groups: Sequence[DuplicateGroup], include_provenance: bool = False) -> str:
    """Serialize duplicate groups as CSV text, one line per member."""
    header = [DUPLICATE_NAME_COLUMN, DUPLICATE_TYPE_COLUMN, *TARGET_FIELDS]
    if include_provenance:
        header += [SOURCE_FILE_KEY, FILE_INDEX_KEY, ORIGINAL_INDEX_KEY]

    def rows():
        for group in groups:
            for member in group.members:
                row = [group.display_name, group.strategy]
                row += [member.record.get(f, "") for f in TARGET_FIELDS]
                if include_provenance:
                    row += [member.record.source_file, member.record.file_index, member.original_index]
                yield row

    return _write_csv(header, rows())


def write_exports(result, output_dir: Path | None = None) -> dict[str, Path]:
    """
    Write the combined and duplicate exports for a BatchResult.

    The duplicates file is only written when at least one group exists.

    Returns:
        Mapping of export kind ("combined", "duplicates") to written path
    """
    output_dir = Path(output_dir or settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = {}

    combined_path = output_dir / settings.combined_filename
    combined_path.write_text(records_to_csv(result.records), encoding="utf-8", newline="")
    written["combined"] = combined_path
    logger.info(f"Wrote {len(result.records)} records to {combined_path}")

    if result.duplicate_groups:
        duplicates_path = output_dir / settings.duplicates_filename
        duplicates_path.write_text(
            duplicates_to_csv(result.duplicate_groups), encoding="utf-8", newline=""
        )
        written["duplicates"] = duplicates_path
        logger.info(f"Wrote {result.summary.duplicate_count} duplicate records to {duplicates_path}")

    return written
