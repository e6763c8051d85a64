"""
CSV table parser.

Turns raw delimited text into a ParsedTable: the header row names the columns
and every later row becomes a mapping from column name to a scalar value.
Malformed rows are skipped and reported as ParseIssue entries; only a file
whose header cannot be read at all raises TableParseError.
"""

import csv
import io
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from combiner.config import settings
from combiner.errors import TableParseError

# Same shape a spreadsheet export would consider numeric
NUMERIC_PATTERN = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")

# Larger integers lose precision as floats, keep them as text (e.g. object IDs)
MAX_SAFE_NUMBER = 2 ** 53


@dataclass
class ParseIssue:
    """A recoverable problem found while reading one row."""
    row: int                    # physical line number
    code: str                   # TooFewFields, TooManyFields, MalformedCsv, DuplicateHeader
    message: str


@dataclass
class ParsedTable:
    """
    One input file after parsing.

    rows keep the header's column order as their key order.
    """
    name: str
    rows: list[dict[str, Any]] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)
    size: int | None = None     # bytes, informational only


def coerce_cell(value: str) -> Any:
    """Convert a raw cell to bool, int, float or None where it looks like one."""
    if value == "":
        return None
    if value in ("true", "TRUE"):
        return True
    if value in ("false", "FALSE"):
        return False
    if NUMERIC_PATTERN.match(value):
        number = float(value)
        if abs(number) > MAX_SAFE_NUMBER:
            return value
        stripped = value.strip()
        if re.fullmatch(r"-?\d+", stripped):
            return int(stripped)
        return number
    return value


def _is_blank(cells: list[str]) -> bool:
    return not cells or cells == [""]


def _unique_columns(header: list[str], name: str, issues: list[ParseIssue], line: int = 1) -> list[str]:
    columns = []
    for column in header:
        if column in columns:
            issues.append(ParseIssue(line, "DuplicateHeader", f"Duplicate column '{column}' ignored"))
            logger.warning(f"{name}: duplicate column '{column}', keeping the first one")
            continue
        columns.append(column)
    return columns


def parse_csv_table(
    content: str,
    name: str,
    delimiter: str | None = None,
    dynamic_typing: bool | None = None,
    skip_empty_lines: bool | None = None,
) -> ParsedTable:
    """
    Parse CSV text into a ParsedTable.

    Args:
        content: Decoded file content
        name: File label used for provenance and messages
        delimiter: Field delimiter (defaults to settings)
        dynamic_typing: Coerce numbers, booleans and empty cells (defaults to settings)
        skip_empty_lines: Drop blank lines (defaults to settings)

    Returns:
        ParsedTable with rows, columns and any row-level issues

    Raises:
        TableParseError: If the header row cannot be read
    """
    delimiter = delimiter or settings.delimiter
    if dynamic_typing is None:
        dynamic_typing = settings.dynamic_typing
    if skip_empty_lines is None:
        skip_empty_lines = settings.skip_empty_lines

    table = ParsedTable(name=name)
    reader = csv.reader(io.StringIO(content, newline=""), delimiter=delimiter)

    # The header is the first non-blank record when blank lines are skipped
    try:
        header = next(reader, None)
        while skip_empty_lines and header is not None and _is_blank(header):
            header = next(reader, None)
    except csv.Error as e:
        raise TableParseError(name, f"unreadable header: {e}") from e

    if header is None:
        logger.info(f"{name}: empty file")
        return table

    table.columns = _unique_columns(header, name, table.issues, reader.line_num)
    width = len(header)

    while True:
        try:
            cells = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            table.issues.append(ParseIssue(reader.line_num, "MalformedCsv", str(e)))
            logger.warning(f"{name}: line {reader.line_num}: {e}")
            continue

        if skip_empty_lines and _is_blank(cells):
            continue

        if len(cells) != width:
            code = "TooFewFields" if len(cells) < width else "TooManyFields"
            table.issues.append(ParseIssue(
                reader.line_num,
                code,
                f"Expected {width} fields but found {len(cells)}",
            ))
            logger.warning(f"{name}: line {reader.line_num}: {code}, row skipped")
            continue

        row = {}
        for column, cell in zip(header, cells):
            if column in row:
                continue
            row[column] = coerce_cell(cell) if dynamic_typing else cell
        table.rows.append(row)

    logger.debug(f"{name}: parsed {len(table.rows)} rows, {len(table.issues)} issues")
    return table


def read_csv_file(path: Path, encoding: str | None = None, **kwargs) -> ParsedTable:
    """
    Read and parse a CSV file from disk.

    Raises:
        TableParseError: If the file cannot be read or decoded
    """
    path = Path(path)
    encoding = encoding or settings.encoding

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise TableParseError(path.name, f"cannot read file: {e}") from e

    try:
        content = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise TableParseError(path.name, f"cannot decode as {encoding}: {e}") from e

    logger.info(f"Reading {path.name} ({len(raw) / 1024:.1f} KB)")
    table = parse_csv_table(content, path.name, **kwargs)
    table.size = len(raw)
    return table
