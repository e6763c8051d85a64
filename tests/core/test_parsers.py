# SPDX-License-Identifier: MIT
"""Tests for the CSV table parser."""

import csv

import pytest

from combiner.errors import TableParseError
from combiner.parsers import coerce_cell, parse_csv_table, read_csv_file


class TestCoerceCell:
    """Test dynamic typing of cells."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("", None),
            ("true", True),
            ("TRUE", True),
            ("false", False),
            ("FALSE", False),
            ("42", 42),
            ("-7", -7),
            ("3.5", 3.5),
            ("1e3", 1000.0),
            ("User", "User"),
            ("True", "True"),
            ("12abc", "12abc"),
        ],
    )
    def test_coerce(self, raw, expected):
        """Cells should be coerced only when they clearly look typed."""
        assert coerce_cell(raw) == expected
        assert type(coerce_cell(raw)) is type(expected)

    def test_huge_numbers_stay_text(self):
        """Integers beyond float precision are kept as text."""
        assert coerce_cell("123456789012345678901") == "123456789012345678901"


class TestParseCsvTable:
    """Test parsing CSV text into a ParsedTable."""

    def test_header_and_rows(self):
        """Header names become row keys, in header order."""
        table = parse_csv_table("Type,Name\nUser,alice\nGroup,admins\n", "t.csv")

        assert table.name == "t.csv"
        assert table.columns == ["Type", "Name"]
        assert table.rows == [
            {"Type": "User", "Name": "alice"},
            {"Type": "Group", "Name": "admins"},
        ]
        assert list(table.rows[0].keys()) == ["Type", "Name"]
        assert table.issues == []

    def test_empty_lines_skipped(self):
        """Blank lines do not produce rows."""
        table = parse_csv_table("Name\nalice\n\nbob\n\n", "t.csv")
        assert [r["Name"] for r in table.rows] == ["alice", "bob"]

    def test_empty_lines_kept_when_disabled(self):
        """With skip_empty_lines off a blank line is a short row and is reported."""
        table = parse_csv_table("Type,Name\nUser,alice\n\n", "t.csv", skip_empty_lines=False)
        assert len(table.rows) == 1
        assert [i.code for i in table.issues] == ["TooFewFields"]

    def test_short_and_long_rows_skipped(self):
        """Rows with the wrong number of cells are skipped and reported."""
        content = "Type,Name\nUser\nUser,alice\nUser,bob,extra\n"
        table = parse_csv_table(content, "t.csv")

        assert table.rows == [{"Type": "User", "Name": "alice"}]
        assert [(i.row, i.code) for i in table.issues] == [
            (2, "TooFewFields"),
            (4, "TooManyFields"),
        ]

    def test_leading_blank_lines_before_header(self):
        """Blank lines above the header do not hide it."""
        table = parse_csv_table("\n\nType,Name\nUser,alice\nUser,bob\n", "t.csv")

        assert table.columns == ["Type", "Name"]
        assert [r["Name"] for r in table.rows] == ["alice", "bob"]
        assert table.issues == []

    def test_only_blank_lines(self):
        """A file of blank lines is an empty table."""
        table = parse_csv_table("\n\n\n", "blank.csv")
        assert table.columns == []
        assert table.rows == []

    def test_oversized_field_skipped_and_reading_continues(self):
        """A row the csv reader rejects is reported and later rows are still read."""
        huge = "x" * (csv.field_size_limit() + 1)
        content = f"Type,Name\nUser,alice\nUser,{huge}\nUser,bob\n"

        table = parse_csv_table(content, "t.csv")

        assert [r["Name"] for r in table.rows] == ["alice", "bob"]
        assert [i.code for i in table.issues] == ["MalformedCsv"]

    def test_dynamic_typing(self):
        """Numbers, booleans and empty cells are coerced."""
        table = parse_csv_table("Name,Age,Active,Note\nalice,30,true,\n", "t.csv")
        assert table.rows[0] == {"Name": "alice", "Age": 30, "Active": True, "Note": None}

    def test_dynamic_typing_disabled(self):
        """Without dynamic typing every cell stays text."""
        table = parse_csv_table("Name,Age\nalice,30\n", "t.csv", dynamic_typing=False)
        assert table.rows[0] == {"Name": "alice", "Age": "30"}

    def test_quoted_fields(self):
        """A quoted delimiter is part of the value."""
        table = parse_csv_table('Name,Display Name\nalice,"Smith, Alice"\n', "t.csv")
        assert table.rows[0]["Display Name"] == "Smith, Alice"

    def test_custom_delimiter(self):
        table = parse_csv_table("Type;Name\nUser;alice\n", "t.csv", delimiter=";")
        assert table.rows == [{"Type": "User", "Name": "alice"}]

    def test_empty_content(self):
        """An empty file is an empty table, not an error."""
        table = parse_csv_table("", "empty.csv")
        assert table.rows == []
        assert table.columns == []

    def test_duplicate_header_keeps_first(self):
        """A repeated header name keeps the first column's value."""
        table = parse_csv_table("Name,Name\nalice,other\n", "t.csv")
        assert table.columns == ["Name"]
        assert table.rows == [{"Name": "alice"}]
        assert table.issues[0].code == "DuplicateHeader"


class TestReadCsvFile:
    """Test reading CSV files from disk."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "users.csv"
        path.write_text("Type,Name\nUser,alice\n", encoding="utf-8")

        table = read_csv_file(path)

        assert table.name == "users.csv"
        assert table.rows == [{"Type": "User", "Name": "alice"}]
        assert table.size == path.stat().st_size

    def test_strips_bom(self, tmp_path):
        """A UTF-8 byte order mark does not end up in the first header."""
        path = tmp_path / "bom.csv"
        path.write_bytes("\ufeffType,Name\nUser,alice\n".encode("utf-8"))

        table = read_csv_file(path)
        assert table.columns == ["Type", "Name"]

    def test_missing_file_raises(self, tmp_path):
        """An unreadable file is fatal."""
        with pytest.raises(TableParseError) as exc_info:
            read_csv_file(tmp_path / "missing.csv")
        assert exc_info.value.source == "missing.csv"

    def test_undecodable_file_raises(self, tmp_path):
        """Bytes that are not valid in the configured encoding are fatal."""
        path = tmp_path / "binary.csv"
        path.write_bytes(b"\xff\xfe\xfa\x00Name")

        with pytest.raises(TableParseError):
            read_csv_file(path, encoding="utf-8")
