# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for combiner tests."""

import os
import pytest

# Set test environment variables before importing the package
os.environ.setdefault("DISABLE_LOGGING", "1")

from combiner.parsers import ParsedTable


def make_table(name: str, rows: list[dict], columns: list[str] | None = None) -> ParsedTable:
    """Build a ParsedTable; columns default to the first row's keys."""
    if columns is None:
        columns = list(rows[0].keys()) if rows else []
    return ParsedTable(name=name, rows=[dict(r) for r in rows], columns=list(columns))


@pytest.fixture
def users_table() -> ParsedTable:
    """Directory export mixing users, groups and computers."""
    return make_table(
        "directory.csv",
        [
            {"Type": "User", "Display Name": "Alice Smith", "Name": "alice", "Domain": "corp.example"},
            {"Type": "Group", "Display Name": "Admins", "Name": "admins", "Domain": "corp.example"},
            {"Type": "user", "Display Name": "Bob Jones", "Name": "bob", "Domain": "corp.example"},
            {"Type": "Computer", "Display Name": "WS-01", "Name": "ws-01", "Domain": "corp.example"},
            {"Type": "USER", "Display Name": "Carol White", "Name": "carol", "Domain": "corp.example"},
        ],
    )


@pytest.fixture
def second_users_table() -> ParsedTable:
    """Second export with lowercase headers and an overlapping user."""
    return make_table(
        "legacy.csv",
        [
            {"type": "User", "display name": "Alice S.", "name": " Alice ", "domain": "legacy.example"},
            {"type": "User", "display name": "Dave Green", "name": "dave", "domain": "legacy.example"},
        ],
    )


@pytest.fixture
def csv_dir(tmp_path):
    """Directory with two CSV exports on disk."""
    (tmp_path / "first.csv").write_text(
        "Type,Display Name,Name,Domain\n"
        "User,Alice Smith,Alice,a.com\n"
        "Group,Staff,staff,a.com\n"
        "User,Bob Jones,bob,a.com\n",
        encoding="utf-8",
    )
    (tmp_path / "second.csv").write_text(
        "Name,Domain,Email\n"
        "alice ,b.com,alice@b.com\n"
        "erin,b.com,erin@b.com\n",
        encoding="utf-8",
    )
    return tmp_path
