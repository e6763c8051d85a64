#!/usr/bin/env python3
"""
User Directory Combiner - command line entry point.

Combines several user-directory CSV exports, keeps the "User" rows, and
reports entries that share the same Name.

Usage:
    python -m combiner.main combine export1.csv export2.csv
    python -m combiner.main combine *.csv --output-dir out --show-csv
    python -m combiner.main combine *.csv --json --no-export
"""

import json
import sys
from pathlib import Path

import click
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from combiner.aggregator import BatchResult, process_sources
from combiner.config import IDENTITY_FIELD, TARGET_FIELDS, TARGET_TYPE, TYPE_COLUMN, settings
from combiner.errors import BatchAbortedError
from combiner.exporters import duplicates_to_csv, records_to_csv, write_exports
from combiner.parsers import read_csv_file
from combiner.utils.text import to_text


console = Console()

# Fields shown per duplicate member
MEMBER_PREVIEW_FIELDS = 5


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """User Directory Combiner & Duplicate Detector"""
    if debug:
        from combiner.utils.logging import setup_logging
        setup_logging(level="DEBUG")


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--output-dir", type=click.Path(path_type=Path), default=None, help="Directory for CSV exports")
@click.option("--no-export", is_flag=True, help="Do not write CSV exports")
@click.option("--show-csv", is_flag=True, help="Print the combined and duplicate CSV text")
@click.option("--json", "as_json", is_flag=True, help="Print the run summary as JSON")
def combine(files, output_dir, no_export, show_csv, as_json):
    """
    Combine FILES (in the given order) and detect duplicate names.
    """
    try:
        result = process_sources(files, read_csv_file)
    except BatchAbortedError as e:
        console.print(f"[red]Error processing {escape(e.source)}: {escape(str(e.__cause__ or e))}[/red]")
        logger.exception("Batch aborted")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.summary.as_dict(), indent=2, default=str))
    else:
        print_summary(result)
        print_file_details(result)
        print_duplicates(result)
        print_preview(result)

    if show_csv:
        console.rule("Combined CSV")
        click.echo(records_to_csv(result.records), nl=False)
        if result.duplicate_groups:
            console.rule("Duplicates CSV")
            click.echo(duplicates_to_csv(result.duplicate_groups), nl=False)

    if not no_export:
        written = write_exports(result, output_dir or settings.output_dir)
        for kind, path in written.items():
            console.print(f"Saved {kind} data to [bold]{path}[/bold]")


def print_summary(result: BatchResult):
    """Print the processing summary."""
    summary = result.summary

    console.print("\n[bold blue]Processing Summary[/bold blue]")
    console.print(
        f'Only rows with {TYPE_COLUMN} = "{TARGET_TYPE}" are kept (when the column exists). '
        f"Extracted fields: {', '.join(TARGET_FIELDS)}"
    )
    if summary.has_name_field:
        console.print(f'[green]✓ Using "{IDENTITY_FIELD}" field for duplicate detection[/green]')
    else:
        console.print(f'[red]⚠ No "{IDENTITY_FIELD}" field found - duplicate detection disabled[/red]')

    table = Table()
    table.add_column("User Records")
    table.add_column("Total Records")
    table.add_column("Files Processed")
    table.add_column("Duplicate Records")
    table.add_column("Duplicate Groups")
    table.add_row(
        str(summary.total_records),
        str(summary.total_original_records),
        str(summary.total_files),
        str(summary.duplicate_count),
        str(summary.duplicate_groups),
    )
    console.print(table)


def print_file_details(result: BatchResult):
    """Print per-file statistics."""
    console.print("\n[bold]File Details[/bold]")

    for details in result.summary.file_details:
        console.print(f"[bold]{escape(details.file_name)}[/bold]")
        if details.has_type_field:
            line = f"  {details.user_row_count} user records (out of {details.total_row_count} total)"
            if details.filtered_out_count:
                line += f" [blue]• {details.filtered_out_count} non-user records filtered out[/blue]"
            console.print(line)
        else:
            console.print(
                f'  {details.user_row_count} records (no "{TYPE_COLUMN}" field found - all records included)'
            )

        console.print(f"  [green]Found fields: {', '.join(details.available_fields)}[/green]")
        if details.missing_fields:
            console.print(f"  [red]Missing fields: {', '.join(details.missing_fields)}[/red]")
        for issue in details.warnings:
            console.print(f"  [yellow]Line {issue.row}: {issue.code} - {escape(issue.message)}[/yellow]")


def print_duplicates(result: BatchResult):
    """Print every duplicate group with its members."""
    if not result.duplicate_groups:
        return

    console.print(f"\n[bold red]{IDENTITY_FIELD} Duplicates Found[/bold red]")
    for group in result.duplicate_groups:
        console.print(f'[red]{IDENTITY_FIELD} Duplicate: "{escape(group.display_name)}"[/red]')
        console.print(f"  {len(group)} records found with the same {IDENTITY_FIELD.lower()}")
        for member in group.members:
            fields = list(member.record.values.items())[:MEMBER_PREVIEW_FIELDS]
            values = "  ".join(f"{k}: {to_text(v)}" for k, v in fields)
            console.print(f"    From: {escape(member.record.source_file)} | {escape(values)}")


def print_preview(result: BatchResult):
    """Print the first few combined records."""
    if not result.records:
        return

    console.print(f"\n[bold]Data Preview (First {settings.preview_rows} Records)[/bold]")
    table = Table()
    for field in TARGET_FIELDS:
        table.add_column(field)

    for record in result.records[:settings.preview_rows]:
        table.add_row(*(escape(to_text(record.get(f, ""))) for f in TARGET_FIELDS))

    console.print(table)


if __name__ == "__main__":
    cli()
