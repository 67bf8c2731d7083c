"""
Check command: inspect generated footprints.

Usage:
    gsock check footprints.zip
    gsock check GND.kicad_mod --format json
"""

from __future__ import annotations

import json
import sys
import zipfile
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from gerbersockets.validator import ArchiveReport, check_archive, check_document


def load_report(path: Path) -> ArchiveReport:
    """Check a .zip archive or a single .kicad_mod file."""
    if path.suffix.lower() == ".zip":
        return check_archive(path.read_bytes())
    return ArchiveReport(documents=[check_document(path.read_text(encoding="utf-8"), path.name)])


def run(args) -> int:
    """Run the check command."""
    path = Path(args.path)
    if not path.is_file():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 1

    try:
        report = load_report(path)
    except zipfile.BadZipFile as e:
        print(f"Error: not a ZIP archive: {path} ({e})", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: {path} is not UTF-8 text: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(report.to_dict(), indent=2))
        return 0 if report.ok else 1

    console = Console()
    table = Table(title=str(path))
    table.add_column("Entry")
    table.add_column("Footprint")
    table.add_column("Properties", justify="right")
    table.add_column("Marks", justify="right")
    table.add_column("Widths")
    table.add_column("Status")

    for doc in report.documents:
        status = "[green]ok[/green]" if doc.ok else f"[red]{len(doc.issues)} issue(s)[/red]"
        table.add_row(
            Text(doc.name),
            Text(doc.title or "-"),
            str(doc.properties),
            str(doc.lines),
            " ".join(doc.widths),
            status,
        )

    console.print(table)

    for issue in report.all_issues:
        console.print(Text(f"  {issue}"), style="red")

    if not report.documents:
        console.print("No footprints found", style="yellow")

    return 0 if report.ok else 1
