"""
Generate command: net names in, footprints.zip out.

Usage:
    gsock generate GND VCC
    gsock generate --from-file nets.txt -o build/
    gsock generate GND --show --deterministic

Exit status is 0 on success, 2 when the archive could not be packaged, and 1
for any other failure.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from gerbersockets.config import Config
from gerbersockets.encoding import encode
from gerbersockets.exceptions import (
    ArchiveFinalizationError,
    GerberSocketsError,
    ValidationError,
)
from gerbersockets.generator import (
    FOOTPRINT_EXTENSION,
    GenerationRun,
    save_archive,
    trim_label,
)
from gerbersockets.identifiers import SequentialIdentifierSource

logger = logging.getLogger(__name__)


def collect_labels(labels: list[str], from_file: str | None = None) -> list[str]:
    """Combine command line net names with those read from a file."""
    collected = list(labels)
    if from_file:
        path = Path(from_file)
        if not path.is_file():
            raise ValidationError(
                [f"Net name file not found: {path}"],
                suggestions=["Pass a text file with one net name per line"],
            )
        collected.extend(path.read_text(encoding="utf-8").splitlines())
    return collected


def check_lengths(labels: list[str], max_length: int) -> None:
    """
    Reject net names longer than ``max_length`` after trimming.

    Raises:
        ValidationError: Listing every net name that is too long
    """
    trimmed = [trim_label(label) for label in labels]
    errors = [
        f"Net name {label!r} is {len(label)} characters (max {max_length})"
        for label in trimmed
        if len(label) > max_length
    ]
    if errors:
        raise ValidationError(
            errors,
            context={"max_length": max_length},
            suggestions=["Shorten the net names or raise [labels] max_length"],
        )


def run(args, config: Config) -> int:
    """Run the generate command."""
    console = Console()

    if args.stored:
        config.archive.compression = "stored"
    if args.archive_name:
        config.output.archive_name = args.archive_name
    output_dir = args.output_dir or config.output.output_dir
    max_length = args.max_length if args.max_length is not None else config.labels.max_length

    identifiers = SequentialIdentifierSource() if args.deterministic else None

    try:
        labels = collect_labels(args.labels, args.from_file)
        logger.debug(f"Collected {len(labels)} net name(s)")
        check_lengths(labels, max_length)
        result = GenerationRun.from_config(labels, config, identifiers=identifiers).run()
        path = save_archive(result, output_dir)
    except ArchiveFinalizationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except GerberSocketsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot write archive: {e}", file=sys.stderr)
        return 1

    if args.show:
        for document in result.documents.values():
            print(document)

    if not (args.quiet or config.defaults.quiet):
        table = Table(title=f"{path} ({result.size} bytes)")
        table.add_column("Net")
        table.add_column("Entry")
        table.add_column("Widths")

        for entry in result.entries:
            label = entry.removesuffix(FOOTPRINT_EXTENSION)
            table.add_row(Text(label), Text(entry), " ".join(encode(label)))

        console.print(table)

    return 0
