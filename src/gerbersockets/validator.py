"""Footprint document and archive checks.

Parses generated .kicad_mod documents and reports their structure: element
counts, the encoded stroke widths in emission order, and identifier problems
within one document or across a whole archive. Widths are reported verbatim;
nothing here tries to turn them back into net names.
"""

from __future__ import annotations

import io
import zipfile
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from .builder import FIXED_IDENTIFIERS
from .exceptions import ParseError
from .generator import FOOTPRINT_EXTENSION
from .sexp import parse_string

EXPECTED_PROPERTIES = 5
EXPECTED_TEXTS = 1
EXPECTED_PADS = 1


class IssueType(Enum):
    """Types of document issues."""

    PARSE_ERROR = "parse_error"
    NOT_A_FOOTPRINT = "not_a_footprint"
    MISSING_TITLE = "missing_title"
    ELEMENT_COUNT = "element_count"
    IDENTIFIER_COUNT = "identifier_count"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    NAME_MISMATCH = "name_mismatch"


@dataclass
class DocumentIssue:
    """A problem found in one document."""

    document: str
    issue_type: IssueType
    message: str

    def __str__(self) -> str:
        return f"{self.document}: {self.issue_type.value} - {self.message}"


@dataclass
class DocumentReport:
    """Structure of one footprint document."""

    name: str
    title: str | None = None
    properties: int = 0
    lines: int = 0
    texts: int = 0
    pads: int = 0
    widths: list[str] = field(default_factory=list)
    uuids: list[str] = field(default_factory=list)
    issues: list[DocumentIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "title": self.title,
            "properties": self.properties,
            "lines": self.lines,
            "texts": self.texts,
            "pads": self.pads,
            "widths": self.widths,
            "uuids": len(self.uuids),
            "issues": [str(issue) for issue in self.issues],
        }


@dataclass
class ArchiveReport:
    """Reports for every entry of an archive plus cross-entry issues."""

    documents: list[DocumentReport] = field(default_factory=list)
    issues: list[DocumentIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues and all(doc.ok for doc in self.documents)

    @property
    def all_issues(self) -> list[DocumentIssue]:
        found = [issue for doc in self.documents for issue in doc.issues]
        return found + self.issues

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "documents": [doc.to_dict() for doc in self.documents],
            "issues": [str(issue) for issue in self.issues],
        }


def check_document(text: str, name: str = "<document>") -> DocumentReport:
    """
    Parse one footprint document and report its structure.

    Args:
        text: Document text
        name: Name used in issue messages (usually the archive entry name)

    Returns:
        DocumentReport; parse failures are reported as issues, not raised
    """
    report = DocumentReport(name=name)

    try:
        root = parse_string(text)
    except ParseError as e:
        report.issues.append(DocumentIssue(name, IssueType.PARSE_ERROR, e.message))
        return report

    if root.name != "footprint":
        report.issues.append(
            DocumentIssue(name, IssueType.NOT_A_FOOTPRINT, f"root element is {root.name!r}")
        )
        return report

    title = root.get_first_atom()
    report.title = title if isinstance(title, str) else None
    if not report.title:
        report.issues.append(DocumentIssue(name, IssueType.MISSING_TITLE, "footprint has no name"))

    for child in root.children:
        if child.name == "property":
            report.properties += 1
        elif child.name == "fp_line":
            report.lines += 1
            width = child.find("width")
            report.widths.append(width.first_raw if width is not None else "")
        elif child.name == "fp_text":
            report.texts += 1
        elif child.name == "pad":
            report.pads += 1

    report.uuids = [str(node.get_first_atom()) for node in root.find_all("uuid")]

    for label, count, expected in (
        ("property", report.properties, EXPECTED_PROPERTIES),
        ("fp_text", report.texts, EXPECTED_TEXTS),
        ("pad", report.pads, EXPECTED_PADS),
    ):
        if count != expected:
            report.issues.append(
                DocumentIssue(
                    name, IssueType.ELEMENT_COUNT, f"expected {expected} {label}, found {count}"
                )
            )

    expected_ids = report.lines + FIXED_IDENTIFIERS
    if len(report.uuids) != expected_ids:
        report.issues.append(
            DocumentIssue(
                name,
                IssueType.IDENTIFIER_COUNT,
                f"expected {expected_ids} identifiers, found {len(report.uuids)}",
            )
        )

    for uuid, count in Counter(report.uuids).items():
        if count > 1:
            report.issues.append(
                DocumentIssue(name, IssueType.DUPLICATE_IDENTIFIER, f"{uuid} used {count} times")
            )

    return report


def check_archive(data: bytes) -> ArchiveReport:
    """
    Check every .kicad_mod entry of a ZIP archive.

    Identifiers must be unique across the whole archive, and every entry must
    be named after its footprint title.

    Raises:
        zipfile.BadZipFile: If ``data`` is not a ZIP archive
    """
    report = ArchiveReport()
    owners: dict[str, str] = {}

    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        for info in zf.infolist():
            if info.is_dir() or not info.filename.endswith(FOOTPRINT_EXTENSION):
                continue
            text = zf.read(info).decode("utf-8")
            doc = check_document(text, info.filename)
            report.documents.append(doc)

            if doc.title is not None and info.filename != doc.title + FOOTPRINT_EXTENSION:
                report.issues.append(
                    DocumentIssue(
                        info.filename,
                        IssueType.NAME_MISMATCH,
                        f"entry holds footprint {doc.title!r}",
                    )
                )

            for uuid in sorted(set(doc.uuids)):
                if uuid in owners:
                    report.issues.append(
                        DocumentIssue(
                            info.filename,
                            IssueType.DUPLICATE_IDENTIFIER,
                            f"{uuid} also used in {owners[uuid]}",
                        )
                    )
                else:
                    owners[uuid] = info.filename

    return report


__all__ = [
    "IssueType",
    "DocumentIssue",
    "DocumentReport",
    "ArchiveReport",
    "check_document",
    "check_archive",
]
