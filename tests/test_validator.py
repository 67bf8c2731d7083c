"""Tests for footprint document and archive checks."""

import io
import zipfile

import pytest

from gerbersockets.builder import FootprintBuilder
from gerbersockets.encoding import encode
from gerbersockets.generator import generate_archive
from gerbersockets.identifiers import SequentialIdentifierSource
from gerbersockets.validator import IssueType, check_archive, check_document


def make_zip(entries: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, text in entries.items():
            zf.writestr(name, text)
    return buffer.getvalue()


def issue_types(report) -> set[IssueType]:
    return {issue.issue_type for issue in report.issues}


class TestCheckDocument:
    """Tests for check_document()."""

    def test_generated_document_is_ok(self, gnd_document):
        report = check_document(gnd_document, "GND.kicad_mod")

        assert report.ok
        assert report.title == "GND"
        assert report.properties == 5
        assert report.lines == 3
        assert report.texts == 1
        assert report.pads == 1
        assert report.widths == ["0.07101", "0.17801", "0.26801"]
        assert len(report.uuids) == 10

    def test_escaped_title(self):
        text = FootprintBuilder(SequentialIdentifierSource()).build('A"B', encode('A"B'))
        report = check_document(text)
        assert report.ok
        assert report.title == 'A"B'

    def test_long_label_widths_verbatim(self):
        label = "ABCDEFGHIJKL"
        text = FootprintBuilder(SequentialIdentifierSource()).build(label, encode(label))
        report = check_document(text)
        assert report.widths == encode(label)

    def test_parse_error(self):
        report = check_document('(footprint "GND"', "broken.kicad_mod")
        assert not report.ok
        assert issue_types(report) == {IssueType.PARSE_ERROR}

    def test_not_a_footprint(self):
        report = check_document('(kicad_pcb (version 20240108))')
        assert issue_types(report) == {IssueType.NOT_A_FOOTPRINT}

    def test_missing_pad(self, gnd_document):
        start = gnd_document.index('\t(pad "1"')
        tampered = gnd_document[:start] + ")\n"
        report = check_document(tampered)

        assert report.pads == 0
        assert IssueType.ELEMENT_COUNT in issue_types(report)
        assert IssueType.IDENTIFIER_COUNT in issue_types(report)

    def test_duplicate_identifier_in_document(self, gnd_document):
        tampered = gnd_document.replace(
            "00000000-0000-0000-0000-000000000002", "00000000-0000-0000-0000-000000000001"
        )
        report = check_document(tampered)
        assert issue_types(report) == {IssueType.DUPLICATE_IDENTIFIER}

    def test_missing_title(self):
        report = check_document("(footprint (version 1))")
        assert IssueType.MISSING_TITLE in issue_types(report)

    def test_to_dict(self, gnd_document):
        data = check_document(gnd_document, "GND.kicad_mod").to_dict()
        assert data["name"] == "GND.kicad_mod"
        assert data["uuids"] == 10
        assert data["issues"] == []


class TestCheckArchive:
    """Tests for check_archive()."""

    def test_generated_archive_is_ok(self):
        result = generate_archive(["GND", "VCC"])
        report = check_archive(result.data)

        assert report.ok
        assert [doc.name for doc in report.documents] == ["GND.kicad_mod", "VCC.kicad_mod"]
        assert [doc.title for doc in report.documents] == ["GND", "VCC"]

    def test_duplicate_identifiers_across_entries(self):
        # Two independent sequential sources mint the same identifiers
        gnd = FootprintBuilder(SequentialIdentifierSource()).build("GND", encode("GND"))
        vcc = FootprintBuilder(SequentialIdentifierSource()).build("VCC", encode("VCC"))
        report = check_archive(make_zip({"GND.kicad_mod": gnd, "VCC.kicad_mod": vcc}))

        assert not report.ok
        assert all(doc.ok for doc in report.documents)
        duplicates = [i for i in report.issues if i.issue_type is IssueType.DUPLICATE_IDENTIFIER]
        assert len(duplicates) == 10
        assert all(i.document == "VCC.kicad_mod" for i in duplicates)

    def test_name_mismatch(self, gnd_document):
        report = check_archive(make_zip({"VCC.kicad_mod": gnd_document}))
        assert issue_types(report) == {IssueType.NAME_MISMATCH}

    def test_ignores_other_entries(self, gnd_document):
        report = check_archive(make_zip({"GND.kicad_mod": gnd_document, "README.txt": "hi"}))
        assert report.ok
        assert len(report.documents) == 1

    def test_empty_archive(self):
        report = check_archive(make_zip({}))
        assert report.ok
        assert report.documents == []

    def test_all_issues_collects_document_issues(self):
        report = check_archive(make_zip({"X.kicad_mod": "(footprint"}))
        assert [i.issue_type for i in report.all_issues] == [IssueType.PARSE_ERROR]

    def test_not_a_zip(self):
        with pytest.raises(zipfile.BadZipFile):
            check_archive(b"not a zip")
