"""
Tests for generation runs.

Tests cover:
- Blank label filtering and NoInputError
- Archive contents and naming
- Identifier uniqueness across a run
- Filename collisions (last write wins)
- Async finalization and error propagation
"""

import asyncio
import io
import re
import zipfile

import pytest

from gerbersockets.archive import ZipArchiveBuilder
from gerbersockets.config import Config
from gerbersockets.exceptions import ArchiveFinalizationError, NoInputError
from gerbersockets.generator import (
    GenerationRun,
    footprint_filename,
    generate_archive,
    generate_archive_async,
    normalize_labels,
    save_archive,
    trim_label,
)
from gerbersockets.identifiers import SequentialIdentifierSource

UUID_PATTERN = re.compile(r'\(uuid "([^"]+)"\)')


class RecordingArchive:
    """Archive builder stand-in that records calls."""

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def add(self, filename, content):
        self.calls.append(("add", filename))

    def finalize(self):
        self.calls.append(("finalize",))
        if self.fail:
            raise ArchiveFinalizationError("out of memory")
        return b"bundle"


def zip_entries(data: bytes) -> dict[str, str]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name).decode("utf-8") for name in zf.namelist()}


class TestNormalizeLabels:
    """Tests for label trimming and filtering."""

    def test_trims_and_drops_blank(self):
        assert normalize_labels([" GND ", "", "  ", "\tVCC\n"]) == ["GND", "VCC"]

    def test_keeps_order_and_duplicates(self):
        assert normalize_labels(["B", "A", "B"]) == ["B", "A", "B"]

    def test_filename(self):
        assert footprint_filename("GND") == "GND.kicad_mod"


class TestNoInput:
    """Tests for the no-eligible-labels condition."""

    @pytest.mark.parametrize("labels", [[], [""], ["", "  "], ["\t", "\n"]])
    def test_all_blank_raises(self, labels):
        with pytest.raises(NoInputError):
            generate_archive(labels)

    def test_one_label_is_enough(self):
        result = generate_archive(["", "A"])
        assert result.entries == ["A.kicad_mod"]

    def test_raised_before_archive_work(self):
        archive = RecordingArchive()
        with pytest.raises(NoInputError) as exc_info:
            generate_archive(["", "  "], archive=archive)

        assert archive.calls == []
        assert exc_info.value.context["supplied"] == 2

    def test_no_identifiers_consumed(self):
        ids = SequentialIdentifierSource()
        with pytest.raises(NoInputError):
            generate_archive(["  "], identifiers=ids)
        assert ids.issued == 0


class TestGenerateArchive:
    """Tests for archive contents."""

    def test_gnd_and_vcc(self):
        result = generate_archive(["GND", "VCC"])

        assert result.name == "footprints.zip"
        assert result.entries == ["GND.kicad_mod", "VCC.kicad_mod"]

        entries = zip_entries(result.data)
        assert list(entries) == ["GND.kicad_mod", "VCC.kicad_mod"]
        assert entries["GND.kicad_mod"].startswith('(footprint "GND"')
        assert entries["VCC.kicad_mod"].startswith('(footprint "VCC"')

    def test_documents_match_archive(self):
        result = generate_archive(["GND", "VCC"])
        assert zip_entries(result.data) == result.documents

    def test_labels_are_trimmed(self):
        result = generate_archive(["  GND  "])
        assert result.entries == ["GND.kicad_mod"]
        assert result.documents["GND.kicad_mod"].startswith('(footprint "GND"\n')

    def test_identifiers_unique_across_run(self):
        result = generate_archive(["GND", "VCC"])
        found = [uuid for doc in result.documents.values() for uuid in UUID_PATTERN.findall(doc)]
        assert len(found) == 20
        assert len(set(found)) == 20
        assert result.identifiers_used == 20

    def test_runs_do_not_share_identifiers(self):
        first = generate_archive(["GND"])
        second = generate_archive(["GND"])
        first_ids = set(UUID_PATTERN.findall(first.documents["GND.kicad_mod"]))
        second_ids = set(UUID_PATTERN.findall(second.documents["GND.kicad_mod"]))
        assert first_ids.isdisjoint(second_ids)

    def test_sequential_identifiers_are_reproducible(self):
        first = generate_archive(["GND", "VCC"], identifiers=SequentialIdentifierSource())
        second = generate_archive(["GND", "VCC"], identifiers=SequentialIdentifierSource())
        assert first.documents == second.documents

    def test_custom_archive_name(self):
        result = generate_archive(["GND"], archive_name="sockets.zip")
        assert result.name == "sockets.zip"

    def test_size(self):
        result = generate_archive(["GND"])
        assert result.size == len(result.data) > 0


class TestFilenameCollisions:
    """Labels that trim to the same name keep only the last entry."""

    def test_trailing_space_collides(self):
        result = generate_archive(["A ", "A"], identifiers=SequentialIdentifierSource())

        entries = zip_entries(result.data)
        assert list(entries) == ["A.kicad_mod"]
        assert result.entries == ["A.kicad_mod"]

        # Both were built; the second document (ids 9..16) survives
        assert result.identifiers_used == 16
        assert "00000000-0000-0000-0000-000000000010" in entries["A.kicad_mod"]
        assert "00000000-0000-0000-0000-000000000001" not in entries["A.kicad_mod"]


class TestGenerationRun:
    """Tests for GenerationRun directly."""

    def test_labels_snapshot(self):
        labels = ["GND"]
        run = GenerationRun(labels)
        labels.append("VCC")

        result = run.run()
        assert result.entries == ["GND.kicad_mod"]

    def test_finalization_error_propagates(self):
        archive = RecordingArchive(fail=True)
        with pytest.raises(ArchiveFinalizationError, match="out of memory"):
            GenerationRun(["GND"], archive=archive).run()
        assert archive.calls == [("add", "GND.kicad_mod"), ("finalize",)]

    def test_uses_injected_archive(self):
        result = GenerationRun(["GND", "VCC"], archive=RecordingArchive()).run()
        assert result.data == b"bundle"

    def test_from_config(self):
        config = Config()
        config.output.archive_name = "nets.zip"
        config.archive.compression = "stored"

        result = GenerationRun.from_config(["GND"], config).run()

        assert result.name == "nets.zip"
        with zipfile.ZipFile(io.BytesIO(result.data)) as zf:
            assert zf.getinfo("GND.kicad_mod").compress_type == zipfile.ZIP_STORED


class TestAsync:
    """Tests for async generation."""

    def test_generate_archive_async(self):
        result = asyncio.run(generate_archive_async(["GND", "VCC"]))
        assert list(zip_entries(result.data)) == ["GND.kicad_mod", "VCC.kicad_mod"]

    def test_async_no_input(self):
        with pytest.raises(NoInputError):
            asyncio.run(generate_archive_async(["  "]))

    def test_async_finalization_error(self):
        with pytest.raises(ArchiveFinalizationError):
            asyncio.run(generate_archive_async(["GND"], archive=RecordingArchive(fail=True)))


class TestSaveArchive:
    """Tests for writing archives to disk."""

    def test_creates_directory(self, tmp_path):
        result = generate_archive(["GND"])
        path = save_archive(result, tmp_path / "out" / "nested")

        assert path == tmp_path / "out" / "nested" / "footprints.zip"
        assert path.read_bytes() == result.data


class TestLabelTrimming:
    """Trimming follows the ECMAScript whitespace set."""

    def test_unicode_spaces_are_trimmed(self):
        assert trim_label("\u00a0GND\u3000") == "GND"
        assert trim_label("\u2028VCC\ufeff") == "VCC"

    def test_byte_order_mark_only_is_blank(self):
        assert normalize_labels(["\ufeff", "\x1c"]) == ["\x1c"]

    def test_separator_controls_are_kept(self):
        assert trim_label("\x1fA\x85") == "\x1fA\x85"

    def test_bom_only_input_raises_no_input(self):
        with pytest.raises(NoInputError):
            generate_archive(["\ufeff", " \u00a0"])


class TestSurrogateLabels:
    """Net names containing lone surrogates."""

    def test_surrogate_label_fails_at_finalization(self):
        with pytest.raises(ArchiveFinalizationError) as exc_info:
            generate_archive(["A\udcff"])
        assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)

    def test_surrogate_label_builds_and_adds(self):
        archive = ZipArchiveBuilder()
        run = GenerationRun(["A\udcff"], archive=archive)

        documents = run.build_documents()

        assert list(documents) == ["A\udcff.kicad_mod"]
        assert archive.filenames == ["A\udcff.kicad_mod"]
