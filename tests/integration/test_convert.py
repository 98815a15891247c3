"""
Integration tests for the convert() orchestrator.

These tests build small PDFs with PyMuPDF and verify end-to-end
conversion into repaired XML.
"""

from pathlib import Path

import pytest

from pdfmend import (
    ConversionConfig,
    ExtractionError,
    RepairConfig,
    RepairedDocument,
    UnsupportedFormatError,
    convert,
    convert_batch,
    detect_format,
    supported_formats,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def report_pdf(make_pdf) -> Path:
    """Two pages; a paragraph runs across two blocks on the first."""
    return make_pdf(
        [
            ["The annual report", "continues here."],
            ["Second page text."],
        ],
        name="report.pdf",
    )


class TestConvertBasic:
    """Basic conversion tests."""

    def test_convert_returns_repaired_document(self, report_pdf):
        """convert() returns a RepairedDocument."""
        doc = convert(report_pdf)
        assert isinstance(doc, RepairedDocument)

    def test_convert_has_paragraphs(self, report_pdf):
        """Lowercase continuation blocks merge into one paragraph."""
        doc = convert(report_pdf)
        assert doc.text.splitlines() == [
            "The annual report continues here.",
            "Second page text.",
        ]

    def test_convert_has_metadata(self, report_pdf):
        doc = convert(report_pdf)
        assert doc.metadata["page_count"] == 2

    def test_convert_has_stats(self, report_pdf):
        doc = convert(report_pdf)
        assert doc.stats.passes_added == 4
        assert doc.stats.paragraphs == 2
        assert doc.warnings == []

    def test_convert_source_path_set(self, report_pdf):
        doc = convert(report_pdf)
        assert Path(doc.source_path).name == report_pdf.name

    def test_xml_has_page_elements(self, report_pdf):
        xml = convert(report_pdf).to_xml()
        assert '<page id="1">' in xml
        assert '<page id="2">' in xml
        assert "<p>The annual report continues here.</p>" in xml


class TestConvertRepairs:
    """End-to-end repair of extraction artifacts."""

    def test_letter_spaced_heading(self, make_pdf):
        """A letter-spaced heading is rebuilt from the document's own vocabulary."""
        pdf = make_pdf([["R A P P E L", "Rappel des faits."]])

        doc = convert(pdf)

        assert "RAPPEL" in doc.text.splitlines()

    def test_line_wrap_hyphenation(self, make_pdf):
        pdf = make_pdf([["the combus-\ntibles are stored."]])

        doc = convert(pdf)

        assert doc.text == "the combustibles are stored."

    def test_skip_merge_keeps_tokens(self, make_pdf):
        pdf = make_pdf([["R A P P E L", "Rappel des faits."]])
        config = ConversionConfig(repair=RepairConfig(skip_merge=True))

        doc = convert(pdf, config)

        assert "R A P P E L" in doc.text.splitlines()

    def test_single_pass(self, report_pdf):
        config = ConversionConfig(passes=("words",))

        doc = convert(report_pdf, config)

        assert doc.stats.passes_added == 2
        assert "The annual report continues here." in doc.text


class TestConvertErrors:
    """Error handling in convert() and convert_batch()."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            convert(tmp_path / "missing.pdf")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "book.epub"
        path.write_bytes(b"PK")

        with pytest.raises(UnsupportedFormatError, match="book.epub"):
            convert(path)

    def test_error_handling_warn(self, tmp_path):
        """on_extraction_error='warn' returns an empty document with a warning."""
        fake_pdf = tmp_path / "invalid.pdf"
        fake_pdf.write_text("Not a real PDF")

        doc = convert(fake_pdf, ConversionConfig(on_extraction_error="warn"))

        assert doc.text == ""
        assert any("failed" in warning.lower() for warning in doc.warnings)

    def test_error_handling_raise(self, tmp_path):
        fake_pdf = tmp_path / "invalid.pdf"
        fake_pdf.write_text("Not a real PDF")

        with pytest.raises(ExtractionError):
            convert(fake_pdf, ConversionConfig(on_extraction_error="raise"))

    def test_batch_skip(self, report_pdf, tmp_path):
        config = ConversionConfig(on_extraction_error="skip")

        results = list(convert_batch([report_pdf, tmp_path / "missing.pdf"], config))

        assert [path for path, _ in results] == [report_pdf]

    def test_batch_reports_errors(self, report_pdf, tmp_path):
        results = dict(convert_batch([report_pdf, tmp_path / "missing.pdf"]))

        assert isinstance(results[report_pdf], RepairedDocument)
        assert isinstance(results[tmp_path / "missing.pdf"], FileNotFoundError)

    def test_batch_documents_independent(self, make_pdf):
        """Each document gets a fresh vocabulary."""
        first = make_pdf([["Rappel des faits."]], name="first.pdf")
        second = make_pdf([["R A P P E L"]], name="second.pdf")

        results = dict(convert_batch([first, second]))

        assert results[second].text == "R A P P E L"


class TestFormatDetection:
    def test_detect_by_extension(self, tmp_path):
        assert detect_format(tmp_path / "a.pdf") == "pdf"
        assert detect_format(tmp_path / "a.PDF") == "pdf"

    def test_unsupported_extension_rejected(self, tmp_path):
        """Only formats convert() can read are reported."""
        with pytest.raises(UnsupportedFormatError, match="Supported: pdf"):
            detect_format(tmp_path / "a.EPUB")

    def test_detect_by_magic_bytes(self, tmp_path):
        path = tmp_path / "noext"
        path.write_bytes(b"%PDF-1.7\n")
        assert detect_format(path) == "pdf"

    def test_undetectable(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(UnsupportedFormatError):
            detect_format(path)

    def test_supported_formats(self):
        assert supported_formats() == ["pdf"]
