"""Unit tests for document sources."""

from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfWriter
from pypdf.errors import PdfReadError

from grounded_rag.ingestion.loader import DirectorySource, PdfDocument, SourceDocument, load_text


def _write_blank_pdf(path: Path, pages: int) -> None:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    with open(path, "wb") as fh:
        writer.write(fh)


class TestSourceDocument:
    def test_pages_are_one_based(self) -> None:
        doc = SourceDocument("faq.txt", ["first", "second"])
        assert doc.page_count == 2
        assert doc.page_text(1) == "first"
        assert doc.page_text(2) == "second"

    @pytest.mark.parametrize("page", [0, 3, -1])
    def test_out_of_range_page_raises(self, page: int) -> None:
        doc = SourceDocument("faq.txt", ["first", "second"])
        with pytest.raises(IndexError):
            doc.page_text(page)

    def test_repr_mentions_id_and_pages(self) -> None:
        assert repr(SourceDocument("a.md", ["x"])) == "SourceDocument(doc_id='a.md', pages=1)"


class TestLoadText:
    def test_text_file_is_single_page(self, tmp_path: Path) -> None:
        path = tmp_path / "policy.md"
        path.write_text("# Returns\nReturns accepted within 30 days.", encoding="utf-8")
        doc = load_text(path)
        assert doc.doc_id == "policy.md"
        assert doc.page_count == 1
        assert "30 days" in doc.page_text(1)


class TestPdfDocument:
    def test_page_count_and_blank_text(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.pdf"
        _write_blank_pdf(path, pages=3)
        doc = PdfDocument(path)
        assert doc.doc_id == "catalog.pdf"
        assert doc.page_count == 3
        assert doc.page_text(2) == ""

    def test_unreadable_pdf_raises_on_open(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"not a pdf at all")
        with pytest.raises(PdfReadError):
            PdfDocument(path)


class TestDirectorySource:
    def test_yields_supported_files_in_sorted_order(self, tmp_path: Path) -> None:
        (tmp_path / "b.txt").write_text("bravo")
        (tmp_path / "a.md").write_text("alpha")
        (tmp_path / "image.png").write_bytes(b"\x89PNG")
        sub = tmp_path / "nested"
        sub.mkdir()
        _write_blank_pdf(sub / "c.pdf", pages=2)

        docs = list(DirectorySource(tmp_path))

        assert [d.doc_id for d in docs] == ["a.md", "b.txt", "c.pdf"]
        assert isinstance(docs[2], PdfDocument)
        assert docs[2].page_count == 2

    def test_glob_narrows_files(self, tmp_path: Path) -> None:
        (tmp_path / "a.md").write_text("alpha")
        (tmp_path / "b.txt").write_text("bravo")
        docs = list(DirectorySource(tmp_path, glob="*.txt"))
        assert [d.doc_id for d in docs] == ["b.txt"]

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            list(DirectorySource(tmp_path / "missing"))
