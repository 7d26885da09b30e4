"""Tests for document text extraction and ingestion."""
from __future__ import annotations

import pytest

from mcq_forge import ingest
from mcq_forge.ingest import extract_text, extract_text_sync, ingest_documents


class TestExtractTextSync:
    def test_text_file(self):
        assert extract_text_sync("गोदावरी नदी".encode(), "notes.txt") == "गोदावरी नदी"

    def test_markdown_case_insensitive(self):
        assert extract_text_sync(b"# Title", "README.MD") == "# Title"

    def test_invalid_utf8_replaced(self):
        assert extract_text_sync(b"ok \xff", "a.txt").startswith("ok ")

    def test_unsupported(self):
        with pytest.raises(ValueError):
            extract_text_sync(b"PK", "slides.pptx")

    def test_pdf_with_text_layer(self, monkeypatch):
        monkeypatch.setattr(ingest, "pdf_text", lambda data: "\nA page with plenty of selectable text.")
        monkeypatch.setattr(ingest, "ocr_pdf", lambda data, languages: pytest.fail("OCR not expected"))
        assert "selectable" in extract_text_sync(b"%PDF", "book.pdf")

    def test_scanned_pdf_falls_back_to_ocr(self, monkeypatch):
        calls = []
        monkeypatch.setattr(ingest, "pdf_text", lambda data: "\n  \n12")
        monkeypatch.setattr(ingest, "ocr_pdf", lambda data, languages: calls.append(languages) or "OCR text")
        assert extract_text_sync(b"%PDF", "scan.pdf", ocr_languages="mar") == "OCR text"
        assert calls == ["mar"]

    def test_threshold(self, monkeypatch):
        # Whitespace does not count towards the threshold
        monkeypatch.setattr(ingest, "pdf_text", lambda data: "a " * ingest.MIN_TEXT_CHARS)
        monkeypatch.setattr(ingest, "ocr_pdf", lambda data, languages: "OCR")
        assert extract_text_sync(b"%PDF", "x.pdf") != "OCR"

        monkeypatch.setattr(ingest, "pdf_text", lambda data: "a " * (ingest.MIN_TEXT_CHARS - 1))
        assert extract_text_sync(b"%PDF", "x.pdf") == "OCR"

    def test_image_uses_ocr(self, monkeypatch):
        monkeypatch.setattr(ingest, "ocr_image", lambda data, languages: f"img:{languages}")
        assert extract_text_sync(b"\x89PNG", "page.PNG", ocr_languages="eng") == "img:eng"


class TestIngestDocuments:
    @pytest.mark.asyncio
    async def test_extract_text_async(self):
        assert await extract_text(b"hello", "a.txt") == "hello"

    @pytest.mark.asyncio
    async def test_in_order(self):
        chunks, errors = await ingest_documents([
            ("a.txt", b"first file"),
            ("b.txt", b"second file"),
        ])
        assert chunks == ["first file", "second file"]
        assert errors == []

    @pytest.mark.asyncio
    async def test_chunk_size(self):
        chunks, _ = await ingest_documents([("a.txt", b"aaaa bbbb cccc")], chunk_size=10)
        assert chunks == ["aaaa bbbb", "cccc"]

    @pytest.mark.asyncio
    async def test_failure_skipped(self):
        chunks, errors = await ingest_documents([
            ("a.docx", b"PK"),
            ("b.txt", b"still here"),
        ])
        assert chunks == ["still here"]
        assert len(errors) == 1
        assert errors[0].startswith("a.docx:")

    @pytest.mark.asyncio
    async def test_empty_file(self):
        chunks, errors = await ingest_documents([("empty.txt", b"   ")])
        assert chunks == []
        assert errors == []
