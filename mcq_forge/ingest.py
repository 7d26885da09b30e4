"""Text extraction from uploaded documents, with an OCR fallback."""
from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path

from mcq_forge.segmenter import DEFAULT_CHUNK_CHARS, segment

_log = logging.getLogger("mcq_forge.ingest")

# Direct extraction yielding this little text means a scanned document
MIN_TEXT_CHARS = 21

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp", ".tif", ".tiff", ".bmp"}
TEXT_SUFFIXES = {".txt", ".md"}


def _visible_chars(text: str) -> int:
    return sum(1 for ch in text if not ch.isspace())


def pdf_text(data: bytes) -> str:
    from pypdf import PdfReader

    reader = PdfReader(io.BytesIO(data))
    return "".join("\n" + (page.extract_text() or "") for page in reader.pages)


def ocr_pdf(data: bytes, languages: str = "eng+mar") -> str:
    import pytesseract
    from pdf2image import convert_from_bytes

    text = ""
    for i, image in enumerate(convert_from_bytes(data, dpi=200), 1):
        _log.info("OCR page %d", i)
        text += "\n" + pytesseract.image_to_string(image, lang=languages)
    return text


def ocr_image(data: bytes, languages: str = "eng+mar") -> str:
    import pytesseract
    from PIL import Image

    with Image.open(io.BytesIO(data)) as image:
        return pytesseract.image_to_string(image, lang=languages)


def extract_text_sync(data: bytes, filename: str, ocr_languages: str = "eng+mar") -> str:
    suffix = Path(filename).suffix.lower()
    if suffix == ".pdf":
        text = pdf_text(data)
        if _visible_chars(text) >= MIN_TEXT_CHARS:
            _log.info("Extracted text directly from %s", filename)
            return text
        _log.warning("PDF extraction empty for %s, running OCR fallback", filename)
        return ocr_pdf(data, ocr_languages)
    if suffix in IMAGE_SUFFIXES:
        return ocr_image(data, ocr_languages)
    if suffix in TEXT_SUFFIXES:
        return data.decode("utf-8", errors="replace")
    raise ValueError(f"Unsupported file type: {filename}")


async def extract_text(data: bytes, filename: str, ocr_languages: str = "eng+mar") -> str:
    """Decode *data* off the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, extract_text_sync, data, filename, ocr_languages)


async def ingest_documents(
    documents: list[tuple[str, bytes]],
    chunk_size: int = DEFAULT_CHUNK_CHARS,
    ocr_languages: str = "eng+mar",
) -> tuple[list[str], list[str]]:
    """Extract and chunk *documents* one at a time, in order.

    Returns ``(chunks, errors)``; a file that fails is reported in
    *errors* and skipped so the rest still ingest.
    """
    chunks: list[str] = []
    errors: list[str] = []
    for filename, data in documents:
        try:
            text = await extract_text(data, filename, ocr_languages)
        except Exception as e:
            _log.warning("Error processing %s: %s", filename, e)
            errors.append(f"{filename}: {e}")
            continue
        file_chunks = segment(text, chunk_size)
        _log.info("%s: %d chunks", filename, len(file_chunks))
        chunks.extend(file_chunks)
    return chunks, errors
