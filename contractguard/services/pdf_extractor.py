"""
PDF text extraction using pdfplumber.

Pages are read in order. The text fragments of a page are joined with a
single space, pages are joined with a newline, and trailing whitespace is
stripped from the result. There is no OCR: a PDF without a text layer is an
extraction failure, and a failure on any page aborts the whole document.
"""

import io
import time

import pdfplumber
import structlog

from ..errors import ExtractionError

logger = structlog.get_logger()


def _page_text(page) -> str:
    """Join the text fragments of one page with single spaces."""
    words = page.extract_words()
    return " ".join(word["text"] for word in words)


def extract_pdf_text(file_bytes: bytes, filename: str = "upload.pdf") -> str:
    """
    Extract plain text from PDF bytes.

    Args:
        file_bytes: Raw PDF content
        filename: Original filename, for logging only

    Returns:
        Concatenated page text

    Raises:
        ExtractionError: If the bytes are not a readable PDF or carry no text
    """
    start_time = time.perf_counter()

    try:
        with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
            page_texts = []
            for page_number, page in enumerate(pdf.pages, start=1):
                text = _page_text(page)
                logger.debug(
                    "pdf_page_extracted",
                    filename=filename,
                    page=page_number,
                    characters=len(text)
                )
                page_texts.append(text)
    except Exception as e:
        logger.error("pdf_extraction_failed", filename=filename, error=str(e))
        raise ExtractionError(f"Could not read {filename}: {e}") from e

    full_text = "".join(text + "\n" for text in page_texts).rstrip()

    if not full_text:
        logger.warning("pdf_has_no_text", filename=filename, pages=len(page_texts))
        raise ExtractionError(f"No text layer found in {filename}")

    logger.info(
        "pdf_extracted",
        filename=filename,
        pages=len(page_texts),
        characters=len(full_text),
        duration_ms=round((time.perf_counter() - start_time) * 1000, 2)
    )
    return full_text
